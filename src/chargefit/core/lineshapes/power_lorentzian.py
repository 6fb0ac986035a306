"""Power-law Lorentzian lineshape.

    f(x) = A / (1 + ((x - m) / gamma)^2)^beta + B

beta = 1 reduces to a standard Lorentzian with half width gamma. The
evaluation guards keep the expression finite for any parameter vector the
solver may probe:

- |gamma| is floored at GAMMA_FLOOR before it is used as a divisor
- |beta| is floored at BETA_FLOOR before exponentiation
- the base 1 + u^2 is floored at BASE_FLOOR

Derivatives are taken through the guards: a floored quantity contributes no
gradient, and the sign of gamma/beta is propagated through the absolute
value.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

from chargefit.core.constants import BASE_FLOOR, BETA_FLOOR, GAMMA_FLOOR

if TYPE_CHECKING:
    from chargefit.core.shared.typing import FloatArray


def _guarded(gamma: float, beta: float) -> tuple[float, float]:
    return max(abs(gamma), GAMMA_FLOOR), max(abs(beta), BETA_FLOOR)


def power_lorentzian(
    x: FloatArray,
    amplitude: float,
    center: float,
    gamma: float,
    beta: float,
    baseline: float,
) -> FloatArray:
    """Evaluate the power-law Lorentzian at positions ``x``."""
    safe_gamma, safe_beta = _guarded(gamma, beta)
    u = (np.asarray(x, dtype=float) - center) / safe_gamma
    base = np.maximum(1.0 + u * u, BASE_FLOOR)
    return amplitude / base**safe_beta + baseline


def power_lorentzian_derivatives(
    x: FloatArray,
    amplitude: float,
    center: float,
    gamma: float,
    beta: float,
    baseline: float,
) -> FloatArray:
    """Partial derivatives with respect to (A, m, gamma, beta, B).

    Returns:
        Array of shape (len(x), 5)
    """
    x = np.asarray(x, dtype=float)
    safe_gamma, safe_beta = _guarded(gamma, beta)
    u = (x - center) / safe_gamma
    base = np.maximum(1.0 + u * u, BASE_FLOOR)
    shape = base**-safe_beta
    # d(base^-beta)/d(base) = -beta * base^(-beta - 1)
    d_base = -safe_beta * shape / base

    jac = np.empty((x.size, 5))
    jac[:, 0] = shape
    jac[:, 1] = amplitude * d_base * (-2.0 * u / safe_gamma)
    if abs(gamma) > GAMMA_FLOOR:
        jac[:, 2] = amplitude * d_base * (-2.0 * u * u / safe_gamma) * np.sign(gamma)
    else:
        jac[:, 2] = 0.0
    if abs(beta) > BETA_FLOOR:
        jac[:, 3] = -amplitude * shape * np.log(base) * np.sign(beta)
    else:
        jac[:, 3] = 0.0
    jac[:, 4] = 1.0
    return jac
