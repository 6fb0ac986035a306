"""Weighted residual block of one profile."""

from __future__ import annotations

from dataclasses import dataclass

from chargefit.core.lineshapes.power_lorentzian import (
    power_lorentzian,
    power_lorentzian_derivatives,
)
from chargefit.core.shared.typing import FloatArray


@dataclass(frozen=True, slots=True)
class PowerLorentzianCost:
    """Residuals (model - data) / sigma of a profile and their Jacobian.

    ``sigma`` is a single scalar shared by every sample of the profile.
    """

    positions: FloatArray
    charges: FloatArray
    sigma: float = 1.0

    def residuals(self, params: FloatArray) -> FloatArray:
        """Residual vector for a parameter vector (A, m, gamma, beta, B)."""
        return (power_lorentzian(self.positions, *params) - self.charges) / self.sigma

    def jacobian(self, params: FloatArray) -> FloatArray:
        """Analytic Jacobian of ``residuals``, shape (n, 5)."""
        return power_lorentzian_derivatives(self.positions, *params) / self.sigma
