"""Bounded nonlinear least-squares solver and covariance estimation.

A thin facade over ``scipy.optimize.least_squares`` that speaks in terms of
linear solvers, trust-region strategies and robust losses, plus covariance
estimation of the parameter block from the Jacobian at the solution.

Mapping onto scipy:
    - LEVENBERG_MARQUARDT -> method="trf", DOGLEG -> method="dogbox"
    - dense linear solvers -> tr_solver="exact", sparse -> tr_solver="lsmr"
    - max_iterations -> max_nfev
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Protocol

import numpy as np
from scipy.optimize import least_squares

from chargefit.core.constants import PARAMETER_TOLERANCE
from chargefit.core.shared.exceptions import OptimizationError
from chargefit.core.shared.typing import FloatArray


class LinearSolver(str, Enum):
    DENSE_QR = "dense_qr"
    DENSE_NORMAL_CHOLESKY = "dense_normal_cholesky"
    SPARSE_NORMAL_CHOLESKY = "sparse_normal_cholesky"

    @property
    def is_sparse(self) -> bool:
        return self is LinearSolver.SPARSE_NORMAL_CHOLESKY


class TrustRegion(str, Enum):
    LEVENBERG_MARQUARDT = "levenberg_marquardt"
    DOGLEG = "dogleg"


class LossKind(str, Enum):
    LINEAR = "linear"
    HUBER = "huber"
    CAUCHY = "cauchy"


class TerminationType(str, Enum):
    CONVERGENCE = "convergence"
    NO_CONVERGENCE = "no_convergence"
    FAILURE = "failure"


class CovarianceAlgorithm(str, Enum):
    DENSE_SVD = "dense_svd"
    SPARSE_QR = "sparse_qr"


_METHODS = {
    TrustRegion.LEVENBERG_MARQUARDT: "trf",
    TrustRegion.DOGLEG: "dogbox",
}


class LeastSquaresProblem(Protocol):
    """Residual block with an analytic Jacobian."""

    def residuals(self, params: FloatArray) -> FloatArray: ...

    def jacobian(self, params: FloatArray) -> FloatArray: ...


@dataclass(frozen=True, slots=True)
class SolverOptions:
    """Options of one solver call."""

    linear_solver: LinearSolver = LinearSolver.DENSE_QR
    trust_region: TrustRegion = TrustRegion.LEVENBERG_MARQUARDT
    function_tolerance: float = 1e-12
    gradient_tolerance: float = 1e-12
    parameter_tolerance: float = PARAMETER_TOLERANCE
    max_iterations: int = 1500
    loss: LossKind = LossKind.LINEAR
    loss_scale: float = 1.0


@dataclass(frozen=True, slots=True)
class SolverSummary:
    """Outcome of one solver call."""

    termination: TerminationType
    x: FloatArray
    cost: float = float("nan")
    jacobian: FloatArray | None = None
    nfev: int = 0
    message: str = ""

    @property
    def converged(self) -> bool:
        return self.termination is TerminationType.CONVERGENCE


def _termination(status: int) -> TerminationType:
    if status > 0:
        return TerminationType.CONVERGENCE
    if status == 0:
        return TerminationType.NO_CONVERGENCE
    return TerminationType.FAILURE


def _least_squares_kwargs(options: SolverOptions) -> dict[str, object]:
    if options.max_iterations < 1:
        msg = f"max_iterations must be positive, got {options.max_iterations}"
        raise OptimizationError(msg)
    loss_scale = options.loss_scale if options.loss_scale > 0 else 1.0
    return {
        "method": _METHODS[options.trust_region],
        "tr_solver": "lsmr" if options.linear_solver.is_sparse else "exact",
        "ftol": options.function_tolerance,
        "gtol": options.gradient_tolerance,
        "xtol": options.parameter_tolerance,
        "max_nfev": options.max_iterations,
        "loss": options.loss.value,
        "f_scale": loss_scale,
    }


def solve(
    problem: LeastSquaresProblem,
    x0: FloatArray,
    lower: FloatArray,
    upper: FloatArray,
    options: SolverOptions,
) -> SolverSummary:
    """Minimize the problem's residuals within [lower, upper] from ``x0``.

    Never raises: invalid setups and numerical breakdowns are reported as a
    FAILURE summary carrying ``x0``.
    """
    x0 = np.asarray(x0, dtype=float)
    try:
        kwargs = _least_squares_kwargs(options)
        with np.errstate(all="ignore"):
            result = least_squares(
                problem.residuals,
                x0,
                jac=problem.jacobian,
                bounds=(lower, upper),
                **kwargs,
            )
    except (OptimizationError, ValueError, np.linalg.LinAlgError) as exc:
        return SolverSummary(TerminationType.FAILURE, x0, message=str(exc))

    x = np.asarray(result.x, dtype=float)
    termination = _termination(int(result.status))
    if not np.all(np.isfinite(x)) or not np.isfinite(result.cost):
        termination = TerminationType.FAILURE
    return SolverSummary(
        termination=termination,
        x=x,
        cost=float(result.cost),
        jacobian=np.asarray(result.jac, dtype=float),
        nfev=int(result.nfev),
        message=str(result.message),
    )


def _dense_svd_covariance(
    jacobian: FloatArray,
    min_reciprocal_condition_number: float,
    null_space_rank: int,
) -> FloatArray | None:
    _, singular, vt = np.linalg.svd(jacobian, full_matrices=False)
    n_params = vt.shape[0]
    rank = n_params - max(0, null_space_rank)
    if rank <= 0 or singular[0] <= 0:
        return None
    retained = singular[:rank]
    if retained[-1] / singular[0] < np.sqrt(min_reciprocal_condition_number):
        return None
    # (J^T J)^+ restricted to the retained singular directions
    v = vt[:rank].T
    return (v / retained**2) @ v.T


def _sparse_qr_covariance(
    jacobian: FloatArray,
    min_reciprocal_condition_number: float,
) -> FloatArray | None:
    r = np.linalg.qr(jacobian, mode="r")
    diag = np.abs(np.diag(r))
    if diag.size == 0 or np.max(diag) <= 0:
        return None
    if np.min(diag) / np.max(diag) < np.sqrt(min_reciprocal_condition_number):
        return None
    r_inv = np.linalg.inv(r)
    return r_inv @ r_inv.T


def compute_covariance(
    jacobian: FloatArray | None,
    algorithm: CovarianceAlgorithm,
    min_reciprocal_condition_number: float,
    null_space_rank: int = 0,
) -> FloatArray | None:
    """Covariance of the parameter block, (J^T J)^-1, or None when rank-deficient.

    ``DENSE_SVD`` drops the ``null_space_rank`` smallest singular directions
    before inverting. ``SPARSE_QR`` inverts through the R factor of J and
    ignores ``null_space_rank``.
    """
    if jacobian is None:
        return None
    jac = np.asarray(jacobian, dtype=float)
    if jac.ndim != 2 or jac.shape[0] < jac.shape[1] or not np.all(np.isfinite(jac)):
        return None
    try:
        with np.errstate(all="ignore"):
            if algorithm is CovarianceAlgorithm.DENSE_SVD:
                covariance = _dense_svd_covariance(
                    jac, min_reciprocal_condition_number, null_space_rank
                )
            else:
                covariance = _sparse_qr_covariance(jac, min_reciprocal_condition_number)
    except np.linalg.LinAlgError:
        return None
    if covariance is None or not np.all(np.isfinite(covariance)):
        return None
    return covariance
