"""Ordered search tables of the 1-D fit.

The orchestrator walks these tables greedily: dataset variants in order,
then solver configurations in order for each variant, accepting the first
fit that passes the physical checks. Covariance attempts are tried in order
until one yields usable errors.
"""

from __future__ import annotations

from typing import NamedTuple

from chargefit.core.constants import CONSERVATIVE_SIGMA, LENIENT_SIGMA
from chargefit.core.fitting.solver import (
    CovarianceAlgorithm,
    LinearSolver,
    LossKind,
    SolverOptions,
    TrustRegion,
)


class DatasetVariant(NamedTuple):
    """A dataset to try; ``sigma_threshold`` None means the unfiltered data."""

    name: str
    sigma_threshold: float | None


DATASET_VARIANTS: tuple[DatasetVariant, ...] = (
    DatasetVariant("conservative", CONSERVATIVE_SIGMA),
    DatasetVariant("lenient", LENIENT_SIGMA),
    DatasetVariant("original", None),
)


class SolverConfiguration(NamedTuple):
    """One solver setup; the loss scale is relative to the amplitude estimate."""

    linear_solver: LinearSolver
    trust_region: TrustRegion
    tolerance: float
    max_iterations: int
    loss: LossKind
    loss_scale_factor: float

    def options(
        self,
        amplitude_estimate: float,
        *,
        robust_loss: bool,
        max_iterations: int | None = None,
    ) -> SolverOptions:
        """Solver options for a profile whose amplitude estimate is given.

        With ``robust_loss`` False the configured loss is replaced by a plain
        squared loss.
        """
        loss = self.loss if robust_loss else LossKind.LINEAR
        scale = self.loss_scale_factor * amplitude_estimate
        return SolverOptions(
            linear_solver=self.linear_solver,
            trust_region=self.trust_region,
            function_tolerance=self.tolerance,
            gradient_tolerance=self.tolerance,
            max_iterations=max_iterations or self.max_iterations,
            loss=loss,
            loss_scale=scale if scale > 0 else 1.0,
        )


SOLVER_CONFIGURATIONS: tuple[SolverConfiguration, ...] = (
    SolverConfiguration(
        LinearSolver.DENSE_QR, TrustRegion.LEVENBERG_MARQUARDT, 1e-15, 2000, LossKind.HUBER, 0.1
    ),
    SolverConfiguration(
        LinearSolver.DENSE_QR, TrustRegion.LEVENBERG_MARQUARDT, 1e-12, 1500, LossKind.CAUCHY, 0.16
    ),
    SolverConfiguration(
        LinearSolver.DENSE_QR, TrustRegion.DOGLEG, 1e-10, 1000, LossKind.LINEAR, 0.0
    ),
    SolverConfiguration(
        LinearSolver.DENSE_NORMAL_CHOLESKY,
        TrustRegion.LEVENBERG_MARQUARDT,
        1e-12,
        1500,
        LossKind.HUBER,
        0.13,
    ),
    SolverConfiguration(
        LinearSolver.SPARSE_NORMAL_CHOLESKY,
        TrustRegion.LEVENBERG_MARQUARDT,
        1e-12,
        1200,
        LossKind.CAUCHY,
        0.22,
    ),
)


class CovarianceAttempt(NamedTuple):
    algorithm: CovarianceAlgorithm
    min_reciprocal_condition_number: float


COVARIANCE_ATTEMPTS: tuple[CovarianceAttempt, ...] = (
    CovarianceAttempt(CovarianceAlgorithm.DENSE_SVD, 1e-14),
    CovarianceAttempt(CovarianceAlgorithm.DENSE_SVD, 1e-12),
    CovarianceAttempt(CovarianceAlgorithm.DENSE_SVD, 1e-10),
    CovarianceAttempt(CovarianceAlgorithm.SPARSE_QR, 1e-12),
)

NULL_SPACE_RANK = 2
"""Smallest singular directions dropped by the dense SVD covariance."""
