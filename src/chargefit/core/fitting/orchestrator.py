"""Robust 1-D power-law Lorentzian fit of a single profile.

The search is greedy and deterministic:

    for each dataset variant (filtered variants only when enabled):
        estimate starting parameters (skip the variant if impossible)
        for each solver configuration:
            stage 1: beta held near 1 to stabilize the center
            stage 2: beta released, center pinned near the stage-1 value
                     (single-stage solve when stage 1 does not converge)
            accept the first physically valid fit

Nothing is raised for bad data; exhaustion yields a failed FitResult.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import NamedTuple

import numpy as np

from chargefit.core.algorithms.estimation import ParameterEstimate, estimate_parameters
from chargefit.core.algorithms.outliers import filter_profile_outliers
from chargefit.core.algorithms.statistics import compute_robust_statistics
from chargefit.core.constants import (
    ACCEPTED_BETA_RANGE,
    AMPLITUDE_MAX_CHARGE_FACTOR,
    AMPLITUDE_MAX_ESTIMATE_FACTOR,
    AMPLITUDE_MIN_FRACTION,
    BASELINE_AMPLITUDE_FACTOR,
    BASELINE_OFFSET_FACTOR,
    BETA_BOUNDS,
    CENTER_RANGE,
    GAMMA_BOUNDS,
    MIN_FIT_POINTS,
    STAGE1_BETA_BOUNDS,
    STAGE2_CENTER_RANGE,
)
from chargefit.core.domain.config import FitConfig
from chargefit.core.domain.profile import charge_uncertainty
from chargefit.core.fitting.cost import PowerLorentzianCost
from chargefit.core.fitting.parameters import Parameters, ParameterType
from chargefit.core.fitting.policy import (
    COVARIANCE_ATTEMPTS,
    DATASET_VARIANTS,
    SOLVER_CONFIGURATIONS,
    CovarianceAttempt,
    DatasetVariant,
    SolverConfiguration,
)
from chargefit.core.fitting.session import SolverSession, resolve_session
from chargefit.core.fitting.solver import SolverOptions, SolverSummary, solve
from chargefit.core.fitting.uncertainty import estimate_errors
from chargefit.core.results.fit_results import FitResult
from chargefit.core.results.statistics import (
    compute_degrees_of_freedom,
    pseudo_p_value,
    reduced_chi_squared_from_cost,
)
from chargefit.core.shared.reporter import Reporter, resolve_reporter
from chargefit.core.shared.typing import ArrayLike, FloatArray

TWO_STAGE = "two-stage"
SINGLE_STAGE = "single-stage"


class Dataset(NamedTuple):
    name: str
    positions: FloatArray
    charges: FloatArray


class StagedSolve(NamedTuple):
    summary: SolverSummary
    stage: str


def initial_parameters(
    estimate: ParameterEstimate,
    max_charge: float,
    pixel_spacing: float,
    min_uncertainty: float,
) -> Parameters:
    """Bounded parameters around an estimate, start values clipped into bounds.

    Raises:
        ValueError: If any bound interval is empty
    """
    amplitude, center, _gamma, _beta, baseline = estimate.as_array()
    baseline_range = max(
        BASELINE_AMPLITUDE_FACTOR * amplitude, BASELINE_OFFSET_FACTOR * abs(baseline)
    )
    lower = np.array(
        [
            max(min_uncertainty, AMPLITUDE_MIN_FRACTION * amplitude),
            center - CENTER_RANGE * pixel_spacing,
            GAMMA_BOUNDS[0] * pixel_spacing,
            BETA_BOUNDS[0],
            baseline - baseline_range,
        ]
    )
    upper = np.array(
        [
            min(
                AMPLITUDE_MAX_CHARGE_FACTOR * max_charge,
                AMPLITUDE_MAX_ESTIMATE_FACTOR * amplitude,
            ),
            center + CENTER_RANGE * pixel_spacing,
            GAMMA_BOUNDS[1] * pixel_spacing,
            BETA_BOUNDS[1],
            baseline + baseline_range,
        ]
    )
    return Parameters.from_values(estimate.as_array(), lower, upper)


def _physical(values: FloatArray) -> bool:
    return bool(np.all(np.isfinite(values)) and values[0] > 0 and values[2] > 0)


def is_acceptable(summary: SolverSummary) -> bool:
    """Converged, positive amplitude and width, beta in (0.1, 5), nothing NaN."""
    low, high = ACCEPTED_BETA_RANGE
    return summary.converged and _physical(summary.x) and low < summary.x[3] < high


@dataclass
class ProfileFitter:
    """Fits one profile with the ordered dataset/solver search.

    The tables are injectable so the search order can be pinned in tests.
    """

    config: FitConfig = field(default_factory=FitConfig)
    session: SolverSession | None = None
    reporter: Reporter | None = None
    dataset_variants: Sequence[DatasetVariant] = DATASET_VARIANTS
    solver_configurations: Sequence[SolverConfiguration] = SOLVER_CONFIGURATIONS
    covariance_attempts: Sequence[CovarianceAttempt] = COVARIANCE_ATTEMPTS

    def fit(
        self,
        positions: ArrayLike,
        charges: ArrayLike,
        center_estimate: float,
        pixel_spacing: float,
    ) -> FitResult:
        """Fit a power-law Lorentzian to one profile.

        Args:
            positions: Sample positions
            charges: Charge at each position
            center_estimate: Caller's guess of the peak center
            pixel_spacing: Pixel pitch along the profile

        Returns:
            The first accepted fit, or a failed FitResult
        """
        reporter = resolve_reporter(self.reporter, self.config.verbose, "chargefit.fitting")
        x = np.asarray(positions, dtype=float).ravel()
        y = np.asarray(charges, dtype=float).ravel()
        if x.size != y.size:
            reporter.error(f"Positions ({x.size}) and charges ({y.size}) differ in length")
            return FitResult.failed()
        if x.size < MIN_FIT_POINTS:
            reporter.error(f"Need at least {MIN_FIT_POINTS} points, got {x.size}")
            return FitResult.failed(x.size)

        with resolve_session(self.session).exclusive():
            return self._search(x, y, center_estimate, pixel_spacing, reporter)

    def datasets(self, x: FloatArray, y: FloatArray, reporter: Reporter) -> list[Dataset]:
        """Dataset variants to try, in order."""
        datasets = []
        for variant in self.dataset_variants:
            if variant.sigma_threshold is None:
                datasets.append(Dataset(variant.name, x, y))
                continue
            if not self.config.outlier_filtering:
                continue
            fx, fy = filter_profile_outliers(x, y, variant.sigma_threshold, reporter)
            if fx.size >= MIN_FIT_POINTS:
                datasets.append(Dataset(variant.name, fx, fy))
        return datasets

    def _search(
        self,
        x: FloatArray,
        y: FloatArray,
        center_estimate: float,
        pixel_spacing: float,
        reporter: Reporter,
    ) -> FitResult:
        datasets = self.datasets(x, y, reporter)
        reporter.action(f"Fitting {x.size} points, {len(datasets)} dataset(s)")

        for dataset in datasets:
            estimate = estimate_parameters(
                dataset.positions, dataset.charges, center_estimate, pixel_spacing
            )
            if not estimate.valid:
                reporter.warning(f"Estimation failed for dataset '{dataset.name}'")
                continue
            reporter.info(
                f"Dataset '{dataset.name}' ({dataset.positions.size} points), "
                f"estimate tier {estimate.method_used}: A={estimate.amplitude:.4g} "
                f"m={estimate.center:.4g} gamma={estimate.gamma:.4g} B={estimate.baseline:.4g}"
            )

            max_charge = float(np.max(dataset.charges))
            cost = PowerLorentzianCost(
                dataset.positions,
                dataset.charges,
                charge_uncertainty(
                    max_charge,
                    enabled=self.config.enable_charge_uncertainties,
                    min_uncertainty=self.config.min_uncertainty,
                ),
            )
            for index, configuration in enumerate(self.solver_configurations):
                try:
                    params = initial_parameters(
                        estimate, max_charge, pixel_spacing, self.config.min_uncertainty
                    )
                except ValueError as exc:
                    reporter.warning(f"Configuration {index}: {exc}")
                    continue
                options = configuration.options(
                    estimate.amplitude, robust_loss=self.config.robust_loss
                )
                staged = self._solve_staged(cost, params, options, pixel_spacing)
                if not is_acceptable(staged.summary):
                    reporter.info(
                        f"Configuration {index} rejected ({staged.summary.termination.value})"
                    )
                    continue
                return self._accept(dataset, estimate, index, staged, pixel_spacing, reporter)

        reporter.error("All datasets and solver configurations exhausted")
        return FitResult.failed(x.size)

    def _solve_staged(
        self,
        cost: PowerLorentzianCost,
        params: Parameters,
        options: SolverOptions,
        pixel_spacing: float,
    ) -> StagedSolve:
        stage1 = params.copy()
        stage1.set_bounds(ParameterType.BETA, *STAGE1_BETA_BOUNDS)
        first = _run(cost, stage1, options)

        if first.converged and _physical(first.x):
            stage2 = params.copy()
            stage2.set_values(first.x)
            center = float(first.x[1])
            stage2.set_bounds(
                ParameterType.CENTER,
                center - STAGE2_CENTER_RANGE * pixel_spacing,
                center + STAGE2_CENTER_RANGE * pixel_spacing,
            )
            return StagedSolve(_run(cost, stage2, options), TWO_STAGE)

        single = params.copy()
        if np.all(np.isfinite(first.x)):
            single.set_values(first.x)
        return StagedSolve(_run(cost, single, options), SINGLE_STAGE)

    def _accept(
        self,
        dataset: Dataset,
        estimate: ParameterEstimate,
        index: int,
        staged: StagedSolve,
        pixel_spacing: float,
        reporter: Reporter,
    ) -> FitResult:
        summary = staged.summary
        values = summary.x.copy()
        values[2] = abs(values[2])
        mad = compute_robust_statistics(dataset.positions, dataset.charges).mad
        errors, source = estimate_errors(
            summary.jacobian,
            values,
            mad,
            pixel_spacing,
            self.covariance_attempts,
            reporter=reporter,
        )

        n_points = int(dataset.positions.size)
        chi2_reduced = reduced_chi_squared_from_cost(summary.cost, n_points)
        reporter.success(
            f"Accepted configuration {index} on '{dataset.name}' ({staged.stage}), "
            f"chi2_red={chi2_reduced:.4g}"
        )
        amplitude, center, gamma, beta, baseline = (float(v) for v in values)
        amplitude_err, center_err, gamma_err, beta_err, baseline_err = (float(e) for e in errors)
        return FitResult(
            amplitude=amplitude,
            center=center,
            gamma=gamma,
            beta=beta,
            baseline=baseline,
            amplitude_err=amplitude_err,
            center_err=center_err,
            gamma_err=gamma_err,
            beta_err=beta_err,
            baseline_err=baseline_err,
            chi2_reduced=chi2_reduced,
            dof=compute_degrees_of_freedom(n_points),
            pseudo_p_value=pseudo_p_value(chi2_reduced),
            success=True,
            n_points=n_points,
            dataset=dataset.name,
            configuration=index,
            estimate_method=estimate.method_used,
            error_source=source,
            stage=staged.stage,
        )


def _run(cost: PowerLorentzianCost, params: Parameters, options: SolverOptions) -> SolverSummary:
    lower, upper = params.get_bounds()
    return solve(cost, params.get_values(), lower, upper, options)


def fit_power_lorentzian(
    positions: ArrayLike,
    charges: ArrayLike,
    center_estimate: float,
    pixel_spacing: float,
    *,
    config: FitConfig | None = None,
    session: SolverSession | None = None,
    reporter: Reporter | None = None,
) -> FitResult:
    """Functional form of ``ProfileFitter.fit`` with the default search tables."""
    fitter = ProfileFitter(config=config or FitConfig(), session=session, reporter=reporter)
    return fitter.fit(positions, charges, center_estimate, pixel_spacing)
