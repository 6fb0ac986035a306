"""2-D fit: the row and the column through the charge center."""

from __future__ import annotations

import numpy as np

from chargefit.core.algorithms.grouping import LineGroups, group_lines, select_line
from chargefit.core.constants import CHARGE_UNCERTAINTY_FRACTION, MIN_FIT_POINTS
from chargefit.core.domain.config import FitConfig
from chargefit.core.domain.profile import Profile
from chargefit.core.fitting.orchestrator import ProfileFitter
from chargefit.core.fitting.session import SolverSession
from chargefit.core.results.fit_results import Aggregate2DResult, FitResult
from chargefit.core.shared.reporter import Reporter, resolve_reporter
from chargefit.core.shared.typing import ArrayLike


def _fit_line(
    fitter: ProfileFitter,
    lines: LineGroups,
    target: float,
    center_estimate: float,
    pixel_spacing: float,
    label: str,
    reporter: Reporter,
) -> tuple[FitResult, Profile | None, float | None]:
    key = select_line(lines, target)
    if key is None:
        reporter.warning(f"No {label} with at least {MIN_FIT_POINTS} points")
        return FitResult.failed(), None, None
    profile = lines.profile(key)
    reporter.action(f"Fitting {label} at {key:.4g} with {len(profile)} points")
    result = fitter.fit(profile.positions, profile.charges, center_estimate, pixel_spacing)
    return result, profile, key


def _line_charge_uncertainty(
    result: FitResult, profile: Profile | None, config: FitConfig
) -> float:
    if not config.enable_charge_uncertainties or not result.success or profile is None:
        return 0.0
    return CHARGE_UNCERTAINTY_FRACTION * profile.max_charge


def fit_2d_power_lorentzian(
    x: ArrayLike,
    y: ArrayLike,
    charges: ArrayLike,
    center_x: float,
    center_y: float,
    pixel_spacing: float,
    *,
    verbose: bool = False,
    enable_outlier_filtering: bool | None = None,
    config: FitConfig | None = None,
    session: SolverSession | None = None,
    reporter: Reporter | None = None,
) -> Aggregate2DResult:
    """Fit the row and the column closest to the center estimate.

    Points with non-positive charge are ignored. Rows are keyed by y and
    fitted along x (center estimate ``center_x``); columns are keyed by x and
    fitted along y.

    Args:
        x: X coordinates of the samples
        y: Y coordinates of the samples
        charges: Charge of each sample
        center_x: Center estimate along x
        center_y: Center estimate along y
        pixel_spacing: Pixel pitch
        verbose: Report diagnostics through logging
        enable_outlier_filtering: Overrides ``config.outlier_filtering`` when given
        config: Fit configuration
        session: Solver session (default: process-wide)
        reporter: Diagnostics sink (overrides ``verbose``)

    Returns:
        Aggregate2DResult; ``success`` requires both axes to succeed
    """
    config = config or FitConfig()
    if enable_outlier_filtering is not None:
        config = config.model_copy(update={"outlier_filtering": enable_outlier_filtering})
    if verbose:
        config = config.model_copy(update={"verbose": True})
    reporter = resolve_reporter(reporter, config.verbose, "chargefit.axes")

    xs = np.asarray(x, dtype=float).ravel()
    ys = np.asarray(y, dtype=float).ravel()
    qs = np.asarray(charges, dtype=float).ravel()
    if not xs.size == ys.size == qs.size:
        reporter.error("Coordinate and charge arrays differ in length")
        return Aggregate2DResult()
    if xs.size < MIN_FIT_POINTS:
        reporter.error(f"Need at least {MIN_FIT_POINTS} points, got {xs.size}")
        return Aggregate2DResult()

    rows, columns = group_lines(xs, ys, qs, pixel_spacing)
    reporter.info(f"{len(rows)} rows, {len(columns)} columns")
    fitter = ProfileFitter(config=config, session=session, reporter=reporter)

    x_fit, x_profile, row_key = _fit_line(
        fitter, rows, center_y, center_x, pixel_spacing, "row", reporter
    )
    y_fit, y_profile, column_key = _fit_line(
        fitter, columns, center_x, center_y, pixel_spacing, "column", reporter
    )
    return Aggregate2DResult(
        x=x_fit,
        y=y_fit,
        x_profile=x_profile,
        y_profile=y_profile,
        row_key=row_key,
        column_key=column_key,
        x_charge_uncertainty=_line_charge_uncertainty(x_fit, x_profile, config),
        y_charge_uncertainty=_line_charge_uncertainty(y_fit, y_profile, config),
    )
