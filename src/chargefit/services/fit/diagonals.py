"""Diagonal fit: profiles along the two diagonals through the center estimate."""

from __future__ import annotations

import numpy as np

from chargefit.core.algorithms.grouping import split_diagonals
from chargefit.core.algorithms.outliers import remove_outliers
from chargefit.core.constants import DIAGONAL_PITCH_FACTOR, MIN_FIT_POINTS
from chargefit.core.domain.config import FitConfig
from chargefit.core.domain.profile import Profile
from chargefit.core.fitting.orchestrator import ProfileFitter
from chargefit.core.fitting.session import SolverSession
from chargefit.core.results.fit_results import DiagonalResult, FitResult
from chargefit.core.shared.reporter import Reporter, resolve_reporter
from chargefit.core.shared.typing import ArrayLike


def _fit_diagonal(
    fitter: ProfileFitter,
    profile: Profile,
    pixel_spacing: float,
    label: str,
    reporter: Reporter,
) -> FitResult:
    if len(profile) < MIN_FIT_POINTS:
        reporter.warning(f"{label}: only {len(profile)} points")
        return FitResult.failed(len(profile))
    reporter.action(f"Fitting {label} with {len(profile)} points")
    return fitter.fit(profile.positions, profile.charges, 0.0, pixel_spacing)


def fit_diagonal_power_lorentzian(
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
) -> DiagonalResult:
    """Fit both diagonals through (center_x, center_y).

    Diagonal coordinates are measured from the center estimate, so every
    fit starts from a center estimate of 0 with a pitch of sqrt(2) pixels.
    The X and Y fits of a diagonal use identical data. When outlier filtering
    is enabled, point-set outlier removal runs first.

    Returns:
        DiagonalResult; ``success`` requires all four fits to succeed
    """
    config = config or FitConfig()
    if enable_outlier_filtering is not None:
        config = config.model_copy(update={"outlier_filtering": enable_outlier_filtering})
    if verbose:
        config = config.model_copy(update={"verbose": True})
    reporter = resolve_reporter(reporter, config.verbose, "chargefit.diagonals")

    xs = np.asarray(x, dtype=float).ravel()
    ys = np.asarray(y, dtype=float).ravel()
    qs = np.asarray(charges, dtype=float).ravel()
    if not xs.size == ys.size == qs.size:
        reporter.error("Coordinate and charge arrays differ in length")
        return DiagonalResult()
    if xs.size < MIN_FIT_POINTS:
        reporter.error(f"Need at least {MIN_FIT_POINTS} points, got {xs.size}")
        return DiagonalResult()

    if config.outlier_filtering:
        removal = remove_outliers(
            xs, ys, qs, enabled=True, sigma_threshold=config.outlier_sigma, reporter=reporter
        )
        if removal.success and removal.filtering_applied:
            xs, ys, qs = removal.x, removal.y, removal.charges

    diagonals = split_diagonals(xs, ys, qs, center_x, center_y, pixel_spacing)
    diagonal_spacing = DIAGONAL_PITCH_FACTOR * pixel_spacing
    fitter = ProfileFitter(config=config, session=session, reporter=reporter)

    return DiagonalResult(
        main_x=_fit_diagonal(fitter, diagonals.main, diagonal_spacing, "main diagonal X", reporter),
        main_y=_fit_diagonal(fitter, diagonals.main, diagonal_spacing, "main diagonal Y", reporter),
        secondary_x=_fit_diagonal(
            fitter, diagonals.secondary, diagonal_spacing, "secondary diagonal X", reporter
        ),
        secondary_y=_fit_diagonal(
            fitter, diagonals.secondary, diagonal_spacing, "secondary diagonal Y", reporter
        ),
        main_profile=diagonals.main,
        secondary_profile=diagonals.secondary,
    )
