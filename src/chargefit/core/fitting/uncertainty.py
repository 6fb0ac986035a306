"""Parameter uncertainties of an accepted fit."""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np

from chargefit.core.constants import MAX_AMPLITUDE_ERROR_RATIO, MAX_CENTER_ERROR_PITCH
from chargefit.core.fitting.policy import COVARIANCE_ATTEMPTS, NULL_SPACE_RANK, CovarianceAttempt
from chargefit.core.fitting.solver import compute_covariance
from chargefit.core.shared.reporter import NullReporter, Reporter
from chargefit.core.shared.typing import FloatArray

COVARIANCE_SOURCE = "covariance"
HEURISTIC_SOURCE = "heuristic"


def covariance_errors_usable(errors: FloatArray, values: FloatArray, pixel_spacing: float) -> bool:
    """Finite errors with sigma_A < 10 A and sigma_m < 5 pitches."""
    return bool(
        np.all(np.isfinite(errors))
        and errors[0] < MAX_AMPLITUDE_ERROR_RATIO * values[0]
        and errors[1] < MAX_CENTER_ERROR_PITCH * pixel_spacing
    )


def heuristic_errors(values: FloatArray, mad: float, pixel_spacing: float) -> FloatArray:
    """Fallback 1-sigma errors from the fitted values and the data's MAD."""
    amplitude, _center, gamma, beta, baseline = (float(v) for v in values)
    return np.array(
        [
            max(0.02 * amplitude, 0.1 * mad),
            max(0.02 * pixel_spacing, gamma / 10.0),
            max(0.05 * gamma, 0.01 * pixel_spacing),
            max(0.1 * beta, 0.05),
            max(0.1 * abs(baseline), 0.05 * mad),
        ]
    )


def estimate_errors(
    jacobian: FloatArray | None,
    values: FloatArray,
    mad: float,
    pixel_spacing: float,
    attempts: Sequence[CovarianceAttempt] = COVARIANCE_ATTEMPTS,
    null_space_rank: int = NULL_SPACE_RANK,
    reporter: Reporter | None = None,
) -> tuple[FloatArray, str]:
    """Errors from the first usable covariance attempt, else the heuristic.

    Returns:
        Tuple of (errors, source) where source is "covariance" or "heuristic"
    """
    reporter = reporter or NullReporter()
    for attempt in attempts:
        covariance = compute_covariance(
            jacobian,
            attempt.algorithm,
            attempt.min_reciprocal_condition_number,
            null_space_rank,
        )
        if covariance is None:
            continue
        errors = np.sqrt(np.abs(np.diag(covariance)))
        if covariance_errors_usable(errors, values, pixel_spacing):
            reporter.info(
                f"Covariance via {attempt.algorithm.value} "
                f"(threshold {attempt.min_reciprocal_condition_number:g})"
            )
            return errors, COVARIANCE_SOURCE

    reporter.warning("Covariance unavailable, using heuristic uncertainties")
    return heuristic_errors(values, mad, pixel_spacing), HEURISTIC_SOURCE
