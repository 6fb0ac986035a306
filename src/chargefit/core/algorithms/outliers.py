"""MAD-based outlier rejection.

Two flavours share the same rule (a charge is an outlier when it lies more
than ``k`` scaled MADs from the median):

- ``filter_profile_outliers`` works on one profile and is used to build the
  filtered dataset variants of the 1-D fit
- ``remove_outliers`` works on a raw (x, y, charge) point set before the
  points are grouped into lines
"""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np

from chargefit.core.algorithms.statistics import compute_robust_statistics
from chargefit.core.constants import CONSERVATIVE_SIGMA, EXTREME_LENIENT_SIGMA, MIN_FIT_POINTS
from chargefit.core.shared.reporter import NullReporter, Reporter
from chargefit.core.shared.typing import ArrayLike, FloatArray


def _empty() -> FloatArray:
    return np.empty(0, dtype=float)


def _inlier_mask(charges: FloatArray, median: float, mad: float, k: float) -> np.ndarray:
    return (charges >= median - k * mad) & (charges <= median + k * mad)


def filter_profile_outliers(
    positions: ArrayLike,
    charges: ArrayLike,
    sigma_threshold: float = CONSERVATIVE_SIGMA,
    reporter: Reporter | None = None,
) -> tuple[FloatArray, FloatArray]:
    """Drop profile samples whose charge is far from the median.

    Clipping is repeated on the survivors, with median and MAD recomputed,
    until a pass removes nothing, so the output is a fixed point of the
    filter at the multiplier that was applied. When the first pass keeps
    fewer than half of the samples, the extreme-lenient multiplier is used
    instead. When fewer than 5 survive, the original data is returned.
    """
    reporter = reporter or NullReporter()
    x = np.asarray(positions, dtype=float).ravel()
    y = np.asarray(charges, dtype=float).ravel()
    if x.size != y.size or x.size < MIN_FIT_POINTS:
        return x, y

    stats = compute_robust_statistics(x, y)
    if not stats.valid:
        return x, y

    k = sigma_threshold
    keep = _inlier_mask(y, stats.median, stats.mad, k)
    if np.count_nonzero(keep) < y.size // 2:
        removed = int(y.size - np.count_nonzero(keep))
        reporter.warning(f"{removed} outliers at k={k:g}, retrying at k={EXTREME_LENIENT_SIGMA:g}")
        k = EXTREME_LENIENT_SIGMA
        keep = _inlier_mask(y, stats.median, stats.mad, k)

    while MIN_FIT_POINTS <= np.count_nonzero(keep) < y.size:
        survivors = np.flatnonzero(keep)
        stats = compute_robust_statistics(x[survivors], y[survivors])
        inner = _inlier_mask(y[survivors], stats.median, stats.mad, k)
        if inner.all():
            break
        keep[survivors[~inner]] = False

    kept = int(np.count_nonzero(keep))
    if kept < MIN_FIT_POINTS:
        reporter.warning(f"Only {kept} points survive outlier filtering, using original data")
        return x, y
    if kept < y.size:
        reporter.info(f"Removed {y.size - kept} outliers, {kept} points remaining")
    return x[keep], y[keep]


@dataclass(frozen=True, slots=True)
class OutlierRemovalResult:
    """Point set after outlier removal."""

    x: FloatArray = field(default_factory=_empty)
    y: FloatArray = field(default_factory=_empty)
    charges: FloatArray = field(default_factory=_empty)
    outliers_removed: int = 0
    filtering_applied: bool = False
    success: bool = False


def remove_outliers(
    x: ArrayLike,
    y: ArrayLike,
    charges: ArrayLike,
    *,
    enabled: bool = True,
    sigma_threshold: float = CONSERVATIVE_SIGMA,
    reporter: Reporter | None = None,
) -> OutlierRemovalResult:
    """Remove points whose charge deviates from the median by more than k MADs.

    Args:
        x: X coordinates
        y: Y coordinates
        charges: Charge at each point
        enabled: When False the input is returned untouched
        sigma_threshold: MAD multiplier ``k``
        reporter: Diagnostics sink

    Returns:
        OutlierRemovalResult. ``filtering_applied`` is False when removal was
        disabled, the input had fewer than 5 points, or removal would leave
        fewer than 5 points. Mismatched lengths give an empty, unsuccessful
        result.
    """
    reporter = reporter or NullReporter()
    xs = np.asarray(x, dtype=float).ravel()
    ys = np.asarray(y, dtype=float).ravel()
    qs = np.asarray(charges, dtype=float).ravel()
    if not xs.size == ys.size == qs.size:
        reporter.error("Coordinate and charge arrays differ in length")
        return OutlierRemovalResult()

    if not enabled or qs.size < MIN_FIT_POINTS:
        return OutlierRemovalResult(xs, ys, qs, success=True)

    stats = compute_robust_statistics(xs, qs)
    outliers = np.abs(qs - stats.median) > sigma_threshold * stats.mad
    n_outliers = int(np.count_nonzero(outliers))

    if qs.size - n_outliers < MIN_FIT_POINTS:
        reporter.warning(
            f"Outlier removal would leave {qs.size - n_outliers} points, keeping all {qs.size}"
        )
        return OutlierRemovalResult(xs, ys, qs, success=True)

    keep = ~outliers
    if n_outliers:
        reporter.info(f"Removed {n_outliers} outliers from {qs.size} points")
    return OutlierRemovalResult(
        xs[keep],
        ys[keep],
        qs[keep],
        outliers_removed=n_outliers,
        filtering_applied=True,
        success=True,
    )
