"""Robust descriptive statistics of a one-dimensional charge profile."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from chargefit.core.constants import MAD_FLOOR, MAD_TO_SIGMA
from chargefit.core.shared.typing import ArrayLike, FloatArray


@dataclass(frozen=True, slots=True)
class RobustStatistics:
    """Descriptive statistics of the charge channel of a profile.

    Attributes:
        mean: Arithmetic mean of the charges
        median: Median of the charges (even length: mean of middle pair)
        std_dev: Population standard deviation of the charges
        mad: Scaled median absolute deviation, never below MAD_FLOOR
        q25: Lower quartile (sorted[n // 4])
        q75: Upper quartile (sorted[3n // 4])
        min: Smallest charge
        max: Largest charge
        weighted_mean: Position centroid weighted by max(0, charge - q25)
        total_weight: Sum of the centroid weights
        robust_center: Center estimate (the weighted centroid)
        valid: False on empty or mismatched input
    """

    mean: float = float("nan")
    median: float = float("nan")
    std_dev: float = float("nan")
    mad: float = float("nan")
    q25: float = float("nan")
    q75: float = float("nan")
    min: float = float("nan")
    max: float = float("nan")
    weighted_mean: float = float("nan")
    total_weight: float = 0.0
    robust_center: float = float("nan")
    valid: bool = False


def sorted_median(sorted_values: FloatArray) -> float:
    """Median of an already sorted array."""
    n = sorted_values.size
    if n % 2 == 0:
        return float((sorted_values[n // 2 - 1] + sorted_values[n // 2]) / 2.0)
    return float(sorted_values[n // 2])


def _floored_mad(mad: float, std_dev: float) -> float:
    if np.isfinite(mad) and mad >= MAD_FLOOR:
        return mad
    if np.isfinite(std_dev) and std_dev > MAD_FLOOR:
        return std_dev
    return MAD_FLOOR


def compute_robust_statistics(positions: ArrayLike, charges: ArrayLike) -> RobustStatistics:
    """Compute robust statistics of ``charges`` sampled at ``positions``.

    Never raises: empty or mismatched input yields ``valid=False``.
    """
    x = np.asarray(positions, dtype=float).ravel()
    y = np.asarray(charges, dtype=float).ravel()
    if x.size != y.size or y.size == 0:
        return RobustStatistics()

    n = y.size
    mean = float(np.mean(y))
    std_dev = float(np.sqrt(np.mean((y - mean) ** 2)))

    sorted_y = np.sort(y)
    median = sorted_median(sorted_y)
    q25 = float(sorted_y[n // 4])
    q75 = float(sorted_y[(3 * n) // 4])

    deviations = np.sort(np.abs(y - median))
    mad = _floored_mad(sorted_median(deviations) * MAD_TO_SIGMA, std_dev)

    weights = np.maximum(0.0, y - q25)
    total_weight = float(np.sum(weights))
    if total_weight > 0:
        weighted_mean = float(np.sum(x * weights) / total_weight)
    else:
        weighted_mean = float(np.mean(x))

    return RobustStatistics(
        mean=mean,
        median=median,
        std_dev=std_dev,
        mad=mad,
        q25=q25,
        q75=q75,
        min=float(np.min(y)),
        max=float(np.max(y)),
        weighted_mean=weighted_mean,
        total_weight=total_weight,
        robust_center=weighted_mean,
        valid=True,
    )
