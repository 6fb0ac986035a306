"""Initial parameter estimation for the power-law Lorentzian.

Estimation runs through an ordered table of tiers; the first tier whose
estimate passes its own acceptance check wins:

1. physics-based: weighted centroid and second moment of the excess charge
2. robust statistical: median, quartiles and MAD
3. conservative: caller-supplied center, fixed width, always accepted
"""

from __future__ import annotations

import math
from collections.abc import Callable
from dataclasses import dataclass, replace
from typing import NamedTuple

import numpy as np

from chargefit.core.algorithms.statistics import RobustStatistics, compute_robust_statistics
from chargefit.core.constants import (
    ESTIMATE_GAMMA_LIMITS,
    ESTIMATE_MIN_AMPLITUDE_FRACTION,
    ESTIMATE_SPREAD_FRACTION,
    FALLBACK_GAMMA,
    MIN_FIT_POINTS,
    ROBUST_GAMMA_MIN,
)
from chargefit.core.shared.typing import ArrayLike, FloatArray


@dataclass(frozen=True, slots=True)
class ParameterEstimate:
    """Starting point for a fit.

    ``method_used`` is the 1-based tier that produced the estimate, or 0 when
    no estimate could be made.
    """

    amplitude: float = 0.0
    center: float = 0.0
    gamma: float = 0.0
    beta: float = 1.0
    baseline: float = 0.0
    valid: bool = False
    method_used: int = 0

    def as_array(self) -> FloatArray:
        return np.array([self.amplitude, self.center, self.gamma, self.beta, self.baseline])


class EstimationContext(NamedTuple):
    positions: FloatArray
    charges: FloatArray
    stats: RobustStatistics
    center_estimate: float
    pixel_spacing: float


def _physics_based(ctx: EstimationContext) -> ParameterEstimate:
    stats = ctx.stats
    center = stats.weighted_mean
    baseline = min(stats.min, stats.q25)
    amplitude = stats.max - baseline

    excess = np.maximum(0.0, ctx.charges - baseline)
    mask = excess > ESTIMATE_SPREAD_FRACTION * amplitude
    weight_sum = float(np.sum(excess[mask]))
    if weight_sum > 0:
        spread = float(np.sum(excess[mask] * (ctx.positions[mask] - center) ** 2))
        gamma = math.sqrt(2.0 * spread / weight_sum)
    else:
        gamma = FALLBACK_GAMMA * ctx.pixel_spacing

    low, high = ESTIMATE_GAMMA_LIMITS
    gamma = max(low * ctx.pixel_spacing, min(high * ctx.pixel_spacing, gamma))
    amplitude = max(amplitude, ESTIMATE_MIN_AMPLITUDE_FRACTION * (stats.max - stats.min))
    return ParameterEstimate(amplitude, center, gamma, 1.0, baseline)


def _physics_based_accepts(estimate: ParameterEstimate) -> bool:
    return (
        estimate.amplitude > 0
        and estimate.gamma > 0
        and not np.any(np.isnan(estimate.as_array()))
    )


def _robust_statistical(ctx: EstimationContext) -> ParameterEstimate:
    stats = ctx.stats
    return ParameterEstimate(
        amplitude=stats.q75 - stats.q25,
        center=stats.median,
        gamma=max(stats.mad, ROBUST_GAMMA_MIN * ctx.pixel_spacing),
        beta=1.0,
        baseline=stats.q25,
    )


def _robust_statistical_accepts(estimate: ParameterEstimate) -> bool:
    return estimate.amplitude > 0 and estimate.gamma > 0


def _conservative(ctx: EstimationContext) -> ParameterEstimate:
    return ParameterEstimate(
        amplitude=ctx.stats.max,
        center=ctx.center_estimate,
        gamma=FALLBACK_GAMMA * ctx.pixel_spacing,
        beta=1.0,
        baseline=0.0,
    )


class EstimationTier(NamedTuple):
    name: str
    build: Callable[[EstimationContext], ParameterEstimate]
    accepts: Callable[[ParameterEstimate], bool]


ESTIMATION_TIERS: tuple[EstimationTier, ...] = (
    EstimationTier("physics-based", _physics_based, _physics_based_accepts),
    EstimationTier("robust statistical", _robust_statistical, _robust_statistical_accepts),
    EstimationTier("conservative", _conservative, lambda _estimate: True),
)


def estimate_parameters(
    positions: ArrayLike,
    charges: ArrayLike,
    center_estimate: float,
    pixel_spacing: float,
) -> ParameterEstimate:
    """Estimate starting parameters of a profile.

    Args:
        positions: Sample positions along the profile
        charges: Charge at each position
        center_estimate: Caller's guess of the peak center (used by tier 3)
        pixel_spacing: Pixel pitch, scales the width estimates

    Returns:
        The first accepted tier's estimate, or an invalid estimate
        (``method_used == 0``) when the input has fewer than 5 points or
        mismatched lengths.
    """
    x = np.asarray(positions, dtype=float).ravel()
    y = np.asarray(charges, dtype=float).ravel()
    if x.size != y.size or x.size < MIN_FIT_POINTS:
        return ParameterEstimate()

    stats = compute_robust_statistics(x, y)
    if not stats.valid:
        return ParameterEstimate()

    ctx = EstimationContext(x, y, stats, center_estimate, pixel_spacing)
    with np.errstate(invalid="ignore"):
        for method, tier in enumerate(ESTIMATION_TIERS, start=1):
            estimate = tier.build(ctx)
            if tier.accepts(estimate):
                return replace(estimate, valid=True, method_used=method)
    return ParameterEstimate()
