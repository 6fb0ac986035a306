"""Result models and goodness-of-fit statistics."""

from chargefit.core.results.fit_results import Aggregate2DResult, DiagonalResult, FitResult
from chargefit.core.results.statistics import (
    compute_degrees_of_freedom,
    compute_reduced_chi_squared,
    pseudo_p_value,
    reduced_chi_squared_from_cost,
)

__all__ = [
    "Aggregate2DResult",
    "DiagonalResult",
    "FitResult",
    "compute_degrees_of_freedom",
    "compute_reduced_chi_squared",
    "pseudo_p_value",
    "reduced_chi_squared_from_cost",
]
