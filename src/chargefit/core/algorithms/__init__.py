"""Core algorithms: robust statistics, estimation, outlier rejection and grouping."""

from chargefit.core.algorithms.estimation import (
    ESTIMATION_TIERS,
    ParameterEstimate,
    estimate_parameters,
)
from chargefit.core.algorithms.grouping import (
    DiagonalProfiles,
    LineGroups,
    group_lines,
    select_line,
    split_diagonals,
)
from chargefit.core.algorithms.outliers import (
    OutlierRemovalResult,
    filter_profile_outliers,
    remove_outliers,
)
from chargefit.core.algorithms.statistics import RobustStatistics, compute_robust_statistics

__all__ = [
    "ESTIMATION_TIERS",
    "DiagonalProfiles",
    "LineGroups",
    "OutlierRemovalResult",
    "ParameterEstimate",
    "RobustStatistics",
    "compute_robust_statistics",
    "estimate_parameters",
    "filter_profile_outliers",
    "group_lines",
    "remove_outliers",
    "select_line",
    "split_diagonals",
]
