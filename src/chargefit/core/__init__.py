"""Core module for chargefit - contains data models and fitting logic."""

from chargefit.core.domain.config import ChargeFitConfig, FitConfig, LoggingConfig
from chargefit.core.results.fit_results import Aggregate2DResult, DiagonalResult, FitResult

__all__ = [
    "Aggregate2DResult",
    "ChargeFitConfig",
    "DiagonalResult",
    "FitConfig",
    "FitResult",
    "LoggingConfig",
]
