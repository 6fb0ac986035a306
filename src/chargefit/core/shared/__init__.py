"""Shared foundational utilities for chargefit."""

from chargefit.core.shared import reporter, typing
from chargefit.core.shared.exceptions import (
    ChargeFitError,
    ConfigError,
    DataIOError,
    OptimizationError,
)
from chargefit.core.shared.reporter import LoggingReporter, NullReporter, Reporter

__all__ = [
    "ChargeFitError",
    "ConfigError",
    "DataIOError",
    "LoggingReporter",
    "NullReporter",
    "OptimizationError",
    "Reporter",
    "reporter",
    "typing",
]
