"""Exception taxonomy for chargefit.

The fitting API reports bad data through result flags. These exceptions
are raised at the outer surfaces only: configuration, input loading and
solver setup.
"""

from __future__ import annotations


class ChargeFitError(Exception):
    """Base class for all chargefit-specific exceptions."""


class ConfigError(ChargeFitError):
    """Configuration-related errors (invalid options, bad environment values)."""


class DataIOError(ChargeFitError):
    """Data loading errors (files, formats, column counts)."""


class OptimizationError(ChargeFitError):
    """Errors while setting up or running a solver call."""


__all__ = [
    "ChargeFitError",
    "ConfigError",
    "DataIOError",
    "OptimizationError",
]
