"""Domain models: configuration and charge profiles."""

from chargefit.core.domain.config import ChargeFitConfig, FitConfig, LoggingConfig
from chargefit.core.domain.profile import Profile, charge_uncertainty

__all__ = [
    "ChargeFitConfig",
    "FitConfig",
    "LoggingConfig",
    "Profile",
    "charge_uncertainty",
]
