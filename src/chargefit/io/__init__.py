"""Input/output: configuration files and point samples."""

from chargefit.io.config import (
    apply_env_overrides,
    generate_default_config,
    load_config,
    save_config,
)
from chargefit.io.points import load_points

__all__ = [
    "apply_env_overrides",
    "generate_default_config",
    "load_config",
    "load_points",
    "save_config",
]
