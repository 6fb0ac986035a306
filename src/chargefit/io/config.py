"""Configuration file loading and saving."""

from __future__ import annotations

import os
import tomllib
from collections.abc import Mapping
from pathlib import Path

import tomli_w
from pydantic import ValidationError

from chargefit.core.domain.config import ChargeFitConfig
from chargefit.core.shared.exceptions import ConfigError

ENV_ENABLE_CHARGE_UNCERTAINTIES = "CHARGEFIT_ENABLE_CHARGE_UNCERTAINTIES"
ENV_MIN_UNCERTAINTY = "CHARGEFIT_MIN_UNCERTAINTY"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


def load_config(path: Path) -> ChargeFitConfig:
    """Load configuration from a TOML file.

    Args:
        path: Path to the TOML configuration file.

    Returns:
        ChargeFitConfig: Validated configuration object.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        ConfigError: If the file is not valid TOML or the configuration is invalid.
    """
    if not path.exists():
        msg = f"Configuration file not found: {path}"
        raise FileNotFoundError(msg)

    try:
        with path.open("rb") as f:
            data = tomllib.load(f)
        return ChargeFitConfig.model_validate(data)
    except (tomllib.TOMLDecodeError, ValidationError) as exc:
        msg = f"Invalid configuration file {path}: {exc}"
        raise ConfigError(msg) from exc


def save_config(config: ChargeFitConfig, path: Path) -> None:
    """Save configuration to a TOML file.

    Args:
        config: Configuration object to save.
        path: Path where to save the TOML file.
    """
    data = config.model_dump(mode="json", exclude_none=True)
    with path.open("wb") as f:
        tomli_w.dump(data, f)


def _parse_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    msg = f"{name}: expected a boolean, got {raw!r}"
    raise ConfigError(msg)


def _parse_positive_float(name: str, raw: str) -> float:
    try:
        value = float(raw)
    except ValueError as exc:
        msg = f"{name}: expected a number, got {raw!r}"
        raise ConfigError(msg) from exc
    if not value > 0:
        msg = f"{name}: must be positive, got {raw!r}"
        raise ConfigError(msg)
    return value


def apply_env_overrides(
    config: ChargeFitConfig,
    environ: Mapping[str, str] | None = None,
) -> ChargeFitConfig:
    """Return ``config`` with fitting knobs overridden from the environment.

    Reads CHARGEFIT_ENABLE_CHARGE_UNCERTAINTIES and CHARGEFIT_MIN_UNCERTAINTY.

    Raises:
        ConfigError: If a variable holds an invalid value.
    """
    environ = os.environ if environ is None else environ
    updates: dict[str, object] = {}
    if ENV_ENABLE_CHARGE_UNCERTAINTIES in environ:
        updates["enable_charge_uncertainties"] = _parse_bool(
            ENV_ENABLE_CHARGE_UNCERTAINTIES, environ[ENV_ENABLE_CHARGE_UNCERTAINTIES]
        )
    if ENV_MIN_UNCERTAINTY in environ:
        updates["min_uncertainty"] = _parse_positive_float(
            ENV_MIN_UNCERTAINTY, environ[ENV_MIN_UNCERTAINTY]
        )
    if not updates:
        return config
    fitting = config.fitting.model_copy(update=updates)
    return config.model_copy(update={"fitting": fitting})


def generate_default_config() -> str:
    """Generate a default configuration file as a string.

    Returns:
        str: TOML-formatted default configuration.
    """
    return """# chargefit configuration file
# Generated automatically - edit as needed

[fitting]
enable_charge_uncertainties = false  # weight residuals by 5% of the line's max charge
min_uncertainty = 1e-20              # floor for the charge uncertainty and amplitude bound
outlier_filtering = false            # try MAD-filtered datasets before the original data
outlier_sigma = 2.5                  # MAD multiplier of the point-set outlier remover
robust_loss = false                  # apply Huber/Cauchy losses of the solver configurations
verbose = false

[logging]
level = "info"
# file = "chargefit.log"  # .json for JSON lines
"""
