"""Domain configuration models for chargefit."""

from pathlib import Path
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field

LogLevel = Literal["debug", "info", "warning", "error"]


class FitConfig(BaseModel):
    """Configuration for the fitting process.

    Example TOML:
        [fitting]
        enable_charge_uncertainties = true
        min_uncertainty = 1e-20
        outlier_filtering = false
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    enable_charge_uncertainties: bool = Field(
        default=False,
        description="Weight residuals by 5% of the profile's max charge instead of 1.",
    )
    min_uncertainty: Annotated[float, Field(gt=0)] = Field(
        default=1e-20,
        description="Floor for the per-profile charge uncertainty and the amplitude lower bound.",
    )
    outlier_filtering: bool = Field(
        default=False,
        description="Try MAD-filtered dataset variants before the original data.",
    )
    outlier_sigma: Annotated[float, Field(gt=0)] = Field(
        default=2.5,
        description="MAD multiplier used by the point-set outlier remover.",
    )
    robust_loss: bool = Field(
        default=False,
        description="Apply each solver configuration's robust loss (Huber/Cauchy).",
    )
    verbose: bool = Field(default=False, description="Report fit diagnostics through logging.")


class LoggingConfig(BaseModel):
    """Configuration for session logging."""

    model_config = ConfigDict(extra="forbid")

    file: Path | None = Field(default=None, description="Log file (.log text or .json).")
    level: LogLevel = Field(default="info", description="Minimum logged level.")


class ChargeFitConfig(BaseModel):
    """Top-level configuration object."""

    model_config = ConfigDict(extra="forbid")

    fitting: FitConfig = Field(default_factory=FitConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
