"""Parameter management for power-law Lorentzian fitting."""

from __future__ import annotations

from enum import Enum

import numpy as np
from pydantic import BaseModel, ConfigDict, Field, model_validator


class ParameterType(str, Enum):
    """Parameters of the power-law Lorentzian, in solver order."""

    AMPLITUDE = "amplitude"  # Peak height above the baseline
    CENTER = "center"  # Peak position
    GAMMA = "gamma"  # Half width
    BETA = "beta"  # Power exponent (1 = Lorentzian)
    BASELINE = "baseline"  # Constant offset


PARAMETER_ORDER: tuple[ParameterType, ...] = tuple(ParameterType)


class Parameter(BaseModel):
    """Single fitting parameter with bounds."""

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    name: str
    value: float
    min: float = -np.inf
    max: float = np.inf

    @model_validator(mode="after")
    def validate_parameter(self) -> Parameter:
        """Validate parameter bounds."""
        if self.min > self.max:
            msg = f"Parameter {self.name}: min ({self.min}) > max ({self.max})"
            raise ValueError(msg)

        if not self.min <= self.value <= self.max:
            msg = (
                f"Parameter {self.name}: value ({self.value}) "
                f"outside bounds [{self.min}, {self.max}]"
            )
            raise ValueError(msg)
        return self


class Parameters(BaseModel):
    """The five model parameters, kept in solver order."""

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    params: dict[str, Parameter] = Field(default_factory=dict)

    @classmethod
    def from_values(
        cls,
        values: np.ndarray,
        lower: np.ndarray,
        upper: np.ndarray,
    ) -> Parameters:
        """Build the five model parameters, clipping each start value into its bounds.

        Raises:
            ValueError: If any lower bound is not strictly below its upper bound
        """
        params = cls()
        for param_type, value, lo, hi in zip(PARAMETER_ORDER, values, lower, upper, strict=True):
            if not lo < hi:
                msg = f"Parameter {param_type.value}: empty bound interval [{lo}, {hi}]"
                raise ValueError(msg)
            name = param_type.value
            params.params[name] = Parameter(
                name=name, value=float(np.clip(value, lo, hi)), min=float(lo), max=float(hi)
            )
        return params

    def __getitem__(self, key: str | ParameterType) -> Parameter:
        """Get parameter by name."""
        return self.params[key.value if isinstance(key, ParameterType) else key]

    def copy(self) -> Parameters:
        """Create a copy of parameters."""
        new_params = Parameters()
        for name, param in self.params.items():
            new_params.params[name] = param.model_copy()
        return new_params

    def set_bounds(self, name: str | ParameterType, min: float, max: float) -> None:
        """Replace the bounds of a parameter, clipping its value into them.

        Raises:
            ValueError: If ``min`` is not strictly below ``max``
        """
        param = self[name]
        if not min < max:
            msg = f"Parameter {param.name}: empty bound interval [{min}, {max}]"
            raise ValueError(msg)
        self.params[param.name] = param.model_copy(
            update={"min": min, "max": max, "value": float(np.clip(param.value, min, max))}
        )

    def get_values(self) -> np.ndarray:
        """Get parameter values as an array, in solver order."""
        return np.array([param.value for param in self.params.values()])

    def get_bounds(self) -> tuple[np.ndarray, np.ndarray]:
        """Get lower and upper bounds as arrays."""
        lower = np.array([param.min for param in self.params.values()])
        upper = np.array([param.max for param in self.params.values()])
        return lower, upper

    def set_values(self, values: np.ndarray) -> None:
        """Set parameter values from an array, clipped into bounds."""
        for param, value in zip(self.params.values(), values, strict=True):
            param.value = float(np.clip(value, param.min, param.max))
