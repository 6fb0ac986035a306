"""Lineshape functions."""

from chargefit.core.lineshapes.power_lorentzian import (
    power_lorentzian,
    power_lorentzian_derivatives,
)

__all__ = ["power_lorentzian", "power_lorentzian_derivatives"]
