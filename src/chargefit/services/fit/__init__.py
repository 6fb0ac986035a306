"""Fitting services: 2-D, diagonal and per-event fits."""

from chargefit.services.fit.axes import fit_2d_power_lorentzian
from chargefit.services.fit.diagonals import fit_diagonal_power_lorentzian
from chargefit.services.fit.service import EventFitResult, FitService

__all__ = [
    "EventFitResult",
    "FitService",
    "fit_2d_power_lorentzian",
    "fit_diagonal_power_lorentzian",
]
