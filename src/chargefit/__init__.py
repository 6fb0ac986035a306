"""chargefit - power-law Lorentzian fits of 2-D charge distributions.

Public API:
    - fit_power_lorentzian: 1-D fit of one profile
    - fit_2d_power_lorentzian: Row/column fits through a charge center
    - fit_diagonal_power_lorentzian: Fits along both diagonals
    - FitService: Per-event facade

Configuration:
    - ChargeFitConfig, FitConfig, LoggingConfig
"""

import contextlib
from importlib import metadata

__version__ = "0.1.0"

with contextlib.suppress(metadata.PackageNotFoundError):
    __version__ = metadata.version(__name__)

from chargefit.core.algorithms.outliers import remove_outliers  # noqa: E402
from chargefit.core.domain.config import ChargeFitConfig, FitConfig, LoggingConfig  # noqa: E402
from chargefit.core.fitting.orchestrator import ProfileFitter, fit_power_lorentzian  # noqa: E402
from chargefit.core.fitting.session import SolverSession, default_session  # noqa: E402
from chargefit.core.results.fit_results import (  # noqa: E402
    Aggregate2DResult,
    DiagonalResult,
    FitResult,
)
from chargefit.services import EventFitResult, FitService  # noqa: E402
from chargefit.services.fit import (  # noqa: E402
    fit_2d_power_lorentzian,
    fit_diagonal_power_lorentzian,
)

__all__ = [
    # Version
    "__version__",
    # Fitting
    "fit_power_lorentzian",
    "fit_2d_power_lorentzian",
    "fit_diagonal_power_lorentzian",
    "remove_outliers",
    "ProfileFitter",
    "FitService",
    "SolverSession",
    "default_session",
    # Results
    "FitResult",
    "Aggregate2DResult",
    "DiagonalResult",
    "EventFitResult",
    # Configuration
    "ChargeFitConfig",
    "FitConfig",
    "LoggingConfig",
]
