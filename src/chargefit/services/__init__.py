"""Application service layer for orchestrating chargefit workflows.

This module provides high-level service facades that the CLI and other
adapters can use without knowing core implementation details.
"""

from chargefit.services.fit import EventFitResult, FitService

__all__ = [
    "EventFitResult",
    "FitService",
]
