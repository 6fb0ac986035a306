"""UI and terminal output styling for chargefit.

Submodules:
- console: Theme and console instance
- logging: Session logging (file and rich console)
- messages: Status messages (success, error, warning, etc.)
- tables: Table display utilities
"""

from chargefit.ui.console import CHARGEFIT_THEME, VERSION, console
from chargefit.ui.logging import close_logging, log, setup_logging
from chargefit.ui.messages import error, info, show_header, show_version, success, warning
from chargefit.ui.tables import create_table, fit_results_table, print_fit_results, print_summary

__all__ = [
    "CHARGEFIT_THEME",
    "VERSION",
    "close_logging",
    "console",
    "create_table",
    "error",
    "fit_results_table",
    "info",
    "log",
    "print_fit_results",
    "print_summary",
    "setup_logging",
    "show_header",
    "show_version",
    "success",
    "warning",
]
