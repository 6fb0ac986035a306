"""Console configuration and theme for chargefit UI.

This module provides the central console instance and theme used throughout
the application for consistent styling.
"""

from rich.console import Console
from rich.theme import Theme

from chargefit import __version__ as _PKG_VERSION

# Define custom theme for consistent colors
CHARGEFIT_THEME = Theme(
    {
        # --- Semantic Status ---
        "success": "bold green",
        "warning": "bold yellow",
        "error": "bold red",
        "info": "cyan",
        "neutral": "dim white",
        # --- UI Structure ---
        "header": "bold cyan",
        "subheader": "bold white",
        # --- Data & Values ---
        "key": "cyan",
        "value": "green",
        "metric": "bold green",
        "number": "green",
        "path": "blue underline",
        "code": "bold magenta",
        # --- Modifiers ---
        "dim": "dim",
        "emphasis": "bold",
    }
)

# Single console instance for entire application
console = Console(theme=CHARGEFIT_THEME)

VERSION = _PKG_VERSION

__all__ = [
    "CHARGEFIT_THEME",
    "VERSION",
    "console",
]
