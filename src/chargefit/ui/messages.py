"""UI messages and status indicators."""

from __future__ import annotations

from chargefit.ui.console import VERSION, console
from chargefit.ui.logging import log

__all__ = [
    "error",
    "info",
    "show_header",
    "show_version",
    "success",
    "warning",
]


def show_header(text: str) -> None:
    """Display a prominent section header."""
    console.print("[header]" + "━" * 60 + "[/header]")
    console.print(f"[header]  {text}[/header]")
    console.print("[header]" + "━" * 60 + "[/header]")


def show_version() -> None:
    """Show version information (for --version flag)."""
    console.print(f"[header]chargefit[/header] [dim]v{VERSION}[/dim]")


def success(message: str, indent: int = 0, do_log: bool = True) -> None:
    """Display a success message."""
    spaces = "  " * indent
    console.print(f"{spaces}[success]✓[/success] {message}")
    if do_log:
        log(message)


def warning(message: str, indent: int = 0, do_log: bool = True) -> None:
    """Display a warning message."""
    spaces = "  " * indent
    console.print(f"{spaces}[warning]⚠[/warning]  {message}")
    if do_log:
        log(message, level="warning")


def error(message: str, indent: int = 0, do_log: bool = True) -> None:
    """Display an error message."""
    spaces = "  " * indent
    console.print(f"{spaces}[error]✗[/error] {message}")
    if do_log:
        log(message, level="error")


def info(message: str, indent: int = 0, do_log: bool = True) -> None:
    """Display an info message."""
    spaces = "  " * indent
    console.print(f"{spaces}[dim]▸[/dim] {message}")
    if do_log:
        log(message)
