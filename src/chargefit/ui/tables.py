"""UI tables for displaying structured data.

This module provides functions for creating and displaying Rich tables
with consistent styling across the application.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from rich import box
from rich.table import Table

from chargefit.core.results.fit_results import FitResult
from chargefit.ui.console import console

__all__ = [
    "create_table",
    "fit_results_table",
    "print_fit_results",
    "print_summary",
]


def create_table(title: str | None = None, show_header: bool = True) -> Table:
    """Create a standard table with consistent styling.

    Args:
        title: Optional table title
        show_header: Whether to show table header

    Returns
    -------
        Configured Table instance
    """
    return Table(
        title=title,
        title_style="header" if title else None,
        box=box.ROUNDED,
        show_header=show_header,
        header_style="bold cyan",
        border_style="dim",
    )


def print_summary(items: dict[str, Any], title: str = "Summary") -> None:
    """Print a standard two-column summary table.

    Args:
        items: Dictionary of key-value pairs to display
        title: Table title
    """
    table = create_table(title, show_header=False)
    table.add_column("Item", style="metric")
    table.add_column("Value", style="value")

    for key, value in items.items():
        table.add_row(key, str(value))

    console.print(table)


def _with_error(value: float, error: float) -> str:
    return f"{value:.4g} ± {error:.2g}"


def fit_results_table(results: Mapping[str, FitResult], title: str = "Fit Results") -> Table:
    """One row per fitted profile: parameters with 1-sigma errors and fit quality."""
    table = create_table(title)
    table.add_column("Profile", style="key")
    table.add_column("Status", justify="center")
    for header in ("A", "m", "gamma", "beta", "B"):
        table.add_column(header, style="number", justify="right")
    table.add_column("chi2_red", justify="right")
    table.add_column("dof", justify="right")
    table.add_column("errors", style="dim")

    for name, fit in results.items():
        if not fit.success:
            table.add_row(name, "[error]✗[/error]", *(["-"] * 8))
            continue
        table.add_row(
            name,
            "[success]✓[/success]",
            *(_with_error(v, e) for v, e in zip(fit.values, fit.errors, strict=True)),
            f"{fit.chi2_reduced:.3g}",
            str(fit.dof),
            fit.error_source,
        )
    return table


def print_fit_results(results: Mapping[str, FitResult], title: str = "Fit Results") -> None:
    """Print the fit results table."""
    console.print(fit_results_table(results, title))
