"""Main Typer application for chargefit.

This module provides a thin orchestration layer that creates the main Typer
application and registers the commands from the commands/ subpackage.
"""

from typing import Annotated

import typer

from chargefit.cli.callbacks import version_callback
from chargefit.cli.commands import fit_command, init_command

# Create main application
app = typer.Typer(
    name="chargefit",
    help="chargefit - power-law Lorentzian fits of 2-D charge distributions",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-v",
            help="Show version and exit.",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """chargefit - robust power-law Lorentzian fitting of point-charge samples.

    Fits the row, the column and both diagonals through a charge center.
    """


# Register commands
app.command(name="fit")(fit_command)
app.command(name="init")(init_command)
