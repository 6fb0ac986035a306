"""CLI command modules for chargefit.

Each module exports a command function decorated with the necessary Typer
annotations. The main app.py imports and registers these commands.
"""

from chargefit.cli.commands.fit import fit_command
from chargefit.cli.commands.init import init_command

__all__ = [
    "fit_command",
    "init_command",
]
