"""Fit command implementation."""

from __future__ import annotations

import logging
import pathlib  # noqa: TC003
from typing import Annotated

import typer

from chargefit.core.domain.config import ChargeFitConfig
from chargefit.core.shared.exceptions import ConfigError, DataIOError
from chargefit.core.shared.reporter import LoggingReporter
from chargefit.io.config import apply_env_overrides, load_config
from chargefit.io.points import load_points
from chargefit.services.fit import FitService
from chargefit.ui import (
    close_logging,
    error,
    info,
    log,
    print_fit_results,
    print_summary,
    setup_logging,
    show_header,
    success,
    warning,
)


def fit_command(
    points: Annotated[
        pathlib.Path,
        typer.Argument(
            help="Three-column text/CSV file of x, y, charge",
            dir_okay=False,
            resolve_path=True,
        ),
    ],
    center_x: Annotated[
        float,
        typer.Option("--center-x", "-x", help="Center estimate along x"),
    ] = 0.0,
    center_y: Annotated[
        float,
        typer.Option("--center-y", "-y", help="Center estimate along y"),
    ] = 0.0,
    pitch: Annotated[
        float,
        typer.Option("--pitch", "-p", help="Pixel spacing (must be positive)"),
    ] = 1.0,
    config: Annotated[
        pathlib.Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Path to TOML configuration file",
            exists=True,
            dir_okay=False,
            resolve_path=True,
        ),
    ] = None,
    diagonals: Annotated[
        bool,
        typer.Option("--diagonals/--no-diagonals", help="Also fit both diagonals"),
    ] = True,
    filter_outliers: Annotated[
        bool | None,
        typer.Option(
            "--filter-outliers/--no-filter-outliers",
            help="Try MAD-filtered datasets (default: from config)",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Show fit diagnostics"),
    ] = False,
    log_file: Annotated[
        pathlib.Path | None,
        typer.Option("--log-file", help="Write diagnostics to a .log or .json file"),
    ] = None,
) -> None:
    """Fit power-law Lorentzians to the charge samples of one event.

    Examples
    --------
    Basic usage:
        $ chargefit fit points.csv --center-x 0.1 --center-y -0.2 --pitch 0.5

    Using a configuration file:
        $ chargefit fit points.txt --config chargefit.toml --no-diagonals
    """
    if pitch <= 0:
        error(f"Pixel spacing must be positive, got {pitch:g}")
        raise typer.Exit(1)

    try:
        fit_config = load_config(config) if config is not None else ChargeFitConfig()
        fit_config = apply_env_overrides(fit_config)
    except ConfigError as exc:
        error(str(exc))
        raise typer.Exit(1) from exc

    updates: dict[str, object] = {}
    if filter_outliers is not None:
        updates["outlier_filtering"] = filter_outliers
    if verbose:
        updates["verbose"] = True
    fitting = fit_config.fitting.model_copy(update=updates)

    logger = setup_logging(
        log_file or fit_config.logging.file,
        verbose=fitting.verbose,
        level=getattr(logging, fit_config.logging.level.upper()),
    )
    try:
        try:
            x, y, charges = load_points(points)
        except DataIOError as exc:
            error(str(exc))
            raise typer.Exit(1) from exc

        log(f"Loaded {x.size} points from {points}", level="debug")
        log(f"Fit configuration: {fitting.model_dump()}", level="debug")
        show_header(f"Fitting {points.name}")
        info(f"{x.size} points, center ({center_x:g}, {center_y:g}), pitch {pitch:g}")

        reporter = LoggingReporter("chargefit.service") if logger is not None else None
        service = FitService(fitting, reporter=reporter)
        result = service.fit_event(x, y, charges, center_x, center_y, pitch, diagonals=diagonals)

        print_fit_results({"x": result.axes.x, "y": result.axes.y}, title="Row / Column")
        if result.diagonals is not None:
            print_fit_results(result.diagonals.fits(), title="Diagonals")
        print_summary(
            {
                "Points": result.n_points,
                "Row key": result.axes.row_key,
                "Column key": result.axes.column_key,
                "X charge uncertainty": f"{result.axes.x_charge_uncertainty:.4g}",
                "Y charge uncertainty": f"{result.axes.y_charge_uncertainty:.4g}",
            }
        )
        if result.success:
            success("All fits succeeded")
        else:
            warning("Some fits failed")
    finally:
        close_logging()
