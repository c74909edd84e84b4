"""Typer CLI for tile purchase and waste estimates."""

import logging
from pathlib import Path
from typing import Annotated

import typer

from tileplan.application import get_factory
from tileplan.application.config import (
    ConfigError,
    OutputFormat,
    TilePlanConfiguration,
    load_config,
    merge_config_with_cli,
)
from tileplan.cli.commands import validate_command
from tileplan.infrastructure import (
    EstimateReportFormatter,
    FloorReportFormatter,
    JsonExporter,
    UsageFormatter,
)

app = typer.Typer(
    name="tileplan",
    help="Estimate tiles to purchase, offcut reuse and waste for tiled surfaces.",
)

# Register validate command
app.command(name="validate")(validate_command)


@app.callback()
def main(
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Log every placement decision"),
    ] = False,
) -> None:
    """Tile purchase and waste estimator."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _load(
    config_file: Path,
    allow_rotate: bool | None,
    optimize: bool | None,
    kerf: float | None,
    reserve: int | None,
) -> TilePlanConfiguration:
    try:
        config = load_config(config_file)
    except ConfigError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)
    return merge_config_with_cli(
        config,
        allow_rotate=allow_rotate,
        optimize_cuts=optimize,
        kerf=kerf,
        reserve_tiles=reserve,
    )


@app.command()
def estimate(
    config_file: Annotated[
        Path,
        typer.Argument(help="Path to the JSON configuration file"),
    ],
    output_format: Annotated[
        OutputFormat,
        typer.Option("--format", "-f", help="Output format: text or json"),
    ] = OutputFormat.TEXT,
    no_rotate: Annotated[
        bool,
        typer.Option("--no-rotate", help="Do not rotate offcuts when matching cuts"),
    ] = False,
    optimize: Annotated[
        bool | None,
        typer.Option("--optimize/--no-optimize", help="Track guillotine remainders of cut tiles"),
    ] = None,
    kerf: Annotated[
        float | None,
        typer.Option("--kerf", min=0.0, max=2.0, help="Saw kerf in cm (used with --optimize)"),
    ] = None,
    reserve: Annotated[
        int | None,
        typer.Option("--reserve", min=0, help="Extra tiles to buy on top of the estimate"),
    ] = None,
    details: Annotated[
        bool,
        typer.Option("--details", help="List the decision made for every cut tile"),
    ] = False,
) -> None:
    """Estimate a single surface.

    A floor configuration is accepted too; its surfaces are then
    estimated independently, as with ``tileplan floor`` without sharing.
    """
    config = _load(config_file, False if no_rotate else None, optimize, kerf, reserve)
    if config.floor is not None:
        _run_floor(config, share_offcuts=False, output_format=output_format)
        return

    output = get_factory().create_surface_command().execute(config.surface)

    if output_format == OutputFormat.JSON:
        typer.echo(JsonExporter(include_usage=details).export(output))
    else:
        typer.echo(EstimateReportFormatter().format(output))
        if details and output.estimate is not None:
            typer.echo()
            typer.echo(UsageFormatter().format(output.estimate.consumption.usage))

    if not output.is_valid:
        raise typer.Exit(code=1)


@app.command()
def floor(
    config_file: Annotated[
        Path,
        typer.Argument(help="Path to a JSON configuration with a floor entry"),
    ],
    share_offcuts: Annotated[
        bool | None,
        typer.Option("--share-offcuts/--no-share-offcuts", help="Carry offcuts from surface to surface"),
    ] = None,
    output_format: Annotated[
        OutputFormat,
        typer.Option("--format", "-f", help="Output format: text or json"),
    ] = OutputFormat.TEXT,
    no_rotate: Annotated[
        bool,
        typer.Option("--no-rotate", help="Do not rotate offcuts when matching cuts"),
    ] = False,
    optimize: Annotated[
        bool | None,
        typer.Option("--optimize/--no-optimize", help="Track guillotine remainders of cut tiles"),
    ] = None,
    reserve: Annotated[
        int | None,
        typer.Option("--reserve", min=0, help="Extra tiles per surface"),
    ] = None,
) -> None:
    """Estimate every surface of a floor in list order."""
    config = _load(config_file, False if no_rotate else None, optimize, None, reserve)
    if config.floor is None:
        typer.echo("Error: configuration has no 'floor' entry", err=True)
        raise typer.Exit(code=1)
    _run_floor(config, share_offcuts=share_offcuts, output_format=output_format)


def _run_floor(
    config: TilePlanConfiguration,
    share_offcuts: bool | None,
    output_format: OutputFormat,
) -> None:
    output = get_factory().create_floor_command().execute(config.floor, share_offcuts=share_offcuts)

    if output_format == OutputFormat.JSON:
        typer.echo(JsonExporter(include_usage=False).export_floor(output))
    else:
        typer.echo(FloorReportFormatter().format(output))
        for failed in output.failures:
            if failed.failure is not None:
                typer.echo(f"Error: {failed.surface_id}: {failed.failure.message}", err=True)

    if not output.surfaces or len(output.failures) == len(output.surfaces):
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
