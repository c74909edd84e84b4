"""Validate command for checking configuration files.

Loads a JSON configuration, reports schema errors with their JSON paths and
lists advisories for settings that load fine but will fail or be ignored
when estimating.
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from tileplan.application.config import (
    ConfigError,
    ValidationResult,
    load_config,
    validate_config,
)


def validate_command(
    config_file: Annotated[
        Path,
        typer.Argument(help="Path to the JSON configuration file to validate"),
    ],
) -> None:
    """Validate a tile plan configuration file.

    Exit codes:
        0 - Configuration is valid with no warnings
        1 - Configuration has errors (cannot be estimated)
        2 - Configuration is valid but has warnings

    Example:
        tileplan validate bathroom.json
    """
    typer.echo(f"Validating {config_file}...")
    typer.echo()

    try:
        config = load_config(config_file)
    except ConfigError as e:
        _display_load_error(e)
        raise typer.Exit(code=1)

    result = validate_config(config)
    _display_validation_result(result)
    raise typer.Exit(code=result.exit_code)


def _display_load_error(error: ConfigError) -> None:
    typer.echo("Errors:", err=True)
    if error.error_type == "file_not_found":
        typer.echo(f"  File not found: {error.path}", err=True)
    elif error.error_type == "json_parse":
        typer.echo("  Invalid JSON syntax", err=True)
        for detail in error.details:
            line = detail.get("line", "?")
            column = detail.get("column", "?")
            typer.echo(f"    Line {line}, Column {column}: {detail.get('message', 'Unknown error')}", err=True)
    elif error.error_type == "validation":
        for detail in error.details:
            typer.echo(f"  {detail.get('path', 'unknown')}: {detail.get('message', 'Unknown error')}", err=True)
            value = detail.get("value")
            if value is not None:
                typer.echo(f"    Value: {value!r}", err=True)
    else:
        typer.echo(f"  {error.message}", err=True)

    typer.echo()
    typer.echo("Validation failed.", err=True)


def _display_validation_result(result: ValidationResult) -> None:
    if result.errors:
        typer.echo("Errors:", err=True)
        for issue in result.errors:
            typer.echo(f"  {issue.path}: {issue.message}", err=True)
        typer.echo()

    if result.warnings:
        typer.echo("Warnings:")
        for issue in result.warnings:
            typer.echo(f"  {issue.path}: {issue.message}")
        typer.echo()

    if result.errors:
        typer.echo("Validation failed.", err=True)
    elif result.warnings:
        typer.echo("Configuration is valid with warnings.")
    else:
        typer.echo("Configuration is valid.")
