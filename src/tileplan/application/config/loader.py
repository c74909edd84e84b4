"""Loading tile plan configuration files.

Reads JSON from disk or from a dictionary and validates it against
:class:`TilePlanConfiguration`. Every failure is raised as a
:class:`ConfigError` carrying a category and JSON-path details.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from tileplan.application.config.schema import TilePlanConfiguration


class ConfigError(Exception):
    """Raised when a configuration cannot be loaded or validated.

    Attributes:
        message: Human readable summary.
        error_type: One of file_not_found, permission_denied,
            file_read_error, json_parse, validation.
        path: Source file, if any.
        details: Per-problem dictionaries (path/message/value or
            line/column/message).
    """

    def __init__(
        self,
        message: str,
        error_type: str = "unknown",
        path: Path | None = None,
        details: list[dict[str, Any]] | None = None,
    ) -> None:
        self.message = message
        self.error_type = error_type
        self.path = path
        self.details = details or []
        super().__init__(message)

    def __str__(self) -> str:
        return self.message


def _format_json_path(loc: tuple[str | int, ...]) -> str:
    """Render a pydantic location as ``floor.surfaces[0].tile.width``."""
    path = ""
    for segment in loc:
        if isinstance(segment, int):
            path += f"[{segment}]"
        else:
            path = f"{path}.{segment}" if path else str(segment)
    return path


def _validation_details(error: PydanticValidationError) -> list[dict[str, Any]]:
    return [
        {
            "path": _format_json_path(err["loc"]),
            "message": err["msg"],
            "value": err.get("input"),
            "error_type": err["type"],
        }
        for err in error.errors()
    ]


def _validation_message(details: list[dict[str, Any]]) -> str:
    lines = ["Configuration validation failed:"]
    for detail in details:
        where = detail["path"] or "<root>"
        lines.append(f"  - {where}: {detail['message']}")
    return "\n".join(lines)


def load_config_from_dict(data: dict[str, Any], path: Path | None = None) -> TilePlanConfiguration:
    """Validate an already parsed configuration.

    Raises:
        ConfigError: With ``error_type="validation"`` if the data does not
            match the schema.
    """
    try:
        return TilePlanConfiguration.model_validate(data)
    except PydanticValidationError as e:
        details = _validation_details(e)
        raise ConfigError(
            message=_validation_message(details),
            error_type="validation",
            path=path,
            details=details,
        ) from e


def load_config(path: Path) -> TilePlanConfiguration:
    """Load and validate a JSON configuration file.

    Args:
        path: Location of the JSON file.

    Returns:
        The validated configuration.

    Raises:
        ConfigError: If the file is missing, unreadable, not JSON, or
            fails validation.
    """
    if not path.exists():
        raise ConfigError(
            message=f"Config file not found: {path}",
            error_type="file_not_found",
            path=path,
        )

    try:
        content = path.read_text(encoding="utf-8")
    except PermissionError as e:
        raise ConfigError(
            message=f"Permission denied reading config file: {path}",
            error_type="permission_denied",
            path=path,
        ) from e
    except OSError as e:
        raise ConfigError(
            message=f"Error reading config file: {path}: {e}",
            error_type="file_read_error",
            path=path,
        ) from e

    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        raise ConfigError(
            message=f"Invalid JSON in {path} (line {e.lineno}, column {e.colno}): {e.msg}",
            error_type="json_parse",
            path=path,
            details=[{"line": e.lineno, "column": e.colno, "message": e.msg}],
        ) from e

    if not isinstance(data, dict):
        raise ConfigError(
            message=f"Config file {path} must contain a JSON object",
            error_type="validation",
            path=path,
        )

    return load_config_from_dict(data, path=path)
