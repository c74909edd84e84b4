"""Advisory checks on a loaded configuration.

Schema validation only guarantees a well-formed document. These checks
report settings that will make an estimate fail or that are silently
ignored.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field

from tileplan.application.config.schema import SurfaceConfigSchema, TilePlanConfiguration
from tileplan.domain.value_objects import TileShape


@dataclass
class ValidationIssue:
    """One advisory about a configuration entry."""

    path: str
    message: str
    is_error: bool = False


@dataclass
class ValidationResult:
    """Collected advisories with the CLI exit code they imply."""

    issues: list[ValidationIssue] = field(default_factory=list)

    @property
    def errors(self) -> list[ValidationIssue]:
        return [i for i in self.issues if i.is_error]

    @property
    def warnings(self) -> list[ValidationIssue]:
        return [i for i in self.issues if not i.is_error]

    @property
    def is_valid(self) -> bool:
        return not self.errors

    @property
    def exit_code(self) -> int:
        """0 when clean, 1 with errors, 2 with warnings only."""
        if self.errors:
            return 1
        if self.warnings:
            return 2
        return 0


def _check_surface(surface: SurfaceConfigSchema, path: str) -> list[ValidationIssue]:
    issues: list[ValidationIssue] = []
    tile = surface.tile
    if not (math.isfinite(tile.width) and math.isfinite(tile.height) and tile.width > 0 and tile.height > 0):
        issues.append(
            ValidationIssue(f"{path}.tile", f"Tile dimensions must be finite and positive, got {tile.width} x {tile.height}", True)
        )
    if not (math.isfinite(surface.grout.width) and surface.grout.width >= 0):
        issues.append(ValidationIssue(f"{path}.grout.width", "Grout width must be a finite non-negative number", True))
    if tile.shape not in (TileShape.RECT, TileShape.SQUARE):
        issues.append(
            ValidationIssue(f"{path}.tile.shape", f"Layout of '{tile.shape.value}' tiles is not supported", True)
        )
    if tile.shape == TileShape.SQUARE and tile.width != tile.height:
        issues.append(ValidationIssue(f"{path}.tile", "Square tile with different width and height"))
    if tile.width > surface.width and tile.height > surface.height:
        issues.append(ValidationIssue(f"{path}.tile", "Tile is larger than the surface; every tile will be cut"))
    # the default kerf is only reported when set in the file
    waste = surface.waste
    if "kerf" in waste.model_fields_set and waste.kerf > 0 and not waste.optimize_cuts:
        issues.append(ValidationIssue(f"{path}.waste.kerf", "Kerf is ignored unless optimize_cuts is enabled"))
    return issues


def validate_config(config: TilePlanConfiguration) -> ValidationResult:
    """Check a loaded configuration for settings that will not estimate cleanly."""
    result = ValidationResult()
    if config.surface is not None:
        result.issues.extend(_check_surface(config.surface, "surface"))
    if config.floor is not None:
        if not config.floor.surfaces:
            result.issues.append(ValidationIssue("floor.surfaces", "Floor has no surfaces"))
        for i, surface in enumerate(config.floor.surfaces):
            result.issues.extend(_check_surface(surface, f"floor.surfaces[{i}]"))
    return result
