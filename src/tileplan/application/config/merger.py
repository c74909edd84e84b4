"""Apply command line overrides on top of a loaded configuration."""

from __future__ import annotations

from typing import Any

from tileplan.application.config.schema import SurfaceConfigSchema, TilePlanConfiguration


def _override_surface(surface: SurfaceConfigSchema, overrides: dict[str, dict[str, Any]]) -> SurfaceConfigSchema:
    updates: dict[str, Any] = {}
    for section, values in overrides.items():
        if values:
            updates[section] = getattr(surface, section).model_copy(update=values)
    return surface.model_copy(update=updates) if updates else surface


def merge_config_with_cli(
    config: TilePlanConfiguration,
    allow_rotate: bool | None = None,
    optimize_cuts: bool | None = None,
    kerf: float | None = None,
    reserve_tiles: int | None = None,
) -> TilePlanConfiguration:
    """Return a copy of ``config`` with CLI values replacing file values.

    Options left as None keep the file value. Overrides apply to every
    surface of a floor.
    """
    waste = {
        key: value
        for key, value in (
            ("allow_rotate", allow_rotate),
            ("optimize_cuts", optimize_cuts),
            ("kerf", kerf),
        )
        if value is not None
    }
    pricing = {"reserve_tiles": reserve_tiles} if reserve_tiles is not None else {}
    overrides = {"waste": waste, "pricing": pricing}

    if config.surface is not None:
        return config.model_copy(update={"surface": _override_surface(config.surface, overrides)})

    assert config.floor is not None
    surfaces = [_override_surface(s, overrides) for s in config.floor.surfaces]
    return config.model_copy(update={"floor": config.floor.model_copy(update={"surfaces": surfaces})})
