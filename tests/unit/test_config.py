"""Tests for configuration schemas, loading, conversion and CLI overrides."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from tileplan.application.config import (
    ConfigError,
    PatternConfigSchema,
    SurfaceConfigSchema,
    config_to_analysis,
    config_to_consumption_options,
    config_to_pricing,
    config_to_surface,
    load_config,
    load_config_from_dict,
    merge_config_with_cli,
    validate_config,
)
from tileplan.domain.surface import ExclusionKind, OriginPreset, PatternType
from tileplan.domain.value_objects import TileShape


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def minimal_surface() -> dict[str, Any]:
    """Smallest valid surface entry."""
    return {"id": "bath", "width": 200, "height": 150}


@pytest.fixture
def floor_config(minimal_surface: dict[str, Any]) -> dict[str, Any]:
    """Floor with two surfaces and a shared pattern."""
    return {
        "schema_version": "1.1",
        "floor": {
            "id": "ground",
            "pattern": {"type": "running_bond", "bond_fraction": 0.5},
            "share_offcuts": True,
            "surfaces": [
                minimal_surface,
                {"id": "hall", "width": 300, "height": 100, "pattern": {"rotation_deg": 45}},
            ],
        },
    }


# =============================================================================
# Schema
# =============================================================================


class TestSchemaDefaults:
    """Tests for default values."""

    def test_surface_defaults(self, minimal_surface: dict[str, Any]) -> None:
        config = load_config_from_dict({"surface": minimal_surface})
        surface = config.surface

        assert config.schema_version == "1.1"
        assert surface.tile.width == 40.0
        assert surface.tile.height == 20.0
        assert surface.grout.width == 0.2
        assert surface.waste.allow_rotate is True
        assert surface.waste.optimize_cuts is False
        assert surface.waste.kerf == 0.2
        assert surface.pricing.pack_m2 == 1.44
        assert surface.pricing.price_per_m2 == 39.9
        assert surface.pattern is None

    def test_floor_parsed(self, floor_config: dict[str, Any]) -> None:
        config = load_config_from_dict(floor_config)

        assert config.floor.share_offcuts is True
        assert config.floor.pattern.type == PatternType.RUNNING_BOND
        assert [s.id for s in config.floor.surfaces] == ["bath", "hall"]


class TestSchemaValidation:
    """Tests for rejected documents."""

    def test_surface_and_floor_exclusive(self, minimal_surface: dict[str, Any]) -> None:
        with pytest.raises(ConfigError) as exc_info:
            load_config_from_dict({"surface": minimal_surface, "floor": {"surfaces": []}})

        assert exc_info.value.error_type == "validation"

    def test_neither_surface_nor_floor(self) -> None:
        with pytest.raises(ConfigError):
            load_config_from_dict({})

    def test_unsupported_version(self, minimal_surface: dict[str, Any]) -> None:
        with pytest.raises(ConfigError, match="schema_version"):
            load_config_from_dict({"schema_version": "2.0", "surface": minimal_surface})

    def test_unknown_field_rejected(self, minimal_surface: dict[str, Any]) -> None:
        minimal_surface["colour"] = "grey"

        with pytest.raises(ConfigError) as exc_info:
            load_config_from_dict({"surface": minimal_surface})

        assert exc_info.value.details[0]["path"] == "surface.colour"

    def test_error_path_into_list(self, floor_config: dict[str, Any]) -> None:
        floor_config["floor"]["surfaces"][1]["width"] = -5

        with pytest.raises(ConfigError) as exc_info:
            load_config_from_dict(floor_config)

        paths = [d["path"] for d in exc_info.value.details]
        assert "floor.surfaces[1].width" in paths

    def test_duplicate_surface_ids(self, floor_config: dict[str, Any]) -> None:
        floor_config["floor"]["surfaces"][1]["id"] = "bath"

        with pytest.raises(ConfigError, match="bath"):
            load_config_from_dict(floor_config)

    def test_kerf_range(self, minimal_surface: dict[str, Any]) -> None:
        minimal_surface["waste"] = {"kerf": 3.0}

        with pytest.raises(ConfigError):
            load_config_from_dict({"surface": minimal_surface})

    def test_circle_needs_radius(self, minimal_surface: dict[str, Any]) -> None:
        minimal_surface["exclusions"] = [{"type": "circle", "x": 10, "y": 10}]

        with pytest.raises(ConfigError):
            load_config_from_dict({"surface": minimal_surface})

    def test_tile_dimensions_not_range_checked(self, minimal_surface: dict[str, Any]) -> None:
        minimal_surface["tile"] = {"width": 0, "height": 20}
        minimal_surface["grout"] = {"width": -1}

        config = load_config_from_dict({"surface": minimal_surface})

        assert config.surface.tile.width == 0


# =============================================================================
# Loader
# =============================================================================


class TestLoadConfig:
    """Tests for loading configuration files."""

    def test_load_valid_file(self, tmp_path: Path, minimal_surface: dict[str, Any]) -> None:
        path = tmp_path / "bath.json"
        path.write_text(json.dumps({"surface": minimal_surface}))

        assert load_config(path).surface.id == "bath"

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError) as exc_info:
            load_config(tmp_path / "missing.json")

        assert exc_info.value.error_type == "file_not_found"

    def test_invalid_json(self, tmp_path: Path) -> None:
        path = tmp_path / "broken.json"
        path.write_text('{"surface": {"id": "x",\n  "width": }')

        with pytest.raises(ConfigError) as exc_info:
            load_config(path)

        assert exc_info.value.error_type == "json_parse"
        assert exc_info.value.details[0]["line"] == 2

    def test_validation_error_keeps_path(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"surface": {"id": "x", "width": 0, "height": 10}}))

        with pytest.raises(ConfigError) as exc_info:
            load_config(path)

        assert exc_info.value.error_type == "validation"
        assert exc_info.value.path == path


# =============================================================================
# Adapter
# =============================================================================


class TestAdapter:
    """Tests for conversion into domain objects."""

    def test_surface_conversion(self) -> None:
        surface = SurfaceConfigSchema.model_validate(
            {
                "id": "s",
                "width": 300,
                "height": 200,
                "tile": {"width": 30, "height": 30, "shape": "square"},
                "grout": {"width": 0.3},
                "exclusions": [
                    {"type": "rect", "x": 0, "y": 0, "width": 50, "height": 50},
                    {"type": "polygon", "points": [[0, 0], [10, 0], [0, 10]]},
                ],
            }
        )

        spec = config_to_surface(surface)

        assert spec.tile.shape == TileShape.SQUARE
        assert spec.grout == 0.3
        assert [e.kind for e in spec.exclusions] == [ExclusionKind.RECT, ExclusionKind.POLYGON]
        assert spec.outline == ((0.0, 0.0), (300.0, 0.0), (300.0, 200.0), (0.0, 200.0))

    def test_inherited_pattern(self) -> None:
        surface = SurfaceConfigSchema(id="s", width=100, height=100)
        floor_pattern = PatternConfigSchema(rotation_deg=45, origin=OriginPreset.CENTER)

        spec = config_to_surface(surface, floor_pattern)

        assert spec.pattern.rotation_deg == 45
        assert spec.pattern.origin == OriginPreset.CENTER

    def test_own_pattern_wins(self) -> None:
        surface = SurfaceConfigSchema(id="s", width=100, height=100, pattern={"rotation_deg": 10})

        spec = config_to_surface(surface, PatternConfigSchema(rotation_deg=45))

        assert spec.pattern.rotation_deg == 10

    def test_options_and_thresholds(self) -> None:
        surface = SurfaceConfigSchema.model_validate(
            {
                "id": "s",
                "width": 100,
                "height": 100,
                "waste": {"allow_rotate": False, "optimize_cuts": True, "kerf": 0.3},
                "analysis": {"pair_tolerance": 2.0, "triangular_min": 0.4},
                "pricing": {"price_per_m2": 20, "pack_m2": 0, "reserve_tiles": 3},
            }
        )

        options = config_to_consumption_options(surface.waste)
        analysis, pairing = config_to_analysis(surface.analysis)
        pricing = config_to_pricing(surface.pricing)

        assert options.effective_kerf == 0.3
        assert options.allow_rotate is False
        assert analysis.triangular_min == 0.4
        assert pairing.tolerance == 2.0
        assert pricing.reserve_count == 3


# =============================================================================
# Merger and advisories
# =============================================================================


class TestMergeConfigWithCli:
    """Tests for CLI overrides."""

    def test_none_keeps_file_values(self, minimal_surface: dict[str, Any]) -> None:
        config = load_config_from_dict({"surface": minimal_surface})

        assert merge_config_with_cli(config) == config

    def test_overrides_surface(self, minimal_surface: dict[str, Any]) -> None:
        config = load_config_from_dict({"surface": minimal_surface})

        merged = merge_config_with_cli(config, allow_rotate=False, optimize_cuts=True, kerf=0.5, reserve_tiles=4)

        assert merged.surface.waste.allow_rotate is False
        assert merged.surface.waste.optimize_cuts is True
        assert merged.surface.waste.kerf == 0.5
        assert merged.surface.pricing.reserve_tiles == 4
        assert config.surface.waste.optimize_cuts is False

    def test_overrides_every_floor_surface(self, floor_config: dict[str, Any]) -> None:
        config = load_config_from_dict(floor_config)

        merged = merge_config_with_cli(config, optimize_cuts=True)

        assert all(s.waste.optimize_cuts for s in merged.floor.surfaces)


class TestValidateConfig:
    """Tests for advisory checks."""

    def test_clean_config(self, minimal_surface: dict[str, Any]) -> None:
        result = validate_config(load_config_from_dict({"surface": minimal_surface}))

        assert result.exit_code == 0
        assert result.issues == []

    def test_default_kerf_is_not_reported(self, minimal_surface: dict[str, Any]) -> None:
        minimal_surface["waste"] = {"allow_rotate": False}

        result = validate_config(load_config_from_dict({"surface": minimal_surface}))

        assert result.warnings == []

    def test_kerf_without_optimize_warns(self, minimal_surface: dict[str, Any]) -> None:
        minimal_surface["waste"] = {"kerf": 0.3}

        result = validate_config(load_config_from_dict({"surface": minimal_surface}))

        assert result.exit_code == 2
        assert result.warnings[0].path == "surface.waste.kerf"

    def test_invalid_tile_is_error(self, floor_config: dict[str, Any]) -> None:
        floor_config["floor"]["surfaces"][1]["tile"] = {"width": 0, "height": 10, "shape": "hexagon"}

        result = validate_config(load_config_from_dict(floor_config))

        assert result.exit_code == 1
        assert {e.path for e in result.errors} == {"floor.surfaces[1].tile", "floor.surfaces[1].tile.shape"}

    def test_non_finite_grout_is_error(self, minimal_surface: dict[str, Any]) -> None:
        minimal_surface["grout"] = {"width": float("nan")}

        result = validate_config(load_config_from_dict({"surface": minimal_surface}))

        assert result.exit_code == 1
        assert result.errors[0].path == "surface.grout.width"
