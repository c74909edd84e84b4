"""Pytest configuration and shared fixtures for tile estimate tests."""

from __future__ import annotations

import math
from typing import TYPE_CHECKING, Any

import pytest

if TYPE_CHECKING:
    from tileplan.application.commands import EstimateFloorCommand, EstimateSurfaceCommand


def pytest_configure(config: pytest.Config) -> None:
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "integration: tests running the full estimate pipeline")
    config.addinivalue_line("markers", "slow: tests that take a long time to run")


# =============================================================================
# Shared fixtures for command creation
# =============================================================================


@pytest.fixture(autouse=True)
def fresh_factory():
    """Give every test its own default ServiceFactory and cache."""
    from tileplan.application.factory import reset_factory

    reset_factory()
    yield
    reset_factory()


@pytest.fixture
def surface_command() -> "EstimateSurfaceCommand":
    """Create an EstimateSurfaceCommand using the factory."""
    from tileplan.application.factory import get_factory

    return get_factory().create_surface_command()


@pytest.fixture
def floor_command() -> "EstimateFloorCommand":
    """Create an EstimateFloorCommand using the factory."""
    from tileplan.application.factory import get_factory

    return get_factory().create_floor_command()


# =============================================================================
# Configuration documents
# =============================================================================


# Side of a square that a 45 degree pattern of 50 cm tiles fills with
# whole diamonds and half diamonds only.
DIAGONAL_SIDE = 4 * 50 * math.sqrt(2)


@pytest.fixture
def exact_grid_surface() -> dict[str, Any]:
    """100 x 100 surface covered by four 50 x 50 tiles."""
    return {
        "id": "exact",
        "width": 100,
        "height": 100,
        "tile": {"width": 50, "height": 50, "shape": "square"},
        "grout": {"width": 0},
        "pricing": {"price_per_m2": 40, "pack_m2": 1.0, "reserve_tiles": 0},
    }


@pytest.fixture
def diagonal_surface() -> dict[str, Any]:
    """Square surface tiled at 45 degrees with rotation and optimize on."""
    return {
        "id": "diagonal",
        "width": DIAGONAL_SIDE,
        "height": DIAGONAL_SIDE,
        "tile": {"width": 50, "height": 50, "shape": "square"},
        "grout": {"width": 0},
        "pattern": {"type": "grid", "rotation_deg": 45, "origin": "tl"},
        "waste": {"allow_rotate": True, "optimize_cuts": True, "kerf": 0.2},
    }


@pytest.fixture
def strip_surface() -> dict[str, Any]:
    """100 x 30 strip: two 50 x 30 cuts, each leaving a 20 x 50 offcut."""
    return {
        "id": "strip",
        "width": 100,
        "height": 30,
        "tile": {"width": 50, "height": 50},
        "grout": {"width": 0},
    }


@pytest.fixture
def narrow_surface() -> dict[str, Any]:
    """100 x 15 strip: two 50 x 15 cuts."""
    return {
        "id": "narrow",
        "width": 100,
        "height": 15,
        "tile": {"width": 50, "height": 50},
        "grout": {"width": 0},
    }
