"""Surface, exclusion and pattern descriptions handed to the rasterizer."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from .value_objects import NominalTile, PolygonRings, Ring


class TileGenerationError(Exception):
    """Raised by a rasterizer that cannot produce placed tiles."""


class ExclusionKind(str, Enum):
    """Shapes that can be cut out of a surface."""

    RECT = "rect"
    CIRCLE = "circle"
    POLYGON = "polygon"


class PatternType(str, Enum):
    """Supported laying patterns."""

    GRID = "grid"
    RUNNING_BOND = "running_bond"


class OriginPreset(str, Enum):
    """Anchor point of the pattern on the surface."""

    TOP_LEFT = "tl"
    TOP_RIGHT = "tr"
    BOTTOM_LEFT = "bl"
    BOTTOM_RIGHT = "br"
    CENTER = "center"
    FREE = "free"


@dataclass(frozen=True)
class Exclusion:
    """An area of the surface that is not tiled.

    Rectangles use ``x, y, width, height``; circles use ``x, y`` as the
    centre and ``radius``; polygons use ``points``.
    """

    kind: ExclusionKind
    x: float = 0.0
    y: float = 0.0
    width: float = 0.0
    height: float = 0.0
    radius: float = 0.0
    points: Ring = ()


@dataclass(frozen=True)
class PatternSpec:
    """How tiles are laid out on a surface."""

    type: PatternType = PatternType.GRID
    bond_fraction: float = 0.5
    rotation_deg: float = 0.0
    offset_x: float = 0.0
    offset_y: float = 0.0
    origin: OriginPreset = OriginPreset.TOP_LEFT
    origin_x: float = 0.0
    origin_y: float = 0.0


@dataclass(frozen=True)
class SurfaceSpec:
    """A tileable surface with its tile and pattern.

    Attributes:
        id: Identity used for caching and reporting.
        width: Bounding width in cm.
        height: Bounding height in cm.
        tile: Nominal tile laid on the surface.
        grout: Joint width in cm.
        pattern: Laying pattern.
        exclusions: Cut-outs removed from the surface.
        boundary: Optional custom outline; defaults to the width x height
            rectangle anchored at the origin.
    """

    id: str
    width: float
    height: float
    tile: NominalTile
    grout: float = 0.0
    pattern: PatternSpec = field(default_factory=PatternSpec)
    exclusions: tuple[Exclusion, ...] = ()
    boundary: Ring = ()

    @property
    def outline(self) -> Ring:
        """Surface outline as a ring."""
        if self.boundary:
            return self.boundary
        w, h = self.width, self.height
        return ((0.0, 0.0), (w, 0.0), (w, h), (0.0, h))


@dataclass(frozen=True)
class NetArea:
    """Tileable part of a surface after exclusions.

    Attributes:
        polygons: Multipolygon of the tileable region.
        area: True area in cm².
    """

    polygons: tuple[PolygonRings, ...]
    area: float

    @property
    def is_empty(self) -> bool:
        """True when nothing is left to tile."""
        return not self.polygons or self.area <= 0
