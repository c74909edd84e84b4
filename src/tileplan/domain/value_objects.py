"""Value objects for the tile estimation domain.

All lengths are in centimetres and all areas in square centimetres unless
a name says otherwise.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum

# A closed ring of (x, y) vertices. The first vertex may or may not be
# repeated at the end; area and bbox helpers accept both.
Ring = tuple[tuple[float, float], ...]

# One polygon is an outer ring followed by zero or more hole rings.
PolygonRings = tuple[Ring, ...]


class TileShape(str, Enum):
    """Nominal tile outline."""

    RECT = "rect"
    SQUARE = "square"
    HEXAGON = "hexagon"
    RHOMBUS = "rhombus"


class OffcutProvenance(str, Enum):
    """Where an offcut came from."""

    TILE = "tile"
    OFFCUT = "offcut"


class UsageSource(str, Enum):
    """How a placed tile was satisfied.

    - NEW: a new physical tile was consumed
    - POOL_OFFCUT: cut from an offcut in the general inventory
    - PAIRED_OFFCUT: the second half of a complementary pair
    - DEGENERATE: clipping artifact, no material demand
    """

    NEW = "new"
    POOL_OFFCUT = "offcut"
    PAIRED_OFFCUT = "paired_offcut"
    DEGENERATE = "degenerate"


@dataclass(frozen=True)
class NominalTile:
    """A tile as sold.

    For hexagons ``width`` is the distance across flats. Rhombus tiles use
    ``width`` and ``height`` as the two diagonals.
    """

    width: float
    height: float
    shape: TileShape = TileShape.RECT

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError("Tile dimensions must be positive")

    @property
    def area(self) -> float:
        """Area of one physical tile in cm²."""
        if self.shape == TileShape.HEXAGON:
            radius = self.width / math.sqrt(3)
            return 3 * math.sqrt(3) / 2 * radius * radius
        if self.shape == TileShape.RHOMBUS:
            return self.width * self.height / 2
        return self.width * self.height

    @property
    def longest_side(self) -> float:
        """Longer of the two nominal dimensions."""
        return max(self.width, self.height)


@dataclass(frozen=True)
class BoundingBox:
    """Axis-aligned bounding rectangle."""

    x: float
    y: float
    width: float
    height: float

    @property
    def area(self) -> float:
        """Bounding box area, zero for degenerate boxes."""
        return max(0.0, self.width) * max(0.0, self.height)

    @property
    def is_empty(self) -> bool:
        """True when the box has no extent on either axis."""
        return not (self.width > 0 and self.height > 0)


@dataclass(frozen=True)
class OffcutRect:
    """A reusable rectangular remnant of tile material.

    Attributes:
        id: Identity assigned by the inventory (``o1``, ``o2``...).
        width: Width in cm.
        height: Height in cm.
        provenance: Whether it was cut from a whole tile or split from
            another offcut.
        half_tile: True for remnants that are one half of a tile, such as
            the leftover of a diagonal cut.
    """

    id: str
    width: float
    height: float
    provenance: OffcutProvenance = OffcutProvenance.TILE
    half_tile: bool = False

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError("Offcut dimensions must be positive")

    @property
    def area(self) -> float:
        """Area of the offcut in cm²."""
        return self.width * self.height


@dataclass(frozen=True)
class PlacedTile:
    """One tile position produced by the rasterizer.

    A full tile occupies a whole nominal tile. A cut tile carries the
    clipped outline as a multipolygon: a tuple of polygons, each being an
    outer ring followed by hole rings.
    """

    is_full: bool
    polygons: tuple[PolygonRings, ...] = ()

    @classmethod
    def full(cls, polygons: tuple[PolygonRings, ...] = ()) -> "PlacedTile":
        """A whole, uncut tile."""
        return cls(is_full=True, polygons=polygons)

    @classmethod
    def cut(cls, ring: Ring) -> "PlacedTile":
        """A cut tile bounded by a single ring."""
        return cls(is_full=False, polygons=((tuple(ring),),))

    @property
    def vertices(self) -> list[tuple[float, float]]:
        """All vertices of all rings, in order."""
        return [pt for polygon in self.polygons for ring in polygon for pt in ring]
