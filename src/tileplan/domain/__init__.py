"""Domain layer: value objects and the tile consumption services."""

from .value_objects import (
    BoundingBox,
    NominalTile,
    OffcutProvenance,
    OffcutRect,
    PlacedTile,
    PolygonRings,
    Ring,
    TileShape,
    UsageSource,
)

__all__ = [
    "BoundingBox",
    "NominalTile",
    "OffcutProvenance",
    "OffcutRect",
    "PlacedTile",
    "PolygonRings",
    "Ring",
    "TileShape",
    "UsageSource",
]
