"""Reference tile rasterizer built on shapely.

Lays a grid or running-bond pattern of rectangular tiles over a surface,
optionally rotated about an origin, and clips every tile against the net
tileable area. Areas are measured with the same shoelace helper the cut
analyzer uses.
"""

from __future__ import annotations

import logging
import math

from shapely.errors import GEOSException
from shapely.geometry import GeometryCollection, MultiPolygon, Point, Polygon
from shapely.geometry.base import BaseGeometry
from shapely.ops import unary_union

from tileplan.domain.services.geometry import multi_polygon_area
from tileplan.domain.surface import (
    Exclusion,
    ExclusionKind,
    NetArea,
    OriginPreset,
    PatternType,
    SurfaceSpec,
    TileGenerationError,
)
from tileplan.domain.value_objects import PlacedTile, PolygonRings, TileShape

logger = logging.getLogger(__name__)

# Upper bound on candidate tile positions for one surface.
MAX_TILES = 12_000

# A clipped tile keeping at least this share of the nominal area is full.
FULL_TILE_RATIO = 0.999

# Segments used to approximate circular exclusions.
CIRCLE_SEGMENTS = 48

# Extra rows and columns laid around the surface bounds.
MARGIN_STEPS = 3


def _rotate(x: float, y: float, ox: float, oy: float, rad: float) -> tuple[float, float]:
    dx, dy = x - ox, y - oy
    cos, sin = math.cos(rad), math.sin(rad)
    return ox + dx * cos - dy * sin, oy + dx * sin + dy * cos


def _polygons_of(geom: BaseGeometry) -> list[Polygon]:
    """Extract the areal parts of a clipping result, dropping lines and points."""
    if geom.is_empty:
        return []
    if isinstance(geom, Polygon):
        return [geom]
    if isinstance(geom, (MultiPolygon, GeometryCollection)):
        parts: list[Polygon] = []
        for part in geom.geoms:
            parts.extend(_polygons_of(part))
        return parts
    return []


def _rings_of(polygon: Polygon) -> PolygonRings:
    rings = [tuple(polygon.exterior.coords)]
    rings.extend(tuple(interior.coords) for interior in polygon.interiors)
    return tuple(tuple((float(x), float(y)) for x, y in ring) for ring in rings)


def _exclusion_geometry(exclusion: Exclusion) -> BaseGeometry | None:
    if exclusion.kind == ExclusionKind.RECT:
        if exclusion.width <= 0 or exclusion.height <= 0:
            return None
        x1, y1 = exclusion.x, exclusion.y
        x2, y2 = x1 + exclusion.width, y1 + exclusion.height
        return Polygon([(x1, y1), (x2, y1), (x2, y2), (x1, y2)])
    if exclusion.kind == ExclusionKind.CIRCLE:
        if exclusion.radius <= 0:
            return None
        # quad_segs is per quarter circle
        return Point(exclusion.x, exclusion.y).buffer(
            exclusion.radius, quad_segs=CIRCLE_SEGMENTS // 4
        )
    if len(exclusion.points) >= 3:
        return Polygon(exclusion.points).buffer(0)
    return None


def _detect_bond_period(fraction: float) -> int:
    """Rows after which a running bond repeats, 0 if it does not."""
    if not fraction > 0:
        return 0
    inverse = 1 / fraction
    rounded = round(inverse)
    if abs(inverse - rounded) < 1e-6 and 2 <= rounded <= 12:
        return rounded
    return 0


class ShapelyTileRasterizer:
    """Tile rasterizer for rectangular tiles.

    Attributes:
        max_tiles: Guard against runaway layouts on tiny tiles.
    """

    def __init__(self, max_tiles: int = MAX_TILES) -> None:
        self.max_tiles = max_tiles

    def _net_geometry(self, surface: SurfaceSpec) -> BaseGeometry:
        outline = Polygon(surface.outline)
        if not outline.is_valid:
            outline = outline.buffer(0)

        cutouts = [g for g in (_exclusion_geometry(e) for e in surface.exclusions) if g is not None]
        if not cutouts:
            return outline
        try:
            return outline.difference(unary_union(cutouts))
        except GEOSException as exc:
            raise TileGenerationError(f"Exclusion clipping failed: {exc}") from exc

    def available_area(self, surface: SurfaceSpec) -> NetArea:
        """Surface outline minus the union of its exclusions."""
        polygons = tuple(_rings_of(p) for p in _polygons_of(self._net_geometry(surface)))
        return NetArea(polygons=polygons, area=multi_polygon_area(polygons))

    def _origin(self, surface: SurfaceSpec) -> tuple[float, float]:
        pattern = surface.pattern
        w, h = surface.width, surface.height
        presets = {
            OriginPreset.TOP_LEFT: (0.0, 0.0),
            OriginPreset.TOP_RIGHT: (w, 0.0),
            OriginPreset.BOTTOM_LEFT: (0.0, h),
            OriginPreset.BOTTOM_RIGHT: (w, h),
            OriginPreset.CENTER: (w / 2, h / 2),
        }
        return presets.get(pattern.origin, (pattern.origin_x, pattern.origin_y))

    def place_tiles(self, surface: SurfaceSpec, net_area: NetArea) -> list[PlacedTile]:
        """Lay the pattern and clip each tile to the net area.

        Raises:
            TileGenerationError: For non-rectangular tiles, too many tile
                positions, or a clipping failure.
        """
        tile = surface.tile
        if tile.shape not in (TileShape.RECT, TileShape.SQUARE):
            raise TileGenerationError(f"Pattern layout for {tile.shape.value} tiles is not supported")

        net = MultiPolygon([Polygon(p[0], p[1:]) for p in net_area.polygons])
        tw, th = tile.width, tile.height
        step_x = tw + surface.grout
        step_y = th + surface.grout

        pattern = surface.pattern
        rot = math.radians(pattern.rotation_deg)
        ox, oy = self._origin(surface)

        # Surface bounds expressed in unrotated pattern space
        corners = [_rotate(x, y, ox, oy, -rot) for x, y in surface.outline]
        min_x = min(p[0] for p in corners) - MARGIN_STEPS * step_x
        max_x = max(p[0] for p in corners) + MARGIN_STEPS * step_x
        min_y = min(p[1] for p in corners) - MARGIN_STEPS * step_y
        max_y = max(p[1] for p in corners) + MARGIN_STEPS * step_y

        anchor_x = ox + pattern.offset_x
        anchor_y = oy + pattern.offset_y
        if pattern.origin == OriginPreset.CENTER:
            anchor_x -= tw / 2
            anchor_y -= th / 2

        first_row = math.floor((min_y - anchor_y) / step_y)
        start_x = anchor_x + math.floor((min_x - anchor_x) / step_x) * step_x
        start_y = anchor_y + first_row * step_y
        cols = math.ceil((max_x - start_x) / step_x) + 1
        rows = math.ceil((max_y - start_y) / step_y) + 1

        if cols * rows > self.max_tiles:
            raise TileGenerationError(f"Too many tiles for surface {surface.id!r} ({cols * rows})")

        row_shift = tw * pattern.bond_fraction if pattern.type == PatternType.RUNNING_BOND else 0.0
        period = _detect_bond_period(pattern.bond_fraction) if row_shift else 0
        full_area = tw * th

        tiles: list[PlacedTile] = []
        for r in range(rows):
            y = start_y + r * step_y
            shift = 0.0
            if row_shift:
                # row parity counted from the anchor row
                k = first_row + r
                shift = (k % period if period else k % 2) * row_shift
            for c in range(cols):
                x = start_x + c * step_x + shift
                outline = Polygon(
                    [
                        _rotate(x, y, ox, oy, rot),
                        _rotate(x + tw, y, ox, oy, rot),
                        _rotate(x + tw, y + th, ox, oy, rot),
                        _rotate(x, y + th, ox, oy, rot),
                    ]
                )
                try:
                    clipped = net.intersection(outline)
                except GEOSException as exc:
                    raise TileGenerationError(str(exc)) from exc

                parts = _polygons_of(clipped)
                if not parts:
                    continue
                polygons = tuple(_rings_of(p) for p in parts)
                area = multi_polygon_area(polygons)
                if area <= 0:
                    continue
                tiles.append(PlacedTile(is_full=area >= full_area * FULL_TILE_RATIO, polygons=polygons))

        logger.debug("Rasterized surface %s into %d tiles", surface.id, len(tiles))
        return tiles
