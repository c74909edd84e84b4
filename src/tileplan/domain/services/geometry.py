"""Polygon measurement helpers shared by the rasterizer and the analyzer.

Both sides measure areas with the same shoelace implementation so that a
tile judged full by the rasterizer is never judged degenerate or partial by
the analyzer because of a different sign or winding convention.
"""

from __future__ import annotations

from typing import Iterable, Sequence

from ..value_objects import BoundingBox, PolygonRings, Ring


def ring_area(ring: Ring) -> float:
    """Signed area of a ring (positive for counter-clockwise).

    The ring is treated as closed whether or not the first vertex is
    repeated at the end.
    """
    n = len(ring)
    if n < 3:
        return 0.0
    area = 0.0
    for i in range(n):
        x1, y1 = ring[i]
        x2, y2 = ring[(i + 1) % n]
        area += x1 * y2 - x2 * y1
    return area / 2


def polygon_area(polygon: PolygonRings) -> float:
    """Unsigned area of an outer ring minus its holes, never negative."""
    if not polygon:
        return 0.0
    outer = abs(ring_area(polygon[0]))
    holes = sum(abs(ring_area(ring)) for ring in polygon[1:])
    return max(0.0, outer - holes)


def multi_polygon_area(polygons: Iterable[PolygonRings]) -> float:
    """Total unsigned area of a multipolygon."""
    return sum(polygon_area(polygon) for polygon in polygons)


def bounding_box(points: Sequence[tuple[float, float]]) -> BoundingBox | None:
    """Axis-aligned bounding box of a point list, or None if there are none."""
    if not points:
        return None
    xs = [p[0] for p in points]
    ys = [p[1] for p in points]
    min_x, min_y = min(xs), min(ys)
    return BoundingBox(x=min_x, y=min_y, width=max(xs) - min_x, height=max(ys) - min_y)
