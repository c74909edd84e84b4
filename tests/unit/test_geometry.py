"""Tests for the shoelace area and bounding box helpers."""

from __future__ import annotations

import pytest

from tileplan.domain.services import bounding_box, multi_polygon_area, polygon_area, ring_area


SQUARE = ((0.0, 0.0), (10.0, 0.0), (10.0, 10.0), (0.0, 10.0))


class TestRingArea:
    """Tests for the signed shoelace area."""

    def test_counter_clockwise_is_positive(self) -> None:
        assert ring_area(SQUARE) == pytest.approx(100.0)

    def test_clockwise_is_negative(self) -> None:
        assert ring_area(tuple(reversed(SQUARE))) == pytest.approx(-100.0)

    def test_repeated_closing_vertex_is_ignored(self) -> None:
        assert ring_area(SQUARE + (SQUARE[0],)) == pytest.approx(100.0)

    def test_fewer_than_three_vertices(self) -> None:
        assert ring_area(((0.0, 0.0), (1.0, 1.0))) == 0.0


class TestPolygonArea:
    """Tests for polygons with holes."""

    def test_hole_subtracted_regardless_of_winding(self) -> None:
        hole = ((2.0, 2.0), (4.0, 2.0), (4.0, 4.0), (2.0, 4.0))

        assert polygon_area((SQUARE, hole)) == pytest.approx(96.0)
        assert polygon_area((SQUARE, tuple(reversed(hole)))) == pytest.approx(96.0)

    def test_never_negative(self) -> None:
        big_hole = ((-1.0, -1.0), (20.0, -1.0), (20.0, 20.0), (-1.0, 20.0))

        assert polygon_area((SQUARE, big_hole)) == 0.0

    def test_multi_polygon_sums_parts(self) -> None:
        other = ((20.0, 0.0), (25.0, 0.0), (25.0, 5.0), (20.0, 5.0))

        assert multi_polygon_area([(SQUARE,), (other,)]) == pytest.approx(125.0)

    def test_empty(self) -> None:
        assert polygon_area(()) == 0.0
        assert multi_polygon_area([]) == 0.0


class TestBoundingBox:
    """Tests for the axis-aligned bounding box."""

    def test_triangle_bbox(self) -> None:
        bbox = bounding_box([(5.0, 1.0), (15.0, 1.0), (5.0, 21.0)])

        assert (bbox.x, bbox.y, bbox.width, bbox.height) == (5.0, 1.0, 10.0, 20.0)
        assert bbox.area == 200.0

    def test_no_points(self) -> None:
        assert bounding_box([]) is None

    def test_collinear_points_are_empty(self) -> None:
        assert bounding_box([(0.0, 0.0), (10.0, 0.0)]).is_empty
