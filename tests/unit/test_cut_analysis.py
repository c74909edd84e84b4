"""Tests for cut shape measurement and classification."""

from __future__ import annotations

import pytest

from tileplan.domain.services import CutAnalysisConfig, CutShapeAnalyzer
from tileplan.domain.value_objects import NominalTile, PlacedTile, TileShape


@pytest.fixture
def analyzer() -> CutShapeAnalyzer:
    """Analyzer for a 50 x 50 square tile with default thresholds."""
    return CutShapeAnalyzer(NominalTile(50.0, 50.0, TileShape.SQUARE))


class TestCutShapeAnalyzer:
    """Tests for CutShapeAnalyzer.analyze."""

    def test_rectangular_cut(self, analyzer: CutShapeAnalyzer) -> None:
        result = analyzer.analyze(PlacedTile.cut(((0, 0), (50, 0), (50, 30), (0, 30))))

        assert result.bbox.width == 50.0
        assert result.bbox.height == 30.0
        assert result.true_area == pytest.approx(1500.0)
        assert result.area_ratio == pytest.approx(1.0)
        assert not result.is_triangular
        assert not result.is_degenerate

    def test_diagonal_half_is_triangular(self, analyzer: CutShapeAnalyzer) -> None:
        result = analyzer.analyze(PlacedTile.cut(((0, 0), (50, 0), (0, 50))))

        assert result.area_ratio == pytest.approx(0.5)
        assert result.is_triangular

    def test_l_shape_is_not_triangular(self, analyzer: CutShapeAnalyzer) -> None:
        ring = ((0, 0), (50, 0), (50, 10), (10, 10), (10, 50), (0, 50))

        result = analyzer.analyze(PlacedTile.cut(ring))

        assert result.area_ratio == pytest.approx(900.0 / 2500.0)
        assert not result.is_triangular

    def test_sliver_is_degenerate(self, analyzer: CutShapeAnalyzer) -> None:
        result = analyzer.analyze(PlacedTile.cut(((0, 0), (50, 0), (50, 0.01), (0, 0.01))))

        assert result.is_degenerate

    def test_shape_without_extent(self, analyzer: CutShapeAnalyzer) -> None:
        result = analyzer.analyze(PlacedTile(is_full=False))

        assert result.bbox.is_empty
        assert result.area_ratio == 1.0
        assert result.is_degenerate

    def test_custom_band(self) -> None:
        analyzer = CutShapeAnalyzer(
            NominalTile(50.0, 50.0),
            CutAnalysisConfig(triangular_min=0.3, triangular_max=0.4),
        )

        result = analyzer.analyze(PlacedTile.cut(((0, 0), (50, 0), (0, 50))))

        assert not result.is_triangular


class TestCutAnalysisConfig:
    """Tests for threshold validation."""

    def test_inverted_band_rejected(self) -> None:
        with pytest.raises(ValueError, match="Triangular band"):
            CutAnalysisConfig(triangular_min=0.7, triangular_max=0.5)

    def test_negative_fraction_rejected(self) -> None:
        with pytest.raises(ValueError, match="Degenerate fraction"):
            CutAnalysisConfig(degenerate_fraction=-0.1)


class TestNominalTileArea:
    """Tests for shape dependent tile areas."""

    def test_rect(self) -> None:
        assert NominalTile(40.0, 20.0).area == 800.0

    def test_hexagon_uses_across_flats(self) -> None:
        # Across flats 2 * sqrt(3) gives circumradius 2
        tile = NominalTile(2 * 3**0.5, 2 * 3**0.5, TileShape.HEXAGON)

        assert tile.area == pytest.approx(6 * 3**0.5)

    def test_rhombus_is_half_diagonals(self) -> None:
        assert NominalTile(30.0, 20.0, TileShape.RHOMBUS).area == 300.0

    def test_non_positive_rejected(self) -> None:
        with pytest.raises(ValueError):
            NominalTile(0.0, 20.0)
