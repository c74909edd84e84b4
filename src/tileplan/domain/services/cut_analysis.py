"""Geometric analysis of clipped tile shapes."""

from __future__ import annotations

from dataclasses import dataclass

from ..value_objects import BoundingBox, NominalTile, PlacedTile
from .geometry import bounding_box, multi_polygon_area


@dataclass(frozen=True)
class CutAnalysisConfig:
    """Thresholds used to classify cut shapes.

    Attributes:
        triangular_min: Lowest true/bbox area ratio treated as a diagonal cut.
        triangular_max: Highest true/bbox area ratio treated as a diagonal cut.
        degenerate_fraction: Shapes smaller than this fraction of a nominal
            tile are clipping slivers, not material demand.
    """

    triangular_min: float = 0.45
    triangular_max: float = 0.60
    degenerate_fraction: float = 0.001

    def __post_init__(self) -> None:
        if not 0 <= self.triangular_min <= self.triangular_max <= 1:
            raise ValueError("Triangular band must satisfy 0 <= min <= max <= 1")
        if self.degenerate_fraction < 0:
            raise ValueError("Degenerate fraction must be non-negative")


@dataclass(frozen=True)
class CutAnalysis:
    """Derived measurements of one cut shape."""

    bbox: BoundingBox
    bbox_area: float
    true_area: float
    area_ratio: float
    is_triangular: bool
    is_degenerate: bool


class CutShapeAnalyzer:
    """Measures and classifies cut tile shapes against a nominal tile."""

    def __init__(self, tile: NominalTile, config: CutAnalysisConfig | None = None) -> None:
        self.tile = tile
        self.config = config or CutAnalysisConfig()

    def analyze(self, shape: PlacedTile) -> CutAnalysis:
        """Compute bbox, true area and classification of a cut shape.

        A shape without any extent gets an empty bbox and is reported as
        degenerate.
        """
        bbox = bounding_box(shape.vertices) or BoundingBox(0.0, 0.0, 0.0, 0.0)
        bbox_area = bbox.area
        true_area = multi_polygon_area(shape.polygons)
        area_ratio = true_area / bbox_area if bbox_area > 0 else 1.0

        is_triangular = self.config.triangular_min <= area_ratio <= self.config.triangular_max
        is_degenerate = bbox.is_empty or true_area < self.config.degenerate_fraction * self.tile.area

        return CutAnalysis(
            bbox=bbox,
            bbox_area=bbox_area,
            true_area=true_area,
            area_ratio=area_ratio,
            is_triangular=is_triangular,
            is_degenerate=is_degenerate,
        )
