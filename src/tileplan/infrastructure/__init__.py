"""Infrastructure layer: rasterizer and report output."""

from .formatters import EstimateReportFormatter, FloorReportFormatter, JsonExporter, UsageFormatter
from .rasterizer import ShapelyTileRasterizer

__all__ = [
    "EstimateReportFormatter",
    "FloorReportFormatter",
    "JsonExporter",
    "ShapelyTileRasterizer",
    "UsageFormatter",
]
