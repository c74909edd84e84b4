"""Application layer: configuration, commands and DTOs."""

from .cache import EstimateCache, snapshot_key
from .commands import EstimateFloorCommand, EstimateSurfaceCommand, aggregate_totals
from .dtos import (
    EstimateFailure,
    EstimateOutput,
    FailureKind,
    FloorEstimateOutput,
    FloorTotals,
    SurfaceEstimate,
)
from .factory import ServiceFactory, get_factory, reset_factory, set_factory

__all__ = [
    "EstimateCache",
    "EstimateFailure",
    "EstimateFloorCommand",
    "EstimateOutput",
    "EstimateSurfaceCommand",
    "FailureKind",
    "FloorEstimateOutput",
    "FloorTotals",
    "ServiceFactory",
    "SurfaceEstimate",
    "aggregate_totals",
    "get_factory",
    "reset_factory",
    "set_factory",
]
