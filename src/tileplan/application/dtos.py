"""Data Transfer Objects for the application layer."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from tileplan.domain.services import ConsumptionOptions, ConsumptionResult, PurchaseSummary
from tileplan.domain.value_objects import NominalTile


class FailureKind(str, Enum):
    """Reasons an estimate could not be produced."""

    NO_SURFACE_SELECTED = "no_surface_selected"
    INVALID_TILE_DIMENSIONS = "invalid_tile_dimensions"
    INVALID_GROUT = "invalid_grout"
    NO_TILEABLE_AREA = "no_tileable_area"
    TILE_GENERATION_FAILED = "tile_generation_failed"


@dataclass(frozen=True)
class EstimateFailure:
    """A recoverable estimate failure to show to the user."""

    kind: FailureKind
    message: str


@dataclass(frozen=True)
class SurfaceEstimate:
    """Complete estimate for one surface.

    Attributes:
        surface_id: Surface identity.
        name: Display name.
        tile: Nominal tile used.
        options: Cutting policy the estimate was computed with.
        summary: Purchase, waste and pricing figures.
        consumption: Counts and per-tile usage records.
        gross_area_m2: Surface bounding area before exclusions.
    """

    surface_id: str
    name: str
    tile: NominalTile
    options: ConsumptionOptions
    summary: PurchaseSummary
    consumption: ConsumptionResult
    gross_area_m2: float

    @property
    def purchased_tiles(self) -> int:
        """Tiles to buy without reserve."""
        return self.summary.purchased_tiles

    @property
    def waste_pct(self) -> float:
        """Share of purchased area that is not installed."""
        return self.summary.waste_pct


@dataclass
class EstimateOutput:
    """Result of estimating one surface.

    Exactly one of ``estimate`` and ``failure`` is set.
    """

    surface_id: str | None
    estimate: SurfaceEstimate | None = None
    failure: EstimateFailure | None = None
    from_cache: bool = False

    @property
    def is_valid(self) -> bool:
        """Check if the estimate was produced."""
        return self.failure is None and self.estimate is not None

    @classmethod
    def failed(cls, surface_id: str | None, kind: FailureKind, message: str) -> "EstimateOutput":
        """Build a failed output."""
        return cls(surface_id=surface_id, failure=EstimateFailure(kind=kind, message=message))


@dataclass(frozen=True)
class FloorTotals:
    """Aggregate figures over the successfully estimated surfaces."""

    surface_count: int = 0
    failed_count: int = 0
    full_tiles: int = 0
    cut_tiles: int = 0
    reused_cuts: int = 0
    purchased_tiles: int = 0
    purchased_tiles_with_reserve: int = 0
    installed_area_m2: float = 0.0
    purchased_area_m2: float = 0.0
    waste_area_m2: float = 0.0
    waste_pct: float = 0.0
    price_total: float = 0.0
    purchase_cost: float = 0.0


@dataclass
class FloorEstimateOutput:
    """Per-surface outputs of a floor, in processing order, plus totals."""

    floor_id: str
    surfaces: list[EstimateOutput] = field(default_factory=list)
    totals: FloorTotals = field(default_factory=FloorTotals)
    shared_offcuts: bool = False

    @property
    def failures(self) -> list[EstimateOutput]:
        """Outputs of surfaces that could not be estimated."""
        return [s for s in self.surfaces if not s.is_valid]

    @property
    def is_valid(self) -> bool:
        """True if every surface was estimated."""
        return not self.failures
