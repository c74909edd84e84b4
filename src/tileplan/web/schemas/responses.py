"""Pydantic response schemas for the REST API."""

from typing import Any

from pydantic import BaseModel, Field


class TileCountsSchema(BaseModel):
    """Tile counts of an estimate."""

    full_tiles: int
    cut_tiles: int
    reused_cuts: int
    purchased_tiles: int
    reserve_tiles: int
    purchased_tiles_with_reserve: int


class MaterialSchema(BaseModel):
    """Areas and waste of an estimate."""

    tile_area_cm2: float = Field(..., description="Nominal tile area in cm²")
    installed_area_m2: float
    purchased_area_m2: float
    waste_area_m2: float
    waste_pct: float
    waste_tiles_est: int


class PricingSchema(BaseModel):
    """Pricing of an estimate."""

    price_per_m2: float
    pack_m2: float
    packs: int | None = None
    price_total: float
    purchase_cost: float


class EstimateResponseSchema(BaseModel):
    """Response for a surface estimate."""

    surface_id: str
    name: str = ""
    from_cache: bool = False
    tiles: TileCountsSchema
    material: MaterialSchema
    labor: dict[str, float]
    waste: dict[str, Any]
    area: dict[str, float]
    pricing: PricingSchema
    usage: list[dict[str, Any]] | None = None


class FloorResponseSchema(BaseModel):
    """Response for a floor estimate; failed surfaces carry error fields."""

    floor_id: str
    shared_offcuts: bool
    surfaces: list[dict[str, Any]]
    totals: dict[str, float]


class ValidationResultSchema(BaseModel):
    """Response for configuration validation."""

    is_valid: bool = Field(..., description="Whether configuration can be estimated")
    errors: list[dict[str, str]] = Field(default_factory=list)
    warnings: list[dict[str, str]] = Field(default_factory=list)


class ErrorResponseSchema(BaseModel):
    """Error response body."""

    error: str
    error_type: str
    details: Any = None
