"""Pydantic models for tile plan configuration files.

A configuration file describes either one surface or a floor made of
several surfaces. Tile dimensions and grout width are deliberately not
range checked here: invalid values are reported by the estimate commands
as explicit failures so callers get a specific failure kind.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator

from tileplan.domain.surface import ExclusionKind, OriginPreset, PatternType
from tileplan.domain.value_objects import TileShape

# Version 1.0: single surfaces
# Version 1.1: floors with shared offcuts and inherited patterns
SUPPORTED_VERSIONS: frozenset[str] = frozenset({"1.0", "1.1"})


class OutputFormat(str, Enum):
    """Report formats offered by the CLI."""

    TEXT = "text"
    JSON = "json"


class TileConfigSchema(BaseModel):
    """Nominal tile as sold.

    Attributes:
        width: Tile width in cm (across flats for hexagons).
        height: Tile height in cm.
        shape: Tile outline.
    """

    model_config = ConfigDict(extra="forbid")

    width: float = Field(default=40.0, description="Tile width in cm")
    height: float = Field(default=20.0, description="Tile height in cm")
    shape: TileShape = Field(default=TileShape.RECT, description="Tile outline")


class GroutConfigSchema(BaseModel):
    """Joint between tiles."""

    model_config = ConfigDict(extra="forbid")

    width: float = Field(default=0.2, description="Grout width in cm")


class PatternConfigSchema(BaseModel):
    """Laying pattern and its anchor.

    Attributes:
        type: Grid or running bond.
        bond_fraction: Row shift of a running bond as a fraction of tile width.
        rotation_deg: Pattern rotation about the origin.
        offset_x: Horizontal pattern shift in cm.
        offset_y: Vertical pattern shift in cm.
        origin: Anchor preset.
        origin_x: Anchor x for the ``free`` preset.
        origin_y: Anchor y for the ``free`` preset.
    """

    model_config = ConfigDict(extra="forbid")

    type: PatternType = Field(default=PatternType.GRID)
    bond_fraction: float = Field(default=0.5, gt=0, le=1)
    rotation_deg: float = Field(default=0.0, ge=-360, le=360)
    offset_x: float = Field(default=0.0)
    offset_y: float = Field(default=0.0)
    origin: OriginPreset = Field(default=OriginPreset.TOP_LEFT)
    origin_x: float = Field(default=0.0)
    origin_y: float = Field(default=0.0)


class ExclusionConfigSchema(BaseModel):
    """Area excluded from tiling (pillar, bathtub, floor drain...)."""

    model_config = ConfigDict(extra="forbid")

    type: ExclusionKind
    x: float = Field(default=0.0, description="Left edge, or centre x for circles")
    y: float = Field(default=0.0, description="Top edge, or centre y for circles")
    width: float = Field(default=0.0, ge=0)
    height: float = Field(default=0.0, ge=0)
    radius: float = Field(default=0.0, ge=0)
    points: list[tuple[float, float]] = Field(default_factory=list)

    @model_validator(mode="after")
    def check_shape_fields(self) -> "ExclusionConfigSchema":
        """Require the fields the exclusion type needs."""
        if self.type == ExclusionKind.RECT and (self.width <= 0 or self.height <= 0):
            raise ValueError("rect exclusion requires positive width and height")
        if self.type == ExclusionKind.CIRCLE and self.radius <= 0:
            raise ValueError("circle exclusion requires a positive radius")
        if self.type == ExclusionKind.POLYGON and len(self.points) < 3:
            raise ValueError("polygon exclusion requires at least 3 points")
        return self


class WasteConfigSchema(BaseModel):
    """Cutting policy used when reusing offcuts.

    Attributes:
        allow_rotate: Offcuts may be turned by 90 degrees.
        optimize_cuts: Best-fit selection with guillotine remainder tracking.
        kerf: Saw blade width in cm, charged only with optimize_cuts.
    """

    model_config = ConfigDict(extra="forbid")

    allow_rotate: bool = Field(default=True, description="Allow rotated offcut reuse")
    optimize_cuts: bool = Field(default=False, description="Track guillotine remainders")
    kerf: float = Field(default=0.2, ge=0, le=2.0, description="Saw kerf in cm")


class PricingConfigSchema(BaseModel):
    """Commercial settings.

    Attributes:
        price_per_m2: Price per square metre.
        pack_m2: Coverage of one pack; 0 disables pack rounding.
        reserve_tiles: Extra tiles to buy, fractions are floored.
    """

    model_config = ConfigDict(extra="forbid")

    price_per_m2: float = Field(default=39.9, ge=0)
    pack_m2: float = Field(default=1.44, ge=0)
    reserve_tiles: float = Field(default=0, ge=0)


class AnalysisConfigSchema(BaseModel):
    """Cut classification and pair matching thresholds."""

    model_config = ConfigDict(extra="forbid")

    triangular_min: float = Field(default=0.45, ge=0, le=1)
    triangular_max: float = Field(default=0.60, ge=0, le=1)
    degenerate_fraction: float = Field(default=0.001, ge=0, le=1)
    pair_tolerance: float = Field(default=1.0, ge=0, description="Bbox tolerance in cm")
    pair_area_min: float = Field(default=0.90, ge=0)
    pair_area_max: float = Field(default=1.10, ge=0)

    @model_validator(mode="after")
    def check_bands(self) -> "AnalysisConfigSchema":
        """Band minimums must not exceed maximums."""
        if self.triangular_min > self.triangular_max:
            raise ValueError("triangular_min must not exceed triangular_max")
        if self.pair_area_min > self.pair_area_max:
            raise ValueError("pair_area_min must not exceed pair_area_max")
        return self


class SurfaceConfigSchema(BaseModel):
    """One tileable surface (room floor, wall, ...).

    Attributes:
        id: Unique surface id, used as cache key.
        name: Display name.
        width: Bounding width in cm.
        height: Bounding height in cm.
        polygon: Optional custom outline overriding the rectangle.
        exclusions: Areas not tiled.
        tile: Nominal tile.
        grout: Joint settings.
        pattern: Laying pattern; inherited from the floor when omitted.
        waste: Cutting policy.
        pricing: Commercial settings.
        analysis: Cut classification thresholds.
    """

    model_config = ConfigDict(extra="forbid")

    id: str = Field(..., min_length=1)
    name: str = Field(default="")
    width: float = Field(..., gt=0, description="Surface width in cm")
    height: float = Field(..., gt=0, description="Surface height in cm")
    polygon: list[tuple[float, float]] | None = Field(default=None)
    exclusions: list[ExclusionConfigSchema] = Field(default_factory=list)
    tile: TileConfigSchema = Field(default_factory=TileConfigSchema)
    grout: GroutConfigSchema = Field(default_factory=GroutConfigSchema)
    pattern: PatternConfigSchema | None = Field(default=None)
    waste: WasteConfigSchema = Field(default_factory=WasteConfigSchema)
    pricing: PricingConfigSchema = Field(default_factory=PricingConfigSchema)
    analysis: AnalysisConfigSchema = Field(default_factory=AnalysisConfigSchema)

    @model_validator(mode="after")
    def check_polygon(self) -> "SurfaceConfigSchema":
        """A custom outline needs at least three points."""
        if self.polygon is not None and len(self.polygon) < 3:
            raise ValueError("polygon requires at least 3 points")
        return self


class FloorConfigSchema(BaseModel):
    """Several surfaces estimated together.

    Surfaces are processed in list order. With ``share_offcuts`` the
    remnants of a surface are available to every later surface using the
    same tile, never to earlier ones.
    """

    model_config = ConfigDict(extra="forbid")

    id: str = Field(default="floor")
    name: str = Field(default="")
    pattern: PatternConfigSchema | None = Field(
        default=None, description="Default pattern for surfaces without one"
    )
    share_offcuts: bool = Field(default=False)
    surfaces: list[SurfaceConfigSchema] = Field(default_factory=list)

    @model_validator(mode="after")
    def check_unique_ids(self) -> "FloorConfigSchema":
        """Surface ids must be unique within a floor."""
        ids = [s.id for s in self.surfaces]
        duplicates = sorted({i for i in ids if ids.count(i) > 1})
        if duplicates:
            raise ValueError(f"duplicate surface ids: {', '.join(duplicates)}")
        return self


class TilePlanConfiguration(BaseModel):
    """Root of a configuration file.

    Exactly one of ``surface`` or ``floor`` must be given.
    """

    model_config = ConfigDict(extra="forbid")

    schema_version: str = Field(default="1.1")
    surface: SurfaceConfigSchema | None = None
    floor: FloorConfigSchema | None = None

    @model_validator(mode="after")
    def check_root(self) -> "TilePlanConfiguration":
        """Validate version and that exactly one root entry is present."""
        if self.schema_version not in SUPPORTED_VERSIONS:
            raise ValueError(
                f"Unsupported schema_version '{self.schema_version}'. "
                f"Supported: {', '.join(sorted(SUPPORTED_VERSIONS))}"
            )
        if (self.surface is None) == (self.floor is None):
            raise ValueError("Configuration must define exactly one of 'surface' or 'floor'")
        return self
