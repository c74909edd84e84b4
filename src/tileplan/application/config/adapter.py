"""Conversion of validated configuration models into domain objects."""

from __future__ import annotations

from tileplan.application.config.schema import (
    AnalysisConfigSchema,
    PatternConfigSchema,
    PricingConfigSchema,
    SurfaceConfigSchema,
    WasteConfigSchema,
)
from tileplan.domain.services import (
    ConsumptionOptions,
    CutAnalysisConfig,
    PairingConfig,
    PricingOptions,
)
from tileplan.domain.surface import Exclusion, PatternSpec, SurfaceSpec
from tileplan.domain.value_objects import NominalTile


def config_to_pattern(config: PatternConfigSchema | None) -> PatternSpec:
    """Pattern settings, defaulting to an unrotated grid from the top left."""
    if config is None:
        return PatternSpec()
    return PatternSpec(
        type=config.type,
        bond_fraction=config.bond_fraction,
        rotation_deg=config.rotation_deg,
        offset_x=config.offset_x,
        offset_y=config.offset_y,
        origin=config.origin,
        origin_x=config.origin_x,
        origin_y=config.origin_y,
    )


def resolve_pattern(
    surface: SurfaceConfigSchema,
    inherited: PatternConfigSchema | None = None,
) -> PatternConfigSchema | None:
    """The surface's own pattern, else the one inherited from its floor."""
    return surface.pattern if surface.pattern is not None else inherited


def config_to_surface(
    surface: SurfaceConfigSchema,
    inherited_pattern: PatternConfigSchema | None = None,
) -> SurfaceSpec:
    """Build a SurfaceSpec.

    Raises:
        ValueError: If the tile dimensions are not positive. Callers check
            dimensions first to report a specific failure.
    """
    exclusions = tuple(
        Exclusion(
            kind=ex.type,
            x=ex.x,
            y=ex.y,
            width=ex.width,
            height=ex.height,
            radius=ex.radius,
            points=tuple(ex.points),
        )
        for ex in surface.exclusions
    )
    return SurfaceSpec(
        id=surface.id,
        width=surface.width,
        height=surface.height,
        tile=NominalTile(
            width=surface.tile.width,
            height=surface.tile.height,
            shape=surface.tile.shape,
        ),
        grout=surface.grout.width,
        pattern=config_to_pattern(resolve_pattern(surface, inherited_pattern)),
        exclusions=exclusions,
        boundary=tuple(surface.polygon) if surface.polygon else (),
    )


def config_to_consumption_options(waste: WasteConfigSchema) -> ConsumptionOptions:
    """Cutting policy for the consumption engine."""
    return ConsumptionOptions(
        allow_rotate=waste.allow_rotate,
        optimize_cuts=waste.optimize_cuts,
        kerf=waste.kerf,
    )


def config_to_analysis(analysis: AnalysisConfigSchema) -> tuple[CutAnalysisConfig, PairingConfig]:
    """Cut classification and pairing thresholds."""
    return (
        CutAnalysisConfig(
            triangular_min=analysis.triangular_min,
            triangular_max=analysis.triangular_max,
            degenerate_fraction=analysis.degenerate_fraction,
        ),
        PairingConfig(
            tolerance=analysis.pair_tolerance,
            area_min=analysis.pair_area_min,
            area_max=analysis.pair_area_max,
        ),
    )


def config_to_pricing(pricing: PricingConfigSchema) -> PricingOptions:
    """Price, pack and reserve settings."""
    return PricingOptions(
        price_per_m2=pricing.price_per_m2,
        pack_m2=pricing.pack_m2,
        reserve_tiles=pricing.reserve_tiles,
    )
