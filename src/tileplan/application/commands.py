"""Application commands (use cases) for tile estimation."""

from __future__ import annotations

import logging
import math

from tileplan.application.cache import CachedConsumption, EstimateCache, snapshot_key
from tileplan.application.config.adapter import (
    config_to_analysis,
    config_to_consumption_options,
    config_to_pricing,
    config_to_surface,
    resolve_pattern,
)
from tileplan.application.config.schema import (
    FloorConfigSchema,
    PatternConfigSchema,
    SurfaceConfigSchema,
)
from tileplan.application.dtos import (
    EstimateOutput,
    FailureKind,
    FloorEstimateOutput,
    FloorTotals,
    SurfaceEstimate,
)
from tileplan.contracts.protocols import TileRasterizer
from tileplan.domain.services import (
    ConsumptionEngine,
    ConsumptionResult,
    OffcutInventory,
    cm2_to_m2,
    compute_purchase_summary,
)
from tileplan.domain.surface import TileGenerationError
from tileplan.domain.value_objects import NominalTile

logger = logging.getLogger(__name__)


class EstimateSurfaceCommand:
    """Estimate tiles to purchase for a single surface.

    Consumption results are memoized per surface in an :class:`EstimateCache`
    unless the caller supplies its own offcut inventory (floor sharing).
    Pricing and reserve are always recomputed from the cached counts.
    """

    def __init__(
        self,
        rasterizer: TileRasterizer | None = None,
        cache: EstimateCache | None = None,
    ) -> None:
        if rasterizer is None:
            from tileplan.infrastructure.rasterizer import ShapelyTileRasterizer

            rasterizer = ShapelyTileRasterizer()
        self.rasterizer = rasterizer
        self.cache = cache if cache is not None else EstimateCache()

    def invalidate(self, surface_id: str | None = None) -> None:
        """Forget cached results for one surface, or for all when None."""
        self.cache.invalidate(surface_id)

    def execute(
        self,
        surface: SurfaceConfigSchema | None,
        inherited_pattern: PatternConfigSchema | None = None,
        inventory: OffcutInventory | None = None,
    ) -> EstimateOutput:
        """Execute the estimate.

        Args:
            surface: Surface to estimate; None reports that no surface is
                selected.
            inherited_pattern: Floor pattern used when the surface has none.
            inventory: Offcut pool to draw from and add to. When given, the
                cache is bypassed and the pool is mutated in place.

        Returns:
            EstimateOutput holding either the estimate or a failure.
        """
        if surface is None:
            return EstimateOutput.failed(None, FailureKind.NO_SURFACE_SELECTED, "No surface selected")

        tile = surface.tile
        if not (math.isfinite(tile.width) and math.isfinite(tile.height) and tile.width > 0 and tile.height > 0):
            return EstimateOutput.failed(
                surface.id,
                FailureKind.INVALID_TILE_DIMENSIONS,
                f"Invalid tile dimensions {tile.width} x {tile.height}",
            )
        if not (math.isfinite(surface.grout.width) and surface.grout.width >= 0):
            return EstimateOutput.failed(
                surface.id,
                FailureKind.INVALID_GROUT,
                f"Invalid grout width {surface.grout.width}",
            )

        use_cache = inventory is None
        pattern = resolve_pattern(surface, inherited_pattern)
        key = snapshot_key(surface, pattern)

        if use_cache:
            cached = self.cache.get(surface.id, key)
            if cached is not None:
                logger.debug("Cache hit for surface %s", surface.id)
                estimate = self._build_estimate(surface, cached.consumption, cached.installed_area_cm2)
                return EstimateOutput(surface_id=surface.id, estimate=estimate, from_cache=True)

        spec = config_to_surface(surface, inherited_pattern)

        try:
            net_area = self.rasterizer.available_area(spec)
        except TileGenerationError as e:
            return EstimateOutput.failed(surface.id, FailureKind.TILE_GENERATION_FAILED, str(e))
        if net_area.is_empty:
            return EstimateOutput.failed(
                surface.id,
                FailureKind.NO_TILEABLE_AREA,
                f"Surface {surface.id!r} has no tileable area",
            )

        try:
            tiles = self.rasterizer.place_tiles(spec, net_area)
        except TileGenerationError as e:
            return EstimateOutput.failed(surface.id, FailureKind.TILE_GENERATION_FAILED, str(e))

        analysis_config, pairing_config = config_to_analysis(surface.analysis)
        engine = ConsumptionEngine(
            spec.tile,
            options=config_to_consumption_options(surface.waste),
            analysis_config=analysis_config,
            pairing_config=pairing_config,
        )
        consumption = engine.run(tiles, inventory)

        if use_cache:
            self.cache.put(
                surface.id,
                CachedConsumption(key=key, consumption=consumption, installed_area_cm2=net_area.area),
            )

        estimate = self._build_estimate(surface, consumption, net_area.area)
        logger.info(
            "Surface %s: %d tiles to buy, %.1f%% waste",
            surface.id,
            estimate.summary.purchased_tiles_with_reserve,
            estimate.summary.waste_pct,
        )
        return EstimateOutput(surface_id=surface.id, estimate=estimate)

    def _build_estimate(
        self,
        surface: SurfaceConfigSchema,
        consumption: ConsumptionResult,
        installed_area_cm2: float,
    ) -> SurfaceEstimate:
        tile = NominalTile(width=surface.tile.width, height=surface.tile.height, shape=surface.tile.shape)
        summary = compute_purchase_summary(
            full_tiles=consumption.full_tiles,
            cut_tiles=consumption.cut_tiles,
            reused_cuts=consumption.reused_cuts,
            tile_area_cm2=tile.area,
            installed_area_cm2=installed_area_cm2,
            pricing=config_to_pricing(surface.pricing),
            cut_need_area_cm2=consumption.cut_need_area,
        )
        return SurfaceEstimate(
            surface_id=surface.id,
            name=surface.name,
            tile=tile,
            options=config_to_consumption_options(surface.waste),
            summary=summary,
            consumption=consumption,
            gross_area_m2=cm2_to_m2(surface.width * surface.height),
        )


class EstimateFloorCommand:
    """Estimate every surface of a floor in list order.

    With shared offcuts, surfaces laying the same tile draw from one
    inventory threaded through the list: remnants of a surface are visible
    to later surfaces only, so reordering surfaces can change the result.
    Each surface works on a copy of the shared inventory that is committed
    only if the surface succeeds.
    """

    def __init__(self, surface_command: EstimateSurfaceCommand | None = None) -> None:
        self.surface_command = surface_command or EstimateSurfaceCommand()

    def execute(
        self,
        floor: FloorConfigSchema,
        share_offcuts: bool | None = None,
    ) -> FloorEstimateOutput:
        """Execute the floor estimate.

        Args:
            floor: Floor configuration; its surface list is the processing order.
            share_offcuts: Override for ``floor.share_offcuts``.

        Returns:
            FloorEstimateOutput with one output per surface and the totals.
        """
        share = floor.share_offcuts if share_offcuts is None else share_offcuts
        inventories: dict[tuple, OffcutInventory] = {}
        outputs: list[EstimateOutput] = []

        for surface in floor.surfaces:
            if not share:
                output = self.surface_command.execute(surface, floor.pattern)
            else:
                tile_key = (surface.tile.width, surface.tile.height, surface.tile.shape)
                shared = inventories.get(tile_key)
                working = shared.copy() if shared is not None else OffcutInventory()
                output = self.surface_command.execute(surface, floor.pattern, inventory=working)
                if output.is_valid:
                    inventories[tile_key] = working

            if not output.is_valid and output.failure is not None:
                logger.warning(
                    "Surface %s skipped: %s (%s)",
                    surface.id,
                    output.failure.message,
                    output.failure.kind.value,
                )
            outputs.append(output)

        return FloorEstimateOutput(
            floor_id=floor.id,
            surfaces=outputs,
            totals=aggregate_totals(outputs),
            shared_offcuts=share,
        )


def aggregate_totals(outputs: list[EstimateOutput]) -> FloorTotals:
    """Sum the figures of all successful surface outputs."""
    summaries = [o.estimate.summary for o in outputs if o.is_valid and o.estimate is not None]

    purchased_area = sum(s.purchased_area_m2 for s in summaries)
    waste_area = sum(s.waste_area_m2 for s in summaries)

    return FloorTotals(
        surface_count=len(outputs),
        failed_count=len(outputs) - len(summaries),
        full_tiles=sum(s.full_tiles for s in summaries),
        cut_tiles=sum(s.cut_tiles for s in summaries),
        reused_cuts=sum(s.reused_cuts for s in summaries),
        purchased_tiles=sum(s.purchased_tiles for s in summaries),
        purchased_tiles_with_reserve=sum(s.purchased_tiles_with_reserve for s in summaries),
        installed_area_m2=sum(s.installed_area_m2 for s in summaries),
        purchased_area_m2=purchased_area,
        waste_area_m2=waste_area,
        waste_pct=waste_area / purchased_area * 100 if purchased_area > 0 else 0.0,
        price_total=sum(s.price_total for s in summaries),
        purchase_cost=sum(s.purchase_cost for s in summaries),
    )
