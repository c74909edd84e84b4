"""Purchase, waste and pricing figures derived from consumption counts."""

from __future__ import annotations

import math
from dataclasses import dataclass

CM2_PER_M2 = 10_000.0


def cm2_to_m2(area_cm2: float) -> float:
    """Convert square centimetres to square metres."""
    return area_cm2 / CM2_PER_M2


@dataclass(frozen=True)
class PricingOptions:
    """Commercial settings for one surface.

    Attributes:
        price_per_m2: Tile price per square metre.
        pack_m2: Coverage of one pack in m²; 0 means sold individually.
        reserve_tiles: Extra tiles to buy; fractions are floored.
    """

    price_per_m2: float = 0.0
    pack_m2: float = 0.0
    reserve_tiles: float = 0

    @property
    def reserve_count(self) -> int:
        """Reserve as a non-negative whole number of tiles."""
        return max(0, math.floor(self.reserve_tiles))


@dataclass(frozen=True)
class PurchaseSummary:
    """Tiles to buy, where the material goes, and what it costs."""

    full_tiles: int
    cut_tiles: int
    reused_cuts: int
    new_tiles_for_cuts: int
    purchased_tiles: int
    reserve_tiles: int
    purchased_tiles_with_reserve: int
    tile_area_cm2: float
    installed_area_m2: float
    purchased_area_m2: float
    waste_area_m2: float
    waste_pct: float
    waste_tiles_est: int
    total_placed_tiles: int
    cut_tiles_pct: float
    cut_need_area_m2: float
    price_per_m2: float
    pack_m2: float
    packs: int | None
    price_total: float
    purchase_cost: float


def compute_purchase_summary(
    full_tiles: int,
    cut_tiles: int,
    reused_cuts: int,
    tile_area_cm2: float,
    installed_area_cm2: float,
    pricing: PricingOptions | None = None,
    cut_need_area_cm2: float = 0.0,
) -> PurchaseSummary:
    """Aggregate counts into purchase and waste figures.

    Installed area is the true net tileable area supplied by the caller,
    not a sum of placed tile areas.

    Args:
        full_tiles: Whole tiles placed.
        cut_tiles: Non-degenerate cut tiles placed.
        reused_cuts: Cut tiles satisfied from existing material.
        tile_area_cm2: Area of one nominal tile.
        installed_area_cm2: Net tileable area of the surface.
        pricing: Price, pack and reserve settings.
        cut_need_area_cm2: Sum of cut bounding box areas, for labor figures.

    Returns:
        PurchaseSummary with counts, areas in m², and prices.
    """
    pricing = pricing or PricingOptions()
    reused_cuts = max(0, min(reused_cuts, cut_tiles))

    new_tiles_for_cuts = max(0, cut_tiles - reused_cuts)
    purchased = full_tiles + new_tiles_for_cuts
    reserve = pricing.reserve_count
    with_reserve = purchased + reserve

    installed_cm2 = max(0.0, installed_area_cm2)
    purchased_cm2 = with_reserve * tile_area_cm2
    waste_cm2 = max(0.0, purchased_cm2 - installed_cm2)
    waste_pct = waste_cm2 / purchased_cm2 * 100 if purchased_cm2 > 0 else 0.0

    installed_tile_equivalent = installed_cm2 / tile_area_cm2 if tile_area_cm2 > 0 else 0.0
    waste_tiles_est = max(0, with_reserve - math.ceil(installed_tile_equivalent))

    total_placed = full_tiles + cut_tiles
    cut_tiles_pct = cut_tiles / total_placed * 100 if total_placed > 0 else 0.0

    installed_m2 = cm2_to_m2(installed_cm2)
    packs = math.ceil(installed_m2 / pricing.pack_m2) if pricing.pack_m2 > 0 else None
    price_total = installed_m2 * pricing.price_per_m2
    if packs is not None:
        purchase_cost = packs * pricing.pack_m2 * pricing.price_per_m2
    else:
        purchase_cost = price_total

    return PurchaseSummary(
        full_tiles=full_tiles,
        cut_tiles=cut_tiles,
        reused_cuts=reused_cuts,
        new_tiles_for_cuts=new_tiles_for_cuts,
        purchased_tiles=purchased,
        reserve_tiles=reserve,
        purchased_tiles_with_reserve=with_reserve,
        tile_area_cm2=tile_area_cm2,
        installed_area_m2=installed_m2,
        purchased_area_m2=cm2_to_m2(purchased_cm2),
        waste_area_m2=cm2_to_m2(waste_cm2),
        waste_pct=waste_pct,
        waste_tiles_est=waste_tiles_est,
        total_placed_tiles=total_placed,
        cut_tiles_pct=cut_tiles_pct,
        cut_need_area_m2=cm2_to_m2(cut_need_area_cm2),
        price_per_m2=pricing.price_per_m2,
        pack_m2=pricing.pack_m2,
        packs=packs,
        price_total=price_total,
        purchase_cost=purchase_cost,
    )
