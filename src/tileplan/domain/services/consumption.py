"""Consumption walk turning placed-tile shapes into tile demand.

The engine visits placed tiles in a pairing-aware order and decides for each
cut shape whether it is satisfied by its complementary partner, by an offcut
from the inventory, or by a new tile. New tiles leave remnants behind which
later shapes may reuse.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Sequence

from ..value_objects import (
    BoundingBox,
    NominalTile,
    OffcutProvenance,
    OffcutRect,
    PlacedTile,
    UsageSource,
)
from .cut_analysis import CutAnalysis, CutAnalysisConfig, CutShapeAnalyzer
from .offcut_inventory import OffcutInventory, guillotine_remainders
from .pairing import PairingConfig, find_complementary_pairs, pair_aware_order

logger = logging.getLogger(__name__)

# Non-triangular cuts below this fill ratio have their request shrunk
# towards the true footprint.
SHRINK_RATIO_THRESHOLD = 0.75

# Smallest side of the coarse fallback remnant.
MIN_FALLBACK_SIDE = 0.1


@dataclass(frozen=True)
class ConsumptionOptions:
    """Cutting policy for one consumption walk.

    Attributes:
        allow_rotate: Offcuts may be used turned by 90 degrees.
        optimize_cuts: Use best-fit offcut selection and guillotine
            remainder tracking instead of first-fit and a coarse remnant.
        kerf: Saw blade width in cm, only charged when ``optimize_cuts``.
    """

    allow_rotate: bool = True
    optimize_cuts: bool = False
    kerf: float = 0.0

    def __post_init__(self) -> None:
        if self.kerf < 0:
            raise ValueError("Kerf must be non-negative")

    @property
    def effective_kerf(self) -> float:
        """Kerf applied to fit checks and splits."""
        return self.kerf if self.optimize_cuts else 0.0


@dataclass(frozen=True)
class UsageRecord:
    """How one placed tile was satisfied.

    Attributes:
        index: Position of the tile in the rasterizer output.
        is_full: True for whole tiles.
        reused: True if the cut came from existing material.
        source: Outcome of the decision.
        need: Bounding box of the cut shape.
        request: (width, height) actually requested from the inventory.
        used_offcut: Offcut consumed, if any.
        created_offcuts: Remnants produced by this decision.
        partner: Index of the complementary partner, if paired.
        rotated: True if the offcut was used turned by 90 degrees.
    """

    index: int
    is_full: bool
    reused: bool
    source: UsageSource
    need: BoundingBox | None = None
    request: tuple[float, float] | None = None
    used_offcut: OffcutRect | None = None
    created_offcuts: tuple[OffcutRect, ...] = ()
    partner: int | None = None
    rotated: bool = False


@dataclass(frozen=True)
class ConsumptionResult:
    """Counts and audit trail of one consumption walk.

    Attributes:
        full_tiles: Whole tiles placed.
        cut_tiles: Non-degenerate cut tiles placed.
        reused_cuts: Cut tiles satisfied without a new tile.
        degenerate_tiles: Clipping slivers ignored.
        usage: One record per placed tile, in rasterizer order.
        pairs: Complementary pair mapping (symmetric).
        cut_need_area: Sum of cut bounding box areas in cm².
        offcuts_remaining: General pool contents after the walk.
    """

    full_tiles: int
    cut_tiles: int
    reused_cuts: int
    degenerate_tiles: int = 0
    usage: tuple[UsageRecord, ...] = ()
    pairs: dict[int, int] = field(default_factory=dict)
    cut_need_area: float = 0.0
    offcuts_remaining: tuple[OffcutRect, ...] = ()

    def __post_init__(self) -> None:
        if not 0 <= self.reused_cuts <= self.cut_tiles:
            raise ValueError("Reused cuts must be between 0 and the cut tile count")

    @property
    def new_tiles_for_cuts(self) -> int:
        """Physical tiles consumed by cut placements."""
        return max(0, self.cut_tiles - self.reused_cuts)

    @property
    def paired_count(self) -> int:
        """Number of records satisfied by a complementary partner."""
        return sum(1 for r in self.usage if r.source == UsageSource.PAIRED_OFFCUT)


def effective_request(analysis: CutAnalysis) -> tuple[float, float]:
    """Size to request for a cut shape.

    Irregular non-triangular shapes that fill less than three quarters of
    their bbox are shrunk by ``sqrt(ratio)`` on both axes. Diagonal cuts
    keep their full bbox since pairing and reuse handle them.
    """
    bbox = analysis.bbox
    if analysis.area_ratio < SHRINK_RATIO_THRESHOLD and not analysis.is_triangular:
        scale = math.sqrt(analysis.area_ratio)
        return bbox.width * scale, bbox.height * scale
    return bbox.width, bbox.height


class ConsumptionEngine:
    """Walks placed tiles and decides where each cut comes from.

    Attributes:
        tile: Nominal tile being laid.
        options: Cutting policy.
        analysis_config: Cut classification thresholds.
        pairing_config: Complementary pair rules.
    """

    def __init__(
        self,
        tile: NominalTile,
        options: ConsumptionOptions | None = None,
        analysis_config: CutAnalysisConfig | None = None,
        pairing_config: PairingConfig | None = None,
    ) -> None:
        self.tile = tile
        self.options = options or ConsumptionOptions()
        self.analysis_config = analysis_config or CutAnalysisConfig()
        self.pairing_config = pairing_config or PairingConfig()
        self._analyzer = CutShapeAnalyzer(tile, self.analysis_config)

    def run(
        self,
        tiles: Sequence[PlacedTile],
        inventory: OffcutInventory | None = None,
    ) -> ConsumptionResult:
        """Consume tiles for a list of placed shapes.

        Args:
            tiles: Placed tiles from the rasterizer, in rasterizer order.
            inventory: Offcut pool to draw from and add to. A fresh one is
                created when omitted; floor sharing passes one in.

        Returns:
            ConsumptionResult with counts and per-tile usage records.
        """
        inventory = inventory if inventory is not None else OffcutInventory()

        analyses: dict[int, CutAnalysis] = {
            i: self._analyzer.analyze(t) for i, t in enumerate(tiles) if not t.is_full
        }
        candidates = {i: a for i, a in analyses.items() if not a.is_degenerate}
        pairs = find_complementary_pairs(candidates, self.tile.area, self.pairing_config)

        full_tiles = 0
        cut_tiles = 0
        reused_cuts = 0
        degenerate = 0
        cut_need_area = 0.0
        records: dict[int, UsageRecord] = {}

        for i in pair_aware_order(len(tiles), pairs):
            if tiles[i].is_full:
                full_tiles += 1
                records[i] = UsageRecord(index=i, is_full=True, reused=False, source=UsageSource.NEW)
                continue

            analysis = analyses[i]
            if analysis.is_degenerate:
                degenerate += 1
                records[i] = UsageRecord(
                    index=i,
                    is_full=False,
                    reused=False,
                    source=UsageSource.DEGENERATE,
                    need=analysis.bbox,
                )
                continue

            cut_tiles += 1
            cut_need_area += analysis.bbox_area
            record = self._consume_cut(i, analysis, pairs.get(i), records, inventory)
            if record.reused:
                reused_cuts += 1
            records[i] = record

        logger.info(
            "Consumed %d full, %d cut (%d reused, %d paired), %d degenerate",
            full_tiles,
            cut_tiles,
            reused_cuts,
            len(pairs) // 2,
            degenerate,
        )

        return ConsumptionResult(
            full_tiles=full_tiles,
            cut_tiles=cut_tiles,
            reused_cuts=reused_cuts,
            degenerate_tiles=degenerate,
            usage=tuple(records[i] for i in range(len(tiles))),
            pairs=pairs,
            cut_need_area=cut_need_area,
            offcuts_remaining=inventory.snapshot(),
        )

    def _consume_cut(
        self,
        index: int,
        analysis: CutAnalysis,
        partner: int | None,
        records: dict[int, UsageRecord],
        inventory: OffcutInventory,
    ) -> UsageRecord:
        """Decide the source of one non-degenerate cut shape."""
        bbox = analysis.bbox
        req_w, req_h = effective_request(analysis)
        pair_key = (min(index, partner), max(index, partner)) if partner is not None else None

        if pair_key is not None and partner in records:
            placeholder = inventory.claim(pair_key)
            if placeholder is not None:
                logger.debug("Cut %d claims paired offcut %s from cut %d", index, placeholder.id, partner)
                return UsageRecord(
                    index=index,
                    is_full=False,
                    reused=True,
                    source=UsageSource.PAIRED_OFFCUT,
                    need=bbox,
                    request=(req_w, req_h),
                    used_offcut=placeholder,
                    partner=partner,
                )

        taken = inventory.take(
            req_w,
            req_h,
            allow_rotate=self.options.allow_rotate,
            optimize_cuts=self.options.optimize_cuts,
            kerf=self.options.effective_kerf,
        )
        if taken is not None:
            return UsageRecord(
                index=index,
                is_full=False,
                reused=True,
                source=UsageSource.POOL_OFFCUT,
                need=bbox,
                request=(req_w, req_h),
                used_offcut=taken.used,
                created_offcuts=taken.remainders,
                partner=partner,
                rotated=taken.rotated,
            )

        created = self._leftovers_of_new_tile(analysis, req_w, req_h, pair_key, partner, records, inventory)
        logger.debug("Cut %d needs a new tile, leaves %d offcut(s)", index, len(created))
        return UsageRecord(
            index=index,
            is_full=False,
            reused=False,
            source=UsageSource.NEW,
            need=bbox,
            request=(req_w, req_h),
            created_offcuts=created,
            partner=partner,
        )

    def _leftovers_of_new_tile(
        self,
        analysis: CutAnalysis,
        req_w: float,
        req_h: float,
        pair_key: tuple[int, int] | None,
        partner: int | None,
        records: dict[int, UsageRecord],
        inventory: OffcutInventory,
    ) -> tuple[OffcutRect, ...]:
        """Record what a freshly cut tile leaves behind."""
        bbox = analysis.bbox

        if pair_key is not None and partner not in records:
            return (inventory.reserve(pair_key, bbox.width, bbox.height),)

        ids: list[str | None] = []
        if analysis.is_triangular:
            ids.append(inventory.add(bbox.width, bbox.height, OffcutProvenance.TILE, half_tile=True))
        elif self.options.optimize_cuts:
            for w, h in guillotine_remainders(
                self.tile.width, self.tile.height, req_w, req_h, self.options.effective_kerf
            ):
                ids.append(inventory.add(w, h, OffcutProvenance.TILE))
        else:
            leftover = max(0.0, self.tile.area - analysis.true_area)
            if leftover > 0:
                max_side = self.tile.longest_side
                w = min(max_side, max(MIN_FALLBACK_SIDE, leftover / max_side))
                ids.append(inventory.add(w, leftover / w, OffcutProvenance.TILE))

        created = (inventory.get(offcut_id) for offcut_id in ids if offcut_id is not None)
        return tuple(rect for rect in created if rect is not None)
