"""Complementary pair matching for cut shapes.

Diagonal layouts cut many tiles into two pieces that both end up on the
surface, typically two right triangles from one square. Such pieces are
recognised here so the consumption walk can charge a single tile for both.
The scan is greedy: the first acceptable partner wins and no global
matching is attempted.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Mapping

from .cut_analysis import CutAnalysis

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PairingConfig:
    """Acceptance rules for complementary pairs.

    Attributes:
        tolerance: Maximum bbox width and height difference in cm.
        area_min: Lowest combined area as a fraction of one tile.
        area_max: Highest combined area as a fraction of one tile.
    """

    tolerance: float = 1.0
    area_min: float = 0.90
    area_max: float = 1.10

    def __post_init__(self) -> None:
        if self.tolerance < 0:
            raise ValueError("Pair tolerance must be non-negative")
        if not 0 <= self.area_min <= self.area_max:
            raise ValueError("Pair area band must satisfy 0 <= min <= max")


def find_complementary_pairs(
    analyses: Mapping[int, CutAnalysis],
    tile_area: float,
    config: PairingConfig | None = None,
) -> dict[int, int]:
    """Greedily pair cut shapes that look like two halves of one tile.

    Args:
        analyses: Analysis per placed-tile index, for non-degenerate cut
            shapes only. Iteration order is the scan order.
        tile_area: Nominal tile area in cm².
        config: Matching rules.

    Returns:
        Symmetric mapping index -> partner index.
    """
    config = config or PairingConfig()
    indices = list(analyses)
    pairs: dict[int, int] = {}

    low = tile_area * config.area_min
    high = tile_area * config.area_max

    for pos, first in enumerate(indices):
        if first in pairs:
            continue
        a = analyses[first]
        for second in indices[pos + 1 :]:
            if second in pairs:
                continue
            b = analyses[second]
            if abs(a.bbox.width - b.bbox.width) > config.tolerance:
                continue
            if abs(a.bbox.height - b.bbox.height) > config.tolerance:
                continue
            combined = a.true_area + b.true_area
            if not low <= combined <= high:
                continue
            pairs[first] = second
            pairs[second] = first
            logger.debug(
                "Paired cut %d with %d: combined %.1f of %.1f cm²",
                first,
                second,
                combined,
                tile_area,
            )
            break

    return pairs


def pair_aware_order(count: int, pairs: Mapping[int, int]) -> list[int]:
    """Processing order that puts each partner directly after its pair.

    Unpaired indices keep their relative order; a pair is emitted where its
    first member would have appeared.
    """
    order: list[int] = []
    emitted: set[int] = set()
    for i in range(count):
        if i in emitted:
            continue
        order.append(i)
        emitted.add(i)
        partner = pairs.get(i)
        if partner is not None and partner not in emitted:
            order.append(partner)
            emitted.add(partner)
    return order
