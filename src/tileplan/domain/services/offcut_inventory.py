"""Offcut inventory with kerf-aware fit checks and guillotine splitting.

The inventory is a mutable pool of rectangular remnants owned by exactly
one computation (or one floor-sharing pass). Cut shapes ask it for a
rectangle of a given size; a matching remnant is removed and, when cut
optimization is enabled, whatever is left of it is split back into the
pool as up to two guillotine strips.
"""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass

from ..value_objects import OffcutProvenance, OffcutRect

logger = logging.getLogger(__name__)


def fits(off_w: float, off_h: float, need_w: float, need_h: float, kerf: float) -> bool:
    """Check whether an offcut can supply a need on both axes.

    An axis that matches exactly needs no saw cut and so no kerf. An axis
    where the offcut is strictly larger needs a cut, which consumes kerf,
    so the offcut must be at least ``need + kerf`` there.

    Args:
        off_w: Offcut width.
        off_h: Offcut height.
        need_w: Requested width.
        need_h: Requested height.
        kerf: Saw blade width.

    Returns:
        True if the offcut can supply the requested rectangle.
    """
    kerf = max(0.0, kerf)
    if not (off_w > 0 and off_h > 0 and need_w > 0 and need_h > 0):
        return False
    for off, need in ((off_w, need_w), (off_h, need_h)):
        if off < need:
            return False
        if off != need and off < need + kerf:
            return False
    return True


def guillotine_remainders(
    container_w: float,
    container_h: float,
    need_w: float,
    need_h: float,
    kerf: float,
) -> list[tuple[float, float]]:
    """Split what is left after cutting ``need`` from a container corner.

    Produces a right-hand strip spanning the full container height and a
    bottom strip as wide as the need. A strip only pays kerf when it exists.
    Strips with no positive extent are dropped.

    Returns:
        Up to two (width, height) tuples; empty if the need does not fit.
    """
    kerf = max(0.0, kerf)
    if not (container_w > 0 and container_h > 0 and need_w > 0 and need_h > 0):
        return []
    if need_w > container_w or need_h > container_h:
        return []

    remainders: list[tuple[float, float]] = []

    right_w = container_w - need_w - (kerf if container_w > need_w else 0.0)
    if right_w > 0:
        remainders.append((right_w, container_h))

    bottom_h = container_h - need_h - (kerf if container_h > need_h else 0.0)
    if bottom_h > 0:
        remainders.append((need_w, bottom_h))

    return remainders


@dataclass(frozen=True)
class TakeResult:
    """Outcome of a successful :meth:`OffcutInventory.take`.

    Attributes:
        used: The offcut removed from the inventory.
        rotated: True if the need was matched in swapped orientation.
        remainders: Offcuts split from ``used`` and added back to the pool.
    """

    used: OffcutRect
    rotated: bool
    remainders: tuple[OffcutRect, ...] = ()


@dataclass(frozen=True)
class _Candidate:
    index: int
    rotated: bool
    leftover_area: float


class OffcutInventory:
    """Pool of reusable offcuts for one computation.

    Besides the general pool the inventory holds reserved placeholders for
    complementary pairs. A reservation is keyed by its pair and can only be
    claimed by that pair, never by an ordinary :meth:`take`.
    """

    def __init__(self) -> None:
        self._rects: list[OffcutRect] = []
        self._reserved: dict[tuple[int, int], OffcutRect] = {}
        self._seq = 0

    def __len__(self) -> int:
        return len(self._rects)

    def _next_id(self) -> str:
        self._seq += 1
        return f"o{self._seq}"

    def add(
        self,
        width: float,
        height: float,
        provenance: OffcutProvenance = OffcutProvenance.TILE,
        half_tile: bool = False,
    ) -> str | None:
        """Add a remnant to the pool.

        Returns:
            The new offcut id, or None if either dimension is not positive.
        """
        if not (width > 0 and height > 0):
            return None
        rect = OffcutRect(
            id=self._next_id(),
            width=width,
            height=height,
            provenance=provenance,
            half_tile=half_tile,
        )
        self._rects.append(rect)
        return rect.id

    def get(self, offcut_id: str) -> OffcutRect | None:
        """Look up an offcut still in the pool."""
        for rect in self._rects:
            if rect.id == offcut_id:
                return rect
        return None

    def take(
        self,
        need_w: float,
        need_h: float,
        *,
        allow_rotate: bool = True,
        optimize_cuts: bool = False,
        kerf: float = 0.0,
    ) -> TakeResult | None:
        """Remove and return an offcut that can supply the requested size.

        Without ``optimize_cuts`` the first fitting offcut is used (upright
        orientation checked before rotated). With ``optimize_cuts`` every
        offcut is scanned and the one leaving the least area wins; the
        unused part of it is split back into the pool.

        Args:
            need_w: Requested width.
            need_h: Requested height.
            allow_rotate: Also try the need turned by 90 degrees.
            optimize_cuts: Use best fit and guillotine splitting.
            kerf: Saw blade width.

        Returns:
            The consumed offcut and any remainders, or None if nothing fits.
        """
        if not (need_w > 0 and need_h > 0):
            return None

        need_area = need_w * need_h
        best: _Candidate | None = None

        for i, rect in enumerate(self._rects):
            orientations = [(False, need_w, need_h)]
            if allow_rotate:
                orientations.append((True, need_h, need_w))

            for rotated, w, h in orientations:
                if not fits(rect.width, rect.height, w, h, kerf):
                    continue
                candidate = _Candidate(
                    index=i,
                    rotated=rotated,
                    leftover_area=rect.area - need_area,
                )
                if not optimize_cuts:
                    return self._consume(candidate, need_w, need_h, optimize_cuts, kerf)
                if best is None or candidate.leftover_area < best.leftover_area:
                    best = candidate

        if best is None:
            return None
        return self._consume(best, need_w, need_h, optimize_cuts, kerf)

    def _consume(
        self,
        candidate: _Candidate,
        need_w: float,
        need_h: float,
        optimize_cuts: bool,
        kerf: float,
    ) -> TakeResult:
        chosen = self._rects.pop(candidate.index)

        used_w = need_h if candidate.rotated else need_w
        used_h = need_w if candidate.rotated else need_h

        remainders: list[OffcutRect] = []
        if optimize_cuts:
            for w, h in guillotine_remainders(chosen.width, chosen.height, used_w, used_h, kerf):
                new_id = self.add(w, h, OffcutProvenance.OFFCUT)
                if new_id is not None:
                    remainders.append(self._rects[-1])

        logger.debug(
            "Took offcut %s (%.2fx%.2f) for %.2fx%.2f%s, %d remainder(s)",
            chosen.id,
            chosen.width,
            chosen.height,
            need_w,
            need_h,
            " rotated" if candidate.rotated else "",
            len(remainders),
        )

        return TakeResult(used=chosen, rotated=candidate.rotated, remainders=tuple(remainders))

    def reserve(self, pair_key: tuple[int, int], width: float, height: float) -> OffcutRect:
        """Hold a placeholder for the second member of a complementary pair."""
        rect = OffcutRect(
            id=self._next_id(),
            width=width,
            height=height,
            provenance=OffcutProvenance.TILE,
            half_tile=True,
        )
        self._reserved[pair_key] = rect
        return rect

    def claim(self, pair_key: tuple[int, int]) -> OffcutRect | None:
        """Remove and return the placeholder reserved for a pair, if any."""
        return self._reserved.pop(pair_key, None)

    @property
    def reserved_count(self) -> int:
        """Number of unclaimed pair placeholders."""
        return len(self._reserved)

    def snapshot(self) -> tuple[OffcutRect, ...]:
        """Offcuts currently in the general pool, oldest first."""
        return tuple(self._rects)

    def copy(self) -> "OffcutInventory":
        """Independent copy sharing no mutable state with this inventory."""
        return copy.deepcopy(self)
