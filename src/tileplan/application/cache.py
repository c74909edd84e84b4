"""Memoization of consumption results per surface.

Entries are keyed by surface id and guarded by a hash of every input that
affects tile placement and consumption. The cache never tracks
dependencies on its own: callers must invalidate a surface whenever one of
its inputs changes or an edit is undone. A missed invalidation gives a
stale result, never a corrupted one.
"""

from __future__ import annotations

import hashlib
import json
import logging
from dataclasses import dataclass
from typing import Any

from tileplan.application.config.schema import PatternConfigSchema, SurfaceConfigSchema
from tileplan.domain.services import ConsumptionResult

logger = logging.getLogger(__name__)

# Surface fields that influence placement and consumption. Name and pricing
# are applied after consumption and stay out of the key.
KEY_FIELDS = frozenset({"width", "height", "polygon", "exclusions", "tile", "grout", "waste", "analysis"})


def snapshot_key(
    surface: SurfaceConfigSchema,
    pattern: PatternConfigSchema | None,
) -> str:
    """Stable hash of the inputs that determine a consumption result.

    Args:
        surface: Surface configuration.
        pattern: Pattern actually used, including one inherited from the
            floor.

    Returns:
        Hex digest of the JSON snapshot.
    """
    snapshot: dict[str, Any] = surface.model_dump(mode="json", include=set(KEY_FIELDS))
    snapshot["pattern"] = pattern.model_dump(mode="json") if pattern is not None else None
    encoded = json.dumps(snapshot, sort_keys=True, separators=(",", ":"))
    return hashlib.sha256(encoded.encode("utf-8")).hexdigest()


@dataclass(frozen=True)
class CachedConsumption:
    """What is stored for a surface."""

    key: str
    consumption: ConsumptionResult
    installed_area_cm2: float


class EstimateCache:
    """Explicit key -> result store with manual invalidation."""

    def __init__(self) -> None:
        self._entries: dict[str, CachedConsumption] = {}
        self.hits = 0
        self.misses = 0

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, surface_id: object) -> bool:
        return surface_id in self._entries

    def get(self, surface_id: str, key: str) -> CachedConsumption | None:
        """Entry for a surface if it was stored under the same key."""
        entry = self._entries.get(surface_id)
        if entry is None or entry.key != key:
            self.misses += 1
            return None
        self.hits += 1
        return entry

    def put(self, surface_id: str, entry: CachedConsumption) -> None:
        """Store or replace the entry for a surface."""
        self._entries[surface_id] = entry

    def invalidate(self, surface_id: str | None = None) -> None:
        """Drop one surface's entry, or every entry when ``surface_id`` is None."""
        if surface_id is None:
            logger.debug("Invalidating all %d cached surfaces", len(self._entries))
            self._entries.clear()
        else:
            self._entries.pop(surface_id, None)
