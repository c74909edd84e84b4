"""Service factory for dependency injection."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from tileplan.application.cache import EstimateCache
    from tileplan.application.commands import EstimateFloorCommand, EstimateSurfaceCommand
    from tileplan.contracts.protocols import TileRasterizer


@dataclass
class ServiceFactory:
    """Creates and shares the services behind the estimate commands.

    The rasterizer and the cache are created lazily and reused, so every
    command obtained from one factory sees the same memoized results and
    ``invalidate`` on any of them affects all.
    """

    _rasterizer: "TileRasterizer | None" = field(default=None, init=False, repr=False)
    _cache: "EstimateCache | None" = field(default=None, init=False, repr=False)

    def get_rasterizer(self) -> "TileRasterizer":
        """Shared tile rasterizer."""
        if self._rasterizer is None:
            from tileplan.infrastructure.rasterizer import ShapelyTileRasterizer

            self._rasterizer = ShapelyTileRasterizer()
        return self._rasterizer

    def get_cache(self) -> "EstimateCache":
        """Shared estimate cache."""
        if self._cache is None:
            from tileplan.application.cache import EstimateCache

            self._cache = EstimateCache()
        return self._cache

    def create_surface_command(self) -> "EstimateSurfaceCommand":
        """Command estimating a single surface."""
        from tileplan.application.commands import EstimateSurfaceCommand

        return EstimateSurfaceCommand(rasterizer=self.get_rasterizer(), cache=self.get_cache())

    def create_floor_command(self) -> "EstimateFloorCommand":
        """Command estimating all surfaces of a floor."""
        from tileplan.application.commands import EstimateFloorCommand

        return EstimateFloorCommand(surface_command=self.create_surface_command())


_default_factory: ServiceFactory | None = None


def get_factory() -> ServiceFactory:
    """Process-wide default factory."""
    global _default_factory
    if _default_factory is None:
        _default_factory = ServiceFactory()
    return _default_factory


def reset_factory() -> None:
    """Drop the default factory, mainly for tests."""
    global _default_factory
    _default_factory = None


def set_factory(factory: ServiceFactory) -> None:
    """Replace the default factory."""
    global _default_factory
    _default_factory = factory
