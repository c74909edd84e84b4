"""Service protocols for dependency injection.

The consumption engine does not place tiles itself. Placement, clipping
and net area are supplied by a rasterizer behind this protocol, so the
commands can be tested with a stub and the geometry backend can change
without touching the domain services.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from tileplan.domain.surface import NetArea, SurfaceSpec
    from tileplan.domain.value_objects import PlacedTile


@runtime_checkable
class TileRasterizer(Protocol):
    """Protocol for turning a surface into placed tile shapes.

    Implementations raise :class:`tileplan.domain.surface.TileGenerationError`
    when tiles cannot be produced; the message is reported to the caller
    unchanged.
    """

    def available_area(self, surface: SurfaceSpec) -> NetArea:
        """Net tileable region of a surface after exclusions.

        Args:
            surface: Surface description.

        Returns:
            NetArea with the region and its true area. An empty NetArea
            means nothing can be tiled.
        """
        ...

    def place_tiles(self, surface: SurfaceSpec, net_area: NetArea) -> list[PlacedTile]:
        """Lay the pattern over the net area and clip every tile.

        Args:
            surface: Surface description including tile and pattern.
            net_area: Result of :meth:`available_area`.

        Returns:
            Placed tiles in a stable order, full or cut.
        """
        ...
