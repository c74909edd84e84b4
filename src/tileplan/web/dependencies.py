"""FastAPI dependency injection for estimate services."""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends

from tileplan.application.commands import EstimateFloorCommand, EstimateSurfaceCommand
from tileplan.application.factory import ServiceFactory, get_factory


@lru_cache(maxsize=1)
def get_service_factory() -> ServiceFactory:
    """Get cached ServiceFactory instance."""
    return get_factory()


def get_surface_command(
    factory: Annotated[ServiceFactory, Depends(get_service_factory)],
) -> EstimateSurfaceCommand:
    """Dependency for EstimateSurfaceCommand."""
    return factory.create_surface_command()


def get_floor_command(
    factory: Annotated[ServiceFactory, Depends(get_service_factory)],
) -> EstimateFloorCommand:
    """Dependency for EstimateFloorCommand."""
    return factory.create_floor_command()


ServiceFactoryDep = Annotated[ServiceFactory, Depends(get_service_factory)]
SurfaceCommandDep = Annotated[EstimateSurfaceCommand, Depends(get_surface_command)]
FloorCommandDep = Annotated[EstimateFloorCommand, Depends(get_floor_command)]
