"""Estimate endpoints."""

from typing import Any

from fastapi import APIRouter, HTTPException

from tileplan.application.config import load_config_from_dict
from tileplan.infrastructure import JsonExporter
from tileplan.web.dependencies import FloorCommandDep, ServiceFactoryDep, SurfaceCommandDep
from tileplan.web.exceptions import EstimateFailedError
from tileplan.web.schemas.requests import EstimateRequest, FloorRequest, InvalidateRequest
from tileplan.web.schemas.responses import EstimateResponseSchema, FloorResponseSchema

router = APIRouter(tags=["estimate"])


@router.post("/estimate", response_model=EstimateResponseSchema)
async def estimate_surface(
    request: EstimateRequest,
    command: SurfaceCommandDep,
) -> dict[str, Any]:
    """Estimate tiles to purchase for one surface.

    Args:
        request: Configuration document with a ``surface`` entry.
        command: Injected surface estimate command.

    Returns:
        Tile counts, material, pricing and optionally usage records.

    Raises:
        ConfigError: If the configuration is invalid (mapped to 422).
        EstimateFailedError: If the surface cannot be estimated (422).
    """
    config = load_config_from_dict(request.config)
    if config.surface is None:
        raise HTTPException(
            status_code=422,
            detail={"error": "Configuration has no 'surface' entry", "error_type": "no_surface_selected"},
        )

    output = command.execute(config.surface)
    if output.failure is not None:
        raise EstimateFailedError(output.surface_id, output.failure)

    return JsonExporter(include_usage=request.include_usage).estimate_to_dict(output)


@router.post("/floor", response_model=FloorResponseSchema)
async def estimate_floor(
    request: FloorRequest,
    command: FloorCommandDep,
) -> dict[str, Any]:
    """Estimate all surfaces of a floor in list order.

    Failed surfaces are reported in place and left out of the totals.
    """
    config = load_config_from_dict(request.config)
    if config.floor is None:
        raise HTTPException(
            status_code=422,
            detail={"error": "Configuration has no 'floor' entry", "error_type": "no_surface_selected"},
        )

    output = command.execute(config.floor, share_offcuts=request.share_offcuts)
    return JsonExporter(include_usage=False).floor_to_dict(output)


@router.post("/cache/invalidate")
async def invalidate_cache(
    request: InvalidateRequest,
    factory: ServiceFactoryDep,
) -> dict[str, Any]:
    """Forget memoized results for one surface or for all surfaces."""
    cache = factory.get_cache()
    cache.invalidate(request.surface_id)
    return {"invalidated": request.surface_id or "all", "cached_surfaces": len(cache)}
