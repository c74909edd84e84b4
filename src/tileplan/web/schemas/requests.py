"""Pydantic request schemas for the REST API."""

from typing import Any

from pydantic import BaseModel, Field


class EstimateRequest(BaseModel):
    """Estimate a surface described by a full configuration document."""

    config: dict[str, Any] = Field(..., description="Configuration with a 'surface' entry")
    include_usage: bool = Field(default=False, description="Return per-tile usage records")


class FloorRequest(BaseModel):
    """Estimate every surface of a floor."""

    config: dict[str, Any] = Field(..., description="Configuration with a 'floor' entry")
    share_offcuts: bool | None = Field(default=None, description="Override floor.share_offcuts")


class ValidateRequest(BaseModel):
    """Validate a configuration without estimating."""

    config: dict[str, Any] = Field(..., description="Configuration document")


class InvalidateRequest(BaseModel):
    """Drop memoized results."""

    surface_id: str | None = Field(default=None, description="Surface to forget; all when omitted")
