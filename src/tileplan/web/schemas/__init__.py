"""Pydantic schemas for the REST API."""

from tileplan.web.schemas.requests import EstimateRequest, FloorRequest, InvalidateRequest, ValidateRequest
from tileplan.web.schemas.responses import (
    ErrorResponseSchema,
    EstimateResponseSchema,
    FloorResponseSchema,
    ValidationResultSchema,
)

__all__ = [
    "ErrorResponseSchema",
    "EstimateRequest",
    "EstimateResponseSchema",
    "FloorRequest",
    "FloorResponseSchema",
    "InvalidateRequest",
    "ValidateRequest",
    "ValidationResultSchema",
]
