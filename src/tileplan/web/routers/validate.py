"""Configuration validation endpoints."""

from fastapi import APIRouter

from tileplan.application.config import load_config_from_dict, validate_config
from tileplan.web.schemas.requests import ValidateRequest
from tileplan.web.schemas.responses import ValidationResultSchema

router = APIRouter(prefix="/validate", tags=["validate"])


@router.post("", response_model=ValidationResultSchema)
async def validate_configuration(request: ValidateRequest) -> ValidationResultSchema:
    """Validate a configuration without estimating.

    Schema errors raise ConfigError and are answered with 422 by the
    registered handler.
    """
    config = load_config_from_dict(request.config)
    result = validate_config(config)

    return ValidationResultSchema(
        is_valid=result.is_valid,
        errors=[{"message": e.message, "path": e.path} for e in result.errors],
        warnings=[{"message": w.message, "path": w.path} for w in result.warnings],
    )
