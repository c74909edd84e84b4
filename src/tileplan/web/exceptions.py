"""Custom exceptions and error handlers for the REST API."""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from tileplan.application.config import ConfigError
from tileplan.application.dtos import EstimateFailure


class EstimateFailedError(Exception):
    """Raised when a surface could not be estimated."""

    def __init__(self, surface_id: str | None, failure: EstimateFailure) -> None:
        self.surface_id = surface_id
        self.failure = failure
        super().__init__(failure.message)


def register_exception_handlers(app: FastAPI) -> None:
    """Register custom exception handlers with the FastAPI app."""

    @app.exception_handler(EstimateFailedError)
    async def estimate_failed_handler(
        request: Request, exc: EstimateFailedError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=422,
            content={
                "error": exc.failure.message,
                "error_type": exc.failure.kind.value,
                "details": {"surface_id": exc.surface_id},
            },
        )

    @app.exception_handler(ConfigError)
    async def config_error_handler(request: Request, exc: ConfigError) -> JSONResponse:
        return JSONResponse(
            status_code=422,
            content={
                "error": "Invalid configuration",
                "error_type": exc.error_type,
                "details": exc.details or None,
            },
        )
