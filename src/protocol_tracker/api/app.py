"""FastAPI application factory."""

import logging

from fastapi import APIRouter, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from protocol_tracker.api.equipment import router as equipment_router
from protocol_tracker.api.responses import failure, from_error
from protocol_tracker.api.routine_versions import router as routine_versions_router
from protocol_tracker.api.schedule_items import router as schedule_items_router
from protocol_tracker.api.user_diet import router as user_diet_router
from protocol_tracker.app_logging import configure_logging
from protocol_tracker.containers import AppContainer
from protocol_tracker.errors import NoChangesError, ProtocolTrackerError


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    app = FastAPI()
    app.state.container = container

    api_router = APIRouter(prefix=container.settings.api_prefix)
    api_router.include_router(routine_versions_router)
    api_router.include_router(user_diet_router)
    api_router.include_router(schedule_items_router)
    api_router.include_router(equipment_router)
    app.include_router(api_router)

    @app.exception_handler(ProtocolTrackerError)
    async def handle_app_error(
        request: Request, exc: ProtocolTrackerError
    ) -> JSONResponse:
        if not isinstance(exc, NoChangesError):
            logger.warning(
                "%s %s failed: %s",
                request.method,
                request.url.path,
                exc.message,
                extra={"error_type": exc.error_type},
            )
        return from_error(exc)

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return failure(400, _validation_message(exc), "VALIDATION_ERROR")

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("%s %s error", request.method, request.url.path)
        return failure(500, "Internal server error", "INTERNAL_ERROR")

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app


def _validation_message(exc: RequestValidationError) -> str:
    """Summarise the first validation failure."""
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = str(first.get("msg", "Invalid value"))
    return f"{location}: {message}" if location else message
