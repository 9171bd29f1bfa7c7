"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from nutrition_ai.api.auth import router as auth_router
from nutrition_ai.api.families import router as families_router
from nutrition_ai.api.goals import router as goals_router
from nutrition_ai.api.meals import router as meals_router
from nutrition_ai.api.progress import router as progress_router
from nutrition_ai.api.responses import error_response, ok
from nutrition_ai.api.users import router as users_router
from nutrition_ai.app_logging import configure_logging
from nutrition_ai.config import parse_cors_origins
from nutrition_ai.containers import AppContainer
from nutrition_ai.errors import AppError


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(title="Nutrition AI API", lifespan=lifespan)
    app.state.container = container

    # Registered before CORS so error envelopes still pass through it.
    @app.middleware("http")
    async def envelope_unexpected_errors(
        request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        try:
            return await call_next(request)
        except Exception:
            logger.exception(
                "Unhandled error on %s %s", request.method, request.url.path
            )
            return error_response(500, "Internal server error")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=parse_cors_origins(container.settings.cors_origins),
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )

    @app.exception_handler(AppError)
    async def handle_app_error(request: Request, exc: AppError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc)
        return error_response(exc.status_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        fields = [
            str(error["loc"][-1]) for error in exc.errors() if error.get("loc")
        ]
        message = "Invalid request"
        if fields:
            message = f"Invalid request fields: {', '.join(fields)}"
        return error_response(400, message)

    app.include_router(auth_router)
    app.include_router(meals_router)
    app.include_router(users_router)
    app.include_router(goals_router)
    app.include_router(progress_router)
    app.include_router(families_router)

    @app.get("/health")
    async def health() -> dict[str, object]:
        """Simple health check endpoint."""
        return ok({"status": "ok"})

    return app
