"""
Application factory - builds FastAPI app with all middleware and routes.
"""

import traceback
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from docgen import __version__
from docgen.config import Settings, get_settings
from docgen.modules.generate.router import router as generate_router
from docgen.modules.health.router import router as health_router
from docgen.modules.render.limiter import RenderLimiter
from docgen.shared.errors import DocGenError, PayloadTooLargeError
from docgen.shared.ids import generate_request_id
from docgen.shared.logging import (
    clear_request_context,
    get_logger,
    set_request_context,
    setup_logging,
)
from docgen.shared.types import RequestContext

logger = get_logger(__name__)

SERVICE_STATUS = "Document Generation Service is running"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan - startup and shutdown."""
    settings: Settings = app.state.settings

    setup_logging(settings.log_level)
    logger.info(
        f"Starting document generation service ({settings.environment}, "
        f"max {settings.max_concurrent_renders} concurrent renders)"
    )

    yield

    logger.info("Document generation service stopped")


def _error_body(settings: Settings, status_code: int, message: str, exc: BaseException) -> dict:
    body: dict[str, Any] = {"error": message}
    if settings.is_development and status_code >= 500:
        body["stack"] = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
    return body


def build_app(settings: Settings | None = None) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        settings: Optional settings override (useful for testing)

    Returns:
        Configured FastAPI application
    """
    if settings is None:
        settings = get_settings()

    app = FastAPI(
        title="Document Generation Service",
        description="Converts HTML fragments into PDF or DOCX documents",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.render_limiter = RenderLimiter(settings.max_concurrent_renders)

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Request body limit
    @app.middleware("http")
    async def body_limit_middleware(request: Request, call_next: Any) -> Response:
        """Reject bodies whose declared length exceeds max_body_bytes."""
        length = request.headers.get("content-length")
        if length is not None and length.isdigit() and int(length) > settings.max_body_bytes:
            exc = PayloadTooLargeError()
            logger.warning(f"Rejected {request.method} {request.url.path}: {length} byte body")
            return JSONResponse(status_code=exc.http_status, content=exc.to_dict())
        return await call_next(request)

    # Request context middleware
    @app.middleware("http")
    async def request_context_middleware(request: Request, call_next: Any) -> Response:
        """Attach request context for logging."""
        ctx = RequestContext(
            request_id=request.headers.get("X-Request-ID", generate_request_id()),
            method=request.method,
            path=request.url.path,
        )
        set_request_context(ctx)

        try:
            response = await call_next(request)
            response.headers["X-Request-ID"] = ctx.request_id
            return response
        finally:
            clear_request_context()

    @app.exception_handler(DocGenError)
    async def docgen_error_handler(request: Request, exc: DocGenError) -> JSONResponse:
        """Handle DocGenError with consistent JSON response."""
        logger.error(f"Error {exc.http_status}: {exc.message}")
        return JSONResponse(
            status_code=exc.http_status,
            content=_error_body(settings, exc.http_status, exc.message, exc),
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        """Framework HTTP errors (unknown route, wrong method) in the same shape."""
        message = "Route not found" if exc.status_code == 404 else str(exc.detail)
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": message},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.error(f"Unhandled error: {exc}", exc_info=True)
        return JSONResponse(
            status_code=500,
            content=_error_body(settings, 500, "Something went wrong", exc),
        )

    # Register routers
    app.include_router(health_router)
    app.include_router(generate_router)

    # Root endpoint
    @app.get("/")
    async def root() -> dict[str, str]:
        return {"status": SERVICE_STATUS}

    return app
