"""FastAPI application entry point."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from call_gateway.api.v1 import twilio, webhooks
from call_gateway.config import get_settings
from call_gateway.errors import GatewayError
from call_gateway.logging_config import configure_logging, resolve_log_level
from call_gateway.middleware import RequestLoggingMiddleware

logger = logging.getLogger("call_gateway")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan handler."""
    settings = get_settings()
    logger.info(
        "app.starting",
        extra={"app_name": settings.app_name, "twilio_mock": settings.twilio_use_mock},
    )
    yield
    logger.info("app.stopping")


async def gateway_error_handler(request: Request, exc: GatewayError) -> JSONResponse:
    """Render gateway errors as JSON with a machine-readable kind."""
    logger.warning(
        "request.gateway_error",
        extra={"path": request.url.path, "error": exc.kind, "detail": exc.detail},
    )
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()
    configure_logging(resolve_log_level(settings.log_level))

    app = FastAPI(
        title=settings.app_name,
        description="Twilio voice call control: access tokens, TwiML routing and transfers",
        version="0.1.0",
        debug=settings.debug,
        lifespan=lifespan,
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_origin_regex=settings.cors_origin_regex,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestLoggingMiddleware)

    app.add_exception_handler(GatewayError, gateway_error_handler)

    # Register routers
    app.include_router(twilio.router)
    app.include_router(webhooks.router)

    @app.get("/health")
    async def health_check() -> dict[str, str]:
        """Health check endpoint."""
        return {"status": "healthy"}

    return app


app = create_app()
