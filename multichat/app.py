from __future__ import annotations

from typing import Optional

import httpx
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from .config import Settings, get_settings
from .dispatcher import ChatDispatcher
from .errors import AllProvidersFailed, ChatError
from .logging_config import configure_logging, get_logger
from .providers import ProviderRegistry
from .routes import api_router
from .utils.responses import error_response

logger = get_logger(__name__)


# Register global exception handlers for consistent error responses across the API
def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(AllProvidersFailed)
    async def _all_failed_handler(request: Request, exc: AllProvidersFailed):
        return error_response(
            exc.message,
            status_code=exc.status_code,
            details=exc.original_error,
            fallback_error=exc.fallback_error,
        )

    @app.exception_handler(ChatError)
    async def _chat_error_handler(request: Request, exc: ChatError):
        logger.debug(f"chat error: {exc.message} ({exc.status_code}) on {request.url.path}")
        return error_response(exc.message, status_code=exc.status_code)

    @app.exception_handler(RequestValidationError)
    async def _validation_exception_handler(request: Request, exc: RequestValidationError):
        logger.debug(f"validation error on {request.url.path}: {exc.errors()}")
        return error_response("Invalid request body", status_code=status.HTTP_400_BAD_REQUEST)

    @app.exception_handler(Exception)
    async def _unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception(f"Unhandled error on {request.url.path}")
        return error_response("Internal server error", status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)


def create_app(
    settings: Optional[Settings] = None,
    http_client: Optional[httpx.AsyncClient] = None,
) -> FastAPI:
    """Build the ASGI app with its own registry and HTTP client."""

    settings = settings or get_settings()
    client = http_client or httpx.AsyncClient(timeout=settings.request_timeout)
    registry = ProviderRegistry.from_settings(settings, client)

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        docs_url=settings.resolved_docs_url,
        redoc_url=None,
    )
    app.state.settings = settings
    app.state.registry = registry
    app.state.dispatcher = ChatDispatcher(
        registry,
        timeout=settings.request_timeout,
        history_window=settings.history_window,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)
    app.include_router(api_router)

    @app.on_event("startup")
    async def _announce() -> None:
        logger.info(f"🚀 Server running on port {settings.server_port}")
        logger.info(f"📡 CORS enabled for: {', '.join(settings.cors_allow_origins)}")
        logger.info(f"🤖 Available AI models: {[p.value for p in registry.available_ids()]}")
        logger.info(f"Fallback order: {[p.value for p in registry.priority]}")

    @app.on_event("shutdown")
    async def _close_client() -> None:
        await client.aclose()
        logger.info("HTTP client closed")

    return app


configure_logging(get_settings().secrets)
app = create_app()

__all__ = ["app", "create_app", "register_exception_handlers"]
