"""Venture Hub API: FastAPI application entry point."""

import uuid
from contextlib import asynccontextmanager

# configure_structlog must run before other app imports: structlog caches the
# processor chain on first use.
from venture_hub.core.logging import configure_structlog
from venture_hub.core.config import get_settings as _get_settings_early

_early_settings = _get_settings_early()
configure_structlog(
    log_level="DEBUG" if _early_settings.debug else "INFO",
    json_logs=not _early_settings.debug,
    environment=_early_settings.environment,
)

import structlog

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.sessions import SessionMiddleware

from venture_hub.api.routes import api_router
from venture_hub.core.auth import validate_auth_config
from venture_hub.core.config import get_settings
from venture_hub.core.exceptions import VentureHubError
from venture_hub.middleware.correlation import get_correlation_id, setup_correlation_middleware
from venture_hub.store.memory import InMemoryStore
from venture_hub.store.seed import seed_store

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create (and optionally seed) the store for the process lifetime."""
    settings = get_settings()
    logger.info("startup_begin", app_name=settings.app_name, environment=settings.environment)

    validate_auth_config(settings)
    if settings.dev_auth_enabled:
        logger.warning("dev_auth_bypass_enabled", dev_user_id=settings.dev_user_id)

    app.state.store = InMemoryStore()
    if settings.seed_on_startup:
        seed_store(app.state.store)
    logger.info("store_initialized", counts=app.state.store.counts())

    if not settings.llm_configured:
        logger.warning("llm_not_configured", detail="agents fall back to rule-based replies")

    yield

    logger.info("shutdown_complete")


def _request_context(request: Request) -> dict:
    return {
        "correlation_id": get_correlation_id(),
        "path": request.url.path,
        "method": request.method,
        "user_id": getattr(request.state, "user_id", None),
    }


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """HTTPException with debug_id tracking.

    Logs server-side with full context, returns a sanitized body.
    """
    debug_id = str(uuid.uuid4())
    log = logger.warning if exc.status_code < 500 else logger.error
    log(
        "http_exception",
        status_code=exc.status_code,
        debug_id=debug_id,
        detail=exc.detail,
        **_request_context(request),
    )
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail, "debug_id": debug_id},
        headers=getattr(exc, "headers", None),
    )


async def venture_hub_exception_handler(request: Request, exc: VentureHubError) -> JSONResponse:
    debug_id = str(uuid.uuid4())
    log = logger.warning if exc.status_code < 500 else logger.error
    log(
        "application_error",
        status_code=exc.status_code,
        code=exc.code,
        debug_id=debug_id,
        error=exc.message,
        error_type=type(exc).__name__,
        **_request_context(request),
    )
    return JSONResponse(
        status_code=exc.status_code,
        content={**exc.to_dict(), "debug_id": debug_id},
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Schema rejections are client errors: 400 with the field errors."""
    debug_id = str(uuid.uuid4())
    errors = [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg"), "type": err.get("type")}
        for err in exc.errors()
    ]
    logger.info("request_validation_failed", debug_id=debug_id, errors=len(errors), **_request_context(request))
    return JSONResponse(
        status_code=400,
        content={"error": "Invalid request data", "details": errors, "debug_id": debug_id},
    )


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Unhandled errors: log with traceback, return a generic 500."""
    debug_id = str(uuid.uuid4())
    logger.error(
        "unhandled_exception",
        debug_id=debug_id,
        error=str(exc),
        error_type=type(exc).__name__,
        exc_info=True,
        **_request_context(request),
    )
    return JSONResponse(
        status_code=500,
        content={"detail": "Internal server error", "debug_id": debug_id},
    )


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Startup ecosystem platform: profiles, organizations, business plans and AI agents",
        version="0.1.0",
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        lifespan=lifespan,
    )

    app.add_middleware(
        SessionMiddleware,
        secret_key=settings.session_secret,
        session_cookie=settings.session_cookie,
        max_age=settings.session_max_age,
        same_site="lax",
        https_only=settings.environment == "production",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(dict.fromkeys([settings.frontend_url, *settings.cors_origins])),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Correlation ID middleware (runs first on incoming requests)
    setup_correlation_middleware(app)

    app.exception_handler(StarletteHTTPException)(http_exception_handler)
    app.exception_handler(VentureHubError)(venture_hub_exception_handler)
    app.exception_handler(RequestValidationError)(validation_exception_handler)
    app.exception_handler(Exception)(generic_exception_handler)

    app.include_router(api_router, prefix="/api")

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "venture_hub.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
    )
