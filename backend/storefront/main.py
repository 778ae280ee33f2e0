"""
Storefront API - Application Entry Point
========================================
Accounts with cookie-held JWTs, owner-scoped products and best-effort
activity logging.

Run with:
    uvicorn storefront.main:create_app --factory
"""

import time
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from storefront import __version__
from storefront.api.envelope import error_envelope
from storefront.api.routes.auth import router as auth_router
from storefront.api.routes.products import router as products_router
from storefront.api.routes.users import router as users_router
from storefront.core.config import Settings, get_settings
from storefront.core.database import build_engine, build_session_factory, init_db
from storefront.core.errors import ServiceError
from storefront.core.logging import get_logger, setup_logging
from storefront.core.request_context import (
    REQUEST_ID_HEADER,
    get_request_id,
    new_request_id,
    set_request_id,
)
from storefront.services.activity_recorder import ActivityRecorder
from storefront.services.auth_gateway import AuthGateway

logger = get_logger("main")

_QUIET_PATHS = {"/health", "/docs", "/redoc", "/openapi.json"}


def _first_validation_message(errors: list[dict]) -> str:
    if not errors:
        return "Validation failed"
    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = first.get("msg") or "Invalid value"
    return f"{location}: {message}" if location else message


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    started_at = time.time()

    engine = build_engine(settings)
    session_factory = build_session_factory(engine)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application startup & shutdown lifecycle."""

        # -- Startup --
        setup_logging(debug=settings.app_debug)
        logger.info("app_starting", app=settings.app_name, env=settings.app_env)

        await init_db(engine)
        logger.info("database_initialized")

        if settings.activity_purge_on_startup:
            await app.state.activity_recorder.purge_expired(settings.activity_retention_days)

        logger.info("app_ready", port=settings.app_port)

        yield

        # -- Shutdown --
        await engine.dispose()
        logger.info("app_shutdown")

    app = FastAPI(
        title=settings.app_name,
        description="Accounts, cookie-based authentication and owner-scoped product management.",
        version=__version__,
        lifespan=lifespan,
        docs_url=None if settings.is_production else "/docs",
        redoc_url=None if settings.is_production else "/redoc",
    )

    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = session_factory
    app.state.auth_gateway = AuthGateway.from_settings(settings)
    app.state.activity_recorder = ActivityRecorder(session_factory)

    # -- CORS Middleware --

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # -- Request Logging Middleware --

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        """Log all incoming requests with timing."""
        request_id = request.headers.get(REQUEST_ID_HEADER) or new_request_id()
        # Unhandled errors are rendered after this middleware has unwound.
        request.state.request_id = request_id
        set_request_id(request_id)
        structlog.contextvars.bind_contextvars(request_id=request_id)
        start = time.time()
        response = None
        try:
            response = await call_next(request)
            return response
        finally:
            elapsed = round((time.time() - start) * 1000, 2)
            if response is not None:
                response.headers[REQUEST_ID_HEADER] = request_id
                status_code = response.status_code
            else:
                status_code = 500

            if request.url.path not in _QUIET_PATHS:
                logger.info(
                    "http_request",
                    method=request.method,
                    path=request.url.path,
                    status=status_code,
                    elapsed_ms=elapsed,
                    request_id=get_request_id(),
                )

            structlog.contextvars.clear_contextvars()
            set_request_id("")

    # -- Exception Handlers --

    @app.exception_handler(ServiceError)
    async def service_error_handler(request: Request, exc: ServiceError):
        log = logger.error if exc.status_code >= 500 else logger.warning
        log(
            "service_error",
            path=request.url.path,
            status_code=exc.status_code,
            code=exc.code,
        )
        return error_envelope(
            code=exc.code,
            message=exc.message,
            status_code=exc.status_code,
            details=exc.details,
            meta={"path": request.url.path},
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        # Unknown paths and unsupported methods both read as "not found".
        if exc.status_code in (404, 405):
            return error_envelope(
                code="not_found",
                message="Not found",
                status_code=404,
                meta={"path": request.url.path},
            )
        logger.warning(
            "http_exception",
            path=request.url.path,
            status_code=exc.status_code,
            detail=str(exc.detail),
        )
        return error_envelope(
            code="http_error",
            message=str(exc.detail),
            status_code=exc.status_code,
            meta={"path": request.url.path},
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        logger.warning("validation_error", path=request.url.path, errors=len(errors))
        return error_envelope(
            code="validation_error",
            message=_first_validation_message(errors),
            status_code=400,
            details=[
                {"loc": list(err.get("loc", ())), "msg": err.get("msg"), "type": err.get("type")}
                for err in errors
            ],
            meta={"path": request.url.path},
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        request_id = getattr(request.state, "request_id", None) or get_request_id() or None
        logger.error(
            "unhandled_exception",
            path=request.url.path,
            error=str(exc),
            error_type=type(exc).__name__,
            request_id=request_id,
        )
        response = error_envelope(
            code="internal_error",
            message="Internal server error",
            status_code=500,
            details=f"{type(exc).__name__}: {exc}" if settings.expose_error_details else None,
            meta={"path": request.url.path, "request_id": request_id},
        )
        if request_id:
            response.headers[REQUEST_ID_HEADER] = request_id
        return response

    # -- Register Routers --

    app.include_router(auth_router, prefix="/api")
    app.include_router(users_router, prefix="/api")
    app.include_router(products_router, prefix="/api")

    # -- Health Check --

    @app.get("/health", tags=["System"])
    async def health_check():
        """System health check endpoint."""
        return {
            "status": "ok",
            "version": __version__,
            "uptime_seconds": round(time.time() - started_at, 2),
        }

    return app


def run() -> None:
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "storefront.main:create_app",
        factory=True,
        host="0.0.0.0",
        port=settings.app_port,
        reload=settings.app_debug and not settings.is_production,
    )
