"""
StaffRoster Backend: FastAPI Application Factory
==================================================

What:  Creates and configures the FastAPI application instance.
Why:   Centralizes middleware registration, route mounting, exception
       mapping and the record store lifecycle in one place.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Called by uvicorn (uvicorn staffroster.main:app) and by the tests.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────┐ ┌──────────┐ ┌──────────┐ ┌────────┐  │
    │  │  Req ID  │→│ Logging  │→│   GZip   │→│  CORS  │  │
    │  └──────────┘ └──────────┘ └──────────┘ └────────┘  │
    │                                                     │
    │  Routes:                                            │
    │  ┌──────────────────────────────┐ ┌──────────────┐  │
    │  │ /funcionario  (CRUD)         │ │ GET /health  │  │
    │  └──────────────────────────────┘ └──────────────┘  │
    │                                                     │
    │  Exception Handlers:                                │
    │  ┌───────────────────────────────────────────────┐  │
    │  │ ValidationError→422 │ NotFound→404 │ Store→500 │  │
    │  └───────────────────────────────────────────────┘  │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:
    1. Initialize logging
    2. Build the engine and SQLAlchemyRecordStore (unless one was injected)
    3. Create tables when CREATE_TABLES_ON_STARTUP is set

    Shutdown:
    1. Dispose the engine the lifespan created
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from staffroster import __version__
from staffroster.config import settings
from staffroster.database import create_engine, create_session_factory, create_tables, dispose_engine
from staffroster.exceptions import NotFoundError, StaffRosterError, StoreError, ValidationError
from staffroster.middleware.logging import RequestLoggingMiddleware
from staffroster.middleware.request_id import RequestIDMiddleware, request_id_var
from staffroster.routes import employees, health
from staffroster.services.record_store import RecordStore
from staffroster.services.sqlalchemy_store import SQLAlchemyRecordStore

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    Called once during startup, before the store is built.
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[
            logging.StreamHandler(sys.stdout),  # Docker captures stdout
        ],
        force=True,
    )

    # Reduce noise from third-party libraries
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Own the record store handle for the lifetime of the process.

    If create_app() received a store, it is used as-is and its lifecycle
    stays with the caller. Otherwise the engine is built here and disposed
    on shutdown.
    """
    setup_logging()
    logger.info("StaffRoster Backend starting up...")

    engine = None
    if app.state.record_store is None:
        engine = create_engine(settings)
        if settings.create_tables_on_startup:
            await create_tables(engine)
        app.state.record_store = SQLAlchemyRecordStore(create_session_factory(engine))

    if await app.state.record_store.ping():
        logger.info("Connected to the record store")
    else:
        # Keep serving: requests will report StoreError and /health reports unhealthy
        logger.error("Record store is unreachable at startup")

    logger.info(
        "Server ready at http://%s:%d%s",
        settings.backend_host, settings.backend_port, settings.resource_prefix,
    )

    yield

    logger.info("StaffRoster Backend shutting down...")
    if engine is not None:
        await dispose_engine(engine)
        app.state.record_store = None
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _error_body(message: str) -> dict:
    return {"error": message, "request_id": request_id_var.get("")}


def _describe_request_errors(exc: RequestValidationError) -> str:
    """Flatten FastAPI's request validation errors into one readable line."""
    parts = []
    for err in exc.errors():
        loc = [str(p) for p in err.get("loc", ()) if p != "body"]
        where = ".".join(loc) or "body"
        parts.append(f"{where}: {err.get('msg', 'invalid value')}")
    return "; ".join(parts) or "Invalid request body"


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exception types to HTTP status codes and the {"error"} body.

    Handler hierarchy:
        ValidationError         → 422 (incomplete create payload)
        RequestValidationError  → 422 (body could not be parsed/coerced)
        NotFoundError           → 404
        StoreError              → 500, store message passed through
        StaffRosterError (base) → 500
        Exception (fallback)    → 500, generic message
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        logger.warning("[%s] Validation error: %s | Context: %s",
                       request_id_var.get(""), exc.message, exc.context)
        return JSONResponse(status_code=422, content=_error_body(exc.message))

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        message = _describe_request_errors(exc)
        logger.warning("[%s] Request validation error: %s", request_id_var.get(""), message)
        return JSONResponse(status_code=422, content=_error_body(message))

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return JSONResponse(status_code=404, content=_error_body(exc.message))

    @app.exception_handler(StoreError)
    async def handle_store_error(request: Request, exc: StoreError):
        logger.error("[%s] Store error: %s | Context: %s",
                     request_id_var.get(""), exc.message, exc.context)
        return JSONResponse(status_code=500, content=_error_body(exc.message))

    @app.exception_handler(StaffRosterError)
    async def handle_app_error(request: Request, exc: StaffRosterError):
        logger.error("[%s] Application error: %s", request_id_var.get(""), exc.message)
        return JSONResponse(status_code=500, content=_error_body(exc.message))

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        """Stack trace is logged server-side only, never returned."""
        logger.error("[%s] Unexpected error: %s", request_id_var.get(""), str(exc), exc_info=True)
        return JSONResponse(
            status_code=500,
            content=_error_body("An unexpected error occurred. Please try again later."),
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(record_store: Optional[RecordStore] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        record_store: Store to serve from. When None, the lifespan builds a
                      SQLAlchemyRecordStore from settings.database_url.
    """
    app = FastAPI(
        title="StaffRoster API",
        description="CRUD API for employee records.",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )
    app.state.record_store = record_store

    # Middleware executes in REVERSE order of addition
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(employees.router, prefix=settings.resource_prefix)
    app.include_router(health.router)

    return app


# uvicorn expects `staffroster.main:app` to be importable
app = create_app()
