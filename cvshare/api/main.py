"""
Name: FastAPI Application Entry Point

Responsibilities:
  - Initialize FastAPI application with metadata (title, version)
  - Configure middleware (CORS, request context)
  - Mount router with CV sharing endpoints under /v1 prefix
  - Expose health check endpoint

Collaborators:
  - FastAPI: ASGI web framework
  - CORSMiddleware: Cross-Origin Resource Sharing handler
  - RequestContextMiddleware: Request ID and logging context
  - interfaces.api.http.router: workspaces, cv access, collaborators

Notes:
  - Middleware order matters: RequestContext -> CORS -> routes
  - /v1 prefix allows API versioning
  - /healthz follows Kubernetes health check convention
  - Sin DATABASE_URL no se abre pool: adapters in-memory
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from .. import __version__
from ..crosscutting.config import get_settings
from ..crosscutting.logger import logger
from ..crosscutting.middleware import RequestContextMiddleware
from ..infrastructure.db.pool import close_pool, get_pool, init_pool
from ..interfaces.api.http.router import router
from .exception_handlers import register_exception_handlers


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle. Initializes the pool when PostgreSQL is used."""
    settings = get_settings()

    if settings.uses_postgres():
        init_pool(
            database_url=settings.database_url,
            min_size=settings.db_pool_min_size,
            max_size=settings.db_pool_max_size,
        )

    try:
        logger.info(
            "CVShare API starting up",
            extra={
                "app_env": settings.app_env,
                "storage": "postgres" if settings.uses_postgres() else "memory",
                "rate_limit_enabled": settings.rate_limit_enabled,
                "db_pool_min": settings.db_pool_min_size,
                "db_pool_max": settings.db_pool_max_size,
            },
        )
        yield
    finally:
        close_pool()
        logger.info("CVShare API shutting down")


def _get_allowed_origins() -> list[str]:
    """Get CORS origins from settings, with fallback for import-time errors."""
    try:
        return get_settings().get_allowed_origins_list()
    except ValueError:
        return ["http://localhost:3000"]


app = FastAPI(
    title="CVShare API",
    version=__version__,
    lifespan=lifespan,
    openapi_tags=[
        {"name": "workspaces", "description": "CV workspaces (owner)"},
        {"name": "privacy", "description": "Privacy settings (owner only)"},
        {"name": "access", "description": "Visitor access checks (rate limited)"},
        {"name": "collaborators", "description": "Collaborator management"},
        {"name": "invitations", "description": "Invitations for the current user"},
    ],
)

app.add_middleware(RequestContextMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=_get_allowed_origins(),
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=[
        "Content-Type",
        "Authorization",
        "X-Request-Id",
    ],
    expose_headers=["X-Request-Id", "Retry-After"],
)

app.include_router(router, prefix="/v1")

register_exception_handlers(app)


@app.get("/healthz")
def healthz(request: Request):
    """
    Health check.

    Returns:
        ok: True if storage is operational
        db: "connected", "disconnected" or "memory"
        request_id: Correlation ID for this request
    """
    db_status = "memory"
    if get_settings().uses_postgres():
        db_status = "disconnected"
        try:
            with get_pool().connection() as conn:
                conn.execute("SELECT 1")
            db_status = "connected"
        except Exception as e:
            logger.warning("Health check: DB unavailable", extra={"error": str(e)})

    return {
        "ok": db_status != "disconnected",
        "db": db_status,
        "request_id": getattr(request.state, "request_id", None),
    }
