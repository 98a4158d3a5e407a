"""
Name: FastAPI Application Entry Point

Responsibilities:
  - Initialize FastAPI application with metadata (title, version)
  - Configure middleware (CORS, request context)
  - Mount the directory router under /v1 and the auth routes at the root
  - Expose health check endpoint

Collaborators:
  - FastAPI: ASGI web framework
  - CORSMiddleware: Cross-Origin Resource Sharing handler
  - RequestContextMiddleware: Request ID and logging context
  - interfaces.api.http.router: employee directory endpoints

Constraints:
  - CORS configurable via ALLOWED_ORIGINS env var (comma-separated)
  - Health check validates the directory store only

Notes:
  - Middleware order matters: RequestContext → CORS → routes
  - /v1 prefix allows API versioning
  - /healthz follows Kubernetes health check convention
  - In APP_ENV=test the in-memory store is used and no pool is opened
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from ..application.dev_seed_admin import ensure_dev_admin
from ..container import get_directory_repository, get_password_hasher
from ..crosscutting.config import get_settings
from ..crosscutting.logger import logger
from ..crosscutting.middleware import RequestContextMiddleware
from ..infrastructure.db.pool import close_pool, init_pool
from ..interfaces.api.http.router import router
from .auth_routes import router as auth_router
from .exception_handlers import register_exception_handlers


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle. Validates settings and initializes pool."""
    settings = get_settings()
    uses_pool = not settings.is_test()

    # R: El pool debe existir antes de cualquier uso del repositorio Postgres
    if uses_pool:
        init_pool(
            database_url=settings.database_url,
            min_size=settings.db_pool_min_size,
            max_size=settings.db_pool_max_size,
        )

    try:
        try:
            ensure_dev_admin(
                settings,
                repository=get_directory_repository(),
                password_hasher=get_password_hasher(),
            )
        except Exception as e:
            logger.error(f"Startup failed: {e}")
            raise

        logger.info(
            "Employee Directory API starting up",
            extra={
                "app_env": settings.app_env,
                "db_pool_min": settings.db_pool_min_size,
                "db_pool_max": settings.db_pool_max_size,
            },
        )

        yield

    finally:
        if uses_pool:
            close_pool()
        logger.info("Employee Directory API shutting down")


# R: Create FastAPI application instance with API metadata
app = FastAPI(
    title="Employee Directory API",
    version="0.1.0",
    lifespan=lifespan,
    openapi_tags=[
        {
            "name": "employees",
            "description": "Employee directory (role- and department-scoped)",
        },
        {
            "name": "auth",
            "description": "User authentication (JWT)",
        },
    ],
)

# R: Middleware order (bottom = first to execute):
# 1. CORSMiddleware - handles preflight
# 2. RequestContextMiddleware - sets request_id
app.add_middleware(RequestContextMiddleware)

_settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=_settings.get_allowed_origins_list(),
    allow_credentials=_settings.cors_allow_credentials,  # R: Secure default: False
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=[
        "Content-Type",
        "Authorization",
        "X-Request-Id",
    ],
)

# R: Register API routes under /v1 prefix for versioning
app.include_router(router, prefix="/v1")

# R: Register auth routes (no version prefix)
app.include_router(auth_router)

# R: Register exception handlers for structured error responses
register_exception_handlers(app)


# R: Health check endpoint for monitoring/orchestration (Kubernetes, Docker)
@app.get("/healthz")
def healthz(request: Request):
    """
    R: Health check that verifies the directory store.

    Returns:
        ok: True if the store answers
        db: "connected" or "disconnected"
        request_id: Correlation ID for this request
    """
    db_status = "disconnected"
    try:
        if get_directory_repository().ping():
            db_status = "connected"
    except Exception as e:
        logger.warning("Health check: DB unavailable", extra={"error": str(e)})

    return {
        "ok": db_status == "connected",
        "db": db_status,
        "request_id": getattr(request.state, "request_id", None),
    }
