"""
Name: FastAPI Application Entry Point

Responsibilities:
  - Initialize FastAPI application with metadata (title, version)
  - Configure middleware (CORS with credentials, request context)
  - Mount resource routers and auth routes under the /api prefix
  - Expose the health check endpoint

Collaborators:
  - FastAPI: ASGI web framework
  - CORSMiddleware: Cross-Origin Resource Sharing handler
  - RequestContextMiddleware: Request ID and logging context
  - interfaces.api.http.router: resource endpoints
  - api.auth_routes: credential endpoints

Constraints:
  - CORS origins configurable via ALLOWED_ORIGINS env var (comma-separated)
  - The session cookie travels cross-origin, so credentials are allowed

Notes:
  - Middleware order matters: RequestContext → CORS → routes
  - /healthz follows Kubernetes health check convention
  - In test environments (APP_ENV=test) the pool is not opened: repositories
    are in-memory
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from .. import __version__
from ..application.dev_seed_admin import ensure_dev_admin
from ..container import get_user_repository
from ..crosscutting.config import get_settings
from ..crosscutting.logger import logger
from ..crosscutting.middleware import RequestContextMiddleware
from ..identity.auth_users import hash_password
from ..infrastructure.db.pool import close_pool, init_pool
from ..interfaces.api.http.router import build_router
from .auth_routes import router as auth_router
from .exception_handlers import register_exception_handlers


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle. Initializes the pool and the dev seed."""
    settings = get_settings()
    use_pool = not settings.is_test()

    # Initialize DB pool (must happen before any repository usage)
    if use_pool:
        init_pool(
            database_url=settings.database_url,
            min_size=settings.db_pool_min_size,
            max_size=settings.db_pool_max_size,
        )

    try:
        # Dev seed admin (only does something if enabled in settings/env)
        try:
            ensure_dev_admin(
                settings,
                user_repo=get_user_repository(),
                password_hasher=hash_password,
            )
        except Exception as e:
            logger.error(f"Startup failed: {e}")
            raise

        logger.info(
            "HR API starting up",
            extra={
                "app_env": settings.app_env,
                "db_pool_min": settings.db_pool_min_size,
                "db_pool_max": settings.db_pool_max_size,
                "allow_exit_overwrite_via_update": (
                    settings.allow_exit_overwrite_via_update
                ),
            },
        )

        yield

    finally:
        if use_pool:
            close_pool()
        logger.info("HR API shutting down")


def create_app() -> FastAPI:
    """Build the FastAPI application (tests call this after configuring env)."""
    settings = get_settings()

    app = FastAPI(
        title="HR API",
        version=__version__,
        lifespan=lifespan,
        openapi_tags=[
            {"name": "auth", "description": "Registration, login and session"},
            {"name": "users", "description": "User administration and profile"},
            {"name": "attendances", "description": "Daily attendance ledger"},
            {"name": "departments", "description": "Departments"},
            {"name": "positions", "description": "Positions"},
            {"name": "camps", "description": "Work sites"},
        ],
    )

    # R: Middleware order (bottom = first to execute):
    # 1. CORSMiddleware - handles preflight
    # 2. RequestContextMiddleware - sets request_id
    app.add_middleware(RequestContextMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.get_allowed_origins_list(),
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization", "X-Request-Id"],
        expose_headers=["X-Request-Id"],
    )

    app.include_router(auth_router, prefix="/api")
    app.include_router(build_router(), prefix="/api")

    register_exception_handlers(app)

    @app.get("/healthz", tags=["health"])
    def healthz(request: Request):
        """
        R: Health check that verifies the database.

        Returns:
            ok: True if the database answered
            db: "connected" or "disconnected"
            request_id: Correlation ID for this request
        """
        db_status = "disconnected"
        try:
            if get_user_repository().ping():
                db_status = "connected"
        except Exception as e:
            logger.warning("Health check: DB unavailable", extra={"error": str(e)})

        return {
            "ok": db_status == "connected",
            "db": db_status,
            "request_id": getattr(request.state, "request_id", None),
        }

    return app


app = create_app()
