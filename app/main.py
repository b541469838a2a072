# =============================================================================
# app/main.py - FastAPI Application Entry Point
# =============================================================================
# This is the main entry point for the Portfolio API.
# It configures the FastAPI application with middleware, routers, and handlers.
#
# Usage:
#   uvicorn app.main:app --reload
# =============================================================================

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.auth import routes as auth_routes
from app.config import Settings, settings as default_settings
from app.context import AppContext
from app.exceptions import (
    PortfolioException,
    portfolio_exception_handler,
    validation_exception_handler,
)
from app.routers import case_studies, education, experiences, health, media, profile
from core.services.profile_service import ProfileService
from lib.database import session_scope

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if default_settings.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

API_PREFIX = "/api"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Runs on startup and shutdown:
    - Startup: Build the AppContext, create tables, seed the profile row
    - Shutdown: Close the HTTP client and dispose of the engine
    """
    settings: Settings = app.state.settings

    # Startup
    logger.info(f"Starting Portfolio API in {settings.ENVIRONMENT} mode")
    logger.info(f"CORS origins: {settings.cors_origins_list}")

    context = AppContext.create(settings)
    with session_scope(context.session_factory) as db:
        ProfileService.ensure_profile(db)
    app.state.context = context

    yield

    # Shutdown
    logger.info("Shutting down Portfolio API")
    await context.close()


def create_app(settings: Settings | None = None) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        settings: Configuration to use; defaults to the environment-derived
            global settings. Tests pass their own.
    """
    settings = settings or default_settings

    app = FastAPI(
        title="Portfolio API",
        description="""
## Portfolio Website API

Public, read-only endpoints for the portfolio site and session-protected
admin endpoints for editing it.

### Public

- `GET /api/profile`, `GET /api/experiences`, `GET /api/education`
- `GET /api/case-studies`, `GET /api/case-studies/{slug}`

### Admin

Sign in with `POST /api/admin/login`; the session lives in an HTTP-only
cookie. Experience and education lists are reordered with
`PATCH /api/admin/{collection}/reorder` and a complete list of ids.
""",
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
        openapi_tags=[
            {"name": "Auth", "description": "Admin login, logout and session"},
            {"name": "Profile", "description": "Site owner profile"},
            {"name": "Experiences", "description": "Work experience entries"},
            {"name": "Education", "description": "Courses, certificates and degrees"},
            {"name": "Case Studies", "description": "Long-form project write-ups"},
            {"name": "Media", "description": "Image upload and link previews for the editor"},
            {"name": "Health", "description": "API health and readiness checks"},
        ],
    )
    app.state.settings = settings

    # =========================================================================
    # Middleware
    # =========================================================================

    # Cookies need credentials, so origins are always explicit (never "*")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # =========================================================================
    # Exception Handlers
    # =========================================================================

    @app.exception_handler(PortfolioException)
    async def handle_portfolio_exception(request: Request, exc: PortfolioException):
        """Handle custom Portfolio exceptions."""
        if exc.status_code >= 500:
            logger.warning(f"{exc.code} on {request.method} {request.url.path}: {exc.message}")
        return await portfolio_exception_handler(request, exc)

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(request: Request, exc: RequestValidationError):
        """Handle request validation errors with field-level detail."""
        return await validation_exception_handler(request, exc)

    @app.exception_handler(Exception)
    async def handle_general_exception(request: Request, exc: Exception):
        """Handle unexpected exceptions."""
        logger.exception(f"Unexpected error: {exc}")
        return JSONResponse(
            status_code=500,
            content={
                "detail": "An unexpected error occurred",
                "code": "INTERNAL_ERROR",
            }
        )

    # =========================================================================
    # Routers
    # =========================================================================

    app.include_router(auth_routes.router, prefix=API_PREFIX, tags=["Auth"])
    app.include_router(health.router, prefix=API_PREFIX, tags=["Health"])

    app.include_router(profile.router, prefix=API_PREFIX, tags=["Profile"])
    app.include_router(profile.admin_router, prefix=API_PREFIX, tags=["Profile"])

    app.include_router(experiences.router, prefix=API_PREFIX, tags=["Experiences"])
    app.include_router(experiences.admin_router, prefix=API_PREFIX, tags=["Experiences"])

    app.include_router(education.router, prefix=API_PREFIX, tags=["Education"])
    app.include_router(education.admin_router, prefix=API_PREFIX, tags=["Education"])

    app.include_router(case_studies.router, prefix=API_PREFIX, tags=["Case Studies"])
    app.include_router(case_studies.admin_router, prefix=API_PREFIX, tags=["Case Studies"])

    app.include_router(media.router, prefix=API_PREFIX, tags=["Media"])

    # =========================================================================
    # Root Endpoint
    # =========================================================================

    @app.get("/", tags=["Root"])
    async def root():
        """
        Root endpoint - returns API info.
        """
        return {
            "name": "Portfolio API",
            "version": "1.0.0",
            "docs": "/docs",
            "health": f"{API_PREFIX}/health",
        }

    return app


app = create_app()
