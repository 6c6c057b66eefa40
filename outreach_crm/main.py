"""FastAPI application for the Outreach CRM.

This module provides the main FastAPI application instance with CORS
middleware, exception handlers and router registration for the outreach
programme's CRM API.
"""

# Load environment variables before any other imports
from dotenv import load_dotenv

load_dotenv()

import logging
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from outreach_crm.core import config
from outreach_crm.core.errors import register_exception_handlers
from outreach_crm.core.tracking import init_error_tracking
from outreach_crm.routers import (
    activities,
    companies,
    dashboard,
    engagements,
    files,
    resources,
    tags,
)

# Configure logging
logging.basicConfig(level=getattr(logging, config.LOG_LEVEL, logging.INFO))
logger = logging.getLogger(__name__)

# API version and metadata
API_VERSION = "0.1.0"
API_TITLE = "Outreach CRM API"
API_DESCRIPTION = """
CRM API for the educational-outreach programme.

This API provides endpoints for:
- Managing companies and their tags
- Recording engagements, follow-up actions and additional activities
- Registering files attached to companies
- Managing resources and distributing them to companies or tags
- Dashboard summaries
"""


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan context manager.

    Creates missing tables on startup and closes the identity-service client
    on shutdown.

    Args:
        app: The FastAPI application instance.

    Yields:
        None after startup is complete.
    """
    from outreach_crm.db.session import init_db
    from outreach_crm.services import get_auth_service

    if config.AUTO_CREATE_TABLES:
        init_db()

    service = get_auth_service()
    if not config.AUTH_REQUIRED:
        logger.warning("AUTH_REQUIRED is off - all endpoints are public")
    elif not service.is_configured:
        logger.warning("Supabase auth is not configured - authenticated requests will be rejected")
    logger.info("Application startup complete")

    yield

    logger.info("Shutting down application...")
    await get_auth_service().close()
    logger.info("Auth service client closed")


init_error_tracking()

# Create FastAPI application instance
app = FastAPI(
    title=API_TITLE,
    description=API_DESCRIPTION,
    version=API_VERSION,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
)

register_exception_handlers(app)


# Configure CORS middleware
# Allow requests from Vite dev server (localhost:5173) by default
# Can be overridden via CORS_ORIGINS environment variable (comma-separated list)
_default_origins = [
    "http://localhost:5173",  # Vite dev server
    "http://127.0.0.1:5173",  # Vite dev server (alternative)
    "http://localhost:3000",  # Alternative dev server
    "http://127.0.0.1:3000",  # Alternative dev server
]

if config.CORS_ORIGINS:
    ALLOWED_ORIGINS = [
        origin.strip() for origin in config.CORS_ORIGINS.split(",") if origin.strip()
    ]
else:
    ALLOWED_ORIGINS = _default_origins

app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=[
        "Content-Type",
        "Authorization",
        "Accept",
        "Origin",
        "X-Requested-With",
    ],
    expose_headers=["Content-Length", "Content-Type"],
)


@app.get("/", tags=["Root"])
async def root() -> dict[str, Any]:
    """Root endpoint returning API information.

    Returns:
        Dict containing API metadata including name, version,
        description, and available documentation URLs.
    """
    return {
        "name": API_TITLE,
        "version": API_VERSION,
        "description": "CRM API for the educational-outreach programme",
        "docs": {
            "swagger": "/docs",
            "redoc": "/redoc",
            "openapi": "/openapi.json",
        },
        "status": "operational",
    }


@app.get("/health", tags=["Health"])
async def health_check() -> dict[str, str]:
    """Health check endpoint for monitoring and load balancers."""
    return {"status": "healthy"}


# Router registration
app.include_router(companies.router, prefix="/api", tags=["companies"])
app.include_router(engagements.router, prefix="/api", tags=["engagements"])
app.include_router(activities.router, prefix="/api", tags=["activities"])
app.include_router(files.router, prefix="/api", tags=["files"])
app.include_router(tags.router, prefix="/api", tags=["tags"])
app.include_router(resources.router, prefix="/api", tags=["resources"])
app.include_router(dashboard.router, prefix="/api", tags=["dashboard"])
