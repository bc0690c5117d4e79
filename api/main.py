"""
Service Marketplace API - Main Application.

FastAPI application with CORS and signed cookie sessions. The session carries
the guest session id and, after login, the user id.
"""

import logging
import os
from pathlib import Path

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.sessions import SessionMiddleware

from api import __version__

env_path = Path(__file__).parent.parent / ".env"
load_dotenv(dotenv_path=env_path)

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

_DEV_SESSION_SECRET = "dev-secret-key"
SESSION_SECRET = os.getenv("SESSION_SECRET") or _DEV_SESSION_SECRET
SESSION_MAX_AGE_SECONDS = int(os.getenv("SESSION_MAX_AGE_SECONDS", str(7 * 24 * 60 * 60)))
CORS_ALLOW_ORIGINS = [
    origin.strip()
    for origin in os.getenv("CORS_ALLOW_ORIGINS", "*").split(",")
    if origin.strip()
]

if SESSION_SECRET == _DEV_SESSION_SECRET:
    logger.warning("SESSION_SECRET is not set; using the development secret")

# Create FastAPI application
app = FastAPI(
    title="Service Marketplace API",
    description="Service catalog, lead capture and lead analytics",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ALLOW_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_middleware(
    SessionMiddleware,
    secret_key=SESSION_SECRET,
    max_age=SESSION_MAX_AGE_SECONDS,
    same_site="lax",
)


@app.get("/health", tags=["Health"])
def health_check():
    """
    Health check endpoint.

    Returns the API status and version.
    """
    return {
        "status": "healthy",
        "version": __version__,
        "service": "service-marketplace-api"
    }


@app.get("/", tags=["Root"])
def root():
    """
    Root endpoint with API information.
    """
    return {
        "message": "Service Marketplace API",
        "version": __version__,
        "docs": "/docs",
        "health": "/health"
    }


# Import and include routers
from api.routers import activities, admin, auth, catalog, leads

app.include_router(catalog.router, prefix="/api/v1", tags=["Catalog"])
app.include_router(leads.router, prefix="/api/v1", tags=["Leads"])
app.include_router(activities.router, prefix="/api/v1", tags=["Activities"])
app.include_router(auth.router, prefix="/api/v1", tags=["Auth"])
app.include_router(admin.router, prefix="/api/v1", tags=["Admin"])
