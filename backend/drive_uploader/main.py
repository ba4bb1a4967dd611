"""
FastAPI application entry point.
Sets up the API with lifespan events for logging and the staging directory.
"""
import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import Response
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST

from drive_uploader import __version__
from drive_uploader.config import settings, get_credentials
from drive_uploader.api.router import api_router
from drive_uploader.middleware.metrics_middleware import MetricsMiddleware
from drive_uploader.storage.staging import get_temporary_store
from drive_uploader.utils.logging import configure_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for startup/shutdown events.
    - Startup: configure logging, create the staging directory
    - Shutdown: nothing to release
    """
    configure_logging('drive-uploader', settings.log_level)

    get_temporary_store().ensure_dir()

    if not get_credentials().has_refresh_token:
        # Not fatal: reported by /api/health and on each upload attempt
        logger.warning("GOOGLE_REFRESH_TOKEN not set; uploads will fail until it is configured")

    base_url = f"http://localhost:{settings.port}"
    logger.info(f"Server running on port {settings.port}")
    logger.info(f"Upload endpoint: {base_url}/api/upload-photos")
    logger.info(f"Health check: {base_url}/api/health")

    yield


app = FastAPI(
    title="Drive Uploader",
    description="Accepts photo uploads and stores them in Google Drive",
    version=__version__,
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
)

# Metrics middleware (must be after CORS to track all requests)
app.add_middleware(MetricsMiddleware)

app.include_router(api_router, prefix="/api")


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": "Drive Uploader",
        "version": __version__,
        "environment": settings.environment
    }


@app.get("/metrics")
async def metrics():
    """Prometheus metrics endpoint."""
    return Response(
        content=generate_latest(),
        media_type=CONTENT_TYPE_LATEST
    )
