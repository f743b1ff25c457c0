"""
FastAPI entrypoint for the Trip Journal backend application.
"""
import logging
import os
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from tripjournal.core.config import settings
from tripjournal.api.router import api_router
from tripjournal.services.routing_service import RoutingService

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # One routing client for the process; background tasks use it after the response
    client = httpx.Client(timeout=settings.ROUTING_TIMEOUT_SECONDS)
    app.state.routing_service = RoutingService(
        client,
        api_key=settings.OPENROUTESERVICE_API_KEY,
        api_url=settings.OPENROUTESERVICE_URL,
        cache_days=settings.ROUTE_CACHE_DAYS
    )
    logger.info(f"{settings.APP_NAME} started")
    yield
    client.close()


app = FastAPI(
    title="Trip Journal API",
    description="Backend API for travel planning and trip journaling",
    version="1.0.0",
    lifespan=lifespan
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Uploaded photos and thumbnails are served from the upload root
os.makedirs(settings.UPLOAD_DIR, exist_ok=True)
app.mount("/uploads", StaticFiles(directory=settings.UPLOAD_DIR), name="uploads")

# Include API routes
app.include_router(api_router, prefix="/api")


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled error on {request.method} {request.url.path}", exc_info=exc)
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


@app.get("/")
async def root():
    """Health check endpoint."""
    return {"message": "Trip Journal API is running"}


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy"}
