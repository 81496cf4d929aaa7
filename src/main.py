"""Lantern API - Website AI-Readiness Scoring Engine."""

import logging
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from google import genai

from api.routes import analyze_router, health_router
from config import settings

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    Code before `yield` runs on startup.
    Code after `yield` runs on shutdown.
    """
    logger.info(f"Starting {settings.app_name}...")
    app.state.http_client = httpx.AsyncClient()
    app.state.genai_client = (
        genai.Client(api_key=settings.gemini_api_key) if settings.gemini_api_key else None
    )
    if app.state.genai_client is None:
        logger.info("No Gemini API key configured, insights will use fallback rules")
    yield
    await app.state.http_client.aclose()
    logger.info(f"Shutting down {settings.app_name}...")


app = FastAPI(
    title="Lantern API",
    description="Scores business websites for performance, AI readiness, AEO/GEO, SEO, security, and accessibility.",
    version="0.1.0",
    debug=settings.debug,
    lifespan=lifespan,
)

# Configure CORS (adjust origins for production)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Any missing, blank or malformed field is reported the same way."""
    logger.info(f"Rejected {request.url.path}: {len(exc.errors())} validation error(s)")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": "Missing required fields"},
    )


# Register routers
app.include_router(analyze_router, prefix="/api")
app.include_router(health_router, prefix="/api/v1")


@app.get("/", include_in_schema=False)
async def root():
    """Point callers at the docs."""
    return {
        "service": "Lantern API",
        "docs": "/docs",
        "health": "/api/v1/health",
    }
