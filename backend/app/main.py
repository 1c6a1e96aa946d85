"""
TraderPunk Backend - FastAPI Application

Main entry point for the backend API.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.core.config import settings
from app.core.logging import setup_logging
from app.api.v1 import router as api_v1_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    # Startup
    setup_logging(settings.log_level)
    logger.info(f"Starting {settings.app_name} v{settings.app_version}")
    logger.info(f"Environment: {settings.environment}")

    from app.services.signals import get_signal_service
    if get_signal_service().remote_analyzer.is_available:
        logger.info("AI analysis enabled")
    else:
        logger.info("AI analysis unavailable - using local signal scorer")

    yield

    # Shutdown
    logger.info("Shutting down...")


app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="""
    TraderPunk Crypto Analysis API

    ## Architecture
    - **Indicator Engine**: MACD, RSI, OBV, Balance of Power, ADX/DI (pure Python/NumPy)
    - **Levels**: Pivot points and Fibonacci retracements/extensions
    - **Signal Layer**: AI analyst with a deterministic local scorer as fallback
    - **Trade Ideas**: Entry, stop loss and three targets

    ## Core Principles
    - AI suggests, human executes
    - Same candles in, same indicators out
    - Local analysis always available
    """,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API routes
app.include_router(api_v1_router, prefix="/api/v1")


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "app": settings.app_name,
        "version": settings.app_version,
        "environment": settings.environment,
    }


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": "TraderPunk Backend API",
        "docs": "/docs",
        "health": "/health",
    }
