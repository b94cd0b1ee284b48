"""
FastAPI Main Application - API entry point.

Run with: uvicorn physiokg.interfaces.api.main:app --reload
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from physiokg import __version__
from physiokg.config import get_settings

from .deps import cleanup_services, init_services
from .middleware import install_middleware
from .routes import conditions, health, reasoning

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    settings = get_settings()
    logger.info("Starting PhysioKG API...")
    logger.info("  Neo4j: %s (database=%s)", settings.neo4j_uri, settings.neo4j_database)

    await init_services()
    logger.info("  Services initialized")

    yield

    logger.info("Shutting down PhysioKG API...")
    await cleanup_services()


def create_app() -> FastAPI:
    """Create FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title="PhysioKG API",
        description="Evidence-based physiotherapy clinical reasoning from a knowledge graph",
        version=__version__,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
    )

    install_middleware(app)

    allowed_origins = [
        "http://localhost:3000",  # Next.js dev server
        "http://localhost:8000",  # FastAPI (same-origin)
        "http://127.0.0.1:3000",
        "http://127.0.0.1:8000",
    ]
    if settings.api_debug:
        allowed_origins.append("http://localhost:*")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins,
        allow_credentials=True,
        allow_methods=["GET", "OPTIONS"],
        allow_headers=["Content-Type", "X-Request-ID"],
    )

    app.include_router(health.router, tags=["Health"])
    app.include_router(conditions.router, prefix="/api", tags=["Conditions"])
    app.include_router(reasoning.router, prefix="/api/reasoning", tags=["Reasoning"])

    return app


# Create app instance
app = create_app()
