"""
Health Routes - System health and status endpoints.
"""

from typing import Any

from fastapi import APIRouter

from physiokg import __version__

router = APIRouter()


@router.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "healthy", "service": "physiokg"}


@router.get("/api")
async def api_info() -> dict[str, Any]:
    """API info endpoint."""
    return {
        "name": "PhysioKG API",
        "version": __version__,
        "description": "Evidence-based physiotherapy clinical reasoning assistant",
        "docs": "/docs",
    }
