"""
Health Routes - System Health Check

Provides health check endpoint for monitoring server status.
Reports whether the adb executable can be found.
"""

import asyncio
from fastapi import APIRouter
import logging
from . import get_deps
from .. import __version__

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["health"])


@router.api_route("/health", methods=["GET", "HEAD"])
async def health_check():
    """
    Health check endpoint

    Returns server status, version, and adb availability.
    Supports both GET and HEAD methods for Docker health checks.
    """
    deps = get_deps()
    adb_available = bool(deps.adb_bridge) and await asyncio.to_thread(deps.adb_bridge.is_available)

    return {
        "status": "ok",
        "version": __version__,
        "message": "Android Devices Bridge is running",
        "adb_available": adb_available
    }
