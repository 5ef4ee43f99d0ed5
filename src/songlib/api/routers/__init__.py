"""API router initialization."""

# Hey future me, this is the API router aggregator. main.py mounts api_router under
# settings.api.prefix (default /api/v1), so songs endpoints become /api/v1/songs/...
# The health router is NOT in here - probes live at /health outside the versioned prefix.

from fastapi import APIRouter

from songlib.api.routers import health, songs

api_router = APIRouter()

api_router.include_router(songs.router, prefix="/songs", tags=["Songs"])

__all__ = [
    "api_router",
    "health",
    "songs",
]
