"""API module for songlib.

Hey future me - the main entry point is `api_router` from routers/, which
main.py mounts under the versioned prefix (/api/v1 by default).

Structure:
- routers/: song endpoints and health probes
- schemas/: Pydantic request/response models
- dependencies.py: session, repository and service injection
- exception_handlers.py: error kind → HTTP status mapping
"""

from songlib.api.routers import api_router, health, songs

__all__ = [
    "api_router",
    "health",
    "songs",
]
