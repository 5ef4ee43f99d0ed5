"""Infrastructure persistence layer."""

from .database import Database
from .models import Base, SongModel
from .repositories import SongRepository

__all__ = [
    "Database",
    "Base",
    "SongModel",
    "SongRepository",
]
