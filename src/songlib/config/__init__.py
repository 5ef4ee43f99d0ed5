"""Configuration module for songlib."""

from .settings import (
    APISettings,
    DatabaseSettings,
    ObservabilitySettings,
    Settings,
    get_settings,
)

__all__ = [
    "APISettings",
    "DatabaseSettings",
    "ObservabilitySettings",
    "Settings",
    "get_settings",
]
