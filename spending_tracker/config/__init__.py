"""Configuration package."""

from spending_tracker.config.settings import (
    AppSettings,
    Settings,
    StorageSettings,
    get_settings,
)

__all__ = [
    "AppSettings",
    "Settings",
    "StorageSettings",
    "get_settings",
]
