"""Settings management module."""

from techtube.commons.settings.loader import SettingsLoader, get_settings, reset_settings
from techtube.commons.settings.models import (
    AppSettings,
    AuthSettings,
    DocumentCollectionSettings,
    DocumentDBSettings,
    MediaStorageSettings,
    ServerSettings,
    Settings,
    TelemetrySettings,
)

__all__ = [
    # Loader
    "SettingsLoader",
    "get_settings",
    "reset_settings",
    # Main settings
    "Settings",
    "AppSettings",
    "ServerSettings",
    # Storage
    "DocumentDBSettings",
    "DocumentCollectionSettings",
    "MediaStorageSettings",
    # Collaborators
    "AuthSettings",
    "TelemetrySettings",
]
