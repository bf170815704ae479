"""JSON-file stores for projects and provider settings."""

from .base import StorageError
from .projects import ProjectStore
from .settings import SettingsStatus, SettingsStore, StoredSettings

__all__ = ["StorageError", "ProjectStore", "SettingsStore", "SettingsStatus", "StoredSettings"]
