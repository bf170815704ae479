"""Settings / credential store backed by a JSON file (data/settings.json).

Keys missing from the file fall back to the environment (and .env):
OPENAI_API_KEY, GEMINI_API_KEY, ELEVENLABS_API_KEY, PEXELS_API_KEY,
AD_AUTOMATOR_USE_GPU.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel

from ..constants import SETTINGS_FILE_NAME
from ..video.pipeline.base import GenerationCredentials
from .base import StorageError, read_json, write_json

# Load .env file
load_dotenv()

ENV_FALLBACKS = {
    "openai_key": "OPENAI_API_KEY",
    "gemini_key": "GEMINI_API_KEY",
    "elevenlabs_key": "ELEVENLABS_API_KEY",
    "pexels_key": "PEXELS_API_KEY",
}

USE_GPU_ENV = "AD_AUTOMATOR_USE_GPU"

_TRUE_VALUES = {"1", "true", "yes", "on"}


class StoredSettings(BaseModel):
    """Contents of settings.json."""

    openai_key: Optional[str] = None
    gemini_key: Optional[str] = None
    elevenlabs_key: Optional[str] = None
    pexels_key: Optional[str] = None
    use_gpu: Optional[bool] = None


class SettingsStatus(BaseModel):
    """Which keys are configured, without exposing them."""

    has_openai: bool
    has_gemini: bool
    has_elevenlabs: bool
    has_pexels: bool
    use_gpu: bool


class SettingsStore:
    """Reads and upserts provider keys."""

    def __init__(self, data_dir: Path):
        self.path = Path(data_dir) / SETTINGS_FILE_NAME

    def _load(self) -> StoredSettings:
        raw = read_json(self.path, {})
        if not isinstance(raw, dict):
            raise StorageError(f"Expected an object in {self.path}")
        return StoredSettings.model_validate(raw)

    def load(self) -> StoredSettings:
        """Effective settings: file values, then environment fallbacks."""
        stored = self._load()
        values = stored.model_dump()
        for field, env_name in ENV_FALLBACKS.items():
            if not values.get(field):
                values[field] = os.getenv(env_name) or None
        if values.get("use_gpu") is None:
            values["use_gpu"] = os.getenv(USE_GPU_ENV, "").strip().lower() in _TRUE_VALUES
        return StoredSettings.model_validate(values)

    def update(
        self,
        openai_key: Optional[str] = None,
        gemini_key: Optional[str] = None,
        elevenlabs_key: Optional[str] = None,
        pexels_key: Optional[str] = None,
        use_gpu: Optional[bool] = None,
    ) -> StoredSettings:
        """Overwrite only the provided fields. Empty strings are ignored."""
        stored = self._load()
        changes = {
            "openai_key": openai_key,
            "gemini_key": gemini_key,
            "elevenlabs_key": elevenlabs_key,
            "pexels_key": pexels_key,
        }
        update = {k: v for k, v in changes.items() if v}
        if use_gpu is not None:
            update["use_gpu"] = use_gpu
        stored = stored.model_copy(update=update)
        write_json(self.path, stored.model_dump(exclude_none=True))
        return stored

    def status(self) -> SettingsStatus:
        settings = self.load()
        return SettingsStatus(
            has_openai=bool(settings.openai_key),
            has_gemini=bool(settings.gemini_key),
            has_elevenlabs=bool(settings.elevenlabs_key),
            has_pexels=bool(settings.pexels_key),
            use_gpu=bool(settings.use_gpu),
        )

    def credentials(self) -> GenerationCredentials:
        """Read-only keys for one batch."""
        settings = self.load()
        return GenerationCredentials(
            content_key=settings.openai_key,
            safety_key=settings.gemini_key,
            voice_key=settings.elevenlabs_key,
            footage_key=settings.pexels_key,
            use_hardware_encoder=bool(settings.use_gpu),
        )
