"""Application configuration loading.

Values come from (highest priority first) keyword arguments, environment
variables prefixed with AD_AUTOMATOR_, the .env file, then defaults.

Provider API keys are not part of this model; they live in the settings
store (see ad_automator.storage.settings).
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..constants import (
    ADS_DIR_NAME,
    DATA_DIR_NAME,
    ELEVENLABS_DEFAULT_MODEL,
    EVENT_BUFFER_SIZE,
    HARDWARE_ENCODER_DEFAULT,
    HTTP_TIMEOUT_SECONDS,
    LOGS_DIR_NAME,
)

# Load .env file
load_dotenv()


class AppSettings(BaseSettings):
    """Runtime configuration for the generator."""

    model_config = SettingsConfigDict(
        env_prefix="AD_AUTOMATOR_",
        env_file=".env",
        extra="ignore",
    )

    ads_dir: Path = Path(ADS_DIR_NAME)
    data_dir: Path = Path(DATA_DIR_NAME)
    logs_dir: Path = Path(LOGS_DIR_NAME)

    ffmpeg_path: Optional[str] = None
    ffprobe_path: Optional[str] = None
    caption_font_file: Optional[str] = None
    hardware_encoder: str = HARDWARE_ENCODER_DEFAULT

    content_model: str = "gpt-4o"
    audit_model: str = "gemini-2.0-flash"
    tts_model: str = ELEVENLABS_DEFAULT_MODEL

    event_buffer_size: int = Field(default=EVENT_BUFFER_SIZE, ge=1)
    http_timeout: float = Field(default=HTTP_TIMEOUT_SECONDS, gt=0)


@lru_cache(maxsize=1)
def load_app_settings() -> AppSettings:
    """Load settings once per process."""
    return AppSettings()
