"""Provider layer: configuration and structured LLM calls."""

from .config import AppSettings, load_app_settings
from .text import TextProvider

__all__ = ["AppSettings", "load_app_settings", "TextProvider"]
