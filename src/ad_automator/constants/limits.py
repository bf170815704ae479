"""Limit constants for the Ad Automator.

This module contains all limits and fixed provider parameters:
- Retry policy for script generation
- Pexels search settings
- ElevenLabs voice selection and prosody
- HTTP timeouts

MODIFICATION GUIDE:
------------------
- CONTENT_MAX_ATTEMPTS: Each attempt is one billed LLM call
- PEXELS_*: Check provider documentation before changing
- ELEVENLABS_VOICE_SETTINGS: Tuned for calm, consistent narration
"""

from typing import Final

# =============================================================================
# SCRIPT GENERATION
# =============================================================================

AD_SEGMENT_COUNT: Final[int] = 3
"""Every ad is hook -> core message -> call to action."""

CONTENT_MAX_ATTEMPTS: Final[int] = 3
"""Total attempts for one script generation (not retries after the first)."""

CONTENT_RETRY_DELAY_SECONDS: Final[float] = 1.0
"""Fixed backoff between script generation attempts."""


# =============================================================================
# PEXELS
# =============================================================================

PEXELS_API_URL: Final[str] = "https://api.pexels.com/videos"
"""Pexels video API base URL."""

PEXELS_VIDEOS_PER_SEARCH: Final[int] = 5
"""Result page size. The pick is random among these."""

PEXELS_ORIENTATION: Final[str] = "portrait"
"""Only vertical footage is requested."""

PEXELS_FALLBACK_QUERY: Final[str] = "abstract vertical business background"
"""Issued once when the segment keywords return nothing."""

PEXELS_DEFAULT_QUERY: Final[str] = "abstract bright business background"
"""Used when a segment comes back without visual keywords."""

PEXELS_PREFERRED_QUALITY: Final[str] = "hd"
"""Preferred encoding quality tag."""

PEXELS_MIN_HD_WIDTH: Final[int] = 1280
"""Minimum width for the preferred encoding."""


# =============================================================================
# ELEVENLABS
# =============================================================================

ELEVENLABS_API_URL: Final[str] = "https://api.elevenlabs.io/v1"
"""ElevenLabs REST base URL."""

ELEVENLABS_DEFAULT_MODEL: Final[str] = "eleven_multilingual_v2"
"""Text-to-speech model."""

ELEVENLABS_DEFAULT_VOICE_ID: Final[str] = "21m00Tcm4TlvDq8ikWAM"
"""Rachel. Used when the voice list cannot be fetched."""

ELEVENLABS_PREFERRED_VOICE: Final[str] = "jonathan"
"""Primary narrator (exact or partial name match)."""

ELEVENLABS_SECONDARY_VOICE: Final[str] = "adam"
"""Narrator used when the primary one is not in the account."""

ELEVENLABS_VOICE_SETTINGS: Final[dict[str, float | bool]] = {
    "stability": 0.85,
    "similarity_boost": 0.65,
    "style": 0.0,
    "use_speaker_boost": True,
}
"""High stability, moderate similarity, neutral style, clarity boost."""


# =============================================================================
# TIMEOUTS
# =============================================================================

HTTP_TIMEOUT_SECONDS: Final[float] = 60.0
"""Default timeout for provider HTTP calls."""

DOWNLOAD_TIMEOUT_SECONDS: Final[float] = 120.0
"""Timeout for streaming one stock clip to disk."""

FFPROBE_TIMEOUT_SECONDS: Final[float] = 30.0
"""Timeout for a single duration probe."""

FFMPEG_ERROR_TAIL_CHARS: Final[int] = 1000
"""Characters of ffmpeg stderr kept in error messages."""


# =============================================================================
# PROGRESS STREAM
# =============================================================================

EVENT_BUFFER_SIZE: Final[int] = 64
"""Capacity of the progress event channel. Producers wait when it is full."""
