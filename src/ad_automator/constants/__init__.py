"""Global constants package for Ad Automator.

PACKAGE STRUCTURE:
-----------------
- video.py    : Frame size, FPS, padding, encoder and caption settings
- limits.py   : Retry policy, provider parameters, timeouts
- paths.py    : Output tree layout and file naming

USAGE EXAMPLES:
--------------
    from ad_automator.constants import VIDEO_WIDTH, VIDEO_HEIGHT
    from ad_automator.constants import get_final_file_name
"""

# =============================================================================
# VIDEO CONSTANTS
# =============================================================================
from .video import (
    # Frame
    VIDEO_WIDTH,
    VIDEO_HEIGHT,
    VIDEO_FPS,
    VIDEO_PIXEL_FORMAT,
    # Padding
    AUDIO_LEAD_IN_SECONDS,
    AUDIO_TRAIL_SECONDS,
    # Encoding
    VIDEO_CODEC,
    VIDEO_PRESET,
    VIDEO_CRF,
    HARDWARE_ENCODER_DEFAULT,
    HARDWARE_ENCODER_QUALITY_ARGS,
    AUDIO_CODEC,
    AUDIO_BITRATE,
    AUDIO_SAMPLE_RATE,
    AUDIO_CHANNELS,
    # Captions
    CAPTION_MAX_LINE_CHARS,
    CAPTION_FONT_SIZE,
    CAPTION_FONT_COLOR,
    CAPTION_BORDER_COLOR,
    CAPTION_BORDER_WIDTH,
    CAPTION_BOTTOM_OFFSET,
    CAPTION_FONT_CANDIDATES,
)

# =============================================================================
# LIMIT CONSTANTS
# =============================================================================
from .limits import (
    AD_SEGMENT_COUNT,
    CONTENT_MAX_ATTEMPTS,
    CONTENT_RETRY_DELAY_SECONDS,
    PEXELS_API_URL,
    PEXELS_VIDEOS_PER_SEARCH,
    PEXELS_ORIENTATION,
    PEXELS_FALLBACK_QUERY,
    PEXELS_DEFAULT_QUERY,
    PEXELS_PREFERRED_QUALITY,
    PEXELS_MIN_HD_WIDTH,
    ELEVENLABS_API_URL,
    ELEVENLABS_DEFAULT_MODEL,
    ELEVENLABS_DEFAULT_VOICE_ID,
    ELEVENLABS_PREFERRED_VOICE,
    ELEVENLABS_SECONDARY_VOICE,
    ELEVENLABS_VOICE_SETTINGS,
    HTTP_TIMEOUT_SECONDS,
    DOWNLOAD_TIMEOUT_SECONDS,
    FFPROBE_TIMEOUT_SECONDS,
    FFMPEG_ERROR_TAIL_CHARS,
    EVENT_BUFFER_SIZE,
)

# =============================================================================
# PATH CONSTANTS
# =============================================================================
from .paths import (
    ADS_DIR_NAME,
    DATA_DIR_NAME,
    LOGS_DIR_NAME,
    PROJECTS_FILE_NAME,
    SETTINGS_FILE_NAME,
    FINAL_FILE_PATTERN,
    TEST_FILE_PATTERN,
    TEMP_DIR_PATTERN,
    CONCAT_MANIFEST_SUFFIX,
    get_month_dir,
    get_final_file_name,
)

__all__ = [
    # Video
    "VIDEO_WIDTH",
    "VIDEO_HEIGHT",
    "VIDEO_FPS",
    "VIDEO_PIXEL_FORMAT",
    "AUDIO_LEAD_IN_SECONDS",
    "AUDIO_TRAIL_SECONDS",
    "VIDEO_CODEC",
    "VIDEO_PRESET",
    "VIDEO_CRF",
    "HARDWARE_ENCODER_DEFAULT",
    "HARDWARE_ENCODER_QUALITY_ARGS",
    "AUDIO_CODEC",
    "AUDIO_BITRATE",
    "AUDIO_SAMPLE_RATE",
    "AUDIO_CHANNELS",
    "CAPTION_MAX_LINE_CHARS",
    "CAPTION_FONT_SIZE",
    "CAPTION_FONT_COLOR",
    "CAPTION_BORDER_COLOR",
    "CAPTION_BORDER_WIDTH",
    "CAPTION_BOTTOM_OFFSET",
    "CAPTION_FONT_CANDIDATES",
    # Limits
    "AD_SEGMENT_COUNT",
    "CONTENT_MAX_ATTEMPTS",
    "CONTENT_RETRY_DELAY_SECONDS",
    "PEXELS_API_URL",
    "PEXELS_VIDEOS_PER_SEARCH",
    "PEXELS_ORIENTATION",
    "PEXELS_FALLBACK_QUERY",
    "PEXELS_DEFAULT_QUERY",
    "PEXELS_PREFERRED_QUALITY",
    "PEXELS_MIN_HD_WIDTH",
    "ELEVENLABS_API_URL",
    "ELEVENLABS_DEFAULT_MODEL",
    "ELEVENLABS_DEFAULT_VOICE_ID",
    "ELEVENLABS_PREFERRED_VOICE",
    "ELEVENLABS_SECONDARY_VOICE",
    "ELEVENLABS_VOICE_SETTINGS",
    "HTTP_TIMEOUT_SECONDS",
    "DOWNLOAD_TIMEOUT_SECONDS",
    "FFPROBE_TIMEOUT_SECONDS",
    "FFMPEG_ERROR_TAIL_CHARS",
    "EVENT_BUFFER_SIZE",
    # Paths
    "ADS_DIR_NAME",
    "DATA_DIR_NAME",
    "LOGS_DIR_NAME",
    "PROJECTS_FILE_NAME",
    "SETTINGS_FILE_NAME",
    "FINAL_FILE_PATTERN",
    "TEST_FILE_PATTERN",
    "TEMP_DIR_PATTERN",
    "CONCAT_MANIFEST_SUFFIX",
    "get_month_dir",
    "get_final_file_name",
]
