"""Video-related constants for the Ad Automator.

This module contains all constants related to segment composition:
- Output frame and frame rate
- Narration padding (the "unhurried" pacing contract)
- Encoder and audio settings
- Caption overlay styling

MODIFICATION GUIDE:
------------------
- VIDEO_WIDTH/HEIGHT: Change for different resolutions (keep 9:16 ratio)
- AUDIO_LEAD_IN/TRAIL_SECONDS: Every segment is exactly narration + both
- CAPTION_* settings: Legibility first, every segment uses the same style
- HARDWARE_ENCODER_QUALITY_ARGS: Add an entry when supporting a new encoder
"""

from typing import Final

# =============================================================================
# VIDEO FRAME
# =============================================================================
# Every composed segment is 9:16 vertical, never letterboxed or stretched

VIDEO_WIDTH: Final[int] = 1080
"""Output video width in pixels."""

VIDEO_HEIGHT: Final[int] = 1920
"""Output video height in pixels. 9:16 aspect ratio with 1080 width."""

VIDEO_FPS: Final[int] = 30
"""Constant output frame rate."""

VIDEO_PIXEL_FORMAT: Final[str] = "yuv420p"
"""Pixel format with the broadest player support."""


# =============================================================================
# NARRATION PADDING
# =============================================================================

AUDIO_LEAD_IN_SECONDS: Final[float] = 0.2
"""Silence before the narration starts."""

AUDIO_TRAIL_SECONDS: Final[float] = 0.8
"""Silence after the narration ends."""


# =============================================================================
# ENCODING
# =============================================================================

VIDEO_CODEC: Final[str] = "libx264"
"""Software H.264 encoder."""

VIDEO_PRESET: Final[str] = "fast"
"""x264 preset."""

VIDEO_CRF: Final[int] = 18
"""x264 constant rate factor (visually lossless)."""

HARDWARE_ENCODER_DEFAULT: Final[str] = "h264_nvenc"
"""Hardware H.264 encoder used when hardware encoding is enabled."""

HARDWARE_ENCODER_QUALITY_ARGS: Final[dict[str, list[str]]] = {
    "h264_nvenc": ["-preset", "p4", "-rc", "vbr", "-cq", "18"],
    "h264_amf": ["-quality", "quality", "-rc", "cqp", "-qp_i", "18", "-qp_p", "18"],
    "h264_qsv": ["-preset", "medium", "-global_quality", "18"],
    "h264_videotoolbox": ["-q:v", "65"],
}
"""Fixed quality target per hardware encoder (equivalent of CRF 18)."""

AUDIO_CODEC: Final[str] = "aac"
"""Audio codec for encoding. AAC is standard for MP4."""

AUDIO_BITRATE: Final[str] = "192k"
"""Audio bitrate."""

AUDIO_SAMPLE_RATE: Final[int] = 44100
"""Audio sample rate in Hz."""

AUDIO_CHANNELS: Final[int] = 2
"""Stereo output."""


# =============================================================================
# CAPTION OVERLAY
# =============================================================================

CAPTION_MAX_LINE_CHARS: Final[int] = 25
"""Greedy wrap width. Words are never broken."""

CAPTION_FONT_SIZE: Final[int] = 72
"""Caption font size in pixels."""

CAPTION_FONT_COLOR: Final[str] = "white"
"""Caption fill color."""

CAPTION_BORDER_COLOR: Final[str] = "black"
"""Caption outline color."""

CAPTION_BORDER_WIDTH: Final[int] = 8
"""Caption outline width in pixels."""

CAPTION_BOTTOM_OFFSET: Final[int] = 250
"""Distance between the caption block and the bottom edge in pixels."""

CAPTION_FONT_CANDIDATES: Final[tuple[str, ...]] = (
    "C:/Windows/Fonts/arialbd.ttf",
    "/System/Library/Fonts/Supplemental/Arial Bold.ttf",
    "/Library/Fonts/Arial Bold.ttf",
    "/usr/share/fonts/truetype/dejavu/DejaVuSans-Bold.ttf",
    "/usr/share/fonts/dejavu/DejaVuSans-Bold.ttf",
    "/usr/share/fonts/TTF/DejaVuSans-Bold.ttf",
    "/usr/share/fonts/truetype/liberation/LiberationSans-Bold.ttf",
)
"""Bold fonts probed (in order) when no caption font is configured."""
