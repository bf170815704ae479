"""Composes one narrated 1080x1920 segment with ffmpeg.

Composition is a fixed template:
1. Loop the stock clip (``-stream_loop -1``) so it never runs short
2. Scale to cover 1080x1920 and center-crop (never letterboxed or stretched)
3. Burn in the caption (white, black outline, bottom third)
4. Delay the narration 0.2s and pad it to narration + 1.0s total

The segment is cut at exactly the padded length.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Optional

from ...constants import (
    AUDIO_BITRATE,
    AUDIO_CHANNELS,
    AUDIO_CODEC,
    AUDIO_LEAD_IN_SECONDS,
    AUDIO_SAMPLE_RATE,
    AUDIO_TRAIL_SECONDS,
    CAPTION_BORDER_COLOR,
    CAPTION_BORDER_WIDTH,
    CAPTION_BOTTOM_OFFSET,
    CAPTION_FONT_COLOR,
    CAPTION_FONT_SIZE,
    CAPTION_MAX_LINE_CHARS,
    HARDWARE_ENCODER_DEFAULT,
    HARDWARE_ENCODER_QUALITY_ARGS,
    VIDEO_CODEC,
    VIDEO_CRF,
    VIDEO_FPS,
    VIDEO_HEIGHT,
    VIDEO_PIXEL_FORMAT,
    VIDEO_PRESET,
    VIDEO_WIDTH,
)
from .base import CompositionError, MediaToolsError, PipelineStep
from .media_tools import DurationProbe, MediaTools, error_tail

_QUOTES_RE = re.compile(r"[\"'‘’“”]")
_DISALLOWED_RE = re.compile(r"[^A-Za-z0-9\s.,!?'-]")
_WHITESPACE_RE = re.compile(r"\s+")


# =============================================================================
# Pure helpers
# =============================================================================


def compute_final_duration(audio_duration: float) -> float:
    """Segment length for a narration of ``audio_duration`` seconds."""
    return audio_duration + AUDIO_LEAD_IN_SECONDS + AUDIO_TRAIL_SECONDS


def clean_caption_text(text: str) -> str:
    """Strip quotes and anything outside letters, digits and basic punctuation."""
    cleaned = _QUOTES_RE.sub("", text)
    cleaned = _DISALLOWED_RE.sub("", cleaned)
    return _WHITESPACE_RE.sub(" ", cleaned).strip()


def wrap_caption_text(text: str, limit: int = CAPTION_MAX_LINE_CHARS) -> str:
    """Greedy word wrap. Words longer than ``limit`` get a line of their own."""
    lines: list[str] = []
    current = ""
    for word in text.split():
        candidate = f"{current} {word}" if current else word
        if len(candidate) > limit and current:
            lines.append(current)
            current = word
        else:
            current = candidate
    if current:
        lines.append(current)
    return "\n".join(lines)


def escape_filter_path(path: str) -> str:
    """Quote a file path for use as a filtergraph option value."""
    normalized = path.replace("\\", "/").replace(":", "\\:").replace("'", "\\'")
    return f"'{normalized}'"


def build_video_filter(
    caption_file: Optional[Path] = None,
    font_file: Optional[str] = None,
) -> str:
    """Filtergraph for the video plane, labelled ``[v]``."""
    chain = (
        f"[0:v]scale={VIDEO_WIDTH}:{VIDEO_HEIGHT}:force_original_aspect_ratio=increase,"
        f"crop={VIDEO_WIDTH}:{VIDEO_HEIGHT},setpts=PTS-STARTPTS"
    )
    if caption_file is not None:
        options = []
        if font_file:
            options.append(f"fontfile={escape_filter_path(font_file)}")
        options.extend([
            f"textfile={escape_filter_path(str(caption_file))}",
            f"fontcolor={CAPTION_FONT_COLOR}",
            f"fontsize={CAPTION_FONT_SIZE}",
            "x=(w-text_w)/2",
            f"y=h-text_h-{CAPTION_BOTTOM_OFFSET}",
            f"borderw={CAPTION_BORDER_WIDTH}",
            f"bordercolor={CAPTION_BORDER_COLOR}",
        ])
        chain += ",drawtext=" + ":".join(options)
    return chain + "[v]"


def build_audio_filter(final_duration: float) -> str:
    """Filtergraph for the narration, labelled ``[a]``."""
    delay_ms = int(round(AUDIO_LEAD_IN_SECONDS * 1000))
    return (
        f"[1:a]asetpts=PTS-STARTPTS,adelay={delay_ms}|{delay_ms},"
        f"apad=whole_dur={final_duration:.3f}[a]"
    )


def encoder_args(use_hardware_encoder: bool, hardware_encoder: str = HARDWARE_ENCODER_DEFAULT) -> list[str]:
    """Video encoder arguments with a fixed quality target."""
    if not use_hardware_encoder:
        return ["-c:v", VIDEO_CODEC, "-preset", VIDEO_PRESET, "-crf", str(VIDEO_CRF)]
    quality = HARDWARE_ENCODER_QUALITY_ARGS.get(hardware_encoder, [])
    return ["-c:v", hardware_encoder, *quality]


# =============================================================================
# Composer
# =============================================================================


class SegmentComposer(PipelineStep):
    """Turns a stock clip and a narration track into a finished segment."""

    def __init__(
        self,
        tools: MediaTools,
        probe: Optional[DurationProbe] = None,
        hardware_encoder: str = HARDWARE_ENCODER_DEFAULT,
    ):
        super().__init__("SegmentComposer")
        self.tools = tools
        self.probe = probe or DurationProbe(tools)
        self.hardware_encoder = hardware_encoder

    def build_command(
        self,
        video_path: Path,
        audio_path: Path,
        output_path: Path,
        final_duration: float,
        use_hardware_encoder: bool = False,
        caption_file: Optional[Path] = None,
    ) -> list[str]:
        """Assemble the full ffmpeg argument list."""
        filter_complex = ";".join([
            build_video_filter(caption_file, self.tools.caption_font),
            build_audio_filter(final_duration),
        ])
        return [
            self.tools.ffmpeg,
            "-hide_banner",
            "-stream_loop", "-1",
            "-i", str(video_path),
            "-i", str(audio_path),
            "-filter_complex", filter_complex,
            "-map", "[v]",
            "-map", "[a]",
            "-t", f"{final_duration:.3f}",
            "-r", str(VIDEO_FPS),
            *encoder_args(use_hardware_encoder, self.hardware_encoder),
            "-c:a", AUDIO_CODEC,
            "-b:a", AUDIO_BITRATE,
            "-ar", str(AUDIO_SAMPLE_RATE),
            "-ac", str(AUDIO_CHANNELS),
            "-pix_fmt", VIDEO_PIXEL_FORMAT,
            "-y",
            str(output_path),
        ]

    async def compose(
        self,
        video_path: Path,
        audio_path: Path,
        output_path: Path,
        use_hardware_encoder: bool = False,
        caption: Optional[str] = None,
    ) -> float:
        """Compose one segment.

        Args:
            video_path: Downloaded stock clip.
            audio_path: Narration MP3.
            output_path: Segment file to write.
            use_hardware_encoder: Encode with the configured hardware encoder.
            caption: Narration text to burn in (None for no caption).

        Returns:
            Segment duration in seconds (narration + 1.0).

        Raises:
            ProbeError: If the narration duration cannot be read.
            CompositionError: If ffmpeg fails.
        """
        output_path = Path(output_path)
        audio_duration = await self.probe.probe(Path(audio_path))
        final_duration = compute_final_duration(audio_duration)

        await self.log_detail(
            f"Composing {output_path.name}: audio {audio_duration:.2f}s | "
            f"padding {AUDIO_LEAD_IN_SECONDS + AUDIO_TRAIL_SECONDS:.2f}s | total {final_duration:.2f}s"
        )

        caption_file: Optional[Path] = None
        if caption:
            wrapped = wrap_caption_text(clean_caption_text(caption))
            if wrapped:
                caption_file = output_path.with_name(f"{output_path.stem}_caption.txt")
                caption_file.write_text(wrapped, encoding="utf-8")

        cmd = self.build_command(
            Path(video_path),
            Path(audio_path),
            output_path,
            final_duration,
            use_hardware_encoder=use_hardware_encoder,
            caption_file=caption_file,
        )

        try:
            returncode, _, stderr = await self.tools.run(cmd)
        except MediaToolsError as e:
            raise CompositionError(f"Failed to compose {output_path.name}: {e}") from e
        finally:
            if caption_file is not None:
                caption_file.unlink(missing_ok=True)

        if returncode != 0:
            raise CompositionError(
                f"FFmpeg failed composing {output_path.name} (returncode={returncode}): {error_tail(stderr)}"
            )

        await self.log_detail(f"Segment complete: {output_path.name} ({final_duration:.2f}s)")
        return final_duration
