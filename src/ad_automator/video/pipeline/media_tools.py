"""FFmpeg / FFprobe resolution and the duration probe.

The executables and the caption font are resolved once per process and
the resulting MediaTools object is handed to every stage that shells out.
"""

from __future__ import annotations

import asyncio
import logging
import math
import shutil
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Optional

from ...constants import CAPTION_FONT_CANDIDATES, FFMPEG_ERROR_TAIL_CHARS, FFPROBE_TIMEOUT_SECONDS
from .base import MediaToolsError, PipelineStep, ProbeError

logger = logging.getLogger("ad_automator.pipeline")


def error_tail(stderr: str, limit: int = FFMPEG_ERROR_TAIL_CHARS) -> str:
    """Last ``limit`` characters of a tool's stderr, for error messages."""
    tail = stderr[-limit:] if len(stderr) > limit else stderr
    if not tail.strip():
        tail = "(stderr was empty)"
    return tail


def _find_executable(name: str, configured: Optional[str]) -> str:
    if configured:
        if Path(configured).is_file():
            return str(Path(configured))
        found = shutil.which(configured)
        if found:
            return found
        raise MediaToolsError(f"{name} not found at configured path: {configured}")

    found = shutil.which(name)
    if not found:
        raise MediaToolsError(
            f"{name} not found on PATH. Install FFmpeg or set AD_AUTOMATOR_{name.upper()}_PATH."
        )
    return found


def find_caption_font(configured: Optional[str] = None) -> Optional[str]:
    """Pick the caption font file.

    Returns the configured font when it exists, else the first installed
    bold font from the OS candidates, else None (ffmpeg default font).
    """
    if configured:
        if Path(configured).is_file():
            return str(Path(configured))
        logger.warning(f"Caption font not found: {configured}, trying system fonts")

    for candidate in CAPTION_FONT_CANDIDATES:
        if Path(candidate).is_file():
            return candidate

    logger.warning("No bold system font found, captions use the ffmpeg default font")
    return None


@lru_cache(maxsize=None)
def _resolve_cached(
    ffmpeg_path: Optional[str],
    ffprobe_path: Optional[str],
    caption_font: Optional[str],
) -> "MediaTools":
    tools = MediaTools(
        ffmpeg=_find_executable("ffmpeg", ffmpeg_path),
        ffprobe=_find_executable("ffprobe", ffprobe_path),
        caption_font=find_caption_font(caption_font),
    )
    logger.info(f"Media tools: ffmpeg={tools.ffmpeg} ffprobe={tools.ffprobe} font={tools.caption_font}")
    return tools


@dataclass(frozen=True)
class MediaTools:
    """Resolved ffmpeg / ffprobe executables and caption font."""

    ffmpeg: str
    ffprobe: str
    caption_font: Optional[str] = None

    @classmethod
    def resolve(
        cls,
        ffmpeg_path: Optional[str] = None,
        ffprobe_path: Optional[str] = None,
        caption_font: Optional[str] = None,
    ) -> "MediaTools":
        """Resolve the tools (cached per argument set for the process).

        Raises:
            MediaToolsError: If ffmpeg or ffprobe cannot be found.
        """
        return _resolve_cached(ffmpeg_path, ffprobe_path, caption_font)

    async def run(
        self,
        args: list[str],
        timeout: Optional[float] = None,
    ) -> tuple[int, str, str]:
        """Run a tool command (``args[0]`` is the executable).

        Returns:
            Tuple of (returncode, stdout, stderr).

        Raises:
            MediaToolsError: If the process cannot be started or times out.
        """
        logger.debug(f"FFMPEG_CMD | {' '.join(args)}")
        try:
            process = await asyncio.create_subprocess_exec(
                *args,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as e:
            raise MediaToolsError(f"Failed to start {args[0]}: {e}") from e

        try:
            stdout, stderr = await asyncio.wait_for(process.communicate(), timeout)
        except asyncio.TimeoutError as e:
            process.kill()
            await process.wait()
            raise MediaToolsError(f"{Path(args[0]).name} timed out after {timeout}s") from e

        return (
            process.returncode,
            stdout.decode("utf-8", errors="replace"),
            stderr.decode("utf-8", errors="replace"),
        )


class DurationProbe(PipelineStep):
    """Measures media duration with ffprobe."""

    def __init__(self, tools: MediaTools, timeout: float = FFPROBE_TIMEOUT_SECONDS):
        super().__init__("DurationProbe")
        self.tools = tools
        self.timeout = timeout

    async def probe(self, path: Path) -> float:
        """Get the duration of a media file.

        Args:
            path: Audio or video file.

        Returns:
            Duration in seconds (finite and positive).

        Raises:
            ProbeError: If the file is missing, ffprobe fails or the value is invalid.
        """
        path = Path(path)
        if not path.is_file():
            raise ProbeError(f"Media file not found: {path}")

        cmd = [
            self.tools.ffprobe,
            "-v", "error",
            "-show_entries", "format=duration",
            "-of", "default=noprint_wrappers=1:nokey=1",
            str(path),
        ]

        try:
            returncode, stdout, stderr = await self.tools.run(cmd, timeout=self.timeout)
        except MediaToolsError as e:
            raise ProbeError(f"ffprobe failed for {path.name}: {e}") from e

        if returncode != 0:
            raise ProbeError(f"ffprobe failed for {path.name}: {error_tail(stderr)}")

        raw = stdout.strip()
        try:
            duration = float(raw)
        except ValueError as e:
            raise ProbeError(f"Invalid duration for {path.name}: {raw!r}") from e

        if not math.isfinite(duration) or duration <= 0:
            raise ProbeError(f"Invalid duration for {path.name}: {raw!r}")

        await self.log_debug(f"{path.name}: {duration:.2f}s")
        return duration
