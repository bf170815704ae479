"""Joins composed segments into the final ad without re-encoding."""

from __future__ import annotations

from pathlib import Path

from ...constants import CONCAT_MANIFEST_SUFFIX
from .base import ConcatenationError, MediaToolsError, PipelineStep
from .media_tools import MediaTools, error_tail


def build_manifest(segment_paths: list[Path]) -> str:
    """ffmpeg concat demuxer manifest, one ``file '<path>'`` line per segment."""
    lines = []
    for path in segment_paths:
        normalized = Path(path).resolve().as_posix().replace("'", "'\\''")
        lines.append(f"file '{normalized}'")
    return "\n".join(lines) + "\n"


class SegmentConcatenator(PipelineStep):
    """Stream-copies segments (which share one encoding) into a single file."""

    def __init__(self, tools: MediaTools):
        super().__init__("SegmentConcatenator")
        self.tools = tools

    async def concatenate(self, segment_paths: list[Path], output_path: Path) -> Path:
        """Concatenate segments in order.

        Raises:
            ConcatenationError: If there is nothing to join or ffmpeg fails.
        """
        if not segment_paths:
            raise ConcatenationError("No segments to concatenate")

        output_path = Path(output_path)
        manifest = output_path.with_name(f"{output_path.stem}{CONCAT_MANIFEST_SUFFIX}")
        manifest.write_text(build_manifest(segment_paths), encoding="utf-8")

        cmd = [
            self.tools.ffmpeg,
            "-hide_banner",
            "-f", "concat",
            "-safe", "0",
            "-i", str(manifest),
            "-c", "copy",
            "-y",
            str(output_path),
        ]

        await self.log_detail(f"Merging {len(segment_paths)} segments into {output_path.name}")
        try:
            returncode, _, stderr = await self.tools.run(cmd)
        except MediaToolsError as e:
            raise ConcatenationError(f"Failed to concatenate segments: {e}") from e
        finally:
            manifest.unlink(missing_ok=True)

        if returncode != 0:
            raise ConcatenationError(
                f"FFmpeg concat failed (returncode={returncode}): {error_tail(stderr)}"
            )

        return output_path
