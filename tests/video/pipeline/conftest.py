"""Fixtures for pipeline stage and orchestrator tests."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest

from ad_automator.video.pipeline.base import AuditResult
from ad_automator.video.pipeline.day_orchestrator import DayOrchestrator
from ad_automator.video.pipeline.media_tools import MediaTools


@pytest.fixture
def media_tools() -> MediaTools:
    """Tools that are never actually executed (run() is patched in tests)."""
    return MediaTools(ffmpeg="ffmpeg", ffprobe="ffprobe", caption_font=None)


def _stage() -> MagicMock:
    stage = MagicMock()
    stage.set_display = MagicMock()
    stage.close = AsyncMock()
    return stage


@pytest.fixture
def stub_stages(sample_content) -> dict[str, MagicMock]:
    """Mocked stages that write placeholder files where the real ones would."""

    async def audit(text, api_key):
        return AuditResult(safe_script=text, was_modified=False)

    async def download(url, path):
        Path(path).write_bytes(b"stock-video")
        return Path(path)

    async def compose(video_path, audio_path, output_path, use_hardware_encoder=False, caption=None):
        Path(output_path).write_bytes(b"segment")
        return 5.0

    async def concatenate(segment_paths, output_path):
        Path(output_path).write_bytes(b"final-ad")
        return Path(output_path)

    stages = {name: _stage() for name in (
        "content_generator",
        "auditor",
        "voice_generator",
        "footage_resolver",
        "footage_downloader",
        "composer",
        "concatenator",
    )}
    stages["content_generator"].generate = AsyncMock(return_value=sample_content)
    stages["auditor"].audit = AsyncMock(side_effect=audit)
    stages["voice_generator"].synthesize = AsyncMock(return_value=b"ID3-narration")
    stages["footage_resolver"].resolve = AsyncMock(return_value="https://videos.pexels.com/video-files/1/hd.mp4")
    stages["footage_downloader"].download = AsyncMock(side_effect=download)
    stages["composer"].compose = AsyncMock(side_effect=compose)
    stages["concatenator"].concatenate = AsyncMock(side_effect=concatenate)
    return stages


@pytest.fixture
def day_orchestrator(stub_stages) -> DayOrchestrator:
    return DayOrchestrator(**stub_stages, clock=lambda: 1760000000000)
