"""Shared test fixtures and configuration.

Fixtures return plain models or async-compatible mocks that can be used
with the async/await syntax.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from ad_automator.video.pipeline.base import (
    AdContent,
    AdSegment,
    GenerationCredentials,
    Project,
)


class RecordingDisplay:
    """Stand-in for the event channel that records log messages."""

    def __init__(self):
        self.messages: list[str] = []

    async def log(self, message: str) -> None:
        self.messages.append(message)


@pytest.fixture
def display() -> RecordingDisplay:
    return RecordingDisplay()


@pytest.fixture
def sample_content() -> AdContent:
    """A valid three-segment script."""
    return AdContent(
        theme="Calm long-term investing",
        segments=[
            AdSegment(
                text="Most people check their portfolio daily and lose sleep over noise.",
                visual_keywords="calm city sunrise",
                estimated_duration_seconds=8,
            ),
            AdSegment(
                text="Wealth is built quietly, with patience, discipline and time on your side.",
                visual_keywords="ocean waves slow motion",
                estimated_duration_seconds=10,
            ),
            AdSegment(
                text="Start your calm investing plan today.",
                visual_keywords="",
                estimated_duration_seconds=7,
            ),
        ],
    )


@pytest.fixture
def credentials() -> GenerationCredentials:
    return GenerationCredentials(
        content_key="sk-openai",
        safety_key="gemini-key",
        voice_key="xi-key",
        footage_key="pexels-key",
    )


@pytest.fixture
def sample_project() -> Project:
    return Project(id="a1b2c3d4", name="investing", master_prompt="Calm investing for busy professionals")


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    path = tmp_path / "ads" / "investing"
    path.mkdir(parents=True)
    return path
