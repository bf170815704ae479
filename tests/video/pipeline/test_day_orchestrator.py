"""Tests for the single-day orchestrator."""

from __future__ import annotations

import asyncio
from datetime import date
from pathlib import Path
from unittest.mock import AsyncMock

import pytest

from ad_automator.constants import PEXELS_DEFAULT_QUERY
from ad_automator.video.pipeline.base import CompositionError, ConcatenationError
from ad_automator.video.pipeline.day_orchestrator import (
    FAILURE_POLICY,
    DayState,
    FailurePolicy,
    format_date_context,
    ordinal,
)

DAY = date(2026, 10, 19)
PROMPT = "Calm investing for busy professionals"


def month_dir(project_dir: Path) -> Path:
    return project_dir / "2026" / "10"


def temp_dirs(project_dir: Path) -> list[Path]:
    return list(month_dir(project_dir).glob("temp_*"))


@pytest.mark.parametrize(
    "n, expected",
    [(1, "1st"), (2, "2nd"), (3, "3rd"), (4, "4th"), (11, "11th"), (12, "12th"),
     (13, "13th"), (21, "21st"), (22, "22nd"), (23, "23rd"), (31, "31st")],
)
def test_ordinal(n, expected):
    assert ordinal(n) == expected


def test_format_date_context():
    assert format_date_context(DAY) == "October 19th, 2026"
    assert format_date_context(date(2027, 2, 1)) == "February 1st, 2027"


def test_only_audit_falls_back():
    fallbacks = [stage for stage, policy in FAILURE_POLICY.items() if policy is FailurePolicy.FALLBACK]
    assert fallbacks == ["audit"]


class TestRunDay:
    """Tests for DayOrchestrator.run_day."""

    @pytest.mark.asyncio
    async def test_success(self, day_orchestrator, stub_stages, project_dir, credentials, display):
        day_orchestrator.set_display(display)

        result = await day_orchestrator.run_day(project_dir, PROMPT, DAY, False, credentials)

        final = month_dir(project_dir) / "19.mp4"
        assert result.status == "success"
        assert result.file == "19.mp4"
        assert final.read_bytes() == b"final-ad"
        assert temp_dirs(project_dir) == []
        assert stub_stages["composer"].compose.await_count == 3
        assert day_orchestrator.state is DayState.DONE
        assert display.messages[0] == "Starting generation for date: October 19th, 2026"
        assert display.messages[-1] == "Final ad created: 19.mp4"

    @pytest.mark.asyncio
    async def test_passes_date_context_and_keys(self, day_orchestrator, stub_stages, project_dir, credentials):
        await day_orchestrator.run_day(project_dir, PROMPT, DAY, False, credentials)

        stub_stages["content_generator"].generate.assert_awaited_once_with(
            PROMPT, "October 19th, 2026", "sk-openai"
        )
        assert stub_stages["voice_generator"].synthesize.await_args.args[1] == "xi-key"
        assert stub_stages["footage_resolver"].resolve.await_args.args[1] == "pexels-key"

    @pytest.mark.asyncio
    async def test_segments_joined_in_order(self, day_orchestrator, stub_stages, project_dir, credentials):
        await day_orchestrator.run_day(project_dir, PROMPT, DAY, False, credentials)

        segment_paths = stub_stages["concatenator"].concatenate.await_args.args[0]
        assert [p.name for p in segment_paths] == ["seg_0_final.mp4", "seg_1_final.mp4", "seg_2_final.mp4"]

    @pytest.mark.asyncio
    async def test_workspace_name(self, day_orchestrator, stub_stages, project_dir, credentials):
        await day_orchestrator.run_day(project_dir, PROMPT, DAY, False, credentials)

        video_path = stub_stages["footage_downloader"].download.await_args_list[0].args[1]
        assert video_path.name == "seg_0_video.mp4"
        assert video_path.parent.name == "temp_19_1760000000000"
        assert video_path.parent.parent == month_dir(project_dir)

    @pytest.mark.asyncio
    async def test_existing_day_skipped(self, day_orchestrator, stub_stages, project_dir, credentials):
        await day_orchestrator.run_day(project_dir, PROMPT, DAY, False, credentials)

        result = await day_orchestrator.run_day(project_dir, PROMPT, DAY, False, credentials)

        assert result.status == "skipped"
        assert result.message == "Skipped day 19 already exists"
        assert result.file is None
        assert stub_stages["content_generator"].generate.await_count == 1

    @pytest.mark.asyncio
    async def test_test_mode_always_regenerates(self, day_orchestrator, stub_stages, project_dir, credentials):
        first = await day_orchestrator.run_day(project_dir, PROMPT, DAY, True, credentials)
        second = await day_orchestrator.run_day(project_dir, PROMPT, DAY, True, credentials)

        assert first.file == second.file == "test_ad_19.mp4"
        assert second.status == "success"
        assert (month_dir(project_dir) / "test_ad_19.mp4").exists()
        assert not (month_dir(project_dir) / "19.mp4").exists()
        assert stub_stages["content_generator"].generate.await_count == 2

    @pytest.mark.asyncio
    async def test_compose_failure_cleans_up(self, day_orchestrator, stub_stages, project_dir, credentials, display):
        stub_stages["composer"].compose = AsyncMock(side_effect=CompositionError("ffmpeg exploded"))
        day_orchestrator.set_display(display)

        with pytest.raises(CompositionError, match="ffmpeg exploded"):
            await day_orchestrator.run_day(project_dir, PROMPT, DAY, False, credentials)

        assert temp_dirs(project_dir) == []
        assert not (month_dir(project_dir) / "19.mp4").exists()
        assert day_orchestrator.state is DayState.ERROR_CLEANUP
        assert "compose failed: ffmpeg exploded" in display.messages

    @pytest.mark.asyncio
    async def test_concat_failure_publishes_nothing(self, day_orchestrator, stub_stages, project_dir, credentials):
        stub_stages["concatenator"].concatenate = AsyncMock(side_effect=ConcatenationError("bad stream"))

        with pytest.raises(ConcatenationError):
            await day_orchestrator.run_day(project_dir, PROMPT, DAY, False, credentials)

        assert list(month_dir(project_dir).iterdir()) == []

    @pytest.mark.asyncio
    async def test_audit_failure_falls_back(self, day_orchestrator, stub_stages, project_dir, credentials, sample_content, display):
        stub_stages["auditor"].audit = AsyncMock(side_effect=RuntimeError("gemini down"))
        day_orchestrator.set_display(display)

        result = await day_orchestrator.run_day(project_dir, PROMPT, DAY, False, credentials)

        assert result.status == "success"
        narrated = [call.args[0] for call in stub_stages["voice_generator"].synthesize.await_args_list]
        assert narrated == [segment.text for segment in sample_content.segments]
        assert "audit failed, continuing with fallback: gemini down" in display.messages

    @pytest.mark.asyncio
    async def test_empty_keywords_use_default_query(self, day_orchestrator, stub_stages, project_dir, credentials):
        await day_orchestrator.run_day(project_dir, PROMPT, DAY, False, credentials)

        queries = [call.args[0] for call in stub_stages["footage_resolver"].resolve.await_args_list]
        assert queries == ["calm city sunrise", "ocean waves slow motion", PEXELS_DEFAULT_QUERY]

    @pytest.mark.asyncio
    async def test_audit_message_only_with_safety_key(self, day_orchestrator, project_dir, credentials, display):
        day_orchestrator.set_display(display)

        await day_orchestrator.run_day(
            project_dir, PROMPT, DAY, True, credentials.model_copy(update={"safety_key": None})
        )

        assert not any(m.startswith("Auditing segment") for m in display.messages)

    @pytest.mark.asyncio
    async def test_hardware_flag_forwarded(self, day_orchestrator, stub_stages, project_dir, credentials):
        creds = credentials.model_copy(update={"use_hardware_encoder": True})

        await day_orchestrator.run_day(project_dir, PROMPT, DAY, True, creds)

        assert stub_stages["composer"].compose.await_args.kwargs["use_hardware_encoder"] is True

    @pytest.mark.asyncio
    async def test_close_closes_http_stages(self, day_orchestrator, stub_stages):
        await day_orchestrator.close()

        for name in ("voice_generator", "footage_resolver", "footage_downloader"):
            stub_stages[name].close.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_cancelled_during_first_log_removes_workspace(self, day_orchestrator, project_dir, credentials):
        logging_started = asyncio.Event()

        class BlockedDisplay:
            async def log(self, message):
                logging_started.set()
                await asyncio.sleep(3600)

        day_orchestrator.set_display(BlockedDisplay())
        task = asyncio.create_task(day_orchestrator.run_day(project_dir, PROMPT, DAY, False, credentials))
        await asyncio.wait_for(logging_started.wait(), timeout=5)

        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task

        assert temp_dirs(project_dir) == []
        assert day_orchestrator.state is DayState.ERROR_CLEANUP
