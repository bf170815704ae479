"""Runs a month (or a single test day) and streams progress events.

The batch runs in a producer task that writes into a bounded EventChannel;
callers iterate ``stream()``. Per-day failures become ``result`` events
with status ``error`` and the batch moves on. Failures before the first
day (unknown project, missing required keys) produce a single ``error``
event. Every stream ends with ``done`` or ``error``.

Example usage:
    orchestrator = BatchOrchestrator.from_settings()
    async for event in orchestrator.stream(BatchRequest(project_id="a1b2c3", year=2026, month=11)):
        print(event.to_json())
"""

from __future__ import annotations

import asyncio
import calendar
import contextlib
import logging
import random
from datetime import date, timedelta
from pathlib import Path
from typing import AsyncIterator, Callable, Optional

from ...constants import DOWNLOAD_TIMEOUT_SECONDS, HTTP_TIMEOUT_SECONDS
from .base import (
    BatchRequest,
    DayResult,
    GenerationCredentials,
    MissingCredentialError,
    PipelineStep,
    ProjectNotFoundError,
)
from .content_generator import ContentGenerator
from .day_orchestrator import DayOrchestrator
from .events import DoneEvent, ErrorEvent, EventChannel, ProgressEvent, ResultEvent
from .footage_resolver import FootageDownloader, FootageResolver
from .media_tools import MediaTools
from .script_auditor import ScriptAuditor
from .segment_composer import SegmentComposer
from .segment_concatenator import SegmentConcatenator
from .voice_generator import VoiceGenerator

logger = logging.getLogger("ad_automator.pipeline")


def compute_batch_days(year: int, month: int, is_test: bool, today: date) -> list[date]:
    """Days to generate for a request.

    - Test mode: one day (today when it falls in the month, else the 1st)
    - Current month: tomorrow through month end (may be empty)
    - Any other month: the whole month
    """
    first = date(year, month, 1)
    last = date(year, month, calendar.monthrange(year, month)[1])

    if is_test:
        return [today if first <= today <= last else first]

    start = first
    if (today.year, today.month) == (year, month):
        start = today + timedelta(days=1)

    days = []
    current = start
    while current <= last:
        days.append(current)
        current += timedelta(days=1)
    return days


class BatchOrchestrator(PipelineStep):
    """Drives DayOrchestrator over a date range for one project."""

    def __init__(
        self,
        day_orchestrator: DayOrchestrator,
        project_store,
        settings_store,
        ads_dir: Path,
        event_buffer_size: int = 64,
        today: Optional[Callable[[], date]] = None,
    ):
        """Initialize the batch orchestrator.

        Args:
            day_orchestrator: Per-day pipeline.
            project_store: Anything with ``get(project_id) -> Project | None``.
            settings_store: Anything with ``credentials() -> GenerationCredentials``.
            ads_dir: Root output directory.
            event_buffer_size: Capacity of the progress channel.
            today: Source of the current date.
        """
        super().__init__("BatchOrchestrator")
        self.day_orchestrator = day_orchestrator
        self.project_store = project_store
        self.settings_store = settings_store
        self.ads_dir = Path(ads_dir)
        self.event_buffer_size = event_buffer_size
        self._today = today or date.today

    @classmethod
    def from_settings(cls, settings=None, rng: Optional[random.Random] = None) -> "BatchOrchestrator":
        """Build the full pipeline from application settings.

        Raises:
            MediaToolsError: If ffmpeg or ffprobe cannot be found.
        """
        from ...providers.config import load_app_settings
        from ...storage.projects import ProjectStore
        from ...storage.settings import SettingsStore

        settings = settings or load_app_settings()
        tools = MediaTools.resolve(
            settings.ffmpeg_path,
            settings.ffprobe_path,
            settings.caption_font_file,
        )
        timeout = settings.http_timeout or HTTP_TIMEOUT_SECONDS

        day = DayOrchestrator(
            content_generator=ContentGenerator(model_id=settings.content_model),
            auditor=ScriptAuditor(model_id=settings.audit_model),
            voice_generator=VoiceGenerator(model_id=settings.tts_model, timeout=timeout),
            footage_resolver=FootageResolver(timeout=timeout, rng=rng),
            footage_downloader=FootageDownloader(timeout=DOWNLOAD_TIMEOUT_SECONDS),
            composer=SegmentComposer(tools, hardware_encoder=settings.hardware_encoder),
            concatenator=SegmentConcatenator(tools),
        )
        return cls(
            day_orchestrator=day,
            project_store=ProjectStore(settings.data_dir),
            settings_store=SettingsStore(settings.data_dir),
            ads_dir=settings.ads_dir,
            event_buffer_size=settings.event_buffer_size,
        )

    # =========================================================================
    # Producer
    # =========================================================================

    async def _run_day(
        self,
        channel: EventChannel,
        project_dir: Path,
        master_prompt: str,
        day: date,
        is_test: bool,
        credentials: GenerationCredentials,
    ) -> None:
        try:
            result = await self.day_orchestrator.run_day(
                project_dir, master_prompt, day, is_test, credentials
            )
        except Exception as e:
            logger.exception(f"Day {day.isoformat()} failed")
            result = DayResult(date=day, status="error", message=str(e) or type(e).__name__)
        await channel.emit(ResultEvent.from_day_result(result))

    async def _run_batch(self, request: BatchRequest, channel: EventChannel) -> None:
        try:
            project = self.project_store.get(request.project_id)
            if project is None:
                raise ProjectNotFoundError(request.project_id)

            credentials: GenerationCredentials = self.settings_store.credentials()
            missing = credentials.missing_required()
            if missing:
                raise MissingCredentialError(", ".join(missing))

            project_dir = self.ads_dir / project.name
            days = compute_batch_days(request.year, request.month, request.is_test, self._today())
        except Exception as e:
            logger.exception("Batch failed before the first day")
            await channel.emit(ErrorEvent(message=str(e) or type(e).__name__))
            return

        try:
            self.set_display(channel)
            self.day_orchestrator.set_display(channel)

            if not days:
                await self.log_progress("No remaining days to generate this month.")

            for day in days:
                await self._run_day(
                    channel, project_dir, project.master_prompt, day, request.is_test, credentials
                )
        except Exception as e:
            logger.exception("Batch failed outside a day")
            await channel.emit(ErrorEvent(message=str(e) or type(e).__name__))
            return

        await channel.emit(DoneEvent())

    async def _close_stages(self) -> None:
        try:
            await self.day_orchestrator.close()
        except Exception:
            logger.exception("Failed to close pipeline stages")

    async def _produce(self, request: BatchRequest, channel: EventChannel) -> None:
        cancelled = False
        try:
            await self._run_batch(request, channel)
        except asyncio.CancelledError:
            cancelled = True
            raise
        finally:
            await self._close_stages()
            # An abandoned stream has no reader left to unblock
            if not cancelled:
                await channel.close()

    # =========================================================================
    # Public API
    # =========================================================================

    async def stream(self, request: BatchRequest) -> AsyncIterator[ProgressEvent]:
        """Run a batch, yielding events as they happen.

        Abandoning the iterator cancels the running batch.
        """
        channel = EventChannel(self.event_buffer_size)
        producer = asyncio.create_task(self._produce(request, channel))
        try:
            async for event in channel:
                yield event
            await producer
        finally:
            if not producer.done():
                producer.cancel()
                with contextlib.suppress(asyncio.CancelledError):
                    await producer

    async def run(self, request: BatchRequest) -> list[ProgressEvent]:
        """Run a batch and collect every event."""
        return [event async for event in self.stream(request)]

    def run_sync(self, request: BatchRequest) -> list[ProgressEvent]:
        """Synchronous wrapper for run()."""
        return asyncio.run(self.run(request))
