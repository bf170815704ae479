"""Generates the ad for a single calendar day.

State machine:
    INIT -> DUPLICATE_CHECK -> CONTENT_GENERATION -> SEGMENT_LOOP
         -> CONCATENATION -> CLEANUP -> DONE
    any failure after the workspace exists -> ERROR_CLEANUP (re-raises)

Every segment stage returns a Result; FAILURE_POLICY decides whether a
failed stage falls back (audit) or aborts the day (everything else).
The temp workspace is removed on every exit path.
"""

from __future__ import annotations

import os
import shutil
import time
from datetime import date
from enum import Enum
from pathlib import Path
from typing import Any, Awaitable, Callable, Optional

from ...constants import (
    PEXELS_DEFAULT_QUERY,
    TEMP_DIR_PATTERN,
    get_final_file_name,
    get_month_dir,
)
from ...utils.result import Failure, Result, Success
from .base import (
    AdSegment,
    AuditResult,
    DayJob,
    DayResult,
    GenerationCredentials,
    PipelineStep,
)
from .content_generator import ContentGenerator
from .footage_resolver import FootageDownloader, FootageResolver
from .script_auditor import ScriptAuditor
from .segment_composer import SegmentComposer
from .segment_concatenator import SegmentConcatenator
from .voice_generator import VoiceGenerator


class DayState(str, Enum):
    INIT = "init"
    DUPLICATE_CHECK = "duplicate_check"
    CONTENT_GENERATION = "content_generation"
    SEGMENT_LOOP = "segment_loop"
    CONCATENATION = "concatenation"
    CLEANUP = "cleanup"
    DONE = "done"
    ERROR_CLEANUP = "error_cleanup"


class FailurePolicy(str, Enum):
    FALLBACK = "fallback"
    ABORT = "abort"


FAILURE_POLICY: dict[str, FailurePolicy] = {
    "content": FailurePolicy.ABORT,
    "audit": FailurePolicy.FALLBACK,
    "synthesize": FailurePolicy.ABORT,
    "footage": FailurePolicy.ABORT,
    "download": FailurePolicy.ABORT,
    "compose": FailurePolicy.ABORT,
    "concatenate": FailurePolicy.ABORT,
}


def ordinal(n: int) -> str:
    """1 -> '1st', 12 -> '12th', 22 -> '22nd'."""
    if 10 <= n % 100 <= 20:
        suffix = "th"
    else:
        suffix = {1: "st", 2: "nd", 3: "rd"}.get(n % 10, "th")
    return f"{n}{suffix}"


def format_date_context(day: date) -> str:
    """Human readable date for the script prompt, e.g. 'October 19th, 2026'."""
    return f"{day.strftime('%B')} {ordinal(day.day)}, {day.year}"


def _epoch_ms() -> int:
    return int(time.time() * 1000)


class DayOrchestrator(PipelineStep):
    """Runs one day end to end: script, segments, final file."""

    def __init__(
        self,
        content_generator: ContentGenerator,
        auditor: ScriptAuditor,
        voice_generator: VoiceGenerator,
        footage_resolver: FootageResolver,
        footage_downloader: FootageDownloader,
        composer: SegmentComposer,
        concatenator: SegmentConcatenator,
        clock: Optional[Callable[[], int]] = None,
    ):
        """Initialize the day orchestrator.

        Args:
            content_generator: Script generation stage.
            auditor: Brand-safety stage.
            voice_generator: Narration stage.
            footage_resolver: Stock footage search stage.
            footage_downloader: Stock footage download stage.
            composer: Segment composition stage.
            concatenator: Final join stage.
            clock: Epoch-milliseconds source for workspace names.
        """
        super().__init__("DayOrchestrator")
        self.content_generator = content_generator
        self.auditor = auditor
        self.voice_generator = voice_generator
        self.footage_resolver = footage_resolver
        self.footage_downloader = footage_downloader
        self.composer = composer
        self.concatenator = concatenator
        self._clock = clock or _epoch_ms
        self.state = DayState.INIT

    @property
    def steps(self) -> list[PipelineStep]:
        return [
            self.content_generator,
            self.auditor,
            self.voice_generator,
            self.footage_resolver,
            self.footage_downloader,
            self.composer,
            self.concatenator,
        ]

    def set_display(self, display: Any) -> None:
        """Attach the display to this orchestrator and every stage."""
        super().set_display(display)
        for step in self.steps:
            step.set_display(display)

    async def close(self) -> None:
        """Close HTTP clients held by the stages."""
        await self.voice_generator.close()
        await self.footage_resolver.close()
        await self.footage_downloader.close()

    def _enter(self, state: DayState) -> None:
        self.state = state

    # =========================================================================
    # Stage plumbing
    # =========================================================================

    async def _run_stage(self, stage: str, call: Awaitable[Any]) -> Result[Any]:
        try:
            return Success(await call)
        except Exception as e:
            return Failure.from_exception(e, stage=stage)

    async def _apply_policy(self, stage: str, result: Result[Any], fallback: Any = None) -> Any:
        if isinstance(result, Success):
            return result.value

        if FAILURE_POLICY[stage] is FailurePolicy.FALLBACK:
            await self.log_warning(f"{stage} failed, continuing with fallback: {result.error}")
            return fallback

        await self.log_error(f"{stage} failed: {result.error}")
        if result.cause is not None:
            raise result.cause
        raise RuntimeError(result.error)

    async def _stage(self, stage: str, call: Awaitable[Any], fallback: Any = None) -> Any:
        return await self._apply_policy(stage, await self._run_stage(stage, call), fallback)

    # =========================================================================
    # Segment loop
    # =========================================================================

    async def _process_segment(
        self,
        segment: AdSegment,
        index: int,
        job: DayJob,
        credentials: GenerationCredentials,
    ) -> Path:
        workspace = job.temp_workspace_path
        prefix = f"seg_{index}"

        if credentials.safety_key:
            await self.log_progress(f"Auditing segment {index} with Gemini...")
        audit: AuditResult = await self._stage(
            "audit",
            self.auditor.audit(segment.text, credentials.safety_key),
            fallback=AuditResult(safe_script=segment.text, was_modified=False),
        )
        if audit.was_modified:
            await self.log_progress(f"Safety Audit: Segment {index} rewritten.")
        script = audit.safe_script

        await self.log_progress(f'Generating audio for segment {index} (Text: "{script[:20]}...")...')
        audio = await self._stage("synthesize", self.voice_generator.synthesize(script, credentials.voice_key))
        audio_path = workspace / f"{prefix}_audio.mp3"
        audio_path.write_bytes(audio)
        await self.log_progress(f"Audio generated for segment {index}")

        query = segment.visual_keywords.strip() or PEXELS_DEFAULT_QUERY
        await self.log_progress(f'Searching Pexels for: "{query}"')
        url = await self._stage("footage", self.footage_resolver.resolve(query, credentials.footage_key))

        await self.log_progress(f"Downloading video for segment {index}...")
        video_path = workspace / f"{prefix}_video.mp4"
        await self._stage("download", self.footage_downloader.download(url, video_path))

        await self.log_progress(f"Composing segment {index} (looping video to audio + captions)...")
        segment_path = workspace / f"{prefix}_final.mp4"
        await self._stage(
            "compose",
            self.composer.compose(
                video_path,
                audio_path,
                segment_path,
                use_hardware_encoder=credentials.use_hardware_encoder,
                caption=script,
            ),
        )
        await self.log_progress(f"Segment {index} composed successfully.")

        audio_path.unlink(missing_ok=True)
        video_path.unlink(missing_ok=True)
        return segment_path

    # =========================================================================
    # Day
    # =========================================================================

    async def run_day(
        self,
        project_dir: Path,
        master_prompt: str,
        day: date,
        is_test: bool,
        credentials: GenerationCredentials,
    ) -> DayResult:
        """Generate (or skip) one day.

        Args:
            project_dir: Project output root (ads/<project name>).
            master_prompt: Campaign brief.
            day: Calendar day.
            is_test: Test mode (test_ad_<DD>.mp4, no duplicate check).
            credentials: Provider keys.

        Returns:
            DayResult with status success or skipped.

        Raises:
            PipelineError: Any aborting stage failure, after cleanup.
        """
        self._enter(DayState.INIT)
        month_dir = get_month_dir(Path(project_dir), day)
        month_dir.mkdir(parents=True, exist_ok=True)

        file_name = get_final_file_name(day, is_test)
        final_path = month_dir / file_name
        dd = f"{day.day:02d}"

        if not is_test:
            self._enter(DayState.DUPLICATE_CHECK)
            if final_path.exists():
                self._enter(DayState.DONE)
                return DayResult(
                    date=day,
                    status="skipped",
                    message=f"Skipped day {dd} already exists",
                )

        date_context = format_date_context(day)
        job = DayJob(
            date=day,
            is_test=is_test,
            target_path=final_path,
            temp_workspace_path=month_dir / TEMP_DIR_PATTERN.format(day=dd, stamp=self._clock()),
        )

        segment_paths: list[Path] = []
        try:
            job.temp_workspace_path.mkdir(parents=True, exist_ok=True)
            await self.log_start(f"Starting generation for date: {date_context}")

            self._enter(DayState.CONTENT_GENERATION)
            await self.log_progress("Generating story segments with OpenAI...")
            content = await self._stage(
                "content",
                self.content_generator.generate(master_prompt, date_context, credentials.content_key),
            )

            self._enter(DayState.SEGMENT_LOOP)
            for index, segment in enumerate(content.segments):
                segment_paths.append(await self._process_segment(segment, index, job, credentials))

            self._enter(DayState.CONCATENATION)
            await self.log_progress(f"Merging {len(segment_paths)} segments...")
            staged = job.temp_workspace_path / file_name
            await self._stage("concatenate", self.concatenator.concatenate(segment_paths, staged))
            os.replace(staged, final_path)

            self._enter(DayState.CLEANUP)
        except BaseException:
            self._enter(DayState.ERROR_CLEANUP)
            raise
        finally:
            for path in segment_paths:
                path.unlink(missing_ok=True)
            shutil.rmtree(job.temp_workspace_path, ignore_errors=True)

        self._enter(DayState.DONE)
        await self.log_success(f"Final ad created: {file_name}")
        return DayResult(date=day, status="success", file=file_name)
