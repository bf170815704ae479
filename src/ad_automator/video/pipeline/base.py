"""Base classes and shared models for the ad generation pipeline.

Everything the stages pass to each other lives here:
- Data models (script, audit verdict, credentials, day job/result)
- PipelineStep, the base class giving every stage the same logging surface
- The exception taxonomy, rooted at PipelineError
"""

from __future__ import annotations

import logging
from datetime import date, datetime
from pathlib import Path
from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ...constants import AD_SEGMENT_COUNT

logger = logging.getLogger("ad_automator.pipeline")


# =============================================================================
# Data Models
# =============================================================================


class AdSegment(BaseModel):
    """One narrated segment of an ad (hook, core message or call to action)."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    text: str = Field(description="Narration text, 10-25 words, no dates")
    visual_keywords: str = Field(
        alias="visualKeywords",
        description="Search terms for vertical stock footage",
    )
    estimated_duration_seconds: float = Field(
        alias="estimatedDuration",
        description="Rough spoken length in seconds",
    )


class AdContent(BaseModel):
    """A complete three-segment ad script."""

    model_config = ConfigDict(populate_by_name=True)

    theme: str = Field(description="Brief theme description")
    segments: list[AdSegment]

    @field_validator("segments")
    @classmethod
    def _exactly_three(cls, value: list[AdSegment]) -> list[AdSegment]:
        if len(value) != AD_SEGMENT_COUNT:
            raise ValueError(
                f"expected exactly {AD_SEGMENT_COUNT} segments, got {len(value)}"
            )
        return value


class AuditResult(BaseModel):
    """Brand-safety verdict for one segment."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    safe_script: str = Field(
        alias="safeScript",
        description="The sanitized text, or the original if it was safe",
    )
    was_modified: bool = Field(alias="wasModified")


class GenerationCredentials(BaseModel):
    """Read-only provider keys for one batch.

    content_key and voice_key are required. A missing safety_key skips the
    audit; a missing footage_key fails each day at footage resolution.
    """

    model_config = ConfigDict(frozen=True)

    content_key: Optional[str] = Field(default=None, repr=False)
    safety_key: Optional[str] = Field(default=None, repr=False)
    voice_key: Optional[str] = Field(default=None, repr=False)
    footage_key: Optional[str] = Field(default=None, repr=False)
    use_hardware_encoder: bool = False

    def missing_required(self) -> list[str]:
        """Names of required keys that are absent."""
        missing = []
        if not self.content_key:
            missing.append("content_key")
        if not self.voice_key:
            missing.append("voice_key")
        return missing


class Project(BaseModel):
    """A named ad campaign with its master prompt."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    master_prompt: str = Field(alias="masterPrompt")
    created_at: datetime = Field(default_factory=datetime.now, alias="createdAt")


class DayJob(BaseModel):
    """Work item for a single calendar day."""

    date: date
    is_test: bool
    target_path: Path
    temp_workspace_path: Path


DayStatus = Literal["success", "skipped", "error"]


class DayResult(BaseModel):
    """Outcome of one day."""

    date: date
    status: DayStatus
    file: Optional[str] = None
    message: Optional[str] = None


class BatchRequest(BaseModel):
    """One generation request: a project and a month (or a single test day)."""

    project_id: str
    year: int = Field(ge=1970, le=9999)
    month: int = Field(ge=1, le=12)
    is_test: bool = False


# =============================================================================
# Pipeline Step
# =============================================================================


class PipelineStep:
    """Base class for all pipeline stages.

    User-facing messages (start, progress, success, warning, error) are
    written to the python logger and forwarded to the progress display when
    one is attached. Detail and debug messages only reach the logger.
    """

    def __init__(self, name: str):
        self.name = name
        self._display = None  # Set by orchestrator

    def set_display(self, display: Any) -> None:
        """Attach a progress display (anything with ``async log(message)``)."""
        self._display = display

    async def _emit(self, level: int, message: str) -> None:
        logger.log(level, f"[{self.name}] {message}")
        if self._display is not None:
            await self._display.log(message)

    async def log_start(self, message: str) -> None:
        """Log step start (shown to the user)."""
        await self._emit(logging.INFO, message)

    async def log_progress(self, message: str) -> None:
        """Log important progress (shown to the user)."""
        await self._emit(logging.INFO, message)

    async def log_success(self, message: str) -> None:
        """Log step success (shown to the user)."""
        await self._emit(logging.INFO, message)

    async def log_warning(self, message: str) -> None:
        """Log step warning (shown to the user)."""
        await self._emit(logging.WARNING, message)

    async def log_error(self, message: str) -> None:
        """Log step error (shown to the user)."""
        await self._emit(logging.ERROR, message)

    async def log_detail(self, message: str) -> None:
        """Log detailed progress (log file only)."""
        logger.info(f"[{self.name}] {message}")

    async def log_debug(self, message: str) -> None:
        """Log debug message (log file only)."""
        logger.debug(f"[{self.name}] {message}")


# =============================================================================
# Exceptions
# =============================================================================


class PipelineError(Exception):
    """Base exception for pipeline errors."""

    pass


class MissingCredentialError(PipelineError):
    """A required provider key was not configured."""

    def __init__(self, credential: str, provider: str | None = None):
        self.credential = credential
        self.provider = provider
        label = f"{provider} API key" if provider else credential
        super().__init__(f"Missing {label}")


class ProviderCallError(PipelineError):
    """An external provider call failed (network, HTTP status, bad payload)."""

    def __init__(self, message: str, status_code: int | None = None, body: str | None = None):
        self.status_code = status_code
        self.body = body
        super().__init__(message)


class SynthesisError(ProviderCallError):
    """Voice synthesis failed."""

    pass


class NoFootageFoundError(PipelineError):
    """No stock footage matched the keywords or the fallback query."""

    pass


class MediaToolsError(PipelineError):
    """ffmpeg / ffprobe could not be located or started."""

    pass


class ProbeError(PipelineError):
    """The duration of a media file could not be determined."""

    pass


class CompositionError(PipelineError):
    """ffmpeg failed to compose a segment."""

    pass


class ConcatenationError(PipelineError):
    """ffmpeg failed to join the segments."""

    pass


class ProjectNotFoundError(PipelineError):
    """The requested project does not exist."""

    def __init__(self, project_id: str):
        self.project_id = project_id
        super().__init__(f"Project not found: {project_id}")
