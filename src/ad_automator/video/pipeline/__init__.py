"""Daily vertical video-ad pipeline.

Pipeline per day:
1. ContentGenerator - OpenAI writes a 3-segment script (hook, message, CTA)
2. ScriptAuditor - Gemini rewrites unsafe narration (optional)
3. VoiceGenerator - ElevenLabs narrates each segment
4. FootageResolver / FootageDownloader - Pexels portrait stock footage
5. SegmentComposer - loops footage to narration + 1s, captions, 1080x1920
6. SegmentConcatenator - stream-copies the segments into <DD>.mp4

DayOrchestrator runs one day; BatchOrchestrator runs a month and streams
progress events.

Example usage:
    from ad_automator.video.pipeline import BatchOrchestrator, BatchRequest

    orchestrator = BatchOrchestrator.from_settings()
    async for event in orchestrator.stream(BatchRequest(project_id="a1b2c3", year=2026, month=11)):
        print(event.to_json())

Or synchronously:
    events = orchestrator.run_sync(BatchRequest(project_id="a1b2c3", year=2026, month=11, is_test=True))
"""

from .base import (
    # Data models
    AdContent,
    AdSegment,
    AuditResult,
    BatchRequest,
    DayJob,
    DayResult,
    GenerationCredentials,
    Project,
    # Base class
    PipelineStep,
    # Exceptions
    CompositionError,
    ConcatenationError,
    MediaToolsError,
    MissingCredentialError,
    NoFootageFoundError,
    PipelineError,
    ProbeError,
    ProjectNotFoundError,
    ProviderCallError,
    SynthesisError,
)
from .batch_orchestrator import BatchOrchestrator, compute_batch_days
from .content_generator import ContentGenerator
from .day_orchestrator import DayOrchestrator, DayState, FAILURE_POLICY, FailurePolicy, format_date_context
from .events import (
    DoneEvent,
    ErrorEvent,
    EventChannel,
    LogEvent,
    ProgressEvent,
    ResultEvent,
    parse_event,
)
from .footage_resolver import FootageDownloader, FootageResolver
from .media_tools import DurationProbe, MediaTools
from .script_auditor import ScriptAuditor
from .segment_composer import SegmentComposer, clean_caption_text, compute_final_duration, wrap_caption_text
from .segment_concatenator import SegmentConcatenator
from .voice_generator import VoiceGenerator

__all__ = [
    # Data models
    "AdContent",
    "AdSegment",
    "AuditResult",
    "BatchRequest",
    "DayJob",
    "DayResult",
    "GenerationCredentials",
    "Project",
    "PipelineStep",
    # Exceptions
    "CompositionError",
    "ConcatenationError",
    "MediaToolsError",
    "MissingCredentialError",
    "NoFootageFoundError",
    "PipelineError",
    "ProbeError",
    "ProjectNotFoundError",
    "ProviderCallError",
    "SynthesisError",
    # Stages
    "ContentGenerator",
    "ScriptAuditor",
    "VoiceGenerator",
    "FootageResolver",
    "FootageDownloader",
    "DurationProbe",
    "MediaTools",
    "SegmentComposer",
    "SegmentConcatenator",
    "compute_final_duration",
    "clean_caption_text",
    "wrap_caption_text",
    # Orchestration
    "DayOrchestrator",
    "DayState",
    "FailurePolicy",
    "FAILURE_POLICY",
    "format_date_context",
    "BatchOrchestrator",
    "compute_batch_days",
    # Events
    "LogEvent",
    "ResultEvent",
    "DoneEvent",
    "ErrorEvent",
    "ProgressEvent",
    "EventChannel",
    "parse_event",
]
