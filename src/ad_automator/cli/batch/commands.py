"""Generate command - thin wrapper orchestrating params, validation, display, and the pipeline."""

from __future__ import annotations

import asyncio
import sys
from typing import Optional

import typer

from ...video.pipeline.base import PipelineError
from ...video.pipeline.batch_orchestrator import BatchOrchestrator
from ...video.pipeline.events import ErrorEvent, ProgressEvent, ResultEvent
from ...storage.base import StorageError
from ...utils.result import Failure
from ..core.console import console, print_error
from .display import show_batch_summary, show_event, show_generation_config
from .params import GenerationParams
from .validators import validate_generation_params


async def _drain(orchestrator: BatchOrchestrator, params: GenerationParams) -> list[ProgressEvent]:
    events: list[ProgressEvent] = []
    async for event in orchestrator.stream(params.to_request()):
        events.append(event)
        if params.ndjson:
            sys.stdout.write(event.to_json() + "\n")
            sys.stdout.flush()
        else:
            show_event(console, event)
    return events


def generate(
    project_id: str = typer.Argument(..., help="Project id (see 'projects list')"),
    year: Optional[int] = typer.Option(None, "--year", "-y", help="Year (default: current)"),
    month: Optional[int] = typer.Option(None, "--month", "-m", help="Month 1-12 (default: current)"),
    test: bool = typer.Option(False, "--test", help="Generate a single test ad (always regenerated)"),
    ndjson: bool = typer.Option(False, "--ndjson", help="Print raw progress events as JSON lines"),
) -> None:
    """Generate one ad per day for a project's month.

    In the current month generation starts tomorrow. Days whose file
    already exists are skipped. Use --test to render one test ad.
    """
    params = GenerationParams.from_cli(
        project_id=project_id,
        year=year,
        month=month,
        test=test,
        ndjson=ndjson,
    )

    validation = validate_generation_params(params)
    if isinstance(validation, Failure):
        print_error(validation.error, validation.details)
        raise typer.Exit(1)

    try:
        orchestrator = BatchOrchestrator.from_settings()
    except PipelineError as e:
        print_error(str(e))
        raise typer.Exit(1)

    if not params.ndjson:
        try:
            project = orchestrator.project_store.get(params.project_id)
        except StorageError:
            project = None
        show_generation_config(console, params, project.name if project else None)

    events = asyncio.run(_drain(orchestrator, params))

    if not params.ndjson:
        show_batch_summary(console, events)

    failed = any(isinstance(e, ErrorEvent) for e in events) or any(
        isinstance(e, ResultEvent) and e.status == "error" for e in events
    )
    if failed:
        raise typer.Exit(1)
