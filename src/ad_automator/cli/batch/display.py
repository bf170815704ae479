"""Display functions for the generate command - pure functions for Rich output."""

from __future__ import annotations

from collections import Counter
from typing import Optional

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from ...video.pipeline.events import DoneEvent, ErrorEvent, LogEvent, ProgressEvent, ResultEvent
from .params import GenerationParams

_STATUS_STYLES = {
    "success": "green",
    "skipped": "yellow",
    "error": "red",
}


def show_generation_config(console: Console, params: GenerationParams, project_name: Optional[str] = None) -> None:
    """Display batch configuration panel."""
    mode = "[magenta]Test (single day)[/magenta]" if params.is_test else "Full month"
    console.print(Panel(
        f"Generating ads for [cyan]{project_name or params.project_id}[/cyan]\n"
        f"Month: [yellow]{params.year:04d}-{params.month:02d}[/yellow]\n"
        f"Mode: {mode}",
        title="Ad Generation",
    ))


def show_event(console: Console, event: ProgressEvent) -> None:
    """Render one progress event."""
    if isinstance(event, LogEvent):
        console.print(f"[dim]{event.timestamp}[/dim] {event.message}", highlight=False)
    elif isinstance(event, ResultEvent):
        style = _STATUS_STYLES.get(event.status, "white")
        detail = event.file if event.status == "success" else (event.error or "")
        console.print(f"[bold {style}]{event.date} {event.status.upper()}[/bold {style}] {detail}")
    elif isinstance(event, DoneEvent):
        console.print("[bold green]Batch complete.[/bold green]")
    elif isinstance(event, ErrorEvent):
        console.print(f"[bold red]Batch failed: {event.message}[/bold red]")


def show_batch_summary(console: Console, events: list[ProgressEvent]) -> None:
    """Display per-day results and totals."""
    results = [e for e in events if isinstance(e, ResultEvent)]
    if not results:
        return

    table = Table(title="Results")
    table.add_column("Date", style="cyan")
    table.add_column("Status")
    table.add_column("File / Message")

    for result in results:
        style = _STATUS_STYLES.get(result.status, "white")
        detail = result.file if result.status == "success" else (result.error or "")
        table.add_row(result.date, f"[{style}]{result.status}[/{style}]", detail or "")

    console.print(table)

    counts = Counter(r.status for r in results)
    console.print(
        f"[green]{counts['success']} generated[/green], "
        f"[yellow]{counts['skipped']} skipped[/yellow], "
        f"[red]{counts['error']} failed[/red]"
    )
