"""Settings CLI commands - provider keys and GPU encoding."""

from __future__ import annotations

from typing import Optional

import typer
from rich.table import Table

from ...providers.config import load_app_settings
from ...storage import SettingsStore, StorageError
from ..core.console import console, print_error, print_success

settings_app = typer.Typer(help="Manage provider API keys", no_args_is_help=True)


def _store() -> SettingsStore:
    return SettingsStore(load_app_settings().data_dir)


@settings_app.command("show")
def show_settings() -> None:
    """Show which keys are configured (values are never printed)."""
    try:
        status = _store().status()
    except StorageError as e:
        print_error(str(e))
        raise typer.Exit(1)

    def mark(configured: bool) -> str:
        return "[green]configured[/green]" if configured else "[red]missing[/red]"

    table = Table(title="Settings")
    table.add_column("Setting", style="cyan")
    table.add_column("Status")
    table.add_row("OpenAI (scripts, required)", mark(status.has_openai))
    table.add_row("ElevenLabs (voice, required)", mark(status.has_elevenlabs))
    table.add_row("Pexels (footage)", mark(status.has_pexels))
    table.add_row("Gemini (safety audit, optional)", mark(status.has_gemini))
    table.add_row("GPU encoding", "[green]on[/green]" if status.use_gpu else "[dim]off[/dim]")
    console.print(table)


@settings_app.command("set")
def set_settings(
    openai_key: Optional[str] = typer.Option(None, "--openai-key", help="OpenAI API key"),
    gemini_key: Optional[str] = typer.Option(None, "--gemini-key", help="Gemini API key"),
    elevenlabs_key: Optional[str] = typer.Option(None, "--elevenlabs-key", help="ElevenLabs API key"),
    pexels_key: Optional[str] = typer.Option(None, "--pexels-key", help="Pexels API key"),
    gpu: Optional[bool] = typer.Option(None, "--gpu/--no-gpu", help="Use hardware H.264 encoding"),
) -> None:
    """Store keys. Only the options given are changed."""
    try:
        _store().update(
            openai_key=openai_key,
            gemini_key=gemini_key,
            elevenlabs_key=elevenlabs_key,
            pexels_key=pexels_key,
            use_gpu=gpu,
        )
    except StorageError as e:
        print_error(str(e))
        raise typer.Exit(1)
    print_success("Settings saved.")
