"""Project CLI commands."""

from __future__ import annotations

from typing import Optional

import typer

from ...providers.config import load_app_settings
from ...storage import ProjectStore, StorageError
from ..core.console import console, print_error, print_success
from .display import show_project, show_projects_table

projects_app = typer.Typer(help="Manage ad projects", no_args_is_help=True)


def _store() -> ProjectStore:
    return ProjectStore(load_app_settings().data_dir)


@projects_app.command("list")
def list_projects() -> None:
    """List all projects, newest first."""
    try:
        projects = _store().list()
    except StorageError as e:
        print_error(str(e))
        raise typer.Exit(1)
    show_projects_table(console, projects)


@projects_app.command("add")
def add_project(
    name: str = typer.Argument(..., help="Project name (also the output folder under ads/)"),
    prompt: str = typer.Option(..., "--prompt", "-p", help="Master prompt describing the campaign"),
) -> None:
    """Create a project."""
    name = name.strip()
    if not name or not prompt.strip():
        print_error("Name and master prompt must not be empty")
        raise typer.Exit(1)

    try:
        project = _store().create(name, prompt.strip())
    except StorageError as e:
        print_error(str(e))
        raise typer.Exit(1)
    show_project(console, project, title="Project Created")


@projects_app.command("update")
def update_project(
    project_id: str = typer.Argument(..., help="Project id"),
    name: Optional[str] = typer.Option(None, "--name", "-n", help="New name"),
    prompt: Optional[str] = typer.Option(None, "--prompt", "-p", help="New master prompt"),
) -> None:
    """Rename a project or change its master prompt."""
    if name is None and prompt is None:
        print_error("Nothing to update, pass --name and/or --prompt")
        raise typer.Exit(1)

    try:
        project = _store().update(project_id, name=name, master_prompt=prompt)
    except StorageError as e:
        print_error(str(e))
        raise typer.Exit(1)

    if project is None:
        print_error(f"Project not found: {project_id}")
        raise typer.Exit(1)
    show_project(console, project, title="Project Updated")


@projects_app.command("remove")
def remove_project(
    project_id: str = typer.Argument(..., help="Project id"),
) -> None:
    """Delete a project (generated ads are kept)."""
    try:
        _store().delete(project_id)
    except StorageError as e:
        print_error(str(e))
        raise typer.Exit(1)
    print_success(f"Removed project {project_id}")
