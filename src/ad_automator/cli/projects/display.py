"""Display functions for project commands - pure functions for Rich output."""

from __future__ import annotations

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from ...video.pipeline.base import Project


def show_projects_table(console: Console, projects: list[Project]) -> None:
    """Display table of projects (newest first)."""
    if not projects:
        console.print("[yellow]No projects found. Create one with 'projects add'.[/yellow]")
        return

    table = Table(title="Projects")
    table.add_column("ID", style="cyan")
    table.add_column("Name", style="green")
    table.add_column("Created", style="dim")
    table.add_column("Master Prompt")

    for project in projects:
        prompt = project.master_prompt
        if len(prompt) > 60:
            prompt = prompt[:57] + "..."
        table.add_row(
            project.id,
            project.name,
            project.created_at.strftime("%Y-%m-%d %H:%M"),
            prompt,
        )

    console.print(table)


def show_project(console: Console, project: Project, title: str = "Project") -> None:
    """Display a single project."""
    console.print(Panel(
        f"[bold]ID:[/] [cyan]{project.id}[/cyan]\n"
        f"[bold]Name:[/] {project.name}\n"
        f"[bold]Created:[/] {project.created_at.strftime('%Y-%m-%d %H:%M')}\n\n"
        f"{project.master_prompt}",
        title=title,
        border_style="green",
    ))
