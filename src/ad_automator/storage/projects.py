"""Project store backed by a JSON file (data/projects.json)."""

from __future__ import annotations

import secrets
from datetime import datetime
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from ..constants import PROJECTS_FILE_NAME
from ..video.pipeline.base import Project
from .base import StorageError, read_json, write_json


class ProjectStore:
    """CRUD over projects. Records use the camelCase wire names."""

    def __init__(self, data_dir: Path):
        self.path = Path(data_dir) / PROJECTS_FILE_NAME

    def _load(self) -> list[Project]:
        raw = read_json(self.path, [])
        if not isinstance(raw, list):
            raise StorageError(f"Expected a list of projects in {self.path}")
        try:
            return [Project.model_validate(item) for item in raw]
        except ValidationError as e:
            raise StorageError(f"Invalid project record in {self.path}: {e}") from e

    def _save(self, projects: list[Project]) -> None:
        write_json(self.path, [p.model_dump(mode="json", by_alias=True) for p in projects])

    def list(self) -> list[Project]:
        """All projects, newest first."""
        return sorted(self._load(), key=lambda p: p.created_at, reverse=True)

    def get(self, project_id: str) -> Optional[Project]:
        for project in self._load():
            if project.id == project_id:
                return project
        return None

    def save(self, project: Project) -> Project:
        """Insert or update by id. An update keeps the original creation time."""
        projects = self._load()
        for i, existing in enumerate(projects):
            if existing.id == project.id:
                project = project.model_copy(update={"created_at": existing.created_at})
                projects[i] = project
                break
        else:
            projects.append(project)
        self._save(projects)
        return project

    def create(self, name: str, master_prompt: str, project_id: Optional[str] = None) -> Project:
        """Create a project with a random short id (unless one is given)."""
        project = Project(
            id=project_id or secrets.token_hex(4),
            name=name,
            master_prompt=master_prompt,
            created_at=datetime.now(),
        )
        return self.save(project)

    def update(
        self,
        project_id: str,
        name: Optional[str] = None,
        master_prompt: Optional[str] = None,
    ) -> Optional[Project]:
        """Change name and/or master prompt. Returns None if the project is unknown."""
        project = self.get(project_id)
        if project is None:
            return None
        changes = {}
        if name is not None:
            changes["name"] = name
        if master_prompt is not None:
            changes["master_prompt"] = master_prompt
        return self.save(project.model_copy(update=changes))

    def delete(self, project_id: str) -> None:
        """Remove a project. Unknown ids are ignored."""
        projects = self._load()
        remaining = [p for p in projects if p.id != project_id]
        if len(remaining) != len(projects):
            self._save(remaining)
