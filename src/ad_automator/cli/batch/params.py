"""Immutable parameters for the generate command."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ...video.pipeline.base import BatchRequest


@dataclass(frozen=True)
class GenerationParams:
    """Immutable parameters for batch generation."""

    project_id: str
    year: int
    month: int
    is_test: bool
    ndjson: bool

    @classmethod
    def from_cli(
        cls,
        project_id: str,
        year: Optional[int] = None,
        month: Optional[int] = None,
        test: bool = False,
        ndjson: bool = False,
        today: Optional[date] = None,
    ) -> "GenerationParams":
        """Build params, defaulting year and month to the current ones."""
        today = today or date.today()
        return cls(
            project_id=project_id.strip(),
            year=year if year is not None else today.year,
            month=month if month is not None else today.month,
            is_test=test,
            ndjson=ndjson,
        )

    def to_request(self) -> BatchRequest:
        return BatchRequest(
            project_id=self.project_id,
            year=self.year,
            month=self.month,
            is_test=self.is_test,
        )
