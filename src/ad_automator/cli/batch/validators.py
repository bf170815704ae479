"""Validators for the generate command."""

from __future__ import annotations

from ...utils.result import Failure, Result, Success
from .params import GenerationParams


def validate_generation_params(params: GenerationParams) -> Result[GenerationParams]:
    """Validate generation parameters.

    Returns Result with params if valid, or Failure with error.
    """
    if not params.project_id:
        return Failure("Project id is required")

    if not 1 <= params.month <= 12:
        return Failure(f"Invalid month: {params.month}", {"expected": "1-12"})

    if not 1970 <= params.year <= 9999:
        return Failure(f"Invalid year: {params.year}", {"expected": "1970-9999"})

    return Success(params)
