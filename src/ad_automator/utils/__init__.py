"""Shared utilities."""

from .result import Failure, Result, Success

__all__ = ["Success", "Failure", "Result"]
