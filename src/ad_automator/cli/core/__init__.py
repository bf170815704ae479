"""Shared CLI utilities."""

from .console import console, print_error, print_success, print_warning

__all__ = ["console", "print_error", "print_success", "print_warning"]
