"""Command line interface.

This package provides a clean separation of concerns:
- core/: Shared console helpers
- batch/: Month / test-ad generation
- projects/: Project management
- settings/: Provider keys

Usage:
    ad-automator --help
    ad-automator generate <project-id> --year 2026 --month 11
    python -m ad_automator.cli projects list
"""

from .app import app, main

__all__ = ["app", "main"]
