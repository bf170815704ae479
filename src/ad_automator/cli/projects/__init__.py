"""Project management commands."""
