"""Path-related constants for the Ad Automator.

The output tree is organised per project and month:
  ads/<project name>/<YYYY>/<MM>/<DD>.mp4
  ads/<project name>/<YYYY>/<MM>/test_ad_<DD>.mp4
  ads/<project name>/<YYYY>/<MM>/temp_<DD>_<epoch-ms>/   (while generating)

The existence of the final file is the only record that a day is done.
"""

from datetime import date
from pathlib import Path
from typing import Final

ADS_DIR_NAME: Final[str] = "ads"
"""Root directory for generated ads (relative to the working directory)."""

DATA_DIR_NAME: Final[str] = "data"
"""Directory holding projects.json and settings.json."""

LOGS_DIR_NAME: Final[str] = "logs"
"""Directory for log files."""

PROJECTS_FILE_NAME: Final[str] = "projects.json"
"""Project store file."""

SETTINGS_FILE_NAME: Final[str] = "settings.json"
"""Settings / credential store file."""

FINAL_FILE_PATTERN: Final[str] = "{day}.mp4"
"""Final artifact name for a regular day."""

TEST_FILE_PATTERN: Final[str] = "test_ad_{day}.mp4"
"""Final artifact name for a test run."""

TEMP_DIR_PATTERN: Final[str] = "temp_{day}_{stamp}"
"""Per-day temporary workspace name."""

CONCAT_MANIFEST_SUFFIX: Final[str] = "_concat.txt"
"""Suffix of the ffmpeg concat manifest written next to the output."""


def get_month_dir(project_dir: Path, day: date) -> Path:
    """Get the output directory for a day's month.

    Args:
        project_dir: Project output root (ads/<project name>).
        day: Calendar day.

    Returns:
        Path to <project_dir>/<YYYY>/<MM>.
    """
    return project_dir / f"{day.year:04d}" / f"{day.month:02d}"


def get_final_file_name(day: date, is_test: bool = False) -> str:
    """Get the final artifact file name for a day."""
    pattern = TEST_FILE_PATTERN if is_test else FINAL_FILE_PATTERN
    return pattern.format(day=f"{day.day:02d}")
