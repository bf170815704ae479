"""Typer app configuration and logging setup."""

from __future__ import annotations

import logging
import warnings
from pathlib import Path

import typer
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# Suppress httpx/asyncio cleanup warnings
warnings.filterwarnings("ignore", message=".*Event loop is closed.*")
warnings.filterwarnings("ignore", category=ResourceWarning)

# Create Typer app
app = typer.Typer(
    name="ad-automator",
    help="Daily vertical video-ad generator",
    add_completion=False,
)


def register_commands() -> None:
    """Register all commands from feature modules."""
    from .batch.commands import generate

    app.command(name="generate")(generate)

    from .projects.commands import projects_app

    app.add_typer(projects_app, name="projects")

    from .settings.commands import settings_app

    app.add_typer(settings_app, name="settings")


def setup_logging(log_dir: Path | None = None) -> None:
    """Configure logging for CLI.

    - Suppresses console output from libraries
    - Writes pipeline progress to logs/pipeline.log
    - Writes full AI request/response transcripts to logs/ai_calls.log
    """
    if log_dir is None:
        from ..providers.config import load_app_settings

        log_dir = load_app_settings().logs_dir
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)

    # Remove any default console handlers from root logger
    root_logger = logging.getLogger()
    root_logger.handlers = []
    root_logger.setLevel(logging.CRITICAL)  # Suppress root logger output

    # Suppress loggers that might print to console
    for logger_name in ["httpx", "httpcore", "urllib3", "asyncio", "agno"]:
        logger = logging.getLogger(logger_name)
        logger.setLevel(logging.WARNING)
        logger.propagate = False

    formatter = logging.Formatter("%(asctime)s | %(levelname)s | %(message)s")

    # Pipeline logger: everything stages report, including file-only detail
    pipeline_logger = logging.getLogger("ad_automator")
    pipeline_logger.setLevel(logging.DEBUG)
    pipeline_logger.propagate = False
    pipeline_logger.handlers = []
    pipeline_handler = logging.FileHandler(log_dir / "pipeline.log", encoding="utf-8")
    pipeline_handler.setLevel(logging.DEBUG)
    pipeline_handler.setFormatter(formatter)
    pipeline_logger.addHandler(pipeline_handler)

    # Setup ai_calls logger with FileHandler for full AI request/response logging
    ai_calls_logger = logging.getLogger("ai_calls")
    ai_calls_logger.setLevel(logging.DEBUG)
    ai_calls_logger.propagate = False
    ai_calls_logger.handlers = []  # Clear any existing handlers
    ai_file_handler = logging.FileHandler(log_dir / "ai_calls.log", encoding="utf-8")
    ai_file_handler.setLevel(logging.DEBUG)
    ai_file_handler.setFormatter(formatter)
    ai_calls_logger.addHandler(ai_file_handler)


# Register all commands
register_commands()


def main() -> None:
    """CLI entry point."""
    setup_logging()
    app()
