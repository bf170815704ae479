"""Tests for the settings commands."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
from typer.testing import CliRunner

from ad_automator.cli.app import app
from ad_automator.storage import SettingsStore
from ad_automator.storage.settings import ENV_FALLBACKS, USE_GPU_ENV

runner = CliRunner()


@pytest.fixture
def data_dir(tmp_path: Path, monkeypatch) -> Path:
    for env_name in [*ENV_FALLBACKS.values(), USE_GPU_ENV]:
        monkeypatch.delenv(env_name, raising=False)
    with patch("ad_automator.cli.settings.commands.load_app_settings") as load:
        load.return_value = MagicMock(data_dir=tmp_path / "data")
        yield tmp_path / "data"


def test_set_and_show(data_dir):
    result = runner.invoke(app, ["settings", "set", "--openai-key", "sk-secret", "--gpu"])

    assert result.exit_code == 0
    settings = SettingsStore(data_dir).load()
    assert settings.openai_key == "sk-secret"
    assert settings.use_gpu is True

    shown = runner.invoke(app, ["settings", "show"])
    assert shown.exit_code == 0
    assert "sk-secret" not in shown.stdout
    assert "configured" in shown.stdout
    assert "missing" in shown.stdout


def test_set_keeps_other_keys(data_dir):
    runner.invoke(app, ["settings", "set", "--pexels-key", "px-1"])
    runner.invoke(app, ["settings", "set", "--elevenlabs-key", "xi-1"])

    settings = SettingsStore(data_dir).load()
    assert settings.pexels_key == "px-1"
    assert settings.elevenlabs_key == "xi-1"
