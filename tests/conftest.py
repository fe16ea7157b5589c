# tests/conftest.py
import logging
from unittest.mock import MagicMock

import pytest

from installer.config_models import AppSettings


@pytest.fixture(autouse=True)
def isolate_environment(monkeypatch):
    """Keep INIT_* variables from the developer's shell out of the tests."""
    import os

    for key in list(os.environ):
        if key.startswith("INIT_"):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture
def app_settings(tmp_path):
    """AppSettings pointing the binary directory at a temporary folder."""
    bin_dir = tmp_path / "bin"
    bin_dir.mkdir()
    return AppSettings(
        bin_dir=bin_dir,
        symbols={
            "success": "✅",
            "error": "❌",
            "warning": "!",
            "info": "ℹ️",
            "gear": "⚙️",
            "package": "📦",
            "lock": "🔒",
        },
    )


@pytest.fixture
def mock_logger():
    """Mock logger instance."""
    return MagicMock(spec=logging.Logger)


@pytest.fixture
def make_completed():
    """Factory for stand-ins of subprocess.CompletedProcess."""

    def _make(returncode=0, stdout="", stderr=""):
        return MagicMock(returncode=returncode, stdout=stdout, stderr=stderr)

    return _make
