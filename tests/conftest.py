"""Pytest configuration for ghostmocks tests."""

import os
import sys
from pathlib import Path

import pytest
import structlog
from structlog._config import BoundLoggerLazyProxy

# Add src directory to sys.path for test imports
src_dir = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_dir))


@pytest.fixture(autouse=True)
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Isolate each test with its own working directory.

    This fixture:
    - Runs each test from a fresh temporary directory, so default output
      paths and .env lookups never touch the repository
    - Clears GHOSTMOCKS_* environment variables
    - Resets the global settings instance before each test
    """
    workdir = tmp_path / "work"
    workdir.mkdir(parents=True, exist_ok=True)
    monkeypatch.chdir(workdir)

    for var in list(os.environ):
        if var.startswith("GHOSTMOCKS_"):
            monkeypatch.delenv(var)

    from ghostmocks.config import reset_settings

    reset_settings()

    return workdir


@pytest.fixture(autouse=True)
def _reset_structlog():
    """Reset structlog after each test to prevent closed file handle errors.

    CliRunner captures stderr with a temporary file. When configure_logging()
    runs inside CliRunner, structlog binds loggers to that temp file. After
    the test, CliRunner closes the file. We reset structlog to prevent stale
    references.
    """
    yield
    structlog.reset_defaults()
    for module in list(sys.modules.values()):
        for attr in getattr(module, "__dict__", {}).values():
            if isinstance(attr, BoundLoggerLazyProxy):
                attr.__dict__.pop("bind", None)
