"""Fixture file persistence."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from ghostmocks.exceptions import FixtureWriteError
from ghostmocks.logging import get_logger

LOG = get_logger(__name__)


def write_text_file(path: Path, content: str) -> Path:
    """Write UTF-8 text, creating parent directories and overwriting.

    Args:
        path: Destination file.
        content: Text to write.

    Returns:
        The path written.

    Raises:
        FixtureWriteError: On permission or disk failures.
    """
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    except OSError as exc:
        LOG.error("file_write_failed", path=str(path), error=str(exc))
        raise FixtureWriteError(path, exc) from exc
    return path


def write_fixture(data: Any, path: Path) -> Path:
    """Write a redacted payload as 2-space indented JSON.

    Args:
        data: JSON value to persist.
        path: Destination fixture path.

    Returns:
        The path written.

    Raises:
        FixtureWriteError: If the value cannot be serialized as strict JSON
            (NaN, Infinity, excessive nesting) or the file cannot be written.
    """
    try:
        content = json.dumps(data, indent=2, ensure_ascii=False, allow_nan=False) + "\n"
    except (ValueError, RecursionError) as exc:
        LOG.error("fixture_serialize_failed", path=str(path), error=str(exc))
        raise FixtureWriteError(path, exc) from exc
    write_text_file(path, content)
    LOG.info("fixture_written", path=str(path), size=len(content))
    return path


def load_fixture(path: Path) -> Any:
    """Read a fixture written by write_fixture."""
    with open(path, encoding="utf-8") as f:
        return json.load(f)
