"""Custom exceptions for ghostmocks package."""

from __future__ import annotations

from pathlib import Path


class GhostmocksError(Exception):
    """Base exception class for all ghostmocks errors."""


class HARNotFoundError(GhostmocksError, FileNotFoundError):
    """Raised when the HAR file to import does not exist."""


class HARParseError(GhostmocksError):
    """Raised when HAR file cannot be parsed."""


class RedactionError(GhostmocksError):
    """Raised when a response payload cannot be redacted.

    Only happens for values that are not JSON types, which means the
    payload did not come from a JSON parser.
    """


class FixtureWriteError(GhostmocksError):
    """Raised when a generated file cannot be written to disk.

    Attributes:
        path: File that failed to write.
        cause: Underlying OS error.
    """

    def __init__(self, path: Path, cause: OSError) -> None:
        self.path = path
        self.cause = cause
        super().__init__(f"Failed to write {path}: {cause}")
