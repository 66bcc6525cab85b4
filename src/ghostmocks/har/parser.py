"""HAR file loader.

Reads HAR (HTTP Archive) format files into structured Python objects.
Only ``log.entries`` is consumed; all other HAR metadata is ignored.

HAR format specification: http://www.softwareishard.com/blog/har-12-spec/
"""

from __future__ import annotations

import base64
import binascii
import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from ghostmocks.exceptions import HARNotFoundError, HARParseError
from ghostmocks.logging import get_logger

LOG = get_logger(__name__)


@dataclass
class HARRequest:
    """Parsed HTTP request from HAR entry."""

    method: str
    url: str


@dataclass
class HARResponse:
    """Parsed HTTP response from HAR entry."""

    status: int
    mime_type: str = ""
    text: str | None = None
    body_file: str | None = None  # relative path to body file on disk


@dataclass
class HAREntry:
    """Single request/response pair from HAR file."""

    request: HARRequest
    response: HARResponse
    index: int = 0


@dataclass
class ParseError:
    """Error encountered while parsing a single HAR entry.

    Attributes:
        index: Zero-based index of the entry in the HAR file's entries array.
        url: URL of the request that failed to parse, or "unknown" if unavailable.
        error: Human-readable error message describing the parse failure.
    """

    index: int
    url: str
    error: str


@dataclass
class HARParseResult:
    """Result of parsing a HAR document.

    Supports partial success: entries that fail to parse are recorded as
    errors while valid entries are still returned.

    Attributes:
        entries: Successfully parsed HAR entries, in original file order.
        errors: Parse errors for entries that could not be processed.
    """

    entries: list[HAREntry]
    errors: list[ParseError] = field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        """Return True if any parse errors occurred."""
        return bool(self.errors)


def _as_dict(value: Any) -> dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> str:
    return value if isinstance(value, str) else ""


def _coerce_status(value: Any) -> int:
    """Read an HTTP status, defaulting to 0 for anything malformed."""
    if isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str) and value.strip().isdigit():
        return int(value.strip())
    return 0


def _decode_text(content: dict[str, Any]) -> str | None:
    """Return the content text, decoding base64 bodies.

    Args:
        content: The ``response.content`` object of a HAR entry.

    Returns:
        Body text, or None if absent or undecodable.
    """
    text = content.get("text")
    if not isinstance(text, str):
        return None
    if content.get("encoding") != "base64":
        return text
    try:
        return base64.b64decode(text, validate=True).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError, ValueError):
        LOG.debug("base64_body_decode_failed", size=len(text))
        return None


def _parse_request(request_data: dict[str, Any]) -> HARRequest:
    """Parse request section of HAR entry.

    Args:
        request_data: Request dict from HAR entry.

    Returns:
        Parsed HARRequest object.
    """
    return HARRequest(
        method=_as_str(request_data.get("method")) or "GET",
        url=_as_str(request_data.get("url")),
    )


def _parse_response(response_data: dict[str, Any], base_dir: Path | None = None) -> HARResponse:
    """Parse response section of HAR entry.

    Args:
        response_data: Response dict from HAR entry.
        base_dir: Directory containing the HAR file, used to resolve _bodyFile
            references to disk-streamed response bodies.

    Returns:
        Parsed HARResponse object.
    """
    content = _as_dict(response_data.get("content"))
    mime_type = _as_str(content.get("mimeType"))
    text = _decode_text(content)
    body_file = _as_str(content.get("_bodyFile")) or None

    # If body is stored on disk and not already inline, load it
    if body_file and base_dir and text is None:
        body_path = base_dir / body_file
        if body_path.is_file():
            text = body_path.read_text(encoding="utf-8", errors="replace")

    return HARResponse(
        status=_coerce_status(response_data.get("status")),
        mime_type=mime_type,
        text=text,
        body_file=body_file,
    )


def _get_entries(data: Any) -> list[Any]:
    """Return ``log.entries`` or an empty list when the document lacks them."""
    entries = _as_dict(_as_dict(data).get("log")).get("entries")
    if not isinstance(entries, list):
        LOG.debug("har_entries_missing")
        return []
    return entries


def parse_har_data(data: Any, base_dir: Path | None = None) -> HARParseResult:
    """Parse entries from a loaded HAR document.

    Args:
        data: Parsed JSON data from a HAR file.
        base_dir: Directory containing the HAR file, passed through to
            _parse_response for _bodyFile resolution.

    Returns:
        HARParseResult containing successfully parsed entries and any errors.
    """
    entries: list[HAREntry] = []
    errors: list[ParseError] = []

    for idx, entry_data in enumerate(_get_entries(data)):
        if not isinstance(entry_data, dict):
            error = f"entry must be an object, got {type(entry_data).__name__}"
            errors.append(ParseError(index=idx, url="unknown", error=error))
            LOG.warning("entry_parse_failed", error=error, entry_index=idx)
            continue

        try:
            request = _parse_request(_as_dict(entry_data.get("request")))
            response = _parse_response(_as_dict(entry_data.get("response")), base_dir=base_dir)
        except OSError as exc:
            # _bodyFile could not be read
            url = _as_str(_as_dict(entry_data.get("request")).get("url")) or "unknown"
            errors.append(ParseError(index=idx, url=url, error=str(exc)))
            LOG.warning("entry_parse_failed", error=str(exc), entry_index=idx, url=url)
            continue

        entries.append(HAREntry(request=request, response=response, index=idx))

    return HARParseResult(entries=entries, errors=errors)


def load_har(filepath: Path | str) -> Any:
    """Read a HAR file and return the decoded JSON document.

    Args:
        filepath: Path to HAR file.

    Returns:
        The parsed JSON document.

    Raises:
        HARNotFoundError: If the file does not exist.
        HARParseError: If the file is not valid UTF-8 JSON.
    """
    filepath = Path(filepath)

    if not filepath.is_file():
        raise HARNotFoundError(f"HAR file not found: {filepath}")

    try:
        with open(filepath, encoding="utf-8") as f:
            return json.load(f)
    except json.JSONDecodeError as exc:
        raise HARParseError(f"Invalid JSON in HAR file: {exc}") from exc
    except UnicodeDecodeError as exc:
        raise HARParseError(f"HAR file is not valid UTF-8: {exc}") from exc


def parse_har_file(filepath: Path | str) -> HARParseResult:
    """Load a HAR file and return structured result with entries and errors.

    Args:
        filepath: Path to HAR file.

    Returns:
        HARParseResult containing parsed entries and any errors.

    Raises:
        HARNotFoundError: If file does not exist.
        HARParseError: If the file is not valid JSON.
    """
    filepath = Path(filepath)
    data = load_har(filepath)
    result = parse_har_data(data, base_dir=filepath.parent)

    LOG.info(
        "har_file_loaded",
        filepath=str(filepath),
        entries=len(result.entries),
        errors=len(result.errors),
    )
    return result
