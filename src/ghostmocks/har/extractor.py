"""JSON API response extraction from parsed HAR entries."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from typing import Any
from urllib.parse import unquote, urlsplit

from ghostmocks.har.parser import HAREntry
from ghostmocks.logging import get_logger

LOG = get_logger(__name__)

DEFAULT_ENDPOINT = "data"

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]")


@dataclass
class ExtractedResponse:
    """A successful JSON response and the endpoint it belongs to.

    Attributes:
        endpoint: File-name-safe endpoint name used for the generated files.
        url: Request URL as captured.
        method: Request method.
        status: Response status.
        data: Parsed response body.
        segment: Last URL path segment as sent by the browser, used for
            route matching in generated tests.
    """

    endpoint: str
    url: str
    method: str
    status: int
    data: Any
    segment: str = DEFAULT_ENDPOINT

    @property
    def path(self) -> str:
        """URL path, for display."""
        return urlsplit(self.url).path or "/"


def is_success_status(status: int) -> bool:
    """Return True for 2xx statuses."""
    return 200 <= status < 300


def is_json_mime(mime_type: str) -> bool:
    """Return True if the MIME type mentions json (e.g. application/vnd.api+json)."""
    return "json" in mime_type.lower()


def _reject_constant(name: str) -> Any:
    raise ValueError(f"{name} is not valid JSON")


def parse_json_body(text: str) -> Any:
    """Parse a response body with browser JSON.parse semantics.

    NaN and Infinity are refused, since a fixture holding them could not be
    read back by the generated test.

    Raises:
        ValueError: If the body is not strict JSON.
    """
    return json.loads(text, parse_constant=_reject_constant)


def sanitize_endpoint_name(segment: str) -> str:
    """Make a URL path segment safe to use as a file name.

    The segment is percent-decoded, characters outside ``[A-Za-z0-9._-]``
    become underscores and leading dots are dropped, so the result can never
    contain a path separator or be ``.``/``..``.

    Args:
        segment: Raw path segment.

    Returns:
        Safe file name stem, or DEFAULT_ENDPOINT if nothing usable remains.
    """
    result = _UNSAFE_CHARS.sub("_", unquote(segment))
    result = result.lstrip(".")
    return result or DEFAULT_ENDPOINT


def last_path_segment(url: str) -> str:
    """Return the last non-empty path segment of a URL, undecoded.

    Raises:
        ValueError: If the URL cannot be split (e.g. a broken IPv6 host).
    """
    segments = [s for s in urlsplit(url).path.split("/") if s]
    return segments[-1] if segments else DEFAULT_ENDPOINT


def endpoint_from_url(url: str) -> str:
    """Derive an endpoint name from the last non-empty path segment.

    Examples:
        >>> endpoint_from_url("https://api.example.com/v2/users")
        'users'
        >>> endpoint_from_url("https://api.example.com/")
        'data'

    Raises:
        ValueError: If the URL cannot be split.
    """
    return sanitize_endpoint_name(last_path_segment(url))


def _skip(entry: HAREntry, reason: str) -> None:
    LOG.debug("entry_skipped", entry_index=entry.index, url=entry.request.url, reason=reason)


def extract_api_responses(entries: list[HAREntry]) -> list[ExtractedResponse]:
    """Extract successful JSON API responses from HAR entries.

    Entries are kept in their original order. Non-2xx statuses, non-JSON MIME
    types, empty bodies and bodies that fail to parse (including bodies
    nested too deeply to decode) are skipped without aborting extraction.

    Args:
        entries: Parsed HAR entries.

    Returns:
        One ExtractedResponse per usable entry.
    """
    responses: list[ExtractedResponse] = []

    for entry in entries:
        response = entry.response
        if not is_success_status(response.status):
            _skip(entry, f"status {response.status}")
            continue
        if not is_json_mime(response.mime_type):
            _skip(entry, f"mime type {response.mime_type!r}")
            continue
        if not response.text:
            _skip(entry, "empty body")
            continue

        try:
            data = parse_json_body(response.text)
        except ValueError:
            _skip(entry, "invalid json body")
            continue
        except RecursionError:
            _skip(entry, "json body nested too deeply")
            continue

        try:
            segment = last_path_segment(entry.request.url)
        except ValueError:
            _skip(entry, "invalid url")
            continue

        responses.append(
            ExtractedResponse(
                endpoint=sanitize_endpoint_name(segment),
                url=entry.request.url,
                method=entry.request.method,
                status=response.status,
                data=data,
                segment=segment,
            )
        )

    LOG.info("api_responses_extracted", entries=len(entries), responses=len(responses))
    return responses
