"""Tests for HAR file loader."""

from __future__ import annotations

import base64
import json
from pathlib import Path

import pytest

from ghostmocks.exceptions import GhostmocksError, HARNotFoundError, HARParseError
from ghostmocks.har.parser import (
    HAREntry,
    HARParseResult,
    _coerce_status,
    _parse_response,
    load_har,
    parse_har_data,
    parse_har_file,
)


@pytest.fixture
def sample_har_path() -> Path:
    """Path to sample HAR fixture."""
    return Path(__file__).parent.parent / "fixtures" / "sample.har"


def _har(*entries: object) -> dict:
    return {"log": {"version": "1.2", "entries": list(entries)}}


class TestLoadHar:
    """Tests for reading HAR documents from disk."""

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(HARNotFoundError, match="HAR file not found"):
            load_har(tmp_path / "nope.har")

    def test_missing_file_is_file_not_found(self, tmp_path: Path) -> None:
        """HARNotFoundError can be caught as FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            load_har(tmp_path / "nope.har")

    def test_directory_is_not_found(self, tmp_path: Path) -> None:
        with pytest.raises(HARNotFoundError):
            load_har(tmp_path)

    def test_invalid_json(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.har"
        path.write_text("{ not json", encoding="utf-8")
        with pytest.raises(HARParseError, match="Invalid JSON"):
            load_har(path)

    def test_invalid_utf8(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.har"
        path.write_bytes(b'{"log": "\xff\xfe"}')
        with pytest.raises(HARParseError, match="UTF-8"):
            load_har(path)

    def test_errors_share_base_class(self) -> None:
        assert issubclass(HARNotFoundError, GhostmocksError)
        assert issubclass(HARParseError, GhostmocksError)

    def test_returns_document(self, tmp_path: Path) -> None:
        path = tmp_path / "ok.har"
        path.write_text(json.dumps(_har()), encoding="utf-8")
        assert load_har(path) == {"log": {"version": "1.2", "entries": []}}


class TestParseHarFile:
    """Tests for parsing HAR files from disk."""

    def test_parse_sample_har(self, sample_har_path: Path) -> None:
        result = parse_har_file(sample_har_path)

        assert isinstance(result, HARParseResult)
        assert len(result.entries) == 7
        assert all(isinstance(e, HAREntry) for e in result.entries)
        assert not result.has_errors

    def test_parse_fields(self, sample_har_path: Path) -> None:
        result = parse_har_file(sample_har_path)

        first = result.entries[0]
        assert first.request.method == "GET"
        assert first.request.url == "https://api.example.com/v2/users"
        assert first.response.status == 200
        assert first.response.mime_type == "application/json"
        assert first.response.text is not None
        assert first.index == 0

    def test_entry_order_preserved(self, sample_har_path: Path) -> None:
        result = parse_har_file(sample_har_path)
        assert [e.index for e in result.entries] == list(range(7))

    def test_accepts_string_path(self, sample_har_path: Path) -> None:
        result = parse_har_file(str(sample_har_path))
        assert len(result.entries) == 7

    def test_body_file_resolved_relative_to_har(self, tmp_path: Path) -> None:
        bodies = tmp_path / "bodies"
        bodies.mkdir()
        (bodies / "users.json").write_text('[{"id": 1}]', encoding="utf-8")
        entry = {
            "request": {"method": "GET", "url": "https://x.test/users"},
            "response": {
                "status": 200,
                "content": {"mimeType": "application/json", "_bodyFile": "bodies/users.json"},
            },
        }
        path = tmp_path / "capture.har"
        path.write_text(json.dumps(_har(entry)), encoding="utf-8")

        result = parse_har_file(path)

        assert result.entries[0].response.text == '[{"id": 1}]'
        assert result.entries[0].response.body_file == "bodies/users.json"


class TestParseHarData:
    """Tests for lenient entry parsing."""

    def test_missing_log_yields_no_entries(self) -> None:
        assert parse_har_data({}).entries == []

    def test_missing_entries_yields_no_entries(self) -> None:
        assert parse_har_data({"log": {}}).entries == []

    def test_non_object_document_yields_no_entries(self) -> None:
        assert parse_har_data([1, 2, 3]).entries == []

    def test_entries_not_a_list(self) -> None:
        assert parse_har_data({"log": {"entries": "nope"}}).entries == []

    def test_non_object_entry_recorded_as_error(self) -> None:
        result = parse_har_data(_har("garbage", {"request": {"url": "https://x.test/a"}}))

        assert len(result.entries) == 1
        assert result.entries[0].index == 1
        assert result.has_errors
        assert result.errors[0].index == 0
        assert "must be an object" in result.errors[0].error

    def test_missing_fields_default(self) -> None:
        result = parse_har_data(_har({}))

        entry = result.entries[0]
        assert entry.request.method == "GET"
        assert entry.request.url == ""
        assert entry.response.status == 0
        assert entry.response.mime_type == ""
        assert entry.response.text is None

    def test_malformed_field_types_default(self) -> None:
        result = parse_har_data(
            _har({"request": "x", "response": {"status": "oops", "content": ["x"]}})
        )

        entry = result.entries[0]
        assert entry.request.url == ""
        assert entry.response.status == 0
        assert entry.response.text is None


class TestParseResponse:
    """Tests for response section parsing."""

    def test_base64_body_decoded(self) -> None:
        text = base64.b64encode(b'{"ok": true}').decode("ascii")
        response = _parse_response(
            {"status": 200, "content": {"mimeType": "application/json", "text": text, "encoding": "base64"}}
        )
        assert response.text == '{"ok": true}'

    def test_invalid_base64_body_dropped(self) -> None:
        response = _parse_response(
            {"status": 200, "content": {"text": "***", "encoding": "base64"}}
        )
        assert response.text is None

    def test_inline_text_wins_over_body_file(self, tmp_path: Path) -> None:
        (tmp_path / "body.json").write_text("[1]", encoding="utf-8")
        response = _parse_response(
            {"status": 200, "content": {"text": "[2]", "_bodyFile": "body.json"}},
            base_dir=tmp_path,
        )
        assert response.text == "[2]"

    def test_missing_body_file_leaves_text_empty(self, tmp_path: Path) -> None:
        response = _parse_response(
            {"status": 200, "content": {"_bodyFile": "missing.json"}},
            base_dir=tmp_path,
        )
        assert response.text is None
        assert response.body_file == "missing.json"


class TestCoerceStatus:
    """Tests for status coercion."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (200, 200),
            (204.0, 204),
            ("201", 201),
            (None, 0),
            ("OK", 0),
            (True, 0),
            (200.5, 0),
        ],
    )
    def test_coerce(self, value: object, expected: int) -> None:
        assert _coerce_status(value) == expected
