"""HAR (HTTP Archive) import, redaction and artifact generation.

Example usage:
    from pathlib import Path

    from ghostmocks.har import (
        extract_api_responses,
        parse_har_file,
        redact_secrets,
        write_fixture,
    )

    result = parse_har_file("session.har")
    for response in extract_api_responses(result.entries):
        write_fixture(redact_secrets(response.data), Path("mocks") / f"{response.endpoint}.json")
"""

from ghostmocks.har.extractor import (
    DEFAULT_ENDPOINT,
    ExtractedResponse,
    endpoint_from_url,
    extract_api_responses,
    last_path_segment,
    sanitize_endpoint_name,
)
from ghostmocks.har.generator import generate_test_spec, render_test_spec
from ghostmocks.har.parser import (
    HAREntry,
    HARParseResult,
    HARRequest,
    HARResponse,
    ParseError,
    load_har,
    parse_har_data,
    parse_har_file,
)
from ghostmocks.har.redactor import REDACTED, redact_secrets
from ghostmocks.har.writer import load_fixture, write_fixture, write_text_file

__all__ = [
    # Loader
    "HAREntry",
    "HARParseResult",
    "HARRequest",
    "HARResponse",
    "ParseError",
    "load_har",
    "parse_har_data",
    "parse_har_file",
    # Extractor
    "DEFAULT_ENDPOINT",
    "ExtractedResponse",
    "endpoint_from_url",
    "extract_api_responses",
    "last_path_segment",
    "sanitize_endpoint_name",
    # Redactor
    "REDACTED",
    "redact_secrets",
    # Writer
    "load_fixture",
    "write_fixture",
    "write_text_file",
    # Generator
    "generate_test_spec",
    "render_test_spec",
]
