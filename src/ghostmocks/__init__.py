"""ghostmocks - turn recorded browser traffic into offline tests.

Reads a HAR (HTTP Archive) capture and produces, for every JSON API
endpoint found in it:
- a JSON fixture with secrets redacted
- a Playwright test spec that serves the fixture through network interception

Example:
    >>> from pathlib import Path
    >>> from ghostmocks import run_pipeline
    >>> summary = run_pipeline(
    ...     Path("session.har"), mocks_dir=Path("mocks"), tests_dir=Path("tests")
    ... )
    >>> [a.name for a in summary.artifacts]
    ['users']
"""

from ghostmocks.config import GhostmocksSettings, get_settings
from ghostmocks.exceptions import (
    FixtureWriteError,
    GhostmocksError,
    HARNotFoundError,
    HARParseError,
    RedactionError,
)
from ghostmocks.har import (
    ExtractedResponse,
    extract_api_responses,
    generate_test_spec,
    parse_har_file,
    redact_secrets,
    write_fixture,
)
from ghostmocks.pipeline import DuplicatePolicy, GenerationSummary, run_pipeline

__version__ = "0.1.0"

__all__ = [
    # Version
    "__version__",
    # Pipeline
    "DuplicatePolicy",
    "GenerationSummary",
    "run_pipeline",
    # Building blocks
    "ExtractedResponse",
    "extract_api_responses",
    "generate_test_spec",
    "parse_har_file",
    "redact_secrets",
    "write_fixture",
    # Configuration
    "GhostmocksSettings",
    "get_settings",
    # Exceptions
    "FixtureWriteError",
    "GhostmocksError",
    "HARNotFoundError",
    "HARParseError",
    "RedactionError",
]
