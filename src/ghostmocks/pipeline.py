"""HAR to fixture pipeline.

Drives one batch run: load the HAR file, extract JSON API responses, then
for each response redact secrets, write the fixture and generate the
Playwright test spec. Responses are processed sequentially in capture order.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from rich.console import Console
from rich.markup import escape

from ghostmocks import console as ui
from ghostmocks.exceptions import FixtureWriteError, RedactionError
from ghostmocks.har.extractor import ExtractedResponse, extract_api_responses
from ghostmocks.har.generator import (
    DEFAULT_APP_URL,
    DEFAULT_LIST_SELECTOR,
    DEFAULT_WAIT_TIMEOUT_MS,
    TEST_SPEC_SUFFIX,
    generate_test_spec,
)
from ghostmocks.har.parser import ParseError, parse_har_file
from ghostmocks.har.redactor import redact_secrets
from ghostmocks.har.writer import write_fixture
from ghostmocks.logging import get_logger

LOG = get_logger(__name__)


class DuplicatePolicy(str, Enum):
    """What to do when several responses share an endpoint name."""

    OVERWRITE = "overwrite"  # last write wins
    SUFFIX = "suffix"  # users, users_1, users_2, ...
    REJECT = "reject"  # keep the first, skip the rest


@dataclass
class GeneratedArtifact:
    """Files produced for one extracted response."""

    endpoint: str
    name: str
    method: str
    url: str
    fixture_path: Path
    test_path: Path


@dataclass
class EndpointFailure:
    """A response whose artifacts could not be produced."""

    endpoint: str
    url: str
    error: str


@dataclass
class GenerationSummary:
    """Outcome of a pipeline run."""

    responses: list[ExtractedResponse] = field(default_factory=list)
    artifacts: list[GeneratedArtifact] = field(default_factory=list)
    failures: list[EndpointFailure] = field(default_factory=list)
    rejected: list[ExtractedResponse] = field(default_factory=list)
    parse_errors: list[ParseError] = field(default_factory=list)
    dry_run: bool = False

    @property
    def has_failures(self) -> bool:
        """Return True if any endpoint failed."""
        return bool(self.failures)

    @property
    def fixture_paths(self) -> list[Path]:
        """Distinct fixture paths, in first-written order."""
        return list(dict.fromkeys(a.fixture_path for a in self.artifacts))


def _unique_name(base_name: str, seen: set[str]) -> str:
    """Generate unique name by appending counter if needed.

    Args:
        base_name: Base name to make unique.
        seen: Set of already-used names. Will be updated with the result.

    Returns:
        Unique name not in seen set.
    """
    name = base_name
    counter = 1
    while name in seen:
        name = f"{base_name}_{counter}"
        counter += 1
    seen.add(name)
    return name


def resolve_output_name(endpoint: str, seen: set[str], policy: DuplicatePolicy) -> str | None:
    """Pick the file name stem for an endpoint under the duplicate policy.

    Args:
        endpoint: Endpoint name of the response.
        seen: Names already used in this run. Updated in place.
        policy: Duplicate handling policy.

    Returns:
        The name to write under, or None if the response should be skipped.
    """
    if policy is DuplicatePolicy.SUFFIX:
        return _unique_name(endpoint, seen)
    if policy is DuplicatePolicy.REJECT and endpoint in seen:
        return None
    seen.add(endpoint)
    return endpoint


def fixture_relative_path(fixture_path: Path, tests_dir: Path) -> str:
    """Path from the tests directory to a fixture, with forward slashes."""
    return Path(os.path.relpath(fixture_path, start=tests_dir)).as_posix()


def run_pipeline(
    har_file: Path,
    *,
    mocks_dir: Path,
    tests_dir: Path,
    duplicate_policy: DuplicatePolicy = DuplicatePolicy.OVERWRITE,
    app_url: str = DEFAULT_APP_URL,
    list_selector: str = DEFAULT_LIST_SELECTOR,
    wait_timeout_ms: int = DEFAULT_WAIT_TIMEOUT_MS,
    dry_run: bool = False,
    console: Console | None = None,
) -> GenerationSummary:
    """Turn a HAR file into fixtures and Playwright tests.

    A failure while redacting or writing one endpoint is recorded in the
    summary and the remaining endpoints are still processed.

    Args:
        har_file: HAR file to read.
        mocks_dir: Directory receiving ``<name>.json`` fixtures.
        tests_dir: Directory receiving ``<name>.spec.ts`` tests.
        duplicate_policy: Handling of responses sharing an endpoint name.
        app_url: Page the generated tests navigate to.
        list_selector: Selector for one rendered list item.
        wait_timeout_ms: Timeout for the list to appear.
        dry_run: Report what would be written without touching the filesystem.
        console: Console for progress output (default: stderr).

    Returns:
        Summary of the run.

    Raises:
        HARNotFoundError: If the HAR file does not exist.
        HARParseError: If the HAR file is not valid JSON.
    """
    ui.step(f"Reading HAR file: {escape(str(har_file))}", console=console)
    result = parse_har_file(har_file)
    summary = GenerationSummary(parse_errors=result.errors, dry_run=dry_run)

    for parse_error in result.errors:
        ui.warn(f"Entry {parse_error.index} skipped: {escape(parse_error.error)}", console=console)

    ui.step("Processing HAR entries...", console=console)
    summary.responses = extract_api_responses(result.entries)

    if not summary.responses:
        ui.warn("No API responses found in HAR file", console=console)
        ui.info("Make sure the HAR contains JSON API responses", console=console)
        LOG.warning("no_api_responses", har_file=str(har_file))
        return summary

    for response in summary.responses:
        ui.success(
            f"Found API response: {response.method} {escape(response.path)}", console=console
        )
    ui.step(f"\nFound {len(summary.responses)} API response(s)\n", console=console)

    seen: set[str] = set()
    for response in summary.responses:
        name = resolve_output_name(response.endpoint, seen, duplicate_policy)
        if name is None:
            summary.rejected.append(response)
            ui.warn(
                f"Skipping duplicate endpoint {response.endpoint}: {escape(response.url)}",
                console=console,
            )
            LOG.warning("duplicate_endpoint_rejected", endpoint=response.endpoint, url=response.url)
            continue

        ui.step(f"Processing: {response.method} {name}", console=console)
        fixture_path = mocks_dir / f"{name}.json"
        test_path = tests_dir / f"{name}{TEST_SPEC_SUFFIX}"
        relative = fixture_relative_path(fixture_path, tests_dir)

        try:
            redacted = redact_secrets(response.data)
            if dry_run:
                ui.info(f"Would write fixture: {escape(str(fixture_path))}", console=console)
                ui.info(f"Would write test: {escape(str(test_path))}", console=console)
            else:
                write_fixture(redacted, fixture_path)
                ui.success(f"Generated fixture: {escape(str(fixture_path))}", console=console)
                generate_test_spec(
                    response.segment,
                    relative,
                    test_path,
                    app_url=app_url,
                    list_selector=list_selector,
                    wait_timeout_ms=wait_timeout_ms,
                )
                ui.success(f"Generated test: {escape(str(test_path))}", console=console)
        except (RedactionError, FixtureWriteError) as exc:
            summary.failures.append(
                EndpointFailure(endpoint=response.endpoint, url=response.url, error=str(exc))
            )
            ui.error(f"{name}: {escape(str(exc))}", console=console)
            LOG.error("endpoint_failed", endpoint=response.endpoint, url=response.url, error=str(exc))
            continue

        summary.artifacts.append(
            GeneratedArtifact(
                endpoint=response.endpoint,
                name=name,
                method=response.method,
                url=response.url,
                fixture_path=fixture_path,
                test_path=test_path,
            )
        )

    LOG.info(
        "pipeline_finished",
        responses=len(summary.responses),
        artifacts=len(summary.artifacts),
        failures=len(summary.failures),
        rejected=len(summary.rejected),
    )
    return summary
