"""ghostmocks CLI - turn a recorded HAR into offline Playwright tests.

Reads a HAR file, writes a redacted JSON fixture and a generated test spec
for every JSON API endpoint it finds.
"""

from pathlib import Path
from typing import Annotated

import click
import typer
from rich.console import Console
from rich.markup import escape

from ghostmocks import console as ui
from ghostmocks.config import get_settings
from ghostmocks.exceptions import HARNotFoundError, HARParseError
from ghostmocks.logging import (
    configure_from_environment,
    configure_logging,
    get_logger,
    level_for_verbosity,
)
from ghostmocks.pipeline import DuplicatePolicy, GenerationSummary, run_pipeline

# Configure logging early using env vars directly.
# The -v/-vv and --log-format flags may reconfigure later.
configure_from_environment()

LOG = get_logger(__name__)

app = typer.Typer(
    name="ghostmocks",
    help="Generate JSON fixtures and Playwright tests from a HAR file.",
    add_completion=False,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)
console = Console(stderr=True)


def _print_summary(summary: GenerationSummary) -> None:
    """Print the closing summary for a run."""
    verb = "Would generate" if summary.dry_run else "Generated"
    fixtures = len(summary.fixture_paths)
    tests = len({a.test_path for a in summary.artifacts})
    console.print()
    if summary.has_failures:
        ui.error(f"{len(summary.failures)} endpoint(s) failed", console=console)
    if summary.rejected:
        ui.warn(f"{len(summary.rejected)} duplicate response(s) skipped", console=console)
    ui.success(f"{verb} {fixtures} fixture(s) and {tests} test(s)", console=console)

    if not summary.dry_run and not summary.has_failures:
        console.print("\n[bold]Next steps:[/bold]")
        console.print("  1. Start your app's dev server")
        console.print("  2. Run [cyan]npx playwright test[/cyan] to replay the fixtures")


@app.command()
def generate(
    har_file: Annotated[
        Path | None,
        typer.Argument(
            help="Path to HAR file to import",
            show_default=False,
        ),
    ] = None,
    output_dir: Annotated[
        Path | None,
        typer.Option(
            "--output-dir",
            "-o",
            help="Base directory for mocks/ and tests/ (default: current directory)",
        ),
    ] = None,
    mocks_dir: Annotated[
        Path | None,
        typer.Option("--mocks-dir", help="Fixture directory (default: <output-dir>/mocks)"),
    ] = None,
    tests_dir: Annotated[
        Path | None,
        typer.Option("--tests-dir", help="Test spec directory (default: <output-dir>/tests)"),
    ] = None,
    on_duplicate: Annotated[
        str | None,
        typer.Option(
            "--on-duplicate",
            click_type=click.Choice([p.value for p in DuplicatePolicy]),
            help="Handling of responses that share an endpoint name",
        ),
    ] = None,
    app_url: Annotated[
        str | None,
        typer.Option("--app-url", help="URL the generated tests navigate to"),
    ] = None,
    selector: Annotated[
        str | None,
        typer.Option("--selector", help="Selector for one rendered list item"),
    ] = None,
    dry_run: Annotated[
        bool,
        typer.Option(
            "--dry-run",
            help="Show what would be generated without writing files",
        ),
    ] = False,
    verbose: Annotated[
        int,
        typer.Option(
            "--verbose",
            "-v",
            count=True,
            help="Increase verbosity (-v for info, -vv for debug)",
        ),
    ] = 0,
    log_format: Annotated[
        str | None,
        typer.Option(
            "--log-format",
            click_type=click.Choice(["console", "json"]),
            help="Log output format: console (human-readable) or json (structured)",
        ),
    ] = None,
) -> None:
    """Generate fixtures and Playwright tests from a HAR file.

    Every successful JSON response in the capture becomes a redacted
    fixture in mocks/ and a test spec in tests/ that serves it through
    network interception.

    \b
    Examples:
        ghostmocks session.har
        ghostmocks session.har -o e2e --on-duplicate suffix
        ghostmocks session.har --dry-run
    """
    settings = get_settings()

    if verbose or log_format is not None:
        configure_logging(
            level=level_for_verbosity(verbose, settings.log_level),
            json_output=(log_format or settings.log_format) == "json",
        )

    if har_file is None:
        ui.error("Usage: ghostmocks <har-file-path>", console=console)
        ui.info("Example: ghostmocks sample.har", console=console)
        raise typer.Exit(1)

    if output_dir is not None:
        settings = settings.model_copy(update={"output_dir": output_dir})
    policy = DuplicatePolicy(on_duplicate or settings.duplicate_policy)

    try:
        summary = run_pipeline(
            har_file,
            mocks_dir=mocks_dir or settings.mocks_dir,
            tests_dir=tests_dir or settings.tests_dir,
            duplicate_policy=policy,
            app_url=app_url or settings.app_url,
            list_selector=selector or settings.list_selector,
            wait_timeout_ms=settings.wait_timeout_ms,
            dry_run=dry_run,
            console=console,
        )
    except HARNotFoundError:
        ui.error(f"HAR file not found: {escape(str(har_file))}", console=console)
        raise typer.Exit(1) from None
    except HARParseError as exc:
        ui.error(f"Error parsing HAR file: {escape(str(exc))}", console=console)
        raise typer.Exit(1) from None

    if not summary.responses:
        return

    _print_summary(summary)
    if summary.has_failures:
        raise typer.Exit(1)
