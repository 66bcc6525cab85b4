"""Progress and status lines printed while generating fixtures.

Everything here goes to stderr. The generated files are the command's only
real output, so the terminal is reserved for progress.

Messages are rich markup. Callers escape untrusted text (URLs, paths, error
messages taken from a HAR) with ``rich.markup.escape`` before passing it in.
"""

from __future__ import annotations

from rich.console import Console

err_console = Console(stderr=True)


def _emit(style: str, text: str, console: Console | None) -> None:
    (console or err_console).print(f"[{style}]{text}[/{style}]")


def success(message: str, *, console: Console | None = None) -> None:
    """Report a written file or a found response."""
    _emit("green", f"  ✓ {message}", console)


def error(message: str, *, console: Console | None = None) -> None:
    """Report a failure, such as an endpoint whose fixture could not be written."""
    _emit("red", f"  ✗ {message}", console)


def warn(message: str, *, console: Console | None = None) -> None:
    _emit("yellow", f"  ⚠ {message}", console)


def info(message: str, *, console: Console | None = None) -> None:
    _emit("dim", f"  {message}", console)


def step(message: str, *, console: Console | None = None) -> None:
    """Print an unindented bold line that starts a phase of the run."""
    _emit("bold", message, console)
