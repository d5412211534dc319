"""Command-line interface for the frob tracker."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

import typer

from .config import TrackerSettings
from .document import TextDocument
from .errors import FrobError
from .paths import resolve_document_path
from .ranges import SCOPES, line_offset
from .reporting import TotalsPrinter
from .server_runner import serve_document
from .tracker import FrobTracker

logger = logging.getLogger(__name__)

app = typer.Typer(help="Track task time with markers embedded in a text file.")

_FILE_OPTION_HELP = "Plain-text document holding the frobs."


@app.callback(no_args_is_help=True)
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logs.")) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )


@app.command()
def toggle(
    file: Optional[Path] = typer.Option(None, "--file", "-f", path_type=Path, help=_FILE_OPTION_HELP),
    at: Optional[int] = typer.Option(None, "--at", min=0, help="Character offset of the cursor."),
    line: Optional[int] = typer.Option(None, "--line", "-l", min=1, help="Put the cursor at the start of this line."),
    exclusive: bool = typer.Option(
        True,
        "--exclusive/--shared",
        help="Stop every other running frob before starting this one.",
    ),
) -> None:
    """Start or stop the frob at or before the cursor."""
    path = _existing_document(file)
    document = TextDocument.from_path(path)
    tracker = FrobTracker(document, TrackerSettings.from_options(exclusive=exclusive))
    with _reporting_errors():
        position = _cursor(document.text, at, line)
        frob = tracker.toggle(position)
    document.save(path)
    state = "started" if frob.is_active else "stopped"
    typer.echo(f"Frob at {frob.span.start} {state}: {document.text[frob.span.start:frob.span.end]}")


@app.command()
def insert(
    file: Optional[Path] = typer.Option(None, "--file", "-f", path_type=Path, help=_FILE_OPTION_HELP),
    at: Optional[int] = typer.Option(None, "--at", min=0, help="Character offset to insert at."),
    line: Optional[int] = typer.Option(None, "--line", "-l", min=1, help="Insert at the start of this line."),
    trailing_space: bool = typer.Option(
        True,
        "--trailing-space/--no-trailing-space",
        help="Follow the new frob with a space.",
    ),
) -> None:
    """Insert a new zero-duration frob."""
    path = resolve_document_path(file)
    document = TextDocument.from_path(path) if path.exists() else TextDocument()
    tracker = FrobTracker(document, TrackerSettings.from_options(trailing_space=trailing_space))
    with _reporting_errors():
        position = _cursor(document.text, at, line)
        if position > len(document.text):
            raise ValueError(f"Position {position} is past the end of the document")
        frob = tracker.insert(position)
    document.save(path)
    typer.echo(f"Inserted frob at {frob.span.start}.")


@app.command()
def totals(
    file: Optional[Path] = typer.Option(None, "--file", "-f", path_type=Path, help=_FILE_OPTION_HELP),
    scope: str = typer.Option(
        "document", "--scope", "-s", help=f"Range to total: {', '.join(SCOPES)}."
    ),
    at: Optional[int] = typer.Option(None, "--at", min=0, help="Offset selecting the page or section."),
    line: Optional[int] = typer.Option(None, "--line", "-l", min=1, help="Line selecting the page or section."),
    start: Optional[int] = typer.Option(None, "--start", min=0, help="Region start offset."),
    end: Optional[int] = typer.Option(None, "--end", min=0, help="Region end offset."),
) -> None:
    """Print the total frob time and estimates over a range."""
    path = _existing_document(file)
    document = TextDocument.from_path(path)
    tracker = FrobTracker(document)
    with _reporting_errors():
        position = _cursor(document.text, at, line) if at is not None or line is not None else 0
        span = tracker.range_for(scope, position, start, end)
    TotalsPrinter(document).print_totals(span.start, span.end, tracker.now())


@app.command()
def status(
    file: Optional[Path] = typer.Option(None, "--file", "-f", path_type=Path, help=_FILE_OPTION_HELP),
) -> None:
    """List the frobs in a document with their rendering hints."""
    path = _existing_document(file)
    document = TextDocument.from_path(path)
    tracker = FrobTracker(document)
    active = tracker.reconcile()
    now = tracker.now()
    printer = TotalsPrinter(document)
    printer.print_frobs(tracker.frobs(), now)
    typer.echo()
    typer.echo(f"Active frobs: {active}")
    printer.print_totals(0, len(document.text), now)


@app.command()
def web(
    file: Optional[Path] = typer.Option(None, "--file", "-f", path_type=Path, help=_FILE_OPTION_HELP),
    host: str = typer.Option("127.0.0.1", "--host", help="Interface to bind the dashboard."),
    port: int = typer.Option(
        8765, "--port", min=1, max=65535, help="TCP port for the dashboard."
    ),
    exclusive: bool = typer.Option(
        True,
        "--exclusive/--shared",
        help="Default toggle mode for API requests that do not choose one.",
    ),
    open_browser: bool = typer.Option(
        True,
        "--open-browser/--no-open-browser",
        help="Automatically launch the API docs in your default browser.",
    ),
) -> None:
    """Serve the JSON API for a document."""
    serve_document(
        file,
        host=host,
        port=port,
        settings=TrackerSettings.from_options(exclusive=exclusive),
        open_browser=open_browser,
    )


def _existing_document(file: Optional[Path]) -> Path:
    path = resolve_document_path(file)
    if not path.exists():
        typer.echo(f"Error: document {path} does not exist.", err=True)
        raise typer.Exit(code=1)
    return path


def _cursor(text: str, at: Optional[int], line: Optional[int]) -> int:
    if at is not None and line is not None:
        raise ValueError("Use either --at or --line, not both")
    if line is not None:
        return line_offset(text, line)
    if at is None:
        raise ValueError("A cursor position is required (--at or --line)")
    return at


@contextmanager
def _reporting_errors() -> Iterator[None]:
    """Turn domain and input errors into a clean exit without saving."""
    try:
        yield
    except (FrobError, ValueError) as exc:
        logger.debug("Command aborted: %s", exc)
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from exc
