"""
canvas-tui: command line entry point.

Commands:
- canvas-tui          - Open the interactive viewer (same as `view`)
- canvas-tui view     - Page through upcoming assignments day by day
- canvas-tui list     - Print upcoming assignments as tables
"""
from __future__ import annotations

import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import typer
from loguru import logger
from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from canvastui import __version__
from canvastui.canvas.client import CanvasApiError, CanvasClient
from canvastui.config import ConfigurationError, Settings, get_settings
from canvastui.core.calendar import HEADER_COLUMNS, Calendar


# =============================================================================
# CLI Setup
# =============================================================================

app = typer.Typer(
    name="canvas-tui",
    help="Terminal viewer for upcoming Canvas assignments.",
    invoke_without_command=True,
    add_completion=False,
)
console = Console()
err_console = Console(stderr=True)

LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{line} - {message}"


@dataclass
class LogOptions:
    level: str = "WARNING"
    log_file: Path | None = None


def configure_logging(options: LogOptions, interactive: bool) -> None:
    """
    Route loguru output.

    The full-screen viewer owns the terminal, so it only logs to a file.
    """
    logger.remove()
    if options.log_file is not None:
        logger.add(options.log_file, level=options.level, format=LOG_FORMAT)
    if not interactive:
        logger.add(sys.stderr, level=options.level, format="<level>{message}</level>")


def load_settings() -> Settings:
    """Return validated settings or exit with a readable message."""
    try:
        return get_settings().require()
    except ConfigurationError as e:
        err_console.print(f"[bold red]{e}[/bold red]")
        err_console.print(
            "[dim]Set CANVAS_URL (e.g. https://school.instructure.com) and "
            "CANVAS_ACCESS_TOKEN (Account > Settings > New Access Token).[/dim]"
        )
        raise typer.Exit(1)


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"canvas-tui {__version__}")
        raise typer.Exit()


# =============================================================================
# Commands
# =============================================================================

@app.callback()
def main_callback(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log debug output"),
    log_file: Optional[Path] = typer.Option(
        None,
        "--log-file",
        help="Write logs to this file (the viewer logs nowhere else)",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
) -> None:
    """Terminal viewer for upcoming Canvas assignments."""
    options = LogOptions(level="DEBUG" if verbose else "WARNING", log_file=log_file)
    configure_logging(options, interactive=ctx.invoked_subcommand in (None, "view"))
    if ctx.invoked_subcommand is None:
        view()


@app.command()
def view() -> None:
    """
    Page through upcoming assignments day by day.

    Keys: h/l previous/next day, j/k previous/next assignment,
    o open in browser, r refresh, q quit.
    """
    from canvastui.tui.app import CanvasApp

    settings = load_settings()
    CanvasApp.from_settings(settings).run()


@app.command("list")
def list_assignments(
    days: Optional[int] = typer.Option(
        None,
        "--days",
        "-d",
        min=1,
        help="Only show the first N days that have assignments",
    ),
) -> None:
    """Print upcoming assignments as one table per day."""
    settings = load_settings()

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=err_console,
        transient=True,
    ) as progress:
        progress.add_task("Fetching assignments...", total=None)
        try:
            with CanvasClient(settings.canvas_url, settings.canvas_access_token) as client:
                calendar = client.fetch_calendar()
        except CanvasApiError as e:
            err_console.print(f"[bold red]{e}[/bold red]")
            raise typer.Exit(1)

    logger.info(
        "Listing {} assignments over {} days", calendar.event_count, len(calendar.dates)
    )
    print_calendar(calendar, days=days)


def print_calendar(calendar: Calendar, days: int | None = None) -> None:
    """Render every day of the calendar as a rich Table."""
    if calendar.is_empty:
        console.print("[green]No upcoming assignments.[/green]")
        return

    for calendar_date in calendar.dates[:days]:
        table = Table(
            title=calendar_date.label,
            title_style="bold magenta",
            title_justify="left",
            header_style="magenta",
        )
        for column in HEADER_COLUMNS:
            table.add_column(column)
        for event in calendar_date.events:
            table.add_row(
                event.course_name,
                event.title,
                event.due_label,
                style="green" if event.submitted else None,
            )
        console.print(table)


# =============================================================================
# Entry Point
# =============================================================================

def main() -> None:
    """CLI entry point."""
    app()


if __name__ == "__main__":
    main()
