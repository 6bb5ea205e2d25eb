# Author: PB & Claude
# Maintainer: PB
# Original date: 2026.10.18
# License: (c) HRDAG, 2026, GPL-2 or newer
#
# ------
# rsync-itemize/src/rsync_itemize/cli.py

"""Command line interface for rsync-itemize."""

import json
import logging
import sys
from pathlib import Path
from typing import Iterable

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from .decoder import ItemizeChangesDecoder
from .runner import RSYNC_ENV_VAR, RsyncError, RsyncOptions, run_rsync
from .types import Event, ItemizeDecodeError, SyncSummary, Update

app = typer.Typer(help="Decode rsync --itemize-changes output into change events")
console = Console()

OUTPUT_FORMATS = ("json", "summary", "table")
TABLE_LIMIT = 50


def _configure_logging(debug: bool) -> None:
    # Only the package logger is touched; the host process keeps its handlers
    package_logger = logging.getLogger("rsync_itemize")
    for handler in list(package_logger.handlers):
        if isinstance(handler, RichHandler):
            package_logger.removeHandler(handler)
    handler = RichHandler(console=Console(stderr=True), show_path=False)
    handler.setFormatter(logging.Formatter("%(message)s"))
    package_logger.addHandler(handler)
    package_logger.setLevel(logging.DEBUG if debug else logging.WARNING)


@app.command()
def parse(
    report: Path = typer.Argument(Path("-"),
                                  help="rsync output to decode, '-' for stdin"),
    output_format: str = typer.Option("json", "--format", "-f",
                                      help="Output format: json, summary, table"),
    debug: bool = typer.Option(False, "--debug", help="Enable debug output")
) -> None:
    """Decode an itemize-changes report from a file or stdin."""
    _configure_logging(debug)
    _check_format(output_format)
    try:
        if str(report) == "-":
            events = list(ItemizeChangesDecoder(sys.stdin))
        else:
            with open(report, "rb") as fh:
                events = list(ItemizeChangesDecoder(fh))
        _emit(events, output_format)

    except (ItemizeDecodeError, OSError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)


@app.command()
def sync(
    source: str = typer.Argument(..., help="rsync source"),
    destination: str = typer.Argument(..., help="rsync destination"),
    apply: bool = typer.Option(False, "--apply",
                               help="Really transfer instead of --dry-run"),
    delete: bool = typer.Option(False, "--delete",
                                help="Delete extraneous files from destination"),
    rsync_binary: str = typer.Option("rsync", "--rsync", envvar=RSYNC_ENV_VAR,
                                     help="rsync executable to run"),
    output_format: str = typer.Option("table", "--format", "-f",
                                      help="Output format: json, summary, table"),
    debug: bool = typer.Option(False, "--debug", help="Enable debug output")
) -> None:
    """Run rsync with --itemize-changes and report what it changes."""
    _configure_logging(debug)
    _check_format(output_format)
    options = RsyncOptions(
        rsync_binary=rsync_binary,
        dry_run=not apply,
        delete=delete,
    )
    try:
        if debug:
            console.print(f"[blue]Synchronizing:[/blue]")
            console.print(f"  Source: {source}")
            console.print(f"  Destination: {destination}")
            console.print(f"  Dry run: {options.dry_run}")

        events = list(run_rsync(source, destination, options))
        _emit(events, output_format)

    except (ItemizeDecodeError, RsyncError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)


def _check_format(output_format: str) -> None:
    if output_format not in OUTPUT_FORMATS:
        typer.echo(f"Unknown format: {output_format}", err=True)
        raise typer.Exit(1)


def _emit(events: list[Event], output_format: str) -> None:
    if output_format == "json":
        typer.echo(json.dumps([event.to_dict() for event in events], indent=2))
    elif output_format == "summary":
        _print_summary(events)
    else:
        _print_table(events)


def _print_summary(events: Iterable[Event]) -> None:
    """Print counts of each kind of change."""
    summary = SyncSummary.from_events(events)

    console.print(f"\n[bold]Summary of {summary.total} entries:[/bold]")
    console.print(f"  Created: {summary.created}")
    console.print(f"  Updated: {summary.updated}")
    console.print(f"  Unchanged: {summary.unchanged}")
    console.print(f"  Deleted: {summary.deleted}")
    console.print(f"  Cannot delete: {summary.cannot_delete}")


def _describe(event: Event) -> str:
    if isinstance(event, Update):
        details = ", ".join(event.changed_attributes)
    else:
        details = ""
    if getattr(event, "hardlink_target", None):
        details = f"→ {event.hardlink_target}"
    return details


def _print_table(events: list[Event]) -> None:
    """Print changes in table format."""
    table = Table(title="rsync Changes")
    table.add_column("Change", style="cyan")
    table.add_column("Path", style="green")
    table.add_column("Type", style="yellow")
    table.add_column("Details", style="magenta")

    for event in events[:TABLE_LIMIT]:
        path = event.path[:60] + "..." if len(event.path) > 60 else event.path
        table.add_row(
            event.kind,
            escape(path),
            getattr(event, "file_kind", ""),
            escape(_describe(event)),
        )

    if len(events) > TABLE_LIMIT:
        table.add_row("...", f"({len(events) - TABLE_LIMIT} more)", "", "")

    console.print(table)


def main() -> None:
    """Main CLI entry point."""
    app()


if __name__ == "__main__":
    main()
