"""CLI entry-point for changet."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from .config import DownloadConfig
from .errors import ChangetError, InvalidInput
from .pipeline import ThreadDownloader
from .urls import ThreadRef, parse_thread_url

console = Console()


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True, console=console)],
    )
    # Suppress noisy libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


def _print_stats(stats: dict) -> None:
    table = Table(title="Download Summary", show_header=True, header_style="bold cyan")
    table.add_column("Metric", style="bold")
    table.add_column("Count", justify="right")
    for key, val in stats.items():
        table.add_row(key.capitalize(), str(val))
    console.print(table)


def _thread_link(value: str) -> ThreadRef:
    try:
        return parse_thread_url(value.strip())
    except InvalidInput as exc:
        raise click.BadParameter(str(exc)) from exc


def prompt_thread_ref() -> ThreadRef:
    """Ask for a thread link until a valid one is pasted."""
    return click.prompt("Paste thread link", value_proc=_thread_link)


@click.command()
@click.option(
    "-o", "--output",
    type=click.Path(path_type=Path),
    default=None,
    help="Folder to create <board>/<thread> under (default: current directory)",
)
@click.option("-w", "--workers", default=1, type=click.IntRange(min=1), help="Parallel downloads (default: 1)")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
def cli(output: Path | None, workers: int, verbose: bool) -> None:
    """Download every attachment of a 4chan thread.

    Files land in <output>/<board>/<thread>/ under their original names.
    Files already present are skipped, so re-running resumes a download.
    """
    _setup_logging(verbose)
    try:
        with ThreadDownloader(DownloadConfig(output_root=output, workers=workers)) as dl:
            ref = prompt_thread_ref()
            console.print(f"[bold]Downloading [cyan]{ref}[/cyan]...[/bold]")
            directory = dl.run(ref)
            console.print(f"[green]✓[/green] Thread {ref} saved to {directory}")
            _print_stats(dl.stats)
    except ChangetError as exc:
        console.print(f"[red]✗[/red] {exc}")
        sys.exit(1)


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
