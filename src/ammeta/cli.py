#!/usr/bin/env python3
"""Command-line interface for ammeta.

This CLI is primarily for debugging and development.
For production use, import ammeta as a library.
"""

import asyncio
import json
import logging
import sys

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from ammeta.client import PageFetcher
from ammeta.config import ExtractOptions
from ammeta.exceptions import AMMetaError
from ammeta.models.catalog import Album, Playlist, Track
from ammeta.models.enums import ExtractMode, UrlKind
from ammeta.services import MetadataExtractorService
from ammeta.utils.url import classify_url, extract_song_id

logger = logging.getLogger("ammeta")


def setup_logging(verbose: bool = False, console: Console | None = None) -> None:
    """Route all logging through a single RichHandler.

    Safe to call repeatedly; earlier handlers on the root logger are replaced.

    Args:
        verbose: Show DEBUG records (and extraction diagnostics) instead of
            only warnings.
        console: Console the handler writes to. Defaults to stdout.
    """
    handler = RichHandler(console=console, show_path=False, rich_tracebacks=True)
    handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        handlers=[handler],
        force=True,
    )
    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)


def format_duration(seconds: int) -> str:
    """Format seconds as M:SS or H:MM:SS."""
    hours, rest = divmod(seconds, 3600)
    minutes, secs = divmod(rest, 60)
    if hours:
        return f"{hours}:{minutes:02d}:{secs:02d}"
    return f"{minutes}:{secs:02d}"


def print_track_card(console: Console, track: Track) -> None:
    """Print a single track as a vertical card."""
    table = Table(
        show_header=False,
        padding=(0, 1),
        title="[bold yellow]Song[/bold yellow]",
        title_justify="left",
    )
    table.add_column("Field", style="bold cyan", width=12)
    table.add_column("Value", overflow="fold")

    table.add_row("Title", track.title)
    table.add_row("Artist", track.artist.name)
    if track.album:
        table.add_row("Album", track.album)
    if track.duration:
        table.add_row("Duration", format_duration(track.duration))
    if track.url:
        table.add_row("URL", track.url)

    console.print()
    console.print(table)


def print_track_list(console: Console, record: Album | Playlist) -> None:
    """Print an album or playlist header and its tracks as a table."""
    owner = record.artist if isinstance(record, Album) else record.creator
    console.print()
    title = record.title or "Untitled"
    console.rule(f"[bold]{title}[/bold] [dim]({record.kind})[/dim]")
    console.print(f"  [bold cyan]By[/bold cyan] {owner.name or 'Unknown'}")
    if record.description:
        console.print(f"  [dim]{record.description}[/dim]")

    table = Table(padding=(0, 1))
    table.add_column("#", justify="right", style="dim")
    table.add_column("Title", overflow="fold")
    table.add_column("Artist", overflow="fold")
    table.add_column("Time", justify="right")
    table.add_column("URL", overflow="fold", style="dim")
    for i, track in enumerate(record.tracks, 1):
        table.add_row(
            str(i),
            track.title,
            track.artist.name,
            format_duration(track.duration),
            track.url,
        )

    console.print()
    console.print(table)
    console.print(f"\n[green]{record.num_tracks} tracks[/green]")


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
@click.pass_context
def main(ctx: click.Context, verbose: bool) -> None:
    """Extract metadata from Apple Music songs, albums and playlists."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    setup_logging(verbose=verbose)


@main.command(name="meta")
@click.argument("url", metavar="URL")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON.")
@click.option(
    "--full",
    is_flag=True,
    help="Resolve playlists from JSON-LD, fetching every track page.",
)
@click.pass_context
def meta_cmd(ctx: click.Context, url: str, as_json: bool, full: bool) -> None:
    """Extract structured metadata from an Apple Music URL.

    URL can be a song, album or playlist URL.
    The content type is automatically detected.

    \b
    Examples:
      ammeta meta "https://music.apple.com/us/album/after-hours/1499378108"
      ammeta meta "https://music.apple.com/us/album/after-hours/1499378108?i=1499378615"
      ammeta meta "https://music.apple.com/us/playlist/todays-hits/pl.f4d106fed2bd41149aaacabb233eb5eb"
    """
    console = Console()
    verbose = ctx.obj.get("verbose", False)
    setup_logging(verbose=verbose, console=console)

    options = ExtractOptions(
        verbose=verbose,
        mode=ExtractMode.FULL if full else ExtractMode.FAST,
    )

    try:
        service = MetadataExtractorService(PageFetcher())
        result = asyncio.run(service.extract(url, options))
    except AMMetaError as e:
        logger.error(str(e))
        raise click.ClickException(str(e)) from e

    if result is None:
        console.print(
            "[yellow]Nothing found (request failed or song not on album)[/yellow]"
        )
        ctx.exit(1)

    if as_json:
        data = result.model_dump(by_alias=True, exclude_none=True)
        json.dump(data, sys.stdout, indent=2, ensure_ascii=False)
        sys.stdout.write("\n")
    elif isinstance(result, Track):
        print_track_card(console, result)
    else:
        print_track_list(console, result)


@main.command(name="classify")
@click.argument("url", metavar="URL")
def classify_cmd(url: str) -> None:
    """Show what kind of Apple Music page a URL points at."""
    try:
        kind = classify_url(url)
    except AMMetaError as e:
        raise click.ClickException(str(e)) from e

    click.echo(kind.value)
    if kind is UrlKind.SONG:
        click.echo(f"song id: {extract_song_id(url)}")


if __name__ == "__main__":
    main()
