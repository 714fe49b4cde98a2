from __future__ import annotations

from pathlib import Path

import typer

from lyric_finder.cache.sqlite import LyricsCache
from lyric_finder.config import load_config
from lyric_finder.errors import CacheError, InvalidQuery
from lyric_finder.logging_setup import setup_logging
from lyric_finder.render.terminal import TerminalView
from lyric_finder.search.formatter import selection
from lyric_finder.sources.bulk import read_pairs
from lyric_finder.sources.registry import build_registry
from lyric_finder.sources.service import LyricsService


app = typer.Typer(no_args_is_help=True, add_completion=False)


def _view(no_color: bool) -> TerminalView:
    return TerminalView(color=not no_color)


def _open_service(view: TerminalView) -> LyricsService:
    try:
        return LyricsService(load_config())
    except CacheError as e:
        view.warn(str(e))
        raise typer.Exit(code=1)


@app.command()
def show(
    artist: str = typer.Argument(..., help="Artist name"),
    song: str = typer.Argument(..., help="Song title"),
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging"),
    no_color: bool = typer.Option(False, "--no-color", help="Plain output"),
):
    """
    Print lyrics for a song, fetching and saving them on first use.
    """
    setup_logging(debug)
    view = _view(no_color)
    with _open_service(view) as svc:
        text = svc.get_lyrics(artist, song)
    if text is None:
        view.warn(f"No lyrics found for {artist} - {song}")
        raise typer.Exit(code=1)
    view.show_lyrics(artist, song, text)


@app.command()
def search(
    query: str = typer.Argument("", help="Lyrics text; a leading space searches artists; empty lists all"),
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging"),
    no_color: bool = typer.Option(False, "--no-color", help="Plain output"),
):
    """
    Search saved lyrics, pick a row and print that song.
    """
    setup_logging(debug)
    view = _view(no_color)
    with _open_service(view) as svc:
        try:
            rows = svc.search(query)
        except (InvalidQuery, CacheError) as e:
            view.warn(str(e))
            raise typer.Exit(code=1)

        if not rows:
            typer.echo("No results found")
            return

        row = view.pick("Song", [(r.display_text, r) for r in rows])
        if row is None:
            return
        artist, song = selection(row)
        text = svc.get_lyrics(artist, song)

    if text is None:
        view.warn(f"No lyrics found for {artist} - {song}")
        raise typer.Exit(code=1)
    view.show_lyrics(artist, song, text)


@app.command()
def bulk(
    pairs_file: Path = typer.Argument(..., exists=True, dir_okay=False, help="File with 'Artist - Song' lines"),
    max_delay: float | None = typer.Option(None, "--max-delay", help="Max seconds to wait between songs"),
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging"),
):
    """
    Fetch and save lyrics for every song listed in a file.
    """
    setup_logging(debug)
    pairs = read_pairs(pairs_file.read_text(encoding="utf-8").splitlines())

    def _progress(artist: str, song: str, found: bool) -> None:
        typer.echo(f"{'✓' if found else '✗'} {artist} - {song}")

    with _open_service(_view(no_color=True)) as svc:
        found = svc.save_bulk(pairs, max_delay_s=max_delay, on_progress=_progress)
    typer.echo(f"Saved {found}/{len(pairs)}")


@app.command()
def sources():
    """List lyrics sources in the order they are registered."""
    for src in build_registry(load_config()).all():
        typer.echo(f"{src.name}\t{src.url_template}")


@app.command()
def cache(
    clear: bool = typer.Option(False, "--clear", help="Clear lyrics cache"),
):
    """Manage lyrics cache."""
    cfg = load_config()
    try:
        cache_db = LyricsCache(cfg.cache_db_path)
        if clear:
            cache_db.clear()
        else:
            count = len(cache_db.all())
    except CacheError as e:
        _view(no_color=True).warn(str(e))
        raise typer.Exit(code=1)

    if clear:
        typer.echo(f"Cache cleared: {cfg.cache_db_path}")
    else:
        typer.echo(f"{count} songs in {cfg.cache_db_path}")
        typer.echo("Use --clear to clear the cache")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
