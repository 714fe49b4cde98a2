from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

import regex

from lyric_finder.cache.sqlite import LyricsCache
from lyric_finder.errors import InvalidQuery
from lyric_finder.sources.types import LyricEntry


class SearchMode(Enum):
    ALL = "all"
    ARTIST = "artist"
    LYRICS = "lyrics"


@dataclass(frozen=True, slots=True)
class SearchRow:
    display_text: str
    artist: str
    song: str


def search_mode(query: str) -> tuple[SearchMode, str]:
    """
    ""           -> every saved song
    " beatles"   -> artist contains "beatles" (leading space)
    "love"       -> lyrics contain "love", one row per matching line
    """
    if not query.strip():
        return SearchMode.ALL, ""
    if query.startswith(" "):
        return SearchMode.ARTIST, query.strip()
    return SearchMode.LYRICS, query


def _first_line(lyrics: str | None) -> str:
    if not lyrics:
        return ""
    lines = lyrics.splitlines()
    return lines[0] if lines else ""


def _matching_lines(pattern: regex.Pattern, lyrics: str | None) -> list[str]:
    seen: set[str] = set()
    out: list[str] = []
    for line in (lyrics or "").splitlines():
        if line in seen or not pattern.search(line):
            continue
        seen.add(line)
        out.append(line)
    return out


def format_rows(entries: list[LyricEntry], lines: list[list[str]]) -> list[SearchRow]:
    """
    One row per (entry, line), with artist and song padded to the widest
    value in `entries` so the listing lines up in columns.
    """
    if not entries:
        return []
    artist_w = max(len(e.artist or "") for e in entries)
    song_w = max(len(e.song or "") for e in entries)

    rows: list[SearchRow] = []
    for entry, entry_lines in zip(entries, lines):
        artist = entry.artist or ""
        song = entry.song or ""
        for line in entry_lines:
            rows.append(
                SearchRow(
                    display_text=f"{artist.ljust(artist_w)}  {song.ljust(song_w)}  {line}",
                    artist=artist,
                    song=song,
                )
            )
    return rows


def search(cache: LyricsCache, query: str) -> list[SearchRow]:
    mode, needle = search_mode(query)

    if mode is SearchMode.ALL:
        entries = cache.all()
        return format_rows(entries, [[_first_line(e.lyrics)] for e in entries])

    if mode is SearchMode.ARTIST:
        entries = cache.search_artist(needle)
        return format_rows(entries, [[_first_line(e.lyrics)] for e in entries])

    # Query goes in as a pattern, unescaped: "(a|b)" is an alternation here
    try:
        pattern = regex.compile(needle, regex.IGNORECASE)
    except regex.error as e:
        raise InvalidQuery(f"not a valid search pattern: {needle!r} ({e})") from e

    entries = cache.search_lyrics(needle)
    return format_rows(entries, [_matching_lines(pattern, e.lyrics) for e in entries])


def selection(row: SearchRow) -> tuple[str, str]:
    return row.artist, row.song
