from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Source:
    """A lyrics site: where to ask, how to spell the words, where the text lives."""

    name: str
    url_template: str  # "{artist}" / "{song}" placeholders
    word_separator: str
    extraction_rule: str  # CSS selector
    no_lyrics_marker: str | None = None


@dataclass(frozen=True, slots=True)
class LyricEntry:
    id: int
    artist: str
    song: str
    lyrics: str | None
