from __future__ import annotations

import logging
import random
import time
from typing import Callable, Iterable

from .resolver import LyricsResolver

logger = logging.getLogger(__name__)


def read_pairs(lines: Iterable[str]) -> list[tuple[str, str]]:
    """Parse "Artist - Song" lines; blanks and # comments are skipped."""
    out: list[tuple[str, str]] = []
    for raw in lines:
        line = raw.strip()
        if not line or line.startswith("#"):
            continue
        artist, sep, song = line.partition(" - ")
        if not sep or not artist.strip() or not song.strip():
            logger.warning("Skipping line without 'Artist - Song': %r", line)
            continue
        out.append((artist.strip(), song.strip()))
    return out


def save_bulk(
    resolver: LyricsResolver,
    pairs: Iterable[tuple[str, str]],
    max_delay_s: float,
    *,
    sleep: Callable[[float], None] = time.sleep,
    rng: random.Random | None = None,
    on_progress: Callable[[str, str, bool], None] | None = None,
) -> int:
    """
    Look up every pair, one at a time, waiting a random 0..max_delay_s
    between lookups to keep the request rate down. Blocks the caller.

    Returns how many pairs ended up with lyrics.
    """
    rng = rng or random.Random()
    found = 0
    for i, (artist, song) in enumerate(pairs):
        if i and max_delay_s > 0:
            sleep(rng.uniform(0, max_delay_s))
        text = resolver.lookup(artist, song)
        if text is not None:
            found += 1
        if on_progress is not None:
            on_progress(artist, song, text is not None)
    return found
