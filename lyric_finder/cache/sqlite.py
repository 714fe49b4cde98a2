from __future__ import annotations

import logging
import sqlite3
from pathlib import Path

from lyric_finder.errors import CacheError
from lyric_finder.sources.types import LyricEntry

logger = logging.getLogger(__name__)


def _casefold(value: str | None) -> str | None:
    return value.casefold() if value is not None else None


class LyricsCache:
    """
    One table of saved lyrics, keyed in practice by (artist, song).

    Lookups and searches compare casefolded text, so case never matters,
    accented letters included. The table does not enforce uniqueness; the
    resolver only writes after a miss. A connection is opened per call so the
    cache can be used from the fetch threads.
    """

    def __init__(self, db_path: Path):
        self.db_path = db_path
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._init_db()

    def _connect(self) -> sqlite3.Connection:
        con = sqlite3.connect(self.db_path)
        con.row_factory = sqlite3.Row
        # NOCASE and lower() only fold ASCII; compare with Python's fold instead
        con.create_function("casefold", 1, _casefold, deterministic=True)
        return con

    def _init_db(self) -> None:
        try:
            with self._connect() as con:
                con.execute(
                    """
                    CREATE TABLE IF NOT EXISTS lyrics (
                        id     INTEGER PRIMARY KEY AUTOINCREMENT,
                        artist TEXT COLLATE NOCASE,
                        song   TEXT COLLATE NOCASE,
                        lyrics TEXT COLLATE NOCASE
                    );
                    """
                )
                con.execute("CREATE INDEX IF NOT EXISTS idx_lyrics_artist_song ON lyrics(artist, song);")
        except sqlite3.Error as e:
            raise CacheError(f"could not open lyrics cache {self.db_path}: {e}") from e

    def _query(self, sql: str, params: tuple = ()) -> list[LyricEntry]:
        try:
            with self._connect() as con:
                rows = con.execute(sql, params).fetchall()
        except sqlite3.Error as e:
            raise CacheError(f"lyrics cache query failed: {e}") from e
        return [LyricEntry(id=r["id"], artist=r["artist"], song=r["song"], lyrics=r["lyrics"]) for r in rows]

    def get(self, artist: str, song: str) -> str | None:
        """Saved lyrics for the exact pair, or None."""
        rows = self._query(
            "SELECT id, artist, song, lyrics FROM lyrics "
            "WHERE casefold(artist)=casefold(?) AND casefold(song)=casefold(?) AND lyrics IS NOT NULL "
            "ORDER BY id LIMIT 1",
            (artist, song),
        )
        return rows[0].lyrics if rows else None

    def put(self, artist: str, song: str, lyrics: str) -> None:
        try:
            with self._connect() as con:
                con.execute(
                    "INSERT INTO lyrics(artist, song, lyrics) VALUES (?, ?, ?)",
                    (artist, song, lyrics),
                )
        except sqlite3.Error as e:
            raise CacheError(f"could not save lyrics for {artist} - {song}: {e}") from e
        logger.debug("Saved lyrics for %s - %s", artist, song)

    # instr() keeps the needle literal, unlike LIKE with its % and _ wildcards
    def search_lyrics(self, text: str) -> list[LyricEntry]:
        return self._query(
            "SELECT id, artist, song, lyrics FROM lyrics WHERE instr(casefold(lyrics), casefold(?)) > 0 ORDER BY id",
            (text,),
        )

    def search_artist(self, text: str) -> list[LyricEntry]:
        return self._query(
            "SELECT id, artist, song, lyrics FROM lyrics WHERE instr(casefold(artist), casefold(?)) > 0 ORDER BY id",
            (text,),
        )

    def all(self) -> list[LyricEntry]:
        return self._query("SELECT id, artist, song, lyrics FROM lyrics ORDER BY id")

    def clear(self) -> None:
        try:
            with self._connect() as con:
                con.execute("DELETE FROM lyrics")
        except sqlite3.Error as e:
            raise CacheError(f"could not clear lyrics cache: {e}") from e
