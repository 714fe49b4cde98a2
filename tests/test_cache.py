from __future__ import annotations

import sqlite3

import pytest

from lyric_finder.cache.sqlite import LyricsCache
from lyric_finder.errors import CacheError


def test_creates_table_once(tmp_path):
    db = tmp_path / "sub" / "lyrics.sqlite3"
    LyricsCache(db).put("A", "B", "x")
    # reopening keeps the data
    assert LyricsCache(db).get("A", "B") == "x"


def test_get_ignores_case(cache):
    cache.put("Radiohead", "Creep", "But I'm a creep")
    assert cache.get("RADIOHEAD", "creep") == "But I'm a creep"
    assert cache.get("Radiohead", "Karma Police") is None


def test_null_lyrics_is_a_miss(tmp_path):
    db = tmp_path / "lyrics.sqlite3"
    cache = LyricsCache(db)
    with sqlite3.connect(db) as con:
        con.execute("INSERT INTO lyrics(artist, song, lyrics) VALUES ('A', 'B', NULL)")
    assert cache.get("A", "B") is None
    assert len(cache.all()) == 1


def test_all_in_insert_order(cache):
    cache.put("B", "2", "two")
    cache.put("A", "1", "one")
    assert [(e.artist, e.song) for e in cache.all()] == [("B", "2"), ("A", "1")]
    assert [e.id for e in cache.all()] == sorted(e.id for e in cache.all())


def test_search_lyrics_is_case_insensitive_substring(cache):
    cache.put("A", "1", "All you need is LOVE")
    cache.put("B", "2", "Nothing here")
    assert [e.song for e in cache.search_lyrics("love")] == ["1"]


def test_search_treats_wildcards_literally(cache):
    cache.put("A", "1", "100% pure")
    cache.put("B", "2", "100 pure")
    assert [e.song for e in cache.search_lyrics("0%")] == ["1"]
    assert cache.search_artist("_") == []


def test_search_artist(cache):
    cache.put("The Beatles", "Help!", "Help")
    cache.put("Beatles Tribute", "Yesterday", "Yesterday")
    cache.put("Stones", "Angie", "Angie")
    assert [e.artist for e in cache.search_artist("beatles")] == ["The Beatles", "Beatles Tribute"]


def test_clear(cache):
    cache.put("A", "B", "x")
    cache.clear()
    assert cache.all() == []


def test_get_folds_non_ascii_case(cache):
    cache.put("Beyoncé", "Halo", "Remember those walls I built")
    assert cache.get("BEYONCÉ", "HALO") == "Remember those walls I built"
    cache.put("Rammstein", "Du Hast", "Du hast mich")
    assert cache.get("RAMMSTEIN", "DU HAST") == "Du hast mich"


def test_search_folds_non_ascii_case(cache):
    cache.put("Édith Piaf", "Non, je ne regrette rien", "Non, rien de rien\nCar ma vie, car mes joies")
    cache.put("Кино", "Звезда по имени Солнце", "Белый снег, серый лёд")
    assert [e.artist for e in cache.search_artist("édith")] == ["Édith Piaf"]
    assert [e.artist for e in cache.search_artist("КИНО")] == ["Кино"]
    assert [e.song for e in cache.search_lyrics("БЕЛЫЙ СНЕГ")] == ["Звезда по имени Солнце"]


def test_unopenable_db_raises_cache_error(tmp_path):
    db = tmp_path / "lyrics.sqlite3"
    db.mkdir()
    with pytest.raises(CacheError):
        LyricsCache(db)
