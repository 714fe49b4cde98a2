from __future__ import annotations

import random

import pytest

from lyric_finder.cache.sqlite import LyricsCache
from lyric_finder.sources.registry import SourceRegistry
from lyric_finder.sources.resolver import LyricsResolver
from lyric_finder.sources.types import Source
from tests.mocks.transport_mock import FakeTransport


def make_source(name: str, *, rule: str = "div.lyrics", marker: str | None = None, sep: str = "-") -> Source:
    return Source(
        name=name,
        url_template=f"https://{name}.test/{{artist}}/{{song}}",
        word_separator=sep,
        extraction_rule=rule,
        no_lyrics_marker=marker,
    )


def page(*blocks: str, cls: str = "lyrics") -> str:
    divs = "".join(f'<div class="{cls}">{b}</div>' for b in blocks)
    return f"<html><body><h1>Song</h1>{divs}</body></html>"


@pytest.fixture
def cache(tmp_path):
    return LyricsCache(tmp_path / "lyrics.sqlite3")


@pytest.fixture
def transport():
    return FakeTransport()


@pytest.fixture
def registry():
    return SourceRegistry([make_source("alpha"), make_source("beta"), make_source("gamma")])


@pytest.fixture
def resolver(cache, registry, transport):
    return LyricsResolver(cache, registry, transport, rng=random.Random(1234))
