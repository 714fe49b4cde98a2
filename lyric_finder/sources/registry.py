from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from .types import Source

if TYPE_CHECKING:
    from lyric_finder.config import AppConfig

logger = logging.getLogger(__name__)


DEFAULT_SOURCES: tuple[Source, ...] = (
    Source(
        name="songlyrics",
        url_template="https://www.songlyrics.com/{artist}/{song}-lyrics/",
        word_separator="-",
        extraction_rule="#songLyricsDiv",
        no_lyrics_marker="We do not have the lyrics for",
    ),
    Source(
        name="lyricsmania",
        url_template="https://www.lyricsmania.com/{song}_lyrics_{artist}.html",
        word_separator="_",
        extraction_rule="div.lyrics-body",
    ),
    Source(
        name="genius",
        url_template="https://genius.com/{artist}-{song}-lyrics",
        word_separator="-",
        extraction_rule='div[data-lyrics-container="true"]',
    ),
    Source(
        name="musixmatch",
        url_template="https://www.musixmatch.com/lyrics/{artist}/{song}",
        word_separator="-",
        extraction_rule="span.lyrics__content__ok",
        no_lyrics_marker="Lyrics not available",
    ),
)


class SourceRegistry:
    """
    Ordered set of lyrics sources, unique by name.

    Re-registering a name replaces the record where it stands, so the order
    stays stable for the lifetime of the registry.
    """

    def __init__(self, sources: tuple[Source, ...] | list[Source] = ()):
        self._sources: list[Source] = []
        for s in sources:
            self.add(s)

    def register(
        self,
        name: str,
        url_template: str,
        word_separator: str,
        extraction_rule: str,
        no_lyrics_marker: str | None = None,
    ) -> Source:
        src = Source(
            name=name,
            url_template=url_template,
            word_separator=word_separator,
            extraction_rule=extraction_rule,
            no_lyrics_marker=no_lyrics_marker,
        )
        self.add(src)
        return src

    def add(self, source: Source) -> None:
        for i, existing in enumerate(self._sources):
            if existing.name == source.name:
                self._sources[i] = source
                return
        self._sources.append(source)

    def get(self, name: str) -> Source | None:
        return next((s for s in self._sources if s.name == name), None)

    def all(self) -> tuple[Source, ...]:
        return tuple(self._sources)

    def __len__(self) -> int:
        return len(self._sources)


def default_registry() -> SourceRegistry:
    return SourceRegistry(DEFAULT_SOURCES)


def build_registry(cfg: AppConfig) -> SourceRegistry:
    """Defaults plus config.json sources, narrowed to the enabled names."""
    full = default_registry()
    for src in cfg.extra_sources:
        full.add(src)

    if not cfg.enabled_sources:
        return full

    out = SourceRegistry()
    for name in cfg.enabled_sources:
        src = full.get(name)
        if src is None:
            logger.info("Unknown source '%s' in config, skipping", name)
            continue
        out.add(src)
    return out
