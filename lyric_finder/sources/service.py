from __future__ import annotations

import logging
from typing import Callable, Iterable

from lyric_finder.cache.sqlite import LyricsCache
from lyric_finder.config import AppConfig
from lyric_finder.search.formatter import SearchRow, search

from .bulk import save_bulk
from .registry import SourceRegistry, build_registry
from .resolver import LyricsResolver
from .transport import RequestsTransport, Transport

logger = logging.getLogger(__name__)


class LyricsService:
    """Wires config, cache, registry and transport together for the CLI."""

    def __init__(
        self,
        cfg: AppConfig,
        *,
        registry: SourceRegistry | None = None,
        transport: Transport | None = None,
    ):
        self.cfg = cfg
        self.cache = LyricsCache(cfg.cache_db_path)
        self.registry = registry if registry is not None else build_registry(cfg)
        self._own_transport = transport is None
        self.transport: Transport = transport or RequestsTransport(
            timeout_s=cfg.request_timeout_s,
            user_agent=cfg.user_agent,
            max_workers=cfg.max_workers,
        )
        self.resolver = LyricsResolver(self.cache, self.registry, self.transport)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def get_lyrics(self, artist: str, song: str) -> str | None:
        return self.resolver.lookup(artist, song)

    def search(self, query: str) -> list[SearchRow]:
        return search(self.cache, query)

    def save_bulk(
        self,
        pairs: Iterable[tuple[str, str]],
        *,
        max_delay_s: float | None = None,
        on_progress: Callable[[str, str, bool], None] | None = None,
    ) -> int:
        delay = self.cfg.bulk_max_delay_s if max_delay_s is None else max_delay_s
        return save_bulk(self.resolver, pairs, delay, on_progress=on_progress)

    def close(self) -> None:
        if self._own_transport and isinstance(self.transport, RequestsTransport):
            self.transport.close()
