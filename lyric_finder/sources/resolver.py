from __future__ import annotations

import logging
import random
import threading
from concurrent.futures import Future
from dataclasses import dataclass, field
from functools import partial
from typing import Callable, Iterable

from lyric_finder.cache.sqlite import LyricsCache
from lyric_finder.errors import CacheError

from .extract import extract, is_no_lyrics
from .registry import SourceRegistry
from .transport import Transport
from .types import Source
from .urls import build_url

logger = logging.getLogger(__name__)


@dataclass(eq=False)
class ResolutionAttempt:
    """State of one resolution chain; never shared between chains."""

    artist: str
    song: str
    remaining: list[Source]
    future: Future
    fresh_text: str | None = None  # set once the fetched text has been saved
    tried: list[str] = field(default_factory=list)

    @property
    def display(self) -> str:
        return f"{self.artist} - {self.song}"

    def drop(self, source: Source) -> None:
        self.tried.append(source.name)
        self.remaining = [s for s in self.remaining if s.name != source.name]

    def finish(self, text: str | None) -> None:
        if not self.future.done():
            self.future.set_result(text)


def _new_future() -> Future:
    fut: Future = Future()
    # RUNNING futures cannot be cancelled; a chain always runs to the end
    fut.set_running_or_notify_cancel()
    return fut


class LyricsResolver:
    """
    Cache first, then the sources in random order until one has the lyrics.

    Source misses, network errors and pages without lyrics all just move on
    to the next untried source; the caller only ever sees the text or None.
    Fresh lyrics are saved and then read back through the cache, so every
    caller gets its text from the same place.
    """

    def __init__(
        self,
        cache: LyricsCache,
        registry: SourceRegistry,
        transport: Transport,
        *,
        rng: random.Random | None = None,
    ):
        self.cache = cache
        self.registry = registry
        self.transport = transport
        self._rng = rng or random.Random()
        self._lock = threading.Lock()
        self._inflight: dict[tuple[str, str], Future] = {}

    def resolve(
        self,
        artist: str,
        song: str,
        on_done: Callable[[str | None], None] | None = None,
        sources: Iterable[Source] | None = None,
    ) -> Future:
        """
        Start (or join) the lookup for one pair.

        `on_done` fires exactly once with the lyrics or None. On a cache hit it
        fires before this returns; otherwise from a fetch thread.
        """
        cached = self._cached(artist, song)
        if cached is not None:
            fut = _new_future()
            fut.set_result(cached)
            _attach(fut, on_done)
            return fut

        key = (artist.casefold(), song.casefold())
        with self._lock:
            fut = self._inflight.get(key)
            joined = fut is not None
            if fut is None:
                fut = _new_future()
                self._inflight[key] = fut

        if joined:
            logger.debug("Joining lookup already running for %s - %s", artist, song)
            _attach(fut, on_done)
            return fut

        fut.add_done_callback(partial(self._forget, key))
        _attach(fut, on_done)

        candidates = list(sources) if sources is not None else list(self.registry.all())
        attempt = ResolutionAttempt(artist=artist, song=song, remaining=candidates, future=fut)
        self._guarded(attempt, self._step, attempt)
        return fut

    def lookup(self, artist: str, song: str, timeout: float | None = None) -> str | None:
        """Blocking variant of resolve()."""
        return self.resolve(artist, song).result(timeout=timeout)

    def _forget(self, key: tuple[str, str], fut: Future) -> None:
        with self._lock:
            if self._inflight.get(key) is fut:
                del self._inflight[key]

    def _cached(self, artist: str, song: str) -> str | None:
        try:
            return self.cache.get(artist, song)
        except CacheError as e:
            logger.error("Cache read failed for %s - %s: %s", artist, song, e)
            return None

    def _step(self, attempt: ResolutionAttempt) -> None:
        cached = self._cached(attempt.artist, attempt.song)
        if cached is not None:
            attempt.finish(cached)
            return

        if attempt.fresh_text is not None:
            logger.warning("Saved lyrics for %s did not read back, returning them as fetched", attempt.display)
            attempt.finish(attempt.fresh_text)
            return

        if not attempt.remaining:
            logger.info("No lyrics for %s (tried: %s)", attempt.display, ", ".join(attempt.tried) or "nothing")
            attempt.finish(None)
            return

        source = self._rng.choice(attempt.remaining)
        url = build_url(source, attempt.artist, attempt.song)
        logger.debug("Trying %s for %s: %s", source.name, attempt.display, url)
        self.transport.fetch(
            url,
            on_success=partial(self._guarded, attempt, self._handle_body, attempt, source),
            on_failure=partial(self._guarded, attempt, self._on_miss, attempt, source, "unreachable"),
        )

    def _on_miss(self, attempt: ResolutionAttempt, source: Source, reason: str) -> None:
        logger.debug("%s: %s for %s", source.name, reason, attempt.display)
        attempt.drop(source)
        self._step(attempt)

    def _guarded(self, attempt: ResolutionAttempt, fn: Callable[..., None], *args) -> None:
        try:
            fn(*args)
        except Exception:
            # usually on a fetch thread: nobody else would see this, and the
            # future must still complete
            logger.exception("Unexpected error while looking up %s", attempt.display)
            attempt.finish(None)

    def _handle_body(self, attempt: ResolutionAttempt, source: Source, body: str) -> None:
        if is_no_lyrics(source, body):
            self._on_miss(attempt, source, "no lyrics")
            return

        text = extract(source, body)
        if text is None:
            self._on_miss(attempt, source, "nothing extracted")
            return

        try:
            self.cache.put(attempt.artist, attempt.song, text)
        except CacheError as e:
            logger.error("%s", e)
            attempt.finish(text)
            return

        logger.info("Found lyrics for %s on %s", attempt.display, source.name)
        attempt.tried.append(source.name)
        attempt.fresh_text = text
        attempt.remaining = list(self.registry.all())
        self._step(attempt)


def _attach(fut: Future, on_done: Callable[[str | None], None] | None) -> None:
    if on_done is not None:
        fut.add_done_callback(lambda f: on_done(f.result()))
