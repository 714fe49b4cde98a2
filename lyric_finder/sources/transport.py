from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Protocol

import requests

logger = logging.getLogger(__name__)


class Transport(Protocol):
    def fetch(self, url: str, on_success: Callable[[str], None], on_failure: Callable[[], None]) -> None:
        """Start a GET; later call exactly one of the callbacks, once."""
        ...


class RequestsTransport:
    """GETs on a small thread pool so callers never wait on the network."""

    def __init__(self, *, timeout_s: float, user_agent: str, max_workers: int = 4):
        self.timeout_s = timeout_s
        self._session = requests.Session()
        self._session.headers.update({"User-Agent": user_agent})
        self._pool = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="lyrics-fetch")

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def fetch(self, url: str, on_success: Callable[[str], None], on_failure: Callable[[], None]) -> None:
        try:
            self._pool.submit(self._get, url, on_success, on_failure)
        except RuntimeError as e:
            # pool already shut down
            logger.warning("Cannot fetch %s: %s", url, e)
            on_failure()

    def _get(self, url: str, on_success: Callable[[str], None], on_failure: Callable[[], None]) -> None:
        try:
            r = self._session.get(url, timeout=self.timeout_s)
            r.raise_for_status()
            body = r.text
        except requests.RequestException as e:
            logger.warning("GET %s failed: %s", url, e)
            on_failure()
            return
        on_success(body)

    def close(self) -> None:
        self._pool.shutdown(wait=True)
        self._session.close()
