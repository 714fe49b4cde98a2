from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

from lyric_finder.errors import SourceConfigError
from lyric_finder.sources.types import Source

logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = "Mozilla/5.0 (X11; Linux x86_64; rv:128.0) Gecko/20100101 Firefox/128.0"


def _config_dir() -> Path:
    xdg = os.getenv("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "lyric-finder"
    return Path.home() / ".config" / "lyric-finder"


def _data_dir() -> Path:
    xdg = os.getenv("XDG_CACHE_HOME")
    base = Path(xdg) if xdg else Path.home() / ".cache"
    return base / "lyric-finder"


@dataclass(frozen=True)
class AppConfig:
    # Storage
    data_dir: Path
    cache_db_path: Path
    config_dir: Path

    # Sources
    enabled_sources: tuple[str, ...]  # empty = every registered source
    extra_sources: tuple[Source, ...] = field(default_factory=tuple)

    # Network
    request_timeout_s: float = 10.0
    max_workers: int = 4
    user_agent: str = DEFAULT_USER_AGENT

    # Bulk saving
    bulk_max_delay_s: float = 5.0


def load_config() -> AppConfig:
    data_dir = _data_dir()
    config_dir = _config_dir()

    sources_env = os.getenv("LYRIC_FINDER_SOURCES", "")
    enabled = tuple(s.strip().lower() for s in sources_env.split(",") if s.strip())

    return AppConfig(
        data_dir=data_dir,
        cache_db_path=data_dir / "lyrics.sqlite3",
        config_dir=config_dir,
        enabled_sources=enabled,
        extra_sources=_load_extra_sources(config_dir),
        request_timeout_s=float(os.getenv("LYRIC_FINDER_TIMEOUT", "10.0")),
        max_workers=max(int(os.getenv("LYRIC_FINDER_WORKERS", "4")), 1),
        user_agent=os.getenv("LYRIC_FINDER_USER_AGENT") or DEFAULT_USER_AGENT,
        bulk_max_delay_s=float(os.getenv("LYRIC_FINDER_BULK_MAX_DELAY", "5.0")),
    )


def source_from_dict(raw: object) -> Source:
    if not isinstance(raw, dict):
        raise SourceConfigError(f"source entry must be an object, got {type(raw).__name__}")
    try:
        return Source(
            name=str(raw["name"]).strip().lower(),
            url_template=str(raw["url_template"]),
            word_separator=str(raw.get("word_separator", "-")),
            extraction_rule=str(raw["extraction_rule"]),
            no_lyrics_marker=raw.get("no_lyrics_marker") or None,
        )
    except KeyError as e:
        raise SourceConfigError(f"source entry is missing {e.args[0]!r}") from e


def _load_extra_sources(config_dir: Path) -> tuple[Source, ...]:
    cfg_path = config_dir / "config.json"
    if not cfg_path.exists():
        return ()
    try:
        data = json.loads(cfg_path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        logger.warning("Ignoring unreadable config %s: %s", cfg_path, e)
        return ()

    out: list[Source] = []
    for raw in data.get("sources") or []:
        try:
            out.append(source_from_dict(raw))
        except SourceConfigError as e:
            logger.warning("Skipping source in %s: %s", cfg_path, e)
    return tuple(out)
