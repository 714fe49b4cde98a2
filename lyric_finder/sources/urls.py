from __future__ import annotations

from .types import Source


def build_url(source: Source, artist: str, song: str) -> str:
    sep = source.word_separator
    # str.replace instead of str.format: templates may carry other braces
    return source.url_template.replace("{artist}", artist.replace(" ", sep)).replace(
        "{song}", song.replace(" ", sep)
    )
