from __future__ import annotations

import copy
import logging
from typing import Callable

from bs4 import BeautifulSoup, Tag
from soupsieve import SelectorSyntaxError

from .types import Source

logger = logging.getLogger(__name__)


def _genius_fixup(el: Tag) -> Tag:
    el = copy.copy(el)
    for bad in el.select('[data-exclude-from-selection="true"]'):
        bad.decompose()
    for br in el.find_all("br"):
        br.replace_with("\n")
    return el


# Sites whose markup needs cleanup before get_text(), keyed by source name
_FIXUPS: dict[str, Callable[[Tag], Tag]] = {
    "genius": _genius_fixup,
}


def is_no_lyrics(source: Source, body: str) -> bool:
    """True when the site answered with its own "no lyrics" page."""
    return bool(source.no_lyrics_marker) and source.no_lyrics_marker in body


def _clean(text: str) -> str:
    lines = [ln.rstrip() for ln in text.splitlines()]
    # drop blank lines around the block, keep the ones inside it
    while lines and not lines[0].strip():
        lines.pop(0)
    while lines and not lines[-1].strip():
        lines.pop()
    return "\n".join(lines)


def extract(source: Source, body: str) -> str | None:
    """
    Pull lyrics out of a page.

    Every element matched by the source's selector contributes its text, in
    document order, separated by a blank line. None when nothing matched.
    """
    soup = BeautifulSoup(body, "html.parser")
    try:
        elements = soup.select(source.extraction_rule)
    except SelectorSyntaxError as e:
        logger.warning("%s: bad extraction rule %r: %s", source.name, source.extraction_rule, e)
        return None
    if not elements:
        logger.debug("%s: selector %r matched nothing", source.name, source.extraction_rule)
        return None

    fixup = _FIXUPS.get(source.name)
    parts: list[str] = []
    for el in elements:
        if fixup is not None:
            el = fixup(el)
        txt = _clean(el.get_text())
        if txt:
            parts.append(txt)

    return "\n\n".join(parts) if parts else None
