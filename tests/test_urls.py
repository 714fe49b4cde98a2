from lyric_finder.sources.types import Source
from lyric_finder.sources.urls import build_url


def _src(template: str, sep: str) -> Source:
    return Source(name="t", url_template=template, word_separator=sep, extraction_rule="div")


def test_spaces_become_separator():
    src = _src("https://x.test/{artist}/{song}-lyrics/", "-")
    assert build_url(src, "Nick Cave", "Into My Arms") == "https://x.test/Nick-Cave/Into-My-Arms-lyrics/"


def test_placeholders_in_any_order():
    src = _src("https://x.test/{song}_lyrics_{artist}.html", "_")
    assert build_url(src, "The Cure", "Pictures of You") == "https://x.test/Pictures_of_You_lyrics_The_Cure.html"


def test_every_space_is_replaced():
    src = _src("https://x.test/{artist}", "+")
    assert build_url(src, " a  b ", "") == "https://x.test/+a++b+"


def test_template_without_placeholders():
    src = _src("https://x.test/static", "-")
    assert build_url(src, "A B", "C D") == "https://x.test/static"


def test_other_braces_left_alone():
    src = _src("https://x.test/{artist}?q={}", "-")
    assert build_url(src, "A B", "C") == "https://x.test/A-B?q={}"
