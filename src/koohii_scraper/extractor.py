from __future__ import annotations

import logging
from typing import Iterable, List

from bs4 import BeautifulSoup, Tag

from .browser.base import Browser
from .config import (
    BASE_URL,
    STORY_PLACEHOLDER,
    STROKE_COUNT_PATTERN,
    STUDY_URL_TEMPLATE,
)
from .datamodels import KanjiEntry, Story

logger = logging.getLogger("koohii")


def scrape(browser: Browser, lookup: str, base_url: str = BASE_URL) -> KanjiEntry:
    """Fetch the study page for `lookup` and parse it.

    Only a FetchError from the browser escapes; the page itself is parsed
    best-effort.
    """
    url = STUDY_URL_TEMPLATE.format(base_url=base_url, lookup=lookup)
    doc = browser.fetch(url)
    return parse_kanji_page(doc)


def parse_kanji_page(doc: BeautifulSoup) -> KanjiEntry:
    stroke_text = _select_text(doc, "div.strokecount")
    entry = KanjiEntry(
        character=_select_text(doc, "div.kanji span.cj-k").strip(),
        reading=_select_text(doc, "div.strokecount span.cj-k").strip(),
        frame_number=parse_int(_select_text(doc, "div.framenum")),
        stroke_count=resolve_stroke_count(stroke_text),
        story=resolve_story(_select_text(doc, "div#sv-textarea")),
    )
    entry.stories = rank_stories(
        _parse_shared_story(s) for s in doc.select("div.sharedstory")
    )
    logger.debug(
        "Parsed frame %d (%s) with %d shared stories",
        entry.frame_number,
        entry.character,
        len(entry.stories),
    )
    return entry


def rank_stories(stories: Iterable[Story]) -> List[Story]:
    """Order stories by star count, most starred first; ties keep page order."""
    return sorted(stories, key=lambda s: s.starred_count, reverse=True)


def resolve_stroke_count(text: str) -> int:
    # A bracketed count, e.g. "8 strokes [10]", overrides the leading number.
    match = STROKE_COUNT_PATTERN.search(text)
    if match:
        return parse_int(match.group(1))
    tokens = text.split()
    return parse_int(tokens[0]) if tokens else 0


def resolve_story(text: str) -> str:
    story = text.strip()
    if story == STORY_PLACEHOLDER:
        return ""
    return story


def parse_int(text: str) -> int:
    """Parse a plain ASCII decimal integer, returning 0 for anything else."""
    value = text.strip()
    if value.isascii() and "_" not in value:
        try:
            return int(value)
        except ValueError:
            pass
    logger.debug("Could not parse integer from %r, using 0", text)
    return 0


def _parse_shared_story(node: Tag) -> Story:
    return Story(
        author=_select_text(node, "div.sharedstory_author a").strip(),
        content=_select_text(node, "div.story").strip(),
        modified_date=_select_text(node, "div.lastmodified").strip(),
        starred_count=parse_int(_select_text(node, "a.JsStar")),
        reported_count=parse_int(_select_text(node, "a.JsReport")),
    )


def _select_text(node: Tag, selector: str) -> str:
    """Return the combined text of every element matching `selector`."""
    return "".join(el.get_text() for el in node.select(selector))
