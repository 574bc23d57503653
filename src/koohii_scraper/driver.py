from __future__ import annotations

import logging
import time
from typing import Callable, List, Optional, Sequence

from .auth import login
from .browser.base import Browser
from .config import BASE_URL, DEFAULT_FIRST_FRAME, DEFAULT_LAST_FRAME, REQUEST_DELAY
from .datamodels import KanjiEntry
from .errors import FetchError, StorageError
from .extractor import scrape
from .storage import save

logger = logging.getLogger("koohii")


def frame_range(first: int, last: int) -> List[str]:
    """Return the lookup keys for frames `first` through `last`, inclusive."""
    return [str(i) for i in range(first, last + 1)]


def load_lookups(path: str) -> List[str]:
    """Return the non-empty lines of `path` in file order.

    Only the line terminator is removed; keys are not trimmed or deduplicated.
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            lines = [line.rstrip("\n") for line in f]
    except (IOError, UnicodeDecodeError) as e:
        raise StorageError(path, e, action="read") from e
    return [line for line in lines if line]


class BatchScraper:
    """Scrapes lookup keys one at a time with a fixed pause between requests."""

    def __init__(
        self,
        browser: Browser,
        base_url: str = BASE_URL,
        delay: float = REQUEST_DELAY,
        skip_failures: bool = False,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.browser = browser
        self.base_url = base_url
        self.delay = delay
        self.skip_failures = skip_failures
        self._sleep = sleep
        self.skipped: List[str] = []

    def run(self, lookups: Sequence[str]) -> List[KanjiEntry]:
        self.skipped = []
        entries: List[KanjiEntry] = []
        for i, lookup in enumerate(lookups):
            if i:
                self._sleep(self.delay)
            logger.info("scraping %s...", lookup)
            try:
                entries.append(scrape(self.browser, lookup, self.base_url))
            except FetchError as e:
                if not self.skip_failures:
                    raise
                logger.warning("Skipping %s: %s", lookup, e)
                self.skipped.append(lookup)
        if self.skipped:
            logger.warning(
                "Skipped %d of %d lookups: %s",
                len(self.skipped),
                len(lookups),
                ", ".join(self.skipped),
            )
        return entries


def resolve_lookups(
    first_frame: int, last_frame: int, input_path: Optional[str] = None
) -> List[str]:
    if input_path:
        logger.info("loading from %s...", input_path)
        return load_lookups(input_path)
    return frame_range(first_frame, last_frame)


def run_job(
    browser: Browser,
    username: str,
    password: str,
    output_path: str,
    first_frame: int = DEFAULT_FIRST_FRAME,
    last_frame: int = DEFAULT_LAST_FRAME,
    input_path: Optional[str] = None,
    base_url: str = BASE_URL,
    delay: float = REQUEST_DELAY,
    skip_failures: bool = False,
    sleep: Callable[[float], None] = time.sleep,
) -> List[KanjiEntry]:
    """Sign in, scrape every lookup, then write the results once.

    Any ScraperError aborts before the output file is touched.
    """
    logger.info("logging in...")
    login(browser, username, password, f"{base_url}/login")

    lookups = resolve_lookups(first_frame, last_frame, input_path)
    scraper = BatchScraper(
        browser, base_url=base_url, delay=delay, skip_failures=skip_failures, sleep=sleep
    )
    entries = scraper.run(lookups)

    logger.info("saving to %s...", output_path)
    save(output_path, entries)
    return entries
