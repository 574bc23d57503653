#!/usr/bin/env python3
# -*- coding: utf-8 -*-
from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from .browser.http import HttpBrowser
from .config import DEFAULT_FIRST_FRAME, DEFAULT_LAST_FRAME, load_config, setup_logging
from .driver import run_job
from .errors import ScraperError

logger = logging.getLogger("koohii")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="koohii-scraper",
        description="Scrape kanji entries and shared stories from kanji.koohii.com",
    )
    parser.add_argument("--username", default="", help="login username for kanji.koohii.com")
    parser.add_argument("--password", default="", help="login password for kanji.koohii.com")
    parser.add_argument(
        "--firstFrame", dest="first_frame", type=int, default=DEFAULT_FIRST_FRAME,
        help="kanji first frame",
    )
    parser.add_argument(
        "--lastFrame", dest="last_frame", type=int, default=DEFAULT_LAST_FRAME,
        help="kanji last frame",
    )
    parser.add_argument("--config", help="JSON file overriding scraper settings")
    parser.add_argument(
        "--skip-failures", action="store_true",
        help="log and skip lookups whose page cannot be fetched instead of aborting",
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    parser.add_argument("output", nargs="?", help="path of the JSON file to write")
    parser.add_argument("input", nargs="?", help="file of lookup keys, one per line")
    return parser


# --- Entrypoint ---
def main(argv: Optional[List[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.username or not args.password or not args.output:
        parser.error("--username, --password and an output path are required")
    if args.first_frame >= args.last_frame:
        parser.error("--firstFrame must be less than --lastFrame")

    debug_path = setup_logging(args.debug)
    if debug_path:
        print(f"Debug logging enabled: {debug_path}", file=sys.stderr)

    try:
        config = load_config(args.config)
        browser = HttpBrowser(timeout=config["http_timeout"], retries=config["retries"])
        run_job(
            browser,
            args.username,
            args.password,
            args.output,
            first_frame=args.first_frame,
            last_frame=args.last_frame,
            input_path=args.input,
            base_url=config["base_url"],
            delay=config["request_delay"],
            skip_failures=args.skip_failures or config["skip_failures"],
        )
    except ScraperError as e:
        logger.error("%s", e)
        sys.exit(1)


if __name__ == "__main__":
    main()
