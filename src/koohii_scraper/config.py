from __future__ import annotations

import json
import logging
import math
import os
import re
from datetime import datetime
from typing import Any, Dict, Optional

from .errors import ConfigError

# --- Configuration ---
BASE_URL = "http://kanji.koohii.com"
LOGIN_URL = f"{BASE_URL}/login"
STUDY_URL_TEMPLATE = "{base_url}/study/kanji/{lookup}"
SIGNED_OUT_TITLE = "Sign In - Kanji Koohii"
HTTP_TIMEOUT = 30
REQUEST_DELAY = 2.0
RETRY_ATTEMPTS = 0

DEFAULT_FIRST_FRAME = 1
DEFAULT_LAST_FRAME = 3030

REQUEST_HEADERS = {
    "User-Agent": (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64; rv:115.0) "
        "Gecko/20100101 Firefox/115.0"
    ),
    "Accept": "text/html",
    "Accept-Charset": "utf8",
}

STORY_PLACEHOLDER = "[ click here to enter your story ]"
STROKE_COUNT_PATTERN = re.compile(r"\[(\d+)\]", re.ASCII)

CONFIG_DEFAULTS: Dict[str, Any] = {
    "base_url": BASE_URL,
    "request_delay": REQUEST_DELAY,
    "http_timeout": HTTP_TIMEOUT,
    "retries": RETRY_ATTEMPTS,
    "skip_failures": False,
}

# --- Logging ---
logger = logging.getLogger("koohii")

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"


def setup_logging(debug: bool = False) -> Optional[str]:
    """Configure logging.

    Progress goes to stderr at INFO. In debug mode the level drops to DEBUG
    and records are also written to a file under /tmp, whose path is
    returned.
    """
    if not debug:
        logging.basicConfig(level=logging.INFO, format=LOG_FORMAT)
        return None

    ts = datetime.now().strftime("%Y%m%dT%H%M%S")
    pid = os.getpid()
    debug_path = f"/tmp/koohii_debug_{ts}_{pid}.log"

    logging.basicConfig(
        level=logging.DEBUG,
        format=LOG_FORMAT,
        handlers=[
            logging.StreamHandler(),
            logging.FileHandler(debug_path, mode="a"),
        ],
    )

    logger.debug("Debug logging enabled to %s", debug_path)
    return debug_path


def load_config(path: Optional[str] = None) -> Dict[str, Any]:
    """Return the run configuration, overlaying the JSON file at `path` if given."""
    config = dict(CONFIG_DEFAULTS)
    if not path:
        return config

    try:
        with open(path, "r", encoding="utf-8") as f:
            overrides = json.load(f)
    except (IOError, json.JSONDecodeError) as e:
        raise ConfigError(f"failed to load config from {path}: {e}") from e

    if not isinstance(overrides, dict):
        raise ConfigError(f"config file {path} must contain a JSON object")

    unknown = set(overrides) - set(CONFIG_DEFAULTS)
    for key in sorted(unknown):
        logger.warning("Ignoring unknown config key '%s' in %s", key, path)

    for key in CONFIG_DEFAULTS:
        if key in overrides:
            config[key] = overrides[key]

    try:
        config["base_url"] = str(config["base_url"]).rstrip("/")
        config["request_delay"] = float(config["request_delay"])
        config["http_timeout"] = float(config["http_timeout"])
        config["retries"] = int(config["retries"])
    except (TypeError, ValueError, OverflowError) as e:
        raise ConfigError(f"invalid value in config file {path}: {e}") from e

    if not isinstance(config["skip_failures"], bool):
        raise ConfigError(f"skip_failures must be true or false in {path}")
    for key in ("request_delay", "http_timeout"):
        if not math.isfinite(config[key]):
            raise ConfigError(f"{key} must be a finite number in {path}")
    if config["request_delay"] < 0 or config["retries"] < 0:
        raise ConfigError(f"request_delay and retries must not be negative in {path}")
    if config["http_timeout"] <= 0:
        raise ConfigError(f"http_timeout must be positive in {path}")

    logger.info("Loaded config from %s", path)
    return config
