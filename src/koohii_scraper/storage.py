from __future__ import annotations

import json
import logging
from typing import List, Sequence

from .datamodels import KanjiEntry
from .errors import StorageError

logger = logging.getLogger("koohii")

JSON_INDENT = 3


def save(path: str, entries: Sequence[KanjiEntry]) -> None:
    """Write `entries` to `path` as an indented JSON array, replacing the file."""
    try:
        data = json.dumps(
            [e.to_dict() for e in entries], indent=JSON_INDENT, ensure_ascii=False
        )
        with open(path, "w", encoding="utf-8") as f:
            f.write(data)
    except (IOError, TypeError, ValueError) as e:
        raise StorageError(path, e) from e
    logger.debug("Wrote %d entries to %s", len(entries), path)


def load(path: str) -> List[KanjiEntry]:
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (IOError, json.JSONDecodeError) as e:
        raise StorageError(path, e, action="read") from e
    return [KanjiEntry.from_dict(item) for item in data]
