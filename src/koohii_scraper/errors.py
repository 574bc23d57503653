from __future__ import annotations

from typing import Optional


class ScraperError(Exception):
    """Base class for errors that abort a scraping run."""


class ConfigError(ScraperError):
    pass


class AuthError(ScraperError):
    pass


class FetchError(ScraperError):
    """A page could not be retrieved (DNS, connection, timeout, HTTP status)."""

    def __init__(self, url: str, cause: Optional[BaseException] = None):
        self.url = url
        self.cause = cause
        message = f"failed to fetch {url}"
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message)


class StorageError(ScraperError):
    def __init__(self, path: str, cause: BaseException, action: str = "write"):
        self.path = path
        self.cause = cause
        super().__init__(f"failed to {action} {path}: {cause}")
