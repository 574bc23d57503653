from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Dict, Optional

from bs4 import BeautifulSoup, Tag


class Browser(ABC):
    """Abstract base class for a stateful page-fetching session."""

    @property
    @abstractmethod
    def url(self) -> Optional[str]:
        """Return the URL of the current page, if any."""
        pass

    @property
    @abstractmethod
    def document(self) -> Optional[BeautifulSoup]:
        """Return the parsed current page, if any."""
        pass

    @abstractmethod
    def fetch(self, url: str) -> BeautifulSoup:
        """Open `url` and return the parsed document."""
        pass

    @abstractmethod
    def submit_form(self, form: Tag, fields: Dict[str, str]) -> BeautifulSoup:
        """Submit `form` from the current page with `fields` filled in."""
        pass

    @property
    def title(self) -> str:
        doc = self.document
        if doc is None or doc.title is None:
            return ""
        return doc.title.get_text()
