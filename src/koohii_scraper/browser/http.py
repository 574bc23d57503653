from __future__ import annotations

import logging
from typing import Dict, Optional
from urllib.parse import urljoin

import requests
from bs4 import BeautifulSoup, Tag
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from ..config import HTTP_TIMEOUT, REQUEST_HEADERS, RETRY_ATTEMPTS
from ..errors import FetchError
from .base import Browser

logger = logging.getLogger("koohii")

_SKIPPED_INPUT_TYPES = {"submit", "button", "reset", "image", "file"}


class HttpBrowser(Browser):
    """Browser backed by a requests session; cookies persist across calls."""

    def __init__(
        self,
        timeout: float = HTTP_TIMEOUT,
        retries: int = RETRY_ATTEMPTS,
        session: Optional[requests.Session] = None,
    ):
        self.timeout = timeout
        self.session = session or self._create_session(retries)
        self._url: Optional[str] = None
        self._document: Optional[BeautifulSoup] = None

    def _create_session(self, retries: int) -> requests.Session:
        s = requests.Session()
        s.headers.update(REQUEST_HEADERS)
        retry = Retry(
            total=retries,
            backoff_factor=0.3,
            status_forcelist=[429, 500, 502, 503, 504],
            raise_on_status=False,
        )
        adapter = HTTPAdapter(max_retries=retry)
        s.mount("https://", adapter)
        s.mount("http://", adapter)
        return s

    @property
    def url(self) -> Optional[str]:
        return self._url

    @property
    def document(self) -> Optional[BeautifulSoup]:
        return self._document

    def fetch(self, url: str) -> BeautifulSoup:
        return self._request("GET", url)

    def submit_form(self, form: Tag, fields: Dict[str, str]) -> BeautifulSoup:
        values = form_values(form)
        values.update(fields)
        method = (form.get("method") or "GET").upper()
        action = urljoin(self._url or "", form.get("action") or "")
        logger.debug("Submitting form to %s (%s)", action, method)
        if method == "POST":
            return self._request("POST", action, data=values)
        return self._request("GET", action, params=values)

    def _request(self, method: str, url: str, **kwargs) -> BeautifulSoup:
        try:
            logger.debug("Fetching %s %s", method, url)
            resp = self.session.request(method, url, timeout=self.timeout, **kwargs)
            resp.raise_for_status()
        except requests.RequestException as e:
            logger.debug("Fetch failed for %s: %s", url, e)
            raise FetchError(url, e) from e
        logger.debug("Fetched %s OK", resp.url)
        self._url = resp.url or url
        self._document = BeautifulSoup(resp.content, "lxml")
        return self._document


def form_values(form: Tag) -> Dict[str, str]:
    """Return the values a browser would send for `form` with no user input."""
    values: Dict[str, str] = {}
    for field in form.find_all(["input", "textarea", "select"]):
        name = field.get("name")
        if not name:
            continue
        if field.name == "textarea":
            values[name] = field.get_text()
        elif field.name == "select":
            option = field.find("option", selected=True) or field.find("option")
            if option is not None:
                values[name] = option.get("value", option.get_text(strip=True))
        else:
            kind = (field.get("type") or "text").lower()
            if kind in _SKIPPED_INPUT_TYPES:
                continue
            if kind in ("checkbox", "radio") and not field.has_attr("checked"):
                continue
            values[name] = field.get("value", "on" if kind in ("checkbox", "radio") else "")
    return values
