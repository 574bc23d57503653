from __future__ import annotations

import logging

from .browser.base import Browser
from .config import LOGIN_URL, SIGNED_OUT_TITLE
from .errors import AuthError, FetchError

logger = logging.getLogger("koohii")


def login(
    browser: Browser, username: str, password: str, login_url: str = LOGIN_URL
) -> None:
    """Sign `browser` in; later fetches on it are authenticated.

    Raises AuthError when the login form is missing, when the site sends us
    back to the sign-in page, or when either request fails.
    """
    try:
        doc = browser.fetch(login_url)
        form = doc.find("form")
        if form is None:
            raise AuthError("login form not found")
        browser.submit_form(form, {"username": username, "password": password})
    except FetchError as e:
        raise AuthError(f"login request failed: {e}") from e

    if browser.title == SIGNED_OUT_TITLE:
        raise AuthError("failed to sign in")
    logger.debug("Signed in as %s", username)
