from __future__ import annotations

import pytest

from fakes import LOGIN_PAGE, FakeBrowser


@pytest.fixture
def fake_browser():
    return FakeBrowser(pages={"http://kanji.koohii.com/login": LOGIN_PAGE})
