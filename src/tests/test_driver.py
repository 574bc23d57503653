from __future__ import annotations

import json
from unittest.mock import MagicMock, call

import pytest

from fakes import LOGIN_PAGE, FakeBrowser, kanji_page
from koohii_scraper.driver import (
    BatchScraper,
    frame_range,
    load_lookups,
    resolve_lookups,
    run_job,
)
from koohii_scraper.errors import AuthError, FetchError, StorageError

STUDY_URL = "http://kanji.koohii.com/study/kanji/{}"


def _browser(keys, failing=()):
    pages = {"http://kanji.koohii.com/login": LOGIN_PAGE}
    for key in keys:
        pages[STUDY_URL.format(key)] = kanji_page(frame=key)
    return FakeBrowser(pages=pages, failing={STUDY_URL.format(k) for k in failing})


def test_frame_range_inclusive():
    assert frame_range(1, 3) == ["1", "2", "3"]


def test_load_lookups_keeps_order_and_whitespace(tmp_path):
    path = tmp_path / "keys.txt"
    path.write_text("12\n45\n\n301 \n45\n", encoding="utf-8")
    assert load_lookups(str(path)) == ["12", "45", "301 ", "45"]


def test_load_lookups_missing_file(tmp_path):
    with pytest.raises(StorageError):
        load_lookups(str(tmp_path / "missing.txt"))


def test_resolve_lookups_prefers_input_file(tmp_path):
    path = tmp_path / "keys.txt"
    path.write_text("7\n9\n", encoding="utf-8")
    assert resolve_lookups(1, 3, str(path)) == ["7", "9"]
    assert resolve_lookups(1, 3) == ["1", "2", "3"]


def test_batch_scraper_sequential_with_delay():
    browser = _browser(["12", "45", "301"])
    sleep = MagicMock()
    entries = BatchScraper(browser, delay=2, sleep=sleep).run(["12", "45", "301"])

    assert browser.fetched == [STUDY_URL.format(k) for k in ("12", "45", "301")]
    assert [e.frame_number for e in entries] == [12, 45, 301]
    assert sleep.call_args_list == [call(2), call(2)]


def test_batch_scraper_fails_fast():
    browser = _browser(["1", "2", "3"], failing=["2"])
    with pytest.raises(FetchError):
        BatchScraper(browser, sleep=MagicMock()).run(["1", "2", "3"])
    assert browser.fetched == [STUDY_URL.format("1"), STUDY_URL.format("2")]


def test_batch_scraper_skip_failures():
    browser = _browser(["1", "2", "3"], failing=["2"])
    scraper = BatchScraper(browser, skip_failures=True, sleep=MagicMock())
    entries = scraper.run(["1", "2", "3"])
    assert [e.frame_number for e in entries] == [1, 3]
    assert scraper.skipped == ["2"]


def test_run_job_writes_output(tmp_path):
    keys = tmp_path / "keys.txt"
    keys.write_text("12\n45\n301\n", encoding="utf-8")
    out = tmp_path / "kanji.json"
    browser = _browser(["12", "45", "301"])

    entries = run_job(
        browser, "hiro", "s3cret", str(out), input_path=str(keys), sleep=MagicMock()
    )

    assert browser.submitted == [{"username": "hiro", "password": "s3cret"}]
    assert len(entries) == 3
    data = json.loads(out.read_text(encoding="utf-8"))
    assert [item["frameNumber"] for item in data] == [12, 45, 301]


def test_run_job_range(tmp_path):
    out = tmp_path / "kanji.json"
    browser = _browser(["1", "2", "3"])
    run_job(browser, "hiro", "s3cret", str(out), first_frame=1, last_frame=3, sleep=MagicMock())
    assert len(json.loads(out.read_text(encoding="utf-8"))) == 3


def test_run_job_fetch_failure_writes_nothing(tmp_path):
    out = tmp_path / "kanji.json"
    browser = _browser(["1", "2", "3"], failing=["2"])
    with pytest.raises(FetchError):
        run_job(browser, "hiro", "s3cret", str(out), first_frame=1, last_frame=3, sleep=MagicMock())
    assert not out.exists()


def test_run_job_auth_failure_scrapes_nothing(tmp_path):
    out = tmp_path / "kanji.json"
    browser = _browser(["1", "2"])
    browser.after_submit = LOGIN_PAGE
    with pytest.raises(AuthError):
        run_job(browser, "hiro", "bad", str(out), first_frame=1, last_frame=2, sleep=MagicMock())
    assert browser.fetched == ["http://kanji.koohii.com/login"]
    assert not out.exists()


def test_batch_scraper_resets_skipped_between_runs():
    browser = _browser(["1", "2", "3"], failing=["2"])
    scraper = BatchScraper(browser, skip_failures=True, sleep=MagicMock())
    scraper.run(["1", "2"])
    assert scraper.skipped == ["2"]
    scraper.run(["1", "3"])
    assert scraper.skipped == []
