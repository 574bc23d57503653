from __future__ import annotations

import json
import logging
from unittest.mock import patch

import pytest

from koohii_scraper.config import CONFIG_DEFAULTS, load_config, setup_logging
from koohii_scraper.errors import ConfigError


def test_load_config_defaults():
    assert load_config(None) == CONFIG_DEFAULTS


def test_load_config_overrides(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(
        json.dumps(
            {
                "base_url": "http://mirror.test/",
                "request_delay": 5,
                "retries": "2",
                "skip_failures": True,
                "theme": "ignored",
            }
        )
    )
    config = load_config(str(path))
    assert config["base_url"] == "http://mirror.test"
    assert config["request_delay"] == 5.0
    assert config["retries"] == 2
    assert config["skip_failures"] is True
    assert config["http_timeout"] == CONFIG_DEFAULTS["http_timeout"]
    assert "theme" not in config


@pytest.mark.parametrize(
    "content",
    [
        "{broken",
        "[1, 2]",
        '{"request_delay": "soon"}',
        '{"retries": -1}',
        '{"skip_failures": "false"}',
        '{"skip_failures": 1}',
        '{"http_timeout": 0}',
        '{"http_timeout": -5}',
        '{"request_delay": NaN}',
        '{"http_timeout": Infinity}',
        '{"retries": Infinity}',
    ],
)
def test_load_config_invalid(tmp_path, content):
    path = tmp_path / "config.json"
    path.write_text(content)
    with pytest.raises(ConfigError):
        load_config(str(path))


def test_load_config_missing_file(tmp_path):
    with pytest.raises(ConfigError):
        load_config(str(tmp_path / "nope.json"))


def test_setup_logging_default_is_info():
    with patch("koohii_scraper.config.logging.basicConfig") as mock_config:
        assert setup_logging(False) is None
    assert mock_config.call_args.kwargs["level"] == logging.INFO


def test_setup_logging_debug_writes_tmp_file():
    with patch("koohii_scraper.config.logging.basicConfig") as mock_config, patch(
        "koohii_scraper.config.logging.FileHandler"
    ) as mock_handler:
        path = setup_logging(True)
    assert path.startswith("/tmp/koohii_debug_")
    mock_handler.assert_called_once_with(path, mode="a")
    assert mock_config.call_args.kwargs["level"] == logging.DEBUG


def test_load_config_skip_failures_false(tmp_path):
    path = tmp_path / "config.json"
    path.write_text('{"skip_failures": false, "http_timeout": 0.5}')
    config = load_config(str(path))
    assert config["skip_failures"] is False
    assert config["http_timeout"] == 0.5
