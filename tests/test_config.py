"""Test configuration."""

import json
from datetime import timedelta

import pytest

from alarmbot.config import Settings, SourceConfig, load_sources
from alarmbot.errors import ConfigError


def test_config_loading():
    # Test defaults
    settings = Settings()
    assert settings.server.port == 8092
    assert settings.poll.batch_size == 100
    assert settings.poll.updates_idle_interval == 1
    assert settings.poll.scrape_idle_interval == 10
    assert settings.filters.seen_expiry == timedelta(hours=24)
    assert settings.filters.max_length == 150


def test_env_override(monkeypatch):
    monkeypatch.setenv("ALARMBOT_SCRAPE_IDLE_INTERVAL", "2.5")
    monkeypatch.setenv("ALARMBOT_SEEN_EXPIRY", "PT1H")

    from alarmbot.config import FilterSettings, PollSettings

    assert PollSettings().scrape_idle_interval == 2.5
    assert FilterSettings().seen_expiry == timedelta(hours=1)


def test_load_sources(tmp_path):
    path = tmp_path / "channels.json"
    path.write_text(json.dumps([
        {
            "name": "alerts",
            "url": "https://t.me/s/alerts",
            "search_regexp": "ALERT",
            "phrases_to_remove": ["[AD] "],
            "to_channel": -100123,
        },
        {
            "name": "news",
            "url": "https://t.me/s/news",
            "search_regexp": "(?i)breaking",
            "to_channel": "@mirror",
            "max_length": 300,
        },
    ]))

    sources = load_sources(path)

    assert [s.name for s in sources] == ["alerts", "news"]
    assert sources[0].to_channel == -100123
    assert sources[0].phrases_to_remove == ["[AD] "]
    assert sources[1].phrases_to_remove == []
    assert sources[1].to_channel == "@mirror"
    assert sources[1].max_length == 300


def test_load_sources_missing_file(tmp_path):
    with pytest.raises(ConfigError) as exc:
        load_sources(tmp_path / "nope.json")
    assert "can't read sources" in str(exc.value)
    assert isinstance(exc.value.__cause__, OSError)


def test_load_sources_not_json(tmp_path):
    path = tmp_path / "channels.json"
    path.write_text("{not json")
    with pytest.raises(ConfigError):
        load_sources(path)


def test_invalid_regexp_rejected():
    with pytest.raises(ValueError):
        SourceConfig(name="x", url="https://t.me/s/x", search_regexp="(", to_channel=1)


def test_load_sources_invalid_utf8(tmp_path):
    path = tmp_path / "channels.json"
    path.write_bytes(b'[{"name": "\xff\xfe"}]')

    with pytest.raises(ConfigError) as exc:
        load_sources(path)

    assert isinstance(exc.value.__cause__, UnicodeDecodeError)
