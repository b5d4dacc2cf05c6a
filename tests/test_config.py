"""Tests for configuration loading and validation."""

import pytest

from config import load_config, parse_draw_time, validate_config
from core.constants import DatabaseDefaults
from core.exceptions import ConfigurationError
from tests.conftest import make_config

ENV_VARS = (
    "BOT_TOKEN", "WEBHOOK_URL", "URL", "TIMEZONE", "ALLOWED_CHAT_IDS", "MASTER_SCOPE",
    "MASTER_CHAT_ID", "SCHEDULED_DRAW_TIME", "DB_POOL_SIZE", "DEBUG", "LOG_LEVEL",
)


@pytest.fixture
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def test_defaults(clean_env):
    clean_env.setenv("BOT_TOKEN", "abc")

    config = load_config()

    assert config.bot_token == "abc"
    assert config.timezone == "UTC"
    assert config.allowed_chat_ids == ()
    assert config.master_chat_id is None
    assert not config.use_webhook
    assert not config.scheduler_enabled
    assert config.webhook_path == "/botabc"


def test_env_parsing(clean_env):
    clean_env.setenv("BOT_TOKEN", "abc")
    clean_env.setenv("URL", "https://example.org/")
    clean_env.setenv("ALLOWED_CHAT_IDS", "-1, -2,")
    clean_env.setenv("MASTER_SCOPE", "goats")
    clean_env.setenv("MASTER_CHAT_ID", "-1")
    clean_env.setenv("SCHEDULED_DRAW_TIME", "09:05")
    clean_env.setenv("DEBUG", "true")
    clean_env.setenv("LOG_LEVEL", "debug")

    config = validate_config(load_config())

    assert config.webhook_url == "https://example.org"
    assert config.use_webhook
    assert config.allowed_chat_ids == (-1, -2)
    assert config.master_chat_id == -1
    assert config.draw_hour_minute == (9, 5)
    assert config.debug is True
    assert config.log_level == "DEBUG"


def test_webhook_url_takes_precedence(clean_env):
    clean_env.setenv("WEBHOOK_URL", "https://a.example")
    clean_env.setenv("URL", "https://b.example")
    assert load_config().webhook_url == "https://a.example"


def test_bad_master_chat_id(clean_env):
    clean_env.setenv("MASTER_CHAT_ID", "chat")
    with pytest.raises(ConfigurationError):
        load_config()


@pytest.mark.parametrize("value, expected", [("12:00", (12, 0)), ("7:30", (7, 30)), ("23:59", (23, 59))])
def test_parse_draw_time(value, expected):
    assert parse_draw_time(value) == expected


@pytest.mark.parametrize("value", ["24:00", "12:60", "noon", ""])
def test_parse_draw_time_rejects(value):
    with pytest.raises(ConfigurationError):
        parse_draw_time(value)


@pytest.mark.parametrize(
    "overrides",
    [
        {"bot_token": ""},
        {"timezone": "Mars/Olympus"},
        {"allowed_chat_ids": (-1,), "master_scope": ""},
        {"master_chat_id": -1, "master_scope": ""},
        {"master_chat_id": -1, "master_scope": "goats", "scheduled_draw_time": "25:00"},
        {"db_pool_size": 0},
    ],
)
def test_validation_errors(overrides):
    with pytest.raises(ConfigurationError):
        validate_config(make_config(**overrides))


def test_valid_config_is_returned():
    config = make_config(allowed_chat_ids=(-1,), master_scope="goats", master_chat_id=-1)
    assert validate_config(config) is config


def test_database_defaults(clean_env):
    clean_env.delenv("DB_BUSY_TIMEOUT", raising=False)

    config = load_config()

    assert config.db_pool_size == DatabaseDefaults.POOL_SIZE
    assert config.db_busy_timeout == DatabaseDefaults.BUSY_TIMEOUT
