"""Application configuration module.

Reads settings from environment variables (optionally from a ``.env`` file)
with defaults suitable for a single small bot deployment.
"""

from __future__ import annotations

import os
import re
from dataclasses import dataclass
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dotenv import load_dotenv

from core.constants import DatabaseDefaults
from core.exceptions import ConfigurationError

load_dotenv()

_TIME_RE = re.compile(r"^([01]?\d|2[0-3]):([0-5]\d)$")


def _get_bool(name: str, default: bool = False) -> bool:
    """Get boolean from environment variable."""
    value = os.getenv(name)
    if value is None:
        return default
    return value.lower() in {"1", "true", "yes", "on"}


def _get_int(name: str, default: int) -> int:
    """Get integer from environment variable with fallback."""
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _get_optional_int(name: str) -> Optional[int]:
    value = os.getenv(name, "").strip()
    if not value:
        return None
    try:
        return int(value)
    except ValueError as exc:
        raise ConfigurationError(f"{name} must be an integer, got {value!r}") from exc


def _get_str(name: str, default: str = "") -> str:
    """Get string from environment variable."""
    return os.getenv(name, default)


def _parse_int_list(value: str) -> tuple[int, ...]:
    """Parse comma-separated integers."""
    if not value:
        return ()
    try:
        return tuple(int(id_str) for id_str in value.split(",") if id_str.strip())
    except ValueError as exc:
        raise ConfigurationError(f"Invalid integer list: {value!r}") from exc


def parse_draw_time(value: str) -> tuple[int, int]:
    """Parse an ``HH:MM`` wall clock time into ``(hour, minute)``."""
    match = _TIME_RE.match(value.strip())
    if not match:
        raise ConfigurationError(f"SCHEDULED_DRAW_TIME must look like HH:MM, got {value!r}")
    return int(match.group(1)), int(match.group(2))


@dataclass(frozen=True)
class Config:
    bot_token: str
    webhook_url: str
    environment: str
    debug: bool
    log_level: str
    log_folder: str
    web_host: str
    web_port: int
    database_path: str
    db_pool_size: int
    db_busy_timeout: int
    timezone: str
    allowed_chat_ids: tuple[int, ...]
    master_scope: str
    master_chat_id: Optional[int]
    scheduled_draw_time: str
    celebration_video: str
    bot_rate_limit: int

    @property
    def use_webhook(self) -> bool:
        return bool(self.webhook_url)

    @property
    def uses_allow_list(self) -> bool:
        return bool(self.allowed_chat_ids)

    @property
    def scheduler_enabled(self) -> bool:
        return self.master_chat_id is not None

    @property
    def webhook_path(self) -> str:
        return f"/bot{self.bot_token}"

    @property
    def tzinfo(self) -> ZoneInfo:
        return ZoneInfo(self.timezone)

    @property
    def draw_hour_minute(self) -> tuple[int, int]:
        return parse_draw_time(self.scheduled_draw_time)


def load_config() -> Config:
    """Load application configuration from environment variables.

    Returns:
        Config: Application configuration (not yet validated)
    """
    return Config(
        bot_token=_get_str("BOT_TOKEN", "").strip(),
        webhook_url=_get_str("WEBHOOK_URL", _get_str("URL", "")).rstrip("/"),
        environment=_get_str("ENVIRONMENT", "development"),
        debug=_get_bool("DEBUG", False),
        log_level=_get_str("LOG_LEVEL", "INFO").upper(),
        log_folder=_get_str("LOG_FOLDER", "logs"),
        web_host=_get_str("WEB_HOST", "localhost"),
        web_port=_get_int("WEB_PORT", 3000),
        database_path=_get_str("DATABASE_PATH", "data/lucky_draw.sqlite"),
        db_pool_size=_get_int("DB_POOL_SIZE", DatabaseDefaults.POOL_SIZE),
        db_busy_timeout=_get_int("DB_BUSY_TIMEOUT", DatabaseDefaults.BUSY_TIMEOUT),
        timezone=_get_str("TIMEZONE", "UTC"),
        allowed_chat_ids=_parse_int_list(_get_str("ALLOWED_CHAT_IDS", "")),
        master_scope=_get_str("MASTER_SCOPE", "").strip(),
        master_chat_id=_get_optional_int("MASTER_CHAT_ID"),
        scheduled_draw_time=_get_str("SCHEDULED_DRAW_TIME", "12:00"),
        celebration_video=_get_str("CELEBRATION_VIDEO", "assets/goat.mp4"),
        bot_rate_limit=_get_int("BOT_RATE_LIMIT", 30),
    )


def validate_config(config: Config) -> Config:
    """Check required settings; raise ConfigurationError to abort startup."""
    if not config.bot_token:
        raise ConfigurationError("BOT_TOKEN is required")

    try:
        ZoneInfo(config.timezone)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise ConfigurationError(f"Unknown TIMEZONE {config.timezone!r}") from exc

    if config.uses_allow_list and not config.master_scope:
        raise ConfigurationError("MASTER_SCOPE is required when ALLOWED_CHAT_IDS is set")

    if config.scheduler_enabled:
        if not config.master_scope:
            raise ConfigurationError("MASTER_SCOPE is required when MASTER_CHAT_ID is set")
        parse_draw_time(config.scheduled_draw_time)

    if config.db_pool_size < 1:
        raise ConfigurationError("DB_POOL_SIZE must be at least 1")

    return config
