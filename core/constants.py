"""Application-wide constants and configuration values."""

from __future__ import annotations

from enum import Enum


class TelegramLimits:
    """Telegram API limits."""
    MESSAGE_MAX_LENGTH = 4096


class DatabaseDefaults:
    """Default database configuration."""
    POOL_SIZE = 5
    BUSY_TIMEOUT = 5000  # milliseconds


class LotteryDefaults:
    """Lottery configuration."""
    SHUFFLE_RANK_FACTOR = 64  # ranks are drawn from [0, 64 * N)
    POINTS_PER_WIN = 1


class ResultKind(str, Enum):
    """Kind of a persisted draw result."""
    DAILY = "daily"
    CHAMPION = "champion"


class DrawStatus(str, Enum):
    """Outcome of a daily draw request."""
    DRAWN = "drawn"
    ALREADY_DRAWN = "already_drawn"
    NO_PARTICIPANTS = "no_participants"


class RegistrationStatus(str, Enum):
    """Outcome of a registration request."""
    REGISTERED = "registered"
    ALREADY_REGISTERED = "already_registered"


class ChampionStatus(str, Enum):
    """Outcome of a month-end champion request."""
    CROWNED = "crowned"
    NOT_LAST_DAY = "not_last_day"
    NOT_DRAWN_TODAY = "not_drawn_today"
    ALREADY_CROWNED = "already_crowned"
    NO_PARTICIPANTS = "no_participants"
    SINGLE_LEADER = "single_leader"


BOT_COMMANDS: tuple[tuple[str, str], ...] = (
    ("register", "Register to the game"),
    ("lucky", "Try your luck"),
    ("champion", "Find out who is the GOAT of the month"),
    ("top", "Get the top participants"),
    ("ping", "Ping the bot"),
)
