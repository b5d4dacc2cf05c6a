"""Core application components."""

from core.logger import setup_logger, get_logger
from core.constants import (
    TelegramLimits,
    DatabaseDefaults,
    LotteryDefaults,
    ResultKind,
    DrawStatus,
    RegistrationStatus,
    ChampionStatus,
    BOT_COMMANDS,
)
from core.exceptions import (
    ApplicationError,
    ConfigurationError,
    DatabaseError,
    StoreUnavailableError,
    DuplicateRecordError,
    LotteryError,
    EmptyCandidateSetError,
)

__all__ = [
    # Logging
    'setup_logger',
    'get_logger',
    # Constants
    'TelegramLimits',
    'DatabaseDefaults',
    'LotteryDefaults',
    'ResultKind',
    'DrawStatus',
    'RegistrationStatus',
    'ChampionStatus',
    'BOT_COMMANDS',
    # Exceptions
    'ApplicationError',
    'ConfigurationError',
    'DatabaseError',
    'StoreUnavailableError',
    'DuplicateRecordError',
    'LotteryError',
    'EmptyCandidateSetError',
]
