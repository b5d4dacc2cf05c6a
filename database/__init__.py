"""Database package public API."""

from .connection import SQLitePool, close_db_pool, get_db_pool, init_db_pool
from .ledger import DrawLedger, open_ledger
from .migrations import run_migrations
from .models import DrawResult, Participant
from .repositories import ParticipantRepository, ResultRepository

__all__ = [
    "SQLitePool",
    "close_db_pool",
    "get_db_pool",
    "init_db_pool",
    "run_migrations",
    "DrawLedger",
    "open_ledger",
    "DrawResult",
    "Participant",
    "ParticipantRepository",
    "ResultRepository",
]
