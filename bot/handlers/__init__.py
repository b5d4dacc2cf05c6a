"""Aggregate bot handlers for dispatch registration."""

from .lottery_commands import LotteryCommandsHandler, setup_lottery_handlers

__all__ = [
    "LotteryCommandsHandler",
    "setup_lottery_handlers",
]
