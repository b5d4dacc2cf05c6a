"""Telegram bot package."""

from .lottery_bot import LotteryBot

__all__ = ["LotteryBot"]
