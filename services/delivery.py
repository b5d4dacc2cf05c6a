"""Outbound messages to Telegram chats."""

from __future__ import annotations

from pathlib import Path
from typing import Union

from aiogram import Bot
from aiogram.enums import ParseMode
from aiogram.types import FSInputFile
from asyncio_throttle import Throttler

from core import get_logger

logger = get_logger(__name__)

ChatId = Union[int, str]


class DeliveryChannel:
    """Sends HTML-formatted replies or the celebration video.

    Sends go through a throttler so bursts stay under the Bot API limit.
    """

    def __init__(self, bot: Bot, celebration_video: str, rate_limit: int = 30) -> None:
        self.bot = bot
        self.celebration_video = Path(celebration_video)
        self.throttler = Throttler(rate_limit=rate_limit, period=1.0)

    async def send_text(self, chat_id: ChatId, text: str) -> None:
        async with self.throttler:
            await self.bot.send_message(
                chat_id,
                text,
                parse_mode=ParseMode.HTML,
            )

    async def send_celebration(self, chat_id: ChatId, caption: str) -> None:
        """Send the celebration video; fall back to text if the file is missing."""
        if not self.celebration_video.is_file():
            logger.warning(f"Celebration video not found at {self.celebration_video}, sending text")
            await self.send_text(chat_id, caption)
            return

        async with self.throttler:
            await self.bot.send_video(
                chat_id,
                video=FSInputFile(self.celebration_video),
                caption=caption,
                parse_mode=ParseMode.HTML,
            )
