"""Unattended daily draw for the master scope."""

from __future__ import annotations

import asyncio
from datetime import datetime, tzinfo
from typing import Callable, Optional, Union

from bot import messages
from core import get_logger
from core.constants import DrawStatus
from services.delivery import DeliveryChannel
from services.lottery import DrawOutcome, LotteryService
from services.selection import RandomSelector, UniformSelector
from utils.dates import next_run_at, seconds_until

logger = get_logger(__name__)


class ScheduledDrawService:
    """Runs the daily draw at a fixed local time and posts the result.

    The job is not triggered by a chat message, so there is no sender
    validation; it always targets ``scope`` and reports to ``chat_id``.
    Draws use the plain uniform selector rather than the shuffle used by
    chat commands.
    """

    def __init__(
        self,
        lottery: LotteryService,
        delivery: DeliveryChannel,
        scope: str,
        chat_id: Union[int, str],
        hour: int,
        minute: int,
        tz: tzinfo,
        selector: Optional[RandomSelector] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        self.lottery = lottery
        self.delivery = delivery
        self.scope = scope
        self.chat_id = chat_id
        self.hour = hour
        self.minute = minute
        self.tz = tz
        self.selector = selector or UniformSelector()
        self._clock = clock or (lambda: datetime.now(tz))
        self.running = False
        self.task: Optional[asyncio.Task] = None

    def next_run(self) -> datetime:
        return next_run_at(self.hour, self.minute, self.tz, self._clock())

    async def run_once(self) -> DrawOutcome:
        """Draw for the master scope and deliver the outcome."""
        outcome = await self.lottery.draw(self.scope, selector=self.selector)

        if outcome.status is DrawStatus.DRAWN:
            text = messages.lucky_winner(outcome.winner, celebratory=outcome.celebratory)
            if outcome.celebratory:
                await self.delivery.send_celebration(self.chat_id, text)
            else:
                await self.delivery.send_text(self.chat_id, text)
        elif outcome.status is DrawStatus.ALREADY_DRAWN:
            logger.info(f"Scheduled draw skipped: {self.scope} already has a winner today")
        else:
            logger.warning(f"Scheduled draw skipped: no participants in {self.scope}")
        return outcome

    async def draw_loop(self) -> None:
        logger.info(
            f"Scheduled draw loop started ({self.hour:02d}:{self.minute:02d}, next at {self.next_run().isoformat()})"
        )
        while self.running:
            try:
                await asyncio.sleep(seconds_until(self.hour, self.minute, self.tz, self._clock()))
                if self.running:
                    await self.run_once()
            except asyncio.CancelledError:
                logger.info("Scheduled draw loop cancelled")
                raise
            except Exception as e:
                # A failed day is reported, never retried
                logger.error(f"Scheduled draw failed: {e}", exc_info=True)
                await asyncio.sleep(1)

    async def start(self) -> None:
        if self.running:
            logger.warning("Scheduled draw service is already running")
            return
        self.running = True
        self.task = asyncio.create_task(self.draw_loop())

    async def stop(self) -> None:
        if not self.running:
            return
        self.running = False
        if self.task:
            self.task.cancel()
            try:
                await self.task
            except asyncio.CancelledError:
                pass
            self.task = None
        logger.info("Scheduled draw service stopped")
