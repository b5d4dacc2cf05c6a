"""Chat commands of the lottery game."""

from __future__ import annotations

from aiogram import Router, types
from aiogram.filters import Command

from bot import messages
from bot.error_handler import handle_command_errors
from core.constants import ChampionStatus, DrawStatus, RegistrationStatus
from services.delivery import DeliveryChannel
from services.lottery import LotteryService


class LotteryCommandsHandler:
    """Maps /register, /lucky (/draw), /champion, /top and /ping to the game."""

    def __init__(self, lottery: LotteryService, delivery: DeliveryChannel) -> None:
        self.lottery = lottery
        self.delivery = delivery
        self.router = Router(name="lottery_commands")
        self._register_handlers()

    def setup(self, dispatcher) -> None:
        dispatcher.include_router(self.router)

    def _register_handlers(self) -> None:
        self.router.message.register(self.register_participant, Command("register"))
        self.router.message.register(self.lucky, Command("lucky", "draw"))
        self.router.message.register(self.champion, Command("champion"))
        self.router.message.register(self.top, Command("top"))
        self.router.message.register(self.ping, Command("ping"))

    @handle_command_errors("register")
    async def register_participant(self, message: types.Message, scope: str) -> None:
        outcome = await self.lottery.register(scope, message.from_user)
        if outcome.status is RegistrationStatus.ALREADY_REGISTERED:
            text = messages.already_registered(outcome.participant)
        else:
            text = messages.registered(outcome.participant)
        await self.delivery.send_text(message.chat.id, text)

    @handle_command_errors("lucky")
    async def lucky(self, message: types.Message, scope: str) -> None:
        chat_id = message.chat.id
        outcome = await self.lottery.draw(scope)

        if outcome.status is DrawStatus.NO_PARTICIPANTS:
            await self.delivery.send_text(chat_id, messages.NO_PARTICIPANTS)
        elif outcome.status is DrawStatus.ALREADY_DRAWN:
            await self.delivery.send_text(chat_id, messages.luck_is_over(outcome.winner))
        elif outcome.celebratory:
            await self.delivery.send_celebration(chat_id, messages.lucky_winner(outcome.winner, celebratory=True))
        else:
            await self.delivery.send_text(chat_id, messages.lucky_winner(outcome.winner))

    @handle_command_errors("champion")
    async def champion(self, message: types.Message, scope: str) -> None:
        chat_id = message.chat.id
        outcome = await self.lottery.crown_champion(scope)

        if outcome.status is ChampionStatus.CROWNED:
            await self.delivery.send_text(chat_id, messages.champion_tie(outcome.leaders))
            await self.delivery.send_celebration(chat_id, messages.champion_winner(outcome.winner))
            return

        replies = {
            ChampionStatus.NOT_LAST_DAY: messages.NOT_LAST_DAY,
            ChampionStatus.NOT_DRAWN_TODAY: messages.NOT_DRAWN_TODAY,
            ChampionStatus.NO_PARTICIPANTS: messages.NO_PARTICIPANTS,
            ChampionStatus.SINGLE_LEADER: messages.SINGLE_LEADER,
        }
        if outcome.status is ChampionStatus.ALREADY_CROWNED and outcome.winner is not None:
            text = messages.already_crowned(outcome.winner)
        else:
            text = replies.get(outcome.status, messages.NOT_DRAWN_TODAY)
        await self.delivery.send_text(chat_id, text)

    @handle_command_errors("top")
    async def top(self, message: types.Message, scope: str) -> None:
        rows = await self.lottery.rank(scope)
        if not rows:
            await self.delivery.send_text(message.chat.id, messages.NO_PARTICIPANTS)
            return
        for page in messages.ranking(rows):
            await self.delivery.send_text(message.chat.id, page)

    @handle_command_errors("ping")
    async def ping(self, message: types.Message) -> None:
        await self.delivery.send_text(message.chat.id, messages.PONG)


def setup_lottery_handlers(dispatcher, lottery: LotteryService, delivery: DeliveryChannel) -> LotteryCommandsHandler:
    handler = LotteryCommandsHandler(lottery, delivery)
    handler.setup(dispatcher)
    return handler
