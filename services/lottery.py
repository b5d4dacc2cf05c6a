"""Lottery game rules: registration, daily draw, monthly champion, ranking."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, tzinfo
from typing import Callable, List, Optional, Sequence, Tuple

from core import get_logger
from core.constants import ChampionStatus, DrawStatus, RegistrationStatus, ResultKind
from core.exceptions import DuplicateRecordError
from database.ledger import open_ledger
from database.models import DrawResult, Participant
from database.repositories import ParticipantRepository, ResultRepository
from services.selection import RandomSelector, ShuffleSelector
from utils.dates import date_key, is_last_day_of_month, now_in
from utils.performance import monitor

logger = get_logger(__name__)


@dataclass(frozen=True)
class RegistrationOutcome:
    status: RegistrationStatus
    participant: Participant


@dataclass(frozen=True)
class DrawOutcome:
    status: DrawStatus
    winner: Optional[Participant] = None
    celebratory: bool = False


@dataclass(frozen=True)
class ChampionOutcome:
    status: ChampionStatus
    leaders: Tuple[Participant, ...] = field(default_factory=tuple)
    winner: Optional[Participant] = None


def display_name(user) -> str:
    """Preferred display handle of a Telegram user: username, else first name."""
    return getattr(user, "username", None) or getattr(user, "first_name", None) or str(user.id)


def top_scorers(participants: Sequence[Participant]) -> List[Participant]:
    """Participants sharing the highest points total, in input order."""
    if not participants:
        return []
    highest = max(p.points for p in participants)
    return [p for p in participants if p.points == highest]


class LotteryService:
    """Implements the game on top of the participant and result ledgers.

    Args:
        tz: Time zone that defines the calendar day of a draw
        selector: Strategy used by the chat commands
        clock: Returns the current time; defaults to ``datetime.now(tz)``
    """

    def __init__(
        self,
        tz: tzinfo,
        selector: Optional[RandomSelector] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        self.tz = tz
        self.selector = selector or ShuffleSelector()
        self._clock = clock or (lambda: now_in(tz))

    def today(self) -> date:
        return self._clock().astimezone(self.tz).date()

    async def register(self, scope: str, user) -> RegistrationOutcome:
        participant, created = await ParticipantRepository.register(scope, user.id, display_name(user))
        if not created:
            return RegistrationOutcome(RegistrationStatus.ALREADY_REGISTERED, participant)
        logger.info(f"Registered {participant.name} ({participant.id}) in scope {scope}")
        return RegistrationOutcome(RegistrationStatus.REGISTERED, participant)

    async def draw(self, scope: str, selector: Optional[RandomSelector] = None) -> DrawOutcome:
        """Run today's draw for ``scope`` unless it already happened."""
        selector = selector or self.selector
        today = date_key(self.today())

        try:
            async with open_ledger(scope) as ledger:
                existing = await ledger.find_result(today, ResultKind.DAILY)
                if existing is not None:
                    outcome = DrawOutcome(DrawStatus.ALREADY_DRAWN, existing.winner)
                else:
                    candidates = await ledger.participants()
                    if not candidates:
                        outcome = DrawOutcome(DrawStatus.NO_PARTICIPANTS)
                    else:
                        picked = selector.select(candidates)
                        winner = await ledger.award_point(picked)
                        await ledger.record(DrawResult(scope=scope, date=today, winner=picked))
                        highest = await ledger.max_points()
                        outcome = DrawOutcome(DrawStatus.DRAWN, winner, celebratory=winner.points >= highest)
        except DuplicateRecordError:
            existing = await ResultRepository.get(scope, today, ResultKind.DAILY)
            if existing is None:
                raise
            logger.warning(f"Concurrent draw detected for {scope} on {today}")
            outcome = DrawOutcome(DrawStatus.ALREADY_DRAWN, existing.winner)

        monitor.record_draw(ResultKind.DAILY.value, outcome.status.value)
        if outcome.status is DrawStatus.DRAWN:
            logger.info(
                f"Daily draw in {scope} on {today} ({selector.name}): "
                f"{outcome.winner.name} now has {outcome.winner.points} points"
            )
        return outcome

    async def crown_champion(self, scope: str) -> ChampionOutcome:
        """Resolve a tie for the top spot on the last day of the month."""
        today_date = self.today()
        if not is_last_day_of_month(today_date):
            return ChampionOutcome(ChampionStatus.NOT_LAST_DAY)
        today = date_key(today_date)

        try:
            async with open_ledger(scope) as ledger:
                if await ledger.find_result(today, ResultKind.DAILY) is None:
                    return ChampionOutcome(ChampionStatus.NOT_DRAWN_TODAY)

                crowned = await ledger.find_result(today, ResultKind.CHAMPION)
                if crowned is not None:
                    return ChampionOutcome(ChampionStatus.ALREADY_CROWNED, winner=crowned.winner)

                participants = await ledger.participants()
                if not participants:
                    return ChampionOutcome(ChampionStatus.NO_PARTICIPANTS)

                leaders = tuple(top_scorers(participants))
                if len(leaders) <= 1:
                    return ChampionOutcome(ChampionStatus.SINGLE_LEADER, leaders=leaders)

                picked = self.selector.select(leaders)
                winner = await ledger.award_point(picked)
                await ledger.record(
                    DrawResult(scope=scope, date=today, winner=picked, kind=ResultKind.CHAMPION)
                )
        except DuplicateRecordError:
            crowned = await ResultRepository.get(scope, today, ResultKind.CHAMPION)
            if crowned is None:
                raise
            return ChampionOutcome(ChampionStatus.ALREADY_CROWNED, winner=crowned.winner)

        monitor.record_draw(ResultKind.CHAMPION.value, ChampionStatus.CROWNED.value)
        logger.info(f"Champion of the month in {scope}: {winner.name} out of {len(leaders)} leaders")
        return ChampionOutcome(ChampionStatus.CROWNED, leaders=leaders, winner=winner)

    async def rank(self, scope: str) -> List[Tuple[int, Participant]]:
        """Participants by points descending with 1-based positions."""
        participants = await ParticipantRepository.list_ranked(scope)
        return list(enumerate(participants, start=1))
