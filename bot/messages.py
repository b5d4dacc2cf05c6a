"""User-facing texts (HTML parse mode)."""

from __future__ import annotations

from typing import Iterable, List, Sequence, Tuple

from aiogram.utils.markdown import hbold, hlink
from aiogram.utils.text_decorations import html_decoration

from core.constants import TelegramLimits
from database.models import Participant

NO_PARTICIPANTS = "No participants yet!"
PONG = "Pong!"
GENERIC_FAILURE = "Something went wrong..."
NOT_LAST_DAY = "Today is not the last day of the month!"
NOT_DRAWN_TODAY = "First you need to find out who is the luckiest today!"
SINGLE_LEADER = "There is only one participant with the highest points!"


def mention(participant: Participant, upper: bool = False) -> str:
    """Clickable mention of a participant."""
    name = participant.name.upper() if upper else participant.name
    return hlink(name, f"tg://user?id={participant.id}")


def already_registered(participant: Participant) -> str:
    return f"{mention(participant)} is already registered!"


def registered(participant: Participant) -> str:
    return f"{mention(participant)} successfully registered!"


def luck_is_over(winner: Participant) -> str:
    return f"The luck is over! {mention(winner)} got it all!"


def lucky_winner(winner: Participant, celebratory: bool = False) -> str:
    text = f"Luck is on {mention(winner)}'s side today!"
    if celebratory:
        text += " 🐐🐐🐐"
    return text


def champion_tie(leaders: Iterable[Participant]) -> str:
    names = " or ".join(mention(p) for p in leaders)
    return f"Who is the GOAT of the month {names}? 🏆🍾🥇🐐"


def champion_winner(winner: Participant) -> str:
    return f"{mention(winner, upper=True)} IS THE GOAT OF THE MONTH! 🏆🍾🥇🐐"


def already_crowned(winner: Participant) -> str:
    return f"{mention(winner)} is already the GOAT of the month!"


def _utf16_length(text: str) -> int:
    return len(text.encode("utf-16-le")) // 2


def ranking(
    rows: Sequence[Tuple[int, Participant]],
    limit: int = TelegramLimits.MESSAGE_MAX_LENGTH,
) -> List[str]:
    """Ranking split into messages at line boundaries.

    Each page keeps its HTML source within ``limit`` UTF-16 code units, the
    unit Telegram counts in; the parsed text is never longer than the source.
    """
    pages: List[str] = []
    current = hbold("Ranking:")
    for position, participant in rows:
        line = f"{position}. {mention(participant)} - {participant.points} points"
        if _utf16_length(current) + 1 + _utf16_length(line) > limit:
            pages.append(current)
            current = line
        else:
            current = f"{current}\n{line}"
    pages.append(current)
    return pages


def failure_details(error: BaseException) -> str:
    """Raw error text shown after the generic failure message."""
    return html_decoration.quote(str(error) or error.__class__.__name__)
