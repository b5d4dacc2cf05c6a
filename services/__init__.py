"""Services package."""

from .selection import RandomSelector, ShuffleSelector, UniformSelector
from .lottery import (
    ChampionOutcome,
    DrawOutcome,
    LotteryService,
    RegistrationOutcome,
    display_name,
    top_scorers,
)
from .delivery import DeliveryChannel
from .async_runner import set_main_loop, submit_coroutine

__all__ = [
    "RandomSelector",
    "ShuffleSelector",
    "UniformSelector",
    "LotteryService",
    "RegistrationOutcome",
    "DrawOutcome",
    "ChampionOutcome",
    "display_name",
    "top_scorers",
    "DeliveryChannel",
    "set_main_loop",
    "submit_coroutine",
]
