"""Winner selection strategies.

Two strategies share the ``select(candidates)`` interface. Chat commands draw
with :class:`ShuffleSelector`, the unattended daily job draws with :class:`UniformSelector`.
"""

from __future__ import annotations

import random
import secrets
from typing import Callable, Optional, Sequence, TypeVar

from core import get_logger, LotteryDefaults
from core.exceptions import EmptyCandidateSetError

logger = get_logger(__name__)

T = TypeVar("T")


class RandomSelector:
    """Picks one candidate out of a non-empty sequence."""

    name = "base"

    def select(self, candidates: Sequence[T]) -> T:
        if not candidates:
            raise EmptyCandidateSetError("Cannot select a winner from zero candidates")
        return self._pick(candidates)

    def _pick(self, candidates: Sequence[T]) -> T:
        raise NotImplementedError


class ShuffleSelector(RandomSelector):
    """Shuffle-then-pick selection backed by a CSPRNG.

    Every candidate gets an independent rank drawn uniformly from
    ``[0, 64 * N)``; candidates are sorted by rank (stable, so equal ranks
    keep their input order) and a uniformly random index over the sorted
    sequence decides the winner.
    """

    name = "shuffle"

    def __init__(self, randbelow: Callable[[int], int] = secrets.randbelow) -> None:
        self._randbelow = randbelow

    def shuffle(self, candidates: Sequence[T]) -> list[T]:
        upper = len(candidates) * LotteryDefaults.SHUFFLE_RANK_FACTOR
        ranked = [(self._randbelow(upper), candidate) for candidate in candidates]
        ranked.sort(key=lambda pair: pair[0])
        return [candidate for _, candidate in ranked]

    def _pick(self, candidates: Sequence[T]) -> T:
        shuffled = self.shuffle(candidates)
        index = self._randbelow(len(shuffled))
        logger.debug(f"Shuffle selector picked index {index} of {len(shuffled)}")
        return shuffled[index]


class UniformSelector(RandomSelector):
    """Plain uniform random-index choice, no shuffle."""

    name = "uniform"

    def __init__(self, rng: Optional[random.Random] = None) -> None:
        self._rng = rng or random.Random()

    def _pick(self, candidates: Sequence[T]) -> T:
        index = self._rng.randrange(len(candidates))
        logger.debug(f"Uniform selector picked index {index} of {len(candidates)}")
        return candidates[index]
