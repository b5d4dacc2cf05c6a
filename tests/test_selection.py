"""Unit tests for the winner selection strategies."""

from collections import Counter

import pytest

from core.exceptions import EmptyCandidateSetError
from services.selection import ShuffleSelector, UniformSelector


class RecordingRandbelow:
    """randbelow stand-in returning a fixed value and recording bounds."""

    def __init__(self, value=0):
        self.value = value
        self.bounds = []

    def __call__(self, upper):
        self.bounds.append(upper)
        return min(self.value, upper - 1)


class FixedRandom:
    def __init__(self, index):
        self.index = index
        self.calls = []

    def randrange(self, stop):
        self.calls.append(stop)
        return self.index


@pytest.mark.parametrize("selector", [ShuffleSelector(), UniformSelector()])
def test_empty_candidates_raise(selector):
    with pytest.raises(EmptyCandidateSetError):
        selector.select([])


@pytest.mark.parametrize("selector", [ShuffleSelector(), UniformSelector()])
def test_selection_returns_a_member(selector):
    candidates = ["alice", "bob", "carol"]
    for _ in range(200):
        assert selector.select(candidates) in candidates


def test_single_candidate_always_wins():
    assert ShuffleSelector().select(["solo"]) == "solo"
    assert UniformSelector().select(["solo"]) == "solo"


def test_shuffle_ranks_are_drawn_from_scaled_range():
    randbelow = RecordingRandbelow()
    ShuffleSelector(randbelow=randbelow).select(["a", "b", "c", "d"])

    # One rank per candidate over [0, 64 * N), then one index over [0, N)
    assert randbelow.bounds == [256, 256, 256, 256, 4]


def test_shuffle_keeps_input_order_on_equal_ranks():
    selector = ShuffleSelector(randbelow=RecordingRandbelow(value=0))
    assert selector.shuffle(["a", "b", "c"]) == ["a", "b", "c"]
    assert selector.select(["a", "b", "c"]) == "a"


def test_shuffle_sorts_by_rank():
    ranks = iter([30, 10, 20, 1])
    selector = ShuffleSelector(randbelow=lambda upper: next(ranks))
    # ranks 30, 10, 20 -> b, c, a; final index 1 -> c
    assert selector.select(["a", "b", "c"]) == "c"


def test_uniform_selector_picks_index_without_shuffle():
    rng = FixedRandom(index=2)
    selector = UniformSelector(rng=rng)
    assert selector.select(["a", "b", "c", "d"]) == "c"
    assert rng.calls == [4]


@pytest.mark.parametrize("selector", [ShuffleSelector(), UniformSelector()])
def test_distribution_is_close_to_uniform(selector):
    candidates = ["a", "b", "c", "d"]
    trials = 8000
    counts = Counter(selector.select(candidates) for _ in range(trials))

    expected = trials / len(candidates)
    assert set(counts) == set(candidates)
    for candidate in candidates:
        assert abs(counts[candidate] - expected) < expected * 0.15


def test_strategies_are_named():
    assert ShuffleSelector.name == "shuffle"
    assert UniformSelector.name == "uniform"
