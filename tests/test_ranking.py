"""
Tests for Top-N ranking and the score table.
"""

import pytest

from pokerank.tournament.pairing import RandomPairSelector
from pokerank.tournament.ranking import rank_top, top_three
from pokerank.tournament.state import ScoreTable


@pytest.fixture
def roster(make_record):
    return [make_record(n) for n in ["alpha", "beta", "gamma", "delta", "epsilon"]]


def names(creatures):
    return [c.name for c in creatures]


def test_sorted_by_wins(roster):
    scores = ScoreTable(names(roster))
    for name, wins in {"gamma": 3, "beta": 1, "epsilon": 2}.items():
        for _ in range(wins):
            scores.credit(name)

    assert names(top_three(roster, scores)) == ["gamma", "epsilon", "beta"]


def test_ties_keep_roster_order(roster):
    scores = ScoreTable(names(roster))
    scores.credit("delta")
    scores.credit("beta")

    assert names(top_three(roster, scores)) == ["beta", "delta", "alpha"]


def test_repeated_calls_are_identical(roster):
    scores = ScoreTable(names(roster))
    scores.credit("epsilon")
    results = {tuple(names(top_three(roster, scores))) for _ in range(20)}
    assert results == {("epsilon", "alpha", "beta")}


def test_only_roster_members_are_ranked(roster):
    scores = ScoreTable(names(roster))
    for _ in range(5):
        scores.credit("outsider")
    assert "outsider" not in names(top_three(roster, scores))


def test_members_without_scores_are_skipped(roster):
    scores = ScoreTable(["beta"])
    assert names(rank_top(roster, scores)) == ["beta"]


def test_short_roster(make_record):
    roster = [make_record("solo"), make_record("duo")]
    scores = ScoreTable(["solo", "duo"])
    assert names(top_three(roster, scores)) == ["solo", "duo"]
    assert top_three([], ScoreTable()) == []


def test_custom_limit(roster):
    scores = ScoreTable(names(roster))
    assert len(rank_top(roster, scores, limit=5)) == 5
    assert rank_top(roster, scores, limit=0) == []
    with pytest.raises(ValueError):
        rank_top(roster, scores, limit=-1)


class TestScoreTable:
    def test_ensure_never_resets(self):
        scores = ScoreTable(["a"])
        scores.credit("a")
        scores.ensure(["a", "b"])
        assert scores.snapshot() == {"a": 1, "b": 0}

    def test_credit_returns_total(self):
        scores = ScoreTable()
        assert scores.credit("a") == 1
        assert scores.credit("a") == 2
        assert scores.get("missing") == 0
        assert len(scores) == 1

    def test_snapshot_is_a_copy(self):
        scores = ScoreTable(["a"])
        scores.snapshot()["a"] = 99
        assert scores.get("a") == 0


class TestRandomPairSelector:
    def test_draws_distinct_members(self, roster):
        selector = RandomPairSelector(seed=11)
        for _ in range(50):
            a, b = selector.select(roster)
            assert a.name != b.name
            assert a in roster and b in roster

    def test_seeded_draws_repeat(self, roster):
        first = [names(RandomPairSelector(seed=5).select(roster)) for _ in range(3)]
        second = [names(RandomPairSelector(seed=5).select(roster)) for _ in range(3)]
        assert first == second

    def test_every_pair_is_reachable(self, roster):
        selector = RandomPairSelector(seed=0)
        seen = {frozenset(names(selector.select(roster))) for _ in range(500)}
        assert len(seen) == 10

    def test_needs_two(self, make_record):
        with pytest.raises(ValueError):
            RandomPairSelector().select([make_record("solo")])
