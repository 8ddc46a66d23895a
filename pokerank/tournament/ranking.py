"""Top-N ranking over a roster and its score table.

Ties keep roster order: the roster is walked in order and Python's sort is
stable, so equal win counts never swap places between calls.
"""

from __future__ import annotations

from typing import Sequence

from pokerank.roster.models import CreatureRecord
from pokerank.tournament.state import ScoreTable

TOP_N = 3


def rank_top(
    roster: Sequence[CreatureRecord],
    scores: ScoreTable,
    limit: int = TOP_N,
) -> list[CreatureRecord]:
    if limit < 0:
        raise ValueError(f"limit must be non-negative, got {limit}")
    scored = [c for c in roster if c.name in scores]
    return sorted(scored, key=lambda c: -scores.get(c.name))[:limit]


def top_three(roster: Sequence[CreatureRecord], scores: ScoreTable) -> list[CreatureRecord]:
    return rank_top(roster, scores, TOP_N)
