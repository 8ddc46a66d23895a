from __future__ import annotations

from loguru import logger

from pokerank.roster.models import CreatureRecord
from pokerank.tournament.state import ScoreTable, TournamentState


class TournamentSession:
    """
    Caller-owned tournament context: score tables, last results and last
    started state per category. Independent sessions can share one
    RosterBuilder without seeing each other's scores.
    """

    def __init__(self, name: str = "default") -> None:
        self.name = name
        self._scores: dict[str, ScoreTable] = {}
        self.results: dict[str, list[CreatureRecord]] = {}
        self.states: dict[str, TournamentState] = {}

    def scores_for(self, category: str) -> ScoreTable:
        table = self._scores.get(category)
        if table is None:
            table = self._scores[category] = ScoreTable()
        return table

    def has_scores(self, category: str) -> bool:
        return category in self._scores

    def record_results(self, category: str, ranking: list[CreatureRecord]) -> None:
        self.results[category] = list(ranking)
        logger.info(
            "[TournamentSession:{}] Results for '{}': {}",
            self.name,
            category,
            ", ".join(c.name for c in ranking) or "<none>",
        )
