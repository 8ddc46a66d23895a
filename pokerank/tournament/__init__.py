from pokerank.tournament.engine import TournamentEngine
from pokerank.tournament.pairing import PairSelector, RandomPairSelector
from pokerank.tournament.ranking import rank_top, top_three
from pokerank.tournament.session import TournamentSession
from pokerank.tournament.state import (
    RoundRecord,
    ScoreTable,
    TournamentPhase,
    TournamentState,
)

__all__ = [
    "TournamentEngine",
    "PairSelector",
    "RandomPairSelector",
    "rank_top",
    "top_three",
    "TournamentSession",
    "RoundRecord",
    "ScoreTable",
    "TournamentPhase",
    "TournamentState",
]
