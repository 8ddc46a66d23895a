from __future__ import annotations

from loguru import logger

from pokerank.exceptions import InvalidChoiceError, TournamentError, ensure_category
from pokerank.roster.builder import RosterBuilder
from pokerank.roster.models import CreatureRecord
from pokerank.tournament.pairing import PairSelector, RandomPairSelector
from pokerank.tournament.ranking import TOP_N, rank_top
from pokerank.tournament.session import TournamentSession
from pokerank.tournament.state import RoundRecord, TournamentPhase, TournamentState

__all__ = ["TournamentEngine"]

Pair = tuple[CreatureRecord, CreatureRecord]


class TournamentEngine:
    """
    Pairwise-elimination loop over a category roster:
    - every resolved round credits the winner and removes the loser from the pool
    - the tournament concludes once fewer than two contenders remain
    - scores live in the caller's TournamentSession and survive resets
    """

    def __init__(
        self,
        builder: RosterBuilder,
        pair_selector: PairSelector | None = None,
        top_n: int = TOP_N,
    ):
        self.builder = builder
        self.pair_selector = pair_selector or RandomPairSelector()
        self.top_n = top_n

        logger.info(
            "[TournamentEngine] Init | pair_selector={}, top_n={}",
            type(self.pair_selector).__name__,
            self.top_n,
        )

    async def start(self, session: TournamentSession, category: str) -> TournamentState:
        """Load (or reuse) the roster and open a tournament for ``category``."""
        category = ensure_category(category)
        roster = await self.builder.build(category)

        scores = session.scores_for(category)
        scores.ensure(c.name for c in roster)

        state = TournamentState(category=category, pool=list(roster), scores=scores)
        state.bind_results(session.record_results)
        session.states[category] = state

        if not roster:
            self._conclude(state, TournamentPhase.NO_CONTEST)
            logger.warning("[TournamentEngine] No contest for '{}': empty roster", category)
            return state

        state.phase = TournamentPhase.AWAITING_PAIR
        logger.info("[TournamentEngine] Start '{}' with {} contenders", category, len(roster))
        return state

    def next_pair(self, state: TournamentState) -> Pair | None:
        """Present the next pair, or conclude and return None when fewer than two remain."""
        if state.is_finished:
            return None
        self._require_started(state)

        if state.current_pair is not None:
            return state.current_pair

        if len(state.pool) < 2:
            self._conclude(state)
            return None

        state.current_pair = self.pair_selector.select(state.pool)
        a, b = state.current_pair
        logger.debug("[TournamentEngine] '{}' pair: {} vs {}", state.category, a.name, b.name)
        return state.current_pair

    def resolve_choice(
        self,
        state: TournamentState,
        winner: CreatureRecord,
        loser: CreatureRecord,
    ) -> TournamentState:
        """Credit ``winner``, eliminate ``loser`` and advance the state."""
        if state.is_finished:
            raise InvalidChoiceError(f"tournament for '{state.category}' is already {state.phase.value}")
        self._require_started(state)
        if winner.name == loser.name:
            raise InvalidChoiceError(f"{winner.name} cannot beat itself")
        if state.index_of(winner.name) is None:
            raise InvalidChoiceError(f"{winner.name} is not in the pool")
        loser_index = state.index_of(loser.name)
        if loser_index is None:
            raise InvalidChoiceError(f"{loser.name} is not in the pool")

        total = state.scores.credit(winner.name)
        del state.pool[loser_index]
        state.rounds += 1
        state.history.append(RoundRecord(round=state.rounds, winner=winner.name, loser=loser.name))
        state.current_pair = None
        state.phase = TournamentPhase.ROUND_RESOLVED
        logger.debug(
            "[TournamentEngine] '{}' round {}: {} beats {} (wins={}, pool={})",
            state.category,
            state.rounds,
            winner.name,
            loser.name,
            total,
            len(state.pool),
        )

        if len(state.pool) < 2:
            self._conclude(state)
        else:
            state.phase = TournamentPhase.AWAITING_PAIR
        return state

    def reset(self, state: TournamentState) -> TournamentState:
        """Refill the pool from the cached roster. Scores are kept."""
        self._require_started(state)
        # None when the listing failed at start(); nothing to replay
        roster = self.builder.cached(state.category) or []

        state.pool = list(roster)
        state.current_pair = None
        state.rounds = 0
        state.history = []
        state.ranking = None
        if roster:
            state.phase = TournamentPhase.AWAITING_PAIR
        else:
            self._conclude(state, TournamentPhase.NO_CONTEST)
        logger.info("[TournamentEngine] Reset '{}' ({} contenders)", state.category, len(roster))
        return state

    def top_three(self, session: TournamentSession, category: str) -> list[CreatureRecord]:
        """Current ranking for ``category`` from the cached roster and the session's scores."""
        category = ensure_category(category)
        roster = self.builder.cached(category) or []
        if not session.has_scores(category):
            return []
        return rank_top(roster, session.scores_for(category), self.top_n)

    # ------------------------------------------------------------------

    def _conclude(
        self,
        state: TournamentState,
        phase: TournamentPhase = TournamentPhase.CONCLUDED,
    ) -> None:
        roster = self.builder.cached(state.category) or []
        state.ranking = rank_top(roster, state.scores, self.top_n)
        state.current_pair = None
        state.phase = phase
        state.publish_results()
        logger.info(
            "[TournamentEngine] '{}' {} after {} rounds",
            state.category,
            phase.value,
            state.rounds,
        )

    def _require_started(self, state: TournamentState) -> None:
        if state.phase == TournamentPhase.UNINITIALIZED:
            raise TournamentError(f"tournament for '{state.category}' has not been started")
