from __future__ import annotations

from enum import Enum
from typing import Callable, Iterable

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr

from pokerank.roster.models import CreatureRecord


class TournamentPhase(str, Enum):
    """Lifecycle phase of one category's tournament."""

    # Created, roster not yet loaded
    UNINITIALIZED = "uninitialized"

    # Pool has at least two contenders; a pair is (or can be) presented
    AWAITING_PAIR = "awaiting_pair"

    # A choice was applied; immediately re-evaluated into AWAITING_PAIR or CONCLUDED
    ROUND_RESOLVED = "round_resolved"

    # Fewer than two contenders remain; ranking available
    CONCLUDED = "concluded"

    # Roster was empty; nothing to play
    NO_CONTEST = "no_contest"


TERMINAL_PHASES = frozenset({TournamentPhase.CONCLUDED, TournamentPhase.NO_CONTEST})


class ScoreTable:
    """Cumulative win counts for one category. Entries are only ever added or incremented."""

    def __init__(self, names: Iterable[str] = ()):
        self._wins: dict[str, int] = {}
        self.ensure(names)

    def ensure(self, names: Iterable[str]) -> None:
        """Add missing names at zero; existing counts are left alone."""
        for name in names:
            self._wins.setdefault(name, 0)

    def credit(self, name: str) -> int:
        """Add one win to ``name`` and return its new total."""
        self._wins[name] = self._wins.get(name, 0) + 1
        return self._wins[name]

    def get(self, name: str) -> int:
        return self._wins.get(name, 0)

    def __contains__(self, name: str) -> bool:
        return name in self._wins

    def __len__(self) -> int:
        return len(self._wins)

    def snapshot(self) -> dict[str, int]:
        return dict(self._wins)

    def __repr__(self) -> str:
        return f"ScoreTable({self._wins!r})"


class RoundRecord(BaseModel):
    """One resolved choice."""

    round: int = Field(..., ge=1)
    winner: str
    loser: str

    model_config = ConfigDict(frozen=True)


class TournamentState(BaseModel):
    """Mutable per-category tournament state."""

    category: str = Field(..., min_length=1)
    phase: TournamentPhase = Field(default=TournamentPhase.UNINITIALIZED)
    pool: list[CreatureRecord] = Field(
        default_factory=list, description="Remaining contenders; shrinks by one per round"
    )
    scores: ScoreTable = Field(default_factory=ScoreTable)
    current_pair: tuple[CreatureRecord, CreatureRecord] | None = None
    rounds: int = Field(default=0, ge=0, description="Rounds resolved since start/reset")
    history: list[RoundRecord] = Field(default_factory=list)
    ranking: list[CreatureRecord] | None = Field(
        default=None, description="Top entries once the tournament concludes"
    )

    _results_sink: Callable[[str, list[CreatureRecord]], None] | None = PrivateAttr(
        default=None
    )

    model_config = ConfigDict(arbitrary_types_allowed=True)

    @property
    def is_finished(self) -> bool:
        return self.phase in TERMINAL_PHASES

    def index_of(self, name: str) -> int | None:
        for i, contender in enumerate(self.pool):
            if contender.name == name:
                return i
        return None

    def bind_results(self, sink: Callable[[str, list[CreatureRecord]], None]) -> None:
        """Register where the ranking is published when the tournament ends."""
        self._results_sink = sink

    def publish_results(self) -> None:
        if self._results_sink is not None and self.ranking is not None:
            self._results_sink(self.category, self.ranking)
