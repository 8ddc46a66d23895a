from abc import ABC, abstractmethod
import random
from typing import Sequence

from pokerank.roster.models import CreatureRecord


class PairSelector(ABC):
    """Abstract base class for drawing the next pair of contenders."""

    @abstractmethod
    def select(
        self, pool: Sequence[CreatureRecord]
    ) -> tuple[CreatureRecord, CreatureRecord]:
        """Draw two distinct contenders from ``pool`` (which has at least two)."""


class RandomPairSelector(PairSelector):
    """Uniformly samples two distinct pool positions without replacement."""

    def __init__(self, seed: int | None = None, rng: random.Random | None = None):
        self.rng = rng or random.Random(seed)

    def select(
        self, pool: Sequence[CreatureRecord]
    ) -> tuple[CreatureRecord, CreatureRecord]:
        if len(pool) < 2:
            raise ValueError(f"need at least 2 contenders, got {len(pool)}")
        first, second = self.rng.sample(range(len(pool)), 2)
        return pool[first], pool[second]
