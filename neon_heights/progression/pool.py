"""
Weighted reward draws with monotonic progression.

Once a reward of tier T in some category has been granted, every entry of
that category at tier T or below is zeroed for the rest of the run, so the
player is never offered a repeat or a downgrade.
"""

import logging
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

import numpy as np

from ..errors import InvariantViolation
from ..procgen.streams import Stream
from .catalog import UpgradeCatalog
from .upgrades import Category, Tier, UpgradeEntry

logger = logging.getLogger(__name__)


class WeightedIndex:
    """
    Cumulative-sum sampler over a mutable weight vector.

    Sampling is a binary search over the running sum, so an entry with
    weight zero can never be selected.
    """

    def __init__(self, weights: Sequence[float]):
        self._weights = self._checked(np.asarray(weights, dtype=np.float64).copy())
        self._cumulative = np.cumsum(self._weights)

    @staticmethod
    def _checked(weights: np.ndarray) -> np.ndarray:
        if weights.ndim != 1 or weights.size == 0:
            raise InvariantViolation("Weighted index needs at least one weight")
        if not np.all(np.isfinite(weights)) or np.any(weights < 0):
            raise InvariantViolation(f"Invalid weights: {weights.tolist()}")
        if not weights.sum() > 0:
            raise InvariantViolation("All weights are zero")
        return weights

    @property
    def total(self) -> float:
        return float(self._cumulative[-1])

    @property
    def weights(self) -> np.ndarray:
        return self._weights.copy()

    def update_weights(self, updates: Iterable[Tuple[int, float]]):
        """Apply (index, weight) updates; state is unchanged if they fail."""

        weights = self._weights.copy()
        for index, weight in updates:
            weights[index] = weight
        self._weights = self._checked(weights)
        self._cumulative = np.cumsum(self._weights)

    def sample(self, rng: np.random.Generator) -> int:
        target = rng.random() * self.total
        index = int(np.searchsorted(self._cumulative, target, side="right"))
        if index >= self._weights.size:
            # target rounded up to the total
            index = int(np.flatnonzero(self._weights)[-1])
        return index


class WeightedProgressionPool:
    """
    Reward pool for one run.

    Args:
        catalog: Reward table; its entries are copied, never shared
        stream: Dedicated random stream for draws

    Not safe for concurrent draws; the game loop is expected to draw from a
    single periodic trigger.
    """

    def __init__(self, catalog: UpgradeCatalog, stream: Stream):
        self.stream = stream
        self._rng = stream.generator()
        self._entries: List[UpgradeEntry] = catalog.entries()
        self._index = WeightedIndex([entry.weight for entry in self._entries])
        self._held: Dict[Category, Tier] = {}

        logger.info("Progression pool ready with %d entries", len(self._entries))

    @property
    def entries(self) -> Tuple[UpgradeEntry, ...]:
        """Copies of the current entries; writing to them has no effect on draws."""
        return tuple(entry.copy() for entry in self._entries)

    @property
    def exhausted(self) -> bool:
        """True when only the no-op entry can still be drawn."""
        return all(entry.weight == 0 for entry in self._entries if not entry.is_noop)

    def held_tiers(self) -> Dict[Category, Tier]:
        """Highest tier granted so far, per category."""
        return dict(self._held)

    def draw(self) -> Optional[UpgradeEntry]:
        """
        Draw one reward.

        Returns:
            A copy of the granted entry, or None when the no-op entry was drawn
        """

        entry = self._entries[self._index.sample(self._rng)]
        if entry.is_noop:
            logger.debug("Drew no reward")
            return None

        drawn = entry.payload
        removed = [
            (i, 0.0) for i, other in enumerate(self._entries)
            if other.weight and other.is_dominated_by(drawn)
        ]
        try:
            self._index.update_weights(removed)
        except InvariantViolation:
            logger.error("Error while removing %s from upgrade pool after drawing %s",
                         [i for i, _ in removed], drawn)
            raise

        for i, weight in removed:
            self._entries[i].weight = weight
        self._held[drawn.category] = drawn.tier

        logger.debug("Drew %s, removed %d entries", drawn.label, len(removed))
        return entry.copy()

    def reset(self):
        """Restore catalog weights; the random stream keeps its position."""

        for entry in self._entries:
            entry.weight = entry.base_weight
        self._index = WeightedIndex([entry.weight for entry in self._entries])
        self._held.clear()
