"""
Generation context for one play session.

The context owns the run seed and builds the terrain oracle and reward pool
from it, so everything procedural about a run can be reproduced from the
seed alone.
"""

import logging
from typing import Optional

import numpy as np

from .config import RunConfig
from .level import LevelStreamer, RewardCadence
from .procgen.streams import UPGRADE_STREAM, SeedLike, StreamFactory
from .procgen.terrain import TerrainOracle
from .progression.catalog import UpgradeCatalog
from .progression.pool import WeightedProgressionPool
from .progression.upgrades import UpgradeEntry
from .seeds import random_seed, seed_from_int, seed_from_text, seed_to_text

logger = logging.getLogger(__name__)


class GenerationContext:
    """
    Seed, terrain and rewards of a single run.

    Args:
        seed: 32 raw bytes; copied on construction
        config: Run configuration (defaults when omitted)
        catalog: Reward table (the default catalog for ``config`` when omitted)
    """

    def __init__(
        self,
        seed: SeedLike,
        config: Optional[RunConfig] = None,
        catalog: Optional[UpgradeCatalog] = None,
    ):
        self.config = config or RunConfig()
        self._factory = StreamFactory(seed)

        if catalog is None:
            catalog = UpgradeCatalog.default(self.config.base_weight, self.config.weight_falloff)

        self.oracle = TerrainOracle.from_factory(self._factory, self.config.height, self.config.hole)
        self.pool = WeightedProgressionPool(catalog, self._factory.derive(UPGRADE_STREAM))

        logger.info("Run started with seed %r", self.seed_text())

    @classmethod
    def from_seed(cls, seed: SeedLike, **kwargs) -> "GenerationContext":
        return cls(seed, **kwargs)

    @classmethod
    def from_text(cls, text: str, **kwargs) -> "GenerationContext":
        return cls(seed_from_text(text), **kwargs)

    @classmethod
    def from_int(cls, value: int, **kwargs) -> "GenerationContext":
        return cls(seed_from_int(value), **kwargs)

    @classmethod
    def from_entropy(cls, **kwargs) -> "GenerationContext":
        return cls(random_seed(), **kwargs)

    def seed_bytes(self) -> bytes:
        return self._factory.seed

    def seed_text(self) -> str:
        return seed_to_text(self._factory.seed)

    def height(self, x: int) -> float:
        return self.oracle.height(x)

    def is_hole(self, x: int) -> bool:
        return self.oracle.is_hole(x)

    def heights(self, start: int) -> np.ndarray:
        return self.oracle.heights(start)

    def draw(self) -> Optional[UpgradeEntry]:
        return self.pool.draw()

    def level_streamer(self) -> LevelStreamer:
        """Floor streamer using the run's lookahead and hole-run settings."""
        return LevelStreamer(
            self.oracle,
            lookahead=self.config.lookahead,
            max_hole_run=self.config.max_hole_run,
        )

    def reward_cadence(self) -> RewardCadence:
        """Reward timer drawing from this run's pool every ``upgrade_interval`` seconds."""
        return RewardCadence(self.pool, interval=self.config.upgrade_interval)
