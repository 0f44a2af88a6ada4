"""
Caller-side helpers for the game loop.

The core answers pure queries; deciding when to generate more floor, how
long a run of holes may get, and when to grant a reward belongs to the
loop. These helpers implement the shipped game's choices.
"""

import logging
from typing import List, Optional, Tuple

from .procgen.terrain import CHUNK_SIZE, TerrainOracle
from .progression.pool import WeightedProgressionPool
from .progression.upgrades import UpgradeEntry

logger = logging.getLogger(__name__)

FloorCell = Tuple[int, float]


class LevelStreamer:
    """
    Generates floor ahead of the player one chunk at a time.

    Args:
        oracle: Terrain queries for the run
        lookahead: Generate more when the player is this many cells from the edge
        max_hole_run: Longest allowed run of consecutive holes
        safe_cells: Cells at the very start that are always solid
    """

    def __init__(
        self,
        oracle: TerrainOracle,
        lookahead: int = 100,
        max_hole_run: int = 4,
        safe_cells: int = 6,
    ):
        self.oracle = oracle
        self.lookahead = lookahead
        self.max_hole_run = max_hole_run
        self.safe_cells = safe_cells
        self.right = 0
        self._hole_streak = 0

    def needs_more(self, player_x: float) -> bool:
        return player_x >= self.right - self.lookahead

    def extend(self) -> List[FloorCell]:
        """Generate the next chunk and return its solid cells."""

        start = self.right
        heights = self.oracle.heights(start)
        cells = []
        for offset, height in enumerate(heights):
            x = start + offset
            if x >= self.safe_cells and self._hole_streak < self.max_hole_run and self.oracle.is_hole(x):
                self._hole_streak += 1
                continue
            self._hole_streak = 0
            cells.append((x, float(height)))

        self.right += CHUNK_SIZE
        logger.debug("Level extended to %d (%d holes)", self.right, CHUNK_SIZE - len(cells))
        return cells

    def update(self, player_x: float) -> List[FloorCell]:
        """Extend the level if the player is close to the edge."""
        if self.needs_more(player_x):
            return self.extend()
        return []


class RewardCadence:
    """Draws from the pool once every ``interval`` seconds of play."""

    def __init__(self, pool: WeightedProgressionPool, interval: float = 10.0):
        if interval <= 0:
            raise ValueError(f"Reward interval must be positive, got {interval}")
        self.pool = pool
        self.interval = interval
        self.elapsed = 0.0

    def tick(self, dt: float) -> List[UpgradeEntry]:
        """Advance the timer by ``dt`` seconds; return rewards granted."""

        self.elapsed += dt
        granted = []
        while self.elapsed >= self.interval:
            self.elapsed -= self.interval
            entry: Optional[UpgradeEntry] = self.pool.draw()
            if entry is not None:
                logger.info("Upgrade: %s", entry.payload.label)
                granted.append(entry)
        return granted
