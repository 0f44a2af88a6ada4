"""
Terrain queries built from two independent noise fields.

The height field shapes the floor; the hole field marks cells where the
floor is missing. Both are pure functions of the cell position, so the
oracle can be queried from anywhere in the game loop without coordination.
"""

import logging

import numpy as np

from .noise import ValueNoiseField
from .params import NoiseParameters
from .streams import HEIGHT_STREAM, HOLE_STREAM, StreamFactory

logger = logging.getLogger(__name__)

CHUNK_SIZE = 1024
HOLE_THRESHOLD = 0.95


class TerrainOracle:
    """
    Height and obstacle queries for an endless level.

    Args:
        height_field: Noise field used for floor height
        hole_field: Noise field whose dense peaks become holes
    """

    def __init__(self, height_field: ValueNoiseField, hole_field: ValueNoiseField):
        self.height_field = height_field
        self.hole_field = hole_field
        self.hole_cutoff = hole_field.amplitude * HOLE_THRESHOLD

    @classmethod
    def from_factory(
        cls,
        factory: StreamFactory,
        height_params: NoiseParameters,
        hole_params: NoiseParameters,
    ) -> "TerrainOracle":
        """Build an oracle on the height and hole streams of ``factory``."""

        oracle = cls(
            ValueNoiseField(factory.derive(HEIGHT_STREAM), height_params),
            ValueNoiseField(factory.derive(HOLE_STREAM), hole_params),
        )
        logger.info(
            "Terrain oracle ready: height=%s hole=%s",
            height_params.to_dict(), hole_params.to_dict(),
        )
        return oracle

    def height(self, x: int) -> float:
        """Floor height at cell ``x``."""
        return self.height_field.sample(x)

    def hole_sample(self, x: int) -> float:
        """Raw hole-field value at cell ``x``."""
        return self.hole_field.sample(x)

    def is_hole(self, x: int) -> bool:
        """True when the floor is missing at cell ``x``."""
        return self.hole_field.sample(x) >= self.hole_cutoff

    def heights(self, start: int) -> np.ndarray:
        """Heights of the CHUNK_SIZE cells starting at ``start``."""

        if start < 0:
            raise ValueError(f"Chunk start must be non-negative, got {start}")
        return self.height_field.sample_many(range(start, start + CHUNK_SIZE))

    def holes(self, start: int) -> np.ndarray:
        """Hole flags of the CHUNK_SIZE cells starting at ``start``."""

        if start < 0:
            raise ValueError(f"Chunk start must be non-negative, got {start}")
        return np.fromiter(
            (self.is_hole(x) for x in range(start, start + CHUNK_SIZE)), dtype=bool
        )
