"""
Deterministic terrain generation.

This package provides:
- Counter-based random streams derived from one run seed
- Multi-octave value noise that can be sampled in any order
- The terrain oracle answering height and hole queries
"""

from .params import NoiseParameters, ParameterSpec, HEIGHT_SPEC, HOLE_SPEC
from .streams import Stream, StreamFactory, derive, HEIGHT_STREAM, HOLE_STREAM, UPGRADE_STREAM
from .noise import ValueNoiseField
from .terrain import TerrainOracle, CHUNK_SIZE

__all__ = [
    "NoiseParameters", "ParameterSpec", "HEIGHT_SPEC", "HOLE_SPEC",
    "Stream", "StreamFactory", "derive",
    "HEIGHT_STREAM", "HOLE_STREAM", "UPGRADE_STREAM",
    "ValueNoiseField", "TerrainOracle", "CHUNK_SIZE",
]
