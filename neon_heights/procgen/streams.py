"""
Counter-based random streams derived from a single run seed.

All procedural output of a run comes from one 32-byte seed. The seed is
compressed once into a Philox key; each stream index then owns the top
word of the 256-bit Philox counter, so two streams never share a counter
value and any position of a stream can be read without replaying the
positions before it.
"""

import hashlib
import logging
from dataclasses import dataclass
from functools import lru_cache
from typing import Union

import numpy as np

from ..errors import ConfigurationError

logger = logging.getLogger(__name__)

SEED_SIZE = 32

# Stream indices used by a run
HEIGHT_STREAM = 1
HOLE_STREAM = 2
UPGRADE_STREAM = 3

_OFFSET_BITS = 192
_INDEX_LIMIT = 1 << 64
_DOUBLE_SCALE = 1.0 / (1 << 53)

SeedLike = Union[bytes, bytearray, memoryview]


def validate_seed(seed: SeedLike) -> bytes:
    """Return an immutable copy of ``seed``, checking its length."""

    if not isinstance(seed, (bytes, bytearray, memoryview)):
        raise ConfigurationError(f"Seed must be bytes, got {type(seed).__name__}")

    seed = bytes(seed)
    if len(seed) != SEED_SIZE:
        raise ConfigurationError(f"Seed must be {SEED_SIZE} bytes, got {len(seed)}")
    return seed


def _key_from_seed(seed: bytes) -> int:
    digest = hashlib.blake2b(seed, digest_size=16, person=b"neon-heights").digest()
    return int.from_bytes(digest, "little")


@lru_cache(maxsize=1 << 16)
def _read_word(key: int, counter: int) -> float:
    raw = int(np.random.Philox(key=key, counter=counter).random_raw())
    return (raw >> 11) * _DOUBLE_SCALE


@dataclass(frozen=True)
class Stream:
    """
    One deterministic pseudo-random sequence keyed by (seed, index).

    The stream can be read two ways:
    - ``value_at(offset)`` seeks to ``offset`` and returns one uniform double;
      the result depends only on (seed, index, offset).
    - ``generator()`` returns a sequential numpy Generator starting at offset 0.
    """

    key: int
    index: int

    def counter(self, offset: int) -> int:
        """Full 256-bit Philox counter for ``offset`` within this stream."""
        if offset < 0 or offset >> _OFFSET_BITS:
            raise ValueError(f"Stream offset out of range: {offset}")
        return (self.index << _OFFSET_BITS) | offset

    def bit_generator(self, offset: int = 0) -> np.random.Philox:
        return np.random.Philox(key=self.key, counter=self.counter(offset))

    def generator(self) -> np.random.Generator:
        return np.random.Generator(self.bit_generator())

    def value_at(self, offset: int) -> float:
        """Uniform double in [0, 1) stored at ``offset``."""
        return _read_word(self.key, self.counter(offset))


class StreamFactory:
    """
    Derives independent streams from one master seed.

    The seed is copied on construction, so later changes to the caller's
    buffer cannot affect generation.
    """

    def __init__(self, seed: SeedLike):
        self._seed = validate_seed(seed)
        self._key = _key_from_seed(self._seed)

    @property
    def seed(self) -> bytes:
        return self._seed

    def derive(self, index: int) -> Stream:
        """Return the stream with the given index, taken modulo 2**64."""

        if isinstance(index, bool) or not isinstance(index, (int, np.integer)):
            raise ConfigurationError(f"Stream index must be an integer, got {index!r}")

        index = int(index) % _INDEX_LIMIT
        logger.debug("Derived stream %d", index)
        return Stream(key=self._key, index=index)


def derive(seed: SeedLike, index: int) -> Stream:
    """Shorthand for ``StreamFactory(seed).derive(index)``."""
    return StreamFactory(seed).derive(index)
