"""
One-dimensional multi-octave value noise.

Each octave hashes the lattice points around a position into uniform
values read straight from a counter-based stream, then blends the two
neighbours with cosine interpolation. Because a lattice value depends only
on (stream, octave, lattice index), samples can be taken in any order,
any number of times, and always agree.
"""

import math
from typing import Iterable, List, Tuple

import numpy as np

from .params import NoiseParameters
from .streams import Stream

_LATTICE_MASK = (1 << 64) - 1


def cosine_interpolate(a: float, b: float, t: float) -> float:
    """Blend ``a`` to ``b`` with a cosine ease; ``t`` in [0, 1)."""
    f = (1.0 - math.cos(t * math.pi)) * 0.5
    return a * (1.0 - f) + b * f


def lattice_offset(octave: int, lattice: int) -> int:
    """Stream offset holding the value of ``lattice`` in ``octave``."""
    return (octave << 64) | (lattice & _LATTICE_MASK)


class ValueNoiseField:
    """
    Deterministic value noise over non-negative integer positions.

    Octave ``o`` uses wavelength ``wave_length / 2**o`` and amplitude
    ``amplitude / 2**o``. Octaves whose wavelength drops below one cell
    (or whose amplitude underflows to zero) contribute nothing.
    """

    def __init__(self, stream: Stream, params: NoiseParameters):
        self.stream = stream
        self.params = params
        self._layers = self._build_layers(params)

    @staticmethod
    def _build_layers(params: NoiseParameters) -> List[Tuple[int, float, float]]:
        layers = []
        for octave in range(params.octaves):
            scale = float(1 << octave)
            wave_length = params.wave_length / scale
            amplitude = params.amplitude / scale
            if wave_length < 1.0 or amplitude <= 0.0:
                continue
            layers.append((octave, wave_length, amplitude))
        return layers

    @property
    def amplitude(self) -> float:
        return self.params.amplitude

    @property
    def layers(self) -> List[Tuple[int, float, float]]:
        """(octave, wavelength, amplitude) of every contributing octave."""
        return list(self._layers)

    def lattice_value(self, octave: int, lattice: int) -> float:
        return self.stream.value_at(lattice_offset(octave, lattice))

    def sample(self, x: int) -> float:
        """Noise value at cell ``x``."""

        if x < 0:
            raise ValueError(f"Position must be non-negative, got {x}")

        total = 0.0
        for octave, wave_length, amplitude in self._layers:
            q, r = divmod(x, wave_length)
            i = int(q)
            a = self.lattice_value(octave, i)
            b = self.lattice_value(octave, i + 1)
            total += cosine_interpolate(a, b, r / wave_length) * amplitude

        return total

    def sample_many(self, xs: Iterable[int]) -> np.ndarray:
        """Sample every position in ``xs``; identical to repeated ``sample``."""
        return np.fromiter((self.sample(x) for x in xs), dtype=np.float64)
