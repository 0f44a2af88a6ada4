"""
Noise parameters and their validation.

This module defines:
- NoiseParameters: Immutable settings of one noise field
- ParameterSpec: Ranges and defaults used when reading settings from config
"""

import math
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Tuple

from ..errors import ConfigurationError


@dataclass(frozen=True)
class NoiseParameters:
    """
    Settings of a multi-octave noise field.

    Args:
        wave_length: Distance in cells between lattice points of the first octave
        amplitude: Scale of the first octave
        octaves: Number of octaves to sum
    """

    wave_length: float
    amplitude: float
    octaves: int

    def __post_init__(self):
        errors = []
        if not _is_positive_number(self.wave_length):
            errors.append(f"wave_length must be a positive number, got {self.wave_length!r}")
        if not _is_positive_number(self.amplitude):
            errors.append(f"amplitude must be a positive number, got {self.amplitude!r}")
        if isinstance(self.octaves, bool) or not isinstance(self.octaves, int) or self.octaves < 1:
            errors.append(f"octaves must be a positive integer, got {self.octaves!r}")
        if errors:
            raise ConfigurationError("; ".join(errors))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "wave_length": self.wave_length,
            "amplitude": self.amplitude,
            "octaves": self.octaves,
        }


def _is_positive_number(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value) and value > 0


class ParameterSpec:
    """
    Specification for noise parameters with validation and defaults.

    Each parameter has:
    - min_val: Minimum allowed value
    - max_val: Maximum allowed value
    - default: Default value if not specified
    """

    def __init__(self, params: Dict[str, Tuple[float, float, float]]):
        """
        Initialize parameter specification.

        Args:
            params: Dict mapping param_name -> (min_val, max_val, default)
        """
        self.params = params

    def check(self, values: Mapping[str, Any]) -> List[str]:
        """Return a list of problems with ``values``; empty when valid."""

        problems = []
        for name in values:
            if name not in self.params:
                problems.append(f"unknown parameter '{name}'")

        for name, (min_val, max_val, _) in self.params.items():
            if name not in values:
                continue
            value = values[name]
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                problems.append(f"{name} must be a number, got {value!r}")
            elif not (min_val <= value <= max_val):
                problems.append(f"{name}={value} outside [{min_val}, {max_val}]")

        return problems

    def build(self, values: Mapping[str, Any]) -> NoiseParameters:
        """Fill in defaults and build NoiseParameters, raising on bad input."""

        problems = self.check(values)
        if problems:
            raise ConfigurationError("Invalid noise parameters: " + "; ".join(problems))

        merged = {name: values.get(name, default) for name, (_, _, default) in self.params.items()}
        if isinstance(merged["octaves"], float):
            if not merged["octaves"].is_integer():
                raise ConfigurationError(f"octaves must be an integer, got {merged['octaves']}")
            merged["octaves"] = int(merged["octaves"])

        return NoiseParameters(**merged)

    def defaults(self) -> NoiseParameters:
        return self.build({})


HEIGHT_SPEC = ParameterSpec({
    "wave_length": (1.0, 1e9, 256.0),
    "amplitude": (1e-9, 1e9, 64.0),
    "octaves": (1, 32, 5),
})

HOLE_SPEC = ParameterSpec({
    "wave_length": (1.0, 1e9, 9.0),
    "amplitude": (1e-9, 1e9, 64.0),
    "octaves": (1, 32, 3),
})
