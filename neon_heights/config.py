"""
Run configuration.

Defaults match the shipped game. A JSON file can override any of them:

    {
        "height": {"wave_length": 256, "amplitude": 64, "octaves": 5},
        "hole": {"wave_length": 9, "amplitude": 64, "octaves": 3},
        "upgrade_interval": 10.0
    }
"""

import json
import logging
import math
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Mapping, Union

from .errors import ConfigurationError
from .procgen.params import HEIGHT_SPEC, HOLE_SPEC, NoiseParameters
from .progression.catalog import DEFAULT_BASE_WEIGHT, DEFAULT_FALLOFF

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RunConfig:
    height: NoiseParameters = field(default_factory=HEIGHT_SPEC.defaults)
    hole: NoiseParameters = field(default_factory=HOLE_SPEC.defaults)
    lookahead: int = 100
    max_hole_run: int = 4
    upgrade_interval: float = 10.0
    base_weight: float = DEFAULT_BASE_WEIGHT
    weight_falloff: float = DEFAULT_FALLOFF

    def __post_init__(self):
        problems = []
        if not _is_int(self.lookahead) or self.lookahead < 0:
            problems.append(f"lookahead must be a non-negative integer, got {self.lookahead!r}")
        if not _is_int(self.max_hole_run) or self.max_hole_run < 0:
            problems.append(f"max_hole_run must be a non-negative integer, got {self.max_hole_run!r}")
        if not _is_number(self.upgrade_interval) or self.upgrade_interval <= 0:
            problems.append(f"upgrade_interval must be positive, got {self.upgrade_interval!r}")
        if not _is_number(self.base_weight) or self.base_weight <= 0:
            problems.append(f"base_weight must be positive, got {self.base_weight!r}")
        if not _is_number(self.weight_falloff) or not 0 < self.weight_falloff <= 1:
            problems.append(f"weight_falloff must be in (0, 1], got {self.weight_falloff!r}")
        if problems:
            raise ConfigurationError("; ".join(problems))

    @classmethod
    def from_dict(cls, values: Mapping[str, Any]) -> "RunConfig":
        """Build a config from plain data, filling in defaults."""

        known = set(cls.__dataclass_fields__)
        unknown = sorted(set(values) - known)
        if unknown:
            raise ConfigurationError(f"Unknown config keys: {', '.join(unknown)}")

        kwargs: Dict[str, Any] = dict(values)
        for name, spec in (("height", HEIGHT_SPEC), ("hole", HOLE_SPEC)):
            if name in kwargs:
                section = kwargs[name]
                if not isinstance(section, Mapping):
                    raise ConfigurationError(f"'{name}' must be an object, got {section!r}")
                kwargs[name] = spec.build(section)

        return cls(**kwargs)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "height": self.height.to_dict(),
            "hole": self.hole.to_dict(),
            "lookahead": self.lookahead,
            "max_hole_run": self.max_hole_run,
            "upgrade_interval": self.upgrade_interval,
            "base_weight": self.base_weight,
            "weight_falloff": self.weight_falloff,
        }


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and math.isfinite(value)


def load_config(path: Union[str, Path]) -> RunConfig:
    """Read a JSON run configuration; any problem is a ConfigurationError."""

    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            values = json.load(f)
    except FileNotFoundError:
        raise ConfigurationError(f"Config file not found: {path}") from None
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Error reading {path}: {e}") from e

    if not isinstance(values, dict):
        raise ConfigurationError(f"Config root must be an object in {path}")

    config = RunConfig.from_dict(values)
    logger.info("Loaded run config from %s", path)
    return config
