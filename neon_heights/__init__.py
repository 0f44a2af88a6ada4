"""
Neon Heights procedural core.

Deterministic endless terrain and monotonic reward progression for the
Neon Heights platformer. The game loop builds one GenerationContext per
run and queries it for floor heights, holes and upgrades.
"""

from .errors import NeonHeightsError, ConfigurationError, InvariantViolation
from .config import RunConfig, load_config
from .session import GenerationContext
from .level import LevelStreamer, RewardCadence

__version__ = "0.1.0"

__all__ = [
    "NeonHeightsError", "ConfigurationError", "InvariantViolation",
    "RunConfig", "load_config",
    "GenerationContext",
    "LevelStreamer", "RewardCadence",
]
