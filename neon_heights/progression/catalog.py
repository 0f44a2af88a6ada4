"""
Declarative table of reward entries.

The default catalog follows the game's weight curve: each tier is drawn
``falloff`` times as often as the tier below it, and skill unlocks only
exist at a subset of tiers so they stay rarer than stat boosts.
"""

import logging
import math
from typing import Callable, Dict, Iterator, List, Set, Tuple

import numpy as np

from ..errors import ConfigurationError
from .upgrades import (
    Category, Tier, Upgrade, UpgradeEntry,
    SpeedBoost, JumpBoost, JumpSkill, DashSkill, GlideSkill,
)

logger = logging.getLogger(__name__)

# Weight of the "no reward" entry; keeps the pool from ever running dry
NOOP_WEIGHT = float(np.finfo(np.float32).eps)

DEFAULT_BASE_WEIGHT = 100.0
DEFAULT_FALLOFF = 0.2

# category -> (modulus, remainder) over the tier rank
SKILL_RULES: Dict[Category, Tuple[int, int]] = {
    Category.JUMP_SKILL: (3, 1),
    Category.DASH_SKILL: (3, 1),
    Category.GLIDE_SKILL: (4, 2),
}

PayloadBuilder = Callable[[Tier, int], Upgrade]


def _speed(tier: Tier, ordinal: int) -> Upgrade:
    return SpeedBoost(tier, multiplier=round(1.0 + 0.1 * tier, 2))


def _jump_power(tier: Tier, ordinal: int) -> Upgrade:
    return JumpBoost(tier, multiplier=round(1.0 + 0.1 * tier, 2))


def _jump_skill(tier: Tier, ordinal: int) -> Upgrade:
    return JumpSkill(tier, max_jumps=1 + ordinal, air=ordinal >= 2)


def _dash_skill(tier: Tier, ordinal: int) -> Upgrade:
    return DashSkill(
        tier,
        max_dashes=ordinal,
        air=ordinal >= 2,
        cooldown=max(0.5, 3.0 - 0.5 * (ordinal - 1)),
    )


def _glide_skill(tier: Tier, ordinal: int) -> Upgrade:
    return GlideSkill(
        tier,
        max_uses=ordinal,
        max_duration=0.5 + 0.5 * ordinal,
        cooldown=max(1.0, 6.0 - 1.5 * (ordinal - 1)),
    )


PAYLOAD_BUILDERS: Dict[Category, PayloadBuilder] = {
    Category.SPEED: _speed,
    Category.JUMP_POWER: _jump_power,
    Category.JUMP_SKILL: _jump_skill,
    Category.DASH_SKILL: _dash_skill,
    Category.GLIDE_SKILL: _glide_skill,
}


def tier_weight(tier: Tier, base_weight: float, falloff: float) -> float:
    """Weight of ``tier``: Basic gets ``base_weight``, each step up ``*falloff``."""
    return base_weight * falloff ** (int(tier) - 1)


def tiers_for(category: Category) -> List[Tier]:
    """Tiers at which ``category`` is offered."""

    tiers = [tier for tier in Tier if tier is not Tier.NONE]
    rule = SKILL_RULES.get(category)
    if rule is None:
        return tiers
    modulus, remainder = rule
    return [tier for tier in tiers if int(tier) % modulus == remainder]


class UpgradeCatalog:
    """
    Registry of reward entries and their initial weights.

    Entry 0 is always the no-op entry. A (category, tier) pair can only be
    registered once.
    """

    def __init__(self):
        self._entries: List[UpgradeEntry] = [UpgradeEntry(None, NOOP_WEIGHT)]
        self._keys: Set[Tuple[Category, Tier]] = set()

    def register(self, payload: Upgrade, weight: float) -> "UpgradeCatalog":
        """Add ``payload`` with initial draw weight ``weight``."""

        if not isinstance(payload, Upgrade):
            raise ConfigurationError(f"Not an upgrade payload: {payload!r}")
        if payload.tier is Tier.NONE:
            raise ConfigurationError(f"Cannot register a {payload.category.value} upgrade at tier None")
        if isinstance(weight, bool) or not isinstance(weight, (int, float)) \
                or not math.isfinite(weight) or weight < 0:
            raise ConfigurationError(f"Weight must be a finite non-negative number, got {weight!r}")

        key = (payload.category, payload.tier)
        if key in self._keys:
            raise ConfigurationError(
                f"Duplicate catalog entry: {payload.category.value} at tier {payload.tier.label}"
            )

        self._keys.add(key)
        self._entries.append(UpgradeEntry(payload, float(weight)))
        return self

    def entries(self) -> List[UpgradeEntry]:
        """Fresh copies of all entries, no-op entry first."""
        return [UpgradeEntry(entry.payload, entry.base_weight) for entry in self._entries]

    def categories(self) -> Set[Category]:
        return {category for category, _ in self._keys}

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[UpgradeEntry]:
        return iter(self.entries())

    def __contains__(self, key: Tuple[Category, Tier]) -> bool:
        return key in self._keys

    @classmethod
    def default(
        cls,
        base_weight: float = DEFAULT_BASE_WEIGHT,
        falloff: float = DEFAULT_FALLOFF,
    ) -> "UpgradeCatalog":
        """Build the game's reward table."""

        catalog = cls()
        for category, build in PAYLOAD_BUILDERS.items():
            for ordinal, tier in enumerate(tiers_for(category), start=1):
                catalog.register(build(tier, ordinal), tier_weight(tier, base_weight, falloff))

        logger.info("Default catalog built with %d entries", len(catalog))
        return catalog
