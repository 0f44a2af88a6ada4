"""
Upgrade categories, tiers and payloads.

Every payload is a small immutable record tagged with its category. Two
payloads are only ever compared when their categories match: a speed boost
never dominates a dash unlock, whatever their tiers.
"""

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import ClassVar, Optional


class Tier(IntEnum):
    NONE = 0
    BASIC = 1
    IMPROVED = 2
    ENHANCED = 3
    ADVANCED = 4
    SUPERIOR = 5
    ELITE = 6
    MASTER = 7
    EPIC = 8
    LEGENDARY = 9
    MYTHIC = 10

    @property
    def label(self) -> str:
        return self.name.capitalize()


class Category(Enum):
    SPEED = "speed"
    JUMP_POWER = "jump_power"
    JUMP_SKILL = "jump_skill"
    DASH_SKILL = "dash_skill"
    GLIDE_SKILL = "glide_skill"


CATEGORY_TITLES = {
    Category.SPEED: "Speed Upgrade",
    Category.JUMP_POWER: "Jump Power Upgrade",
    Category.JUMP_SKILL: "Extra Jump Upgrade",
    Category.DASH_SKILL: "Dash Upgrade",
    Category.GLIDE_SKILL: "Glide Upgrade",
}


@dataclass(frozen=True)
class Upgrade:
    """Base of all payloads; subclasses set ``category``."""

    category: ClassVar[Category]

    tier: Tier

    def is_dominated_by(self, other: "Upgrade") -> bool:
        """True when holding ``other`` makes this upgrade redundant."""
        return other.category is self.category and self.tier <= other.tier

    @property
    def label(self) -> str:
        return f"{CATEGORY_TITLES[self.category]} ({self.tier.label})"


@dataclass(frozen=True)
class SpeedBoost(Upgrade):
    category: ClassVar[Category] = Category.SPEED

    multiplier: float = 1.0


@dataclass(frozen=True)
class JumpBoost(Upgrade):
    category: ClassVar[Category] = Category.JUMP_POWER

    multiplier: float = 1.0


@dataclass(frozen=True)
class JumpSkill(Upgrade):
    category: ClassVar[Category] = Category.JUMP_SKILL

    max_jumps: int = 1
    air: bool = False


@dataclass(frozen=True)
class DashSkill(Upgrade):
    category: ClassVar[Category] = Category.DASH_SKILL

    max_dashes: int = 1
    air: bool = False
    cooldown: float = 3.0


@dataclass(frozen=True)
class GlideSkill(Upgrade):
    category: ClassVar[Category] = Category.GLIDE_SKILL

    max_uses: int = 1
    max_duration: float = 1.0
    cooldown: float = 5.0


@dataclass
class UpgradeEntry:
    """
    One row of the reward pool.

    ``payload`` is None only for the no-op entry, which stands for
    "no reward this round". ``weight`` is written by the pool alone.
    """

    payload: Optional[Upgrade]
    weight: float
    base_weight: float = field(init=False, repr=False)

    def __post_init__(self):
        self.base_weight = self.weight

    @property
    def is_noop(self) -> bool:
        return self.payload is None

    @property
    def category(self) -> Optional[Category]:
        return None if self.payload is None else self.payload.category

    @property
    def tier(self) -> Optional[Tier]:
        return None if self.payload is None else self.payload.tier

    def copy(self) -> "UpgradeEntry":
        """Detached copy keeping both the current and the base weight."""
        entry = UpgradeEntry(self.payload, self.weight)
        entry.base_weight = self.base_weight
        return entry

    def is_dominated_by(self, drawn: Upgrade) -> bool:
        if self.payload is None:
            return False
        return self.payload.is_dominated_by(drawn)
