"""
Reward progression.

This package provides:
- Upgrade categories, tiers and category-specific payloads
- The declarative reward catalog and its weight curve
- The weighted pool that never offers a repeat or a downgrade
"""

from .upgrades import (
    Category, Tier, Upgrade, UpgradeEntry,
    SpeedBoost, JumpBoost, JumpSkill, DashSkill, GlideSkill,
)
from .catalog import UpgradeCatalog, NOOP_WEIGHT, tier_weight, tiers_for
from .pool import WeightedIndex, WeightedProgressionPool

__all__ = [
    "Category", "Tier", "Upgrade", "UpgradeEntry",
    "SpeedBoost", "JumpBoost", "JumpSkill", "DashSkill", "GlideSkill",
    "UpgradeCatalog", "NOOP_WEIGHT", "tier_weight", "tiers_for",
    "WeightedIndex", "WeightedProgressionPool",
]
