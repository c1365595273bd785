"""
Static content definitions.

These describe catalog entries (monsters, bosses, skills, support gems, item
bases, affixes, maps, currencies). Runtime state only ever refers to them by id.
Per-gem-level tables are indexed with level 1 at index 0.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple

from ..state.player import CurrencyType, DamageType, EquipmentSlot


# =============================================================================
# Monsters
# =============================================================================


@dataclass
class MonsterDefinition:
    id: str
    name: str
    base_life: float
    base_damage: float
    attack_speed: float
    damage_type: DamageType
    experience_reward: float
    loot_bonus: float = 1.0


class BossSkillType(Enum):
    SLAM = "slam"
    CLEAVE = "cleave"
    PROJECTILE = "projectile"
    AOE = "aoe"


@dataclass
class BossSkill:
    id: str
    name: str
    damage_multiplier: float  # on the boss's base damage
    cooldown: float
    skill_type: BossSkillType = BossSkillType.SLAM


@dataclass
class BossDefinition(MonsterDefinition):
    title: str = ""
    guaranteed_drops: List[str] = field(default_factory=list)  # item base ids
    skills: List[BossSkill] = field(default_factory=list)

    def get_skill(self, skill_id: str) -> Optional[BossSkill]:
        for skill in self.skills:
            if skill.id == skill_id:
                return skill
        return None


# =============================================================================
# Skills and support gems
# =============================================================================


class SkillType(Enum):
    ATTACK = "attack"
    SPELL = "spell"


class SkillTargeting(Enum):
    SINGLE = "single"
    AOE = "aoe"
    CONE = "cone"


@dataclass
class SkillDefinition:
    id: str
    name: str
    skill_type: SkillType
    damage_multiplier: float  # on weapon damage; spells use 0
    mana_cost: float
    cooldown: float
    required_level: int = 1
    targeting: SkillTargeting = SkillTargeting.SINGLE
    damage_type: DamageType = DamageType.PHYSICAL
    description: str = ""
    added_damage_min: float = 0
    added_damage_max: float = 0
    aoe_radius: int = 0  # max targets, 0 means single target
    number_of_hits: int = 1
    crit_bonus_chance: float = 0
    lifesteal_percent: float = 0
    double_damage_chance: float = 0
    cost_amount: Optional[int] = None  # transmutation orbs, None for the default price

    gem_total_experience_by_level: Optional[List[float]] = None
    required_character_level_by_gem_level: Optional[List[int]] = None
    mana_cost_by_level: Optional[List[float]] = None
    damage_multiplier_by_level: Optional[List[float]] = None
    double_damage_chance_by_level: Optional[List[float]] = None

    @property
    def purchase_cost(self) -> int:
        if self.cost_amount is not None:
            return self.cost_amount
        return 1 + self.required_level // 2


@dataclass
class SupportGemDefinition:
    id: str
    name: str
    compatible_skill_types: Tuple[SkillType, ...]
    cost_currency: CurrencyType = CurrencyType.TRANSMUTATION
    cost_amount: int = 1
    required_level: int = 1
    description: str = ""

    gem_total_experience_by_level: Optional[List[float]] = None
    required_character_level_by_gem_level: Optional[List[int]] = None

    # Modifiers on the linked skill
    more_damage_multiplier: float = 0  # 0.2 = 20% more damage
    cooldown_multiplier: float = 0  # 0.9 = 10% shorter cooldown, 0 = unchanged
    mana_multiplier: float = 0  # 1.2 = 20% more mana, 0 = unchanged
    added_damage_min: float = 0
    added_damage_max: float = 0
    added_hits: int = 0
    attack_speed_more_percent: float = 0
    attack_speed_more_percent_by_level: Optional[List[float]] = None
    second_hit_less_damage_percent: float = 0
    second_hit_less_damage_percent_by_level: Optional[List[float]] = None
    physical_as_extra_fire_percent: float = 0
    physical_as_extra_fire_percent_by_level: Optional[List[float]] = None
    chance_to_bleed_percent: float = 0
    chance_to_bleed_percent_by_level: Optional[List[float]] = None
    more_bleeding_damage_percent: float = 0
    more_bleeding_damage_percent_by_level: Optional[List[float]] = None

    def supports(self, skill_type: SkillType) -> bool:
        return skill_type in self.compatible_skill_types


# =============================================================================
# Items and affixes
# =============================================================================


class AffixType(Enum):
    PREFIX = "prefix"
    SUFFIX = "suffix"


@dataclass
class AffixTier:
    tier: int
    min_value: float
    max_value: float
    required_item_level: int
    secondary_min_value: Optional[float] = None
    secondary_max_value: Optional[float] = None
    tertiary_min_value: Optional[float] = None
    tertiary_max_value: Optional[float] = None


@dataclass
class AffixDefinition:
    id: str
    name: str
    affix_type: AffixType
    stat_key: str
    tiers: List[AffixTier]
    applicable_slots: Tuple[EquipmentSlot, ...]
    is_percentage: bool = False
    secondary_stat_key: Optional[str] = None
    tertiary_stat_key: Optional[str] = None
    use_primary_value_for_secondary: bool = False
    use_primary_value_for_tertiary: bool = False
    required_base_tags_any: Optional[Tuple[str, ...]] = None

    def highest_tier(self, item_level: int) -> Optional[AffixTier]:
        """Best tier unlocked at item_level (tiers are listed ascending)."""
        unlocked = [t for t in self.tiers if t.required_item_level <= item_level]
        return unlocked[-1] if unlocked else None

    def allows_base(self, base_tags: Tuple[str, ...]) -> bool:
        if not self.required_base_tags_any:
            return True
        return any(tag in base_tags for tag in self.required_base_tags_any)


@dataclass
class ItemBase:
    id: str
    name: str
    slot: EquipmentSlot
    base_stats: Dict[str, float]
    drop_level: int
    required_level: int = 1
    base_stat_ranges: Dict[str, Tuple[float, float]] = field(default_factory=dict)
    base_tags: Tuple[str, ...] = ()


# =============================================================================
# Maps and currency
# =============================================================================


@dataclass
class GameMap:
    id: str
    name: str
    monster_level: int
    monster_pool: List[str]
    kills_required: int
    boss_id: str
    required_map_id: Optional[str] = None
    order: int = 0
    spawn_interval: Optional[float] = None  # None uses the engine default
    description: str = ""


@dataclass
class CurrencyDefinition:
    id: CurrencyType
    name: str
    drop_weight: float
    description: str = ""
