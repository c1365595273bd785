"""
Calculation utilities for the ARPG simulation.

Contains:
- Stat aggregation (base stats + gear + attributes)
- Damage formulas (hit chance, monster hits, player rolls, bleeds)
- Skill resolution (gem levels + linked support gems)
"""

from .stats import (
    EffectiveStats,
    get_default_player_stats,
    compute_player_stats,
    effective_crit_multiplier,
)

from .damage import (
    MonsterHitResult,
    PlayerHit,
    calculate_hit_chance,
    monster_accuracy,
    calculate_monster_damage,
    roll_player_damage,
    bleed_dps_for_hit,
    apply_bleed,
    # Constants
    MIN_HIT_CHANCE,
    MAX_HIT_CHANCE,
    MAX_RESISTANCE,
    BLEED_DURATION,
    BLEED_PERCENT_OF_PHYSICAL,
)

from .skills import (
    SkillRuntimeStats,
    SkillDamageEstimate,
    SkillHit,
    get_leveled_value,
    get_socketed_support_gems,
    get_skill_runtime_stats,
    estimate_skill_damage_range,
    roll_skill_damage,
)

__all__ = [
    # Stats
    "EffectiveStats",
    "get_default_player_stats",
    "compute_player_stats",
    "effective_crit_multiplier",
    # Damage
    "MonsterHitResult",
    "PlayerHit",
    "calculate_hit_chance",
    "monster_accuracy",
    "calculate_monster_damage",
    "roll_player_damage",
    "bleed_dps_for_hit",
    "apply_bleed",
    "MIN_HIT_CHANCE",
    "MAX_HIT_CHANCE",
    "MAX_RESISTANCE",
    "BLEED_DURATION",
    "BLEED_PERCENT_OF_PHYSICAL",
    # Skills
    "SkillRuntimeStats",
    "SkillDamageEstimate",
    "SkillHit",
    "get_leveled_value",
    "get_socketed_support_gems",
    "get_skill_runtime_stats",
    "estimate_skill_damage_range",
    "roll_skill_damage",
]
