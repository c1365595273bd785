"""
Stat Aggregator - base stats + equipped items + attribute bonuses -> effective stats.

Pure functions. compute_player_stats is called every tick and on every intent
that needs max life/mana, so it never mutates the player.

Order:
1. Copy base stats
2. Add every stat of every equipped item (item `attack_speed` counts as
   increased attack speed)
3. Attribute bonuses:
   - every 10 strength: +2 max life, +2% increased physical damage
   - every dexterity: +2 accuracy; every 5 dexterity: +2% more evasion
   - every 10 intelligence: +2 max mana, +2% increased fire/cold/lightning damage
4. Average hit per damage type, crit-weighted hit, effective attack speed, DPS
"""

from __future__ import annotations

import math
from dataclasses import dataclass, fields

from ..state.player import Player, PlayerStats

__all__ = [
    "EffectiveStats",
    "get_default_player_stats",
    "compute_player_stats",
    "effective_crit_multiplier",
    "STRENGTH_PER_BONUS",
    "DEXTERITY_PER_EVASION_BONUS",
    "INTELLIGENCE_PER_BONUS",
]


# =============================================================================
# CONSTANTS
# =============================================================================

STRENGTH_PER_BONUS = 10
STRENGTH_LIFE_PER_BONUS = 2
STRENGTH_PHYS_PERCENT_PER_BONUS = 2

ACCURACY_PER_DEXTERITY = 2
DEXTERITY_PER_EVASION_BONUS = 5
EVASION_PERCENT_PER_BONUS = 2

INTELLIGENCE_PER_BONUS = 10
INTELLIGENCE_MANA_PER_BONUS = 2
INTELLIGENCE_ELEMENTAL_PERCENT_PER_BONUS = 2

# Legacy item key folded into increased_attack_speed
ITEM_ATTACK_SPEED_KEY = "attack_speed"


@dataclass
class EffectiveStats(PlayerStats):
    """PlayerStats after gear and attributes, plus derived numbers.

    attack_speed holds the effective attacks per second.
    """

    dps: float = 0.0
    average_hit: float = 0.0  # crit-weighted
    effective_hp: float = 0.0


_BASE_FIELDS = [f.name for f in fields(PlayerStats)]


def get_default_player_stats() -> PlayerStats:
    """Stats of a fresh level 1 character."""
    return PlayerStats(
        strength=10,
        dexterity=10,
        intelligence=10,
        physical_damage_min=4,
        physical_damage_max=7,
        attack_speed=1.0,
        critical_chance=5,
        critical_multiplier=150,
        accuracy=100,
        max_life=80,
        max_mana=40,
        life_regeneration=1,
        mana_regeneration=2,
    )


def effective_crit_multiplier(critical_chance: float, critical_multiplier: float) -> float:
    """Average damage factor from crits: 1 + chance * (multiplier - 100%)."""
    return 1 + (critical_chance / 100) * ((critical_multiplier - 100) / 100)


def compute_player_stats(player: Player) -> EffectiveStats:
    """
    Compute effective combat stats for a player.

    Args:
        player: Player whose base stats and equipment are read (not modified)

    Returns:
        EffectiveStats with attack_speed replaced by the effective value
    """
    stats = player.stats.copy()

    for item in player.equipped_items():
        for key, value in item.stats.items():
            if key == ITEM_ATTACK_SPEED_KEY:
                stats.increased_attack_speed += value
                continue
            stats.add(key, value)

    # Attributes
    str_bonus = math.floor(stats.strength / STRENGTH_PER_BONUS)
    stats.max_life += str_bonus * STRENGTH_LIFE_PER_BONUS
    stats.increased_physical_damage += str_bonus * STRENGTH_PHYS_PERCENT_PER_BONUS

    stats.accuracy += stats.dexterity * ACCURACY_PER_DEXTERITY
    dex_evasion_bonus = math.floor(stats.dexterity / DEXTERITY_PER_EVASION_BONUS) * EVASION_PERCENT_PER_BONUS
    stats.evasion = math.floor(stats.evasion * (1 + dex_evasion_bonus / 100))

    int_bonus = math.floor(stats.intelligence / INTELLIGENCE_PER_BONUS)
    stats.max_mana += int_bonus * INTELLIGENCE_MANA_PER_BONUS
    int_elemental_bonus = int_bonus * INTELLIGENCE_ELEMENTAL_PERCENT_PER_BONUS
    stats.increased_fire_damage += int_elemental_bonus
    stats.increased_cold_damage += int_elemental_bonus
    stats.increased_lightning_damage += int_elemental_bonus

    # Damage
    phys = (stats.physical_damage_min + stats.physical_damage_max) / 2
    fire = (stats.fire_damage_min + stats.fire_damage_max) / 2
    cold = (stats.cold_damage_min + stats.cold_damage_max) / 2
    lightning = (stats.lightning_damage_min + stats.lightning_damage_max) / 2

    average_hit = (
        phys * (1 + stats.increased_physical_damage / 100)
        + fire * (1 + stats.increased_fire_damage / 100)
        + cold * (1 + stats.increased_cold_damage / 100)
        + lightning * (1 + stats.increased_lightning_damage / 100)
    )
    effective_hit = average_hit * effective_crit_multiplier(
        stats.critical_chance, stats.critical_multiplier
    )
    effective_attack_speed = stats.attack_speed * (1 + stats.increased_attack_speed / 100)

    effective = EffectiveStats(**{name: getattr(stats, name) for name in _BASE_FIELDS})
    effective.attack_speed = effective_attack_speed
    effective.average_hit = effective_hit
    effective.dps = effective_hit * effective_attack_speed
    effective.effective_hp = stats.max_life
    return effective
