"""
Damage Calculator - hit chance, monster hits, player damage rolls and bleeds.

Pure functions except for the RNG streams passed in. Every random draw goes
through a `Random` so a seeded game replays exactly.

Monster hit order:
1. Hit chance from monster accuracy vs player evasion (evade roll)
2. Block roll (physical hits only)
3. Variance 0.85-1.15 on the base damage
4. Mitigation: armor for physical, capped resistance for elemental
5. Round, minimum 1

Player hit order:
1. Per damage type: uniform roll in [min, max] * (1 + increased/100)
2. Crit roll: damage * critical_multiplier / 100
3. Floor to int
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional

from ..state.combat import Monster
from ..state.player import DamageType, PlayerStats
from ..state.rng import Random

__all__ = [
    "MonsterHitResult",
    "PlayerHit",
    "calculate_hit_chance",
    "monster_accuracy",
    "calculate_monster_damage",
    "roll_player_damage",
    "bleed_dps_for_hit",
    "apply_bleed",
    # Constants
    "MIN_HIT_CHANCE",
    "MAX_HIT_CHANCE",
    "MAX_RESISTANCE",
    "MIN_MONSTER_DAMAGE",
    "BLEED_DURATION",
    "BLEED_PERCENT_OF_PHYSICAL",
]


# =============================================================================
# CONSTANTS
# =============================================================================

MIN_HIT_CHANCE = 5.0
MAX_HIT_CHANCE = 100.0
EVASION_DIVISOR = 4

MONSTER_BASE_ACCURACY = 100
MONSTER_ACCURACY_PER_LEVEL = 10

DAMAGE_VARIANCE_MIN = 0.85
DAMAGE_VARIANCE_RANGE = 0.30

ARMOR_LEVEL_FACTOR = 10
MAX_RESISTANCE = 75.0
MIN_MONSTER_DAMAGE = 1

BLEED_DURATION = 5.0  # seconds
BLEED_PERCENT_OF_PHYSICAL = 70.0

_RESISTANCE_FIELD = {
    DamageType.FIRE: "fire_resistance",
    DamageType.COLD: "cold_resistance",
    DamageType.LIGHTNING: "lightning_resistance",
}


# =============================================================================
# RESULTS
# =============================================================================


@dataclass
class MonsterHitResult:
    damage: int
    evaded: bool = False
    blocked: bool = False

    @property
    def landed(self) -> bool:
        return not self.evaded and not self.blocked


@dataclass
class PlayerHit:
    damage: int
    is_crit: bool = False
    physical_damage: float = 0.0  # physical share, crit applied, before floor


# =============================================================================
# INCOMING DAMAGE
# =============================================================================


def calculate_hit_chance(accuracy: float, evasion: float) -> float:
    """
    Chance (percent) for an attacker to hit.

    Args:
        accuracy: Attacker accuracy rating
        evasion: Defender evasion rating

    Returns:
        100 when evasion <= 0, else accuracy / (accuracy + evasion/4) clamped to [5, 100]
    """
    if evasion <= 0:
        return MAX_HIT_CHANCE
    chance = accuracy / (accuracy + evasion / EVASION_DIVISOR) * 100
    return max(MIN_HIT_CHANCE, min(MAX_HIT_CHANCE, chance))


def monster_accuracy(level: int) -> float:
    return MONSTER_BASE_ACCURACY + level * MONSTER_ACCURACY_PER_LEVEL


def calculate_monster_damage(
    monster: Monster,
    stats: PlayerStats,
    rng: Random,
    base_damage: Optional[float] = None,
    damage_type: Optional[DamageType] = None,
) -> MonsterHitResult:
    """
    Roll one monster hit (basic attack or boss skill) against the player.

    Args:
        monster: Attacker; supplies level, damage and damage type by default
        stats: Player effective stats (evasion, block, armor, resistances)
        rng: Defense stream
        base_damage: Override for boss skills (boss damage * skill multiplier)
        damage_type: Override damage type

    Returns:
        MonsterHitResult; damage is 0 when evaded or blocked, else >= 1
    """
    damage = monster.damage if base_damage is None else base_damage
    dtype = monster.damage_type if damage_type is None else damage_type

    hit_chance = calculate_hit_chance(monster_accuracy(monster.level), stats.evasion)
    if rng.random_percent() > hit_chance:
        return MonsterHitResult(damage=0, evaded=True)

    if dtype == DamageType.PHYSICAL and stats.block_chance > 0:
        if rng.random_percent() < stats.block_chance:
            return MonsterHitResult(damage=0, blocked=True)

    damage *= DAMAGE_VARIANCE_MIN + rng.random_float() * DAMAGE_VARIANCE_RANGE

    if dtype == DamageType.PHYSICAL:
        armor = max(0.0, stats.armor)
        if armor > 0:
            reduction = armor / (armor + ARMOR_LEVEL_FACTOR * monster.level)
            damage *= 1 - reduction
    else:
        resistance = getattr(stats, _RESISTANCE_FIELD[dtype])
        damage *= 1 - min(resistance, MAX_RESISTANCE) / 100

    return MonsterHitResult(damage=max(MIN_MONSTER_DAMAGE, round(damage)))


# =============================================================================
# OUTGOING DAMAGE
# =============================================================================


def _roll_range(rng: Random, low: float, high: float) -> float:
    if high <= low:
        return low
    return low + rng.random_float() * (high - low)


def roll_player_damage(stats: PlayerStats, rng: Random) -> PlayerHit:
    """
    Roll one weapon hit from effective stats.

    Args:
        stats: Player effective stats
        rng: Combat stream

    Returns:
        PlayerHit with floored total and the physical share
    """
    physical = _roll_range(rng, stats.physical_damage_min, stats.physical_damage_max)
    physical *= 1 + stats.increased_physical_damage / 100
    fire = _roll_range(rng, stats.fire_damage_min, stats.fire_damage_max)
    fire *= 1 + stats.increased_fire_damage / 100
    cold = _roll_range(rng, stats.cold_damage_min, stats.cold_damage_max)
    cold *= 1 + stats.increased_cold_damage / 100
    lightning = _roll_range(rng, stats.lightning_damage_min, stats.lightning_damage_max)
    lightning *= 1 + stats.increased_lightning_damage / 100

    total = physical + fire + cold + lightning
    is_crit = rng.random_percent() < stats.critical_chance
    if is_crit:
        crit_mult = stats.critical_multiplier / 100
        total *= crit_mult
        physical *= crit_mult

    return PlayerHit(damage=math.floor(total), is_crit=is_crit, physical_damage=physical)


# =============================================================================
# BLEED
# =============================================================================


def bleed_dps_for_hit(
    physical_damage: float,
    more_bleeding_damage: float = 0.0,
    percent_of_physical: float = BLEED_PERCENT_OF_PHYSICAL,
    duration: float = BLEED_DURATION,
) -> float:
    """Bleed DPS from a hit's physical portion, spread evenly over duration."""
    total = physical_damage * percent_of_physical / 100 * (1 + more_bleeding_damage / 100)
    return total / duration


def apply_bleed(monster: Monster, dps: float, duration: float = BLEED_DURATION) -> bool:
    """
    Apply a bleed to a monster. Bleeds never stack: a new bleed only
    replaces a running one with strictly higher DPS.

    Returns:
        True if the bleed was applied
    """
    if dps <= 0:
        return False
    if monster.has_active_bleed and dps <= monster.bleed_dps:
        return False
    monster.bleed_dps = dps
    monster.bleed_remaining_duration = duration
    return True
