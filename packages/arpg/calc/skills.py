"""
Skill Resolver - effective runtime numbers for a skill gem and its linked supports.

Per-gem-level tables are indexed [level - 1], clamped to the table bounds, and
fall back to the scalar base value when a gem defines no table.

Support modifiers are applied in this order, only for supports that are both
linked to the skill and compatible with its type:
1. more damage (multiplicative)
2. cooldown multiplier
3. attack speed more% (divides cooldown)
4. mana multiplier
5. added flat damage
6. added hits (each new hit starts at 1.0x)
7. second hit less damage (scales hit slot 1)
8. physical as extra fire, chance to bleed, more bleeding (additive)

Usage:
    runtime = get_skill_runtime_stats(skill_def, player_skill, player.support_gems)
    estimate = estimate_skill_damage_range(runtime, compute_player_stats(player))
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from ..content.catalog import DEFAULT_CATALOG, Catalog
from ..content.definitions import SkillDefinition, SupportGemDefinition
from ..state.player import PlayerSkill, PlayerStats, PlayerSupportGem
from ..state.rng import Random
from .damage import roll_player_damage

__all__ = [
    "SkillRuntimeStats",
    "SkillDamageEstimate",
    "SkillHit",
    "get_leveled_value",
    "get_socketed_support_gems",
    "get_skill_runtime_stats",
    "estimate_skill_damage_range",
    "roll_skill_damage",
]


@dataclass
class SkillRuntimeStats:
    skill_id: str
    mana_cost: int
    cooldown: float
    damage_multiplier: float
    hit_damage_multipliers: List[float]
    added_damage_min: float = 0.0
    added_damage_max: float = 0.0
    aoe_radius: int = 1
    crit_bonus_chance: float = 0.0
    lifesteal_percent: float = 0.0
    double_damage_chance: float = 0.0
    physical_as_extra_fire_percent: float = 0.0
    chance_to_bleed_percent: float = 0.0
    more_bleeding_damage_percent: float = 0.0
    supports: List[SupportGemDefinition] = field(default_factory=list)

    @property
    def number_of_hits(self) -> int:
        return len(self.hit_damage_multipliers)

    @property
    def total_hit_multiplier(self) -> float:
        return sum(self.hit_damage_multipliers)


@dataclass
class SkillDamageEstimate:
    min_damage: float
    max_damage: float

    @property
    def average_damage(self) -> float:
        return (self.min_damage + self.max_damage) / 2


@dataclass
class SkillHit:
    """One resolved skill use before it is applied to targets."""

    damage: float
    physical_damage: float
    is_crit: bool = False
    is_double_damage: bool = False


# =============================================================================
# LEVEL TABLES
# =============================================================================


def get_leveled_value(table: Optional[Sequence[float]], level: int, base: float) -> float:
    """Value for a gem level from a per-level table, or base without a table."""
    if not table:
        return base
    index = max(0, min(len(table) - 1, level - 1))
    return table[index]


# =============================================================================
# RESOLUTION
# =============================================================================


def get_socketed_support_gems(
    player_skill: PlayerSkill,
    support_gems: Sequence[PlayerSupportGem],
    catalog: Catalog = DEFAULT_CATALOG,
) -> List[Tuple[PlayerSupportGem, SupportGemDefinition]]:
    """Owned support instances linked to a skill, with their definitions, in link order."""
    by_instance = {gem.instance_id: gem for gem in support_gems}
    linked = []
    for instance_id in player_skill.socketed_support_ids:
        gem = by_instance.get(instance_id)
        if gem is None:
            continue
        definition = catalog.get_support_gem(gem.definition_id)
        if definition is None:
            continue
        linked.append((gem, definition))
    return linked


def get_skill_runtime_stats(
    skill_def: SkillDefinition,
    player_skill: PlayerSkill,
    support_gems: Sequence[PlayerSupportGem] = (),
    catalog: Catalog = DEFAULT_CATALOG,
) -> SkillRuntimeStats:
    """
    Resolve a skill's effective numbers at its gem level with linked supports.

    Args:
        skill_def: Skill definition
        player_skill: Owned gem (level and links)
        support_gems: The player's support gem instances
        catalog: Content catalog for support definitions

    Returns:
        SkillRuntimeStats (mana >= 0 rounded, cooldown >= 0, at least one hit)
    """
    level = player_skill.level
    mana = get_leveled_value(skill_def.mana_cost_by_level, level, skill_def.mana_cost)
    multiplier = get_leveled_value(
        skill_def.damage_multiplier_by_level, level, skill_def.damage_multiplier
    )
    double_damage = get_leveled_value(
        skill_def.double_damage_chance_by_level, level, skill_def.double_damage_chance
    )
    cooldown = skill_def.cooldown
    added_min = skill_def.added_damage_min
    added_max = skill_def.added_damage_max
    hits = [1.0] * max(1, skill_def.number_of_hits)
    extra_fire = 0.0
    bleed_chance = 0.0
    more_bleed = 0.0
    second_hit_less_factors: List[float] = []
    applied: List[SupportGemDefinition] = []

    for gem, support in get_socketed_support_gems(player_skill, support_gems, catalog):
        if not support.supports(skill_def.skill_type):
            continue
        applied.append(support)

        if support.more_damage_multiplier:
            multiplier *= 1 + support.more_damage_multiplier
        if support.cooldown_multiplier:
            cooldown *= support.cooldown_multiplier
        attack_speed_more = get_leveled_value(
            support.attack_speed_more_percent_by_level, gem.level, support.attack_speed_more_percent
        )
        if attack_speed_more:
            cooldown /= 1 + attack_speed_more / 100
        if support.mana_multiplier:
            mana *= support.mana_multiplier
        added_min += support.added_damage_min
        added_max += support.added_damage_max
        hits.extend([1.0] * support.added_hits)

        second_hit_less = get_leveled_value(
            support.second_hit_less_damage_percent_by_level,
            gem.level,
            support.second_hit_less_damage_percent,
        )
        if second_hit_less:
            second_hit_less_factors.append(1 - second_hit_less / 100)

        extra_fire += get_leveled_value(
            support.physical_as_extra_fire_percent_by_level,
            gem.level,
            support.physical_as_extra_fire_percent,
        )
        bleed_chance += get_leveled_value(
            support.chance_to_bleed_percent_by_level, gem.level, support.chance_to_bleed_percent
        )
        more_bleed += get_leveled_value(
            support.more_bleeding_damage_percent_by_level,
            gem.level,
            support.more_bleeding_damage_percent,
        )

    # Applied once every linked support has added its hits
    if len(hits) > 1:
        for factor in second_hit_less_factors:
            hits[1] *= factor

    return SkillRuntimeStats(
        skill_id=skill_def.id,
        mana_cost=max(0, round(mana)),
        cooldown=max(0.0, cooldown),
        damage_multiplier=multiplier,
        hit_damage_multipliers=hits,
        added_damage_min=added_min,
        added_damage_max=added_max,
        aoe_radius=skill_def.aoe_radius or 1,
        crit_bonus_chance=skill_def.crit_bonus_chance,
        lifesteal_percent=skill_def.lifesteal_percent,
        double_damage_chance=double_damage,
        physical_as_extra_fire_percent=extra_fire,
        chance_to_bleed_percent=bleed_chance,
        more_bleeding_damage_percent=more_bleed,
        supports=applied,
    )


# =============================================================================
# DAMAGE
# =============================================================================


def _extra_fire(physical: float, runtime: SkillRuntimeStats, stats: PlayerStats) -> float:
    return (
        physical
        * runtime.physical_as_extra_fire_percent / 100
        * (1 + stats.increased_fire_damage / 100)
    )


def estimate_skill_damage_range(
    runtime: SkillRuntimeStats, stats: PlayerStats
) -> SkillDamageEstimate:
    """
    Non-crit min/max damage of one skill use, for display.

    Args:
        runtime: Resolved skill numbers
        stats: Player effective stats

    Returns:
        SkillDamageEstimate with all hits summed
    """
    phys_scale = 1 + stats.increased_physical_damage / 100
    phys_min = stats.physical_damage_min * phys_scale
    phys_max = stats.physical_damage_max * phys_scale
    elemental_min = (
        stats.fire_damage_min * (1 + stats.increased_fire_damage / 100)
        + stats.cold_damage_min * (1 + stats.increased_cold_damage / 100)
        + stats.lightning_damage_min * (1 + stats.increased_lightning_damage / 100)
    )
    elemental_max = (
        stats.fire_damage_max * (1 + stats.increased_fire_damage / 100)
        + stats.cold_damage_max * (1 + stats.increased_cold_damage / 100)
        + stats.lightning_damage_max * (1 + stats.increased_lightning_damage / 100)
    )

    low = (phys_min + elemental_min) * runtime.damage_multiplier
    high = (phys_max + elemental_max) * runtime.damage_multiplier
    low += _extra_fire(phys_min * runtime.damage_multiplier, runtime, stats)
    high += _extra_fire(phys_max * runtime.damage_multiplier, runtime, stats)
    low += runtime.added_damage_min
    high += runtime.added_damage_max

    total_hits = runtime.total_hit_multiplier
    return SkillDamageEstimate(min_damage=low * total_hits, max_damage=high * total_hits)


def roll_skill_damage(
    runtime: Optional[SkillRuntimeStats], stats: PlayerStats, rng: Random
) -> SkillHit:
    """
    Roll one skill use. A None runtime is a bare weapon hit.

    Args:
        runtime: Resolved skill numbers, or None
        stats: Player effective stats
        rng: Combat stream

    Returns:
        SkillHit with unrounded damage for all hits combined
    """
    weapon = roll_player_damage(stats, rng)
    if runtime is None:
        return SkillHit(
            damage=weapon.damage,
            physical_damage=weapon.physical_damage,
            is_crit=weapon.is_crit,
        )

    damage = weapon.damage * runtime.damage_multiplier
    physical = weapon.physical_damage * runtime.damage_multiplier
    is_crit = weapon.is_crit

    if runtime.physical_as_extra_fire_percent > 0:
        damage += _extra_fire(physical, runtime, stats)

    if runtime.added_damage_max > 0:
        damage += runtime.added_damage_min + rng.random_float() * (
            runtime.added_damage_max - runtime.added_damage_min
        )

    if runtime.crit_bonus_chance > 0 and not is_crit:
        if rng.random_percent() < runtime.crit_bonus_chance:
            crit_mult = stats.critical_multiplier / 100
            damage *= crit_mult
            physical *= crit_mult
            is_crit = True

    total_hits = runtime.total_hit_multiplier
    damage *= total_hits
    physical *= total_hits

    is_double = False
    if runtime.double_damage_chance > 0 and rng.random_percent() < runtime.double_damage_chance:
        damage *= 2
        physical *= 2
        is_double = True

    return SkillHit(
        damage=max(0.0, damage),
        physical_damage=max(0.0, physical),
        is_crit=is_crit,
        is_double_damage=is_double,
    )

