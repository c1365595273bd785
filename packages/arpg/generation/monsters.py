"""
Monster Factory - spawn monsters and bosses from definitions, pick targets.

Scaling:
    level multiplier = 1.1 ** (level - 1)
    scaled = floor(base * level multiplier)
    life/damage/experience = floor(scaled * rarity multiplier)

Rarity multipliers (normal / magic / rare / boss):
    life   1 / 2   / 4   / 10
    damage 1 / 1.3 / 1.6 / 2
    loot   1 / 2   / 4   / 10
    exp    1 / 1.5 / 2.5 / 5
    speed  1 / 0.9 / 0.8 / 0.6
"""

from __future__ import annotations

import logging
import math
from typing import Dict, List, Optional, Sequence

from ..content.catalog import DEFAULT_CATALOG, Catalog
from ..content.definitions import GameMap
from ..state.combat import (
    RARITY_PRIORITY,
    BossSkillState,
    IdSequence,
    Monster,
    MonsterRarity,
)
from ..state.rng import Random

logger = logging.getLogger(__name__)

__all__ = [
    "spawn_monster",
    "spawn_boss",
    "spawn_map_monster",
    "roll_monster_rarity",
    "get_level_multiplier",
    "scale_for_level",
    "get_next_position_index",
    "get_best_target",
    "get_targets",
    "is_in_melee_range",
    # Constants
    "SPAWN_DISTANCE",
    "MELEE_RANGE",
    "BASE_MOVE_SPEED",
    "MAX_POSITIONS",
]


# =============================================================================
# CONSTANTS
# =============================================================================

SPAWN_DISTANCE = 100.0
MELEE_RANGE = 5.0
BASE_MOVE_SPEED = 35.0
MAX_POSITIONS = 10
LEVEL_SCALING = 1.1

RARE_MONSTER_CHANCE = 2.0
MAGIC_MONSTER_CHANCE = 10.0  # cumulative with rare

LIFE_MULT: Dict[MonsterRarity, float] = {
    MonsterRarity.NORMAL: 1, MonsterRarity.MAGIC: 2, MonsterRarity.RARE: 4, MonsterRarity.BOSS: 10,
}
DAMAGE_MULT: Dict[MonsterRarity, float] = {
    MonsterRarity.NORMAL: 1, MonsterRarity.MAGIC: 1.3, MonsterRarity.RARE: 1.6, MonsterRarity.BOSS: 2,
}
LOOT_MULT: Dict[MonsterRarity, float] = {
    MonsterRarity.NORMAL: 1, MonsterRarity.MAGIC: 2, MonsterRarity.RARE: 4, MonsterRarity.BOSS: 10,
}
EXP_MULT: Dict[MonsterRarity, float] = {
    MonsterRarity.NORMAL: 1, MonsterRarity.MAGIC: 1.5, MonsterRarity.RARE: 2.5, MonsterRarity.BOSS: 5,
}
MOVE_SPEED_MULT: Dict[MonsterRarity, float] = {
    MonsterRarity.NORMAL: 1, MonsterRarity.MAGIC: 0.9, MonsterRarity.RARE: 0.8, MonsterRarity.BOSS: 0.6,
}


def get_level_multiplier(level: int) -> float:
    return LEVEL_SCALING ** (level - 1)


def scale_for_level(base: float, level: int) -> int:
    """Base value scaled to a monster level, floored."""
    return math.floor(base * get_level_multiplier(level))


def roll_monster_rarity(rng: Random) -> MonsterRarity:
    roll = rng.random_percent()
    if roll < RARE_MONSTER_CHANCE:
        return MonsterRarity.RARE
    if roll < MAGIC_MONSTER_CHANCE:
        return MonsterRarity.MAGIC
    return MonsterRarity.NORMAL


# =============================================================================
# SPAWNING
# =============================================================================


def spawn_monster(
    definition_id: str,
    level: int,
    position_index: int,
    rng: Random,
    ids: IdSequence,
    forced_rarity: Optional[MonsterRarity] = None,
    catalog: Catalog = DEFAULT_CATALOG,
) -> Optional[Monster]:
    """
    Spawn a monster at the edge of the arena.

    Args:
        definition_id: Monster definition id
        level: Monster level (usually the map level)
        position_index: Arena slot
        rng: Monster stream (rarity roll)
        ids: Instance id source
        forced_rarity: Skip the rarity roll
        catalog: Content catalog

    Returns:
        New Monster, or None for an unknown definition
    """
    definition = catalog.get_monster(definition_id)
    if definition is None:
        logger.debug("Unknown monster %s", definition_id)
        return None

    rarity = forced_rarity if forced_rarity is not None else roll_monster_rarity(rng)
    max_life = math.floor(scale_for_level(definition.base_life, level) * LIFE_MULT[rarity])
    name = definition.name
    if rarity != MonsterRarity.NORMAL:
        name = f"{rarity.value.capitalize()} {definition.name}"

    return Monster(
        id=ids.next("monster"),
        definition_id=definition.id,
        name=name,
        level=level,
        rarity=rarity,
        max_life=max_life,
        current_life=max_life,
        damage=math.floor(scale_for_level(definition.base_damage, level) * DAMAGE_MULT[rarity]),
        attack_speed=definition.attack_speed,
        damage_type=definition.damage_type,
        experience_reward=math.floor(scale_for_level(definition.experience_reward, level) * EXP_MULT[rarity]),
        loot_bonus=definition.loot_bonus * LOOT_MULT[rarity],
        position_index=position_index,
        distance=SPAWN_DISTANCE,
        move_speed=BASE_MOVE_SPEED * MOVE_SPEED_MULT[rarity],
    )


def spawn_boss(
    boss_id: str,
    map_level: int,
    ids: IdSequence,
    catalog: Catalog = DEFAULT_CATALOG,
) -> Optional[Monster]:
    """
    Spawn a map boss. Boss definitions are already tuned, so only the level
    multiplier applies.

    Returns:
        New boss Monster at position 0 with every skill ready, or None
    """
    definition = catalog.get_boss(boss_id)
    if definition is None:
        logger.debug("Unknown boss %s", boss_id)
        return None

    max_life = scale_for_level(definition.base_life, map_level)
    return Monster(
        id=ids.next("monster"),
        definition_id=definition.id,
        name=definition.name,
        level=map_level,
        rarity=MonsterRarity.BOSS,
        max_life=max_life,
        current_life=max_life,
        damage=scale_for_level(definition.base_damage, map_level),
        attack_speed=definition.attack_speed,
        damage_type=definition.damage_type,
        experience_reward=scale_for_level(definition.experience_reward, map_level),
        loot_bonus=definition.loot_bonus,
        position_index=0,
        distance=SPAWN_DISTANCE,
        move_speed=BASE_MOVE_SPEED * MOVE_SPEED_MULT[MonsterRarity.BOSS],
        skill_states=[BossSkillState(skill_id=skill.id) for skill in definition.skills],
    )


def spawn_map_monster(
    game_map: GameMap,
    monsters: Sequence[Monster],
    rng: Random,
    ids: IdSequence,
    catalog: Catalog = DEFAULT_CATALOG,
) -> Optional[Monster]:
    """Spawn a random monster from a map's pool in the next free arena slot."""
    if not game_map.monster_pool:
        return None
    definition_id = rng.choice(game_map.monster_pool)
    return spawn_monster(
        definition_id,
        game_map.monster_level,
        get_next_position_index(monsters),
        rng,
        ids,
        catalog=catalog,
    )


def get_next_position_index(monsters: Sequence[Monster], max_positions: int = MAX_POSITIONS) -> int:
    """First arena slot no live monster occupies."""
    taken = {m.position_index for m in monsters if not m.is_dead}
    for index in range(max_positions):
        if index not in taken:
            return index
    return len(monsters)


# =============================================================================
# TARGETING
# =============================================================================


def is_in_melee_range(monster: Monster) -> bool:
    return monster.distance <= MELEE_RANGE


def get_targets(monsters: Sequence[Monster], count: int = 1) -> List[Monster]:
    """
    Live monsters in melee range, best first: highest rarity priority, then
    lowest current life.
    """
    in_range = [m for m in monsters if not m.is_dead and is_in_melee_range(m)]
    in_range.sort(key=lambda m: (-RARITY_PRIORITY[m.rarity], m.current_life))
    return in_range[:max(0, count)]


def get_best_target(monsters: Sequence[Monster]) -> Optional[Monster]:
    targets = get_targets(monsters, 1)
    return targets[0] if targets else None
