"""
Progression Ledger - character experience table and gem level tables.

Character levels are automatic: a kill that pushes experience past the
threshold levels the character once, keeping the overflow. Gem levels are a
player action: crossing a gem's threshold only makes the upgrade available,
and each gem level also needs a minimum character level.

Usage:
    if check_level_up(player):
        apply_level_up(player, stats.max_life, stats.max_mana)

    if can_gem_level_up(skill.level, skill.experience, definition.gem_total_experience_by_level):
        ...
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence

from .state.player import Player

__all__ = [
    "XP_TABLE",
    "MAX_CHARACTER_LEVEL",
    "GEM_TOTAL_EXPERIENCE_BY_LEVEL",
    "GEM_MAX_LEVEL",
    "LevelUpResult",
    "get_experience_for_level",
    "check_level_up",
    "apply_level_up",
    "get_gem_total_experience_for_level",
    "get_gem_next_level_total_experience",
    "can_gem_level_up",
    "get_gem_required_character_level",
]


# =============================================================================
# CHARACTER EXPERIENCE
# =============================================================================

MAX_CHARACTER_LEVEL = 100

# XP_TABLE[level] = experience needed to go from level to level + 1
XP_TABLE: List[int] = [
    0, 525, 1235, 2021, 3403, 5002, 7138, 10053, 13804, 18512, 24297, 31516, 39878,
    50352, 62261, 76465, 92806, 112027, 133876, 158538, 187025, 218895, 255366,
    295852, 341805, 392470, 449555, 512121, 583857, 662181, 747411, 844146, 949053,
    1064952, 1192712, 1333241, 1487491, 1656447, 1841143, 2046202, 2265837,
    2508528, 2776124, 3061734, 3379914, 3723676, 4099570, 4504444, 4951099,
    5430907, 5957868, 6528910, 7153414, 7827968, 8555414, 9353933, 10212541,
    11142646, 12157041, 13252160, 14441758, 15731508, 17127265, 18635053, 20271765,
    22044909, 23950783, 26019833, 28261412, 30672515, 33287878, 36118904, 39163425,
    42460810, 46024718, 49853964, 54008554, 58473753, 63314495, 68516464, 74132190,
    80182477, 86725730, 93748717, 101352108, 109524907, 118335069, 127813148,
    138033822, 149032822, 160890604, 173648795, 187372170, 202153736, 218041909,
    235163399, 253547862, 273358532, 294631836, 317515914, 0,
]


@dataclass
class LevelUpResult:
    leveled: bool
    new_level: int
    experience_to_next_level: float


def get_experience_for_level(level: int) -> int:
    """Experience needed to advance from level to level + 1 (0 at the cap)."""
    if level < 1:
        return XP_TABLE[1]
    if level >= MAX_CHARACTER_LEVEL:
        return 0
    return XP_TABLE[level]


def check_level_up(player: Player) -> bool:
    if player.level >= MAX_CHARACTER_LEVEL:
        return False
    return player.experience >= player.experience_to_next_level


def apply_level_up(player: Player, max_life: float, max_mana: float) -> LevelUpResult:
    """
    Level the player once if eligible.

    Overflow experience carries over. Life and mana refill to the given
    maximums (recomputed by the caller). Base stats do not change.

    Args:
        player: Player to mutate
        max_life: Effective max life after the level-up
        max_mana: Effective max mana after the level-up

    Returns:
        LevelUpResult
    """
    if not check_level_up(player):
        return LevelUpResult(False, player.level, player.experience_to_next_level)

    player.experience -= player.experience_to_next_level
    player.level += 1
    player.experience_to_next_level = get_experience_for_level(player.level)
    player.current_life = max_life
    player.current_mana = max_mana
    return LevelUpResult(True, player.level, player.experience_to_next_level)


# =============================================================================
# GEM EXPERIENCE
# =============================================================================

# Cumulative experience to reach each gem level (level 1 at index 0)
GEM_TOTAL_EXPERIENCE_BY_LEVEL: List[int] = [
    0, 15249, 56766, 138749, 286717, 537274, 942360, 1390078, 2005396, 2840035,
    4410795, 6044782, 8195812, 11008001, 16107361, 25508092, 40781458, 67068040,
    129958630, 342004647,
]

GEM_MAX_LEVEL = len(GEM_TOTAL_EXPERIENCE_BY_LEVEL)


def _experience_table(table: Optional[Sequence[float]]) -> Sequence[float]:
    return table if table else GEM_TOTAL_EXPERIENCE_BY_LEVEL


def get_gem_total_experience_for_level(
    level: int, table: Optional[Sequence[float]] = None
) -> float:
    table = _experience_table(table)
    if level <= 1:
        return table[0]
    if level >= len(table):
        return table[-1]
    return table[level - 1]


def get_gem_next_level_total_experience(
    level: int, table: Optional[Sequence[float]] = None
) -> Optional[float]:
    """Cumulative experience for level + 1, or None at the table's max level."""
    table = _experience_table(table)
    if level >= len(table):
        return None
    return table[level]


def can_gem_level_up(
    level: int, experience: float, table: Optional[Sequence[float]] = None
) -> bool:
    next_total = get_gem_next_level_total_experience(level, table)
    if next_total is None:
        return False
    return experience >= next_total


def get_gem_required_character_level(
    gem_level: int,
    base_required_level: int,
    required_by_gem_level: Optional[Sequence[int]] = None,
) -> int:
    """
    Character level needed to hold a gem at gem_level.

    Falls back to the gem's base required level without a table.
    """
    if gem_level <= 1:
        if required_by_gem_level:
            return required_by_gem_level[0]
        return base_required_level
    if required_by_gem_level:
        index = max(0, min(len(required_by_gem_level) - 1, gem_level - 1))
        return required_by_gem_level[index]
    return base_required_level
