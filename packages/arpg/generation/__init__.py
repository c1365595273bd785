"""
Generation module - loot, affixes and monster spawning.
"""

from .loot import (
    LootResult,
    generate_loot,
    generate_item,
    generate_item_by_base_id,
    roll_affix,
    roll_affix_value,
    compute_item_stats,
    roll_currency_drop,
    roll_socket_orb_drop,
    roll_item_rarity,
    pick_item_base,
)
from .monsters import (
    spawn_monster,
    spawn_boss,
    spawn_map_monster,
    roll_monster_rarity,
    get_level_multiplier,
    get_next_position_index,
    get_best_target,
    get_targets,
    is_in_melee_range,
    SPAWN_DISTANCE,
    MELEE_RANGE,
)

__all__ = [
    # Loot
    "LootResult", "generate_loot", "generate_item", "generate_item_by_base_id",
    "roll_affix", "roll_affix_value", "compute_item_stats", "roll_currency_drop",
    "roll_socket_orb_drop", "roll_item_rarity", "pick_item_base",
    # Monsters
    "spawn_monster", "spawn_boss", "spawn_map_monster", "roll_monster_rarity",
    "get_level_multiplier", "get_next_position_index", "get_best_target",
    "get_targets", "is_in_melee_range", "SPAWN_DISTANCE", "MELEE_RANGE",
]
