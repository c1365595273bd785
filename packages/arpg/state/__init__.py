"""
State module - RNG streams, player state and combat state.
"""

from .rng import XorShift128, Random, GameRNG, RNGStream, seed_to_long
from .player import (
    EquipmentSlot, ItemRarity, DamageType, CurrencyType, FlaskType,
    PlayerStats, Affix, Item, Flask, PlayerSkill, PlayerSupportGem, Player,
    STAT_KEYS, SKILL_BAR_SIZE, FLASK_SLOTS,
    create_life_flask, create_mana_flask,
)
from .combat import (
    MonsterRarity, RARITY_PRIORITY, CombatState, LogType,
    BossSkillState, Monster, MapProgress, CombatLogEntry, CombatLog,
    IdSequence, GameState,
)

__all__ = [
    # RNG
    "XorShift128", "Random", "GameRNG", "RNGStream", "seed_to_long",
    # Player
    "EquipmentSlot", "ItemRarity", "DamageType", "CurrencyType", "FlaskType",
    "PlayerStats", "Affix", "Item", "Flask", "PlayerSkill", "PlayerSupportGem",
    "Player", "STAT_KEYS", "SKILL_BAR_SIZE", "FLASK_SLOTS",
    "create_life_flask", "create_mana_flask",
    # Combat
    "MonsterRarity", "RARITY_PRIORITY", "CombatState", "LogType",
    "BossSkillState", "Monster", "MapProgress", "CombatLogEntry", "CombatLog",
    "IdSequence", "GameState",
]
