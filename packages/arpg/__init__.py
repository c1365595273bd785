"""
Idle ARPG Engine

Deterministic simulation core for an idle action RPG: automatic combat against
spawning monsters, affix-rolled loot, skill gems with linked supports, and
map/boss progression.

Core subsystems:
- state: RNG streams (XorShift128), player state, combat state and log
- content: Monsters, bosses, skills, support gems, item bases, affixes, maps, currency
- calc: Stat aggregation, hit/damage formulas, skill resolution
- generation: Loot and affix rolling, monster spawning and targeting
- handlers: Player intents (maps and bosses, skills and gems, inventory)
- progression: Character and gem experience tables

Usage:
    from packages.arpg import GameRunner

    runner = GameRunner(seed="BEACH42")
    runner.select_map("twilightBeach")
    runner.advance(120.0)
    print(runner.player.level, len(runner.player.inventory))

    from packages.arpg import run_parallel, summarize_runs
    summary = summarize_runs(run_parallel(seeds=range(4), seconds=900))
"""

__version__ = "0.1.0"

# RNG System
from .state.rng import XorShift128, Random, GameRNG, RNGStream, seed_to_long

# State
from .state.player import (
    EquipmentSlot, ItemRarity, DamageType, CurrencyType, FlaskType,
    PlayerStats, Affix, Item, Flask, PlayerSkill, PlayerSupportGem, Player,
)
from .state.combat import (
    MonsterRarity, CombatState, LogType, BossSkillState, Monster,
    MapProgress, CombatLog, CombatLogEntry, GameState,
)

# Content
from .content.catalog import Catalog, DEFAULT_CATALOG

# Calculations
from .calc.stats import EffectiveStats, compute_player_stats, get_default_player_stats
from .calc.damage import (
    calculate_hit_chance,
    calculate_monster_damage,
    roll_player_damage,
    apply_bleed,
    bleed_dps_for_hit,
)
from .calc.skills import (
    SkillRuntimeStats,
    get_skill_runtime_stats,
    get_socketed_support_gems,
    estimate_skill_damage_range,
)

# Generation
from .generation.loot import (
    LootResult, generate_loot, generate_item, generate_item_by_base_id, roll_affix,
)
from .generation.monsters import spawn_monster, spawn_boss, spawn_map_monster, get_best_target

# Progression
from .progression import get_experience_for_level, check_level_up, apply_level_up

# Handlers
from .handlers import IntentResult, MapTracker, SkillHandler, InventoryHandler

# Engine and facade
from .config import EngineConfig
from .combat_engine import CombatEngine, TickResult
from .game import (
    GameRunner, RunResult, run_headless, run_parallel,
    create_initial_player, create_initial_state,
)
from .analysis import FarmingSummary, summarize_runs

__all__ = [
    # RNG
    "XorShift128", "Random", "GameRNG", "RNGStream", "seed_to_long",
    # State
    "EquipmentSlot", "ItemRarity", "DamageType", "CurrencyType", "FlaskType",
    "PlayerStats", "Affix", "Item", "Flask", "PlayerSkill", "PlayerSupportGem", "Player",
    "MonsterRarity", "CombatState", "LogType", "BossSkillState", "Monster",
    "MapProgress", "CombatLog", "CombatLogEntry", "GameState",
    # Content
    "Catalog", "DEFAULT_CATALOG",
    # Calculations
    "EffectiveStats", "compute_player_stats", "get_default_player_stats",
    "calculate_hit_chance", "calculate_monster_damage", "roll_player_damage",
    "apply_bleed", "bleed_dps_for_hit",
    "SkillRuntimeStats", "get_skill_runtime_stats", "get_socketed_support_gems",
    "estimate_skill_damage_range",
    # Generation
    "LootResult", "generate_loot", "generate_item", "generate_item_by_base_id", "roll_affix",
    "spawn_monster", "spawn_boss", "spawn_map_monster", "get_best_target",
    # Progression
    "get_experience_for_level", "check_level_up", "apply_level_up",
    # Handlers
    "IntentResult", "MapTracker", "SkillHandler", "InventoryHandler",
    # Engine
    "EngineConfig", "CombatEngine", "TickResult",
    "GameRunner", "RunResult", "run_headless", "run_parallel",
    "create_initial_player", "create_initial_state",
    "FarmingSummary", "summarize_runs",
]
