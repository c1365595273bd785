"""
Map/Boss Progression Tracker - map selection, boss gating and unlocks.

Combat state machine:
    idle --select_map--> fighting --stop_farming / player death--> idle

Inside fighting, per map and per clear:
    not ready --kills >= required--> boss ready --start_boss_fight--> boss fight
    boss fight --boss killed--> not ready (kill counter reset, next map unlocked)

Auto boss spawn skips the "boss ready" wait but can only be switched on after
the map's boss has been beaten once.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from ..config import EngineConfig
from ..content.catalog import DEFAULT_CATALOG, Catalog
from ..content.definitions import GameMap
from ..generation.monsters import spawn_boss, spawn_map_monster
from ..state.combat import CombatState, GameState, LogType, MapProgress, Monster
from ..state.rng import GameRNG
from .results import IntentResult, accept, ignore, reject

logger = logging.getLogger(__name__)


class MapTracker:
    """
    Map selection and boss progression.

    Usage:
        MapTracker.select_map(state, "twilightBeach", rng, config)
        if state.boss_ready:
            MapTracker.start_boss_fight(state)
    """

    # -------------------------------------------------------------------------
    # Progress bookkeeping
    # -------------------------------------------------------------------------

    @staticmethod
    def get_progress(state: GameState, map_id: str) -> MapProgress:
        """Progress for a map, created on first use."""
        progress = state.map_progress.get(map_id)
        if progress is None:
            progress = MapProgress(map_id=map_id)
            state.map_progress[map_id] = progress
        return progress

    @staticmethod
    def boss_condition_met(progress: MapProgress, game_map: GameMap) -> bool:
        return progress.kill_count >= game_map.kills_required and not progress.boss_defeated

    @staticmethod
    def can_auto_spawn_boss(progress: MapProgress) -> bool:
        return progress.auto_boss_spawn and progress.times_cleared > 0

    @staticmethod
    def record_boss_clear(
        progress: MapProgress,
        unlocked_map_ids: List[str],
        catalog: Catalog = DEFAULT_CATALOG,
    ) -> List[GameMap]:
        """
        Apply a boss kill to a map's progress.

        Increments times_cleared, resets the kill counter and unlocks every map
        that requires this one.

        Returns:
            Maps unlocked by this clear
        """
        progress.boss_defeated = True
        progress.times_cleared += 1

        unlocked = []
        for next_map in catalog.maps_unlocked_by(progress.map_id):
            if next_map.id not in unlocked_map_ids:
                unlocked_map_ids.append(next_map.id)
                unlocked.append(next_map)

        progress.kill_count = 0
        progress.boss_defeated = False
        return unlocked

    # -------------------------------------------------------------------------
    # Intents
    # -------------------------------------------------------------------------

    @staticmethod
    def select_map(
        state: GameState,
        map_id: str,
        rng: GameRNG,
        config: Optional[EngineConfig] = None,
        catalog: Catalog = DEFAULT_CATALOG,
    ) -> IntentResult:
        """
        Enter a map and start fighting with one monster already spawned.

        Locked or unknown maps are ignored.
        """
        config = config or EngineConfig()
        game_map = catalog.get_map(map_id)
        if game_map is None:
            return ignore(f"unknown map {map_id}")
        if map_id not in state.unlocked_map_ids:
            return ignore(f"map {map_id} is locked")

        MapTracker.get_progress(state, map_id)
        first = spawn_map_monster(game_map, [], rng.monster, state.ids, catalog)

        state.current_map_id = map_id
        state.combat_state = CombatState.FIGHTING
        state.monsters = [first] if first else []
        state.is_boss_fight = False
        state.boss_ready = False
        state.spawn_interval = game_map.spawn_interval or config.default_spawn_interval
        state.spawn_timer = state.spawn_interval
        state.max_monsters = config.max_monsters
        state.player_attack_cooldown = 0.0

        logger.info("Entered map %s", map_id)
        return accept(state, f"Entered {game_map.name}", LogType.PLAYER_HIT)

    @staticmethod
    def stop_farming(state: GameState) -> IntentResult:
        MapTracker.leave_combat(state)
        return accept(state, "Returned to town", LogType.PLAYER_HIT)

    @staticmethod
    def leave_combat(state: GameState) -> None:
        """Back to idle with no map and an empty arena."""
        state.current_map_id = None
        state.combat_state = CombatState.IDLE
        state.monsters = []
        state.is_boss_fight = False
        state.boss_ready = False
        state.spawn_timer = 0.0
        state.player_attack_cooldown = 0.0

    @staticmethod
    def summon_boss(state: GameState, catalog: Catalog = DEFAULT_CATALOG) -> Optional[Monster]:
        """Replace the arena with the current map's boss."""
        game_map = catalog.get_map(state.current_map_id) if state.current_map_id else None
        if game_map is None:
            return None
        boss = spawn_boss(game_map.boss_id, game_map.monster_level, state.ids, catalog)
        if boss is None:
            return None
        state.monsters = [boss]
        state.is_boss_fight = True
        state.boss_ready = False
        logger.info("Boss fight started: %s on %s", boss.name, game_map.id)
        return boss

    @staticmethod
    def start_boss_fight(state: GameState, catalog: Catalog = DEFAULT_CATALOG) -> IntentResult:
        if not state.boss_ready or state.current_map_id is None:
            return ignore("boss is not ready")
        boss = MapTracker.summon_boss(state, catalog)
        if boss is None:
            return ignore("boss could not be spawned")
        return accept(state, f"BOSS FIGHT STARTED: {boss.name}!", LogType.MONSTER_DEATH)

    @staticmethod
    def toggle_auto_boss_spawn(state: GameState) -> IntentResult:
        if state.current_map_id is None:
            return ignore("no map selected")
        progress = state.map_progress.get(state.current_map_id)
        if progress is None or progress.times_cleared == 0:
            return reject(state, "Defeat the boss once to unlock auto-spawn!")
        progress.auto_boss_spawn = not progress.auto_boss_spawn
        status = "ON" if progress.auto_boss_spawn else "OFF"
        return accept(state, f"Auto boss spawn: {status}", LogType.PLAYER_HIT)
