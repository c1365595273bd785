"""
Game Runner - facade over one idle ARPG save.

This module provides the GameRunner class that owns a GameState, its RNG
streams and the tick engine. It handles:
- Fresh character creation (default stats, starter skills, flasks, currency)
- Every player intent (maps, bosses, items, skills, gems, sockets)
- Fixed-rate ticking while combat is active
- Abstract action interface for scripted drivers

Usage:
    runner = GameRunner(seed="BEACH42")
    runner.select_map("twilightBeach")
    runner.advance(60.0)  # one minute of farming
    # OR scripted:
    runner.take_action(SelectMapAction("twilightBeach"))
    runner.take_action(TickAction(0.1))
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

from .calc.stats import EffectiveStats, compute_player_stats, get_default_player_stats
from .combat_engine import CombatEngine, TickResult
from .config import EngineConfig
from .content.catalog import DEFAULT_CATALOG, Catalog
from .handlers.inventory import InventoryHandler
from .handlers.maps import MapTracker
from .handlers.results import IntentResult
from .handlers.skills import SkillHandler
from .progression import get_experience_for_level
from .state.combat import CombatLog, GameState
from .state.player import (
    EquipmentSlot,
    Player,
    PlayerSkill,
    create_life_flask,
    create_mana_flask,
)
from .state.rng import GameRNG, seed_to_long

logger = logging.getLogger(__name__)


# =============================================================================
# Character creation
# =============================================================================


def create_initial_player(
    config: Optional[EngineConfig] = None, catalog: Catalog = DEFAULT_CATALOG
) -> Player:
    """
    A level 1 character with the starter skill bar, one life and one mana
    flask, starting currency and full resources.
    """
    config = config or EngineConfig()
    player = Player(stats=get_default_player_stats(), inventory_size=config.inventory_size)

    starters = [sid for sid in catalog.starter_skill_ids if catalog.get_skill(sid) is not None]
    for slot_index, skill_id in enumerate(starters[:len(player.skills)]):
        player.skills[slot_index] = PlayerSkill(definition_id=skill_id)

    player.flasks[0] = create_life_flask()
    player.flasks[1] = create_mana_flask()

    for currency, amount in catalog.starting_currency.items():
        player.currency[currency] = amount

    player.experience_to_next_level = get_experience_for_level(1)
    stats = compute_player_stats(player)
    player.current_life = stats.max_life
    player.current_mana = stats.max_mana
    return player


def create_initial_state(
    config: Optional[EngineConfig] = None, catalog: Catalog = DEFAULT_CATALOG
) -> GameState:
    config = config or EngineConfig()
    starting_map = config.starting_map_id or catalog.starting_map_id
    return GameState(
        player=create_initial_player(config, catalog),
        unlocked_map_ids=[starting_map] if starting_map else [],
        combat_log=CombatLog(max_entries=config.combat_log_size),
        spawn_interval=config.default_spawn_interval,
        max_monsters=config.max_monsters,
    )


# =============================================================================
# Action Types
# =============================================================================


@dataclass(frozen=True)
class SelectMapAction:
    """Enter a map and start fighting."""
    map_id: str


@dataclass(frozen=True)
class StopFarmingAction:
    """Return to town."""


@dataclass(frozen=True)
class StartBossFightAction:
    """Challenge a ready boss."""


@dataclass(frozen=True)
class ToggleAutoBossAction:
    """Flip auto boss spawn for the current map."""


@dataclass(frozen=True)
class EquipItemAction:
    item_id: str
    slot: Optional[EquipmentSlot] = None  # None uses the item's own slot


@dataclass(frozen=True)
class UnequipItemAction:
    slot: EquipmentSlot


@dataclass(frozen=True)
class SellItemAction:
    item_id: str


@dataclass(frozen=True)
class BuySkillAction:
    skill_id: str


@dataclass(frozen=True)
class BuySupportGemAction:
    support_id: str


@dataclass(frozen=True)
class RemoveSkillAction:
    """Move a skill bar slot into the inactive pool."""
    slot_index: int


@dataclass(frozen=True)
class EquipInactiveSkillAction:
    skill_id: str


@dataclass(frozen=True)
class MoveSkillSlotAction:
    from_slot: int
    to_slot: int


@dataclass(frozen=True)
class ToggleSkillActiveAction:
    slot_index: int


@dataclass(frozen=True)
class LevelUpSkillGemAction:
    slot_index: int


@dataclass(frozen=True)
class LevelUpInactiveSkillGemAction:
    skill_id: str


@dataclass(frozen=True)
class LevelUpSupportGemAction:
    instance_id: str


@dataclass(frozen=True)
class AddSkillSocketAction:
    slot_index: int


@dataclass(frozen=True)
class ToggleSupportSocketAction:
    """Link or unlink a support gem (by definition id) on a skill slot."""
    slot_index: int
    support_id: str


@dataclass(frozen=True)
class TickAction:
    delta_time: float


GameAction = Union[
    SelectMapAction, StopFarmingAction, StartBossFightAction, ToggleAutoBossAction,
    EquipItemAction, UnequipItemAction, SellItemAction,
    BuySkillAction, BuySupportGemAction, RemoveSkillAction, EquipInactiveSkillAction,
    MoveSkillSlotAction, ToggleSkillActiveAction, LevelUpSkillGemAction,
    LevelUpInactiveSkillGemAction, LevelUpSupportGemAction, AddSkillSocketAction,
    ToggleSupportSocketAction, TickAction,
]


# =============================================================================
# Game Runner
# =============================================================================


class GameRunner:
    """
    One save: state, RNG streams and the combat engine.

    Intents and ticks never interleave; each call runs to completion.
    """

    def __init__(
        self,
        seed: Union[str, int] = 0,
        config: Optional[EngineConfig] = None,
        catalog: Catalog = DEFAULT_CATALOG,
    ):
        """
        Args:
            seed: Seed string (e.g. "BEACH42") or numeric seed
            config: Engine tunables, defaults to EngineConfig()
            catalog: Static content
        """
        if isinstance(seed, str):
            self.seed_string = seed.upper()
            self.seed = seed_to_long(self.seed_string)
        else:
            self.seed = seed
            self.seed_string = str(seed)

        self.config = config or EngineConfig()
        self.catalog = catalog
        self.action_log: List[GameAction] = []
        self._new_game()

    def _new_game(self) -> None:
        self.rng = GameRNG(seed=self.seed)
        self.state = create_initial_state(self.config, self.catalog)
        self.engine = CombatEngine(self.state, self.rng, self.config, self.catalog)

    def reset_game(self) -> None:
        """Start over from a fresh character with the same seed."""
        logger.info("Resetting game (seed %s)", self.seed_string)
        self.action_log.clear()
        self._new_game()

    def clear_log(self) -> None:
        self.state.combat_log.clear()

    # =========================================================================
    # Observation
    # =========================================================================

    @property
    def player(self) -> Player:
        return self.state.player

    @property
    def stats(self) -> EffectiveStats:
        return compute_player_stats(self.state.player)

    def get_run_statistics(self) -> Dict[str, Any]:
        player = self.state.player
        return {
            "seed": self.seed,
            "level": player.level,
            "experience": player.experience,
            "play_time": self.state.total_play_time,
            "current_map": self.state.current_map_id,
            "unlocked_maps": list(self.state.unlocked_map_ids),
            "times_cleared": {
                map_id: progress.times_cleared
                for map_id, progress in self.state.map_progress.items()
            },
            "inventory": len(player.inventory),
            "currency": {c.value: n for c, n in player.currency.items() if n},
        }

    # =========================================================================
    # Ticking
    # =========================================================================

    def tick(self, delta_time: Optional[float] = None) -> TickResult:
        """One engine tick, by default of config.tick_seconds."""
        return self.engine.tick(self.config.tick_seconds if delta_time is None else delta_time)

    def advance(self, seconds: float) -> List[TickResult]:
        """
        Tick at the configured rate for `seconds` of game time.

        Stops early when combat ends (player death or leaving the map).
        """
        results: List[TickResult] = []
        step = self.config.tick_seconds
        for _ in range(int(round(seconds * self.config.tick_rate))):
            if not self.state.is_fighting:
                break
            results.append(self.engine.tick(step))
        return results

    # =========================================================================
    # Map and boss intents
    # =========================================================================

    def select_map(self, map_id: str) -> IntentResult:
        return MapTracker.select_map(self.state, map_id, self.rng, self.config, self.catalog)

    def stop_farming(self) -> IntentResult:
        return MapTracker.stop_farming(self.state)

    def start_boss_fight(self) -> IntentResult:
        return MapTracker.start_boss_fight(self.state, self.catalog)

    def toggle_auto_boss_spawn(self) -> IntentResult:
        return MapTracker.toggle_auto_boss_spawn(self.state)

    # =========================================================================
    # Item intents
    # =========================================================================

    def equip_item(self, item_id: str, slot: Optional[EquipmentSlot] = None) -> IntentResult:
        return InventoryHandler.equip_item(self.state, item_id, slot)

    def unequip_item(self, slot: EquipmentSlot) -> IntentResult:
        return InventoryHandler.unequip_item(self.state, slot)

    def sell_item(self, item_id: str) -> IntentResult:
        return InventoryHandler.sell_item(self.state, item_id)

    # =========================================================================
    # Skill and gem intents
    # =========================================================================

    def buy_skill(self, skill_id: str) -> IntentResult:
        return SkillHandler.buy_skill(self.state, skill_id, self.catalog)

    def buy_support_gem(self, support_id: str) -> IntentResult:
        return SkillHandler.buy_support_gem(self.state, support_id, self.catalog)

    def remove_equipped_skill(self, slot_index: int) -> IntentResult:
        return SkillHandler.remove_equipped_skill(self.state, slot_index, self.catalog)

    def equip_inactive_skill(self, skill_id: str) -> IntentResult:
        return SkillHandler.equip_inactive_skill(self.state, skill_id, self.catalog)

    def move_skill_slot(self, from_slot: int, to_slot: int) -> IntentResult:
        return SkillHandler.move_skill_slot(self.state, from_slot, to_slot)

    def toggle_skill_active(self, slot_index: int) -> IntentResult:
        return SkillHandler.toggle_skill_active(self.state, slot_index)

    def level_up_skill_gem(self, slot_index: int) -> IntentResult:
        return SkillHandler.level_up_skill_gem(self.state, slot_index, self.catalog)

    def level_up_inactive_skill_gem(self, skill_id: str) -> IntentResult:
        return SkillHandler.level_up_inactive_skill_gem(self.state, skill_id, self.catalog)

    def level_up_support_gem(self, instance_id: str) -> IntentResult:
        return SkillHandler.level_up_support_gem(self.state, instance_id, self.catalog)

    def add_skill_socket(self, slot_index: int) -> IntentResult:
        return SkillHandler.add_skill_socket(
            self.state, slot_index, self.config.max_support_sockets, self.catalog
        )

    def toggle_support_gem_socket(self, slot_index: int, support_id: str) -> IntentResult:
        return SkillHandler.toggle_support_gem_socket(self.state, slot_index, support_id, self.catalog)

    # =========================================================================
    # Action interface
    # =========================================================================

    def take_action(self, action: GameAction) -> Union[IntentResult, TickResult]:
        """
        Execute an action.

        Args:
            action: Any of the frozen *Action dataclasses

        Returns:
            IntentResult for intents, TickResult for TickAction

        Raises:
            TypeError: If the action type is unknown
        """
        if isinstance(action, TickAction):
            result: Union[IntentResult, TickResult] = self.tick(action.delta_time)
        elif isinstance(action, SelectMapAction):
            result = self.select_map(action.map_id)
        elif isinstance(action, StopFarmingAction):
            result = self.stop_farming()
        elif isinstance(action, StartBossFightAction):
            result = self.start_boss_fight()
        elif isinstance(action, ToggleAutoBossAction):
            result = self.toggle_auto_boss_spawn()
        elif isinstance(action, EquipItemAction):
            result = self.equip_item(action.item_id, action.slot)
        elif isinstance(action, UnequipItemAction):
            result = self.unequip_item(action.slot)
        elif isinstance(action, SellItemAction):
            result = self.sell_item(action.item_id)
        elif isinstance(action, BuySkillAction):
            result = self.buy_skill(action.skill_id)
        elif isinstance(action, BuySupportGemAction):
            result = self.buy_support_gem(action.support_id)
        elif isinstance(action, RemoveSkillAction):
            result = self.remove_equipped_skill(action.slot_index)
        elif isinstance(action, EquipInactiveSkillAction):
            result = self.equip_inactive_skill(action.skill_id)
        elif isinstance(action, MoveSkillSlotAction):
            result = self.move_skill_slot(action.from_slot, action.to_slot)
        elif isinstance(action, ToggleSkillActiveAction):
            result = self.toggle_skill_active(action.slot_index)
        elif isinstance(action, LevelUpSkillGemAction):
            result = self.level_up_skill_gem(action.slot_index)
        elif isinstance(action, LevelUpInactiveSkillGemAction):
            result = self.level_up_inactive_skill_gem(action.skill_id)
        elif isinstance(action, LevelUpSupportGemAction):
            result = self.level_up_support_gem(action.instance_id)
        elif isinstance(action, AddSkillSocketAction):
            result = self.add_skill_socket(action.slot_index)
        elif isinstance(action, ToggleSupportSocketAction):
            result = self.toggle_support_gem_socket(action.slot_index, action.support_id)
        else:
            raise TypeError(f"Unknown action: {action!r}")

        self.action_log.append(action)
        return result


# =============================================================================
# Headless Mode
# =============================================================================


@dataclass
class RunResult:
    """Result of a headless farming run."""
    seed: int
    map_id: str
    seconds: float
    ticks: int = 0
    kills: int = 0
    bosses_killed: int = 0
    deaths: int = 0
    experience: float = 0.0
    items_found: int = 0
    items_lost: int = 0
    currency_found: int = 0
    damage_dealt: int = 0
    damage_taken: int = 0
    final_level: int = 1
    unlocked_maps: List[str] = field(default_factory=list)
    stats: Dict[str, Any] = field(default_factory=dict)


def run_headless(
    seed: Union[str, int],
    map_id: Optional[str] = None,
    seconds: float = 600.0,
    auto_boss: bool = True,
    config: Optional[EngineConfig] = None,
) -> RunResult:
    """
    Farm one map headlessly at the fixed tick rate.

    The driver re-enters the map after a death and, with auto_boss, starts
    every boss fight as soon as the boss is ready.

    Args:
        seed: Game seed
        map_id: Map to farm, defaults to the starting map
        seconds: Game time to simulate
        auto_boss: Challenge ready bosses automatically
        config: Engine tunables

    Returns:
        RunResult with totals for the run
    """
    runner = GameRunner(seed=seed, config=config)
    map_id = map_id or runner.catalog.starting_map_id
    result = RunResult(seed=runner.seed, map_id=map_id, seconds=seconds)

    if not runner.select_map(map_id).success:
        logger.warning("Cannot farm %s: map is unknown or locked", map_id)
        result.stats = runner.get_run_statistics()
        return result

    total_ticks = int(round(seconds * runner.config.tick_rate))
    for _ in range(total_ticks):
        if not runner.state.is_fighting:
            runner.select_map(map_id)
        if auto_boss and runner.state.boss_ready:
            runner.start_boss_fight()

        tick = runner.tick()
        result.ticks += 1
        result.kills += tick.monsters_killed
        result.bosses_killed += tick.bosses_killed
        result.deaths += int(tick.player_died)
        result.experience += tick.experience_gained
        result.items_found += tick.items_found
        result.items_lost += tick.items_lost
        result.currency_found += tick.currency_found
        result.damage_dealt += tick.damage_dealt
        result.damage_taken += tick.damage_taken

        # Keep farming when the bag fills up.
        if runner.player.inventory_full:
            for item in list(runner.player.inventory):
                runner.sell_item(item.id)

    result.final_level = runner.player.level
    result.unlocked_maps = list(runner.state.unlocked_map_ids)
    result.stats = runner.get_run_statistics()
    return result


def _run_one(
    seed: Union[str, int],
    map_id: Optional[str],
    seconds: float,
    auto_boss: bool,
    config: Optional[EngineConfig],
) -> RunResult:
    return run_headless(seed, map_id, seconds, auto_boss, config)


def run_parallel(
    seeds: List[Union[str, int]],
    map_id: Optional[str] = None,
    seconds: float = 600.0,
    auto_boss: bool = True,
    max_workers: int = 4,
    config: Optional[EngineConfig] = None,
) -> List[RunResult]:
    """
    Run multiple headless farms in parallel using ProcessPoolExecutor.

    Returns:
        List of RunResult in the order of `seeds`
    """
    from concurrent.futures import ProcessPoolExecutor

    with ProcessPoolExecutor(max_workers=max_workers) as executor:
        futures = [executor.submit(_run_one, s, map_id, seconds, auto_boss, config) for s in seeds]
        return [future.result() for future in futures]


# =============================================================================
# Example Usage
# =============================================================================


def main():
    """Farm the starting map for five minutes and print what happened."""
    print("=== Idle ARPG Headless Demo ===\n")

    runner = GameRunner(seed="DEMO")
    runner.select_map(runner.catalog.starting_map_id)
    runner.advance(300.0)

    for entry in reversed(runner.state.combat_log.entries[:10]):
        print(f"  [{entry.log_type.value}] {entry.message}")

    print("\n=== Run Statistics ===")
    for key, value in runner.get_run_statistics().items():
        print(f"  {key}: {value}")


if __name__ == "__main__":
    main()
