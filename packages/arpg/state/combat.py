"""
Combat-side state: monsters, map progress, the combat log and the game state tree.

GameState is the single shared state tree. Only one writer touches it at a
time: either a player intent or one CombatEngine.tick call, each run to
completion.
"""

from __future__ import annotations

import itertools
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Dict, Iterator, List, Optional

from .player import DamageType, Player


# =============================================================================
# Enums
# =============================================================================


class MonsterRarity(Enum):
    NORMAL = "normal"
    MAGIC = "magic"
    RARE = "rare"
    BOSS = "boss"


# Higher is targeted first
RARITY_PRIORITY: Dict[MonsterRarity, int] = {
    MonsterRarity.NORMAL: 1,
    MonsterRarity.MAGIC: 2,
    MonsterRarity.RARE: 3,
    MonsterRarity.BOSS: 4,
}


class CombatState(Enum):
    IDLE = "idle"
    FIGHTING = "fighting"


class LogType(Enum):
    PLAYER_HIT = "playerHit"
    MONSTER_HIT = "monsterHit"
    PLAYER_CRIT = "playerCrit"
    MONSTER_DEATH = "monsterDeath"
    PLAYER_DEATH = "playerDeath"
    LOOT = "loot"
    LEVEL_UP = "levelUp"
    EVADE = "evade"
    BLOCK = "block"
    SKILL_USE = "skillUse"


# =============================================================================
# Monsters
# =============================================================================


@dataclass
class BossSkillState:
    skill_id: str
    current_cooldown: float = 0.0


@dataclass
class Monster:
    """A spawned monster or boss."""

    id: str
    definition_id: str
    name: str
    level: int
    rarity: MonsterRarity
    max_life: float
    current_life: float
    damage: float
    attack_speed: float
    damage_type: DamageType
    experience_reward: float
    loot_bonus: float
    position_index: int = 0
    distance: float = 100.0
    move_speed: float = 35.0
    attack_cooldown: float = 0.0
    bleed_dps: float = 0.0
    bleed_remaining_duration: float = 0.0
    skill_states: List[BossSkillState] = field(default_factory=list)

    @property
    def is_dead(self) -> bool:
        return self.current_life <= 0

    @property
    def is_boss(self) -> bool:
        return self.rarity == MonsterRarity.BOSS

    @property
    def has_active_bleed(self) -> bool:
        return self.bleed_remaining_duration > 0 and self.bleed_dps > 0

    def copy(self) -> Monster:
        return replace(
            self,
            skill_states=[replace(state) for state in self.skill_states],
        )


# =============================================================================
# Map progress
# =============================================================================


@dataclass
class MapProgress:
    map_id: str
    kill_count: int = 0
    boss_defeated: bool = False
    times_cleared: int = 0
    auto_boss_spawn: bool = False

    def copy(self) -> MapProgress:
        return replace(self)


# =============================================================================
# Combat log
# =============================================================================


@dataclass
class CombatLogEntry:
    id: str
    log_type: LogType
    message: str
    value: Optional[float] = None
    time: float = 0.0  # game seconds when logged


@dataclass
class CombatLog:
    """Most-recent-first event log, capped at max_entries."""

    max_entries: int = 50
    entries: List[CombatLogEntry] = field(default_factory=list)
    _ids: Iterator[int] = field(default_factory=itertools.count, repr=False)

    def add(
        self,
        log_type: LogType,
        message: str,
        value: Optional[float] = None,
        time: float = 0.0,
    ) -> CombatLogEntry:
        entry = CombatLogEntry(
            id=f"log_{next(self._ids)}",
            log_type=log_type,
            message=message,
            value=value,
            time=time,
        )
        self.entries.insert(0, entry)
        del self.entries[self.max_entries:]
        return entry

    def clear(self) -> None:
        self.entries.clear()

    @property
    def latest(self) -> Optional[CombatLogEntry]:
        return self.entries[0] if self.entries else None


# =============================================================================
# Instance ids
# =============================================================================


class IdSequence:
    """Per-game `<prefix>_<n>` id source so ids are reproducible from a seed."""

    def __init__(self):
        self._counters: Dict[str, Iterator[int]] = {}

    def next(self, prefix: str) -> str:
        counter = self._counters.setdefault(prefix, itertools.count())
        return f"{prefix}_{next(counter)}"


# =============================================================================
# Game state
# =============================================================================


@dataclass
class GameState:
    player: Player
    current_map_id: Optional[str] = None
    combat_state: CombatState = CombatState.IDLE
    monsters: List[Monster] = field(default_factory=list)
    is_boss_fight: bool = False
    boss_ready: bool = False
    spawn_timer: float = 0.0
    spawn_interval: float = 3.0
    max_monsters: int = 5
    player_attack_cooldown: float = 0.0
    unlocked_map_ids: List[str] = field(default_factory=list)
    map_progress: Dict[str, MapProgress] = field(default_factory=dict)
    combat_log: CombatLog = field(default_factory=CombatLog)
    total_play_time: float = 0.0
    ids: IdSequence = field(default_factory=IdSequence, repr=False)

    @property
    def is_fighting(self) -> bool:
        return self.combat_state == CombatState.FIGHTING and self.current_map_id is not None

    def log(self, log_type: LogType, message: str, value: Optional[float] = None) -> CombatLogEntry:
        return self.combat_log.add(log_type, message, value, time=self.total_play_time)
