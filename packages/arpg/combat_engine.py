"""
Combat Engine - fixed-timestep tick for automatic idle combat.

One tick advances the fight by delta_time seconds, in this order:
1. Spawn timer, boss gating and auto boss spawn
2. Monster movement toward the player
3. Cooldown decay (skills, player attack, monster attacks, boss skills)
4. Player action: pick a skill, roll damage, hit up to aoe_radius targets
5. Monster actions: basic attacks and boss skills against the player
6. Damage over time (bleeds)
7. Flasks: active restores, auto-use under the threshold
8. Regeneration
9. Death resolution: loot, experience, gem experience, level-up, map progress
10. Player death: respawn in town, nothing else from this tick is committed

Monsters, map progress, unlocks and timers are worked on as copies and
committed at the end of the tick. The player is mutated in place, so a death
keeps whatever the player gained earlier in the same tick.

Usage:
    from packages.arpg.combat_engine import CombatEngine

    engine = CombatEngine(state, rng)
    while state.is_fighting:
        engine.tick(0.1)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .calc.damage import apply_bleed, bleed_dps_for_hit, calculate_monster_damage
from .calc.skills import SkillRuntimeStats, get_skill_runtime_stats, roll_skill_damage
from .calc.stats import EffectiveStats, compute_player_stats
from .config import EngineConfig
from .content.catalog import DEFAULT_CATALOG, Catalog
from .content.definitions import GameMap, SkillDefinition
from .content.skills import DEFAULT_ATTACK_ID
from .generation.loot import LootResult, generate_loot
from .generation.monsters import get_targets, is_in_melee_range, spawn_boss, spawn_map_monster
from .handlers.maps import MapTracker
from .progression import apply_level_up, check_level_up
from .state.combat import GameState, LogType, MapProgress, Monster
from .state.player import PlayerSkill
from .state.rng import GameRNG

logger = logging.getLogger(__name__)


# =============================================================================
# TICK RESULT
# =============================================================================


@dataclass
class TickResult:
    """What happened during one tick."""
    ticked: bool = False
    damage_dealt: int = 0
    damage_taken: int = 0
    monsters_killed: int = 0
    bosses_killed: int = 0
    experience_gained: float = 0.0
    items_found: int = 0
    items_lost: int = 0
    currency_found: int = 0
    level_ups: int = 0
    player_died: bool = False
    unlocked_map_ids: List[str] = field(default_factory=list)


@dataclass
class _Pending:
    """Working copies for one tick, committed together at the end."""
    game_map: GameMap
    stats: EffectiveStats
    monsters: List[Monster]
    progress: MapProgress
    unlocked_map_ids: List[str]
    spawn_timer: float
    is_boss_fight: bool
    boss_ready: bool
    attack_cooldown: float
    result: TickResult


@dataclass
class _SkillChoice:
    slot_index: int
    definition: SkillDefinition
    runtime: SkillRuntimeStats


# =============================================================================
# COMBAT ENGINE
# =============================================================================


class CombatEngine:
    """
    Drives GameState forward one tick at a time.

    The engine is the only writer of the state while a tick runs; intents are
    applied between ticks.
    """

    def __init__(
        self,
        state: GameState,
        rng: GameRNG,
        config: Optional[EngineConfig] = None,
        catalog: Catalog = DEFAULT_CATALOG,
    ):
        self.state = state
        self.rng = rng
        self.config = config or EngineConfig()
        self.catalog = catalog

    # -------------------------------------------------------------------------
    # Tick
    # -------------------------------------------------------------------------

    def tick(self, delta_time: float) -> TickResult:
        """
        Advance combat by delta_time seconds.

        No-op unless the state is fighting on a known map.

        Raises:
            ValueError: If delta_time is negative
        """
        if delta_time < 0:
            raise ValueError(f"delta_time must be >= 0, got {delta_time}")

        state = self.state
        if not state.is_fighting:
            return TickResult()
        game_map = self.catalog.get_map(state.current_map_id)
        if game_map is None:
            return TickResult()

        progress = MapTracker.get_progress(state, game_map.id)
        pending = _Pending(
            game_map=game_map,
            stats=compute_player_stats(state.player),
            monsters=[m.copy() for m in state.monsters],
            progress=progress.copy(),
            unlocked_map_ids=list(state.unlocked_map_ids),
            spawn_timer=state.spawn_timer,
            is_boss_fight=state.is_boss_fight,
            boss_ready=state.boss_ready,
            attack_cooldown=state.player_attack_cooldown,
            result=TickResult(ticked=True),
        )

        self._update_spawns(pending, delta_time)
        self._move_monsters(pending, delta_time)
        self._decay_cooldowns(pending, delta_time)
        self._player_action(pending)
        self._monster_actions(pending)
        self._apply_damage_over_time(pending, delta_time)
        self._update_flasks(pending, delta_time)
        self._regenerate(pending, delta_time)
        self._resolve_deaths(pending)

        if state.player.current_life <= 0:
            self._handle_player_death()
            pending.result.player_died = True
            return pending.result

        self._commit(pending, delta_time)
        return pending.result

    # -------------------------------------------------------------------------
    # 1. Spawning
    # -------------------------------------------------------------------------

    def _update_spawns(self, pending: _Pending, delta_time: float) -> None:
        state = self.state
        game_map = pending.game_map
        pending.spawn_timer -= delta_time

        boss_condition = (
            MapTracker.boss_condition_met(pending.progress, game_map)
            and not pending.is_boss_fight
        )
        if boss_condition and not pending.boss_ready:
            pending.boss_ready = True
            state.log(LogType.MONSTER_DEATH, "BOSS READY! Challenge the boss when ready!")
            logger.info("Boss ready on %s", game_map.id)

            if MapTracker.can_auto_spawn_boss(pending.progress):
                boss = spawn_boss(game_map.boss_id, game_map.monster_level, state.ids, self.catalog)
                if boss is not None:
                    pending.monsters = [boss]
                    pending.is_boss_fight = True
                    pending.boss_ready = False
                    state.log(LogType.MONSTER_DEATH, f"BOSS APPROACHING: {boss.name}!")

        if pending.is_boss_fight or pending.boss_ready:
            return

        arena_empty = len(pending.monsters) == 0
        if len(pending.monsters) < state.max_monsters and (pending.spawn_timer <= 0 or arena_empty):
            monster = spawn_map_monster(
                game_map, pending.monsters, self.rng.monster, state.ids, self.catalog
            )
            if monster is not None:
                pending.monsters.append(monster)
                logger.debug("Spawned %s (%s)", monster.name, monster.id)
            pending.spawn_timer = state.spawn_interval

    # -------------------------------------------------------------------------
    # 2-3. Movement and cooldowns
    # -------------------------------------------------------------------------

    @staticmethod
    def _move_monsters(pending: _Pending, delta_time: float) -> None:
        for monster in pending.monsters:
            if monster.distance > 0:
                monster.distance = max(0.0, monster.distance - monster.move_speed * delta_time)

    def _decay_cooldowns(self, pending: _Pending, delta_time: float) -> None:
        for skill in self.state.player.equipped_skills():
            skill.current_cooldown = max(0.0, skill.current_cooldown - delta_time)
        pending.attack_cooldown = max(0.0, pending.attack_cooldown - delta_time)

        for monster in pending.monsters:
            monster.attack_cooldown = max(0.0, monster.attack_cooldown - delta_time)
            for skill_state in monster.skill_states:
                skill_state.current_cooldown = max(0.0, skill_state.current_cooldown - delta_time)

    # -------------------------------------------------------------------------
    # 4. Player action
    # -------------------------------------------------------------------------

    def _choose_skill(self) -> Optional[_SkillChoice]:
        """
        First usable non-Strike skill in bar order, else Strike, else None.

        Usable means active, off cooldown and affordable.
        """
        player = self.state.player
        candidates: List[_SkillChoice] = []
        for slot_index, skill in enumerate(player.skills):
            if skill is None or not skill.is_active or skill.current_cooldown > 0:
                continue
            definition = self.catalog.get_skill(skill.definition_id)
            if definition is None:
                continue
            runtime = get_skill_runtime_stats(definition, skill, player.support_gems, self.catalog)
            if runtime.mana_cost > player.current_mana:
                continue
            candidates.append(_SkillChoice(slot_index, definition, runtime))

        for candidate in candidates:
            if candidate.definition.id != DEFAULT_ATTACK_ID:
                return candidate
        return candidates[0] if candidates else None

    def _player_action(self, pending: _Pending) -> None:
        if pending.attack_cooldown > 0:
            return
        targets = get_targets(pending.monsters, 1)
        if not targets:
            return

        stats = pending.stats
        choice = self._choose_skill()

        if choice is None:
            hit = roll_skill_damage(None, stats, self.rng.combat)
            damage = round(hit.damage)
            targets[0].current_life -= damage
            pending.result.damage_dealt += damage
        else:
            self._use_skill(pending, choice)

        if stats.attack_speed > 0:
            pending.attack_cooldown = 1 / stats.attack_speed

    def _use_skill(self, pending: _Pending, choice: _SkillChoice) -> None:
        state = self.state
        player = state.player
        runtime = choice.runtime
        stats = pending.stats
        combat_rng = self.rng.combat

        hit = roll_skill_damage(runtime, stats, combat_rng)
        targets = get_targets(pending.monsters, runtime.aoe_radius)

        total_damage = 0
        lifesteal = 0
        for target in targets:
            damage = round(hit.damage)
            target.current_life -= damage
            total_damage += damage

            if runtime.chance_to_bleed_percent > 0 and hit.physical_damage > 0:
                if combat_rng.random_percent() < runtime.chance_to_bleed_percent:
                    dps = bleed_dps_for_hit(
                        hit.physical_damage,
                        runtime.more_bleeding_damage_percent,
                        self.config.bleed_percent_of_physical,
                        self.config.bleed_duration,
                    )
                    apply_bleed(target, dps, self.config.bleed_duration)

            if runtime.lifesteal_percent:
                lifesteal += round(damage * runtime.lifesteal_percent / 100)

        player.current_mana = max(0.0, player.current_mana - runtime.mana_cost)
        skill: Optional[PlayerSkill] = player.skills[choice.slot_index]
        if skill is not None:
            skill.current_cooldown = runtime.cooldown
        pending.result.damage_dealt += total_damage

        name = choice.definition.name
        if choice.definition.id != DEFAULT_ATTACK_ID and targets:
            if len(targets) > 1:
                state.log(LogType.PLAYER_HIT, f"{name} hits {len(targets)} enemies!", total_damage)
            else:
                state.log(LogType.PLAYER_HIT, f"{name}!", total_damage)
            if hit.is_double_damage:
                state.log(LogType.PLAYER_CRIT, "Double Damage!")

        if lifesteal > 0:
            player.current_life = min(stats.max_life, player.current_life + lifesteal)
            state.log(LogType.PLAYER_HIT, f"Lifesteal heals for {lifesteal}!", lifesteal)

    # -------------------------------------------------------------------------
    # 5. Monster actions
    # -------------------------------------------------------------------------

    def _monster_actions(self, pending: _Pending) -> None:
        state = self.state
        stats = pending.stats
        defense_rng = self.rng.defense
        total = 0

        for monster in pending.monsters:
            if monster.is_dead or not is_in_melee_range(monster):
                continue

            if monster.attack_cooldown <= 0:
                hit = calculate_monster_damage(monster, stats, defense_rng)
                if hit.evaded:
                    state.log(LogType.EVADE, f"Evaded {monster.name}'s attack!")
                elif hit.blocked:
                    state.log(LogType.BLOCK, f"Blocked {monster.name}'s attack!")
                else:
                    total += hit.damage
                if monster.attack_speed > 0:
                    monster.attack_cooldown = 1 / monster.attack_speed

            if monster.is_boss:
                total += self._boss_skills(monster, stats)

        if total > 0:
            state.player.current_life -= total
            pending.result.damage_taken += total

    def _boss_skills(self, boss: Monster, stats: EffectiveStats) -> int:
        definition = self.catalog.get_boss(boss.definition_id)
        if definition is None:
            return 0
        state = self.state
        total = 0
        for skill_state in boss.skill_states:
            if skill_state.current_cooldown > 0:
                continue
            skill = definition.get_skill(skill_state.skill_id)
            if skill is None:
                continue
            hit = calculate_monster_damage(
                boss,
                stats,
                self.rng.defense,
                base_damage=boss.damage * skill.damage_multiplier,
                damage_type=boss.damage_type,
            )
            if hit.evaded:
                state.log(LogType.EVADE, f"Evaded {skill.name}!")
            elif hit.blocked:
                state.log(LogType.BLOCK, f"Blocked {skill.name}!")
            else:
                total += hit.damage
                state.log(LogType.MONSTER_HIT, f"{boss.name} uses {skill.name}!", hit.damage)
            skill_state.current_cooldown = skill.cooldown
        return total

    # -------------------------------------------------------------------------
    # 6-8. Bleeds, flasks, regeneration
    # -------------------------------------------------------------------------

    @staticmethod
    def _apply_damage_over_time(pending: _Pending, delta_time: float) -> None:
        for monster in pending.monsters:
            if monster.is_dead or not monster.has_active_bleed:
                continue
            monster.current_life -= monster.bleed_dps * delta_time
            monster.bleed_remaining_duration = max(0.0, monster.bleed_remaining_duration - delta_time)
            if monster.bleed_remaining_duration <= 0:
                monster.bleed_dps = 0.0

    def _update_flasks(self, pending: _Pending, delta_time: float) -> None:
        player = self.state.player
        stats = pending.stats

        for flask in player.owned_flasks():
            if not flask.is_active:
                continue
            fraction = delta_time / flask.duration if flask.duration > 0 else 1.0
            if flask.restores_life:
                player.current_life = min(stats.max_life, player.current_life + flask.life_restore * fraction)
            if flask.restores_mana:
                player.current_mana = min(stats.max_mana, player.current_mana + flask.mana_restore * fraction)
            flask.remaining_duration -= delta_time
            if flask.remaining_duration <= 0:
                flask.is_active = False
                flask.remaining_duration = 0.0

        threshold = self.config.flask_auto_use_threshold
        if stats.max_life > 0 and player.current_life / stats.max_life < threshold:
            flask = next((f for f in player.owned_flasks() if f.restores_life and f.can_use), None)
            if flask is not None:
                flask.activate()
                logger.debug("Auto-used %s", flask.name)
        if stats.max_mana > 0 and player.current_mana / stats.max_mana < threshold:
            flask = next((f for f in player.owned_flasks() if f.restores_mana and f.can_use), None)
            if flask is not None:
                flask.activate()
                logger.debug("Auto-used %s", flask.name)

    def _regenerate(self, pending: _Pending, delta_time: float) -> None:
        player = self.state.player
        stats = pending.stats
        player.current_life = min(stats.max_life, player.current_life + stats.life_regeneration * delta_time)
        player.current_mana = min(stats.max_mana, player.current_mana + stats.mana_regeneration * delta_time)

    # -------------------------------------------------------------------------
    # 9. Deaths and rewards
    # -------------------------------------------------------------------------

    def _resolve_deaths(self, pending: _Pending) -> None:
        dead = [m for m in pending.monsters if m.is_dead]
        if not dead:
            return
        for monster in dead:
            loot = generate_loot(monster, self.rng, self.state.ids, self.catalog)
            self._apply_rewards(pending, monster, loot)
        pending.monsters = [m for m in pending.monsters if not m.is_dead]

    def _apply_rewards(self, pending: _Pending, monster: Monster, loot: LootResult) -> None:
        state = self.state
        player = state.player
        result = pending.result

        player.experience += loot.experience
        result.experience_gained += loot.experience
        self._grant_gem_experience(loot.experience)

        for flask in player.owned_flasks():
            flask.gain_charges(flask.charges_on_kill)

        if check_level_up(player):
            stats = compute_player_stats(player)
            apply_level_up(player, stats.max_life, stats.max_mana)
            result.level_ups += 1
            state.log(LogType.LEVEL_UP, f"Level up! Now level {player.level}", player.level)
            logger.info("Player reached level %d", player.level)

        for item in loot.items:
            if player.inventory_full:
                result.items_lost += 1
                logger.info("Inventory full, dropped %s", item.name)
                continue
            player.inventory.append(item)
            result.items_found += 1
            state.log(LogType.LOOT, f"Found: {item.name}", item.item_level)

        for currency, amount in loot.currency.items():
            player.currency[currency] += amount
            result.currency_found += amount

        if not monster.is_boss:
            pending.progress.kill_count += 1
            result.monsters_killed += 1
            state.log(LogType.MONSTER_DEATH, f"Killed {monster.name}", loot.experience)
            return

        result.bosses_killed += 1
        pending.is_boss_fight = False
        state.log(LogType.MONSTER_DEATH, f"BOSS DEFEATED: {monster.name}!", loot.experience)
        logger.info("Boss %s defeated on %s", monster.definition_id, pending.game_map.id)

        for unlocked in MapTracker.record_boss_clear(
            pending.progress, pending.unlocked_map_ids, self.catalog
        ):
            result.unlocked_map_ids.append(unlocked.id)
            state.log(LogType.LOOT, f"Unlocked new area: {unlocked.name}!")
        pending.spawn_timer = self.config.boss_respawn_delay

    def _grant_gem_experience(self, experience: float) -> None:
        """Equipped skill gems and the supports linked to them share kill experience."""
        player = self.state.player
        for skill in player.equipped_skills():
            skill.experience += experience
        linked = player.linked_support_ids(equipped_only=True)
        for gem in player.support_gems:
            if gem.instance_id in linked:
                gem.experience += experience

    # -------------------------------------------------------------------------
    # 10. Player death and commit
    # -------------------------------------------------------------------------

    def _handle_player_death(self) -> None:
        state = self.state
        player = state.player
        stats = compute_player_stats(player)
        player.current_life = stats.max_life
        player.current_mana = stats.max_mana
        for flask in player.owned_flasks():
            flask.reset()

        state.log(LogType.PLAYER_DEATH, "You died! Respawning...")
        logger.info("Player died on %s", state.current_map_id)
        MapTracker.leave_combat(state)

    def _commit(self, pending: _Pending, delta_time: float) -> None:
        state = self.state
        player = state.player
        stats = pending.stats

        player.current_life = max(0.0, min(player.current_life, stats.max_life))
        player.current_mana = max(0.0, min(player.current_mana, stats.max_mana))

        state.monsters = pending.monsters
        state.map_progress[pending.game_map.id] = pending.progress
        state.unlocked_map_ids = pending.unlocked_map_ids
        state.spawn_timer = pending.spawn_timer
        state.is_boss_fight = pending.is_boss_fight
        state.boss_ready = pending.boss_ready
        state.player_attack_cooldown = pending.attack_cooldown
        state.total_play_time += delta_time


def run_ticks(engine: CombatEngine, seconds: float, tick_seconds: float) -> Tuple[int, List[TickResult]]:
    """Tick an engine for a span of game time. Stops early if combat ends."""
    results: List[TickResult] = []
    ticks = 0
    elapsed = 0.0
    while elapsed < seconds and engine.state.is_fighting:
        results.append(engine.tick(tick_seconds))
        ticks += 1
        elapsed += tick_seconds
    return ticks, results
