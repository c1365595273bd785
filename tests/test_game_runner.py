"""
GameRunner Tests

Character creation, seeding, the action interface, ticking and headless runs.
"""

import pytest

from packages.arpg.config import EngineConfig
from packages.arpg.game import (
    BuySupportGemAction,
    GameRunner,
    RunResult,
    SelectMapAction,
    StopFarmingAction,
    TickAction,
    ToggleSupportSocketAction,
    create_initial_player,
    create_initial_state,
    run_headless,
)
from packages.arpg.handlers.results import IntentResult
from packages.arpg.combat_engine import TickResult
from packages.arpg.state.combat import CombatState
from packages.arpg.state.player import CurrencyType, FlaskType
from packages.arpg.state.rng import seed_to_long


class TestInitialPlayer:
    """Fresh character."""

    def test_starter_skills(self):
        """Strike, Heavy Strike and Double Strike in the first three slots."""
        player = create_initial_player()
        assert [s.definition_id for s in player.equipped_skills()] == [
            "defaultAttack", "heavyStrike", "doubleStrike",
        ]
        assert player.skills[3:] == [None, None, None]

    def test_flasks(self):
        """One life and one mana flask, full."""
        player = create_initial_player()
        flasks = list(player.owned_flasks())
        assert [f.flask_type for f in flasks] == [FlaskType.LIFE, FlaskType.MANA]
        assert all(f.current_charges == f.max_charges for f in flasks)

    def test_resources_full(self):
        """Life and mana start at their effective maximums."""
        player = create_initial_player()
        assert player.current_life == 82
        assert player.current_mana == 42
        assert player.level == 1
        assert player.experience_to_next_level == 525

    def test_starting_currency(self):
        """Starter currency."""
        player = create_initial_player()
        assert player.currency[CurrencyType.TRANSMUTATION] == 5
        assert player.currency[CurrencyType.ALTERATION] == 5
        assert player.currency[CurrencyType.SOCKET_ORB] == 0

    def test_inventory_size_from_config(self):
        """Bag size is configurable."""
        player = create_initial_player(EngineConfig(inventory_size=12))
        assert player.inventory_size == 12

    def test_initial_state(self):
        """Idle in town with the starting map unlocked."""
        state = create_initial_state()
        assert state.combat_state == CombatState.IDLE
        assert state.unlocked_map_ids == ["twilightBeach"]
        assert state.monsters == []


class TestRunnerSetup:
    """Seeding and reset."""

    def test_string_seed(self):
        """String seeds are upper-cased and converted."""
        runner = GameRunner(seed="beach42")
        assert runner.seed_string == "BEACH42"
        assert runner.seed == seed_to_long("BEACH42")

    def test_int_seed(self):
        """Numeric seeds are kept."""
        runner = GameRunner(seed=77)
        assert runner.seed == 77
        assert runner.seed_string == "77"

    def test_reset(self, runner):
        """reset_game restores a fresh character and clears the action log."""
        runner.take_action(SelectMapAction("twilightBeach"))
        runner.advance(5.0)
        runner.reset_game()
        assert runner.action_log == []
        assert runner.state.total_play_time == 0
        assert not runner.state.is_fighting
        assert runner.player.experience == 0

    def test_clear_log(self, runner):
        """clear_log empties the combat log."""
        runner.select_map("twilightBeach")
        runner.clear_log()
        assert runner.state.combat_log.entries == []

    def test_stats_property(self, runner):
        """stats exposes effective stats."""
        assert runner.stats.max_life == 82


class TestActions:
    """take_action dispatch."""

    def test_intent_returns_intent_result(self, runner):
        """Intents return IntentResult and are logged."""
        result = runner.take_action(SelectMapAction("twilightBeach"))
        assert isinstance(result, IntentResult)
        assert result.success
        assert runner.action_log == [SelectMapAction("twilightBeach")]

    def test_tick_returns_tick_result(self, runner):
        """TickAction returns a TickResult."""
        runner.take_action(SelectMapAction("twilightBeach"))
        result = runner.take_action(TickAction(0.1))
        assert isinstance(result, TickResult)
        assert result.ticked

    def test_unknown_action(self, runner):
        """Unknown action types raise TypeError."""
        with pytest.raises(TypeError):
            runner.take_action("select twilightBeach")
        assert runner.action_log == []

    def test_gem_actions(self, runner):
        """Support gem purchase and link through actions."""
        runner.take_action(BuySupportGemAction("meleePhysical"))
        result = runner.take_action(ToggleSupportSocketAction(1, "meleePhysical"))
        assert result.success
        assert runner.player.skills[1].socketed_support_ids == [runner.player.support_gems[0].instance_id]

    def test_stop_farming(self, runner):
        """StopFarmingAction returns to town."""
        runner.take_action(SelectMapAction("twilightBeach"))
        runner.take_action(StopFarmingAction())
        assert runner.state.combat_state == CombatState.IDLE

    def test_actions_are_frozen(self):
        """Actions are immutable values."""
        action = TickAction(0.1)
        with pytest.raises(AttributeError):
            action.delta_time = 1.0


class TestTicking:
    """tick and advance."""

    def test_advance_tick_count(self, runner):
        """advance runs tick_rate ticks per second."""
        runner.select_map("twilightBeach")
        results = runner.advance(2.0)
        assert len(results) == 20
        assert runner.state.total_play_time == pytest.approx(2.0)

    def test_advance_idle(self, runner):
        """Nothing happens in town."""
        assert runner.advance(5.0) == []

    def test_same_seed_same_game(self):
        """Two runners with one seed play out identically."""
        a = GameRunner(seed="REPLAY")
        b = GameRunner(seed="REPLAY")
        for runner in (a, b):
            runner.select_map("twilightBeach")
            runner.advance(60.0)
        assert a.player.experience == b.player.experience
        assert [i.id for i in a.player.inventory] == [i.id for i in b.player.inventory]
        assert a.rng.get_counters() == b.rng.get_counters()

    def test_statistics(self, runner):
        """Run statistics summarize the save."""
        runner.select_map("twilightBeach")
        runner.advance(10.0)
        stats = runner.get_run_statistics()
        assert stats["seed"] == runner.seed
        assert stats["current_map"] == "twilightBeach"
        assert stats["play_time"] == pytest.approx(10.0)


class TestHeadless:
    """run_headless."""

    def test_deterministic(self):
        """Same seed, same totals."""
        a = run_headless(7, seconds=120)
        b = run_headless(7, seconds=120)
        assert a == b

    def test_totals(self):
        """Two minutes on the beach kills something."""
        result = run_headless("FARM", seconds=120)
        assert isinstance(result, RunResult)
        assert result.ticks == 1200
        assert result.kills > 0
        assert result.experience > 0
        assert result.map_id == "twilightBeach"

    def test_locked_map(self):
        """A locked map does no work."""
        result = run_headless(1, map_id="shipGraveyard", seconds=30)
        assert result.ticks == 0
        assert result.kills == 0
