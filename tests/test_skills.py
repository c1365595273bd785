"""
Skill Resolver Tests

Leveled values, support modifiers and skill damage rolls.
"""

import pytest

from packages.arpg.calc.skills import (
    estimate_skill_damage_range,
    get_leveled_value,
    get_skill_runtime_stats,
    get_socketed_support_gems,
    roll_skill_damage,
)
from packages.arpg.content.catalog import DEFAULT_CATALOG, Catalog
from packages.arpg.content.definitions import SkillDefinition, SkillType, SupportGemDefinition
from packages.arpg.content.skills import SKILLS
from packages.arpg.state.player import PlayerSkill, PlayerStats, PlayerSupportGem
from packages.arpg.state.rng import Random


def _linked(skill_id, *support_ids, level=1, support_level=1):
    gems = [
        PlayerSupportGem(instance_id=f"support_{i}", definition_id=sid, level=support_level)
        for i, sid in enumerate(support_ids)
    ]
    skill = PlayerSkill(
        definition_id=skill_id,
        level=level,
        max_support_sockets=max(1, len(gems)),
        socketed_support_ids=[g.instance_id for g in gems],
    )
    return DEFAULT_CATALOG.get_skill(skill_id), skill, gems


class TestLeveledValue:
    """Per-level table lookup."""

    def test_no_table_uses_base(self):
        """Missing table falls back to the scalar."""
        assert get_leveled_value(None, 5, 3.0) == 3.0
        assert get_leveled_value([], 5, 3.0) == 3.0

    def test_index_by_level(self):
        """Level 1 is index 0."""
        assert get_leveled_value([10, 20, 30], 2, 0) == 20

    def test_clamped(self):
        """Out of range levels clamp to the table ends."""
        assert get_leveled_value([10, 20, 30], 0, 0) == 10
        assert get_leveled_value([10, 20, 30], 99, 0) == 30


class TestRuntimeStats:
    """get_skill_runtime_stats."""

    def test_heavy_strike_level_1(self):
        """Base numbers without supports."""
        skill_def, skill, gems = _linked("heavyStrike")
        runtime = get_skill_runtime_stats(skill_def, skill, gems)
        assert runtime.mana_cost == 8
        assert runtime.cooldown == 2
        assert runtime.damage_multiplier == pytest.approx(1.8)
        assert runtime.hit_damage_multipliers == [1.0]

    def test_heavy_strike_leveled(self):
        """Level tables drive multiplier and mana."""
        skill_def, skill, gems = _linked("heavyStrike", level=5)
        runtime = get_skill_runtime_stats(skill_def, skill, gems)
        assert runtime.damage_multiplier == pytest.approx(2.0)
        assert runtime.mana_cost == 9

    @pytest.mark.parametrize("link_order", [("echo", "flurry"), ("flurry", "echo")])
    def test_second_hit_penalty_ignores_link_order(self, link_order):
        """The second-hit penalty lands even when the extra hit is linked after it."""
        supports = {
            "flurry": SupportGemDefinition(
                id="flurry", name="Flurry", compatible_skill_types=(SkillType.ATTACK,), added_hits=1
            ),
            "echo": SupportGemDefinition(
                id="echo", name="Echo", compatible_skill_types=(SkillType.ATTACK,),
                second_hit_less_damage_percent=30,
            ),
        }
        catalog = Catalog(
            monsters=[], bosses=[], skills=SKILLS, support_gems=supports.values(),
            item_bases=[], affixes=[], maps=[], currencies=[],
        )
        gems = [PlayerSupportGem(instance_id=f"support_{sid}", definition_id=sid) for sid in link_order]
        skill = PlayerSkill(
            definition_id="heavyStrike", max_support_sockets=2,
            socketed_support_ids=[g.instance_id for g in gems],
        )
        runtime = get_skill_runtime_stats(catalog.get_skill("heavyStrike"), skill, gems, catalog)
        assert runtime.hit_damage_multipliers == pytest.approx([1.0, 0.7])

    def test_heavy_strike_past_table(self):
        """Levels past the table use the last entry."""
        skill_def, skill, gems = _linked("heavyStrike", level=50)
        runtime = get_skill_runtime_stats(skill_def, skill, gems)
        assert runtime.damage_multiplier == pytest.approx(2.75)
        assert runtime.mana_cost == 12

    def test_more_damage_and_mana_multiplier(self):
        """Melee Physical: 30% more damage, 1.3x mana rounded."""
        skill_def, skill, gems = _linked("heavyStrike", "meleePhysical")
        runtime = get_skill_runtime_stats(skill_def, skill, gems)
        assert runtime.damage_multiplier == pytest.approx(1.8 * 1.3)
        assert runtime.mana_cost == 10
        assert [s.id for s in runtime.supports] == ["meleePhysical"]

    def test_incompatible_support_ignored(self):
        """A spell support does nothing on an attack."""
        skill_def, skill, gems = _linked("heavyStrike", "spellFocus")
        runtime = get_skill_runtime_stats(skill_def, skill, gems)
        assert runtime.supports == []
        assert runtime.damage_multiplier == pytest.approx(1.8)
        assert runtime.mana_cost == 8

    def test_multistrike_hits(self):
        """Two extra hits, the second hit scaled down."""
        skill_def, skill, gems = _linked("doubleStrike", "multistrike")
        runtime = get_skill_runtime_stats(skill_def, skill, gems)
        assert runtime.number_of_hits == 4
        assert runtime.hit_damage_multipliers[1] == pytest.approx(0.7)
        assert runtime.total_hit_multiplier == pytest.approx(3.7)
        assert runtime.mana_cost == 9

    def test_faster_attacks_shortens_cooldown(self):
        """Attack speed more% divides the cooldown."""
        skill_def, skill, gems = _linked("heavyStrike", "fasterAttacks")
        runtime = get_skill_runtime_stats(skill_def, skill, gems)
        assert runtime.cooldown == pytest.approx(2 / 1.2)

    def test_support_level_tables(self):
        """Support values come from the support gem's own level."""
        skill_def, skill, gems = _linked("heavyStrike", "fasterAttacks", support_level=3)
        runtime = get_skill_runtime_stats(skill_def, skill, gems)
        assert runtime.cooldown == pytest.approx(2 / 1.22)

    def test_bleed_supports_stack_additively(self):
        """Bleed chance and more bleeding add up across supports."""
        skill_def, skill, gems = _linked("heavyStrike", "chanceToBleed", "bloodletting")
        runtime = get_skill_runtime_stats(skill_def, skill, gems)
        assert runtime.chance_to_bleed_percent == pytest.approx(35)
        assert runtime.more_bleeding_damage_percent == pytest.approx(40)

    def test_unowned_support_id_skipped(self):
        """Link ids without a matching owned gem are ignored."""
        skill_def, skill, _ = _linked("heavyStrike", "meleePhysical")
        assert get_socketed_support_gems(skill, []) == []
        runtime = get_skill_runtime_stats(skill_def, skill, [])
        assert runtime.damage_multiplier == pytest.approx(1.8)

    def test_single_target_radius(self):
        """Skills without an area hit one target."""
        skill_def, skill, gems = _linked("heavyStrike")
        assert get_skill_runtime_stats(skill_def, skill, gems).aoe_radius == 1
        skill_def, skill, gems = _linked("cleave")
        assert get_skill_runtime_stats(skill_def, skill, gems).aoe_radius == 3


class TestSkillDamage:
    """Damage estimates and rolls."""

    def test_estimate_default_attack(self):
        """Strike is the plain weapon range."""
        stats = PlayerStats(physical_damage_min=10, physical_damage_max=20)
        skill_def, skill, gems = _linked("defaultAttack")
        estimate = estimate_skill_damage_range(get_skill_runtime_stats(skill_def, skill, gems), stats)
        assert estimate.min_damage == pytest.approx(10)
        assert estimate.max_damage == pytest.approx(20)
        assert estimate.average_damage == pytest.approx(15)

    def test_estimate_heavy_strike(self):
        """Multiplier then added damage."""
        stats = PlayerStats(physical_damage_min=10, physical_damage_max=20)
        skill_def, skill, gems = _linked("heavyStrike")
        estimate = estimate_skill_damage_range(get_skill_runtime_stats(skill_def, skill, gems), stats)
        assert estimate.min_damage == pytest.approx(23)
        assert estimate.max_damage == pytest.approx(46)

    def test_roll_without_runtime_is_weapon_hit(self):
        """A None runtime is a plain weapon hit."""
        stats = PlayerStats(physical_damage_min=10, physical_damage_max=10)
        hit = roll_skill_damage(None, stats, Random(1))
        assert hit.damage == 10
        assert not hit.is_double_damage

    def test_roll_multiplied(self):
        """The weapon hit is multiplied and summed over hits."""
        stats = PlayerStats(physical_damage_min=10, physical_damage_max=10)
        skill_def, skill, gems = _linked("doubleStrike")
        runtime = get_skill_runtime_stats(skill_def, skill, gems)
        hit = roll_skill_damage(runtime, stats, Random(1))
        assert hit.damage == pytest.approx(10 * 0.8 * 2)
        assert hit.physical_damage == pytest.approx(10 * 0.8 * 2)

    def test_guaranteed_double_damage(self):
        """A 100% double damage chance always doubles."""
        skill_def = SkillDefinition(
            id="testDouble", name="Test Double", skill_type=SkillType.ATTACK,
            damage_multiplier=1.0, mana_cost=0, cooldown=0, double_damage_chance=100,
        )
        runtime = get_skill_runtime_stats(skill_def, PlayerSkill(definition_id="testDouble"))
        stats = PlayerStats(physical_damage_min=10, physical_damage_max=10)
        hit = roll_skill_damage(runtime, stats, Random(1))
        assert hit.is_double_damage
        assert hit.damage == pytest.approx(20)

    def test_crit_bonus_chance(self):
        """Skill crit bonus can crit a non-crit weapon hit."""
        skill_def = SkillDefinition(
            id="testCrit", name="Test Crit", skill_type=SkillType.ATTACK,
            damage_multiplier=1.0, mana_cost=0, cooldown=0, crit_bonus_chance=100,
        )
        runtime = get_skill_runtime_stats(skill_def, PlayerSkill(definition_id="testCrit"))
        stats = PlayerStats(
            physical_damage_min=10, physical_damage_max=10, critical_multiplier=150
        )
        hit = roll_skill_damage(runtime, stats, Random(1))
        assert hit.is_crit
        assert hit.damage == pytest.approx(15)
