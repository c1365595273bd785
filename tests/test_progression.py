"""
Progression Tests

Character experience thresholds, level-up carry-over and gem level helpers.
"""

from packages.arpg.progression import (
    GEM_MAX_LEVEL,
    GEM_TOTAL_EXPERIENCE_BY_LEVEL,
    MAX_CHARACTER_LEVEL,
    XP_TABLE,
    apply_level_up,
    can_gem_level_up,
    check_level_up,
    get_experience_for_level,
    get_gem_next_level_total_experience,
    get_gem_required_character_level,
    get_gem_total_experience_for_level,
)


class TestCharacterExperience:
    """XP table lookups."""

    def test_first_threshold(self):
        """Level 1 needs 525 experience."""
        assert get_experience_for_level(1) == 525

    def test_table_shape(self):
        """One entry per level plus the level 0 and cap sentinels."""
        assert len(XP_TABLE) == MAX_CHARACTER_LEVEL + 1
        assert all(a < b for a, b in zip(XP_TABLE[1:-2], XP_TABLE[2:-1]))

    def test_cap(self):
        """No further experience needed at the cap."""
        assert get_experience_for_level(MAX_CHARACTER_LEVEL) == 0

    def test_below_one(self):
        """Levels below 1 use the first threshold."""
        assert get_experience_for_level(0) == 525


class TestLevelUp:
    """apply_level_up."""

    def test_not_enough_experience(self, player):
        """Below the threshold nothing changes."""
        player.experience = 524
        result = apply_level_up(player, 100, 50)
        assert not result.leveled
        assert player.level == 1
        assert player.experience == 524

    def test_overflow_carries(self, player):
        """Experience past the threshold is kept."""
        player.experience = 600
        player.current_life = 10
        result = apply_level_up(player, 100, 50)
        assert result.leveled
        assert player.level == 2
        assert player.experience == 75
        assert player.experience_to_next_level == XP_TABLE[2]
        assert player.current_life == 100
        assert player.current_mana == 50

    def test_one_level_per_call(self, player):
        """A huge grant still only levels once per call."""
        player.experience = 10_000
        apply_level_up(player, 100, 50)
        assert player.level == 2
        assert check_level_up(player)

    def test_base_stats_unchanged(self, player):
        """Levelling does not touch base stats."""
        before = player.stats.copy()
        player.experience = 600
        apply_level_up(player, 100, 50)
        assert player.stats == before

    def test_capped_at_max_level(self, player):
        """Level 100 never levels again."""
        player.level = MAX_CHARACTER_LEVEL
        player.experience = 10 ** 12
        player.experience_to_next_level = 0
        assert not check_level_up(player)
        assert not apply_level_up(player, 100, 50).leveled
        assert player.level == MAX_CHARACTER_LEVEL


class TestGemExperience:
    """Gem level helpers."""

    def test_total_for_level(self):
        """Level 1 is free, level 2 needs 15249."""
        assert get_gem_total_experience_for_level(1) == 0
        assert get_gem_total_experience_for_level(2) == 15249

    def test_total_clamped(self):
        """Levels past the table use its last entry."""
        assert get_gem_total_experience_for_level(99) == GEM_TOTAL_EXPERIENCE_BY_LEVEL[-1]

    def test_next_level_total(self):
        """Next threshold, or None at max level."""
        assert get_gem_next_level_total_experience(1) == 15249
        assert get_gem_next_level_total_experience(GEM_MAX_LEVEL) is None

    def test_can_level_up(self):
        """Needs the cumulative threshold for the next level."""
        assert not can_gem_level_up(1, 15248)
        assert can_gem_level_up(1, 15249)
        assert not can_gem_level_up(GEM_MAX_LEVEL, 10 ** 12)

    def test_custom_table(self):
        """Gems can bring their own table."""
        assert can_gem_level_up(1, 10, [0, 10, 20])
        assert not can_gem_level_up(3, 10 ** 6, [0, 10, 20])

    def test_required_level_table(self):
        """Character level gate per gem level."""
        gates = [1, 2, 4, 7]
        assert get_gem_required_character_level(1, 1, gates) == 1
        assert get_gem_required_character_level(3, 1, gates) == 4
        assert get_gem_required_character_level(10, 1, gates) == 7

    def test_required_level_without_table(self):
        """Without a table the gem's base requirement applies."""
        assert get_gem_required_character_level(5, 6) == 6
