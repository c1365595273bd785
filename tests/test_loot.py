"""
Loot Generation Tests

Affix values, item stat folding, affix budgets per rarity, ring slots,
currency and socket orb drops, and whole kill rewards.
"""

import pytest

from packages.arpg.content.catalog import DEFAULT_CATALOG
from packages.arpg.content.definitions import AffixType
from packages.arpg.content.items import BODY_ARMOR_DEXTERITY
from packages.arpg.generation.loot import (
    AFFIX_COUNT_BY_RARITY,
    MAX_PREFIXES,
    MAX_SUFFIXES,
    compute_item_stats,
    generate_item,
    generate_item_by_base_id,
    generate_loot,
    pick_item_base,
    roll_affix,
    roll_affix_value,
    roll_currency_drop,
    roll_item_rarity,
    socket_orb_chance,
)
from packages.arpg.generation.monsters import spawn_boss
from packages.arpg.state.combat import IdSequence, MonsterRarity
from packages.arpg.state.player import Affix, CurrencyType, EquipmentSlot, ItemRarity
from packages.arpg.state.rng import GameRNG, Random


# =============================================================================
# Affix Values
# =============================================================================


class TestAffixValues:
    """roll_affix_value."""

    def test_integer_bounds_inclusive(self):
        """Integer tiers roll integers including both ends."""
        rng = Random(4)
        seen = {roll_affix_value(1, 3, rng) for _ in range(300)}
        assert seen == {1, 2, 3}

    def test_decimal_bounds_one_decimal(self):
        """Decimal tiers round to one decimal."""
        rng = Random(4)
        for _ in range(100):
            value = roll_affix_value(0.5, 1.5, rng)
            assert 0.5 <= value <= 1.5
            assert round(value, 1) == value

    def test_swapped_bounds(self):
        """low > high is treated as the same range."""
        rng = Random(4)
        for _ in range(50):
            assert 1 <= roll_affix_value(3, 1, rng) <= 3


# =============================================================================
# Item Stats
# =============================================================================


class TestItemStats:
    """compute_item_stats."""

    def test_base_only(self):
        """No affixes gives the base stats."""
        base = DEFAULT_CATALOG.get_item_base("leatherCap")
        assert compute_item_stats(base, [], []) == {"armor": 5, "max_life": 5}

    def test_affixes_add(self):
        """Affix values add to the matching base stat."""
        base = DEFAULT_CATALOG.get_item_base("leatherCap")
        stats = compute_item_stats(base, [Affix("flatLife", 1, 8)], [Affix("fireRes", 1, 10)])
        assert stats["max_life"] == 13
        assert stats["fire_resistance"] == 10

    def test_secondary_value(self):
        """Flat physical adds both min and max."""
        base = DEFAULT_CATALOG.get_item_base("rustySword")
        stats = compute_item_stats(base, [Affix("flatPhys", 1, 2, secondary_value=4)], [])
        assert stats["physical_damage_min"] == 4
        assert stats["physical_damage_max"] == 9

    def test_all_resistances_mirror(self):
        """All elemental resistance fills three stats."""
        base = DEFAULT_CATALOG.get_item_base("coralAmulet")
        affix = Affix("allElementalRes", 1, 4, secondary_value=4, tertiary_value=4)
        stats = compute_item_stats(base, [], [affix])
        assert stats["fire_resistance"] == 4
        assert stats["cold_resistance"] == 4
        assert stats["lightning_resistance"] == 4

    def test_local_defence_folded(self):
        """Local increased armor scales the item's armor and is removed."""
        base = DEFAULT_CATALOG.get_item_base("plateVest")
        stats = compute_item_stats(base, [Affix("localIncArmor", 1, 50)], [], {"armor": 30})
        assert stats["armor"] == 45
        assert "increased_armor" not in stats

    def test_local_defence_includes_flat_affix(self):
        """Flat armor affixes are added before the local percentage applies."""
        base = DEFAULT_CATALOG.get_item_base("plateVest")
        prefixes = [Affix("localIncArmor", 1, 50), Affix("flatArmor", 1, 10)]
        stats = compute_item_stats(base, prefixes, [], {"armor": 30})
        assert stats["armor"] == 60

    def test_unknown_affix_skipped(self):
        """Affixes with no definition contribute nothing."""
        base = DEFAULT_CATALOG.get_item_base("leatherCap")
        stats = compute_item_stats(base, [Affix("doesNotExist", 1, 99)], [])
        assert stats == {"armor": 5, "max_life": 5}


# =============================================================================
# Affix Rolls
# =============================================================================


class TestRollAffix:
    """roll_affix."""

    def test_highest_unlocked_tier(self):
        """The rolled tier is always the best one for the item level."""
        rng = Random(8)
        for item_level in (1, 6, 12, 30):
            for _ in range(20):
                affix = roll_affix(AffixType.PREFIX, EquipmentSlot.HELMET, item_level, rng)
                definition = DEFAULT_CATALOG.get_affix(affix.definition_id)
                tier = definition.highest_tier(item_level)
                assert affix.tier == tier.tier
                assert tier.min_value <= affix.value <= tier.max_value

    def test_nothing_to_roll(self):
        """No prefix exists for off-hands."""
        assert roll_affix(AffixType.PREFIX, EquipmentSlot.OFFHAND, 10, Random(1)) is None

    def test_exclude(self):
        """Excluded ids are never rolled."""
        rng = Random(2)
        for _ in range(30):
            affix = roll_affix(
                AffixType.SUFFIX, EquipmentSlot.OFFHAND, 10, rng, exclude=["blockChance"]
            )
            assert affix is None

    def test_local_defence_requires_tag(self):
        """Local evasion needs a dexterity body armour base."""
        ids = {
            a.id for a in DEFAULT_CATALOG.affixes_for(
                AffixType.PREFIX, EquipmentSlot.BODY_ARMOR, (BODY_ARMOR_DEXTERITY,)
            )
        }
        assert "localIncEvasion" in ids
        assert "localIncArmor" not in ids


# =============================================================================
# Items
# =============================================================================


class TestGenerateItem:
    """Item creation."""

    @pytest.mark.parametrize("rarity", [ItemRarity.NORMAL, ItemRarity.MAGIC, ItemRarity.RARE])
    def test_affix_budget(self, rarity):
        """Affix counts stay inside the rarity budget and the 3/3 caps."""
        rng = GameRNG(seed=17)
        ids = IdSequence()
        low, high = AFFIX_COUNT_BY_RARITY[rarity]
        for _ in range(40):
            item = generate_item_by_base_id("leatherCap", 20, rarity, rng, ids)
            assert low <= item.affix_count <= high
            assert len(item.prefixes) <= MAX_PREFIXES
            assert len(item.suffixes) <= MAX_SUFFIXES

    def test_no_duplicate_affixes(self):
        """An affix definition appears at most once per item."""
        rng = GameRNG(seed=23)
        ids = IdSequence()
        for _ in range(40):
            item = generate_item_by_base_id("rustySword", 30, ItemRarity.RARE, rng, ids)
            affix_ids = [a.definition_id for a in item.affixes]
            assert len(affix_ids) == len(set(affix_ids))

    def test_short_affix_pool(self):
        """A rare buckler can only ever get its single suffix."""
        rng = GameRNG(seed=5)
        item = generate_item_by_base_id("woodenBuckler", 10, ItemRarity.RARE, rng, IdSequence())
        assert item.prefixes == []
        assert [a.definition_id for a in item.suffixes] == ["blockChance"]

    def test_rolled_base_stats(self):
        """Body armour defence is rolled per item within its range."""
        rng = GameRNG(seed=9)
        ids = IdSequence()
        for _ in range(20):
            item = generate_item_by_base_id("plateVest", 1, ItemRarity.NORMAL, rng, ids)
            assert 22 <= item.rolled_base_stats["armor"] <= 32
            assert item.stats["armor"] == item.rolled_base_stats["armor"]

    def test_rings_split_across_slots(self):
        """Ring drops land in either ring slot."""
        rng = GameRNG(seed=12)
        ids = IdSequence()
        slots = {
            generate_item_by_base_id("ironRing", 5, ItemRarity.NORMAL, rng, ids).slot
            for _ in range(40)
        }
        assert slots == {EquipmentSlot.RING1, EquipmentSlot.RING2}

    def test_unique_ids(self):
        """Each generated item gets a fresh id."""
        rng = GameRNG(seed=1)
        ids = IdSequence()
        items = [generate_item(5, rng, ids) for _ in range(10)]
        assert len({i.id for i in items}) == 10

    def test_unknown_base(self):
        """Unknown base ids give None."""
        assert generate_item_by_base_id("nope", 1, ItemRarity.MAGIC, GameRNG(1), IdSequence()) is None

    def test_no_bases_at_level_zero(self):
        """Nothing drops below the lowest drop level."""
        assert generate_item(0, GameRNG(1), IdSequence()) is None

    def test_item_level_bonus(self):
        """Item level is monster level plus the bonus."""
        item = generate_item(5, GameRNG(1), IdSequence(), item_level_bonus=2)
        assert item.item_level == 7

    def test_item_level_at_least_one(self):
        """Item level never drops below 1."""
        item = generate_item(1, GameRNG(1), IdSequence(), item_level_bonus=-5)
        assert item.item_level == 1
        item = generate_item_by_base_id("leatherCap", 0, ItemRarity.MAGIC, GameRNG(1), IdSequence())
        assert item.item_level == 1

    def test_deterministic(self):
        """Same seed, same item."""
        a = generate_item(10, GameRNG(seed=99), IdSequence())
        b = generate_item(10, GameRNG(seed=99), IdSequence())
        assert a == b

    def test_base_drop_level_respected(self):
        """Picked bases never exceed the monster level."""
        rng = Random(6)
        for _ in range(100):
            assert pick_item_base(1, rng).drop_level <= 1


class TestRarityRolls:
    """Item rarity and currency rolls."""

    def test_huge_bonus_always_rare(self):
        """A large loot bonus pushes every roll to rare."""
        rng = Random(1)
        assert all(roll_item_rarity(100, rng) == ItemRarity.RARE for _ in range(50))

    def test_zero_bonus_always_normal(self):
        """No loot bonus means normal items."""
        rng = Random(1)
        assert all(roll_item_rarity(0, rng) == ItemRarity.NORMAL for _ in range(50))

    def test_currency_never_socket_orb(self):
        """The weighted currency table never yields socket orbs."""
        rng = Random(3)
        drops = [roll_currency_drop(10, rng) for _ in range(300)]
        assert None not in drops
        assert CurrencyType.SOCKET_ORB not in drops

    def test_socket_orb_chance_bands(self):
        """Level bands and rarity multipliers."""
        assert socket_orb_chance(5, MonsterRarity.NORMAL, 1) == pytest.approx(0.003)
        assert socket_orb_chance(15, MonsterRarity.BOSS, 1) == pytest.approx(0.018)
        assert socket_orb_chance(40, MonsterRarity.NORMAL, 1) == pytest.approx(0.01)


# =============================================================================
# Kill Rewards
# =============================================================================


class TestGenerateLoot:
    """generate_loot."""

    def test_experience_passed_through(self, make_monster):
        """The monster's experience is part of the result."""
        loot = generate_loot(make_monster(loot_bonus=0), GameRNG(1), IdSequence())
        assert loot.experience == 25
        assert loot.items == []
        assert loot.currency == {}

    def test_boss_guaranteed_drops(self):
        """The Drowned Captain always drops its two bases plus a random item."""
        ids = IdSequence()
        boss = spawn_boss("drownedCaptain", 1, ids)
        loot = generate_loot(boss, GameRNG(seed=4), ids)
        base_ids = [item.base_id for item in loot.items]
        assert len(loot.items) == 3
        assert base_ids[1:] == ["rustySword", "leatherCap"]
        for item in loot.items[1:]:
            assert item.rarity in (ItemRarity.MAGIC, ItemRarity.RARE)
            assert item.item_level == 3
