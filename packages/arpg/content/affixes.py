"""
Affix definitions.

Tiers are listed in ascending item-level order; the loot generator always takes
the highest tier the item level unlocks. Percentage defence affixes
(increased_armor / increased_evasion / increased_energy_shield) are local: they
scale the item's own defence instead of the character's.
"""

from typing import Dict, List, Sequence, Tuple

from ..state.player import EquipmentSlot as S
from .definitions import AffixDefinition, AffixTier, AffixType
from .items import BODY_ARMOR_DEXTERITY, BODY_ARMOR_INTELLIGENCE, BODY_ARMOR_STRENGTH

PREFIX = AffixType.PREFIX
SUFFIX = AffixType.SUFFIX

ARMOUR_SLOTS = (S.HELMET, S.BODY_ARMOR, S.GLOVES, S.BOOTS, S.BELT)
RINGS = (S.RING1, S.RING2)
JEWELLERY = (S.RING1, S.RING2, S.AMULET)


def _tiers(rows: Sequence[Tuple[float, float, int]]) -> List[AffixTier]:
    """(min, max, required item level) rows -> numbered tiers."""
    return [
        AffixTier(tier=i + 1, min_value=low, max_value=high, required_item_level=ilvl)
        for i, (low, high, ilvl) in enumerate(rows)
    ]


_STANDARD_LEVELS = (1, 8, 16, 24, 32)

# =============================================================================
# Prefixes
# =============================================================================

PREFIXES: List[AffixDefinition] = [
    AffixDefinition(
        id="flatPhys", name="Physical Damage", affix_type=PREFIX,
        stat_key="physical_damage_min", secondary_stat_key="physical_damage_max",
        applicable_slots=(S.WEAPON,),
        tiers=[
            AffixTier(1, 1, 3, 1, secondary_min_value=3, secondary_max_value=5),
            AffixTier(2, 4, 7, 5, secondary_min_value=8, secondary_max_value=12),
            AffixTier(3, 8, 12, 10, secondary_min_value=14, secondary_max_value=20),
            AffixTier(4, 13, 18, 15, secondary_min_value=22, secondary_max_value=30),
            AffixTier(5, 19, 25, 20, secondary_min_value=32, secondary_max_value=42),
            AffixTier(6, 26, 35, 25, secondary_min_value=44, secondary_max_value=58),
            AffixTier(7, 36, 45, 30, secondary_min_value=60, secondary_max_value=75),
        ],
    ),
    AffixDefinition(
        id="flatLife", name="Maximum Life", affix_type=PREFIX, stat_key="max_life",
        applicable_slots=ARMOUR_SLOTS + RINGS,
        tiers=_tiers([(5, 10, 1), (11, 20, 5), (21, 30, 10), (31, 45, 15),
                      (46, 60, 20), (61, 80, 25), (81, 100, 30)]),
    ),
    AffixDefinition(
        id="flatArmor", name="Armor", affix_type=PREFIX, stat_key="armor",
        applicable_slots=ARMOUR_SLOTS,
        tiers=_tiers([(10, 20, 1), (21, 40, 5), (41, 70, 10), (71, 100, 15),
                      (101, 140, 20), (141, 180, 25), (181, 220, 30)]),
    ),
    AffixDefinition(
        id="flatEvasion", name="Evasion Rating", affix_type=PREFIX, stat_key="evasion",
        applicable_slots=ARMOUR_SLOTS,
        tiers=_tiers(list(zip((15, 31, 61, 101, 151), (30, 60, 100, 150, 220), _STANDARD_LEVELS))),
    ),
    AffixDefinition(
        id="incPhysDmg", name="Increased Physical Damage", affix_type=PREFIX,
        stat_key="increased_physical_damage", is_percentage=True,
        applicable_slots=(S.WEAPON,),
        tiers=_tiers(list(zip((10, 21, 36, 56, 76), (20, 35, 55, 75, 100), _STANDARD_LEVELS))),
    ),
    AffixDefinition(
        id="incFireDmg", name="Increased Fire Damage", affix_type=PREFIX,
        stat_key="increased_fire_damage", is_percentage=True,
        applicable_slots=(S.WEAPON,) + RINGS,
        tiers=_tiers(list(zip((5, 11, 19, 29, 41), (10, 18, 28, 40, 55), _STANDARD_LEVELS))),
    ),
    AffixDefinition(
        id="incColdDmg", name="Increased Cold Damage", affix_type=PREFIX,
        stat_key="increased_cold_damage", is_percentage=True,
        applicable_slots=(S.WEAPON,) + RINGS,
        tiers=_tiers(list(zip((5, 11, 19, 29, 41), (10, 18, 28, 40, 55), _STANDARD_LEVELS))),
    ),
    AffixDefinition(
        id="incLightDmg", name="Increased Lightning Damage", affix_type=PREFIX,
        stat_key="increased_lightning_damage", is_percentage=True,
        applicable_slots=(S.WEAPON,) + RINGS,
        tiers=_tiers(list(zip((5, 11, 19, 29, 41), (10, 18, 28, 40, 55), _STANDARD_LEVELS))),
    ),
    AffixDefinition(
        id="flatFire", name="Fire Damage", affix_type=PREFIX,
        stat_key="fire_damage_min", secondary_stat_key="fire_damage_max",
        applicable_slots=(S.WEAPON,) + JEWELLERY,
        tiers=[
            AffixTier(1, 1, 2, 1, secondary_min_value=3, secondary_max_value=4),
            AffixTier(2, 3, 5, 8, secondary_min_value=6, secondary_max_value=9),
            AffixTier(3, 6, 9, 16, secondary_min_value=11, secondary_max_value=15),
            AffixTier(4, 10, 14, 24, secondary_min_value=17, secondary_max_value=23),
            AffixTier(5, 15, 21, 32, secondary_min_value=25, secondary_max_value=33),
        ],
    ),
    AffixDefinition(
        id="flatStr", name="Strength", affix_type=PREFIX, stat_key="strength",
        applicable_slots=ARMOUR_SLOTS + JEWELLERY,
        tiers=_tiers(list(zip((5, 11, 19, 29, 41), (10, 18, 28, 40, 55), _STANDARD_LEVELS))),
    ),
    AffixDefinition(
        id="flatDex", name="Dexterity", affix_type=PREFIX, stat_key="dexterity",
        applicable_slots=ARMOUR_SLOTS + JEWELLERY,
        tiers=_tiers(list(zip((5, 11, 19, 29, 41), (10, 18, 28, 40, 55), _STANDARD_LEVELS))),
    ),
    AffixDefinition(
        id="flatInt", name="Intelligence", affix_type=PREFIX, stat_key="intelligence",
        applicable_slots=ARMOUR_SLOTS + JEWELLERY,
        tiers=_tiers(list(zip((5, 11, 19, 29, 41), (10, 18, 28, 40, 55), _STANDARD_LEVELS))),
    ),

    # Local body armour defences
    AffixDefinition(
        id="localIncArmor", name="Increased Armor", affix_type=PREFIX,
        stat_key="increased_armor", is_percentage=True,
        applicable_slots=(S.BODY_ARMOR,),
        required_base_tags_any=(BODY_ARMOR_STRENGTH,),
        tiers=_tiers(list(zip((15, 27, 43, 56, 68), (26, 42, 55, 67, 79), _STANDARD_LEVELS))),
    ),
    AffixDefinition(
        id="localIncEvasion", name="Increased Evasion", affix_type=PREFIX,
        stat_key="increased_evasion", is_percentage=True,
        applicable_slots=(S.BODY_ARMOR,),
        required_base_tags_any=(BODY_ARMOR_DEXTERITY,),
        tiers=_tiers(list(zip((15, 27, 43, 56, 68), (26, 42, 55, 67, 79), _STANDARD_LEVELS))),
    ),
    AffixDefinition(
        id="localIncEnergyShield", name="Increased Energy Shield", affix_type=PREFIX,
        stat_key="increased_energy_shield", is_percentage=True,
        applicable_slots=(S.BODY_ARMOR,),
        required_base_tags_any=(BODY_ARMOR_INTELLIGENCE,),
        tiers=_tiers(list(zip((15, 27, 43, 56, 68), (26, 42, 55, 67, 79), _STANDARD_LEVELS))),
    ),
]


# =============================================================================
# Suffixes
# =============================================================================

SUFFIXES: List[AffixDefinition] = [
    AffixDefinition(
        id="attackSpeed", name="Attack Speed", affix_type=SUFFIX,
        stat_key="increased_attack_speed", is_percentage=True,
        applicable_slots=(S.WEAPON, S.GLOVES) + RINGS,
        tiers=_tiers(list(zip((3, 6, 10, 14, 19), (5, 9, 13, 18, 25), _STANDARD_LEVELS))),
    ),
    AffixDefinition(
        id="critChance", name="Critical Strike Chance", affix_type=SUFFIX,
        stat_key="critical_chance", is_percentage=True,
        applicable_slots=(S.WEAPON,) + RINGS,
        tiers=_tiers(list(zip((5, 11, 19, 29, 39), (10, 18, 28, 38, 50), _STANDARD_LEVELS))),
    ),
    AffixDefinition(
        id="critMulti", name="Critical Strike Multiplier", affix_type=SUFFIX,
        stat_key="critical_multiplier", is_percentage=True,
        applicable_slots=(S.WEAPON,) + RINGS,
        tiers=_tiers(list(zip((10, 21, 36, 56, 81), (20, 35, 55, 80, 110), _STANDARD_LEVELS))),
    ),
    AffixDefinition(
        id="lifeRegen", name="Life Regeneration", affix_type=SUFFIX,
        stat_key="life_regeneration",
        applicable_slots=(S.HELMET, S.BODY_ARMOR, S.BELT) + RINGS,
        tiers=_tiers([(0.5, 1.5, 1), (1.6, 3.2, 8), (3.3, 5.5, 16), (5.6, 8.8, 24), (8.9, 12.5, 32)]),
    ),
    AffixDefinition(
        id="fireRes", name="Fire Resistance", affix_type=SUFFIX,
        stat_key="fire_resistance", is_percentage=True,
        applicable_slots=ARMOUR_SLOTS + RINGS,
        tiers=_tiers(list(zip((6, 12, 18, 25, 33), (11, 17, 24, 32, 42), _STANDARD_LEVELS))),
    ),
    AffixDefinition(
        id="coldRes", name="Cold Resistance", affix_type=SUFFIX,
        stat_key="cold_resistance", is_percentage=True,
        applicable_slots=ARMOUR_SLOTS + RINGS,
        tiers=_tiers(list(zip((6, 12, 18, 25, 33), (11, 17, 24, 32, 42), _STANDARD_LEVELS))),
    ),
    AffixDefinition(
        id="lightRes", name="Lightning Resistance", affix_type=SUFFIX,
        stat_key="lightning_resistance", is_percentage=True,
        applicable_slots=ARMOUR_SLOTS + RINGS,
        tiers=_tiers(list(zip((6, 12, 18, 25, 33), (11, 17, 24, 32, 42), _STANDARD_LEVELS))),
    ),
    AffixDefinition(
        id="allElementalRes", name="All Elemental Resistances", affix_type=SUFFIX,
        stat_key="fire_resistance",
        secondary_stat_key="cold_resistance", tertiary_stat_key="lightning_resistance",
        use_primary_value_for_secondary=True, use_primary_value_for_tertiary=True,
        is_percentage=True,
        applicable_slots=JEWELLERY,
        tiers=_tiers([(3, 5, 12), (6, 8, 20), (9, 12, 28), (13, 16, 36)]),
    ),
    AffixDefinition(
        id="accuracy", name="Accuracy Rating", affix_type=SUFFIX, stat_key="accuracy",
        applicable_slots=(S.WEAPON, S.HELMET, S.GLOVES) + JEWELLERY,
        tiers=_tiers(list(zip((20, 41, 81, 131, 201), (40, 80, 130, 200, 300), _STANDARD_LEVELS))),
    ),
    AffixDefinition(
        id="manaRegen", name="Mana Regeneration", affix_type=SUFFIX,
        stat_key="mana_regeneration",
        applicable_slots=(S.HELMET, S.AMULET) + RINGS,
        tiers=_tiers([(0.5, 1.0, 1), (1.1, 2.0, 8), (2.1, 3.5, 16), (3.6, 5.0, 24)]),
    ),
    AffixDefinition(
        id="blockChance", name="Block Chance", affix_type=SUFFIX,
        stat_key="block_chance", is_percentage=True,
        applicable_slots=(S.OFFHAND,),
        tiers=_tiers([(2, 4, 1), (5, 8, 8), (9, 12, 16), (13, 16, 24)]),
    ),
]

AFFIXES: List[AffixDefinition] = PREFIXES + SUFFIXES
AFFIXES_BY_ID: Dict[str, AffixDefinition] = {a.id: a for a in AFFIXES}
