"""
Item base definitions.

Stat keys match PlayerStats field names. Weapon bases list `attack_speed`; when
such an item is equipped it counts as increased attack speed, not as a second
base speed.
"""

from typing import Dict, List

from ..state.player import EquipmentSlot
from .definitions import ItemBase


BODY_ARMOR_STRENGTH = "bodyArmorStrength"
BODY_ARMOR_DEXTERITY = "bodyArmorDexterity"
BODY_ARMOR_INTELLIGENCE = "bodyArmorIntelligence"


def _weapon(id, name, drop_level, phys_min, phys_max, attack_speed, crit):
    return ItemBase(
        id=id, name=name, slot=EquipmentSlot.WEAPON,
        drop_level=drop_level, required_level=drop_level,
        base_stats={
            "physical_damage_min": phys_min,
            "physical_damage_max": phys_max,
            "attack_speed": attack_speed,
            "critical_chance": crit,
        },
    )


def _armour(id, name, slot, drop_level, **stats):
    return ItemBase(
        id=id, name=name, slot=slot,
        drop_level=drop_level, required_level=drop_level,
        base_stats=dict(stats),
    )


def _body_armor(id, name, drop_level, tag, stat, low, high):
    """Body armours roll their defence per instance."""
    return ItemBase(
        id=id, name=name, slot=EquipmentSlot.BODY_ARMOR,
        drop_level=drop_level, required_level=drop_level,
        base_stats={stat: (low + high) // 2},
        base_stat_ranges={stat: (low, high)},
        base_tags=(tag,),
    )


ITEM_BASES: List[ItemBase] = [
    # Weapons
    _weapon("rustySword", "Rusty Sword", 1, 2, 5, 1.2, 5),
    _weapon("ironSword", "Iron Sword", 5, 5, 12, 1.2, 5),
    _weapon("steelBlade", "Steel Blade", 12, 10, 22, 1.3, 5),
    _weapon("mithrilSword", "Mithril Sword", 20, 18, 35, 1.4, 6),
    _weapon("demonBlade", "Demon Blade", 30, 28, 52, 1.3, 7),

    # Helmets
    _armour("leatherCap", "Leather Cap", EquipmentSlot.HELMET, 1, armor=5, max_life=5),
    _armour("ironHelm", "Iron Helm", EquipmentSlot.HELMET, 8, armor=20, max_life=10),
    _armour("steelHelmet", "Steel Helmet", EquipmentSlot.HELMET, 18, armor=40, max_life=15),

    # Body armour
    _body_armor("plateVest", "Plate Vest", 1, BODY_ARMOR_STRENGTH, "armor", 22, 32),
    _body_armor("chestplate", "Chestplate", 6, BODY_ARMOR_STRENGTH, "armor", 60, 75),
    _body_armor("copperPlate", "Copper Plate", 17, BODY_ARMOR_STRENGTH, "armor", 130, 155),
    _body_armor("shabbyJerkin", "Shabby Jerkin", 1, BODY_ARMOR_DEXTERITY, "evasion", 28, 38),
    _body_armor("strappedLeather", "Strapped Leather", 9, BODY_ARMOR_DEXTERITY, "evasion", 85, 110),
    _body_armor("simpleRobe", "Simple Robe", 1, BODY_ARMOR_INTELLIGENCE, "energy_shield", 12, 17),

    # Gloves
    _armour("raggedGloves", "Ragged Gloves", EquipmentSlot.GLOVES, 1, armor=3),
    _armour("leatherGloves", "Leather Gloves", EquipmentSlot.GLOVES, 7, armor=12),
    _armour("chainGloves", "Chain Gloves", EquipmentSlot.GLOVES, 16, armor=28),

    # Boots
    _armour("wornSandals", "Worn Sandals", EquipmentSlot.BOOTS, 1, armor=3),
    _armour("leatherBoots", "Leather Boots", EquipmentSlot.BOOTS, 7, armor=12),
    _armour("chainBoots", "Chain Boots", EquipmentSlot.BOOTS, 16, armor=28),

    # Belts
    _armour("ropeBelt", "Rope Belt", EquipmentSlot.BELT, 1, max_life=5),
    _armour("leatherBelt", "Leather Belt", EquipmentSlot.BELT, 8, max_life=15, armor=5),
    _armour("studdedBelt", "Studded Belt", EquipmentSlot.BELT, 18, max_life=30, armor=12),

    # Jewellery, rolled into ring1 or ring2 at drop time
    _armour("ironRing", "Iron Ring", EquipmentSlot.RING1, 3,
            physical_damage_min=1, physical_damage_max=3),
    _armour("goldRing", "Gold Ring", EquipmentSlot.RING1, 12, accuracy=30),
    _armour("rubyRing", "Ruby Ring", EquipmentSlot.RING1, 14, fire_resistance=20),
    _armour("coralAmulet", "Coral Amulet", EquipmentSlot.AMULET, 4, life_regeneration=2),

    # Off-hand
    _armour("woodenBuckler", "Wooden Buckler", EquipmentSlot.OFFHAND, 2,
            block_chance=5, armor=8),
]

ITEM_BASES_BY_ID: Dict[str, ItemBase] = {b.id: b for b in ITEM_BASES}
