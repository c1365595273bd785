"""
Loot Generation - item drops, affix rolling, currency and socket orbs.

All randomness comes from the game's RNG streams:
- loot stream: drop chance, base pick, rarity, ring slot, currency, socket orb
- affix stream: affix counts, affix picks, affix values, per-instance base rolls

Item drop:
1. Drop chance by monster rarity (boss 100%, rare 50%, magic 30%, normal 15%)
   times the monster's loot bonus
2. Base picked with a Gaussian weight around the monster level
3. Rarity roll: rare < 5*bonus, magic < 25*bonus, else normal
4. Affix count within the rarity budget, filled prefix/suffix at random,
   then forced up to the minimum
5. Item stats = base + affixes, local defence percentages folded in last

Usage:
    loot = generate_loot(monster, game_rng, ids)
    for item in loot.items:
        print(item.name, item.stats)
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Tuple

from ..content.catalog import DEFAULT_CATALOG, Catalog
from ..content.definitions import AffixType, ItemBase
from ..state.combat import IdSequence, Monster, MonsterRarity
from ..state.player import Affix, CurrencyType, EquipmentSlot, Item, ItemRarity
from ..state.rng import GameRNG, Random

logger = logging.getLogger(__name__)

__all__ = [
    "LootResult",
    "generate_loot",
    "generate_item",
    "generate_item_by_base_id",
    "roll_affix",
    "roll_affix_value",
    "compute_item_stats",
    "roll_currency_drop",
    "roll_socket_orb_drop",
    "roll_item_rarity",
    "pick_item_base",
    # Constants
    "ITEM_DROP_CHANCE",
    "AFFIX_COUNT_BY_RARITY",
    "MAX_PREFIXES",
    "MAX_SUFFIXES",
]


# =============================================================================
# CONSTANTS
# =============================================================================

ITEM_DROP_CHANCE: Dict[MonsterRarity, float] = {
    MonsterRarity.BOSS: 1.0,
    MonsterRarity.RARE: 0.5,
    MonsterRarity.MAGIC: 0.3,
    MonsterRarity.NORMAL: 0.15,
}

ITEM_LEVEL_BONUS: Dict[MonsterRarity, int] = {
    MonsterRarity.NORMAL: 0,
    MonsterRarity.MAGIC: 1,
    MonsterRarity.RARE: 2,
    MonsterRarity.BOSS: 2,
}

# Percent per point of loot bonus
RARE_ITEM_CHANCE = 5.0
MAGIC_ITEM_CHANCE = 25.0

AFFIX_COUNT_BY_RARITY: Dict[ItemRarity, Tuple[int, int]] = {
    ItemRarity.NORMAL: (0, 0),
    ItemRarity.MAGIC: (1, 2),
    ItemRarity.RARE: (2, 6),
    ItemRarity.UNIQUE: (0, 0),
}
MAX_PREFIXES = 3
MAX_SUFFIXES = 3
MAX_AFFIX_ATTEMPTS = 48

BASE_SIGMA_MIN = 3.0
BASE_SIGMA_PER_LEVEL = 0.18
BASE_WEIGHT_FLOOR = 0.001

GUARANTEED_DROP_RARE_CHANCE = 0.30

CURRENCY_DROP_CHANCE = 0.10
BOSS_CURRENCY_ROLLS = 3

SOCKET_ORB_BASE_CHANCE = ((10, 0.003), (20, 0.006))  # (max monster level, chance)
SOCKET_ORB_HIGH_LEVEL_CHANCE = 0.01
SOCKET_ORB_RARITY_MULT: Dict[MonsterRarity, float] = {
    MonsterRarity.NORMAL: 1.0,
    MonsterRarity.MAGIC: 1.3,
    MonsterRarity.RARE: 1.8,
    MonsterRarity.BOSS: 3.0,
}

# flat defence stat -> local increased% stat folded into it
LOCAL_DEFENCES = (
    ("armor", "increased_armor"),
    ("evasion", "increased_evasion"),
    ("energy_shield", "increased_energy_shield"),
)


@dataclass
class LootResult:
    items: List[Item] = field(default_factory=list)
    currency: Dict[CurrencyType, int] = field(default_factory=dict)
    experience: float = 0.0

    def add_currency(self, currency: CurrencyType, amount: int = 1) -> None:
        self.currency[currency] = self.currency.get(currency, 0) + amount


# =============================================================================
# VALUES AND STATS
# =============================================================================


def roll_affix_value(low: float, high: float, rng: Random) -> float:
    """
    Uniform value in [low, high].

    Integer bounds give a floored integer (high inclusive); decimal bounds give
    a value rounded to one decimal.
    """
    if high < low:
        low, high = high, low
    if float(low).is_integer() and float(high).is_integer():
        return math.floor(low + rng.random_float() * (high - low + 1))
    return round(low + rng.random_float() * (high - low), 1)


def compute_item_stats(
    base: ItemBase,
    prefixes: Iterable[Affix],
    suffixes: Iterable[Affix],
    rolled_base_stats: Optional[Dict[str, float]] = None,
    catalog: Catalog = DEFAULT_CATALOG,
) -> Dict[str, float]:
    """
    Flatten base stats and affix contributions into one stat dict.

    Local increased armor/evasion/energy shield scale the item's own flat
    defence once, after everything is summed, and are not passed on.
    """
    stats: Dict[str, float] = dict(base.base_stats)
    stats.update(rolled_base_stats or {})

    def _add(key: Optional[str], value: Optional[float]) -> None:
        if key is None or value is None:
            return
        stats[key] = stats.get(key, 0) + value

    for affix in [*prefixes, *suffixes]:
        definition = catalog.get_affix(affix.definition_id)
        if definition is None:
            continue
        _add(definition.stat_key, affix.value)
        _add(definition.secondary_stat_key, affix.secondary_value)
        _add(definition.tertiary_stat_key, affix.tertiary_value)

    for flat_key, increased_key in LOCAL_DEFENCES:
        increased = stats.get(increased_key, 0)
        flat = stats.get(flat_key, 0)
        if flat > 0 and increased != 0:
            stats[flat_key] = math.floor(flat * (1 + increased / 100))
            del stats[increased_key]

    return stats


# =============================================================================
# AFFIXES
# =============================================================================


def roll_affix(
    affix_type: AffixType,
    slot: EquipmentSlot,
    item_level: int,
    rng: Random,
    base_tags: Tuple[str, ...] = (),
    exclude: Iterable[str] = (),
    catalog: Catalog = DEFAULT_CATALOG,
) -> Optional[Affix]:
    """
    Roll one affix of a type for a slot.

    The definition is picked uniformly among the ones allowed on the slot and
    base that have at least one tier unlocked; the tier is always the highest
    unlocked at item_level.

    Returns:
        The rolled Affix, or None when nothing can roll
    """
    candidates = [
        definition
        for definition in catalog.affixes_for(affix_type, slot, base_tags, exclude)
        if definition.highest_tier(item_level) is not None
    ]
    if not candidates:
        return None

    definition = rng.choice(candidates)
    tier = definition.highest_tier(item_level)
    value = roll_affix_value(tier.min_value, tier.max_value, rng)

    secondary = None
    if definition.secondary_stat_key:
        if definition.use_primary_value_for_secondary:
            secondary = value
        elif tier.secondary_min_value is not None and tier.secondary_max_value is not None:
            secondary = roll_affix_value(tier.secondary_min_value, tier.secondary_max_value, rng)

    tertiary = None
    if definition.tertiary_stat_key:
        if definition.use_primary_value_for_tertiary:
            tertiary = value
        elif tier.tertiary_min_value is not None and tier.tertiary_max_value is not None:
            tertiary = roll_affix_value(tier.tertiary_min_value, tier.tertiary_max_value, rng)

    return Affix(
        definition_id=definition.id,
        tier=tier.tier,
        value=value,
        secondary_value=secondary,
        tertiary_value=tertiary,
    )


def _roll_affixes(
    base: ItemBase,
    slot: EquipmentSlot,
    item_level: int,
    rarity: ItemRarity,
    rng: Random,
    catalog: Catalog,
) -> Tuple[List[Affix], List[Affix]]:
    low, high = AFFIX_COUNT_BY_RARITY[rarity]
    if high <= 0:
        return [], []

    target = low + math.floor(rng.random_float() * (high - low + 1))
    prefixes: List[Affix] = []
    suffixes: List[Affix] = []
    rolled_ids: List[str] = []

    def _try(affix_type: AffixType) -> bool:
        bucket, cap = (
            (prefixes, MAX_PREFIXES) if affix_type == AffixType.PREFIX else (suffixes, MAX_SUFFIXES)
        )
        if len(bucket) >= cap:
            return False
        affix = roll_affix(affix_type, slot, item_level, rng, base.base_tags, rolled_ids, catalog)
        if affix is None:
            return False
        bucket.append(affix)
        rolled_ids.append(affix.definition_id)
        return True

    attempts = 0
    while len(prefixes) + len(suffixes) < target and attempts < MAX_AFFIX_ATTEMPTS:
        attempts += 1
        first = AffixType.PREFIX if rng.random_float() < 0.5 else AffixType.SUFFIX
        second = AffixType.SUFFIX if first == AffixType.PREFIX else AffixType.PREFIX
        if not _try(first) and not _try(second):
            break

    # Force the rarity minimum, alternating prefix/suffix
    forced = 0
    while len(prefixes) + len(suffixes) < low:
        first = AffixType.PREFIX if forced % 2 == 0 else AffixType.SUFFIX
        second = AffixType.SUFFIX if first == AffixType.PREFIX else AffixType.PREFIX
        forced += 1
        if not _try(first) and not _try(second):
            logger.debug("Could not reach %d affixes on %s", low, base.id)
            break

    return prefixes, suffixes


# =============================================================================
# ITEMS
# =============================================================================


def pick_item_base(
    monster_level: int, rng: Random, catalog: Catalog = DEFAULT_CATALOG
) -> Optional[ItemBase]:
    """Pick a droppable base, weighted toward bases near the monster level."""
    bases = catalog.bases_for_level(monster_level)
    if not bases:
        return None
    sigma = max(BASE_SIGMA_MIN, monster_level * BASE_SIGMA_PER_LEVEL)
    weights = [
        BASE_WEIGHT_FLOOR + math.exp(-((monster_level - base.drop_level) ** 2) / (2 * sigma ** 2))
        for base in bases
    ]
    return bases[rng.weighted_index(weights)]


def roll_item_rarity(loot_bonus: float, rng: Random) -> ItemRarity:
    roll = rng.random_percent()
    if roll < RARE_ITEM_CHANCE * loot_bonus:
        return ItemRarity.RARE
    if roll < MAGIC_ITEM_CHANCE * loot_bonus:
        return ItemRarity.MAGIC
    return ItemRarity.NORMAL


def _build_item(
    base: ItemBase,
    item_level: int,
    rarity: ItemRarity,
    rng: GameRNG,
    ids: IdSequence,
    catalog: Catalog,
) -> Item:
    slot = base.slot
    if slot.is_ring and rng.loot.random_boolean_chance(0.5):
        slot = EquipmentSlot.RING2

    rolled_base_stats = {
        key: roll_affix_value(low, high, rng.affix)
        for key, (low, high) in base.base_stat_ranges.items()
    }
    prefixes, suffixes = _roll_affixes(base, slot, item_level, rarity, rng.affix, catalog)

    return Item(
        id=ids.next("item"),
        base_id=base.id,
        name=base.name,
        slot=slot,
        item_level=item_level,
        rarity=rarity,
        prefixes=prefixes,
        suffixes=suffixes,
        stats=compute_item_stats(base, prefixes, suffixes, rolled_base_stats, catalog),
        rolled_base_stats=rolled_base_stats,
    )


def generate_item(
    monster_level: int,
    rng: GameRNG,
    ids: IdSequence,
    loot_bonus: float = 1.0,
    item_level_bonus: int = 0,
    rarity: Optional[ItemRarity] = None,
    catalog: Catalog = DEFAULT_CATALOG,
) -> Optional[Item]:
    """
    Generate a random item for a monster level.

    Args:
        monster_level: Centre of the base-level weighting
        rng: Game RNG (loot and affix streams)
        ids: Instance id source
        loot_bonus: Scales the rarity chances
        item_level_bonus: Added to the monster level for the item level
        rarity: Fixed rarity, rolled when None
        catalog: Content catalog

    Returns:
        New Item, or None when no base can drop at this level
    """
    base = pick_item_base(monster_level, rng.loot, catalog)
    if base is None:
        return None
    if rarity is None:
        rarity = roll_item_rarity(loot_bonus, rng.loot)
    return _build_item(base, max(1, monster_level + item_level_bonus), rarity, rng, ids, catalog)


def generate_item_by_base_id(
    base_id: str,
    item_level: int,
    rarity: ItemRarity,
    rng: GameRNG,
    ids: IdSequence,
    catalog: Catalog = DEFAULT_CATALOG,
) -> Optional[Item]:
    """Generate an item on a fixed base. Unknown base ids give None."""
    base = catalog.get_item_base(base_id)
    if base is None:
        logger.debug("Unknown item base %s", base_id)
        return None
    return _build_item(base, max(1, item_level), rarity, rng, ids, catalog)


# =============================================================================
# CURRENCY
# =============================================================================


def roll_currency_drop(
    loot_bonus: float, rng: Random, catalog: Catalog = DEFAULT_CATALOG
) -> Optional[CurrencyType]:
    """One currency roll: 10% * loot bonus for any drop, then a weighted type."""
    if rng.random_float() > CURRENCY_DROP_CHANCE * loot_bonus:
        return None
    currencies = [c for c in catalog.currencies if c.drop_weight > 0]
    if not currencies:
        return CurrencyType.TRANSMUTATION
    index = rng.weighted_index([c.drop_weight for c in currencies])
    return currencies[index].id


def socket_orb_chance(monster_level: int, rarity: MonsterRarity, loot_bonus: float) -> float:
    base = SOCKET_ORB_HIGH_LEVEL_CHANCE
    for max_level, chance in SOCKET_ORB_BASE_CHANCE:
        if monster_level <= max_level:
            base = chance
            break
    return base * loot_bonus * SOCKET_ORB_RARITY_MULT.get(rarity, 1.0)


def roll_socket_orb_drop(
    monster_level: int, rarity: MonsterRarity, loot_bonus: float, rng: Random
) -> bool:
    return rng.random_float() < socket_orb_chance(monster_level, rarity, loot_bonus)


# =============================================================================
# KILL REWARDS
# =============================================================================


def generate_loot(
    monster: Monster,
    rng: GameRNG,
    ids: IdSequence,
    catalog: Catalog = DEFAULT_CATALOG,
) -> LootResult:
    """
    Roll everything a dead monster drops.

    Args:
        monster: The killed monster (level, rarity, loot bonus, experience)
        rng: Game RNG
        ids: Instance id source
        catalog: Content catalog

    Returns:
        LootResult with items, currency and the monster's experience reward
    """
    result = LootResult(experience=monster.experience_reward)
    loot_bonus = monster.loot_bonus
    item_level_bonus = ITEM_LEVEL_BONUS.get(monster.rarity, 0)

    drop_chance = ITEM_DROP_CHANCE.get(monster.rarity, 0.0) * loot_bonus
    if rng.loot.random_float() < drop_chance:
        item = generate_item(
            monster.level, rng, ids,
            loot_bonus=loot_bonus,
            item_level_bonus=item_level_bonus,
            catalog=catalog,
        )
        if item is not None:
            result.items.append(item)

    if monster.is_boss:
        boss = catalog.get_boss(monster.definition_id)
        for base_id in boss.guaranteed_drops if boss else []:
            rarity = (
                ItemRarity.RARE
                if rng.loot.random_float() < GUARANTEED_DROP_RARE_CHANCE
                else ItemRarity.MAGIC
            )
            item = generate_item_by_base_id(
                base_id, max(1, monster.level + item_level_bonus), rarity, rng, ids, catalog
            )
            if item is not None:
                result.items.append(item)

    rolls = BOSS_CURRENCY_ROLLS if monster.is_boss else 1
    for _ in range(rolls):
        currency = roll_currency_drop(loot_bonus, rng.loot, catalog)
        if currency is not None:
            result.add_currency(currency)

    if roll_socket_orb_drop(monster.level, monster.rarity, loot_bonus, rng.loot):
        result.add_currency(CurrencyType.SOCKET_ORB)

    return result
