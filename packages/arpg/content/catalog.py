"""
Catalog - read-only lookup of all static content by id.

Every getter returns None for unknown ids; callers treat a missing definition
as a silent no-op.

Usage:
    from packages.arpg.content import DEFAULT_CATALOG

    zombie = DEFAULT_CATALOG.get_monster("drownedZombie")
    beach = DEFAULT_CATALOG.get_map("twilightBeach")
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional

from ..state.player import CurrencyType, EquipmentSlot
from .affixes import AFFIXES
from .currency import CURRENCIES, STARTING_CURRENCY
from .definitions import (
    AffixDefinition,
    AffixType,
    BossDefinition,
    CurrencyDefinition,
    GameMap,
    ItemBase,
    MonsterDefinition,
    SkillDefinition,
    SupportGemDefinition,
)
from .items import ITEM_BASES
from .maps import MAPS, STARTING_MAP_ID
from .monsters import BOSSES, MONSTERS
from .skills import DEFAULT_ATTACK_ID, SKILLS, STARTER_SKILL_IDS, SUPPORT_GEMS


class Catalog:
    """Static content tables indexed by id."""

    def __init__(
        self,
        monsters: Iterable[MonsterDefinition],
        bosses: Iterable[BossDefinition],
        skills: Iterable[SkillDefinition],
        support_gems: Iterable[SupportGemDefinition],
        item_bases: Iterable[ItemBase],
        affixes: Iterable[AffixDefinition],
        maps: Iterable[GameMap],
        currencies: Iterable[CurrencyDefinition],
        starter_skill_ids: Iterable[str] = (),
        starting_currency: Optional[Dict[CurrencyType, int]] = None,
        starting_map_id: Optional[str] = None,
    ):
        self.monsters: Dict[str, MonsterDefinition] = {m.id: m for m in monsters}
        self.bosses: Dict[str, BossDefinition] = {b.id: b for b in bosses}
        self.skills: Dict[str, SkillDefinition] = {s.id: s for s in skills}
        self.support_gems: Dict[str, SupportGemDefinition] = {s.id: s for s in support_gems}
        self.item_bases: List[ItemBase] = list(item_bases)
        self.affixes: List[AffixDefinition] = list(affixes)
        self.maps: List[GameMap] = sorted(maps, key=lambda m: m.order)
        self.currencies: List[CurrencyDefinition] = list(currencies)
        self.starter_skill_ids: List[str] = list(starter_skill_ids)
        self.starting_currency: Dict[CurrencyType, int] = dict(starting_currency or {})
        self.starting_map_id = starting_map_id or (self.maps[0].id if self.maps else None)

        self._item_bases_by_id = {b.id: b for b in self.item_bases}
        self._affixes_by_id = {a.id: a for a in self.affixes}
        self._maps_by_id = {m.id: m for m in self.maps}

    # -------------------------------------------------------------------------
    # Lookups
    # -------------------------------------------------------------------------

    def get_monster(self, monster_id: str) -> Optional[MonsterDefinition]:
        return self.monsters.get(monster_id)

    def get_boss(self, boss_id: str) -> Optional[BossDefinition]:
        return self.bosses.get(boss_id)

    def get_skill(self, skill_id: str) -> Optional[SkillDefinition]:
        return self.skills.get(skill_id)

    def get_support_gem(self, support_id: str) -> Optional[SupportGemDefinition]:
        return self.support_gems.get(support_id)

    def get_item_base(self, base_id: str) -> Optional[ItemBase]:
        return self._item_bases_by_id.get(base_id)

    def get_affix(self, affix_id: str) -> Optional[AffixDefinition]:
        return self._affixes_by_id.get(affix_id)

    def get_map(self, map_id: str) -> Optional[GameMap]:
        return self._maps_by_id.get(map_id)

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def bases_for_level(self, monster_level: int) -> List[ItemBase]:
        return [b for b in self.item_bases if b.drop_level <= monster_level]

    def affixes_for(
        self,
        affix_type: AffixType,
        slot: EquipmentSlot,
        base_tags=(),
        exclude: Iterable[str] = (),
    ) -> List[AffixDefinition]:
        """Affixes of one type that can roll on `slot` for a base with `base_tags`."""
        excluded = set(exclude)
        return [
            a for a in self.affixes
            if a.affix_type == affix_type
            and slot in a.applicable_slots
            and a.allows_base(tuple(base_tags))
            and a.id not in excluded
        ]

    def maps_unlocked_by(self, map_id: str) -> List[GameMap]:
        return [m for m in self.maps if m.required_map_id == map_id]

    def buyable_skills(self, player_level: int) -> List[SkillDefinition]:
        """Skills for sale at a character level (Strike is never for sale)."""
        return [
            s for s in self.skills.values()
            if s.id != DEFAULT_ATTACK_ID and s.required_level <= player_level
        ]


DEFAULT_CATALOG = Catalog(
    monsters=MONSTERS,
    bosses=BOSSES,
    skills=SKILLS,
    support_gems=SUPPORT_GEMS,
    item_bases=ITEM_BASES,
    affixes=AFFIXES,
    maps=MAPS,
    currencies=CURRENCIES,
    starter_skill_ids=STARTER_SKILL_IDS,
    starting_currency=STARTING_CURRENCY,
    starting_map_id=STARTING_MAP_ID,
)
