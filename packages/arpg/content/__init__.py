"""
Content module - static catalog of monsters, skills, items, affixes, maps and currency.
"""

from .definitions import (
    MonsterDefinition, BossDefinition, BossSkill, BossSkillType,
    SkillDefinition, SkillType, SkillTargeting, SupportGemDefinition,
    AffixDefinition, AffixTier, AffixType, ItemBase,
    GameMap, CurrencyDefinition,
)
from .catalog import Catalog, DEFAULT_CATALOG
from .skills import DEFAULT_ATTACK_ID, STARTER_SKILL_IDS
from .maps import STARTING_MAP_ID
from .currency import STARTING_CURRENCY, SOCKET_ORB
