"""
Currency definitions and drop weights.
"""

from typing import Dict, List

from ..state.player import CurrencyType
from .definitions import CurrencyDefinition


CURRENCIES: List[CurrencyDefinition] = [
    CurrencyDefinition(CurrencyType.TRANSMUTATION, "Orb of Transmutation", 100,
                       "Upgrades a normal item to a magic item"),
    CurrencyDefinition(CurrencyType.ALTERATION, "Orb of Alteration", 80,
                       "Rerolls the affixes on a magic item"),
    CurrencyDefinition(CurrencyType.AUGMENTATION, "Orb of Augmentation", 30,
                       "Adds an affix to a magic item"),
    CurrencyDefinition(CurrencyType.ALCHEMY, "Orb of Alchemy", 20,
                       "Upgrades a normal item to a rare item"),
    CurrencyDefinition(CurrencyType.CHAOS, "Chaos Orb", 5,
                       "Rerolls the affixes on a rare item"),
    CurrencyDefinition(CurrencyType.EXALTED, "Exalted Orb", 0.5,
                       "Adds an affix to a rare item"),
    CurrencyDefinition(CurrencyType.DIVINE, "Divine Orb", 0.2,
                       "Rerolls the values of all affixes on an item"),
    CurrencyDefinition(CurrencyType.SCOURING, "Orb of Scouring", 15,
                       "Removes all affixes from an item"),
]

# Socket orbs never come from the weighted table, only from their own roll.
SOCKET_ORB = CurrencyDefinition(CurrencyType.SOCKET_ORB, "Socket Orb", 0,
                                "Adds one support socket to a skill")

STARTING_CURRENCY: Dict[CurrencyType, int] = {
    CurrencyType.TRANSMUTATION: 5,
    CurrencyType.ALTERATION: 5,
    CurrencyType.AUGMENTATION: 2,
    CurrencyType.ALCHEMY: 1,
    CurrencyType.SCOURING: 1,
}
