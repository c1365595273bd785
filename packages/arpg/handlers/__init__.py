"""
Handlers for player intents.

Contains:
- MapTracker: map selection, boss gating, unlocks
- SkillHandler: skill bar, gem purchases, levels, sockets, support links
- InventoryHandler: equip, unequip, sell
"""

from .results import IntentResult
from .maps import MapTracker
from .skills import SkillHandler, MAX_SUPPORT_SOCKETS
from .inventory import InventoryHandler, SELL_VALUES, clamp_resources

__all__ = [
    "IntentResult",
    "MapTracker",
    "SkillHandler",
    "MAX_SUPPORT_SOCKETS",
    "InventoryHandler",
    "SELL_VALUES",
    "clamp_resources",
]
