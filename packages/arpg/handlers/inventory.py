"""
Inventory Handler - equip, unequip and sell items.

An item is always in exactly one place: an equipment slot or the inventory.
Equipping swaps the previous occupant back into the inventory.
"""

from __future__ import annotations

import logging
from typing import Dict, Optional

from ..calc.stats import compute_player_stats
from ..state.combat import GameState, LogType
from ..state.player import CurrencyType, EquipmentSlot, ItemRarity, Player
from .results import IntentResult, ignore, reject

logger = logging.getLogger(__name__)

SELL_VALUES: Dict[ItemRarity, Dict[CurrencyType, int]] = {
    ItemRarity.NORMAL: {},
    ItemRarity.MAGIC: {CurrencyType.TRANSMUTATION: 1},
    ItemRarity.RARE: {CurrencyType.ALTERATION: 2},
    ItemRarity.UNIQUE: {CurrencyType.ALCHEMY: 1},
}


def clamp_resources(player: Player) -> None:
    """Keep current life/mana within the (possibly reduced) maximums."""
    stats = compute_player_stats(player)
    player.current_life = max(0.0, min(player.current_life, stats.max_life))
    player.current_mana = max(0.0, min(player.current_mana, stats.max_mana))


class InventoryHandler:
    """
    Player intents for items.

    Usage:
        InventoryHandler.equip_item(state, "item_3")
        InventoryHandler.unequip_item(state, EquipmentSlot.WEAPON)
        InventoryHandler.sell_item(state, "item_7")
    """

    @staticmethod
    def equip_item(
        state: GameState, item_id: str, slot: Optional[EquipmentSlot] = None
    ) -> IntentResult:
        """
        Equip an inventory item into its own slot (rings into either ring slot).

        Args:
            state: Game state
            item_id: Inventory item id
            slot: Target slot, defaults to the item's slot
        """
        player = state.player
        item = player.find_inventory_item(item_id)
        if item is None:
            return ignore(f"item {item_id} is not in the inventory")

        target = slot or item.slot
        if not item.fits_slot(target):
            return reject(state, f"{item.name} cannot be equipped in {target.value}.")

        previous = player.equipment[target]
        player.inventory.remove(item)
        if previous is not None:
            player.inventory.append(previous)
        player.equipment[target] = item
        clamp_resources(player)

        logger.debug("Equipped %s in %s", item.id, target.value)
        return IntentResult(success=True)

    @staticmethod
    def unequip_item(state: GameState, slot: EquipmentSlot) -> IntentResult:
        player = state.player
        item = player.equipment[slot]
        if item is None:
            return ignore(f"{slot.value} is empty")
        if player.inventory_full:
            return reject(state, "Inventory full!", LogType.LOOT)

        player.equipment[slot] = None
        player.inventory.append(item)
        clamp_resources(player)
        return IntentResult(success=True)

    @staticmethod
    def sell_item(state: GameState, item_id: str) -> IntentResult:
        """Destroy an inventory item for currency based on its rarity."""
        player = state.player
        item = player.find_inventory_item(item_id)
        if item is None:
            return ignore(f"item {item_id} is not in the inventory")

        player.inventory.remove(item)
        for currency, amount in SELL_VALUES.get(item.rarity, {}).items():
            player.currency[currency] += amount

        logger.debug("Sold %s (%s)", item.id, item.rarity.value)
        return IntentResult(success=True, message=f"Sold {item.name}")


__all__ = ["InventoryHandler", "SELL_VALUES", "clamp_resources"]
