"""
Skill Handler - skill bar, gem purchases, gem levels, sockets and support links.

All intents follow the same rules:
- unknown ids or empty slots are silent no-ops
- refused intents (level, currency, sockets, duplicates) write a combat log
  entry and change nothing
- gem levels are never automatic; reaching the experience threshold only
  makes level_up_* succeed
"""

from __future__ import annotations

import logging
from typing import Optional, Union

from ..content.catalog import DEFAULT_CATALOG, Catalog
from ..content.definitions import SkillDefinition, SupportGemDefinition
from ..content.skills import DEFAULT_ATTACK_ID
from ..progression import can_gem_level_up, get_gem_required_character_level
from ..state.combat import GameState, LogType
from ..state.player import (
    CurrencyType,
    Player,
    PlayerSkill,
    PlayerSupportGem,
)
from .results import IntentResult, accept, ignore, reject

logger = logging.getLogger(__name__)

MAX_SUPPORT_SOCKETS = 5


def _currency_name(currency: CurrencyType) -> str:
    return currency.value


def _skill_slot(player: Player, slot_index: int) -> Optional[PlayerSkill]:
    if 0 <= slot_index < len(player.skills):
        return player.skills[slot_index]
    return None


class SkillHandler:
    """
    Player intents for skill and support gems.

    Usage:
        SkillHandler.buy_skill(state, "cleave")
        SkillHandler.buy_support_gem(state, "meleePhysical")
        SkillHandler.toggle_support_gem_socket(state, 1, "meleePhysical")
    """

    # -------------------------------------------------------------------------
    # Purchases
    # -------------------------------------------------------------------------

    @staticmethod
    def buy_skill(
        state: GameState, skill_id: str, catalog: Catalog = DEFAULT_CATALOG
    ) -> IntentResult:
        """
        Buy a skill gem with transmutation orbs.

        The gem goes to the first empty skill bar slot, or to the inactive
        pool when the bar is full.
        """
        player = state.player
        skill_def = catalog.get_skill(skill_id)
        if skill_def is None:
            return ignore(f"unknown skill {skill_id}")

        if skill_id == DEFAULT_ATTACK_ID:
            return reject(state, "Strike is already known.")
        if player.knows_skill(skill_id):
            return reject(state, f"{skill_def.name} is already learned.")
        if skill_def.required_level > player.level:
            return reject(
                state, f"Requires level {skill_def.required_level} to learn {skill_def.name}."
            )
        if skill_def not in catalog.buyable_skills(player.level):
            return reject(state, f"{skill_def.name} is not available for purchase yet.")

        price = skill_def.purchase_cost
        if player.currency[CurrencyType.TRANSMUTATION] < price:
            return reject(state, f"Need {price} Transmutation to learn {skill_def.name}.")

        player.currency[CurrencyType.TRANSMUTATION] -= price
        learned = PlayerSkill(definition_id=skill_id)
        slot_index = player.first_empty_skill_slot()
        if slot_index is not None:
            player.skills[slot_index] = learned
            return accept(state, f"Learned {skill_def.name}!")
        player.inactive_skills.append(learned)
        return accept(state, f"Learned {skill_def.name} (stored as inactive).")

    @staticmethod
    def buy_support_gem(
        state: GameState, support_id: str, catalog: Catalog = DEFAULT_CATALOG
    ) -> IntentResult:
        """Buy a new support gem instance. Duplicates are allowed."""
        player = state.player
        support = catalog.get_support_gem(support_id)
        if support is None:
            return ignore(f"unknown support gem {support_id}")

        if support.required_level > player.level:
            return reject(state, f"Requires level {support.required_level} to buy {support.name}.")

        owned = player.currency[support.cost_currency]
        if owned < support.cost_amount:
            return reject(
                state,
                f"Need {support.cost_amount} {_currency_name(support.cost_currency)} "
                f"to buy {support.name}.",
            )

        player.currency[support.cost_currency] = owned - support.cost_amount
        player.support_gems.append(
            PlayerSupportGem(instance_id=state.ids.next("support"), definition_id=support_id)
        )
        return accept(state, f"Bought {support.name}.")

    # -------------------------------------------------------------------------
    # Skill bar
    # -------------------------------------------------------------------------

    @staticmethod
    def remove_equipped_skill(
        state: GameState, slot_index: int, catalog: Catalog = DEFAULT_CATALOG
    ) -> IntentResult:
        player = state.player
        skill = _skill_slot(player, slot_index)
        if skill is None:
            return ignore(f"skill slot {slot_index} is empty")

        player.skills[slot_index] = None
        player.inactive_skills.append(skill)
        skill_def = catalog.get_skill(skill.definition_id)
        name = skill_def.name if skill_def else "skill"
        return accept(state, f"Removed {name} from skill bar.")

    @staticmethod
    def equip_inactive_skill(
        state: GameState, skill_id: str, catalog: Catalog = DEFAULT_CATALOG
    ) -> IntentResult:
        player = state.player
        skill = player.find_inactive_skill(skill_id)
        if skill is None:
            return ignore(f"{skill_id} is not in the inactive pool")

        slot_index = player.first_empty_skill_slot()
        if slot_index is None:
            return reject(state, "No free slot on skill bar. Remove or move a skill first.")

        player.inactive_skills.remove(skill)
        player.skills[slot_index] = skill
        skill_def = catalog.get_skill(skill.definition_id)
        name = skill_def.name if skill_def else "skill"
        return accept(state, f"Equipped {name} to slot {slot_index + 1}.")

    @staticmethod
    def move_skill_slot(state: GameState, from_slot: int, to_slot: int) -> IntentResult:
        """Swap two skill bar slots (either may be empty)."""
        skills = state.player.skills
        if not (0 <= from_slot < len(skills) and 0 <= to_slot < len(skills)):
            return ignore(f"invalid skill slots {from_slot} -> {to_slot}")
        if from_slot == to_slot or skills[from_slot] is None:
            return ignore("nothing to move")
        skills[from_slot], skills[to_slot] = skills[to_slot], skills[from_slot]
        return IntentResult(success=True)

    @staticmethod
    def toggle_skill_active(state: GameState, slot_index: int) -> IntentResult:
        """Flip auto-use for a skill bar slot."""
        skill = _skill_slot(state.player, slot_index)
        if skill is None:
            return ignore(f"skill slot {slot_index} is empty")
        skill.is_active = not skill.is_active
        logger.debug("Skill %s auto-use %s", skill.definition_id, skill.is_active)
        return IntentResult(success=True)

    # -------------------------------------------------------------------------
    # Gem levels
    # -------------------------------------------------------------------------

    @staticmethod
    def _level_gem(
        state: GameState,
        gem: Union[PlayerSkill, PlayerSupportGem],
        definition: Union[SkillDefinition, SupportGemDefinition],
    ) -> IntentResult:
        next_level = gem.level + 1
        required = get_gem_required_character_level(
            next_level,
            definition.required_level,
            definition.required_character_level_by_gem_level,
        )
        if state.player.level < required:
            return reject(
                state,
                f"Requires character level {required} to level {definition.name} to {next_level}.",
            )
        if not can_gem_level_up(gem.level, gem.experience, definition.gem_total_experience_by_level):
            return ignore(f"{definition.name} does not have enough experience")

        gem.level = next_level
        return accept(state, f"{definition.name} reached level {next_level}!", LogType.LEVEL_UP)

    @staticmethod
    def level_up_skill_gem(
        state: GameState, slot_index: int, catalog: Catalog = DEFAULT_CATALOG
    ) -> IntentResult:
        skill = _skill_slot(state.player, slot_index)
        if skill is None:
            return ignore(f"skill slot {slot_index} is empty")
        skill_def = catalog.get_skill(skill.definition_id)
        if skill_def is None:
            return ignore(f"unknown skill {skill.definition_id}")
        return SkillHandler._level_gem(state, skill, skill_def)

    @staticmethod
    def level_up_inactive_skill_gem(
        state: GameState, skill_id: str, catalog: Catalog = DEFAULT_CATALOG
    ) -> IntentResult:
        skill = state.player.find_inactive_skill(skill_id)
        if skill is None:
            return ignore(f"{skill_id} is not in the inactive pool")
        skill_def = catalog.get_skill(skill.definition_id)
        if skill_def is None:
            return ignore(f"unknown skill {skill.definition_id}")
        return SkillHandler._level_gem(state, skill, skill_def)

    @staticmethod
    def level_up_support_gem(
        state: GameState, instance_id: str, catalog: Catalog = DEFAULT_CATALOG
    ) -> IntentResult:
        gem = state.player.find_support_gem(instance_id)
        if gem is None:
            return ignore(f"unknown support instance {instance_id}")
        support = catalog.get_support_gem(gem.definition_id)
        if support is None:
            return ignore(f"unknown support gem {gem.definition_id}")
        return SkillHandler._level_gem(state, gem, support)

    # -------------------------------------------------------------------------
    # Sockets and links
    # -------------------------------------------------------------------------

    @staticmethod
    def add_skill_socket(
        state: GameState,
        slot_index: int,
        max_sockets: int = MAX_SUPPORT_SOCKETS,
        catalog: Catalog = DEFAULT_CATALOG,
    ) -> IntentResult:
        """Consume a socket orb to give a skill one more support socket."""
        player = state.player
        skill = _skill_slot(player, slot_index)
        if skill is None:
            return ignore(f"skill slot {slot_index} is empty")

        if player.currency[CurrencyType.SOCKET_ORB] < 1:
            return reject(state, "Need a Socket Orb to add a skill socket.")
        if skill.max_support_sockets >= max_sockets:
            return reject(state, "This skill already has the maximum sockets.")

        player.currency[CurrencyType.SOCKET_ORB] -= 1
        skill.max_support_sockets += 1
        skill_def = catalog.get_skill(skill.definition_id)
        name = skill_def.name if skill_def else "skill"
        return accept(state, f"Added a socket to {name}.")

    @staticmethod
    def toggle_support_gem_socket(
        state: GameState,
        slot_index: int,
        support_id: str,
        catalog: Catalog = DEFAULT_CATALOG,
    ) -> IntentResult:
        """
        Link or unlink a support gem (by definition id) on a skill bar slot.

        If an instance of that support is already linked it is unlinked.
        Otherwise the first owned instance not linked anywhere is linked,
        provided the support fits the skill type and a socket is free.
        """
        player = state.player
        skill = _skill_slot(player, slot_index)
        support = catalog.get_support_gem(support_id)
        if skill is None or support is None:
            return ignore("no skill or unknown support gem")

        skill_def = catalog.get_skill(skill.definition_id)
        if skill_def is None or not support.supports(skill_def.skill_type):
            return reject(state, f"{support.name} cannot support that skill.")

        for instance_id in skill.socketed_support_ids:
            gem = player.find_support_gem(instance_id)
            if gem is not None and gem.definition_id == support_id:
                skill.socketed_support_ids.remove(instance_id)
                return accept(state, f"Removed {support.name} from {skill_def.name}.")

        if skill.free_sockets <= 0:
            return reject(state, f"{skill_def.name} has no free support sockets.")

        linked = player.linked_support_ids()
        free_gem = next(
            (
                gem for gem in player.support_gems
                if gem.definition_id == support_id and gem.instance_id not in linked
            ),
            None,
        )
        if free_gem is None:
            return reject(state, f"No free copies of {support.name}. Buy another one.")

        skill.socketed_support_ids.append(free_gem.instance_id)
        return accept(state, f"Linked {support.name} to {skill_def.name}.")
