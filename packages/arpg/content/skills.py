"""
Skill gem and support gem definitions.

Strike (`defaultAttack`) is the fallback attack every character knows. It has no
mana cost or cooldown and cannot be bought.
"""

from typing import Dict, List

from ..state.player import CurrencyType, DamageType
from .definitions import SkillDefinition, SkillTargeting, SkillType, SupportGemDefinition


DEFAULT_ATTACK_ID = "defaultAttack"

# Shared required-character-level curve for gems that define one
_LEVEL_GATES = [1, 2, 4, 7, 11, 16, 20, 24, 28, 32, 36, 40, 44, 48, 52, 56, 60, 64, 68, 70]


# =============================================================================
# Active skills
# =============================================================================

SKILLS: List[SkillDefinition] = [
    # Basic attacks
    SkillDefinition(
        id=DEFAULT_ATTACK_ID, name="Strike", skill_type=SkillType.ATTACK,
        description="A basic attack with your weapon.",
        damage_multiplier=1.0, mana_cost=0, cooldown=0, required_level=1,
    ),
    SkillDefinition(
        id="heavyStrike", name="Heavy Strike", skill_type=SkillType.ATTACK,
        description="A powerful overhead strike that deals massive physical damage.",
        damage_multiplier=1.8, added_damage_min=5, added_damage_max=10,
        mana_cost=8, cooldown=2, required_level=1,
        damage_multiplier_by_level=[round(1.8 + 0.05 * i, 2) for i in range(20)],
        mana_cost_by_level=[8 + i // 4 for i in range(20)],
        required_character_level_by_gem_level=_LEVEL_GATES,
    ),
    SkillDefinition(
        id="doubleStrike", name="Double Strike", skill_type=SkillType.ATTACK,
        description="Attack twice in rapid succession.",
        damage_multiplier=0.8, number_of_hits=2,
        mana_cost=6, cooldown=1.5, required_level=2,
    ),

    # Area attacks
    SkillDefinition(
        id="cleave", name="Cleave", skill_type=SkillType.ATTACK,
        targeting=SkillTargeting.CONE,
        description="Swing your weapon in a wide arc, hitting nearby enemies.",
        damage_multiplier=0.9, aoe_radius=3,
        mana_cost=10, cooldown=2.5, required_level=3,
    ),
    SkillDefinition(
        id="groundSlam", name="Ground Slam", skill_type=SkillType.ATTACK,
        targeting=SkillTargeting.AOE,
        description="Slam the ground, creating a shockwave that damages all enemies.",
        damage_multiplier=1.2, added_damage_min=3, added_damage_max=8, aoe_radius=5,
        mana_cost=15, cooldown=4, required_level=5,
    ),

    # Elemental attacks
    SkillDefinition(
        id="moltenStrike", name="Molten Strike", skill_type=SkillType.ATTACK,
        description="Imbue your weapon with fire, dealing additional fire damage.",
        damage_multiplier=1.0, added_damage_min=8, added_damage_max=15,
        mana_cost=12, cooldown=2, required_level=4,
    ),
    SkillDefinition(
        id="glacialHammer", name="Glacial Hammer", skill_type=SkillType.ATTACK,
        damage_type=DamageType.COLD,
        description="A freezing strike that deals cold damage.",
        damage_multiplier=1.3, added_damage_min=5, added_damage_max=12,
        mana_cost=10, cooldown=2.5, required_level=4,
    ),
    SkillDefinition(
        id="lightningStrike", name="Lightning Strike", skill_type=SkillType.ATTACK,
        damage_type=DamageType.LIGHTNING,
        description="Channel lightning through your weapon for massive damage.",
        damage_multiplier=1.1, added_damage_min=2, added_damage_max=20,
        mana_cost=14, cooldown=2, required_level=5,
    ),

    # Spells (no weapon damage)
    SkillDefinition(
        id="fireball", name="Fireball", skill_type=SkillType.SPELL,
        damage_type=DamageType.FIRE,
        description="Launch a ball of fire at your target.",
        damage_multiplier=0, added_damage_min=15, added_damage_max=25,
        mana_cost=18, cooldown=3, required_level=6,
    ),
    SkillDefinition(
        id="iceShard", name="Ice Shard", skill_type=SkillType.SPELL,
        damage_type=DamageType.COLD,
        description="Fire a shard of ice at your enemy.",
        damage_multiplier=0, added_damage_min=12, added_damage_max=20,
        mana_cost=15, cooldown=2.5, required_level=6,
    ),

    # Utility attacks
    SkillDefinition(
        id="viciousStrike", name="Vicious Strike", skill_type=SkillType.ATTACK,
        description="A savage attack with increased critical chance.",
        damage_multiplier=1.2, crit_bonus_chance=25,
        mana_cost=8, cooldown=3, required_level=3,
    ),
    SkillDefinition(
        id="lifetap", name="Lifetap", skill_type=SkillType.ATTACK,
        description="Drain life from your enemy with each strike.",
        damage_multiplier=0.9, lifesteal_percent=30,
        mana_cost=12, cooldown=4, required_level=5,
    ),
    SkillDefinition(
        id="executionersBlow", name="Executioner's Blow", skill_type=SkillType.ATTACK,
        description="A heavy blow with a chance to deal double damage.",
        damage_multiplier=1.4, mana_cost=12, cooldown=3, required_level=8,
        double_damage_chance=10,
        double_damage_chance_by_level=[10 + i for i in range(20)],
        cost_amount=6,
    ),
]

STARTER_SKILL_IDS = [DEFAULT_ATTACK_ID, "heavyStrike", "doubleStrike"]


# =============================================================================
# Support gems
# =============================================================================

_ATTACK = (SkillType.ATTACK,)
_SPELL = (SkillType.SPELL,)
_ANY = (SkillType.ATTACK, SkillType.SPELL)

SUPPORT_GEMS: List[SupportGemDefinition] = [
    SupportGemDefinition(
        id="meleePhysical", name="Melee Physical Damage", compatible_skill_types=_ATTACK,
        description="Supported attacks deal more damage but cost more mana.",
        more_damage_multiplier=0.3, mana_multiplier=1.3,
        cost_amount=2, required_level=1,
    ),
    SupportGemDefinition(
        id="fasterAttacks", name="Faster Attacks", compatible_skill_types=_ATTACK,
        description="Supported attacks recover faster.",
        attack_speed_more_percent=20,
        attack_speed_more_percent_by_level=[20 + i for i in range(20)],
        mana_multiplier=1.15, cost_amount=2, required_level=2,
    ),
    SupportGemDefinition(
        id="multistrike", name="Multistrike", compatible_skill_types=_ATTACK,
        description="Supported attacks hit two extra times, the second hit is weaker.",
        added_hits=2, second_hit_less_damage_percent=30,
        second_hit_less_damage_percent_by_level=[max(10, 30 - i) for i in range(20)],
        mana_multiplier=1.5, cost_currency=CurrencyType.ALTERATION, cost_amount=3,
        required_level=4,
    ),
    SupportGemDefinition(
        id="addedFire", name="Added Fire Damage", compatible_skill_types=_ATTACK,
        description="Gain a portion of physical damage as extra fire damage.",
        physical_as_extra_fire_percent=25,
        physical_as_extra_fire_percent_by_level=[25 + i for i in range(20)],
        mana_multiplier=1.2, cost_amount=2, required_level=3,
    ),
    SupportGemDefinition(
        id="chanceToBleed", name="Chance to Bleed", compatible_skill_types=_ATTACK,
        description="Supported attacks have a chance to cause bleeding.",
        chance_to_bleed_percent=25,
        chance_to_bleed_percent_by_level=[25 + i for i in range(20)],
        cost_amount=2, required_level=2,
    ),
    SupportGemDefinition(
        id="bloodletting", name="Bloodletting", compatible_skill_types=_ATTACK,
        description="Bleeding inflicted by supported attacks deals more damage.",
        chance_to_bleed_percent=10, more_bleeding_damage_percent=40,
        more_bleeding_damage_percent_by_level=[40 + 2 * i for i in range(20)],
        cost_currency=CurrencyType.ALTERATION, cost_amount=2, required_level=6,
        required_character_level_by_gem_level=[6 + 3 * i for i in range(20)],
    ),
    SupportGemDefinition(
        id="addedLightning", name="Added Lightning Damage", compatible_skill_types=_ANY,
        description="Adds lightning damage to supported skills.",
        added_damage_min=1, added_damage_max=12, mana_multiplier=1.2,
        cost_amount=2, required_level=3,
    ),
    SupportGemDefinition(
        id="spellFocus", name="Spell Focus", compatible_skill_types=_SPELL,
        description="Supported spells deal more damage and recover faster.",
        more_damage_multiplier=0.25, cooldown_multiplier=0.9, mana_multiplier=1.2,
        cost_currency=CurrencyType.ALCHEMY, cost_amount=1, required_level=6,
    ),
]

SKILLS_BY_ID: Dict[str, SkillDefinition] = {s.id: s for s in SKILLS}
SUPPORT_GEMS_BY_ID: Dict[str, SupportGemDefinition] = {s.id: s for s in SUPPORT_GEMS}
