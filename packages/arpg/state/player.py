"""
Player-side state: stats, items, flasks and gems.

Everything here is plain mutable dataclasses. The tick engine mutates a Player
in place; intents go through the handlers, which keep the ownership rules:
- an Item is either equipped or in the inventory, never both
- skill bar slots and inactive_skills never share a PlayerSkill
- a support gem instance is linked into at most one skill at a time
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields, replace
from enum import Enum
from typing import Dict, Iterator, List, Optional, Set


# =============================================================================
# Enums
# =============================================================================


class EquipmentSlot(Enum):
    WEAPON = "weapon"
    OFFHAND = "offhand"
    HELMET = "helmet"
    BODY_ARMOR = "bodyArmor"
    GLOVES = "gloves"
    BOOTS = "boots"
    BELT = "belt"
    AMULET = "amulet"
    RING1 = "ring1"
    RING2 = "ring2"

    @property
    def is_ring(self) -> bool:
        return self in (EquipmentSlot.RING1, EquipmentSlot.RING2)


class ItemRarity(Enum):
    NORMAL = "normal"
    MAGIC = "magic"
    RARE = "rare"
    UNIQUE = "unique"


class DamageType(Enum):
    PHYSICAL = "physical"
    FIRE = "fire"
    COLD = "cold"
    LIGHTNING = "lightning"


class CurrencyType(Enum):
    TRANSMUTATION = "transmutation"
    ALTERATION = "alteration"
    AUGMENTATION = "augmentation"
    ALCHEMY = "alchemy"
    CHAOS = "chaos"
    EXALTED = "exalted"
    DIVINE = "divine"
    SCOURING = "scouring"
    SOCKET_ORB = "socketOrb"


class FlaskType(Enum):
    LIFE = "life"
    MANA = "mana"
    HYBRID = "hybrid"


SKILL_BAR_SIZE = 6
FLASK_SLOTS = 5
DEFAULT_INVENTORY_SIZE = 30


# =============================================================================
# Stats
# =============================================================================


@dataclass
class PlayerStats:
    """Base character stats. Item stat dicts use the same field names as keys."""

    # Attributes
    strength: float = 0
    dexterity: float = 0
    intelligence: float = 0

    # Offense
    physical_damage_min: float = 0
    physical_damage_max: float = 0
    fire_damage_min: float = 0
    fire_damage_max: float = 0
    cold_damage_min: float = 0
    cold_damage_max: float = 0
    lightning_damage_min: float = 0
    lightning_damage_max: float = 0
    attack_speed: float = 0  # attacks per second
    increased_attack_speed: float = 0  # percent
    critical_chance: float = 0
    critical_multiplier: float = 0
    increased_physical_damage: float = 0
    increased_fire_damage: float = 0
    increased_cold_damage: float = 0
    increased_lightning_damage: float = 0
    accuracy: float = 0

    # Defense
    max_life: float = 0
    max_mana: float = 0
    energy_shield: float = 0
    increased_energy_shield: float = 0
    armor: float = 0
    increased_armor: float = 0
    evasion: float = 0
    increased_evasion: float = 0
    block_chance: float = 0
    fire_resistance: float = 0
    cold_resistance: float = 0
    lightning_resistance: float = 0
    chaos_resistance: float = 0
    life_regeneration: float = 0
    mana_regeneration: float = 0

    def copy(self) -> PlayerStats:
        return replace(self)

    def add(self, key: str, value: float) -> bool:
        """Add to a stat by name. Returns False for unknown keys."""
        if key not in STAT_KEYS:
            return False
        setattr(self, key, getattr(self, key) + value)
        return True

    def to_dict(self) -> Dict[str, float]:
        return {key: getattr(self, key) for key in STAT_KEYS}


STAT_KEYS: Set[str] = {f.name for f in fields(PlayerStats)}


# =============================================================================
# Items
# =============================================================================


@dataclass
class Affix:
    """A rolled affix instance."""

    definition_id: str
    tier: int
    value: float
    secondary_value: Optional[float] = None
    tertiary_value: Optional[float] = None


@dataclass
class Item:
    id: str
    base_id: str
    name: str
    slot: EquipmentSlot
    item_level: int
    rarity: ItemRarity
    prefixes: List[Affix] = field(default_factory=list)
    suffixes: List[Affix] = field(default_factory=list)
    # Flattened base + affix contributions, keyed by PlayerStats field name
    stats: Dict[str, float] = field(default_factory=dict)
    rolled_base_stats: Dict[str, float] = field(default_factory=dict)

    @property
    def affix_count(self) -> int:
        return len(self.prefixes) + len(self.suffixes)

    @property
    def affixes(self) -> List[Affix]:
        return [*self.prefixes, *self.suffixes]

    def fits_slot(self, slot: EquipmentSlot) -> bool:
        """Rings go in either ring slot, everything else only in its own."""
        if self.slot.is_ring:
            return slot.is_ring
        return slot == self.slot


# =============================================================================
# Flasks
# =============================================================================


@dataclass
class Flask:
    id: str
    name: str
    flask_type: FlaskType
    life_restore: float = 0
    mana_restore: float = 0
    duration: float = 3.0  # seconds the restore is spread over
    max_charges: int = 3
    current_charges: int = 3
    charges_per_use: int = 1
    charges_on_kill: int = 1
    is_active: bool = False
    remaining_duration: float = 0.0

    @property
    def restores_life(self) -> bool:
        return self.flask_type in (FlaskType.LIFE, FlaskType.HYBRID)

    @property
    def restores_mana(self) -> bool:
        return self.flask_type in (FlaskType.MANA, FlaskType.HYBRID)

    @property
    def can_use(self) -> bool:
        return not self.is_active and self.current_charges >= self.charges_per_use

    def activate(self) -> None:
        self.current_charges -= self.charges_per_use
        self.is_active = True
        self.remaining_duration = self.duration

    def gain_charges(self, amount: int) -> None:
        self.current_charges = min(self.max_charges, self.current_charges + amount)

    def reset(self) -> None:
        """Full charges, not running."""
        self.current_charges = self.max_charges
        self.is_active = False
        self.remaining_duration = 0.0


def create_life_flask() -> Flask:
    return Flask(
        id="life_flask_1",
        name="Small Life Flask",
        flask_type=FlaskType.LIFE,
        life_restore=60,
    )


def create_mana_flask() -> Flask:
    return Flask(
        id="mana_flask_1",
        name="Small Mana Flask",
        flask_type=FlaskType.MANA,
        mana_restore=40,
    )


# =============================================================================
# Gems
# =============================================================================


@dataclass
class PlayerSkill:
    definition_id: str
    level: int = 1
    experience: float = 0.0  # cumulative
    current_cooldown: float = 0.0
    is_active: bool = True  # auto-use toggle
    max_support_sockets: int = 1
    socketed_support_ids: List[str] = field(default_factory=list)

    @property
    def free_sockets(self) -> int:
        return self.max_support_sockets - len(self.socketed_support_ids)


@dataclass
class PlayerSupportGem:
    instance_id: str
    definition_id: str
    level: int = 1
    experience: float = 0.0


# =============================================================================
# Player
# =============================================================================


def _empty_equipment() -> Dict[EquipmentSlot, Optional[Item]]:
    return {slot: None for slot in EquipmentSlot}


def _empty_currency() -> Dict[CurrencyType, int]:
    return {currency: 0 for currency in CurrencyType}


@dataclass
class Player:
    name: str = "Exile"
    level: int = 1
    experience: float = 0.0
    experience_to_next_level: float = 0.0
    current_life: float = 0.0
    current_mana: float = 0.0
    stats: PlayerStats = field(default_factory=PlayerStats)
    equipment: Dict[EquipmentSlot, Optional[Item]] = field(default_factory=_empty_equipment)
    flasks: List[Optional[Flask]] = field(default_factory=lambda: [None] * FLASK_SLOTS)
    skills: List[Optional[PlayerSkill]] = field(default_factory=lambda: [None] * SKILL_BAR_SIZE)
    inactive_skills: List[PlayerSkill] = field(default_factory=list)
    support_gems: List[PlayerSupportGem] = field(default_factory=list)
    inventory: List[Item] = field(default_factory=list)
    inventory_size: int = DEFAULT_INVENTORY_SIZE
    currency: Dict[CurrencyType, int] = field(default_factory=_empty_currency)

    # -------------------------------------------------------------------------
    # Equipment / inventory
    # -------------------------------------------------------------------------

    def equipped_items(self) -> Iterator[Item]:
        return (item for item in self.equipment.values() if item is not None)

    @property
    def inventory_full(self) -> bool:
        return len(self.inventory) >= self.inventory_size

    def find_inventory_item(self, item_id: str) -> Optional[Item]:
        for item in self.inventory:
            if item.id == item_id:
                return item
        return None

    # -------------------------------------------------------------------------
    # Skills / supports
    # -------------------------------------------------------------------------

    def equipped_skills(self) -> Iterator[PlayerSkill]:
        return (skill for skill in self.skills if skill is not None)

    def all_skills(self) -> Iterator[PlayerSkill]:
        yield from self.equipped_skills()
        yield from self.inactive_skills

    def knows_skill(self, definition_id: str) -> bool:
        return any(skill.definition_id == definition_id for skill in self.all_skills())

    def find_inactive_skill(self, definition_id: str) -> Optional[PlayerSkill]:
        for skill in self.inactive_skills:
            if skill.definition_id == definition_id:
                return skill
        return None

    def first_empty_skill_slot(self) -> Optional[int]:
        for index, skill in enumerate(self.skills):
            if skill is None:
                return index
        return None

    def find_support_gem(self, instance_id: str) -> Optional[PlayerSupportGem]:
        for gem in self.support_gems:
            if gem.instance_id == instance_id:
                return gem
        return None

    def linked_support_ids(self, equipped_only: bool = False) -> Set[str]:
        """Instance ids linked into any skill (or only into skill-bar skills)."""
        skills = self.equipped_skills() if equipped_only else self.all_skills()
        return {instance_id for skill in skills for instance_id in skill.socketed_support_ids}

    # -------------------------------------------------------------------------
    # Flasks
    # -------------------------------------------------------------------------

    def owned_flasks(self) -> Iterator[Flask]:
        return (flask for flask in self.flasks if flask is not None)
