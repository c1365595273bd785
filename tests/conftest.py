"""
Shared pytest fixtures for the idle ARPG engine test suite.

This module provides reusable fixtures for:
- RNG with known seeds
- Fresh players, game states and runners
- A small two-map catalog for progression scenarios
- Monster construction with explicit numbers
"""

import os
import sys

import pytest

# Ensure project root is in path
_project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, _project_root)

from packages.arpg.config import EngineConfig
from packages.arpg.content.affixes import AFFIXES
from packages.arpg.content.catalog import DEFAULT_CATALOG, Catalog
from packages.arpg.content.currency import CURRENCIES, STARTING_CURRENCY
from packages.arpg.content.definitions import GameMap
from packages.arpg.content.items import ITEM_BASES
from packages.arpg.content.monsters import BOSSES, MONSTERS
from packages.arpg.content.skills import SKILLS, STARTER_SKILL_IDS, SUPPORT_GEMS
from packages.arpg.game import GameRunner, create_initial_player, create_initial_state
from packages.arpg.state.combat import IdSequence, Monster, MonsterRarity
from packages.arpg.state.player import DamageType
from packages.arpg.state.rng import GameRNG, Random, seed_to_long


# =============================================================================
# RNG Fixtures
# =============================================================================


@pytest.fixture
def rng_seed_42():
    """Random initialized with seed 42 for deterministic tests."""
    return Random(42)


@pytest.fixture
def game_rng_abc():
    """GameRNG initialized with seed 'ABC'."""
    return GameRNG(seed_to_long("ABC"))


@pytest.fixture
def ids():
    """Fresh instance id source."""
    return IdSequence()


# =============================================================================
# Player / State Fixtures
# =============================================================================


@pytest.fixture
def config():
    """Default engine configuration."""
    return EngineConfig()


@pytest.fixture
def player():
    """Fresh level 1 character."""
    return create_initial_player()


@pytest.fixture
def state():
    """Fresh game state, idle in town."""
    return create_initial_state()


@pytest.fixture
def runner():
    """Fresh GameRunner with seed TEST123."""
    return GameRunner(seed="TEST123")


# =============================================================================
# Catalog Fixtures
# =============================================================================


TEST_MAP = GameMap(
    id="testGrounds", name="Test Grounds", order=1,
    monster_level=1, monster_pool=["drownedZombie"],
    kills_required=10, boss_id="drownedCaptain",
)

TEST_NEXT_MAP = GameMap(
    id="testBeyond", name="Test Beyond", order=2,
    monster_level=2, monster_pool=["seaCrab"], required_map_id="testGrounds",
    kills_required=10, boss_id="caveLurker",
)


@pytest.fixture
def test_map():
    """Single-monster map with kills_required=10."""
    return TEST_MAP


@pytest.fixture
def small_catalog():
    """Default content with only the two test maps."""
    return Catalog(
        monsters=MONSTERS,
        bosses=BOSSES,
        skills=SKILLS,
        support_gems=SUPPORT_GEMS,
        item_bases=ITEM_BASES,
        affixes=AFFIXES,
        maps=[TEST_MAP, TEST_NEXT_MAP],
        currencies=CURRENCIES,
        starter_skill_ids=STARTER_SKILL_IDS,
        starting_currency=STARTING_CURRENCY,
    )


@pytest.fixture
def default_catalog():
    return DEFAULT_CATALOG


# =============================================================================
# Monster Fixtures
# =============================================================================


@pytest.fixture
def make_monster():
    """Factory for monsters with explicit numbers, standing in melee range."""
    counter = iter(range(10_000))

    def _make(
        max_life=22,
        damage=1,
        experience_reward=25,
        rarity=MonsterRarity.NORMAL,
        level=1,
        attack_speed=1.0,
        damage_type=DamageType.PHYSICAL,
        loot_bonus=1.0,
        distance=0.0,
        position_index=0,
        definition_id="drownedZombie",
        name="Drowned Zombie",
    ):
        return Monster(
            id=f"test_monster_{next(counter)}",
            definition_id=definition_id,
            name=name,
            level=level,
            rarity=rarity,
            max_life=max_life,
            current_life=max_life,
            damage=damage,
            attack_speed=attack_speed,
            damage_type=damage_type,
            experience_reward=experience_reward,
            loot_bonus=loot_bonus,
            position_index=position_index,
            distance=distance,
        )

    return _make
