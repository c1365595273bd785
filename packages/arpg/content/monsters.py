"""
Starter monster and boss definitions (first two areas).
"""

from typing import Dict, List

from ..state.player import DamageType
from .definitions import BossDefinition, BossSkill, BossSkillType, MonsterDefinition


# =============================================================================
# Regular monsters
# =============================================================================

DROWNED_ZOMBIE = MonsterDefinition(
    id="drownedZombie", name="Drowned Zombie",
    base_life=22, base_damage=1, attack_speed=0.6,
    damage_type=DamageType.PHYSICAL, experience_reward=25, loot_bonus=1.0,
)

SEA_CRAB = MonsterDefinition(
    id="seaCrab", name="Sea Crab",
    base_life=28, base_damage=2, attack_speed=0.5,
    damage_type=DamageType.PHYSICAL, experience_reward=30, loot_bonus=1.0,
)

BEACH_LURKER = MonsterDefinition(
    id="beachLurker", name="Beach Lurker",
    base_life=18, base_damage=2, attack_speed=0.8,
    damage_type=DamageType.PHYSICAL, experience_reward=28, loot_bonus=1.1,
)

CAVE_SPIDER = MonsterDefinition(
    id="caveSpider", name="Cave Spider",
    base_life=32, base_damage=3, attack_speed=0.9,
    damage_type=DamageType.PHYSICAL, experience_reward=45, loot_bonus=1.1,
)

STALACTITE_BAT = MonsterDefinition(
    id="stalactiteBat", name="Stalactite Bat",
    base_life=24, base_damage=4, attack_speed=1.1,
    damage_type=DamageType.PHYSICAL, experience_reward=38, loot_bonus=1.0,
)

DEEP_CRAWLER = MonsterDefinition(
    id="deepCrawler", name="Deep Crawler",
    base_life=45, base_damage=3, attack_speed=0.5,
    damage_type=DamageType.COLD, experience_reward=52, loot_bonus=1.2,
)

PIRATE_GHOST = MonsterDefinition(
    id="pirateGhost", name="Pirate Ghost",
    base_life=48, base_damage=5, attack_speed=0.8,
    damage_type=DamageType.COLD, experience_reward=70, loot_bonus=1.2,
)

BARNACLE_GOLEM = MonsterDefinition(
    id="barnacleGolem", name="Barnacle Golem",
    base_life=75, base_damage=4, attack_speed=0.4,
    damage_type=DamageType.PHYSICAL, experience_reward=85, loot_bonus=1.3,
)


# =============================================================================
# Bosses
# =============================================================================

DROWNED_CAPTAIN = BossDefinition(
    id="drownedCaptain", name="Drowned Captain", title="Terror of the Shallows",
    base_life=250, base_damage=6, attack_speed=0.8,
    damage_type=DamageType.PHYSICAL, experience_reward=250, loot_bonus=3,
    guaranteed_drops=["rustySword", "leatherCap"],
    skills=[
        BossSkill("anchorSlam", "Anchor Slam", damage_multiplier=2.5, cooldown=5,
                  skill_type=BossSkillType.SLAM),
        BossSkill("cutlassFlurry", "Cutlass Flurry", damage_multiplier=1.5, cooldown=3,
                  skill_type=BossSkillType.CLEAVE),
    ],
)

CAVE_LURKER = BossDefinition(
    id="caveLurker", name="Cave Lurker", title="Horror Beneath the Rocks",
    base_life=450, base_damage=8, attack_speed=0.9,
    damage_type=DamageType.PHYSICAL, experience_reward=450, loot_bonus=3.5,
    guaranteed_drops=["ironSword", "chestplate"],
    skills=[
        BossSkill("rockCrush", "Rock Crush", damage_multiplier=3, cooldown=6,
                  skill_type=BossSkillType.PROJECTILE),
        BossSkill("burrowStrike", "Burrow Strike", damage_multiplier=2, cooldown=4,
                  skill_type=BossSkillType.SLAM),
    ],
)

GHOST_ADMIRAL = BossDefinition(
    id="ghostAdmiral", name="Ghost Admiral", title="Captain of the Lost Fleet",
    base_life=700, base_damage=10, attack_speed=0.7,
    damage_type=DamageType.COLD, experience_reward=700, loot_bonus=4,
    guaranteed_drops=["ironHelm", "copperPlate"],
    skills=[
        BossSkill("spectralCannon", "Spectral Cannon", damage_multiplier=2.5, cooldown=4,
                  skill_type=BossSkillType.PROJECTILE),
        BossSkill("chillingPresence", "Chilling Presence", damage_multiplier=2, cooldown=5,
                  skill_type=BossSkillType.AOE),
        BossSkill("phantomBlade", "Phantom Blade", damage_multiplier=3.5, cooldown=8,
                  skill_type=BossSkillType.CLEAVE),
    ],
)


MONSTERS: List[MonsterDefinition] = [
    DROWNED_ZOMBIE, SEA_CRAB, BEACH_LURKER,
    CAVE_SPIDER, STALACTITE_BAT, DEEP_CRAWLER,
    PIRATE_GHOST, BARNACLE_GOLEM,
]

BOSSES: List[BossDefinition] = [DROWNED_CAPTAIN, CAVE_LURKER, GHOST_ADMIRAL]

MONSTERS_BY_ID: Dict[str, MonsterDefinition] = {m.id: m for m in MONSTERS}
BOSSES_BY_ID: Dict[str, BossDefinition] = {b.id: b for b in BOSSES}
