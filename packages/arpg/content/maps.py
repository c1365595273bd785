"""
Map definitions.

Maps unlock in a chain: killing a map's boss unlocks every map whose
`required_map_id` points at it.
"""

from typing import Dict, List

from .definitions import GameMap


STARTING_MAP_ID = "twilightBeach"

MAPS: List[GameMap] = [
    GameMap(
        id="twilightBeach", name="Twilight Beach", order=1,
        monster_level=1,
        monster_pool=["drownedZombie", "seaCrab", "beachLurker"],
        kills_required=15, boss_id="drownedCaptain",
        description="Wreckage washes ashore under a bruised sky.",
    ),
    GameMap(
        id="crystalCaves", name="Crystal Caves", order=2,
        monster_level=4, required_map_id="twilightBeach",
        monster_pool=["caveSpider", "stalactiteBat", "deepCrawler"],
        kills_required=20, boss_id="caveLurker",
        description="Glittering tunnels carved by the tide.",
    ),
    GameMap(
        id="shipGraveyard", name="Ship Graveyard", order=3,
        monster_level=8, required_map_id="crystalCaves",
        monster_pool=["pirateGhost", "barnacleGolem", "deepCrawler"],
        kills_required=25, boss_id="ghostAdmiral", spawn_interval=2.5,
        description="Hulks of a drowned fleet, still crewed.",
    ),
]

MAPS_BY_ID: Dict[str, GameMap] = {m.id: m for m in MAPS}

