#!/usr/bin/env python3
"""
Idle ARPG Engine - Command Line Interface

CLI for headless farming runs and for inspecting loot, monsters and stats.

Usage:
    python cli.py farm --seed BEACH42 --map twilightBeach --seconds 600
    python cli.py farm --seed 1 --runs 8 --seconds 1800 --auto-boss --json
    python cli.py loot --seed ABC --level 10 --rarity rare --count 5
    python cli.py monster --id drownedZombie --level 5 --rarity magic
    python cli.py stats
"""

import argparse
import json
import logging
import os
import sys
from dataclasses import asdict
from typing import Any, Dict, List, Optional, Union

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from packages.arpg.analysis import summarize_runs
from packages.arpg.calc.stats import compute_player_stats
from packages.arpg.config import EngineConfig
from packages.arpg.content.catalog import DEFAULT_CATALOG
from packages.arpg.game import create_initial_player, run_headless, run_parallel
from packages.arpg.generation.loot import generate_item
from packages.arpg.generation.monsters import spawn_monster
from packages.arpg.state.combat import IdSequence, MonsterRarity
from packages.arpg.state.player import Item, ItemRarity
from packages.arpg.state.rng import GameRNG, seed_to_long

logger = logging.getLogger("arpg.cli")


# =============================================================================
# HELPERS
# =============================================================================


def parse_seed(seed: str) -> int:
    """Numeric seeds are used as-is, anything else is read as a seed string."""
    return seed_to_long(seed.upper())


def format_item(item: Item) -> str:
    lines = [f"{item.name} ({item.rarity.value}, ilvl {item.item_level}, {item.slot.value})"]
    for key, value in sorted(item.stats.items()):
        lines.append(f"    {key}: {value:g}")
    return "\n".join(lines)


def item_to_dict(item: Item) -> Dict[str, Any]:
    return {
        "id": item.id,
        "base_id": item.base_id,
        "name": item.name,
        "slot": item.slot.value,
        "item_level": item.item_level,
        "rarity": item.rarity.value,
        "prefixes": [asdict(a) for a in item.prefixes],
        "suffixes": [asdict(a) for a in item.suffixes],
        "stats": dict(item.stats),
    }


# =============================================================================
# COMMANDS
# =============================================================================


def cmd_farm(args) -> int:
    """Run headless farming and print a summary."""
    config = EngineConfig.from_env()
    base_seed = parse_seed(args.seed)
    map_id = args.map or DEFAULT_CATALOG.starting_map_id
    logger.debug("Farming %s for %ss, %d run(s) from seed %d", map_id, args.seconds, args.runs, base_seed)

    if args.runs > 1:
        seeds: List[Union[str, int]] = [base_seed + i for i in range(args.runs)]
        results = run_parallel(
            seeds, map_id, args.seconds, args.auto_boss, max_workers=args.workers, config=config
        )
    else:
        results = [run_headless(base_seed, map_id, args.seconds, args.auto_boss, config)]

    summary = summarize_runs(results)

    if args.json:
        print(json.dumps({
            "summary": summary.to_dict(),
            "runs": [
                {k: v for k, v in asdict(r).items() if k != "stats"} for r in results
            ],
        }, indent=2))
        return 0

    print(f"Farmed {map_id} for {args.seconds:g}s x {len(results)} run(s)")
    for r in results:
        print(
            f"  seed {r.seed}: level {r.final_level}, {r.kills} kills, "
            f"{r.bosses_killed} bosses, {r.deaths} deaths, {r.items_found} items"
        )
    print(f"Kills/min:     {summary.kills_per_minute:.2f}")
    print(f"XP/hour:       {summary.experience_per_hour_mean:.0f} "
          f"(p10 {summary.experience_per_hour_p10:.0f}, p90 {summary.experience_per_hour_p90:.0f})")
    print(f"Deaths/run:    {summary.deaths_mean:.2f}")
    print(f"Items/run:     {summary.items_per_run_mean:.1f}")
    return 0


def cmd_loot(args) -> int:
    """Roll items as if dropped at a monster level."""
    rng = GameRNG(seed=parse_seed(args.seed))
    ids = IdSequence()
    rarity = ItemRarity(args.rarity) if args.rarity else None

    items = []
    for _ in range(args.count):
        item = generate_item(args.level, rng, ids, rarity=rarity)
        if item is not None:
            items.append(item)

    if args.json:
        print(json.dumps([item_to_dict(i) for i in items], indent=2))
        return 0

    if not items:
        print(f"No item bases drop at level {args.level}")
        return 1
    for item in items:
        print(format_item(item))
    return 0


def cmd_monster(args) -> int:
    """Show a spawned monster's scaled stats."""
    rng = GameRNG(seed=parse_seed(args.seed))
    rarity = MonsterRarity(args.rarity) if args.rarity else None
    monster = spawn_monster(args.id, args.level, 0, rng.monster, IdSequence(), forced_rarity=rarity)
    if monster is None:
        print(f"Unknown monster: {args.id}", file=sys.stderr)
        return 1

    data = {
        "name": monster.name,
        "level": monster.level,
        "rarity": monster.rarity.value,
        "max_life": monster.max_life,
        "damage": monster.damage,
        "attack_speed": monster.attack_speed,
        "damage_type": monster.damage_type.value,
        "experience_reward": monster.experience_reward,
        "loot_bonus": monster.loot_bonus,
        "move_speed": monster.move_speed,
    }
    if args.json:
        print(json.dumps(data, indent=2))
    else:
        for key, value in data.items():
            print(f"{key:>18}: {value}")
    return 0


def cmd_stats(args) -> int:
    """Show the default character's effective stats."""
    stats = compute_player_stats(create_initial_player())
    data = {k: v for k, v in asdict(stats).items() if v}
    if args.json:
        print(json.dumps(data, indent=2))
    else:
        for key, value in data.items():
            print(f"{key:>28}: {value:g}")
    return 0


# =============================================================================
# MAIN
# =============================================================================


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Idle ARPG Engine - headless farming and content inspection",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s farm --seed BEACH42 --seconds 600
  %(prog)s farm --seed 1 --runs 8 --auto-boss
  %(prog)s loot --seed ABC --level 10 --rarity rare --count 5
  %(prog)s monster --id drownedZombie --level 5
  %(prog)s stats --json
        """
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Farm command
    farm_parser = subparsers.add_parser("farm", help="Run headless farming")
    farm_parser.add_argument("--seed", "-s", default="0", help="Game seed")
    farm_parser.add_argument("--map", "-m", help="Map id (default: starting map)")
    farm_parser.add_argument("--seconds", type=float, default=600.0, help="Game seconds per run")
    farm_parser.add_argument("--runs", "-n", type=int, default=1, help="Runs with consecutive seeds")
    farm_parser.add_argument("--workers", type=int, default=4, help="Worker processes for --runs")
    farm_parser.add_argument("--auto-boss", action="store_true", help="Challenge ready bosses")
    farm_parser.add_argument("--json", "-j", action="store_true", help="Output in JSON format")

    # Loot command
    loot_parser = subparsers.add_parser("loot", help="Roll items at a monster level")
    loot_parser.add_argument("--seed", "-s", default="0", help="Game seed")
    loot_parser.add_argument("--level", "-l", type=int, default=1, help="Monster level")
    loot_parser.add_argument("--rarity", "-r", choices=[r.value for r in ItemRarity], help="Fixed rarity")
    loot_parser.add_argument("--count", "-n", type=int, default=5, help="Number of items")
    loot_parser.add_argument("--json", "-j", action="store_true", help="Output in JSON format")

    # Monster command
    monster_parser = subparsers.add_parser("monster", help="Show a spawned monster")
    monster_parser.add_argument("--id", required=True, help="Monster definition id")
    monster_parser.add_argument("--level", "-l", type=int, default=1, help="Monster level")
    monster_parser.add_argument(
        "--rarity", "-r",
        choices=[r.value for r in MonsterRarity if r != MonsterRarity.BOSS],
        help="Fixed rarity",
    )
    monster_parser.add_argument("--seed", "-s", default="0", help="Seed for the rarity roll")
    monster_parser.add_argument("--json", "-j", action="store_true", help="Output in JSON format")

    # Stats command
    stats_parser = subparsers.add_parser("stats", help="Show default character stats")
    stats_parser.add_argument("--json", "-j", action="store_true", help="Output in JSON format")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if not args.command:
        parser.print_help()
        return 1

    commands = {
        "farm": cmd_farm,
        "loot": cmd_loot,
        "monster": cmd_monster,
        "stats": cmd_stats,
    }
    return commands[args.command](args)


if __name__ == "__main__":
    sys.exit(main())
