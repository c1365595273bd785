"""
CLI Tests

Each subcommand is called through main(argv) and checked on stdout.
"""

import json

import pytest

from cli import build_parser, main, parse_seed
from packages.arpg.state.rng import seed_to_long


@pytest.fixture(autouse=True)
def no_env_overrides(monkeypatch):
    """Keep ARPG_* variables from the host out of the farm command."""
    monkeypatch.setattr("cli.EngineConfig.from_env", classmethod(lambda cls, env_file=None: cls()))


class TestParser:
    """Argument parsing."""

    def test_no_command(self, capsys):
        """Without a subcommand help is printed and 1 returned."""
        assert main([]) == 1
        assert "farm" in capsys.readouterr().out

    def test_farm_defaults(self):
        """Farm defaults: one run of ten minutes."""
        args = build_parser().parse_args(["farm"])
        assert args.runs == 1
        assert args.seconds == 600.0
        assert not args.auto_boss

    def test_parse_seed(self):
        """Seeds are case-insensitive."""
        assert parse_seed("beach") == seed_to_long("BEACH")
        assert parse_seed("42") == 42


class TestCommands:
    """Subcommand output."""

    def test_farm_json(self, capsys):
        """A short farm reports a summary and one run."""
        assert main(["farm", "--seed", "CLI", "--seconds", "30", "--json"]) == 0
        data = json.loads(capsys.readouterr().out)
        assert data["summary"]["runs"] == 1
        assert len(data["runs"]) == 1
        assert data["runs"][0]["map_id"] == "twilightBeach"
        assert "stats" not in data["runs"][0]

    def test_farm_text(self, capsys):
        """Text output names the map."""
        assert main(["farm", "--seed", "CLI", "--seconds", "10"]) == 0
        assert "Farmed twilightBeach" in capsys.readouterr().out

    def test_loot_json(self, capsys):
        """Loot rolls the requested number of items."""
        assert main(["loot", "--seed", "ABC", "--level", "10", "--rarity", "rare", "--count", "3", "--json"]) == 0
        items = json.loads(capsys.readouterr().out)
        assert len(items) == 3
        assert all(item["rarity"] == "rare" for item in items)

    def test_loot_nothing_drops(self, capsys):
        """Level 0 has no bases."""
        assert main(["loot", "--level", "0"]) == 1
        assert "No item bases" in capsys.readouterr().out

    def test_monster(self, capsys):
        """Monster stats for a forced rarity."""
        assert main(["monster", "--id", "drownedZombie", "--rarity", "magic", "--json"]) == 0
        data = json.loads(capsys.readouterr().out)
        assert data["max_life"] == 44
        assert data["rarity"] == "magic"

    def test_unknown_monster(self, capsys):
        """Unknown ids exit with 1."""
        assert main(["monster", "--id", "nobody"]) == 1
        assert "Unknown monster" in capsys.readouterr().err

    def test_stats(self, capsys):
        """Default character stats."""
        assert main(["stats", "--json"]) == 0
        data = json.loads(capsys.readouterr().out)
        assert data["max_life"] == 82
        assert data["accuracy"] == 120
