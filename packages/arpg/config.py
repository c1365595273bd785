"""
Engine configuration.

EngineConfig carries the tunables the tick engine and intents read. Defaults
reproduce the reference game; `from_env` lets a local `.env` or ARPG_*
environment variables override them for headless runs.

Usage:
    config = EngineConfig.from_env()
    runner = GameRunner(seed=42, config=config)
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, fields
from typing import Dict, Optional

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

ENV_PREFIX = "ARPG_"


@dataclass
class EngineConfig:
    tick_rate: int = 10  # ticks per second
    default_spawn_interval: float = 3.0
    max_monsters: int = 5
    flask_auto_use_threshold: float = 0.5
    max_support_sockets: int = 5
    bleed_duration: float = 5.0
    bleed_percent_of_physical: float = 70.0
    boss_respawn_delay: float = 0.5
    combat_log_size: int = 50
    inventory_size: int = 30
    starting_map_id: Optional[str] = None  # None uses the catalog's first map

    @property
    def tick_seconds(self) -> float:
        return 1.0 / self.tick_rate

    @classmethod
    def from_env(cls, env_file: Optional[str] = None) -> EngineConfig:
        """
        Build a config from ARPG_* environment variables.

        A `.env` file (or env_file) is loaded first without overriding
        variables that are already set. Field names map upper-cased, e.g.
        ARPG_TICK_RATE, ARPG_MAX_MONSTERS.

        Raises:
            ValueError: If a variable cannot be converted to the field's type
        """
        load_dotenv(env_file)
        values: Dict[str, object] = {}
        for f in fields(cls):
            raw = os.environ.get(f"{ENV_PREFIX}{f.name.upper()}")
            if raw is None or raw == "":
                continue
            values[f.name] = _convert(f.name, raw, getattr(cls, f.name))
        if values:
            logger.debug("Config overrides from environment: %s", values)
        return cls(**values)


def _convert(name: str, raw: str, default: object) -> object:
    if isinstance(default, bool):
        return raw.lower() in ("1", "true", "yes", "on")
    if isinstance(default, int):
        try:
            return int(raw)
        except ValueError as e:
            raise ValueError(f"{ENV_PREFIX}{name.upper()} must be an integer, got {raw!r}") from e
    if isinstance(default, float):
        try:
            return float(raw)
        except ValueError as e:
            raise ValueError(f"{ENV_PREFIX}{name.upper()} must be a number, got {raw!r}") from e
    return raw
