"""
Seeded RNG for the simulation core.

Every random decision in the engine (spawn rarity, loot rolls, affix values,
hit/evade/block rolls, damage variance) goes through a `Random` drawn from a
`GameRNG` stream. Two games built from the same seed and driven with the same
intents and tick deltas therefore evolve identically.

Streams (one per concern so that, e.g., a UI preview of loot does not shift
combat rolls):
- monster: spawn pool pick and monster rarity
- loot: item drop, base selection, item rarity, currency drops
- affix: affix selection and rolled values
- combat: player damage rolls, crits, double damage, bleed procs
- defense: monster accuracy, block and damage variance rolls
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional, Sequence, TypeVar

T = TypeVar("T")

_MASK_64 = 0xFFFFFFFFFFFFFFFF


class XorShift128:
    """
    XorShift128+ generator (libGDX RandomXS128 variant).

    State is two 64-bit integers. Seeding runs the seed through the
    MurmurHash3 finalizer so nearby seeds give unrelated sequences.
    """

    def __init__(self, seed: int, seed1: Optional[int] = None):
        if seed1 is not None:
            self.seed0 = seed & _MASK_64
            self.seed1 = seed1 & _MASK_64
        else:
            if seed == 0:
                seed = -0x8000000000000000
            self.seed0 = self._murmur_hash3(seed)
            self.seed1 = self._murmur_hash3(self.seed0)

    @staticmethod
    def _murmur_hash3(x: int) -> int:
        x = x & _MASK_64
        x ^= x >> 33
        x = (x * 0xFF51AFD7ED558CCD) & _MASK_64
        x ^= x >> 33
        x = (x * 0xC4CEB9FE1A85EC53) & _MASK_64
        x ^= x >> 33
        return x

    def _next_long(self) -> int:
        """Advance the state and return the next unsigned 64-bit value."""
        s1 = self.seed0
        s0 = self.seed1
        self.seed0 = s0
        s1 ^= (s1 << 23) & _MASK_64
        self.seed1 = (s1 ^ s0 ^ (s1 >> 17) ^ (s0 >> 26)) & _MASK_64
        return (self.seed0 + self.seed1) & _MASK_64

    def next_int(self, bound: int) -> int:
        """Random int in [0, bound)."""
        if bound <= 0:
            raise ValueError("bound must be positive")

        while True:
            bits = self._next_long() >> 1
            val = bits % bound
            if bits - val + (bound - 1) >= 0:
                return int(val)

    def next_double(self) -> float:
        """Random double in [0, 1) with 53 bits of precision."""
        return (self._next_long() >> 11) / (1 << 53)

    def copy(self) -> XorShift128:
        return XorShift128(self.seed0, self.seed1)


class Random:
    """
    Counting wrapper around XorShift128.

    The counter records how many draws were made, which is enough to restore a
    stream from (seed, counter) without serializing generator state.
    """

    def __init__(self, seed: int, counter: int = 0):
        self._rng = XorShift128(seed)
        self.counter = 0
        for _ in range(counter):
            self.random_float()

    def random_float(self) -> float:
        """Random float in [0, 1)."""
        self.counter += 1
        return self._rng.next_double()

    def random_percent(self) -> float:
        """Random float in [0, 100), the unit used by every chance roll."""
        self.counter += 1
        return self._rng.next_double() * 100

    def random_int_range(self, start: int, end: int) -> int:
        """Random int in [start, end] INCLUSIVE."""
        if end < start:
            raise ValueError(f"empty range [{start}, {end}]")
        self.counter += 1
        return start + self._rng.next_int(end - start + 1)

    def random_boolean_chance(self, chance: float) -> bool:
        """True with probability `chance` (a fraction, not a percent)."""
        self.counter += 1
        return self._rng.next_double() < chance

    def choice(self, items: Sequence[T]) -> T:
        """Uniformly pick one element of a non-empty sequence."""
        if not items:
            raise ValueError("cannot choose from an empty sequence")
        self.counter += 1
        return items[self._rng.next_int(len(items))]

    def weighted_index(self, weights: Sequence[float]) -> int:
        """
        Pick an index proportionally to `weights`.

        Walks the cumulative weights subtracting from a single roll; falls back
        to the first index if rounding leaves the roll positive.
        """
        total = sum(weights)
        if total <= 0:
            return 0
        roll = self.random_float() * total
        for index, weight in enumerate(weights):
            roll -= weight
            if roll <= 0:
                return index
        return 0

    def copy(self) -> Random:
        new = Random.__new__(Random)
        new._rng = self._rng.copy()
        new.counter = self.counter
        return new


def seed_to_long(seed_string: str) -> int:
    """
    Convert a seed string (e.g. "EXILE42") to an integer seed.

    Pure numeric strings are taken literally; anything else is read as base-35
    over 0-9 and A-Z without O (O is read as 0).
    """
    if seed_string.lstrip("-").isdigit():
        return int(seed_string)

    characters = "0123456789ABCDEFGHIJKLMNPQRSTUVWXYZ"
    seed_string = seed_string.upper().replace("O", "0")

    result = 0
    for char in seed_string:
        remainder = characters.find(char)
        if remainder == -1:
            continue
        result = result * len(characters) + remainder
    return result


class RNGStream(Enum):
    """Independent random streams owned by a game."""
    MONSTER = "monster"
    LOOT = "loot"
    AFFIX = "affix"
    COMBAT = "combat"
    DEFENSE = "defense"


# Offsets keep streams decorrelated while sharing one user-facing seed.
STREAM_OFFSETS: Dict[RNGStream, int] = {
    RNGStream.MONSTER: 0,
    RNGStream.LOOT: 1_000_003,
    RNGStream.AFFIX: 2_000_003,
    RNGStream.COMBAT: 3_000_017,
    RNGStream.DEFENSE: 4_000_037,
}


@dataclass
class GameRNG:
    """All RNG streams for one game."""
    seed: int
    streams: Dict[RNGStream, Random] = field(default_factory=dict)

    def __post_init__(self):
        if not self.streams:
            self.streams = {
                stream: Random(self.seed + offset)
                for stream, offset in STREAM_OFFSETS.items()
            }

    @property
    def monster(self) -> Random:
        return self.streams[RNGStream.MONSTER]

    @property
    def loot(self) -> Random:
        return self.streams[RNGStream.LOOT]

    @property
    def affix(self) -> Random:
        return self.streams[RNGStream.AFFIX]

    @property
    def combat(self) -> Random:
        return self.streams[RNGStream.COMBAT]

    @property
    def defense(self) -> Random:
        return self.streams[RNGStream.DEFENSE]

    def get_counters(self) -> Dict[str, int]:
        """Draw counters per stream, enough to rebuild with `from_counters`."""
        return {stream.value: rng.counter for stream, rng in self.streams.items()}

    @classmethod
    def from_counters(cls, seed: int, counters: Dict[str, int]) -> GameRNG:
        streams = {
            stream: Random(seed + offset, counters.get(stream.value, 0))
            for stream, offset in STREAM_OFFSETS.items()
        }
        return cls(seed=seed, streams=streams)

    @classmethod
    def from_string(cls, seed_string: str) -> GameRNG:
        return cls(seed=seed_to_long(seed_string))
