"""
Farming Analysis

Aggregates headless farming runs with NumPy: kill rate, experience per hour,
deaths and drops across seeds.

Usage:
    results = run_parallel(seeds=range(8), map_id="twilightBeach", seconds=1800)
    summary = summarize_runs(results)
    print(summary.experience_per_hour_mean)
"""

from dataclasses import asdict, dataclass
from typing import Dict, Sequence

import numpy as np

from .game import RunResult

SECONDS_PER_HOUR = 3600.0


@dataclass
class FarmingSummary:
    runs: int
    kills_mean: float
    kills_p10: float
    kills_p90: float
    kills_per_minute: float
    experience_per_hour_mean: float
    experience_per_hour_p10: float
    experience_per_hour_p90: float
    deaths_mean: float
    death_free_runs: int
    bosses_mean: float
    items_per_run_mean: float
    items_lost_mean: float
    currency_per_run_mean: float
    final_level_mean: float

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)


def _experience_per_hour(results: Sequence[RunResult]) -> np.ndarray:
    experience = np.array([r.experience for r in results], dtype=float)
    hours = np.array([r.seconds for r in results], dtype=float) / SECONDS_PER_HOUR
    return np.divide(experience, hours, out=np.zeros_like(experience), where=hours > 0)


def summarize_runs(results: Sequence[RunResult]) -> FarmingSummary:
    """
    Summarize a batch of runs.

    Raises:
        ValueError: If results is empty
    """
    if not results:
        raise ValueError("summarize_runs needs at least one RunResult")

    kills = np.array([r.kills for r in results], dtype=float)
    deaths = np.array([r.deaths for r in results], dtype=float)
    minutes = np.array([r.seconds for r in results], dtype=float) / 60.0
    xp_rate = _experience_per_hour(results)

    total_minutes = float(minutes.sum())
    kills_per_minute = float(kills.sum() / total_minutes) if total_minutes > 0 else 0.0

    return FarmingSummary(
        runs=len(results),
        kills_mean=float(kills.mean()),
        kills_p10=float(np.percentile(kills, 10)),
        kills_p90=float(np.percentile(kills, 90)),
        kills_per_minute=kills_per_minute,
        experience_per_hour_mean=float(xp_rate.mean()),
        experience_per_hour_p10=float(np.percentile(xp_rate, 10)),
        experience_per_hour_p90=float(np.percentile(xp_rate, 90)),
        deaths_mean=float(deaths.mean()),
        death_free_runs=int(np.count_nonzero(deaths == 0)),
        bosses_mean=float(np.mean([r.bosses_killed for r in results])),
        items_per_run_mean=float(np.mean([r.items_found for r in results])),
        items_lost_mean=float(np.mean([r.items_lost for r in results])),
        currency_per_run_mean=float(np.mean([r.currency_found for r in results])),
        final_level_mean=float(np.mean([r.final_level for r in results])),
    )


__all__ = ["FarmingSummary", "summarize_runs", "SECONDS_PER_HOUR"]
