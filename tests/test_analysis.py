"""
Farming Analysis Tests
"""

import pytest

from packages.arpg.analysis import SECONDS_PER_HOUR, summarize_runs
from packages.arpg.game import RunResult


def _run(seed, kills, experience, deaths=0, seconds=SECONDS_PER_HOUR, **kwargs):
    return RunResult(
        seed=seed, map_id="twilightBeach", seconds=seconds,
        kills=kills, experience=experience, deaths=deaths, **kwargs
    )


class TestSummarizeRuns:
    """summarize_runs."""

    def test_empty_raises(self):
        """At least one run is needed."""
        with pytest.raises(ValueError):
            summarize_runs([])

    def test_single_run(self):
        """One hour, 120 kills, 6000 experience."""
        summary = summarize_runs([_run(1, kills=120, experience=6000)])
        assert summary.runs == 1
        assert summary.kills_mean == 120
        assert summary.kills_per_minute == pytest.approx(2.0)
        assert summary.experience_per_hour_mean == pytest.approx(6000)
        assert summary.death_free_runs == 1

    def test_rates_use_run_length(self):
        """Half-hour runs double the hourly rate."""
        summary = summarize_runs([_run(1, kills=30, experience=1000, seconds=1800)])
        assert summary.experience_per_hour_mean == pytest.approx(2000)
        assert summary.kills_per_minute == pytest.approx(1.0)

    def test_percentiles_and_deaths(self):
        """Spread across runs."""
        runs = [_run(i, kills=k, experience=k * 50, deaths=d)
                for i, (k, d) in enumerate([(10, 0), (20, 1), (30, 0), (40, 2)])]
        summary = summarize_runs(runs)
        assert summary.kills_mean == 25
        assert summary.kills_p10 < summary.kills_mean < summary.kills_p90
        assert summary.deaths_mean == pytest.approx(0.75)
        assert summary.death_free_runs == 2

    def test_zero_length_run(self):
        """Zero-second runs do not divide by zero."""
        summary = summarize_runs([_run(1, kills=0, experience=0, seconds=0)])
        assert summary.experience_per_hour_mean == 0
        assert summary.kills_per_minute == 0

    def test_to_dict(self):
        """to_dict is JSON friendly."""
        data = summarize_runs([_run(1, kills=5, experience=50, items_found=3)]).to_dict()
        assert data["items_per_run_mean"] == 3
        assert set(data) >= {"runs", "kills_mean", "experience_per_hour_mean"}
