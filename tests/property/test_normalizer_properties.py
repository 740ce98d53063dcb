from __future__ import annotations

import random

import pytest

from sessionplan.normalization import (
    NormalizeOptions,
    normalize_day_activities,
    parse_duration_to_minutes,
    parse_time_to_minutes,
)

_LABELS = ["{m} min", "{m}", "{m}m", "{h}h{r}", "{h}:{r:02d}", "{h} hours", "abc", "", "0", "-", "{m} minutes"]

_WINDOWS = [
    NormalizeOptions(),
    NormalizeOptions(start_time="08:00", end_time="18:30", min_block_minutes=10),
    NormalizeOptions(start_time="13:00", end_time="15:00", min_block_minutes=15),
    NormalizeOptions(start_time="09:00", end_time="09:45", min_block_minutes=5),
]


def _random_day(rng: random.Random) -> list[dict]:
    activities = []
    for idx in range(rng.randint(1, 12)):
        minutes = rng.randint(0, 240)
        label = rng.choice(_LABELS).format(m=minutes, h=minutes // 60, r=minutes % 60)
        activities.append({"time": rng.choice(["09:00", "xx", "12:30"]), "duration": label, "title": f"A{idx}"})
    return activities


def _cases() -> list[tuple[int, NormalizeOptions]]:
    return [(seed, options) for seed in range(60) for options in _WINDOWS]


@pytest.mark.parametrize(("seed", "options"), _cases())
def test_exact_total_contiguity_and_idempotence(seed: int, options: NormalizeOptions) -> None:
    rng = random.Random(seed)
    first = normalize_day_activities(_random_day(rng), options)

    durations = [parse_duration_to_minutes(item.duration) for item in first.activities]
    starts = [parse_time_to_minutes(item.time) for item in first.activities]

    assert sum(durations) == first.total_minutes == options.window_minutes
    assert starts[0] == options.start_minutes
    for idx in range(len(starts) - 1):
        assert starts[idx + 1] == starts[idx] + durations[idx]
    assert starts[-1] + durations[-1] == options.end_minutes
    assert all(minutes >= 1 for minutes in durations)

    second = normalize_day_activities(first.activities, options)
    if all(minutes >= options.min_block_minutes for minutes in durations):
        assert second.activities == first.activities
        assert second.adjusted is False
        assert second.notes == ()


@pytest.mark.parametrize("seed", range(40))
def test_minimum_block_respected_when_feasible(seed: int) -> None:
    rng = random.Random(1000 + seed)
    options = NormalizeOptions()
    count = rng.randint(1, 20)
    raw = [rng.randint(options.min_block_minutes, 120) for _ in range(count)]
    if options.min_block_minutes * count > options.window_minutes:
        pytest.skip("window cannot hold every block at the minimum")

    result = normalize_day_activities([{"duration": f"{m} min", "title": "x"} for m in raw], options)

    assert all(parse_duration_to_minutes(item.duration) >= options.min_block_minutes for item in result.activities)


@pytest.mark.parametrize("seed", range(20))
def test_overrun_preserves_earlier_blocks_first(seed: int) -> None:
    rng = random.Random(2000 + seed)
    raw = [rng.randint(60, 200) for _ in range(rng.randint(3, 8))]
    if sum(raw) <= 480:
        raw.append(480)

    result = normalize_day_activities([{"duration": f"{m} min"} for m in raw])
    trimmed = [parse_duration_to_minutes(item.duration) for item in result.activities]

    changed = [idx for idx, (before, after) in enumerate(zip(raw, trimmed)) if before != after]
    # Only a suffix of the day is touched, and all but its first block sit at the minimum.
    assert changed == list(range(changed[0], len(raw)))
    assert all(trimmed[idx] == 5 for idx in changed[1:])
