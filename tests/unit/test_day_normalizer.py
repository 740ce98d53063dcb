from __future__ import annotations

from copy import deepcopy

from sessionplan.models import Activity
from sessionplan.normalization import NormalizeOptions, normalize_day_activities, parse_duration_to_minutes


def _activity(duration: str, title: str = "Session", time: str = "09:00", **extra: object) -> dict:
    payload = {
        "time": time,
        "duration": duration,
        "title": title,
        "description": f"{title} description",
        "materials": ["sticky notes", "markers"],
        "steps": ["explain", "do"],
        "facilitatorNotes": ["keep it moving"],
        "energyLevel": "high",
    }
    payload.update(extra)
    return payload


def _minutes(result) -> list[int]:
    return [parse_duration_to_minutes(item.duration) for item in result.activities]


def test_deficit_appends_single_trailing_filler() -> None:
    result = normalize_day_activities([_activity("30 min", title="Warm-up")])

    assert len(result.activities) == 2
    first, filler = result.activities
    assert (first.time, first.duration, first.title) == ("09:00", "30 min", "Warm-up")
    assert filler.title == "Break & Transition"
    assert (filler.time, filler.duration) == ("09:30", "450 min")
    assert filler.materials == ()
    assert filler.steps == ()
    assert filler.facilitator_notes == ("Flexible buffer to keep the day on time.",)
    assert filler.energy_level == "low"
    assert result.total_minutes == 480
    assert result.adjusted is True
    assert len(result.notes) == 1
    assert "450 min" in result.notes[0]


def test_overrun_trims_from_the_last_activity() -> None:
    result = normalize_day_activities([_activity("300 min", title="Build"), _activity("250 min", title="Share")])

    assert [item.time for item in result.activities] == ["09:00", "14:00"]
    assert [item.duration for item in result.activities] == ["5 h", "3 h"]
    assert _minutes(result) == [300, 180]
    assert sum(_minutes(result)) == 480
    assert result.adjusted is True
    assert any("Trimmed 70 min" in note for note in result.notes)


def test_overrun_walks_backward_when_last_block_hits_minimum() -> None:
    result = normalize_day_activities(
        [_activity("240 min"), _activity("240 min"), _activity("20 min")]
    )

    assert _minutes(result) == [240, 235, 5]
    assert [item.time for item in result.activities] == ["09:00", "13:00", "16:55"]


def test_invalid_duration_defaults_to_fifteen_then_fills() -> None:
    result = normalize_day_activities([_activity("abc", title="Intro")])

    assert result.activities[0].duration == "15 min"
    assert result.activities[1].duration == "465 min"
    assert result.activities[1].time == "09:15"
    assert result.notes[0] == 'Activity "Intro" had invalid duration; defaulted to 15 min'
    assert result.adjusted is True
    assert result.adjustments[0]["code"] == "DURATION_DEFAULTED"
    assert result.adjustments[0]["activity_index"] == 0


def test_zero_and_negative_durations_are_invalid() -> None:
    result = normalize_day_activities([_activity("0 min", title="A"), _activity("", title="B"), _activity("465 min", title="C")])

    assert _minutes(result)[:2] == [15, 15]
    codes = [item["code"] for item in result.adjustments]
    assert codes.count("DURATION_DEFAULTED") == 2


def test_short_duration_raised_to_minimum() -> None:
    result = normalize_day_activities([_activity("2 min", title="Stretch"), _activity("475 min")])

    assert _minutes(result) == [5, 475]
    assert result.notes[0] == 'Activity "Stretch" duration raised to minimum 5 min'
    assert len(result.notes) == 1


def test_already_valid_day_is_returned_unchanged() -> None:
    activities = [
        _activity("90 min", time="09:00"),
        _activity("30 min", time="10:30"),
        _activity("2 h", time="11:00"),
        _activity("1 h", time="13:00"),
        _activity("3 h", time="14:00"),
    ]
    original = deepcopy(activities)

    result = normalize_day_activities(activities)

    assert [item.as_dict() for item in result.activities] == original
    assert result.adjusted is False
    assert result.notes == ()
    assert activities == original


def test_times_are_recomputed_even_without_notes() -> None:
    result = normalize_day_activities([_activity("4 h", time="10:15"), _activity("4 h", time="garbage")])

    assert [item.time for item in result.activities] == ["09:00", "13:00"]
    assert result.adjusted is False


def test_input_activities_are_not_mutated() -> None:
    source = Activity(time="11:00", duration="999 min", title="Marathon")
    result = normalize_day_activities([source])

    assert source.duration == "999 min"
    assert source.time == "11:00"
    assert result.activities[0] is not source
    assert result.activities[0].duration == "8 h"


def test_filler_is_cloned_from_last_activity() -> None:
    result = normalize_day_activities([_activity("1 h", room="Atelier B")])

    first, filler = result.activities
    assert filler.extras == {"room": "Atelier B"}
    assert filler.extras is not first.extras
    assert filler.description == "Use this time for breaks, transitions, or discussion."


def test_output_extras_are_independent_of_input_and_siblings() -> None:
    source = Activity(duration="1 h", title="Kickoff", extras={"id": 7})

    result = normalize_day_activities([source])
    result.activities[-1].extras["id"] = 99

    assert source.extras == {"id": 7}
    assert result.activities[0].extras == {"id": 7}
    assert result.activities[0].extras is not source.extras


def test_small_gap_extends_last_block_instead_of_short_filler() -> None:
    result = normalize_day_activities([_activity("477 min")])

    assert len(result.activities) == 1
    assert result.activities[0].duration == "8 h"
    assert result.adjustments[0]["code"] == "LAST_BLOCK_EXTENDED"


def test_empty_day_becomes_single_filler() -> None:
    result = normalize_day_activities([])

    assert len(result.activities) == 1
    assert result.activities[0].title == "Break & Transition"
    assert (result.activities[0].time, result.activities[0].duration) == ("09:00", "8 h")
    assert result.adjusted is True


def test_custom_window_and_filler_title() -> None:
    options = NormalizeOptions(start_time="13:30", end_time="16:00", min_block_minutes=10, create_filler_title="Open Space")

    result = normalize_day_activities([_activity("1h"), _activity("3 min")], options)

    assert result.total_minutes == 150
    assert [item.time for item in result.activities] == ["13:30", "14:30", "14:40"]
    assert _minutes(result) == [60, 10, 80]
    assert result.activities[-1].title == "Open Space"


def test_minimum_is_sacrificed_only_as_last_resort() -> None:
    options = NormalizeOptions(start_time="09:00", end_time="09:20", min_block_minutes=10)

    result = normalize_day_activities([_activity("10 min"), _activity("10 min"), _activity("10 min")], options)

    assert sum(_minutes(result)) == 20
    assert _minutes(result) == [10, 9, 1]
    assert "forced below the 10 min minimum" in result.notes[0]


def test_activities_are_dropped_when_window_cannot_hold_one_minute_each() -> None:
    options = NormalizeOptions(start_time="09:00", end_time="09:03", min_block_minutes=5)

    result = normalize_day_activities([_activity("5 min") for _ in range(5)], options)

    assert _minutes(result) == [1, 1, 1]
    assert [item.time for item in result.activities] == ["09:00", "09:01", "09:02"]
    assert any(item["code"] == "ACTIVITIES_DROPPED" for item in result.adjustments)


def test_inverted_window_falls_back_to_default_day() -> None:
    options = NormalizeOptions(start_time="17:00", end_time="09:00")

    result = normalize_day_activities([_activity("8 h")], options)

    assert result.total_minutes == 480
    assert result.activities[0].time == "09:00"
    assert result.adjusted is False


def test_unparseable_window_labels_are_silently_nine_oclock() -> None:
    options = NormalizeOptions(start_time="morning", end_time="12:00")

    result = normalize_day_activities([_activity("3 h")], options)

    assert result.total_minutes == 180
    assert result.notes == ()


def test_long_titles_are_cut_in_notes() -> None:
    title = "x" * 100
    result = normalize_day_activities([_activity("nope", title=title)])

    assert f'"{"x" * 60}"' in result.notes[0]
