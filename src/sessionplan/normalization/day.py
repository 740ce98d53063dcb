"""Normalize one day of activities into a contiguous, exactly-filled window.

Pipeline:
1. sanitize durations (invalid -> 15 min, short -> minimum block),
2. place activities back to back from the window start,
3. reconcile against the window (trailing filler on underrun, trim from the
   end on overrun),
4. align the end of the last block with the window end,
5. force the exact total onto the last block if anything is still off.

The function never raises on malformed activities; every repair is recorded
as a note.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Any, Iterable, Mapping

from sessionplan.logging import get_logger
from sessionplan.models import Activity, NormalizedResult, coerce_activity
from sessionplan.reporting.adjustments import (
    ACTIVITIES_DROPPED,
    DURATION_DEFAULTED,
    DURATION_RAISED_TO_MINIMUM,
    FILLER_ADDED,
    FINAL_ALIGNMENT,
    LAST_BLOCK_EXTENDED,
    LAST_BLOCK_REDUCED,
    SCHEDULE_TRIMMED,
    AdjustmentTrace,
)

from .clock import format_minutes, parse_time_to_minutes
from .durations import format_duration, parse_duration_to_minutes
from .options import DEFAULT_OPTIONS, NormalizeOptions

logger = get_logger(__name__)

DEFAULT_DURATION_MINUTES = 15
HARD_FLOOR_MINUTES = 1
FILLER_DESCRIPTION = "Use this time for breaks, transitions, or discussion."
FILLER_FACILITATOR_NOTE = "Flexible buffer to keep the day on time."

_TITLE_LIMIT = 60


def normalize_day_activities(
    activities: Iterable[Activity | Mapping[str, Any]],
    options: NormalizeOptions | None = None,
) -> NormalizedResult:
    """Return a corrected copy of ``activities`` filling the configured window exactly."""
    cfg = options or DEFAULT_OPTIONS
    min_block = max(HARD_FLOOR_MINUTES, int(cfg.min_block_minutes))
    start_min, end_min = _resolve_window(cfg)
    window_minutes = end_min - start_min
    window_label = f"{format_minutes(start_min)}-{format_minutes(end_min)}"
    trace = AdjustmentTrace()

    items = [coerce_activity(item) for item in activities or () if isinstance(item, (Activity, Mapping))]

    durations: list[int] = []
    for index, item in enumerate(items):
        minutes = parse_duration_to_minutes(item.duration)
        if minutes is None or minutes <= 0:
            minutes = DEFAULT_DURATION_MINUTES
            trace.record(
                code=DURATION_DEFAULTED,
                message=f'Activity "{_safe_title(item.title)}" had invalid duration; defaulted to {minutes} min',
                minutes=minutes,
                activity_index=index,
            )
        if minutes < min_block:
            trace.record(
                code=DURATION_RAISED_TO_MINIMUM,
                message=f'Activity "{_safe_title(item.title)}" duration raised to minimum {min_block} min',
                minutes=min_block - minutes,
                activity_index=index,
            )
            minutes = min_block
        durations.append(minutes)

    placed = _place(items, durations, start_min)

    diff = window_minutes - sum(durations)
    if 0 < diff < min_block and placed:
        # No filler below the minimum block; the last block absorbs the gap.
        durations[-1] += diff
        placed = _place(placed, durations, start_min)
        trace.record(
            code=LAST_BLOCK_EXTENDED,
            message=f"Extended last block by {diff} min to fill the remaining window",
            minutes=diff,
            activity_index=len(placed) - 1,
        )
    elif diff > 0:
        # All slack goes into one trailing block; existing activities keep their durations.
        placed.append(_build_filler(placed[-1] if placed else None, cfg.create_filler_title))
        durations.append(diff)
        placed = _place(placed, durations, start_min)
        trace.record(
            code=FILLER_ADDED,
            message=f"Added buffer block to fill remaining {diff} min",
            minutes=diff,
            activity_index=len(placed) - 1,
        )
    elif diff < 0:
        overrun = -diff
        remaining = _trim_backward(durations, overrun, floor=min_block)
        forced = remaining > 0
        if forced:
            remaining = _trim_backward(durations, remaining, floor=HARD_FLOOR_MINUTES)
        dropped = _drop_trailing(durations, remaining)
        suffix = f"; last blocks forced below the {min_block} min minimum" if forced else ""
        trace.record(
            code=SCHEDULE_TRIMMED,
            message=f"Trimmed {overrun} min to fit {window_label} window{suffix}",
            minutes=overrun,
        )
        if dropped:
            trace.record(
                code=ACTIVITIES_DROPPED,
                message=f"Dropped {dropped} trailing activities that no longer fit the {window_label} window",
                minutes=dropped * HARD_FLOOR_MINUTES,
                activity_index=len(durations),
            )
        placed = _place(placed[: len(durations)], durations, start_min)

    last_index = len(placed) - 1
    end_delta = end_min - _end_of(placed[-1])
    if end_delta > 0:
        durations[-1] += end_delta
        trace.record(
            code=LAST_BLOCK_EXTENDED,
            message=f"Extended last block by {end_delta} min to align with {format_minutes(end_min)}",
            minutes=end_delta,
            activity_index=last_index,
        )
        placed = _place(placed, durations, start_min)
    elif end_delta < 0:
        durations[-1] = max(min_block, durations[-1] + end_delta)
        trace.record(
            code=LAST_BLOCK_REDUCED,
            message=f"Reduced last block by {-end_delta} min to align with {format_minutes(end_min)}",
            minutes=-end_delta,
            activity_index=last_index,
        )
        placed = _place(placed, durations, start_min)

    final_total = sum(parse_duration_to_minutes(item.duration) or 0 for item in placed)
    if final_total != window_minutes:
        delta = window_minutes - final_total
        if delta > 0:
            durations[-1] += delta
        else:
            _drop_trailing(durations, _trim_backward(durations, -delta, floor=HARD_FLOOR_MINUTES))
        placed = _place(placed[: len(durations)], durations, start_min)
        trace.record(
            code=FINAL_ALIGNMENT,
            message=f"Final alignment applied to reach exact {window_minutes} minutes",
            minutes=abs(delta),
            activity_index=len(placed) - 1,
        )

    logger.debug(
        "day_normalized",
        window=window_label,
        activities_in=len(items),
        activities_out=len(placed),
        notes=len(trace),
    )

    notes = trace.notes()
    return NormalizedResult(
        activities=tuple(placed),
        total_minutes=window_minutes,
        notes=notes,
        adjusted=bool(notes),
        adjustments=trace.as_tuple(),
    )


def _resolve_window(cfg: NormalizeOptions) -> tuple[int, int]:
    start_min = cfg.start_minutes
    end_min = cfg.end_minutes
    if end_min > start_min:
        return start_min, end_min

    logger.warning(
        "window_fallback",
        start_time=cfg.start_time,
        end_time=cfg.end_time,
        fallback=f"{DEFAULT_OPTIONS.start_time}-{DEFAULT_OPTIONS.end_time}",
    )
    return DEFAULT_OPTIONS.start_minutes, DEFAULT_OPTIONS.end_minutes


def _place(items: list[Activity], durations: list[int], start_min: int) -> list[Activity]:
    placed: list[Activity] = []
    cursor = start_min
    for item, minutes in zip(items, durations):
        placed.append(
            replace(item, time=format_minutes(cursor), duration=format_duration(minutes), extras=dict(item.extras))
        )
        cursor += minutes
    return placed


def _trim_backward(durations: list[int], overrun: int, *, floor: int) -> int:
    """Take up to ``overrun`` minutes from the last block backward, never below ``floor``.

    Returns the minutes that could not be taken.
    """
    remaining = overrun
    for index in range(len(durations) - 1, -1, -1):
        if remaining <= 0:
            break
        take = min(max(0, durations[index] - floor), remaining)
        durations[index] -= take
        remaining -= take
    return remaining


def _drop_trailing(durations: list[int], remaining: int) -> int:
    dropped = 0
    while remaining > 0 and len(durations) > 1:
        remaining -= durations.pop()
        dropped += 1
    return dropped


def _build_filler(template: Activity | None, title: str) -> Activity:
    source = template or Activity()
    return replace(
        source,
        extras=dict(source.extras),
        title=title,
        description=FILLER_DESCRIPTION,
        materials=(),
        steps=(),
        facilitator_notes=(FILLER_FACILITATOR_NOTE,),
        energy_level="low",
    )


def _end_of(activity: Activity) -> int:
    return parse_time_to_minutes(activity.time) + (parse_duration_to_minutes(activity.duration) or 0)


def _safe_title(title: str) -> str:
    return (title or "")[:_TITLE_LIMIT]
