"""Normalization metrics for UI badges and export summaries."""

from __future__ import annotations

from typing import Any

from sessionplan.models import PlanNormalization
from sessionplan.normalization.durations import parse_duration_to_minutes
from sessionplan.normalization.options import DEFAULT_OPTIONS, NormalizeOptions


def _clamp01(value: float) -> float:
    return max(0.0, min(1.0, float(value)))


def collect_metrics(normalization: PlanNormalization, options: NormalizeOptions | None = None) -> dict[str, Any]:
    """Summarize a normalized plan; ratios are clamped in [0,1]."""
    cfg = options or DEFAULT_OPTIONS
    days_count = len(normalization.days)
    activities_count = 0
    filler_minutes = 0
    scheduled_minutes = 0
    below_minimum_blocks = 0

    for day in normalization.days:
        for activity in day.activities:
            minutes = parse_duration_to_minutes(activity.duration) or 0
            activities_count += 1
            scheduled_minutes += minutes
            if activity.title == cfg.create_filler_title:
                filler_minutes += minutes
            if minutes < cfg.min_block_minutes:
                below_minimum_blocks += 1

    return {
        "days_count": days_count,
        "activities_count": activities_count,
        "adjusted_days": normalization.meta.adjusted_days,
        "total_notes": normalization.meta.total_notes,
        "window_minutes": max((result.total_minutes for result in normalization.results), default=cfg.window_minutes),
        "scheduled_minutes": scheduled_minutes,
        "filler_minutes": filler_minutes,
        "filler_ratio": _clamp01(filler_minutes / scheduled_minutes) if scheduled_minutes else 0.0,
        "below_minimum_blocks": below_minimum_blocks,
        "adjusted_ratio": _clamp01(normalization.meta.adjusted_days / days_count) if days_count else 0.0,
    }
