"""Apply the day normalizer across a multi-day plan."""

from __future__ import annotations

from dataclasses import replace
from typing import Any, Iterable, Mapping

from sessionplan.logging import get_logger
from sessionplan.models import DayPlan, NormalizedResult, PlanMeta, PlanNormalization, coerce_day

from .day import normalize_day_activities
from .options import NormalizeOptions

logger = get_logger(__name__)


def normalize_plan_days(
    days: Iterable[DayPlan | Mapping[str, Any]],
    options: NormalizeOptions | None = None,
) -> PlanNormalization:
    """Normalize every day independently and count adjusted days and notes."""
    normalized_days: list[DayPlan] = []
    results: list[NormalizedResult] = []
    adjusted_days = 0
    total_notes = 0

    for position, raw_day in enumerate(days):
        day = coerce_day(raw_day, position)
        result = normalize_day_activities(day.activities, options)
        if result.adjusted:
            adjusted_days += 1
        total_notes += len(result.notes)
        normalized_days.append(replace(day, activities=result.activities, extras=dict(day.extras)))
        results.append(result)

    logger.debug("plan_normalized", days=len(normalized_days), adjusted_days=adjusted_days, total_notes=total_notes)
    return PlanNormalization(
        days=tuple(normalized_days),
        meta=PlanMeta(adjusted_days=adjusted_days, total_notes=total_notes),
        results=tuple(results),
    )
