"""Workshop session plan normalization."""

from sessionplan.models import Activity, DayPlan, NormalizedResult, PlanMeta, PlanNormalization
from sessionplan.normalization import (
    NormalizeOptions,
    format_duration,
    format_minutes,
    normalize_day_activities,
    normalize_plan_days,
    parse_duration_to_minutes,
    parse_time_to_minutes,
)

__all__ = [
    "Activity",
    "DayPlan",
    "NormalizeOptions",
    "NormalizedResult",
    "PlanMeta",
    "PlanNormalization",
    "format_duration",
    "format_minutes",
    "normalize_day_activities",
    "normalize_plan_days",
    "parse_duration_to_minutes",
    "parse_time_to_minutes",
]
