"""Schedule normalization."""

from .clock import format_minutes, parse_time_to_minutes
from .day import normalize_day_activities
from .durations import format_duration, parse_duration_to_minutes
from .options import DEFAULT_OPTIONS, NormalizeOptions, resolve_normalize_options
from .plan import normalize_plan_days

__all__ = [
    "DEFAULT_OPTIONS",
    "NormalizeOptions",
    "format_duration",
    "format_minutes",
    "normalize_day_activities",
    "normalize_plan_days",
    "parse_duration_to_minutes",
    "parse_time_to_minutes",
    "resolve_normalize_options",
]
