"""Normalizer configuration and its resolution from layered inputs."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Mapping

from sessionplan.validation import ValidationReport

from .clock import is_clock_label, parse_time_to_minutes


@dataclass(frozen=True, slots=True)
class NormalizeOptions:
    """Day window and repair settings, passed by value into every call."""

    start_time: str = "09:00"
    end_time: str = "17:00"
    min_block_minutes: int = 5
    create_filler_title: str = "Break & Transition"

    @property
    def start_minutes(self) -> int:
        return parse_time_to_minutes(self.start_time)

    @property
    def end_minutes(self) -> int:
        return parse_time_to_minutes(self.end_time)

    @property
    def window_minutes(self) -> int:
        return self.end_minutes - self.start_minutes

    def as_dict(self) -> dict[str, Any]:
        return {
            "startTime": self.start_time,
            "endTime": self.end_time,
            "minBlockMinutes": self.min_block_minutes,
            "createFillerTitle": self.create_filler_title,
        }


DEFAULT_OPTIONS = NormalizeOptions()

# Wire name -> attribute name. Snake-case attribute names are accepted as well.
_OPTION_KEYS = {
    "startTime": "start_time",
    "endTime": "end_time",
    "minBlockMinutes": "min_block_minutes",
    "createFillerTitle": "create_filler_title",
}
_OPTION_TYPES: dict[str, type] = {
    "start_time": str,
    "end_time": str,
    "min_block_minutes": int,
    "create_filler_title": str,
}


def resolve_normalize_options(
    payload: Mapping[str, Any] | None,
    validation_report: ValidationReport,
    *,
    base: NormalizeOptions = DEFAULT_OPTIONS,
) -> NormalizeOptions:
    """Merge ``payload`` over ``base`` and report anything that was ignored or clamped."""
    overrides: dict[str, Any] = {}
    for key, value in (payload or {}).items():
        attribute = _OPTION_KEYS.get(key, key)
        if attribute not in _OPTION_TYPES:
            validation_report.add_error(
                code="INVALID_OPTION_KEY",
                message=f"Option key {key!r} is not allowed",
                field_path=f"$.options.{key}",
                suggested_fix=f"Use one of: {', '.join(sorted(_OPTION_KEYS))}",
            )
            continue

        expected = _OPTION_TYPES[attribute]
        if not isinstance(value, expected) or isinstance(value, bool):
            validation_report.add_error(
                code="INVALID_OPTION_TYPE",
                message=f"Expected {expected.__name__} for {key}, got {type(value).__name__}",
                field_path=f"$.options.{key}",
            )
            continue

        overrides[attribute] = value

    options = replace(base, **overrides)

    for attribute, wire_key in (("start_time", "startTime"), ("end_time", "endTime")):
        label = getattr(options, attribute)
        if not is_clock_label(label):
            validation_report.add_info(
                code="INFO_TIME_DEFAULTED",
                message=f"{wire_key} {label!r} is not a HH:MM label; 09:00 is used",
                field_path=f"$.options.{wire_key}",
                extra={"applied_value": "09:00"},
            )

    if options.min_block_minutes < 1:
        options = replace(options, min_block_minutes=1)
        validation_report.add_info(
            code="INFO_CLAMP_MIN_BLOCK_APPLIED",
            message="minBlockMinutes was clamped to 1",
            field_path="$.options.minBlockMinutes",
            extra={"applied_value": 1},
        )

    if not options.create_filler_title.strip():
        options = replace(options, create_filler_title=base.create_filler_title)
        validation_report.add_error(
            code="INVALID_OPTION_VALUE",
            message="createFillerTitle cannot be empty",
            field_path="$.options.createFillerTitle",
        )

    if options.window_minutes <= 0:
        validation_report.add_error(
            code="INVALID_WINDOW",
            message=f"endTime {options.end_time} must be later than startTime {options.start_time}",
            field_path="$.options",
            suggested_fix="Swap the times or widen the day window.",
        )

    return options
