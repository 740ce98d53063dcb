"""Session plan value types.

Activities and day plans arrive from generated JSON, UI forms or static
templates, so ``from_dict`` accepts anything mapping-shaped and never raises.
All types are frozen; updates go through ``dataclasses.replace``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

ENERGY_LEVELS = ("low", "medium", "high")

_ACTIVITY_KEYS = {
    "time",
    "duration",
    "title",
    "description",
    "materials",
    "steps",
    "facilitatorNotes",
    "energyLevel",
}
_DAY_KEYS = {"day", "theme", "objective", "activities"}


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def _as_text_tuple(value: Any) -> tuple[str, ...]:
    if not isinstance(value, (list, tuple)):
        return ()
    return tuple(_as_text(item) for item in value)


@dataclass(frozen=True, slots=True)
class Activity:
    """One scheduled block within a day."""

    time: str = ""
    duration: str = ""
    title: str = ""
    description: str = ""
    materials: tuple[str, ...] = ()
    steps: tuple[str, ...] | None = None
    facilitator_notes: tuple[str, ...] = ()
    energy_level: str = "medium"
    extras: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "Activity":
        steps = payload.get("steps")
        return cls(
            time=_as_text(payload.get("time")),
            duration=_as_text(payload.get("duration")),
            title=_as_text(payload.get("title")),
            description=_as_text(payload.get("description")),
            materials=_as_text_tuple(payload.get("materials")),
            steps=_as_text_tuple(steps) if isinstance(steps, (list, tuple)) else None,
            facilitator_notes=_as_text_tuple(payload.get("facilitatorNotes")),
            energy_level=_as_text(payload.get("energyLevel")) or "medium",
            extras={key: value for key, value in payload.items() if key not in _ACTIVITY_KEYS},
        )

    def as_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = dict(self.extras)
        payload.update(
            {
                "time": self.time,
                "duration": self.duration,
                "title": self.title,
                "description": self.description,
                "materials": list(self.materials),
                "facilitatorNotes": list(self.facilitator_notes),
                "energyLevel": self.energy_level,
            }
        )
        if self.steps is not None:
            payload["steps"] = list(self.steps)
        return payload


@dataclass(frozen=True, slots=True)
class DayPlan:
    """One workshop day: sequence number, theme, objective and activities."""

    day: int
    theme: str = ""
    objective: str = ""
    activities: tuple[Activity, ...] = ()
    extras: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any], *, position: int = 0) -> "DayPlan":
        """Build a day from a mapping; ``position`` is the 0-based fallback for a missing ``day``."""
        raw_day = payload.get("day")
        day = raw_day if isinstance(raw_day, int) and not isinstance(raw_day, bool) else position + 1
        raw_activities = payload.get("activities")
        activities = raw_activities if isinstance(raw_activities, (list, tuple)) else []
        return cls(
            day=day,
            theme=_as_text(payload.get("theme")),
            objective=_as_text(payload.get("objective")),
            activities=tuple(coerce_activity(item) for item in activities if isinstance(item, (Activity, Mapping))),
            extras={key: value for key, value in payload.items() if key not in _DAY_KEYS},
        )

    def as_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = dict(self.extras)
        payload.update(
            {
                "day": self.day,
                "theme": self.theme,
                "objective": self.objective,
                "activities": [activity.as_dict() for activity in self.activities],
            }
        )
        return payload


@dataclass(frozen=True, slots=True)
class NormalizedResult:
    """Corrected activities for one day plus what was repaired."""

    activities: tuple[Activity, ...]
    total_minutes: int
    notes: tuple[str, ...] = ()
    adjusted: bool = False
    adjustments: tuple[dict[str, Any], ...] = ()

    def as_dict(self) -> dict[str, Any]:
        return {
            "activities": [activity.as_dict() for activity in self.activities],
            "totalMinutes": self.total_minutes,
            "notes": list(self.notes),
            "adjusted": self.adjusted,
            "adjustments": [dict(item) for item in self.adjustments],
        }


@dataclass(frozen=True, slots=True)
class PlanMeta:
    adjusted_days: int = 0
    total_notes: int = 0

    def as_dict(self) -> dict[str, int]:
        return {"adjustedDays": self.adjusted_days, "totalNotes": self.total_notes}


@dataclass(frozen=True, slots=True)
class PlanNormalization:
    """Normalized days, aggregate counters and the per-day results they came from."""

    days: tuple[DayPlan, ...]
    meta: PlanMeta
    results: tuple[NormalizedResult, ...] = ()

    def as_dict(self) -> dict[str, Any]:
        return {
            "days": [day.as_dict() for day in self.days],
            "meta": self.meta.as_dict(),
        }


def coerce_activity(item: Activity | Mapping[str, Any]) -> Activity:
    if isinstance(item, Activity):
        return item
    return Activity.from_dict(item)


def coerce_day(item: DayPlan | Mapping[str, Any], position: int = 0) -> DayPlan:
    if isinstance(item, DayPlan):
        return item
    return DayPlan.from_dict(item, position=position)
