"""Adjustment trace for schedule repairs."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

DURATION_DEFAULTED = "DURATION_DEFAULTED"
DURATION_RAISED_TO_MINIMUM = "DURATION_RAISED_TO_MINIMUM"
FILLER_ADDED = "FILLER_ADDED"
SCHEDULE_TRIMMED = "SCHEDULE_TRIMMED"
ACTIVITIES_DROPPED = "ACTIVITIES_DROPPED"
LAST_BLOCK_EXTENDED = "LAST_BLOCK_EXTENDED"
LAST_BLOCK_REDUCED = "LAST_BLOCK_REDUCED"
FINAL_ALIGNMENT = "FINAL_ALIGNMENT"


@dataclass(slots=True)
class AdjustmentTrace:
    """Collect repairs applied while one day is normalized."""

    _sequence: int = 0
    _items: list[dict[str, Any]] = field(default_factory=list)

    def record(
        self,
        *,
        code: str,
        message: str,
        minutes: int,
        activity_index: int | None = None,
    ) -> None:
        self._sequence += 1
        self._items.append(
            {
                "adjustment_id": f"a-{self._sequence:06d}",
                "code": code,
                "message": message,
                "activity_index": activity_index,
                "minutes": int(minutes),
            }
        )

    def __len__(self) -> int:
        return len(self._items)

    def notes(self) -> tuple[str, ...]:
        return tuple(str(item["message"]) for item in self._items)

    def as_tuple(self) -> tuple[dict[str, Any], ...]:
        return tuple(dict(item) for item in self._items)
