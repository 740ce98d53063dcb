"""Clock labels (``HH:MM``) to minutes since midnight and back."""

from __future__ import annotations

import re
from typing import Any

DEFAULT_TIME_MINUTES = 9 * 60

_CLOCK = re.compile(r"^(\d{1,2}):(\d{2})$")


def parse_time_to_minutes(label: Any) -> int:
    """Parse ``H:MM``/``HH:MM``; anything unparseable falls back to 09:00."""
    match = _CLOCK.match(str(label).strip())
    if not match:
        return DEFAULT_TIME_MINUTES
    hours = min(23, max(0, int(match.group(1))))
    minutes = min(59, max(0, int(match.group(2))))
    return hours * 60 + minutes


def is_clock_label(label: Any) -> bool:
    return isinstance(label, str) and _CLOCK.match(label.strip()) is not None


def format_minutes(minutes: int) -> str:
    hours, rest = divmod(minutes, 60)
    return f"{hours:02d}:{rest:02d}"
