"""Free-form duration labels to canonical minutes and back."""

from __future__ import annotations

import re
from typing import Any

_BARE_MINUTES = re.compile(r"^\d+$")
_HOURS_MINUTES = re.compile(r"^(\d+)\s*h\s*(\d+)\s*(?:minutes|minute|mins|min|m)?$")
_HOUR_TOKEN = re.compile(r"(\d+)\s*(?:hours|hour|hrs|hr|h)")
_MINUTE_TOKEN = re.compile(r"(\d+)\s*(?:minutes|minute|mins|min|m)(?![a-z])")
_COLON = re.compile(r"^(\d+):(\d{1,2})$")


def parse_duration_to_minutes(label: Any) -> int | None:
    """Parse a duration label into whole minutes.

    Recognised forms: ``"90"``, ``"1h30"``, ``"2 hours"``, ``"1 hr 15 min"``,
    ``"2:15"``. Returns ``None`` for anything else; callers treat ``None`` and
    non-positive values as invalid.
    """
    text = str(label).strip().lower()

    if _BARE_MINUTES.match(text):
        return int(text)

    combined = _HOURS_MINUTES.match(text)
    if combined:
        return int(combined.group(1)) * 60 + int(combined.group(2))

    hours = _HOUR_TOKEN.search(text)
    minutes = _MINUTE_TOKEN.search(text)
    if hours or minutes:
        total = int(hours.group(1)) * 60 if hours else 0
        if minutes:
            total += int(minutes.group(1))
        return total

    colon = _COLON.match(text)
    if colon:
        return int(colon.group(1)) * 60 + int(colon.group(2))

    return None


def format_duration(minutes: int) -> str:
    """Canonical label: whole hours as ``"2 h"``, everything else as ``"95 min"``."""
    if minutes % 60 == 0:
        return f"{minutes // 60} h"
    return f"{minutes} min"
