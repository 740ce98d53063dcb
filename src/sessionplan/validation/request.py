"""Shape checks for a session plan payload."""

from __future__ import annotations

from typing import Any

from .errors import ValidationError


def validate_plan_payload(payload: dict[str, Any]) -> list[ValidationError]:
    """Require a ``days`` list whose entries are objects.

    Activity contents are not checked here; the normalizer repairs them.
    """
    errors: list[ValidationError] = []

    days = payload.get("days")
    if days is None:
        errors.append(ValidationError(code="missing_field", message="Missing required field: days", path="$.days"))
        return errors
    if not isinstance(days, list):
        errors.append(ValidationError(code="invalid_type", message="Field must be a list: days", path="$.days"))
        return errors

    for idx, day in enumerate(days):
        if not isinstance(day, dict):
            errors.append(
                ValidationError(
                    code="invalid_type",
                    message=f"Day entry must be an object, got {type(day).__name__}",
                    path=f"$.days[{idx}]",
                )
            )

    return errors
