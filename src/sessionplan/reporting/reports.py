"""Build CLI reports."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from sessionplan.models import PlanNormalization
from sessionplan.validation import ValidationError, ValidationReport


def build_error_report(errors: list[ValidationError], code: str = "validation_error") -> dict[str, Any]:
    """Return a JSON-serializable error report."""
    return {
        "status": "error",
        "error": {
            "code": code,
            "count": len(errors),
            "details": [err.as_dict() for err in errors],
        },
    }


def build_validation_error_report(validation_report: ValidationReport) -> dict[str, Any]:
    """Error report for blocking option/plan issues, with the full report attached."""
    details = [issue.as_detail() for issue in validation_report.errors]
    return {
        "status": "error",
        "error": {"code": "validation_error", "count": len(details), "details": details},
        "validation_report": validation_report.as_dict(),
    }


def build_success_report(
    normalization: PlanNormalization,
    *,
    options: dict[str, Any],
    metrics: dict[str, Any],
    validation_report: ValidationReport,
) -> dict[str, Any]:
    """Return the normalized plan with per-day notes, metrics and validation infos."""
    generated_at = datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")
    days = []
    for day, result in zip(normalization.days, normalization.results):
        payload = day.as_dict()
        payload["totalMinutes"] = result.total_minutes
        payload["adjusted"] = result.adjusted
        payload["notes"] = list(result.notes)
        payload["adjustments"] = [dict(item) for item in result.adjustments]
        days.append(payload)

    return {
        "status": "ok",
        "plan_output": {
            "schema_version": "1.0.0",
            "generated_at": generated_at,
            "options": options,
            "days": days,
            "meta": normalization.meta.as_dict(),
            "metrics": metrics,
            "validation_report": validation_report.as_dict(),
        },
    }
