"""JSON schema validation for session plan payloads.

Only the plan structure (days and activity containers) is checked; activity
fields are left to the normalizer and options to the options resolver.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from .errors import ValidationReport

SCHEMA_DIR = Path(__file__).resolve().parents[1] / "schema"
PLAN_SCHEMA_FILE = "session_plan.schema.json"


def validate_plan_with_schema(payload: dict[str, Any]) -> ValidationReport:
    report = ValidationReport()
    schema = json.loads((SCHEMA_DIR / PLAN_SCHEMA_FILE).read_text(encoding="utf-8"))
    _validate_node(value=payload, schema=schema, path="$", report=report)
    return report


def _validate_node(*, value: Any, schema: dict[str, Any], path: str, report: ValidationReport) -> None:
    expected_type = schema.get("type")
    if expected_type and not _matches_type(value, expected_type):
        report.add_error(
            code="INVALID_TYPE",
            message=f"Expected type {expected_type}, got {type(value).__name__}",
            field_path=path,
        )
        return

    if isinstance(value, dict):
        for key in schema.get("required", []):
            if key not in value:
                report.add_error(
                    code="MISSING_REQUIRED_FIELD",
                    message=f"Missing required field: {key}",
                    field_path=f"{path}.{key}",
                )
        for key, prop_schema in schema.get("properties", {}).items():
            if key in value:
                _validate_node(value=value[key], schema=prop_schema, path=f"{path}.{key}", report=report)

    elif isinstance(value, list):
        items_schema = schema.get("items")
        if isinstance(items_schema, dict):
            for idx, item in enumerate(value):
                _validate_node(value=item, schema=items_schema, path=f"{path}[{idx}]", report=report)

    elif isinstance(value, int) and not isinstance(value, bool):
        minimum = schema.get("minimum")
        if minimum is not None and value < minimum:
            report.add_error(code="OUT_OF_RANGE", message=f"Value must be >= {minimum}", field_path=path)


def _matches_type(value: Any, expected_type: str) -> bool:
    return {
        "object": isinstance(value, dict),
        "array": isinstance(value, list),
        "string": isinstance(value, str),
        "integer": isinstance(value, int) and not isinstance(value, bool),
        "number": isinstance(value, (int, float)) and not isinstance(value, bool),
        "boolean": isinstance(value, bool),
    }.get(expected_type, True)
