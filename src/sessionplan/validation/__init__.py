"""Validation helpers."""

from .errors import ValidationError
from .errors import ValidationReport
from .request import validate_plan_payload
from .schema_validator import validate_plan_with_schema

__all__ = [
    "ValidationError",
    "ValidationReport",
    "validate_plan_payload",
    "validate_plan_with_schema",
]
