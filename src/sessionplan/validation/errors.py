"""Validation models for plan and option payloads."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(slots=True)
class ValidationError:
    """One request-level problem (unreadable file, missing ``days``)."""

    code: str
    message: str
    path: str

    def as_dict(self) -> dict[str, str]:
        return {"code": self.code, "message": self.message, "path": self.path}


@dataclass(slots=True)
class ValidationIssue:
    """Option or plan-structure finding; errors block normalization, infos do not."""

    code: str
    message: str
    field_path: str
    suggested_fix: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    def as_detail(self) -> dict[str, str]:
        return {"code": self.code, "message": self.message, "path": self.field_path}

    def as_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {**self.extra, "code": self.code, "message": self.message, "field_path": self.field_path}
        if self.suggested_fix:
            payload["suggested_fix"] = self.suggested_fix
        return payload


@dataclass(slots=True)
class ValidationReport:
    """Issues collected across options and plan checks (no short-circuit)."""

    errors: list[ValidationIssue] = field(default_factory=list)
    infos: list[ValidationIssue] = field(default_factory=list)

    def add_error(self, *, code: str, message: str, field_path: str, suggested_fix: str | None = None) -> None:
        self.errors.append(ValidationIssue(code=code, message=message, field_path=field_path, suggested_fix=suggested_fix))

    def add_info(self, *, code: str, message: str, field_path: str, extra: dict[str, Any] | None = None) -> None:
        self.infos.append(ValidationIssue(code=code, message=message, field_path=field_path, extra=extra or {}))

    def absorb(self, other: "ValidationReport") -> "ValidationReport":
        self.errors += other.errors
        self.infos += other.infos
        return self

    def as_dict(self) -> dict[str, list[dict[str, Any]]]:
        return {
            "errors": [issue.as_dict() for issue in self.errors],
            "infos": [issue.as_dict() for issue in self.infos],
        }
