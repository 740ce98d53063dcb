"""JSON file helpers for plans, options and reports."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any


def _load(path: str | Path) -> Any:
    return json.loads(Path(path).read_text(encoding="utf-8"))


def read_json(path: str | Path) -> dict[str, Any]:
    """Read a JSON object (options files, wrapped plans)."""
    payload = _load(path)
    if not isinstance(payload, dict):
        raise ValueError(f"JSON root must be an object: {path}")
    return payload


def read_plan_json(path: str | Path) -> dict[str, Any]:
    """Read a plan file; a bare list of days is wrapped as ``{"days": [...]}``."""
    payload = _load(path)
    if isinstance(payload, list):
        return {"days": payload}
    if not isinstance(payload, dict):
        raise ValueError(f"Plan root must be an object or a list of days: {path}")
    return payload


def write_json(path: str | Path, payload: dict[str, Any]) -> None:
    Path(path).write_text(
        json.dumps(payload, ensure_ascii=False, indent=2, sort_keys=True) + "\n",
        encoding="utf-8",
    )
