"""Minimal per-document shape checks run before a document is persisted.

Only the top-level structure is checked; entry fields (dates, statuses) are
left to the client. Names without a rule always pass.
"""
from __future__ import annotations
from typing import Any, Callable, Dict, Optional


def _object_with_key(label: str, key: str) -> Callable[[Any], Optional[str]]:
    def check(data: Any) -> Optional[str]:
        if not isinstance(data, dict):
            return f"{label} must be an object"
        if key not in data:
            return f"missing {key} array"
        return None
    return check


def _releases(data: Any) -> Optional[str]:
    if not isinstance(data, dict):
        return "releases.json must be an object keyed by environment"
    return None


RULES: Dict[str, Callable[[Any], Optional[str]]] = {
    "environments": _object_with_key("environments.json", "environments"),
    "releases": _releases,
    "holidays": _object_with_key("holidays.json", "holidays"),
}


def validate(name: str, data: Any) -> Optional[str]:
    """Return an error message when `data` is not acceptable for `name`."""
    rule = RULES.get(name)
    if rule is None:
        return None
    return rule(data)
