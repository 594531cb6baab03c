"""
Shared helpers for value parsing and attribute access.

These are pure-Python helpers with no storage dependencies.
"""

from __future__ import annotations

import dataclasses
from typing import Any

from pydantic_core import to_jsonable_python

# ---------------------------------------------------------------------------
# Value parsing
# ---------------------------------------------------------------------------

_TRUE_STRINGS = frozenset({"true", "1", "yes"})
_FALSE_STRINGS = frozenset({"false", "0", "no"})


def parse_list_value(value: Any) -> list[Any]:
    """
    Parse a value into a list.

    Supports:
    - Python collections (list, tuple, set)
    - Comma-separated strings: ``"val1, val2"``
    - Bracketed strings: ``"[val1, val2]"``
    """
    if isinstance(value, list | tuple | set):
        return list(value)
    if isinstance(value, str):
        content = value.strip()
        if content.startswith("[") and content.endswith("]"):
            content = content[1:-1].strip()
        if not content:
            return []
        return [v.strip().strip("'").strip('"') for v in content.split(",")]
    return [value]


def parse_bool(value: Any) -> bool:
    """Parse ``true``/``false`` style values; anything else is a ValueError."""
    if isinstance(value, bool):
        return value
    low = str(value).strip().lower()
    if low in _TRUE_STRINGS:
        return True
    if low in _FALSE_STRINGS:
        return False
    raise ValueError(f"expected a boolean, got {value!r}")


def infer_scalar(value: Any) -> Any:
    """Best-effort type inference for untyped string values (int -> float -> str)."""
    if not isinstance(value, str):
        return value
    try:
        return int(value)
    except ValueError:
        pass
    try:
        return float(value)
    except ValueError:
        pass
    return value


# ---------------------------------------------------------------------------
# Attribute access
# ---------------------------------------------------------------------------


def resolve_attribute(obj: Any, attr_path: str) -> Any:
    """
    Resolve a dot-separated attribute path on *obj*.

    Supports nested attribute access (``post.id``) on objects and dicts.
    A ``None`` anywhere along the path resolves to ``None``.
    """
    for part in attr_path.split("."):
        if obj is None:
            return None
        obj = obj.get(part) if isinstance(obj, dict) else getattr(obj, part, None)
    return obj


# ---------------------------------------------------------------------------
# Serialisation
# ---------------------------------------------------------------------------


def to_jsonable(row: Any) -> Any:
    """Dump a result row: pydantic models by alias, dataclasses as dicts."""
    if hasattr(row, "model_dump"):
        return row.model_dump(mode="json", by_alias=True)
    if dataclasses.is_dataclass(row) and not isinstance(row, type):
        return to_jsonable_python(dataclasses.asdict(row))
    return to_jsonable_python(row)
