"""Dot-notation flattening of nested mappings."""

from __future__ import annotations

from typing import Any, Iterable, List, Mapping, Sequence


class _Missing:
    """Marker for a dot-path that does not resolve."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING: Any = _Missing()

PATH_SEPARATOR = "."


def flatten_keys(value: Any, prefix: str = "") -> List[str]:
    """
    List the leaf paths of *value*.

    Nested mappings expand into ``parent.child`` paths; lists, scalars and
    ``None`` end the walk at their key. Non-mapping input has no paths.
    """
    if not isinstance(value, Mapping):
        return []

    keys: List[str] = []
    for key, child in value.items():
        full_key = f"{prefix}{PATH_SEPARATOR}{key}" if prefix else str(key)
        if isinstance(child, Mapping):
            keys.extend(flatten_keys(child, full_key))
        else:
            keys.append(full_key)
    return keys


def extract_headers(rows: Iterable[Any]) -> List[str]:
    """Union of flattened paths across *rows* in first-seen order."""

    seen: dict[str, None] = {}
    for row in rows:
        for key in flatten_keys(row):
            seen.setdefault(key, None)
    return list(seen)


def _descend(current: Any, token: str) -> Any:
    if isinstance(current, Mapping):
        return current.get(token, MISSING)
    if isinstance(current, Sequence) and not isinstance(current, (str, bytes)):
        if token.isdigit():
            index = int(token)
            if index < len(current):
                return current[index]
        return MISSING
    return MISSING


def get_nested_value(obj: Any, path: str) -> Any:
    """
    Resolve a dot-path against *obj*.

    A key spelled exactly like *path* wins over nested descent, so rows read
    back from CSV (whose keys already contain dots) resolve to themselves.
    Hitting ``None`` or a scalar before the path is exhausted yields ``MISSING``.
    """
    if isinstance(obj, Mapping) and path in obj:
        return obj[path]

    current = obj
    for token in path.split(PATH_SEPARATOR):
        if current is None or current is MISSING:
            return MISSING
        current = _descend(current, token)
    return current


def resolve_row(row: Any, headers: Sequence[str]) -> List[Any]:
    return [get_nested_value(row, header) for header in headers]


__all__ = [
    "MISSING",
    "PATH_SEPARATOR",
    "extract_headers",
    "flatten_keys",
    "get_nested_value",
    "resolve_row",
]
