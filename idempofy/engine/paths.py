"""Nested field access by dot path with bracketed array indices (e.g. items[0].id)."""

import re
from collections.abc import Mapping
from typing import Any

# None is a bracket segment without a leading integer; it never resolves.
PathKey = str | int | None

_LEADING_INT = re.compile(r"\s*([+-]?[0-9]+)")


class _Absent:
    """Marker for a path that does not resolve. Distinct from None (JSON null)."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "ABSENT"

    def __bool__(self) -> bool:
        return False


ABSENT: Any = _Absent()


def _bracket_index(text: str) -> int | None:
    """Leading decimal integer of ``text``: "1_0" -> 1, " 2" -> 2, "x" -> None."""
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else None


def parse_path(expression: str) -> list[PathKey]:
    """
    Split a path expression into keys.
    "user.address.street" -> ["user", "address", "street"]
    "items[0].product.id" -> ["items", 0, "product", "id"]
    Never fails; malformed brackets degrade to best-effort boundaries.
    """
    keys: list[PathKey] = []
    current = ""
    in_brackets = False

    for char in expression:
        if char == "[":
            if current:
                keys.append(current)
            current = ""
            in_brackets = True
        elif char == "]":
            if in_brackets:
                keys.append(_bracket_index(current))
                current = ""
                in_brackets = False
        elif char == ".":
            if current:
                keys.append(current)
            current = ""
        else:
            current += char

    if current:
        keys.append(current)
    return keys


def evaluate(value: Any, keys: list[PathKey]) -> Any:
    """Walk ``keys`` into ``value``. Returns ABSENT if any step does not resolve."""
    current = value
    for key in keys:
        if current is None or current is ABSENT:
            return ABSENT
        if isinstance(current, (list, tuple)):
            if isinstance(key, int) and 0 <= key < len(current):
                current = current[key]
            else:
                return ABSENT
        elif isinstance(current, Mapping):
            if isinstance(key, str) and key in current:
                current = current[key]
            else:
                return ABSENT
        else:
            return ABSENT
    return current


def get_nested_value(value: Any, expression: str) -> Any:
    """Resolve a path expression against ``value``. Empty expressions are ABSENT."""
    if not expression:
        return ABSENT
    return evaluate(value, parse_path(expression))


def get_nested_value_with_fallback(value: Any, expression: str) -> Any:
    """
    Like get_nested_value, but when the nested lookup is ABSENT and the
    expression contains a dot, try it as one literal top-level key
    ({"a.b": 1}). The nested interpretation always wins when both exist.
    """
    result = get_nested_value(value, expression)
    if result is not ABSENT:
        return result
    if "." in expression and isinstance(value, Mapping):
        return value.get(expression, ABSENT)
    return ABSENT


def exists(value: Any, keys: list[PathKey]) -> bool:
    return evaluate(value, keys) is not ABSENT


def has_nested_value(value: Any, expression: str) -> bool:
    return get_nested_value(value, expression) is not ABSENT


def extract_nested_values(value: Any, expressions: list[str]) -> dict[str, Any]:
    """Map each expression that resolves to its value; unresolved ones are omitted."""
    result: dict[str, Any] = {}
    for expression in expressions:
        found = get_nested_value(value, expression)
        if found is not ABSENT:
            result[expression] = found
    return result


def flatten_object(value: Mapping, prefix: str = "") -> dict[str, Any]:
    """Flatten nested mappings into dotted keys. Lists are leaves; empty mappings vanish."""
    result: dict[str, Any] = {}
    for key, item in value.items():
        path = f"{prefix}.{key}" if prefix else str(key)
        if isinstance(item, Mapping):
            result.update(flatten_object(item, path))
        else:
            result[path] = item
    return result


def get_all_nested_paths(value: Mapping, prefix: str = "") -> list[str]:
    """Every path in ``value``, depth-first, including a[0]-style element paths."""
    paths: list[str] = []
    for key, item in value.items():
        path = f"{prefix}.{key}" if prefix else str(key)
        paths.append(path)
        if isinstance(item, Mapping):
            paths.extend(get_all_nested_paths(item, path))
        elif isinstance(item, (list, tuple)):
            for index, element in enumerate(item):
                element_path = f"{path}[{index}]"
                if isinstance(element, Mapping):
                    paths.extend(get_all_nested_paths(element, element_path))
                else:
                    paths.append(element_path)
    return paths
