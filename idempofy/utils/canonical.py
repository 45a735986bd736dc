"""Canonical JSON (RFC 8785 style) serialization."""

import json
import math
import re
from collections.abc import Mapping
from decimal import Decimal
from typing import Any

CIRCULAR_MARKER = "[Circular]"

# Largest integer a double represents exactly; anything wider is formatted as a double.
_MAX_SAFE_INTEGER = 2**53 - 1

_LONE_SURROGATE = re.compile("[\ud800-\udfff]")


def _reject_constant(name: str) -> Any:
    raise ValueError(f"{name} is not valid JSON")


def format_number(value: int | float | Decimal) -> str:
    """
    Render a number in ECMAScript shortest form.
    Non-finite values and values that overflow a double render as null.
    """
    if isinstance(value, int) and -_MAX_SAFE_INTEGER <= value <= _MAX_SAFE_INTEGER:
        return str(value)
    try:
        number = float(value)
    except (OverflowError, ValueError):
        return "null"
    if not math.isfinite(number):
        return "null"
    if number == 0:
        return "0"

    sign, digit_tuple, exponent = Decimal(repr(number)).normalize().as_tuple()
    digits = "".join(str(d) for d in digit_tuple)
    k = len(digits)
    # value == 0.<digits> * 10**n
    n = exponent + k
    prefix = "-" if sign else ""

    if k <= n <= 21:
        return prefix + digits + "0" * (n - k)
    if 0 < n <= 21:
        return prefix + digits[:n] + "." + digits[n:]
    if -6 < n <= 0:
        return prefix + "0." + "0" * -n + digits

    e = n - 1
    exp = f"e{'+' if e >= 0 else '-'}{abs(e)}"
    if k == 1:
        return prefix + digits + exp
    return prefix + digits[0] + "." + digits[1:] + exp


def format_string(value: str) -> str:
    """JSON string literal with minimal escaping and no ASCII folding."""
    encoded = json.dumps(value, ensure_ascii=False)
    return _LONE_SURROGATE.sub(lambda m: f"\\u{ord(m.group()):04x}", encoded)


def _canonical(value: Any, visiting: set[int]) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float, Decimal)):
        return format_number(value)
    if isinstance(value, str):
        return format_string(value)

    if isinstance(value, (list, tuple)):
        if id(value) in visiting:
            return format_string(CIRCULAR_MARKER)
        visiting.add(id(value))
        try:
            return "[" + ",".join(_canonical(v, visiting) for v in value) + "]"
        finally:
            visiting.discard(id(value))

    if isinstance(value, Mapping):
        if id(value) in visiting:
            return format_string(CIRCULAR_MARKER)
        visiting.add(id(value))
        try:
            items = sorted(((str(k), v) for k, v in value.items()), key=lambda kv: kv[0])
            pairs = [format_string(k) + ":" + _canonical(v, visiting) for k, v in items]
            return "{" + ",".join(pairs) + "}"
        finally:
            visiting.discard(id(value))

    # Not representable in the JSON value model (dates, sets, the ABSENT sentinel, ...)
    return "null"


def canonicalize(value: Any) -> str:
    """Produce canonical JSON string (sorted keys, no whitespace, fixed number format)."""
    return _canonical(value, set())


def canonical_bytes(value: Any) -> bytes:
    """Canonical JSON as UTF-8 bytes."""
    return canonicalize(value).encode("utf-8")


def is_canonical(text: str) -> bool:
    """True if re-parsing and re-canonicalizing ``text`` reproduces it byte for byte."""
    if not isinstance(text, str):
        return False
    try:
        parsed = json.loads(text, parse_constant=_reject_constant)
    except ValueError:
        return False
    return canonicalize(parsed) == text
