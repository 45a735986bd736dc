"""Transformation engine - derives field values from a payload using transformation operators."""

import math
import re
from collections.abc import Mapping
from decimal import Decimal
from typing import Any

from idempofy.engine.normalizer import round_half_away
from idempofy.engine.paths import ABSENT, get_nested_value
from idempofy.schemas.transformations import (
    DateTransform,
    DefaultTransform,
    ExistsTransform,
    FieldReference,
    IfTransform,
    LowerTransform,
    ReplaceTransform,
    RoundTransform,
    TransformationSpec,
    TrimTransform,
    UpperTransform,
    parse_transformation,
)
from idempofy.utils.dates import is_date_value, parse_date_string, to_iso_string


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float, Decimal)) and not isinstance(value, bool)


def _is_truthy(value: Any) -> bool:
    """JSON truthiness: containers are truthy even when empty; NaN is falsy."""
    if value is None or value is ABSENT:
        return False
    if isinstance(value, (list, tuple, Mapping)):
        return True
    if isinstance(value, float) and math.isnan(value):
        return False
    return bool(value)


def _present(value: Any) -> bool:
    return value is not ABSENT and value is not None


def _to_date_string(value: Any) -> Any:
    if is_date_value(value):
        try:
            return to_iso_string(value)
        except OverflowError:
            return value
    if isinstance(value, str):
        parsed = parse_date_string(value)
        if parsed is not None:
            return to_iso_string(parsed)
    return value


def apply_transformation(payload: Any, field: str, spec: TransformationSpec | None) -> Any:
    """Evaluate one transformation spec for ``field`` against the payload."""
    if isinstance(spec, FieldReference):
        return get_nested_value(payload, spec.path)

    if isinstance(spec, DateTransform):
        return _to_date_string(get_nested_value(payload, spec.path))

    if isinstance(spec, RoundTransform):
        val = get_nested_value(payload, field)
        return round_half_away(val, spec.precision) if _is_number(val) else val

    if isinstance(spec, LowerTransform):
        val = get_nested_value(payload, spec.path)
        return val.lower() if isinstance(val, str) else val

    if isinstance(spec, UpperTransform):
        val = get_nested_value(payload, spec.path)
        return val.upper() if isinstance(val, str) else val

    if isinstance(spec, TrimTransform):
        val = get_nested_value(payload, spec.path)
        return val.strip() if isinstance(val, str) else val

    if isinstance(spec, ReplaceTransform):
        val = get_nested_value(payload, field)
        if isinstance(val, str):
            return re.sub(spec.pattern, spec.replacement, val)
        return val

    if isinstance(spec, IfTransform):
        if _is_truthy(get_nested_value(payload, spec.condition)):
            return get_nested_value(payload, spec.then)
        if spec.otherwise:
            return get_nested_value(payload, spec.otherwise)
        return ABSENT

    if isinstance(spec, ExistsTransform):
        return _present(get_nested_value(payload, spec.path))

    if isinstance(spec, DefaultTransform):
        val = get_nested_value(payload, field)
        return val if _present(val) else spec.value

    return get_nested_value(payload, field)


def extract_fields(
    payload: Any,
    fields: list[str],
    transformations: Mapping[str, Any] | None = None,
) -> Any:
    """
    Build a flat field -> value mapping for the requested fields.
    With no fields the payload is returned unchanged.
    """
    if not fields:
        return payload

    transformations = transformations or {}
    extracted: dict[str, Any] = {}
    for field in fields:
        raw = transformations.get(field)
        if not raw:
            extracted[field] = get_nested_value(payload, field)
            continue
        extracted[field] = apply_transformation(payload, field, parse_transformation(raw, field))
    return extracted
