"""Value normalization ahead of canonical serialization."""

import json
import math
from collections.abc import Mapping
from decimal import ROUND_HALF_UP, Decimal, localcontext
from typing import Any

from idempofy.engine.paths import ABSENT
from idempofy.schemas.fingerprint import NormalizationOptions
from idempofy.utils.canonical import CIRCULAR_MARKER, canonicalize
from idempofy.utils.dates import is_date_value, to_iso_string


def round_half_away(value: int | float | Decimal, precision: int) -> int | float | Decimal:
    """
    Round to ``precision`` decimal places, halves away from zero,
    computed as round(x * 10**p) / 10**p.
    """
    if isinstance(value, int) and precision >= 0:
        return value
    if isinstance(value, Decimal):
        if not value.is_finite():
            return value
        with localcontext() as ctx:
            # room for every integer digit plus the kept decimals
            ctx.prec = max(ctx.prec, value.adjusted() + precision + 2)
            return value.quantize(Decimal(1).scaleb(-precision), rounding=ROUND_HALF_UP)
    try:
        if not math.isfinite(value):
            return value
        factor = 10**precision
        scaled = abs(value) * factor
        if not math.isfinite(scaled):
            return value
        return math.copysign(math.floor(scaled + 0.5) / factor, value)
    except OverflowError:
        # too large to scale as a float; there are no fractional digits left to round
        return value


def normalize_value(
    value: Any,
    options: NormalizationOptions | None = None,
    _visiting: set[int] | None = None,
) -> Any:
    """
    Apply ``options`` over a whole value tree. Returns ABSENT for values
    that are dropped. A container met again on the current descent path
    is replaced by the "[Circular]" marker.
    """
    if options is None:
        options = NormalizationOptions()
    if _visiting is None:
        _visiting = set()

    if value is None or value is ABSENT:
        return ABSENT if options.exclude_nulls else None

    if isinstance(value, bool):
        return value

    if isinstance(value, str):
        if options.exclude_empty_strings and value == "":
            return ABSENT
        if options.trim_strings:
            value = value.strip()
        if options.case_sensitive is False:
            value = value.lower()
        return value

    if isinstance(value, (int, float, Decimal)):
        if options.precision is not None:
            return round_half_away(value, options.precision)
        return value

    if is_date_value(value):
        if not options.normalize_dates:
            return value
        try:
            return to_iso_string(value)
        except OverflowError:
            # out of range in UTC; serialized as null
            return value

    if isinstance(value, (list, tuple, Mapping)):
        if id(value) in _visiting:
            return CIRCULAR_MARKER
        _visiting.add(id(value))
        try:
            if isinstance(value, Mapping):
                return _normalize_mapping(value, options, _visiting)
            items = (normalize_value(item, options, _visiting) for item in value)
            return [item for item in items if item is not ABSENT]
        finally:
            _visiting.discard(id(value))

    return value


def _normalize_mapping(value: Mapping, options: NormalizationOptions, visiting: set[int]) -> dict:
    keys = list(value.keys())
    if options.sort_keys:
        keys.sort(key=str)

    normalized: dict[str, Any] = {}
    for key in keys:
        name = str(key)
        if options.case_sensitive is False:
            # Keys differing only by case collapse; the last one wins.
            name = name.lower()
        item = normalize_value(value[key], options, visiting)
        if item is not ABSENT:
            normalized[name] = item
    return normalized


def _plain_default(value: Any) -> Any:
    return None


def _plain_value(value: Any) -> Any:
    """Numbers as JSON can carry them: Decimals as floats, non-finite as null."""
    if isinstance(value, Mapping):
        return {str(key): _plain_value(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_plain_value(item) for item in value]
    if isinstance(value, Decimal):
        value = float(value)
    if isinstance(value, float) and not math.isfinite(value):
        return None
    return value


def create_deterministic_string(value: Any, options: NormalizationOptions | None = None) -> str:
    """
    Normalize, then serialize. Canonical form is on unless
    ``use_canonical_form`` is explicitly False, in which case plain
    insertion-ordered JSON is produced.
    """
    if options is None:
        options = NormalizationOptions()
    normalized = normalize_value(value, options)
    if options.use_canonical_form is not False:
        return canonicalize(normalized)
    return json.dumps(
        None if normalized is ABSENT else _plain_value(normalized),
        separators=(",", ":"),
        ensure_ascii=False,
        allow_nan=False,
        default=_plain_default,
    )
