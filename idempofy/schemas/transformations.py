"""Field transformation operators.

Each operator is its own model; a transformation spec is exactly one of
them. Raw specs use the ``$``-prefixed operator syntax::

    "user.email"                                   # direct field reference
    {"$date": "created_at"}
    {"$round": 2}
    {"$lower": "email"} / {"$upper": ...} / {"$trim": ...}
    {"$replace": {"from": "-", "to": ""}}
    {"$if": {"condition": "is_refund", "then": "refund_id", "else": "id"}}
    {"$exists": "coupon"}
    {"$default": 0}
"""

import logging
import re
from collections.abc import Mapping
from typing import Any, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from idempofy.errors import InvalidConfigurationError

logger = logging.getLogger(__name__)


class _Operator(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)


class FieldReference(_Operator):
    """Resolve another path of the payload as-is."""

    path: str


class DateTransform(_Operator):
    """Resolve a path and render dates as ISO-8601 UTC."""

    path: str


class RoundTransform(_Operator):
    """Round the field's own numeric value."""

    precision: int


class LowerTransform(_Operator):
    path: str


class UpperTransform(_Operator):
    path: str


class TrimTransform(_Operator):
    path: str


class ReplaceTransform(_Operator):
    """Replace every match of a regex pattern in the field's own value."""

    pattern: str = Field(alias="from")
    replacement: str = Field(alias="to")

    @field_validator("pattern")
    @classmethod
    def compile_pattern(cls, v: str) -> str:
        try:
            re.compile(v)
        except re.error as exc:
            raise ValueError(f"invalid pattern: {exc}") from exc
        return v


class IfTransform(_Operator):
    """Pick ``then`` or ``else`` path depending on the ``condition`` path."""

    condition: str
    then: str
    otherwise: str | None = Field(default=None, alias="else")


class ExistsTransform(_Operator):
    path: str


class DefaultTransform(_Operator):
    """The field's own value, or ``value`` when it is missing or null."""

    value: Any = None


TransformationSpec = Union[
    FieldReference,
    DateTransform,
    RoundTransform,
    LowerTransform,
    UpperTransform,
    TrimTransform,
    ReplaceTransform,
    IfTransform,
    ExistsTransform,
    DefaultTransform,
]

_SPEC_TYPES = (
    FieldReference,
    DateTransform,
    RoundTransform,
    LowerTransform,
    UpperTransform,
    TrimTransform,
    ReplaceTransform,
    IfTransform,
    ExistsTransform,
    DefaultTransform,
)


def _build(tag: str, field: str | None, factory, *args, **kwargs) -> TransformationSpec:
    try:
        return factory(*args, **kwargs)
    except (ValidationError, TypeError) as exc:
        raise InvalidConfigurationError(
            f"Malformed {tag} transformation for field {field!r}: {exc}"
        ) from exc


def parse_transformation(raw: Any, field: str | None = None) -> TransformationSpec | None:
    """
    Convert a raw transformation spec into its operator model.
    Returns None for empty or unrecognized specs; callers fall back to a
    plain lookup of the field path in that case.
    """
    if raw is None:
        return None
    if isinstance(raw, _SPEC_TYPES):
        return raw
    if isinstance(raw, str):
        return FieldReference(path=raw) if raw else None
    if not isinstance(raw, Mapping):
        logger.warning("Unrecognized transformation for field %r; using plain path lookup", field)
        return None

    if "$date" in raw:
        return _build("$date", field, DateTransform, path=raw["$date"])
    if "$round" in raw:
        return _build("$round", field, RoundTransform, precision=raw["$round"])
    if "$lower" in raw:
        return _build("$lower", field, LowerTransform, path=raw["$lower"])
    if "$upper" in raw:
        return _build("$upper", field, UpperTransform, path=raw["$upper"])
    if "$trim" in raw:
        return _build("$trim", field, TrimTransform, path=raw["$trim"])
    if "$replace" in raw:
        return _build("$replace", field, ReplaceTransform.model_validate, raw["$replace"])
    if "$if" in raw:
        return _build("$if", field, IfTransform.model_validate, raw["$if"])
    if "$exists" in raw:
        return _build("$exists", field, ExistsTransform, path=raw["$exists"])
    if "$default" in raw:
        return DefaultTransform(value=raw["$default"])

    if raw:
        logger.warning("Unrecognized transformation for field %r; using plain path lookup", field)
    return None
