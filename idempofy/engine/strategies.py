"""Fingerprinting strategies - extract, normalize, canonicalize and hash a payload."""

import logging
from collections.abc import Callable, Mapping
from typing import Any

from idempofy.config import settings
from idempofy.engine.normalizer import create_deterministic_string
from idempofy.engine.transformations import extract_fields
from idempofy.errors import MissingFieldListError, UnknownStrategyError
from idempofy.schemas.fingerprint import (
    FingerprintConfig,
    FingerprintResult,
    NormalizationOptions,
)
from idempofy.utils.dates import (
    is_date_value,
    looks_like_iso_timestamp,
    parse_date_string,
    to_iso_string,
)
from idempofy.utils.hashing import digest

logger = logging.getLogger(__name__)

GLOBAL_DEFAULT_OPTIONS = NormalizationOptions(use_canonical_form=True)

STRATEGY_DEFAULT_OPTIONS: dict[str, NormalizationOptions] = {
    "strict": NormalizationOptions(
        normalize_dates=True,
        sort_keys=True,
        exclude_nulls=False,
        trim_strings=True,
        case_sensitive=False,
    ),
    "selective": NormalizationOptions(
        normalize_dates=True,
        sort_keys=True,
        exclude_nulls=True,
        trim_strings=True,
        case_sensitive=False,
    ),
    "semantic": NormalizationOptions(
        normalize_dates=True,
        sort_keys=True,
        exclude_nulls=True,
        exclude_empty_strings=True,
        trim_strings=True,
        case_sensitive=False,
        precision=2,
    ),
    "custom": NormalizationOptions(
        normalize_dates=True,
        sort_keys=True,
        exclude_nulls=True,
        trim_strings=True,
        case_sensitive=False,
    ),
}

TIMESTAMP_HINTS = ("timestamp", "time", "date")


def _set_values(options: NormalizationOptions | dict[str, Any] | None) -> dict[str, Any]:
    if options is None:
        return {}
    if isinstance(options, dict):
        options = NormalizationOptions.model_validate(options)
    return options.model_dump(exclude_none=True)


def resolve_normalization_options(
    strategy: str,
    overrides: NormalizationOptions | dict[str, Any] | None = None,
) -> NormalizationOptions:
    """
    Merge options in one step. Precedence, highest first:
    caller overrides, the strategy's defaults, global defaults.
    """
    if strategy not in STRATEGY_DEFAULT_OPTIONS:
        raise UnknownStrategyError(strategy)
    merged = _set_values(GLOBAL_DEFAULT_OPTIONS)
    merged.update(_set_values(STRATEGY_DEFAULT_OPTIONS[strategy]))
    merged.update(_set_values(overrides))
    return NormalizationOptions(**merged)


def _top_level_keys(payload: Any) -> list[str]:
    if isinstance(payload, Mapping):
        return [str(k) for k in payload.keys()]
    return []


def _require_fields(strategy: str, config: FingerprintConfig) -> list[str]:
    if not config.fields:
        raise MissingFieldListError(strategy)
    return list(config.fields)


def _hash_into_result(
    strategy: str,
    data: Any,
    config: FingerprintConfig,
    included_fields: list[str],
    warnings: list[str] | None = None,
) -> FingerprintResult:
    options = resolve_normalization_options(strategy, config.options)
    canonical = create_deterministic_string(data, options)
    hashed = digest(canonical, config.hashing)
    logger.debug(
        "Computed %s fingerprint: %d fields, %d canonical chars, %s",
        strategy,
        len(included_fields),
        len(canonical),
        hashed.algorithm,
    )
    return FingerprintResult(
        fingerprint=hashed.hash,
        strategy=strategy,
        included_fields=included_fields,
        algorithm=hashed.algorithm,
        key_id=hashed.key_id,
        warnings=warnings or [],
    )


def strict_strategy(payload: Any, config: FingerprintConfig) -> FingerprintResult:
    """Whole payload, nulls kept."""
    return _hash_into_result("strict", payload, config, _top_level_keys(payload))


def selective_strategy(payload: Any, config: FingerprintConfig) -> FingerprintResult:
    """Only the listed fields, nulls dropped."""
    fields = _require_fields("selective", config)
    extracted = extract_fields(payload, fields, config.transformations)
    return _hash_into_result("selective", extracted, config, fields)


def _preprocess_dates(value: Any, visiting: set[int]) -> Any:
    """Render date objects and ISO timestamp strings in one canonical ISO form."""
    if value is None:
        return value
    if is_date_value(value):
        try:
            return to_iso_string(value)
        except OverflowError:
            return value
    if isinstance(value, str):
        if looks_like_iso_timestamp(value):
            return to_iso_string(parse_date_string(value))
        return value
    if isinstance(value, (list, tuple, Mapping)):
        if id(value) in visiting:
            # left as-is; the normalizer cuts the cycle
            return value
        visiting.add(id(value))
        try:
            if isinstance(value, Mapping):
                return {k: _preprocess_dates(v, visiting) for k, v in value.items()}
            return [_preprocess_dates(v, visiting) for v in value]
        finally:
            visiting.discard(id(value))
    return value


def _semantic_warnings(payload: Any) -> list[str]:
    warnings: list[str] = []
    if not isinstance(payload, Mapping):
        return warnings
    keys = _top_level_keys(payload)
    if not keys:
        warnings.append("Empty object may not provide sufficient uniqueness")
    timestamp_fields = [k for k in keys if any(hint in k.lower() for hint in TIMESTAMP_HINTS)]
    if timestamp_fields:
        warnings.append(
            f"Timestamp fields detected: {', '.join(timestamp_fields)}. "
            "Consider using selective strategy for better control."
        )
    return warnings


def semantic_strategy(payload: Any, config: FingerprintConfig) -> FingerprintResult:
    """Whole payload with business-level normalization; dates in any form compare equal."""
    warnings = _semantic_warnings(payload)
    for warning in warnings:
        logger.warning("Semantic fingerprint advisory: %s", warning)
    preprocessed = _preprocess_dates(payload, set())
    return _hash_into_result("semantic", preprocessed, config, _top_level_keys(payload), warnings)


def custom_strategy(payload: Any, config: FingerprintConfig) -> FingerprintResult:
    """Listed fields, each optionally derived through a transformation."""
    fields = _require_fields("custom", config)
    extracted = extract_fields(payload, fields, config.transformations)
    return _hash_into_result("custom", extracted, config, fields)


STRATEGIES: dict[str, Callable[[Any, FingerprintConfig], FingerprintResult]] = {
    "strict": strict_strategy,
    "selective": selective_strategy,
    "semantic": semantic_strategy,
    "custom": custom_strategy,
}


def run_strategy(
    payload: Any,
    config: FingerprintConfig | dict[str, Any] | None = None,
) -> FingerprintResult:
    """Dispatch to the configured strategy (settings default when unset)."""
    if config is None:
        config = FingerprintConfig()
    elif isinstance(config, dict):
        config = FingerprintConfig.model_validate(config)

    name = config.strategy or settings.default_strategy
    strategy = STRATEGIES.get(name)
    if strategy is None:
        raise UnknownStrategyError(name)
    return strategy(payload, config)
