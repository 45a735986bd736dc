"""Public fingerprinting operations."""

from typing import Any

from idempofy.engine.strategies import run_strategy
from idempofy.schemas.fingerprint import (
    FingerprintConfig,
    FingerprintResult,
    NormalizationOptions,
)
from idempofy.utils.hashing import RiskLevel


def fingerprint(
    payload: Any,
    config: FingerprintConfig | dict[str, Any] | None = None,
) -> FingerprintResult:
    """
    Fingerprint a payload. Config keys: strategy (strict, selective,
    semantic, custom; default strict), fields, transformations,
    options, hashing.
    """
    return run_strategy(payload, config)


def detailed(
    payload: Any,
    config: FingerprintConfig | dict[str, Any] | None = None,
) -> FingerprintResult:
    """Same as fingerprint(); kept for callers that want the full result by name."""
    return run_strategy(payload, config)


def quick_fingerprint(payload: Any) -> str:
    """Hex strict-strategy fingerprint."""
    return strict(payload)


def strict(payload: Any) -> str:
    return run_strategy(payload, FingerprintConfig(strategy="strict")).fingerprint


def selective(payload: Any, fields: list[str]) -> str:
    return run_strategy(payload, FingerprintConfig(strategy="selective", fields=fields)).fingerprint


def semantic(
    payload: Any,
    options: NormalizationOptions | dict[str, Any] | None = None,
) -> str:
    config = FingerprintConfig.model_validate({"strategy": "semantic", "options": options})
    return run_strategy(payload, config).fingerprint


def custom(
    payload: Any,
    fields: list[str],
    transformations: dict[str, Any] | None = None,
) -> str:
    config = FingerprintConfig(strategy="custom", fields=fields, transformations=transformations)
    return run_strategy(payload, config).fingerprint


def compare(
    payload_a: Any,
    payload_b: Any,
    config: FingerprintConfig | dict[str, Any] | None = None,
) -> bool:
    """
    True if both payloads fingerprint identically under ``config``.
    A generated HMAC key differs per call, so generate_key configs never compare equal.
    """
    return run_strategy(payload_a, config).fingerprint == run_strategy(payload_b, config).fingerprint


def collision_risk(fingerprint: str) -> RiskLevel:
    """Rough collision risk from fingerprint length alone."""
    if len(fingerprint) < 32:
        return "high"
    if len(fingerprint) < 48:
        return "medium"
    return "low"
