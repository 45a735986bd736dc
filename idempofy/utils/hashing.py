"""Digest helpers: SHA-256/512 and their HMAC variants."""

import hashlib
import hmac
import logging
import secrets
from typing import Any, Literal

from pydantic import ValidationError

from idempofy.config import settings
from idempofy.errors import (
    IdempofyError,
    InvalidConfigurationError,
    MissingSecretKeyError,
    UnsupportedAlgorithmError,
)
from idempofy.schemas.fingerprint import HashingConfig, HashResult

logger = logging.getLogger(__name__)

# algorithm name -> (hashlib constructor name, keyed)
ALGORITHMS: dict[str, tuple[str, bool]] = {
    "sha256": ("sha256", False),
    "sha512": ("sha512", False),
    "hmac-sha256": ("sha256", True),
    "hmac-sha512": ("sha512", True),
}

RiskLevel = Literal["low", "medium", "high"]


def generate_secret_key(byte_length: int | None = None) -> str:
    """Random hex-encoded key suitable for HMAC."""
    if byte_length is None:
        byte_length = settings.generated_key_bytes
    return secrets.token_hex(byte_length)


def _as_bytes(data: str | bytes) -> bytes:
    return data.encode("utf-8") if isinstance(data, str) else data


def compute_digest(data: bytes, algorithm: str, key: bytes | None = None) -> bytes:
    """Raw digest of ``data``; keyed algorithms require ``key``."""
    if algorithm not in ALGORITHMS:
        raise UnsupportedAlgorithmError(algorithm)
    hash_name, keyed = ALGORITHMS[algorithm]
    if not keyed:
        return hashlib.new(hash_name, data).digest()
    if not key:
        raise MissingSecretKeyError(algorithm)
    return hmac.new(key, data, hash_name).digest()


def resolve_hashing_config(config: HashingConfig | dict[str, Any] | None = None) -> HashingConfig:
    """
    Fill unset hashing values from global settings.
    Caller values win over settings. A key is generated when requested
    and none was supplied.
    """
    if config is None:
        config = HashingConfig()
    elif isinstance(config, dict):
        try:
            config = HashingConfig.model_validate(config)
        except ValidationError as exc:
            raise InvalidConfigurationError(f"Malformed hashing config: {exc}") from exc

    algorithm = config.algorithm if config.algorithm is not None else settings.hash_algorithm
    algorithm = algorithm.strip().lower()
    secret_key = config.secret_key or settings.secret_key
    if not secret_key and config.generate_key:
        secret_key = generate_secret_key()
        logger.debug("Generated %d-byte secret key for %s", settings.generated_key_bytes, algorithm)

    return HashingConfig(
        algorithm=algorithm,
        secret_key=secret_key or None,
        key_id=config.key_id or settings.default_key_id,
        generate_key=config.generate_key,
    )


def digest(data: str | bytes, config: HashingConfig | dict[str, Any] | None = None) -> HashResult:
    """Hex digest of ``data`` under the resolved hashing configuration."""
    resolved = resolve_hashing_config(config)
    key = _as_bytes(resolved.secret_key) if resolved.secret_key else None
    raw = compute_digest(_as_bytes(data), resolved.algorithm, key)
    return HashResult(hash=raw.hex(), algorithm=resolved.algorithm, key_id=resolved.key_id)


def verify_digest(
    data: str | bytes,
    expected_hash: str,
    config: HashingConfig | dict[str, Any] | None = None,
) -> bool:
    """True if ``data`` hashes to ``expected_hash``; False on any hashing failure."""
    if not isinstance(expected_hash, str):
        return False
    try:
        actual = digest(data, config).hash
    except IdempofyError as exc:
        logger.debug("Digest verification failed: %s", exc)
        return False
    return hmac.compare_digest(actual.encode("utf-8"), expected_hash.encode("utf-8"))


def algorithm_collision_risk(algorithm: str) -> RiskLevel:
    """Collision risk by algorithm name."""
    if algorithm in ALGORITHMS:
        return "low"
    return "medium"
