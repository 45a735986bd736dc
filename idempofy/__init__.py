"""Deterministic JSON fingerprints for detecting duplicate business records."""

from idempofy.api import (
    collision_risk,
    compare,
    custom,
    detailed,
    fingerprint,
    quick_fingerprint,
    selective,
    semantic,
    strict,
)
from idempofy.engine.paths import (
    ABSENT,
    flatten_object,
    get_all_nested_paths,
    get_nested_value,
    get_nested_value_with_fallback,
    has_nested_value,
    parse_path,
)
from idempofy.errors import (
    HashingError,
    IdempofyError,
    InvalidConfigurationError,
    MissingFieldListError,
    MissingSecretKeyError,
    UnknownStrategyError,
    UnsupportedAlgorithmError,
)
from idempofy.schemas.fingerprint import (
    FingerprintConfig,
    FingerprintResult,
    HashingConfig,
    HashResult,
    NormalizationOptions,
)
from idempofy.utils.canonical import canonicalize, is_canonical
from idempofy.utils.hashing import (
    algorithm_collision_risk,
    digest,
    generate_secret_key,
    verify_digest,
)

__version__ = "0.1.0"

__all__ = [
    "ABSENT",
    "FingerprintConfig",
    "FingerprintResult",
    "HashResult",
    "HashingConfig",
    "HashingError",
    "IdempofyError",
    "InvalidConfigurationError",
    "MissingFieldListError",
    "MissingSecretKeyError",
    "NormalizationOptions",
    "UnknownStrategyError",
    "UnsupportedAlgorithmError",
    "algorithm_collision_risk",
    "canonicalize",
    "collision_risk",
    "compare",
    "custom",
    "detailed",
    "digest",
    "fingerprint",
    "flatten_object",
    "generate_secret_key",
    "get_all_nested_paths",
    "get_nested_value",
    "get_nested_value_with_fallback",
    "has_nested_value",
    "is_canonical",
    "parse_path",
    "quick_fingerprint",
    "selective",
    "semantic",
    "strict",
    "verify_digest",
]
