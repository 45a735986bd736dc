"""Configuration, result and transformation schemas."""

from idempofy.schemas.fingerprint import (
    FingerprintConfig,
    FingerprintResult,
    HashingConfig,
    HashResult,
    NormalizationOptions,
)
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

__all__ = [
    "FingerprintConfig",
    "FingerprintResult",
    "HashingConfig",
    "HashResult",
    "NormalizationOptions",
    "DateTransform",
    "DefaultTransform",
    "ExistsTransform",
    "FieldReference",
    "IfTransform",
    "LowerTransform",
    "ReplaceTransform",
    "RoundTransform",
    "TransformationSpec",
    "TrimTransform",
    "UpperTransform",
    "parse_transformation",
]
