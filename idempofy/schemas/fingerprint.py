"""Fingerprint configuration and result schemas."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from idempofy.schemas.transformations import parse_transformation


class CamelModel(BaseModel):
    """Accepts both snake_case names and their camelCase aliases."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


class NormalizationOptions(CamelModel):
    """Value-level normalization switches. None means "not set"."""

    normalize_dates: bool | None = None
    precision: int | None = None
    exclude_nulls: bool | None = None
    exclude_empty_strings: bool | None = None
    sort_keys: bool | None = None
    trim_strings: bool | None = None
    case_sensitive: bool | None = None
    use_canonical_form: bool | None = None


class HashingConfig(CamelModel):
    """Hashing algorithm and key material."""

    algorithm: str | None = None
    secret_key: str | bytes | None = Field(default=None, repr=False)
    key_id: str | None = None
    generate_key: bool = False


class HashResult(CamelModel):
    """Digest produced for one piece of data."""

    hash: str
    algorithm: str
    key_id: str | None = None


class FingerprintConfig(CamelModel):
    """Per-call fingerprinting configuration."""

    strategy: str | None = None
    fields: list[str] = Field(default_factory=list)
    transformations: dict[str, Any] = Field(default_factory=dict)
    options: NormalizationOptions | None = None
    hashing: HashingConfig | None = None

    @field_validator("fields", mode="before")
    @classmethod
    def none_fields_to_empty(cls, v: Any) -> Any:
        return [] if v is None else v

    @field_validator("transformations", mode="before")
    @classmethod
    def parse_transformations(cls, v: Any) -> Any:
        """Turn raw operator dicts into transformation spec models."""
        if v is None:
            return {}
        if not isinstance(v, dict):
            return v
        return {field: parse_transformation(spec, field) for field, spec in v.items()}


class FingerprintResult(CamelModel):
    """Outcome of one fingerprinting call."""

    fingerprint: str
    strategy: str
    included_fields: list[str] = Field(default_factory=list)
    algorithm: str
    key_id: str | None = None
    warnings: list[str] = Field(default_factory=list)
