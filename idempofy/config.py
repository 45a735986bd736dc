"""Library configuration."""

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Global defaults, overridable through IDEMPOFY_* environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="IDEMPOFY_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    default_strategy: str = "strict"
    hash_algorithm: str = "sha256"
    default_key_id: str = "default"
    secret_key: str | None = None
    generated_key_bytes: int = 32
    log_level: str = "INFO"

    @field_validator("default_strategy", "hash_algorithm", mode="after")
    @classmethod
    def normalize_name(cls, v: str) -> str:
        """Strategy and algorithm names are matched lower-case."""
        return v.strip().lower()

    @field_validator("log_level", mode="after")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        return v.strip().upper()

    @field_validator("generated_key_bytes", mode="after")
    @classmethod
    def check_key_bytes(cls, v: int) -> int:
        if v < 16:
            raise ValueError("generated_key_bytes must be at least 16")
        return v


settings = Settings()
