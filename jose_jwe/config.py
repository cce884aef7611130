"""Library configuration."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from jose_jwe.core.jwa import JWEAlgorithm, JWEEncryption


class Settings(BaseSettings):
    """JWE settings loaded from environment variables (JOSE_JWE_*)."""

    model_config = SettingsConfigDict(
        env_prefix="JOSE_JWE_",
        extra="ignore",
        case_sensitive=False,
    )

    # Algorithm allowlists
    allowed_algorithms: list[str] = Field(
        default_factory=lambda: [alg.value for alg in JWEAlgorithm],
        description="Key management algorithms accepted for encode and decode",
    )
    allowed_encryptions: list[str] = Field(
        default_factory=lambda: [enc.value for enc in JWEEncryption],
        description="Content encryption algorithms accepted for encode and decode",
    )

    # Input limits
    max_token_size: int | None = Field(
        default=None,
        gt=0,
        description="Maximum compact token size in bytes (None = unlimited)",
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
