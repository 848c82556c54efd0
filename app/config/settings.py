"""
Application settings.

Loads configuration from environment variables using pydantic-settings.
"""

import re

from loguru import logger
from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from app.config.constants import (
    DEFAULT_MIN_REFERRALS_FOR_ELIGIBILITY,
    RATE_LIMIT_MAX_REQUESTS,
    RATE_LIMIT_WINDOW_SECONDS,
)


ADDRESS_PATTERN = re.compile(r"0x[a-fA-F0-9]{40}")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Network
    rpc_url: str
    rpc_backup_url: str | None = None
    chain_id: int = Field(default=1137, gt=0)
    network_name: str = "ucchain-mainnet"

    # Contracts
    contract_address: str
    usdt_contract_address: str | None = None

    # Manager wallet (may be Fernet-encrypted when ENCRYPTION_KEY is set)
    manager_private_key: str
    encryption_key: str | None = None

    # Server
    host: str = "0.0.0.0"
    port: int = Field(default=3001, ge=1, le=65535)
    environment: str = "development"

    # API
    api_prefix: str = "/api/v1"
    cors_origin: str = "http://localhost:3000"
    api_key: str | None = None

    # Eligibility requirements
    min_referrals_for_eligibility: int = Field(
        default=DEFAULT_MIN_REFERRALS_FOR_ELIGIBILITY,
        ge=0,
        description="Direct referrals required before a user can be made eligible",
    )

    # Rate limiting
    rate_limit_window_seconds: int = Field(
        default=RATE_LIMIT_WINDOW_SECONDS, gt=0
    )
    rate_limit_max_requests: int = Field(
        default=RATE_LIMIT_MAX_REQUESTS, gt=0
    )

    # Logging
    log_level: str = "INFO"
    log_dir: str = "logs"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("contract_address")
    @classmethod
    def validate_contract_address(cls, v: str) -> str:
        """Validate contract address format."""
        if not ADDRESS_PATTERN.fullmatch(v):
            raise ValueError(
                "CONTRACT_ADDRESS must be 0x followed by 40 hex characters"
            )
        return v

    @field_validator("usdt_contract_address")
    @classmethod
    def validate_usdt_address(cls, v: str | None) -> str | None:
        """Validate optional USDT contract address."""
        if v and not ADDRESS_PATTERN.fullmatch(v):
            raise ValueError(
                "USDT_CONTRACT_ADDRESS must be 0x followed by 40 hex characters"
            )
        return v or None

    @field_validator("api_prefix")
    @classmethod
    def validate_api_prefix(cls, v: str) -> str:
        """API prefix must be an absolute path without trailing slash."""
        if not v.startswith("/"):
            raise ValueError("API_PREFIX must start with '/'")
        return v.rstrip("/")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        return v.upper()

    @field_validator("api_key", "rpc_backup_url", "encryption_key")
    @classmethod
    def empty_as_none(cls, v: str | None) -> str | None:
        """Treat empty env values as unset."""
        return v or None

    @model_validator(mode="after")
    def warn_open_api(self) -> "Settings":
        """Warn when protected routes are left open in production."""
        if self.is_production and not self.api_key:
            logger.warning(
                "API_KEY is not set: protected routes are open in production"
            )
        return self

    @property
    def is_production(self) -> bool:
        return self.environment == "production"


_settings: Settings | None = None


def get_settings() -> Settings:
    """Return the process-wide settings, loading them on first use."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings
