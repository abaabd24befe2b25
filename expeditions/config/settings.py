"""
Application settings.

Loads configuration from environment variables using pydantic-settings.
"""

import json
from decimal import Decimal
from typing import Any

from loguru import logger
from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from expeditions.config.constants import (
    API_DEFAULT_HOST,
    API_DEFAULT_PORT,
    DAILY_VISIT_MESSAGE,
    MIN_CLAIMABLE_USD,
    SUBGRAPH_TIMEOUT,
)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Database
    database_url: str
    database_echo: bool = False

    # Subgraphs (chain name -> GraphQL endpoint)
    subgraph_urls: dict[str, str] = Field(default_factory=dict)
    subgraph_timeout_seconds: float = Field(
        default=SUBGRAPH_TIMEOUT,
        gt=0,
        description="Timeout for a single subgraph request in seconds",
    )

    # Tasks
    min_claimable_usd: Decimal = Field(
        default=MIN_CLAIMABLE_USD,
        ge=0,
        description="Minimum weekly USD-equivalent value to claim fragments",
    )
    daily_visit_message: str = Field(
        default=DAILY_VISIT_MESSAGE,
        min_length=1,
        description="Message wallets sign on the daily-visit endpoint",
    )

    # HTTP API
    api_host: str = API_DEFAULT_HOST
    api_port: int = Field(
        default=API_DEFAULT_PORT, ge=1, le=65535, description="HTTP API port"
    )

    # Application
    environment: str = "production"
    debug: bool = False
    log_level: str = "INFO"
    log_file: str | None = "logs/expeditions.log"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("subgraph_urls", mode="before")
    @classmethod
    def parse_subgraph_urls(cls, v: Any) -> Any:
        """Accept a JSON object string for SUBGRAPH_URLS."""
        if isinstance(v, str):
            if not v.strip():
                return {}
            try:
                return json.loads(v)
            except json.JSONDecodeError as exc:
                raise ValueError(
                    "SUBGRAPH_URLS must be a JSON object, "
                    'e.g. {"gnosis": "https://..."}'
                ) from exc
        return v

    @field_validator("subgraph_urls")
    @classmethod
    def validate_subgraph_urls(cls, v: dict[str, str]) -> dict[str, str]:
        """Validate subgraph endpoints."""
        for chain, url in v.items():
            if not url.startswith(("http://", "https://")):
                raise ValueError(
                    f"Invalid subgraph URL for {chain}: {url}. "
                    "Must start with http:// or https://"
                )
        return v

    @field_validator("database_url")
    @classmethod
    def validate_database_url(cls, v: str) -> str:
        """Validate database URL."""
        if not v.startswith(
            ("postgresql://", "postgresql+asyncpg://", "sqlite+aiosqlite://")
        ):
            raise ValueError(
                "DATABASE_URL must start with postgresql://, "
                "postgresql+asyncpg:// or sqlite+aiosqlite://"
            )
        if v.startswith("postgresql://"):
            # async engine needs the asyncpg driver
            v = v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Normalize log level name."""
        level = v.upper()
        if level not in {"TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level

    @model_validator(mode="after")
    def validate_production(self) -> "Settings":
        """Validate production-specific requirements."""
        if self.environment == "production":
            if self.debug:
                raise ValueError(
                    "DEBUG must be False in production environment. "
                    "Set DEBUG=false in your .env file."
                )
            if not self.subgraph_urls:
                logger.warning(
                    "SUBGRAPH_URLS is empty: liquidity claims will find no positions"
                )
        return self


# Global settings instance
settings = Settings()
