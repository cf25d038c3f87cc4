"""
Base configuration settings.

Every settings class of the scheduler derives from this one so that the
deployment environment and the log level are read and checked the same way,
whatever the env prefix of the subclass.

Dependencies: pydantic, pydantic_settings
System role: Foundation for all configuration classes
"""

import logging
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings as PydanticBaseSettings, SettingsConfigDict

Environment = Literal["development", "test", "staging", "production"]


class BaseSettings(PydanticBaseSettings):
    """Deployment environment and log level shared by all settings classes."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    environment: Environment = Field(
        default="development",
        description="Deployment environment; production hides error details and marks cookies secure",
    )
    log_level: str = Field(
        default="INFO",
        description="Root log level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )

    @field_validator("environment", mode="before")
    @classmethod
    def normalize_environment(cls, value: object) -> object:
        # "Production " and "PRODUCTION" both select production
        return value.strip().lower() if isinstance(value, str) else value

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {value!r}")
        return level

    @property
    def is_production(self) -> bool:
        """True when error responses must hide diagnostic details."""
        return self.environment == "production"
