"""
Administrator session configuration.

Dependencies: pydantic, pydantic_settings
System role: Signing parameters for administrator session tokens
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from cohort_backend.configs.base import BaseSettings


class AuthSettings(BaseSettings):
    """Administrator session token configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="ADMIN_",
        case_sensitive=False,
        extra="ignore",
    )

    secret_key: str = Field(default="change-me", description="Secret used to sign session tokens")
    session_salt: str = Field(default="admin-session", description="Serializer salt")
    session_max_age_seconds: int = Field(
        default=8 * 60 * 60,
        description="Maximum token age before re-login is required",
    )
    cookie_name: str = Field(default="admin_session", description="Session cookie name")
