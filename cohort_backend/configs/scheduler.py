"""
Scheduler configuration settings.

Weekly teaching pattern and pinned session dates used by the bulk
rearrangement engine when a request does not supply its own.

Dependencies: pydantic, pydantic_settings
System role: Scheduling policy configuration
"""

from datetime import date

from pydantic import Field, field_validator
from pydantic_settings import SettingsConfigDict

from cohort_backend.configs.base import BaseSettings
from cohort_backend.core.date_parsing import SUNDAY, weekday_from_name


class SchedulerSettings(BaseSettings):
    """Session scheduling configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="SCHEDULER_",
        case_sensitive=False,
        extra="ignore",
    )

    working_days: list[str] = Field(
        default_factory=lambda: ["monday", "wednesday", "friday"],
        description="Weekdays sessions rotate through, in weekly order (JSON list)",
    )
    fixed_session_dates: dict[int, date] = Field(
        default_factory=dict,
        description="Pinned dates by session number (JSON object, e.g. {\"4\": \"2026-01-26\"})",
    )

    @field_validator("working_days")
    @classmethod
    def validate_working_days(cls, value: list[str]) -> list[str]:
        if not value:
            raise ValueError("working_days must contain at least one weekday")

        weekdays = [weekday_from_name(name) for name in value]
        if SUNDAY in weekdays:
            raise ValueError("Sunday can never be a working day")
        if len(set(weekdays)) != len(weekdays):
            raise ValueError("working_days must not repeat a weekday")
        return [name.strip().lower() for name in value]

    @property
    def working_weekdays(self) -> tuple[int, ...]:
        """Working days as sorted ``date.weekday()`` numbers (Monday = 0)."""
        return tuple(sorted(weekday_from_name(name) for name in self.working_days))
