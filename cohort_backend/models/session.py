"""
Session domain models and schemas.

Request/response schemas for cohort session operations.

Dependencies: pydantic
System role: Session API contracts
"""

import uuid
from datetime import date, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from cohort_backend.models.cohort import CohortSummary


class UpdateSessionRequest(BaseModel):
    """
    Request schema for updating one session.

    Only fields present in the body are applied; ``model_fields_set``
    distinguishes an omitted field from an explicit null or empty string.
    """

    model_config = ConfigDict(extra="ignore")

    session_date: Any = Field(None, description="New date, e.g. 2026-02-02")
    topic: str | None = None
    instructor: str | None = None
    duration_minutes: Any = Field(None, description="Non-negative whole number of minutes")
    link: str | None = None
    recording_url: str | None = None
    status: str | None = Field(None, description="scheduled, completed, cancelled or rescheduled")
    update_mode: str | None = Field(None, description="single (default) or shift")


class CohortSessionResponse(BaseModel):
    """Response schema for a session with its cohort summary."""

    id: uuid.UUID
    cohort_id: uuid.UUID
    session_number: int
    session_date: date
    topic: str | None
    instructor: str | None
    duration_minutes: int | None
    link: str | None
    recording_url: str | None
    status: str
    created_at: datetime
    updated_at: datetime
    cohort: CohortSummary | None = None


class UpdateSessionResponse(BaseModel):
    """Response schema for a session update."""

    success: bool = True
    session: CohortSessionResponse


class SessionListResponse(BaseModel):
    """Response schema for session listing."""

    sessions: list[CohortSessionResponse]


class UpdateCohortLinkRequest(BaseModel):
    """Request schema for setting one call link on every session of a cohort."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    cohort_name: str | None = Field(None, description="Cohort name")
    link: str | None = Field(None, description="Video call URL")


class UpdateCohortLinkResponse(BaseModel):
    """Response schema for a cohort-wide link update."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    success: bool = True
    message: str
    cohort_id: uuid.UUID
    sessions_updated: int
