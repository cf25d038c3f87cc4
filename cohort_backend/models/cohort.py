"""
Cohort domain models and schemas.

Request/response schemas for bulk session rearrangement. The wire format
is camelCase; request fields are loosely typed so that malformed values
reach the validators and come back as 400s with a readable message.

Dependencies: pydantic
System role: Cohort API contracts
"""

import uuid
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class RearrangeSessionsRequest(BaseModel):
    """Request schema for recomputing all session dates of a cohort."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    cohort_id: str | None = Field(None, description="Cohort UUID (preferred over name)")
    cohort_name: str | None = Field(None, description="Cohort name")
    start_date: Any = Field(None, description="Date of the first session, e.g. 2026-01-19")
    fixed_dates: dict[str, Any] | None = Field(
        None,
        description="Pinned dates keyed by session number; configured defaults apply when omitted",
    )
    dry_run: bool = Field(False, description="Compute the schedule without writing it")


class ScheduleEntry(BaseModel):
    """One session of a computed schedule."""

    session_number: int
    date: str
    day: str


class RearrangeSessionsResponse(BaseModel):
    """Response schema for a bulk rearrangement."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    success: bool = True
    message: str
    sessions_updated: int
    start_date: str
    end_date: str
    schedule: list[ScheduleEntry]
    dry_run: bool = False


class CohortSummary(BaseModel):
    """Cohort fields joined onto session responses."""

    id: uuid.UUID
    name: str
    level: str | None
    status: str
