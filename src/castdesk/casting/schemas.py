"""Pydantic schemas for casting call and application endpoints."""

from datetime import datetime
from typing import Literal, Optional

from pydantic import Field

from castdesk.common.schemas import CamelModel, PersonSummary

CastingCallStatus = Literal["OPEN", "CLOSED", "FILLED"]
ApplicationStatus = Literal["PENDING", "APPROVED", "REJECTED"]


class CastingCallCreate(CamelModel):
    title: str = Field(..., min_length=3, max_length=255)
    description: str = Field(..., min_length=10)
    requirements: Optional[str] = None
    compensation: Optional[str] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    location_id: Optional[str] = None
    project_id: Optional[str] = None
    skill_ids: list[str] = []


class CastingCallUpdate(CamelModel):
    """Partial update; ``skill_ids`` replaces the whole skill set."""
    title: Optional[str] = Field(None, min_length=3, max_length=255)
    description: Optional[str] = Field(None, min_length=10)
    requirements: Optional[str] = None
    compensation: Optional[str] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    status: Optional[CastingCallStatus] = None
    location_id: Optional[str] = None
    project_id: Optional[str] = None
    skill_ids: Optional[list[str]] = None


class TagResponse(CamelModel):
    id: str
    name: str


class ApplicationResponse(CamelModel):
    id: str
    status: str
    message: Optional[str] = None
    profile_id: str
    casting_call_id: str
    casting_call_title: Optional[str] = None
    applicant: Optional[PersonSummary] = None
    created_at: datetime
    updated_at: datetime


class CastingCallResponse(CamelModel):
    id: str
    title: str
    description: str
    requirements: Optional[str] = None
    compensation: Optional[str] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    status: str
    studio_id: str
    project_id: Optional[str] = None
    location: Optional[TagResponse] = None
    skills: list[TagResponse] = []
    application_count: int = 0
    created_at: datetime
    updated_at: datetime


class CastingCallDetail(CastingCallResponse):
    applications: list[ApplicationResponse] = []


class ApplicationUpdate(CamelModel):
    status: ApplicationStatus
    message: Optional[str] = None


class ApplyRequest(CamelModel):
    message: str = Field(..., min_length=10, max_length=1000)


class SuccessResponse(CamelModel):
    success: bool = True
