"""Pydantic schemas for studio account endpoints."""

from datetime import datetime
from typing import Optional

from castdesk.common.schemas import CamelModel


class StudioResponse(CamelModel):
    id: str
    name: str
    description: Optional[str] = None
    tenant_id: str
    created_at: datetime


class StudioInitResponse(CamelModel):
    message: str
    studio: StudioResponse


class StudioAccessResponse(CamelModel):
    has_access: bool = True
    studio_id: str
    studio_name: str
