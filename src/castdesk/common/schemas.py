"""Shared Pydantic schemas for castdesk."""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str = "0.1.0"
    service: str = "castdesk"


class ErrorResponse(BaseModel):
    error: str
    details: Optional[Any] = None


class CamelModel(BaseModel):
    """Base for API payloads: snake_case in Python, camelCase on the wire."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class PersonSummary(CamelModel):
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: str


class RelatedRef(CamelModel):
    id: str
    title: str
    status: Optional[str] = None
