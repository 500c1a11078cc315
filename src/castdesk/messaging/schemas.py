"""Pydantic schemas for messaging and invitation endpoints."""

from datetime import datetime
from typing import Literal, Optional

from pydantic import ConfigDict, Field, StrictBool, model_validator

from castdesk.common.schemas import CamelModel, RelatedRef


class PartyResponse(CamelModel):
    """One end of a message, tagged by side, with its display fields."""
    kind: Literal["studio", "talent"]
    id: str
    name: str = ""
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None


class MessageResponse(CamelModel):
    id: str
    subject: str
    content: str
    is_read: bool
    is_archived: bool
    sender: PartyResponse
    receiver: PartyResponse
    related_to_project_id: Optional[str] = None
    related_to_casting_call_id: Optional[str] = None
    related_to_casting_call: Optional[RelatedRef] = None
    created_at: datetime
    updated_at: datetime


class MessageCreate(CamelModel):
    """Studio -> talent message. ``talentReceiverId`` and ``recipientId`` are synonyms."""
    recipient_id: Optional[str] = None
    talent_receiver_id: Optional[str] = None
    subject: str = Field(..., min_length=1, max_length=255)
    content: str = Field(..., min_length=1)
    related_to_project_id: Optional[str] = None
    related_to_casting_call_id: Optional[str] = None

    @model_validator(mode="after")
    def _require_recipient(self):
        if not (self.talent_receiver_id or self.recipient_id):
            raise ValueError("recipientId or talentReceiverId is required")
        return self

    @property
    def receiver_profile_id(self) -> str:
        return self.talent_receiver_id or self.recipient_id


class MessageUpdate(CamelModel):
    model_config = ConfigDict(extra="forbid")

    is_read: Optional[StrictBool] = None
    is_archived: Optional[StrictBool] = None


class TalentReply(CamelModel):
    recipient_id: Optional[str] = None
    original_message_id: Optional[str] = None
    subject: str = Field(..., min_length=1, max_length=255)
    content: str = Field(..., min_length=1)


class InvitationRequest(CamelModel):
    talent_ids: list[str] = Field(..., min_length=1)
    message: Optional[str] = None


class InvitationBatchResponse(CamelModel):
    success: bool = True
    invitations_sent: int
    message: str


class InvitationResponse(MessageResponse):
    has_responded: bool = False
    response_status: Optional[str] = None
    response_date: Optional[datetime] = None


class UnreadCountResponse(CamelModel):
    unread_count: int
