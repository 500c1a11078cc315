"""SQLAlchemy model for studio/talent messages.

A message runs studio -> talent or talent -> studio. The four side-specific
foreign keys keep referential integrity in the store; ``sender`` and
``receiver`` expose them as tagged ``Party`` values.
"""

from dataclasses import dataclass
from typing import Literal

from sqlalchemy import Boolean, CheckConstraint, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from castdesk.accounts.models import ProfileModel, StudioModel
from castdesk.casting.models import CastingCallModel
from castdesk.common.models import Base, TimestampMixin, generate_uuid

PartyKind = Literal["studio", "talent"]

_ONE_DIRECTION = (
    "(studio_sender_id IS NOT NULL AND talent_receiver_id IS NOT NULL"
    " AND talent_sender_id IS NULL AND studio_receiver_id IS NULL)"
    " OR "
    "(talent_sender_id IS NOT NULL AND studio_receiver_id IS NOT NULL"
    " AND studio_sender_id IS NULL AND talent_receiver_id IS NULL)"
)


@dataclass(frozen=True)
class Party:
    kind: PartyKind
    id: str


class MessageModel(Base, TimestampMixin):
    __tablename__ = "messages"
    __table_args__ = (
        CheckConstraint(_ONE_DIRECTION, name="ck_message_one_direction"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_uuid)
    subject: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    content: Mapped[str] = mapped_column(Text, nullable=False)
    is_read: Mapped[bool] = mapped_column(Boolean, default=False, index=True)
    is_archived: Mapped[bool] = mapped_column(Boolean, default=False)

    studio_sender_id: Mapped[str | None] = mapped_column(
        String(36), ForeignKey("studios.id", ondelete="CASCADE"), nullable=True, index=True
    )
    talent_sender_id: Mapped[str | None] = mapped_column(
        String(36), ForeignKey("profiles.id", ondelete="CASCADE"), nullable=True, index=True
    )
    studio_receiver_id: Mapped[str | None] = mapped_column(
        String(36), ForeignKey("studios.id", ondelete="CASCADE"), nullable=True, index=True
    )
    talent_receiver_id: Mapped[str | None] = mapped_column(
        String(36), ForeignKey("profiles.id", ondelete="CASCADE"), nullable=True, index=True
    )

    # Projects live outside this service; the id is kept as an opaque tag.
    related_to_project_id: Mapped[str | None] = mapped_column(String(36), nullable=True)
    related_to_casting_call_id: Mapped[str | None] = mapped_column(
        String(36), ForeignKey("casting_calls.id", ondelete="SET NULL"), nullable=True, index=True
    )

    studio_sender: Mapped["StudioModel | None"] = relationship(foreign_keys=[studio_sender_id])
    talent_sender: Mapped["ProfileModel | None"] = relationship(foreign_keys=[talent_sender_id])
    studio_receiver: Mapped["StudioModel | None"] = relationship(foreign_keys=[studio_receiver_id])
    talent_receiver: Mapped["ProfileModel | None"] = relationship(foreign_keys=[talent_receiver_id])
    related_casting_call: Mapped["CastingCallModel | None"] = relationship()

    @property
    def sender(self) -> Party:
        if self.studio_sender_id is not None:
            return Party("studio", self.studio_sender_id)
        return Party("talent", self.talent_sender_id)

    @property
    def receiver(self) -> Party:
        if self.studio_receiver_id is not None:
            return Party("studio", self.studio_receiver_id)
        return Party("talent", self.talent_receiver_id)

    def set_parties(self, sender: Party, receiver: Party) -> None:
        """Populate the side-specific columns from tagged parties."""
        if sender.kind == receiver.kind:
            raise ValueError("A message must run between a studio and a talent")
        self.studio_sender_id = sender.id if sender.kind == "studio" else None
        self.talent_sender_id = sender.id if sender.kind == "talent" else None
        self.studio_receiver_id = receiver.id if receiver.kind == "studio" else None
        self.talent_receiver_id = receiver.id if receiver.kind == "talent" else None

    def involves_talent(self, profile_id: str) -> bool:
        return profile_id in (self.talent_sender_id, self.talent_receiver_id)
