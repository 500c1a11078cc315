"""SQLAlchemy models for casting calls, applications and their tags."""

from datetime import datetime

from sqlalchemy import Column, DateTime, ForeignKey, String, Table, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from castdesk.accounts.models import ProfileModel
from castdesk.common.models import Base, TimestampMixin, generate_uuid

CASTING_CALL_STATUSES = ("OPEN", "CLOSED", "FILLED")
APPLICATION_STATUSES = ("PENDING", "APPROVED", "REJECTED")


casting_call_skills = Table(
    "casting_call_skills",
    Base.metadata,
    Column("casting_call_id", String(36), ForeignKey("casting_calls.id", ondelete="CASCADE"), primary_key=True),
    Column("skill_id", String(36), ForeignKey("skills.id", ondelete="CASCADE"), primary_key=True),
)


class LocationModel(Base, TimestampMixin):
    __tablename__ = "locations"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_uuid)
    name: Mapped[str] = mapped_column(String(255), nullable=False)


class SkillModel(Base, TimestampMixin):
    __tablename__ = "skills"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_uuid)
    name: Mapped[str] = mapped_column(String(255), nullable=False)


class CastingCallModel(Base, TimestampMixin):
    __tablename__ = "casting_calls"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_uuid)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    requirements: Mapped[str | None] = mapped_column(Text, nullable=True)
    compensation: Mapped[str | None] = mapped_column(String(255), nullable=True)
    start_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    end_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    status: Mapped[str] = mapped_column(String(20), default="OPEN", index=True)

    studio_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("studios.id"), nullable=False, index=True
    )
    location_id: Mapped[str | None] = mapped_column(
        String(36), ForeignKey("locations.id", ondelete="SET NULL"), nullable=True
    )
    # Projects live outside this service; the id is kept as an opaque tag.
    project_id: Mapped[str | None] = mapped_column(String(36), nullable=True)

    location: Mapped["LocationModel | None"] = relationship()
    skills: Mapped[list["SkillModel"]] = relationship(secondary=casting_call_skills)
    applications: Mapped[list["ApplicationModel"]] = relationship(
        back_populates="casting_call",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


class ApplicationModel(Base, TimestampMixin):
    __tablename__ = "applications"
    __table_args__ = (
        UniqueConstraint("casting_call_id", "profile_id", name="uq_application_call_profile"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_uuid)
    status: Mapped[str] = mapped_column(String(20), default="PENDING", index=True)
    message: Mapped[str | None] = mapped_column(Text, nullable=True)
    profile_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("profiles.id"), nullable=False, index=True
    )
    casting_call_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("casting_calls.id", ondelete="CASCADE"), nullable=False, index=True
    )

    profile: Mapped["ProfileModel"] = relationship()
    casting_call: Mapped["CastingCallModel"] = relationship(back_populates="applications")
