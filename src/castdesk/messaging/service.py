"""Messaging service: studio/talent mailboxes and casting-call invitations."""

import logging
from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from castdesk.accounts.models import ProfileModel, StudioModel
from castdesk.accounts.service import ActorContext
from castdesk.casting.models import ApplicationModel, CastingCallModel
from castdesk.casting.service import CastingService
from castdesk.common.exceptions import ForbiddenError, NotFoundError
from castdesk.messaging.models import MessageModel, Party

logger = logging.getLogger(__name__)

INVITATION_SUBJECT = "Invitation to apply for casting call: {title}"
INVITATION_CONTENT = (
    "You've been invited to apply for a casting call: {title}. "
    "Please visit your opportunities page to learn more and apply."
)


def _message_options():
    return (
        selectinload(MessageModel.studio_sender),
        selectinload(MessageModel.studio_receiver),
        selectinload(MessageModel.talent_sender).selectinload(ProfileModel.user),
        selectinload(MessageModel.talent_receiver).selectinload(ProfileModel.user),
        selectinload(MessageModel.related_casting_call),
    )


class MessagingService:
    """Message CRUD scoped to a mailbox, plus the invitation dispatcher."""

    def __init__(self, casting_service: CastingService | None = None):
        self.casting_service = casting_service or CastingService()

    # ── Lookup ──

    async def get_message(
        self, session: AsyncSession, message_id: str,
    ) -> MessageModel | None:
        result = await session.execute(
            select(MessageModel)
            .where(MessageModel.id == message_id)
            .options(*_message_options())
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def can_access_message(
        self, session: AsyncSession, studio_id: str, message_id: str,
    ) -> bool:
        """True when the studio sent or received the message."""
        result = await session.execute(
            select(MessageModel.id).where(
                MessageModel.id == message_id,
                (MessageModel.studio_sender_id == studio_id)
                | (MessageModel.studio_receiver_id == studio_id),
            )
        )
        return result.scalar_one_or_none() is not None

    async def get_studio_message(
        self, session: AsyncSession, studio_id: str, message_id: str,
    ) -> MessageModel:
        """Fetch a message in the studio's mailbox (404 missing, 403 foreign)."""
        message = await self.get_message(session, message_id)
        if message is None:
            raise NotFoundError("Message not found")
        if not await self.can_access_message(session, studio_id, message_id):
            raise ForbiddenError("Unauthorized to access this message")
        return message

    async def get_talent_message(
        self, session: AsyncSession, profile_id: str, message_id: str,
    ) -> MessageModel:
        message = await self.get_message(session, message_id)
        if message is None:
            raise NotFoundError("Message not found")
        if not message.involves_talent(profile_id):
            raise ForbiddenError("Unauthorized to access this message")
        return message

    # ── Studio mailbox ──

    async def list_studio_messages(
        self, session: AsyncSession, studio_id: str, sent: bool = False,
    ) -> list[MessageModel]:
        """Sent or received messages for a studio, newest first."""
        column = MessageModel.studio_sender_id if sent else MessageModel.studio_receiver_id
        result = await session.execute(
            select(MessageModel)
            .where(column == studio_id)
            .options(*_message_options())
            .order_by(MessageModel.created_at.desc())
        )
        return list(result.scalars().all())

    async def read_studio_message(
        self, session: AsyncSession, studio_id: str, message_id: str,
    ) -> MessageModel:
        """Fetch a message; an unread inbound message is marked read."""
        message = await self.get_studio_message(session, studio_id, message_id)
        if message.studio_receiver_id == studio_id and not message.is_read:
            message.is_read = True
            await session.flush()
        return message

    async def send_studio_message(
        self,
        session: AsyncSession,
        studio_id: str,
        profile_id: str,
        subject: str,
        content: str,
        related_to_project_id: str | None = None,
        related_to_casting_call_id: str | None = None,
    ) -> MessageModel:
        if await session.get(ProfileModel, profile_id) is None:
            raise NotFoundError("Talent profile not found")
        if related_to_casting_call_id:
            call = await session.get(CastingCallModel, related_to_casting_call_id)
            if call is None or call.studio_id != studio_id:
                raise NotFoundError("Casting call not found or does not belong to this studio")

        message = MessageModel(
            subject=subject,
            content=content,
            is_read=False,
            related_to_project_id=related_to_project_id,
            related_to_casting_call_id=related_to_casting_call_id,
        )
        message.set_parties(Party("studio", studio_id), Party("talent", profile_id))
        session.add(message)
        await session.flush()
        return await self.get_message(session, message.id)

    async def update_message(
        self,
        session: AsyncSession,
        message: MessageModel,
        is_read: Optional[bool] = None,
        is_archived: Optional[bool] = None,
    ) -> MessageModel:
        if is_read is not None:
            message.is_read = is_read
        if is_archived is not None:
            message.is_archived = is_archived
        await session.flush()
        return message

    async def delete_message(
        self, session: AsyncSession, message: MessageModel,
    ) -> None:
        await session.delete(message)
        await session.flush()

    # ── Invitations ──

    async def send_invitations(
        self,
        session: AsyncSession,
        studio_id: str,
        call: CastingCallModel,
        talent_ids: list[str],
        message: str | None = None,
    ) -> list[MessageModel]:
        """Create one invitation message per talent id, all or nothing.

        Runs inside the caller's transaction: any unknown profile id fails
        the whole batch and nothing is written.
        """
        result = await session.execute(
            select(ProfileModel.id).where(ProfileModel.id.in_(set(talent_ids)))
        )
        known = set(result.scalars().all())
        missing = sorted(set(talent_ids) - known)
        if missing:
            raise NotFoundError("Talent profile not found", details={"talentIds": missing})

        subject = INVITATION_SUBJECT.format(title=call.title)
        content = message or INVITATION_CONTENT.format(title=call.title)
        invitations = []
        for talent_id in talent_ids:
            invitation = MessageModel(
                subject=subject,
                content=content,
                is_read=False,
                related_to_casting_call_id=call.id,
            )
            invitation.set_parties(Party("studio", studio_id), Party("talent", talent_id))
            invitations.append(invitation)

        session.add_all(invitations)
        await session.flush()
        logger.info(
            "Sent %d invitations for casting call %s", len(invitations), call.id,
        )
        return invitations

    async def list_invitations(
        self, session: AsyncSession, studio_id: str, casting_call_id: str,
    ) -> list[tuple[MessageModel, ApplicationModel | None]]:
        """Invitations for a casting call, each paired with the invitee's application."""
        result = await session.execute(
            select(MessageModel)
            .where(
                MessageModel.related_to_casting_call_id == casting_call_id,
                MessageModel.studio_sender_id == studio_id,
            )
            .options(*_message_options())
            .order_by(MessageModel.created_at.desc())
        )
        invitations = list(result.scalars().all())

        invited = sorted({m.talent_receiver_id for m in invitations if m.talent_receiver_id})
        applications = await self.casting_service.applications_by_profile(
            session, casting_call_id, invited,
        )
        return [(m, applications.get(m.talent_receiver_id)) for m in invitations]

    # ── Counters ──

    async def unread_count(
        self, session: AsyncSession, actor: ActorContext,
    ) -> int:
        """Unread, non-archived inbound messages for a studio or talent actor."""
        if actor.tenant_type == "STUDIO" and actor.studio_id:
            column, owner = MessageModel.studio_receiver_id, actor.studio_id
        elif actor.tenant_type == "TALENT" and actor.profile_id:
            column, owner = MessageModel.talent_receiver_id, actor.profile_id
        else:
            return 0
        result = await session.execute(
            select(func.count(MessageModel.id)).where(
                column == owner,
                MessageModel.is_read.is_(False),
                MessageModel.is_archived.is_(False),
            )
        )
        return result.scalar_one()

    # ── Talent mailbox ──

    async def list_talent_messages(
        self,
        session: AsyncSession,
        profile_id: str,
        sent: bool = False,
        unread_only: bool = False,
    ) -> list[MessageModel]:
        column = MessageModel.talent_sender_id if sent else MessageModel.talent_receiver_id
        query = (
            select(MessageModel)
            .where(column == profile_id, MessageModel.is_archived.is_(False))
            .options(*_message_options())
        )
        if unread_only:
            query = query.where(MessageModel.is_read.is_(False))
        result = await session.execute(query.order_by(MessageModel.created_at.desc()))
        return list(result.scalars().all())

    async def read_talent_message(
        self, session: AsyncSession, profile_id: str, message_id: str,
    ) -> MessageModel:
        message = await self.get_talent_message(session, profile_id, message_id)
        if message.talent_receiver_id == profile_id and not message.is_read:
            message.is_read = True
            await session.flush()
        return message

    async def reply_as_talent(
        self,
        session: AsyncSession,
        profile_id: str,
        original_message_id: str | None,
        subject: str,
        content: str,
        recipient_id: str | None = None,
    ) -> MessageModel:
        """Talent may only answer a message a studio sent them."""
        if not original_message_id:
            raise ForbiddenError("Talents can only reply to existing messages")

        original = await session.get(MessageModel, original_message_id)
        if original is None or original.talent_receiver_id != profile_id:
            raise NotFoundError(
                "Original message not found or you don't have permission to reply"
            )

        studio_id = original.studio_sender_id
        if recipient_id and recipient_id != studio_id:
            raise ForbiddenError("Replies must go to the studio that sent the original message")
        if await session.get(StudioModel, studio_id) is None:
            raise NotFoundError("Recipient studio not found")

        reply = MessageModel(
            subject=subject,
            content=content,
            is_read=False,
            related_to_project_id=original.related_to_project_id,
            related_to_casting_call_id=original.related_to_casting_call_id,
        )
        reply.set_parties(Party("talent", profile_id), Party("studio", studio_id))
        session.add(reply)
        await session.flush()
        return await self.get_message(session, reply.id)
