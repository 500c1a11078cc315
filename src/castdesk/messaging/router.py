"""Messaging and invitation API router."""

from fastapi import APIRouter, Depends, Query, Response

from castdesk.accounts.service import ActorContext, StudioContext, TalentContext
from castdesk.common.schemas import RelatedRef
from castdesk.common.security import (
    require_actor,
    require_studio,
    require_studio_resource,
    require_talent,
)
from castdesk.messaging.models import MessageModel
from castdesk.messaging.schemas import (
    InvitationBatchResponse,
    InvitationRequest,
    InvitationResponse,
    MessageCreate,
    MessageResponse,
    MessageUpdate,
    PartyResponse,
    TalentReply,
    UnreadCountResponse,
)

router = APIRouter()


def _get_service():
    from castdesk.deps import get_messaging_service
    return get_messaging_service()


def _get_casting_service():
    from castdesk.deps import get_casting_service
    return get_casting_service()


def _get_db():
    from castdesk.deps import get_db
    return get_db()


def _party(message: MessageModel, side: str) -> PartyResponse:
    party = message.sender if side == "sender" else message.receiver
    if party.kind == "studio":
        studio = message.studio_sender if side == "sender" else message.studio_receiver
        return PartyResponse(kind="studio", id=party.id, name=studio.name if studio else "")
    profile = message.talent_sender if side == "sender" else message.talent_receiver
    user = profile.user if profile else None
    if user is None:
        return PartyResponse(kind="talent", id=party.id)
    return PartyResponse(
        kind="talent",
        id=party.id,
        name=user.full_name,
        first_name=user.first_name,
        last_name=user.last_name,
        email=user.email,
    )


def _message_fields(message: MessageModel) -> dict:
    call = message.related_casting_call
    return dict(
        id=message.id,
        subject=message.subject,
        content=message.content,
        is_read=message.is_read,
        is_archived=message.is_archived,
        sender=_party(message, "sender"),
        receiver=_party(message, "receiver"),
        related_to_project_id=message.related_to_project_id,
        related_to_casting_call_id=message.related_to_casting_call_id,
        related_to_casting_call=(
            RelatedRef(id=call.id, title=call.title, status=call.status) if call else None
        ),
        created_at=message.created_at,
        updated_at=message.updated_at,
    )


def message_response(message: MessageModel) -> MessageResponse:
    return MessageResponse(**_message_fields(message))


# ── Studio mailbox ──

@router.get("/studio/messages", response_model=list[MessageResponse])
async def list_studio_messages(
    sent: bool = Query(False),
    studio: StudioContext = Depends(require_studio),
):
    svc = _get_service()
    db = _get_db()
    async with db.get_session() as session:
        messages = await svc.list_studio_messages(session, studio.studio_id, sent=sent)
        return [message_response(m) for m in messages]


@router.post("/studio/messages", response_model=MessageResponse, status_code=201)
async def send_studio_message(
    body: MessageCreate, studio: StudioContext = Depends(require_studio),
):
    svc = _get_service()
    db = _get_db()
    async with db.get_session() as session:
        message = await svc.send_studio_message(
            session,
            studio.studio_id,
            body.receiver_profile_id,
            body.subject,
            body.content,
            related_to_project_id=body.related_to_project_id,
            related_to_casting_call_id=body.related_to_casting_call_id,
        )
        return message_response(message)


@router.get("/studio/messages/{message_id}", response_model=MessageResponse)
async def get_studio_message(
    message_id: str, studio: StudioContext = Depends(require_studio_resource),
):
    svc = _get_service()
    db = _get_db()
    async with db.get_session() as session:
        message = await svc.read_studio_message(session, studio.studio_id, message_id)
        return message_response(message)


@router.patch("/studio/messages/{message_id}", response_model=MessageResponse)
async def update_studio_message(
    message_id: str,
    body: MessageUpdate,
    studio: StudioContext = Depends(require_studio_resource),
):
    svc = _get_service()
    db = _get_db()
    async with db.get_session() as session:
        message = await svc.get_studio_message(session, studio.studio_id, message_id)
        message = await svc.update_message(
            session, message, is_read=body.is_read, is_archived=body.is_archived,
        )
        return message_response(message)


@router.delete("/studio/messages/{message_id}", status_code=204)
async def delete_studio_message(
    message_id: str, studio: StudioContext = Depends(require_studio_resource),
):
    svc = _get_service()
    db = _get_db()
    async with db.get_session() as session:
        message = await svc.get_studio_message(session, studio.studio_id, message_id)
        await svc.delete_message(session, message)
    return Response(status_code=204)


# ── Casting-call invitations ──

@router.get(
    "/studio/casting-calls/{casting_call_id}/invitations",
    response_model=list[InvitationResponse],
)
async def list_invitations(
    casting_call_id: str, studio: StudioContext = Depends(require_studio_resource),
):
    svc = _get_service()
    casting = _get_casting_service()
    db = _get_db()
    async with db.get_session() as session:
        await casting.get_owned_casting_call(session, studio.studio_id, casting_call_id)
        pairs = await svc.list_invitations(session, studio.studio_id, casting_call_id)
        return [
            InvitationResponse(
                **_message_fields(message),
                has_responded=application is not None,
                response_status=application.status if application else None,
                response_date=application.created_at if application else None,
            )
            for message, application in pairs
        ]


@router.post(
    "/studio/casting-calls/{casting_call_id}/invitations",
    response_model=InvitationBatchResponse,
    status_code=201,
)
async def send_invitations(
    casting_call_id: str,
    body: InvitationRequest,
    studio: StudioContext = Depends(require_studio_resource),
):
    svc = _get_service()
    casting = _get_casting_service()
    db = _get_db()
    async with db.get_session() as session:
        call = await casting.get_owned_casting_call(session, studio.studio_id, casting_call_id)
        invitations = await svc.send_invitations(
            session, studio.studio_id, call, body.talent_ids, message=body.message,
        )
        return InvitationBatchResponse(
            invitations_sent=len(invitations),
            message=(
                f"Successfully sent {len(invitations)} invitations "
                f"for casting call: {call.title}"
            ),
        )


# ── Shared ──

@router.get("/messages/unread-count", response_model=UnreadCountResponse)
async def unread_count(actor: ActorContext = Depends(require_actor)):
    svc = _get_service()
    db = _get_db()
    async with db.get_session() as session:
        count = await svc.unread_count(session, actor)
        return UnreadCountResponse(unread_count=count)


# ── Talent mailbox ──

@router.get("/talent/messages", response_model=list[MessageResponse])
async def list_talent_messages(
    sent: bool = Query(False),
    unread: bool = Query(False),
    talent: TalentContext = Depends(require_talent),
):
    svc = _get_service()
    db = _get_db()
    async with db.get_session() as session:
        messages = await svc.list_talent_messages(
            session, talent.profile_id, sent=sent, unread_only=unread,
        )
        return [message_response(m) for m in messages]


@router.post("/talent/messages", response_model=MessageResponse, status_code=201)
async def reply_as_talent(
    body: TalentReply, talent: TalentContext = Depends(require_talent),
):
    svc = _get_service()
    db = _get_db()
    async with db.get_session() as session:
        message = await svc.reply_as_talent(
            session,
            talent.profile_id,
            body.original_message_id,
            body.subject,
            body.content,
            recipient_id=body.recipient_id,
        )
        return message_response(message)


@router.get("/talent/messages/{message_id}", response_model=MessageResponse)
async def get_talent_message(
    message_id: str, talent: TalentContext = Depends(require_talent),
):
    svc = _get_service()
    db = _get_db()
    async with db.get_session() as session:
        message = await svc.read_talent_message(session, talent.profile_id, message_id)
        return message_response(message)


@router.patch("/talent/messages/{message_id}", response_model=MessageResponse)
async def update_talent_message(
    message_id: str,
    body: MessageUpdate,
    talent: TalentContext = Depends(require_talent),
):
    svc = _get_service()
    db = _get_db()
    async with db.get_session() as session:
        message = await svc.get_talent_message(session, talent.profile_id, message_id)
        message = await svc.update_message(
            session, message, is_read=body.is_read, is_archived=body.is_archived,
        )
        return message_response(message)
