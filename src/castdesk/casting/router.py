"""Casting call and application API router."""

from fastapi import APIRouter, Depends, Query

from castdesk.accounts.service import StudioContext, TalentContext
from castdesk.casting.models import ApplicationModel, CastingCallModel
from castdesk.casting.schemas import (
    ApplicationResponse,
    ApplicationUpdate,
    ApplyRequest,
    CastingCallCreate,
    CastingCallDetail,
    CastingCallResponse,
    CastingCallStatus,
    CastingCallUpdate,
    SuccessResponse,
    TagResponse,
)
from castdesk.common.schemas import PersonSummary
from castdesk.common.security import require_studio, require_studio_resource, require_talent

router = APIRouter()


def _get_service():
    from castdesk.deps import get_casting_service
    return get_casting_service()


def _get_db():
    from castdesk.deps import get_db
    return get_db()


def application_response(app: ApplicationModel) -> ApplicationResponse:
    user = app.profile.user if app.profile else None
    return ApplicationResponse(
        id=app.id,
        status=app.status,
        message=app.message,
        profile_id=app.profile_id,
        casting_call_id=app.casting_call_id,
        casting_call_title=app.casting_call.title if app.casting_call else None,
        applicant=PersonSummary.model_validate(user) if user else None,
        created_at=app.created_at,
        updated_at=app.updated_at,
    )


def casting_call_response(call: CastingCallModel, detail: bool = False) -> CastingCallResponse:
    fields = dict(
        id=call.id,
        title=call.title,
        description=call.description,
        requirements=call.requirements,
        compensation=call.compensation,
        start_date=call.start_date,
        end_date=call.end_date,
        status=call.status,
        studio_id=call.studio_id,
        project_id=call.project_id,
        location=TagResponse.model_validate(call.location) if call.location else None,
        skills=[TagResponse.model_validate(s) for s in call.skills],
        application_count=len(call.applications),
        created_at=call.created_at,
        updated_at=call.updated_at,
    )
    if not detail:
        return CastingCallResponse(**fields)
    applications = sorted(call.applications, key=lambda a: a.created_at, reverse=True)
    return CastingCallDetail(
        **fields,
        applications=[application_response(a) for a in applications],
    )


# ── Studio: casting calls ──

@router.get("/studio/casting-calls", response_model=list[CastingCallResponse])
async def list_casting_calls(
    status: CastingCallStatus | None = Query(None),
    studio: StudioContext = Depends(require_studio),
):
    svc = _get_service()
    db = _get_db()
    async with db.get_session() as session:
        calls = await svc.list_casting_calls(session, studio.studio_id, status=status)
        return [casting_call_response(c) for c in calls]


@router.post("/studio/casting-calls", response_model=CastingCallDetail, status_code=201)
async def create_casting_call(
    body: CastingCallCreate, studio: StudioContext = Depends(require_studio),
):
    svc = _get_service()
    db = _get_db()
    async with db.get_session() as session:
        call = await svc.create_casting_call(
            session,
            studio.studio_id,
            **body.model_dump(exclude_none=True),
        )
        return casting_call_response(call, detail=True)


@router.get("/studio/casting-calls/{casting_call_id}", response_model=CastingCallDetail)
async def get_casting_call(
    casting_call_id: str, studio: StudioContext = Depends(require_studio_resource),
):
    svc = _get_service()
    db = _get_db()
    async with db.get_session() as session:
        call = await svc.get_owned_casting_call(session, studio.studio_id, casting_call_id)
        return casting_call_response(call, detail=True)


@router.patch("/studio/casting-calls/{casting_call_id}", response_model=CastingCallDetail)
async def update_casting_call(
    casting_call_id: str,
    body: CastingCallUpdate,
    studio: StudioContext = Depends(require_studio_resource),
):
    svc = _get_service()
    db = _get_db()
    async with db.get_session() as session:
        call = await svc.get_owned_casting_call(session, studio.studio_id, casting_call_id)
        call = await svc.update_casting_call(
            session, call, **body.model_dump(exclude_none=True)
        )
        return casting_call_response(call, detail=True)


@router.delete("/studio/casting-calls/{casting_call_id}", response_model=SuccessResponse)
async def delete_casting_call(
    casting_call_id: str, studio: StudioContext = Depends(require_studio_resource),
):
    svc = _get_service()
    db = _get_db()
    async with db.get_session() as session:
        call = await svc.get_owned_casting_call(session, studio.studio_id, casting_call_id)
        await svc.delete_casting_call(session, call)
        return SuccessResponse()


@router.get(
    "/studio/casting-calls/{casting_call_id}/applications",
    response_model=list[ApplicationResponse],
)
async def list_applications(
    casting_call_id: str, studio: StudioContext = Depends(require_studio_resource),
):
    svc = _get_service()
    db = _get_db()
    async with db.get_session() as session:
        await svc.get_owned_casting_call(session, studio.studio_id, casting_call_id)
        applications = await svc.list_applications(session, casting_call_id)
        return [application_response(a) for a in applications]


# ── Studio: applications ──

@router.get("/studio/applications/{application_id}", response_model=ApplicationResponse)
async def get_application(
    application_id: str, studio: StudioContext = Depends(require_studio_resource),
):
    svc = _get_service()
    db = _get_db()
    async with db.get_session() as session:
        application = await svc.get_owned_application(session, studio.studio_id, application_id)
        return application_response(application)


@router.patch("/studio/applications/{application_id}", response_model=ApplicationResponse)
async def update_application(
    application_id: str,
    body: ApplicationUpdate,
    studio: StudioContext = Depends(require_studio_resource),
):
    svc = _get_service()
    db = _get_db()
    async with db.get_session() as session:
        application = await svc.get_owned_application(session, studio.studio_id, application_id)
        application = await svc.update_application(
            session, application, body.status, message=body.message,
        )
        return application_response(application)


# ── Talent ──

@router.post(
    "/talent/casting-calls/{casting_call_id}/apply",
    response_model=ApplicationResponse,
    status_code=201,
)
async def apply_to_casting_call(
    casting_call_id: str,
    body: ApplyRequest,
    talent: TalentContext = Depends(require_talent),
):
    svc = _get_service()
    db = _get_db()
    async with db.get_session() as session:
        application = await svc.apply(
            session, talent.profile_id, casting_call_id, body.message,
        )
        return application_response(application)
