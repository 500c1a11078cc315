"""Studio account API router."""

from fastapi import APIRouter, Depends

from castdesk.accounts.schemas import (
    StudioAccessResponse,
    StudioInitResponse,
    StudioResponse,
)
from castdesk.accounts.service import StudioContext
from castdesk.common.security import require_session_user, require_studio

router = APIRouter()


def _get_service():
    from castdesk.deps import get_account_service
    return get_account_service()


def _get_db():
    from castdesk.deps import get_db
    return get_db()


@router.post("/studio/init", response_model=StudioInitResponse)
async def init_studio(user_id: str = Depends(require_session_user)):
    """Create the caller's studio on first use; repeat calls return it."""
    svc = _get_service()
    db = _get_db()
    async with db.get_session() as session:
        studio, created = await svc.init_studio(session, user_id)
        return StudioInitResponse(
            message=(
                "Studio initialized successfully" if created
                else "Studio already initialized"
            ),
            studio=StudioResponse.model_validate(studio),
        )


@router.get("/studio/check-access", response_model=StudioAccessResponse)
async def check_access(studio: StudioContext = Depends(require_studio)):
    return StudioAccessResponse(
        studio_id=studio.studio_id,
        studio_name=studio.studio_name,
    )
