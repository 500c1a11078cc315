"""Signed session cookies and the authenticated-user dependency."""

from itsdangerous import BadSignature, SignatureExpired, URLSafeTimedSerializer
from starlette.requests import Request

from castdesk.common.exceptions import NotAuthenticatedError

_SALT = "castdesk-session"


def _get_serializer() -> URLSafeTimedSerializer:
    from castdesk.common.config import get_settings
    return URLSafeTimedSerializer(get_settings().secret_key, salt=_SALT)


def create_session_token(user_id: str) -> str:
    """Sign a session payload for ``user_id`` and return the cookie value."""
    return _get_serializer().dumps({"user_id": user_id})


def verify_session_token(token: str) -> dict | None:
    """Verify and decode a session token. Returns payload or None."""
    from castdesk.common.config import get_settings

    try:
        return _get_serializer().loads(token, max_age=get_settings().session_max_age)
    except (BadSignature, SignatureExpired):
        return None


def get_session_user_id(request: Request) -> str | None:
    """Extract the user id from the request's session cookie, if any."""
    from castdesk.common.config import get_settings

    token = request.cookies.get(get_settings().session_cookie_name)
    if not token:
        return None
    payload = verify_session_token(token)
    if not payload:
        return None
    return payload.get("user_id")


async def require_session_user(request: Request) -> str:
    """FastAPI dependency returning the authenticated user id."""
    user_id = get_session_user_id(request)
    if not user_id:
        raise NotAuthenticatedError()
    return user_id


async def require_actor(request: Request):
    """FastAPI dependency resolving the session user to an ActorContext."""
    user_id = await require_session_user(request)

    from castdesk.deps import get_account_service, get_db
    svc = get_account_service()
    db = get_db()
    async with db.get_session() as session:
        return await svc.resolve_actor(session, user_id)


async def require_studio(request: Request):
    """FastAPI dependency resolving the session user to their StudioContext.

    401 without a valid session, 403 for non-studio tenants, 404 when the
    studio tenant has no studio row yet.
    """
    user_id = await require_session_user(request)

    from castdesk.deps import get_account_service, get_db
    svc = get_account_service()
    db = get_db()
    async with db.get_session() as session:
        return await svc.resolve_studio(session, user_id)


async def require_talent(request: Request):
    """FastAPI dependency resolving the session user to their TalentContext."""
    user_id = await require_session_user(request)

    from castdesk.deps import get_account_service, get_db
    svc = get_account_service()
    db = get_db()
    async with db.get_session() as session:
        return await svc.resolve_talent(session, user_id)


async def require_studio_resource(request: Request):
    """Like ``require_studio`` for routes addressing one studio-owned row.

    A studio tenant without a studio row owns nothing, so it gets 403.
    """
    user_id = await require_session_user(request)

    from castdesk.deps import get_account_service, get_db
    svc = get_account_service()
    db = get_db()
    async with db.get_session() as session:
        return await svc.resolve_studio(session, user_id, forbid_missing=True)
