"""Shared test fixtures for castdesk."""

import os
from dataclasses import dataclass
from types import SimpleNamespace
from typing import Optional

import pytest
from httpx import ASGITransport, AsyncClient

from castdesk.accounts.service import AccountService
from castdesk.common.config import CastdeskSettings
from castdesk.common.database import DatabaseManager

SECRET_KEY = "test-secret-key"
COOKIE_NAME = "castdesk_session"


@dataclass
class Account:
    user_id: str
    tenant_id: str
    studio_id: Optional[str] = None
    profile_id: Optional[str] = None


def make_settings(**overrides) -> CastdeskSettings:
    defaults = {"secret_key": SECRET_KEY, "db_url": "sqlite+aiosqlite://"}
    defaults.update(overrides)
    return CastdeskSettings(**defaults)


def session_headers(user_id: str) -> dict:
    """Cookie header for a signed session of ``user_id``."""
    from castdesk.common.security import create_session_token
    return {"Cookie": f"{COOKIE_NAME}={create_session_token(user_id)}"}


async def make_studio(
    db: DatabaseManager,
    name: str = "Acme Pictures",
    email: str = "owner@acme.test",
) -> Account:
    svc = AccountService()
    async with db.get_session() as session:
        tenant = await svc.create_tenant(session, name, "STUDIO")
        user = await svc.create_user(
            session, email, tenant_id=tenant.id, first_name="Olive", last_name="Owner",
        )
        studio, _ = await svc.init_studio(session, user.id)
        return Account(user_id=user.id, tenant_id=tenant.id, studio_id=studio.id)


async def make_talent(
    db: DatabaseManager,
    email: str,
    first_name: str = "Tess",
    last_name: str = "Talent",
) -> Account:
    svc = AccountService()
    async with db.get_session() as session:
        tenant = await svc.create_tenant(session, f"{first_name} {last_name}", "TALENT")
        user = await svc.create_user(
            session, email, tenant_id=tenant.id, first_name=first_name, last_name=last_name,
        )
        profile = await svc.create_profile(session, user.id, bio="Stage and screen")
        return Account(user_id=user.id, tenant_id=tenant.id, profile_id=profile.id)


@pytest.fixture
def app():
    """Create a test app with in-memory DB."""
    os.environ["CASTDESK_DB_URL"] = "sqlite+aiosqlite://"
    os.environ["CASTDESK_SECRET_KEY"] = SECRET_KEY
    os.environ["CASTDESK_SESSION_COOKIE_NAME"] = COOKIE_NAME

    # Clear caches and singletons so new env vars take effect
    from castdesk.common.config import get_settings
    get_settings.cache_clear()

    from castdesk.deps import reset_singletons
    reset_singletons()

    from castdesk.app import create_app
    return create_app()


@pytest.fixture
async def client(app):
    # Manually init DB since ASGITransport doesn't run lifespan
    from castdesk.deps import get_db
    db = get_db()
    await db.init()
    await db.create_all()

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    await db.close()


@pytest.fixture
def app_db(client):
    """The app's DatabaseManager, initialized by ``client``."""
    from castdesk.deps import get_db
    return get_db()


@pytest.fixture
async def studio(app_db) -> Account:
    return await make_studio(app_db)


@pytest.fixture
async def other_studio(app_db) -> Account:
    return await make_studio(app_db, name="Rival Films", email="boss@rival.test")


@pytest.fixture
async def talents(app_db) -> list[Account]:
    return [
        await make_talent(app_db, "ana@talent.test", "Ana", "Actor"),
        await make_talent(app_db, "ben@talent.test", "Ben", "Bard"),
    ]


@pytest.fixture
def studio_headers(studio) -> dict:
    return session_headers(studio.user_id)


@pytest.fixture
def other_studio_headers(other_studio) -> dict:
    return session_headers(other_studio.user_id)


@pytest.fixture
def talent_headers(talents) -> dict:
    return session_headers(talents[0].user_id)


@pytest.fixture
def login():
    """Build session headers for an arbitrary user id."""
    return session_headers


@pytest.fixture
def factory():
    """Account builders for tests that drive a DatabaseManager directly."""
    return SimpleNamespace(studio=make_studio, talent=make_talent)


@pytest.fixture
async def casting_call(client, studio_headers) -> dict:
    resp = await client.post(
        "/api/studio/casting-calls",
        json={
            "title": "Lead Role in Harbor Lights",
            "description": "Feature film lead, four week shoot on the coast.",
            "compensation": "Union scale",
        },
        headers=studio_headers,
    )
    assert resp.status_code == 201
    return resp.json()


@pytest.fixture
async def db():
    """Standalone in-memory database for service-level unit tests."""
    manager = DatabaseManager(make_settings())
    await manager.init()
    await manager.create_all()
    yield manager
    await manager.drop_all()
    await manager.close()
