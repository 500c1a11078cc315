"""Account service: tenants, users, profiles and the studio capability check."""

import logging
from dataclasses import dataclass
from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from castdesk.accounts.models import (
    TENANT_TYPES,
    USER_ROLES,
    ProfileModel,
    StudioModel,
    TenantModel,
    UserModel,
)
from castdesk.common.exceptions import (
    ForbiddenError,
    InvalidInputError,
    NotAuthenticatedError,
    NotFoundError,
)

logger = logging.getLogger(__name__)


@dataclass
class ActorContext:
    """Who is acting: the session user resolved through tenant to studio/profile."""
    user_id: str
    tenant_id: Optional[str] = None
    tenant_type: Optional[str] = None
    studio_id: Optional[str] = None
    studio_name: Optional[str] = None
    profile_id: Optional[str] = None


@dataclass
class StudioContext:
    user_id: str
    tenant_id: str
    studio_id: str
    studio_name: str


@dataclass
class TalentContext:
    user_id: str
    tenant_id: str
    profile_id: str


class AccountService:
    """Tenant, user and profile lookups plus authorization resolution."""

    # ── Tenants / users / profiles ──

    async def create_tenant(
        self, session: AsyncSession, name: str, tenant_type: str,
    ) -> TenantModel:
        if tenant_type not in TENANT_TYPES:
            raise InvalidInputError(f"Unknown tenant type: {tenant_type}")
        tenant = TenantModel(name=name, type=tenant_type)
        session.add(tenant)
        await session.flush()
        return tenant

    async def create_user(
        self,
        session: AsyncSession,
        email: str,
        tenant_id: str | None = None,
        first_name: str | None = None,
        last_name: str | None = None,
        role: str = "USER",
    ) -> UserModel:
        if role not in USER_ROLES:
            raise InvalidInputError(f"Unknown user role: {role}")
        user = UserModel(
            email=email.lower(),
            tenant_id=tenant_id,
            first_name=first_name,
            last_name=last_name,
            role=role,
        )
        session.add(user)
        await session.flush()
        return user

    async def create_profile(
        self, session: AsyncSession, user_id: str, bio: str | None = None,
    ) -> ProfileModel:
        profile = ProfileModel(user_id=user_id, bio=bio)
        session.add(profile)
        await session.flush()
        return profile

    async def get_user(
        self, session: AsyncSession, user_id: str,
    ) -> UserModel | None:
        result = await session.execute(
            select(UserModel)
            .where(UserModel.id == user_id)
            .options(selectinload(UserModel.tenant), selectinload(UserModel.profile))
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def get_studio_for_tenant(
        self, session: AsyncSession, tenant_id: str,
    ) -> StudioModel | None:
        result = await session.execute(
            select(StudioModel).where(StudioModel.tenant_id == tenant_id)
        )
        return result.scalar_one_or_none()

    # ── Authorization ──

    async def resolve_actor(
        self,
        session: AsyncSession,
        user_id: str,
        required_tenant_type: str | None = None,
    ) -> ActorContext:
        """Resolve User -> Tenant -> Studio/Profile for the session user.

        Raises NotAuthenticatedError for an unknown user and ForbiddenError
        when the tenant is missing or not of ``required_tenant_type``.
        """
        user = await self.get_user(session, user_id)
        if user is None:
            raise NotAuthenticatedError()

        tenant = user.tenant
        if required_tenant_type is not None and (
            tenant is None or tenant.type != required_tenant_type
        ):
            label = required_tenant_type.lower()
            raise ForbiddenError(f"Only {label} accounts can access this endpoint")

        ctx = ActorContext(user_id=user.id)
        if tenant is None:
            return ctx
        ctx.tenant_id = tenant.id
        ctx.tenant_type = tenant.type

        if tenant.type == "STUDIO":
            studio = await self.get_studio_for_tenant(session, tenant.id)
            if studio is not None:
                ctx.studio_id = studio.id
                ctx.studio_name = studio.name
        elif tenant.type == "TALENT" and user.profile is not None:
            ctx.profile_id = user.profile.id
        return ctx

    async def resolve_studio(
        self, session: AsyncSession, user_id: str, forbid_missing: bool = False,
    ) -> StudioContext:
        """The studio capability check used by every studio endpoint.

        A studio tenant without a studio row gets 404 on mailbox-wide routes.
        With ``forbid_missing`` it gets 403 instead, which is what routes
        addressing one message, casting call or application require.
        """
        actor = await self.resolve_actor(session, user_id, "STUDIO")
        if actor.studio_id is None:
            if forbid_missing:
                raise ForbiddenError("Unauthorized to access this resource")
            raise NotFoundError("Studio profile not found")
        return StudioContext(
            user_id=actor.user_id,
            tenant_id=actor.tenant_id,
            studio_id=actor.studio_id,
            studio_name=actor.studio_name,
        )

    async def resolve_talent(
        self, session: AsyncSession, user_id: str,
    ) -> TalentContext:
        actor = await self.resolve_actor(session, user_id, "TALENT")
        if actor.profile_id is None:
            raise ForbiddenError("Only talent accounts with a profile can access this endpoint")
        return TalentContext(
            user_id=actor.user_id,
            tenant_id=actor.tenant_id,
            profile_id=actor.profile_id,
        )

    # ── Studio bootstrap ──

    async def init_studio(
        self, session: AsyncSession, user_id: str,
    ) -> tuple[StudioModel, bool]:
        """Create the tenant's studio on first use. Returns (studio, created)."""
        user = await self.get_user(session, user_id)
        if user is None:
            raise NotAuthenticatedError()
        if user.tenant is None or user.tenant.type != "STUDIO":
            raise ForbiddenError("Only studio accounts can be initialized")

        existing = await self.get_studio_for_tenant(session, user.tenant.id)
        if existing is not None:
            return existing, False

        name = user.tenant.name or user.full_name or "New Studio"
        studio = StudioModel(
            name=name,
            tenant_id=user.tenant.id,
            description=f"Studio for {name}",
        )
        session.add(studio)
        await session.flush()
        logger.info("Studio %s created for tenant %s", studio.id, user.tenant.id)
        return studio, True
