"""Casting service: casting calls owned by a studio and talent applications."""

import logging
from typing import Any

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from castdesk.accounts.models import ProfileModel
from castdesk.casting.models import (
    ApplicationModel,
    CastingCallModel,
    LocationModel,
    SkillModel,
)
from castdesk.common.exceptions import ForbiddenError, InvalidInputError, NotFoundError

logger = logging.getLogger(__name__)

_UPDATABLE_FIELDS = (
    "title", "description", "requirements", "compensation",
    "start_date", "end_date", "status", "location_id", "project_id",
)


def _call_options():
    return (
        selectinload(CastingCallModel.location),
        selectinload(CastingCallModel.skills),
        selectinload(CastingCallModel.applications)
        .selectinload(ApplicationModel.profile)
        .selectinload(ProfileModel.user),
    )


def _application_options():
    return (
        selectinload(ApplicationModel.profile).selectinload(ProfileModel.user),
        selectinload(ApplicationModel.casting_call),
    )


class CastingService:
    """Casting call CRUD scoped to the owning studio."""

    # ── Tags ──

    async def create_location(self, session: AsyncSession, name: str) -> LocationModel:
        location = LocationModel(name=name)
        session.add(location)
        await session.flush()
        return location

    async def create_skill(self, session: AsyncSession, name: str) -> SkillModel:
        skill = SkillModel(name=name)
        session.add(skill)
        await session.flush()
        return skill

    async def _resolve_skills(
        self, session: AsyncSession, skill_ids: list[str],
    ) -> list[SkillModel]:
        if not skill_ids:
            return []
        result = await session.execute(
            select(SkillModel).where(SkillModel.id.in_(skill_ids))
        )
        skills = list(result.scalars().all())
        missing = sorted(set(skill_ids) - {s.id for s in skills})
        if missing:
            raise InvalidInputError("Unknown skill ids", details={"skillIds": missing})
        return skills

    async def _check_location(self, session: AsyncSession, location_id: str | None) -> None:
        if location_id and await session.get(LocationModel, location_id) is None:
            raise InvalidInputError("Unknown location id", details={"locationId": location_id})

    # ── Casting calls ──

    async def create_casting_call(
        self,
        session: AsyncSession,
        studio_id: str,
        title: str,
        description: str,
        skill_ids: list[str] | None = None,
        **kwargs: Any,
    ) -> CastingCallModel:
        await self._check_location(session, kwargs.get("location_id"))
        call = CastingCallModel(
            studio_id=studio_id,
            title=title,
            description=description,
            requirements=kwargs.get("requirements"),
            compensation=kwargs.get("compensation"),
            start_date=kwargs.get("start_date"),
            end_date=kwargs.get("end_date"),
            location_id=kwargs.get("location_id"),
            project_id=kwargs.get("project_id"),
            status=kwargs.get("status", "OPEN"),
            skills=await self._resolve_skills(session, skill_ids or []),
        )
        session.add(call)
        await session.flush()
        return await self.get_casting_call(session, call.id)

    async def get_casting_call(
        self, session: AsyncSession, casting_call_id: str,
    ) -> CastingCallModel | None:
        result = await session.execute(
            select(CastingCallModel)
            .where(CastingCallModel.id == casting_call_id)
            .options(*_call_options())
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def get_owned_casting_call(
        self, session: AsyncSession, studio_id: str, casting_call_id: str,
    ) -> CastingCallModel:
        """Fetch a casting call the acting studio owns (404 missing, 403 foreign)."""
        call = await self.get_casting_call(session, casting_call_id)
        if call is None:
            raise NotFoundError("Casting call not found")
        if call.studio_id != studio_id:
            raise ForbiddenError("Unauthorized to access this casting call")
        return call

    async def list_casting_calls(
        self, session: AsyncSession, studio_id: str, status: str | None = None,
    ) -> list[CastingCallModel]:
        query = (
            select(CastingCallModel)
            .where(CastingCallModel.studio_id == studio_id)
            .options(*_call_options())
        )
        if status:
            query = query.where(CastingCallModel.status == status)
        result = await session.execute(query.order_by(CastingCallModel.created_at.desc()))
        return list(result.scalars().all())

    async def update_casting_call(
        self, session: AsyncSession, call: CastingCallModel, **updates: Any,
    ) -> CastingCallModel:
        """Apply a partial update. Status changes are not restricted."""
        if "location_id" in updates:
            await self._check_location(session, updates["location_id"])
        for field in _UPDATABLE_FIELDS:
            if field in updates:
                setattr(call, field, updates[field])
        if updates.get("skill_ids") is not None:
            call.skills = await self._resolve_skills(session, updates["skill_ids"])
        await session.flush()
        return await self.get_casting_call(session, call.id)

    async def delete_casting_call(
        self, session: AsyncSession, call: CastingCallModel,
    ) -> None:
        await session.delete(call)
        await session.flush()
        logger.info("Casting call %s deleted by studio %s", call.id, call.studio_id)

    # ── Applications ──

    async def list_applications(
        self, session: AsyncSession, casting_call_id: str,
    ) -> list[ApplicationModel]:
        result = await session.execute(
            select(ApplicationModel)
            .where(ApplicationModel.casting_call_id == casting_call_id)
            .options(*_application_options())
            .order_by(ApplicationModel.created_at.desc())
        )
        return list(result.scalars().all())

    async def applications_by_profile(
        self, session: AsyncSession, casting_call_id: str, profile_ids: list[str],
    ) -> dict[str, ApplicationModel]:
        """Applications to ``casting_call_id`` from ``profile_ids``, keyed by profile id."""
        if not profile_ids:
            return {}
        result = await session.execute(
            select(ApplicationModel).where(
                ApplicationModel.casting_call_id == casting_call_id,
                ApplicationModel.profile_id.in_(profile_ids),
            )
        )
        return {app.profile_id: app for app in result.scalars().all()}

    async def get_application(
        self, session: AsyncSession, application_id: str,
    ) -> ApplicationModel | None:
        result = await session.execute(
            select(ApplicationModel)
            .where(ApplicationModel.id == application_id)
            .options(*_application_options())
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def get_owned_application(
        self, session: AsyncSession, studio_id: str, application_id: str,
    ) -> ApplicationModel:
        application = await self.get_application(session, application_id)
        if application is None:
            raise NotFoundError("Application not found")
        if application.casting_call.studio_id != studio_id:
            raise ForbiddenError("Unauthorized to access this application")
        return application

    async def update_application(
        self,
        session: AsyncSession,
        application: ApplicationModel,
        status: str,
        message: str | None = None,
    ) -> ApplicationModel:
        application.status = status
        if message is not None:
            application.message = message
        await session.flush()
        return await self.get_application(session, application.id)

    async def apply(
        self,
        session: AsyncSession,
        profile_id: str,
        casting_call_id: str,
        message: str,
    ) -> ApplicationModel:
        """Submit a talent application to an open casting call."""
        call = await session.get(CastingCallModel, casting_call_id)
        if call is None:
            raise NotFoundError("Casting call not found")
        if call.status != "OPEN":
            raise InvalidInputError("This casting call is no longer accepting applications")

        existing = await self.applications_by_profile(session, casting_call_id, [profile_id])
        if existing:
            raise InvalidInputError("You have already applied to this casting call")

        application = ApplicationModel(
            profile_id=profile_id,
            casting_call_id=casting_call_id,
            message=message,
        )
        session.add(application)
        try:
            await session.flush()
        except IntegrityError as exc:
            raise InvalidInputError("You have already applied to this casting call") from exc
        return await self.get_application(session, application.id)
