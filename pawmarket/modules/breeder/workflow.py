"""Breeder application review workflow.

Application lifecycle::

    (none) -> pending -> approved
                      -> rejected -> (resubmission creates a new pending row)
                      -> info_requested -> pending
    draft -> pending

Every transition is appended to ``breeder_application_events``.
"""

from datetime import datetime, timezone
from uuid import UUID

from sqlalchemy import func, select

from pawmarket.api.core.exceptions.base import (
    DuplicateApplicationError,
    InputValidationError,
    InvalidStateError,
    NotFoundError,
)
from pawmarket.api.core.messages import MessageCode
from pawmarket.core.base import BaseService
from pawmarket.database.models import (
    ApplicationStatus,
    BreederApplication,
    BreederApplicationEvent,
    BreederProfile,
    User,
)
from pawmarket.modules.breeder.profiles import BreederProfileService
from pawmarket.modules.catalog.service import CatalogService
from pawmarket.utils.slugs import slugify

APPLICATION_FIELDS = (
    "business_name",
    "kennel_name",
    "years_experience",
    "description",
    "business_phone",
    "business_email",
    "website_url",
    "city_id",
    "address",
    "pincode",
    "breed_ids",
    "document_urls",
    "agree_to_ethical_standards",
)

RESUBMITTABLE_IN_PLACE = {ApplicationStatus.DRAFT, ApplicationStatus.INFO_REQUESTED}


def _parse_breed_ids(raw_ids: list) -> list[UUID]:
    try:
        return [UUID(str(breed_id)) for breed_id in raw_ids or []]
    except ValueError as e:
        raise InputValidationError(
            MessageCode.BREED_NOT_FOUND, {"breed_ids": [str(b) for b in raw_ids]}
        ) from e


class BreederWorkflowService(BaseService):
    """Submit, review and approve breeder applications."""

    def _record_event(
        self,
        application: BreederApplication,
        from_status: str | None,
        to_status: str,
        actor_id: UUID | None,
        note: str | None = None,
    ) -> None:
        self.db.add(
            BreederApplicationEvent(
                application_id=application.id,
                from_status=from_status,
                to_status=to_status,
                actor_id=actor_id,
                note=note,
            )
        )

    def _apply_fields(self, application: BreederApplication, data: dict) -> None:
        for field in APPLICATION_FIELDS:
            if field in data:
                value = data[field]
                if field == "breed_ids":
                    value = [str(breed_id) for breed_id in value or []]
                setattr(application, field, value)

    async def get_current_application(
        self, user_id: UUID
    ) -> BreederApplication | None:
        """Most recent application that has not been superseded."""
        result = await self.db.execute(
            select(BreederApplication)
            .where(
                BreederApplication.user_id == user_id,
                BreederApplication.superseded_at.is_(None),
            )
            .order_by(BreederApplication.created_at.desc())
            .limit(1)
        )
        return result.scalars().first()

    async def submit_application(self, user_id: UUID, data: dict) -> BreederApplication:
        existing = await self.get_current_application(user_id)
        now = datetime.now(timezone.utc)

        if existing and existing.status in (
            ApplicationStatus.PENDING,
            ApplicationStatus.APPROVED,
        ):
            raise DuplicateApplicationError({"status": existing.status})

        await CatalogService(self.db).require_city(data["city_id"])
        await CatalogService(self.db).get_breeds_by_ids(data.get("breed_ids") or [])

        if existing and existing.status in RESUBMITTABLE_IN_PLACE:
            previous = existing.status
            self._apply_fields(existing, data)
            existing.status = ApplicationStatus.PENDING
            existing.submitted_at = now
            self._record_event(existing, previous, ApplicationStatus.PENDING, user_id)
            application = existing
        else:
            if existing and existing.status == ApplicationStatus.REJECTED:
                existing.superseded_at = now
                self._record_event(
                    existing,
                    ApplicationStatus.REJECTED,
                    ApplicationStatus.REJECTED,
                    user_id,
                    note="superseded by resubmission",
                )

            application = BreederApplication(
                user_id=user_id,
                status=ApplicationStatus.PENDING,
                submitted_at=now,
            )
            self._apply_fields(application, data)
            self.db.add(application)
            await self.db.flush()
            self._record_event(application, None, ApplicationStatus.PENDING, user_id)

        await self.db.commit()
        self.logger.info(
            "Breeder application submitted",
            application_id=str(application.id),
            user_id=str(user_id),
        )
        return await self.get_application(application.id)

    async def get_my_application(self, user_id: UUID) -> BreederApplication:
        application = await self.get_current_application(user_id)
        if not application:
            raise NotFoundError(MessageCode.APPLICATION_NOT_FOUND)
        return application

    async def get_application(self, application_id: UUID) -> BreederApplication:
        result = await self.db.execute(
            select(BreederApplication)
            .where(BreederApplication.id == application_id)
            .execution_options(populate_existing=True)
        )
        application = result.scalars().first()
        if not application:
            raise NotFoundError(
                MessageCode.APPLICATION_NOT_FOUND,
                {"application_id": str(application_id)},
            )
        return application

    async def list_pending_applications(self) -> list[BreederApplication]:
        """Review queue, oldest submission first."""
        result = await self.db.execute(
            select(BreederApplication)
            .where(BreederApplication.status == ApplicationStatus.PENDING)
            .order_by(BreederApplication.submitted_at.asc())
        )
        return list(result.scalars().unique().all())

    async def application_stats(self) -> dict[str, int]:
        result = await self.db.execute(
            select(BreederApplication.status, func.count())
            .where(BreederApplication.superseded_at.is_(None))
            .group_by(BreederApplication.status)
        )
        stats = {status.value: 0 for status in ApplicationStatus}
        for status, count in result.all():
            stats[status] = count
        return stats

    async def _unique_profile_slug(self, business_name: str) -> str:
        base = slugify(business_name, fallback="breeder")
        result = await self.db.execute(
            select(BreederProfile.slug).where(BreederProfile.slug.like(f"{base}%"))
        )
        taken = set(result.scalars().all())
        if base not in taken:
            return base
        suffix = 2
        while f"{base}-{suffix}" in taken:
            suffix += 1
        return f"{base}-{suffix}"

    async def approve_application(
        self, application_id: UUID, approver_id: UUID
    ) -> BreederProfile:
        """Approve a pending application and create the breeder profile.

        All lookups and checks run before anything is written, and the
        profile, breed links, role flag, status change and history event are
        committed together.
        """
        application = await self.get_application(application_id)
        if application.status != ApplicationStatus.PENDING:
            raise InvalidStateError(
                details={
                    "application_id": str(application_id),
                    "status": application.status,
                }
            )

        breeds = await CatalogService(self.db).get_breeds_by_ids(
            _parse_breed_ids(application.breed_ids)
        )
        user = await self.db.get(User, application.user_id)
        if not user:
            raise NotFoundError(MessageCode.USER_NOT_FOUND)

        existing_profile = await self.db.scalar(
            select(BreederProfile.id).where(BreederProfile.user_id == user.id)
        )
        if existing_profile:
            raise InvalidStateError(details={"reason": "profile_exists"})

        slug = await self._unique_profile_slug(application.business_name)
        now = datetime.now(timezone.utc)

        try:
            profile = BreederProfile(
                user_id=user.id,
                business_name=application.business_name,
                slug=slug,
                kennel_name=application.kennel_name,
                description=application.description,
                years_experience=application.years_experience,
                business_phone=application.business_phone,
                business_email=application.business_email,
                website_url=application.website_url,
                city_id=application.city_id,
                address=application.address,
                pincode=application.pincode,
                gallery_urls=[],
                is_verified=False,
                breeds=breeds,
            )
            self.db.add(profile)

            user.is_breeder = True
            application.status = ApplicationStatus.APPROVED
            application.reviewed_at = now
            application.reviewed_by_id = approver_id
            self._record_event(
                application,
                ApplicationStatus.PENDING,
                ApplicationStatus.APPROVED,
                approver_id,
            )
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise

        self.logger.info(
            "Breeder application approved",
            application_id=str(application_id),
            profile_slug=slug,
            approver_id=str(approver_id),
        )
        return await BreederProfileService(self.db).get_profile_by_id(profile.id)

    async def reject_application(
        self, application_id: UUID, rejecter_id: UUID, reason: str
    ) -> BreederApplication:
        application = await self.get_application(application_id)
        if application.status != ApplicationStatus.PENDING:
            raise InvalidStateError(
                details={
                    "application_id": str(application_id),
                    "status": application.status,
                }
            )

        application.status = ApplicationStatus.REJECTED
        application.review_notes = {"reason": reason}
        application.reviewed_at = datetime.now(timezone.utc)
        application.reviewed_by_id = rejecter_id
        self._record_event(
            application,
            ApplicationStatus.PENDING,
            ApplicationStatus.REJECTED,
            rejecter_id,
            note=reason,
        )
        await self.db.commit()

        self.logger.info(
            "Breeder application rejected",
            application_id=str(application_id),
            rejecter_id=str(rejecter_id),
        )
        return await self.get_application(application_id)

    async def request_info(
        self, application_id: UUID, admin_id: UUID, note: str
    ) -> BreederApplication:
        application = await self.get_application(application_id)
        if application.status != ApplicationStatus.PENDING:
            raise InvalidStateError(
                details={
                    "application_id": str(application_id),
                    "status": application.status,
                }
            )

        application.status = ApplicationStatus.INFO_REQUESTED
        application.review_notes = {"info_requested": note}
        application.reviewed_at = datetime.now(timezone.utc)
        application.reviewed_by_id = admin_id
        self._record_event(
            application,
            ApplicationStatus.PENDING,
            ApplicationStatus.INFO_REQUESTED,
            admin_id,
            note=note,
        )
        await self.db.commit()
        return await self.get_application(application_id)
