"""User directory: login upsert, profile edits and admin status management."""

from datetime import datetime, timezone
from uuid import UUID, uuid4

from sqlalchemy import func, or_, select

from pawmarket.api.core.exceptions.base import (
    InputValidationError,
    NotFoundError,
)
from pawmarket.api.core.messages import MessageCode
from pawmarket.core.base import BaseService
from pawmarket.database.models import (
    AdoptionListing,
    User,
    UserStatus,
)
from pawmarket.utils.settings.app import AppSettings

EDITABLE_PROFILE_FIELDS = ("name", "phone", "address", "city_id", "pincode")


class UserManagementService(BaseService):
    async def get_user_by_id(self, user_id: UUID) -> User | None:
        """Get user by ID."""
        return await self.db.get(User, user_id)

    async def get_user_by_email(self, email: str) -> User | None:
        """Get user by email."""
        stmt = select(User).where(User.email == email.strip().lower())
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def get_user_by_google_id_or_email(
        self, google_id: str, email: str
    ) -> User | None:
        stmt = select(User).where(
            or_(User.google_id == google_id, User.email == email.strip().lower())
        )
        result = await self.db.execute(stmt)
        return result.scalars().first()

    def _promote_if_admin(self, user: User) -> None:
        admin_emails = {e.lower() for e in AppSettings().ADMIN_EMAILS}
        if user.email in admin_emails and not user.is_admin:
            user.is_admin = True
            self.logger.info("Promoted user to admin", user_id=str(user.id))

    async def login_with_email(self, email: str, name: str | None = None) -> User:
        """Find-or-create a user by email. Used by the development mock login."""
        user = await self.get_user_by_email(email)
        if user is None:
            email = email.strip().lower()
            user = User(
                email=email,
                name=name or email.split("@")[0],
                google_id=f"mock_{uuid4().hex}",
                status=UserStatus.ACTIVE,
            )
            self.db.add(user)
            self.logger.info("Created user via mock login", email=email)

        self._promote_if_admin(user)
        user.last_login_at = datetime.now(timezone.utc)
        await self.db.commit()
        await self.db.refresh(user)
        return user

    async def login_with_google(self, claims: dict) -> User:
        """Find-or-create a user from verified Google ID token claims."""
        google_id = claims["sub"]
        email = claims["email"].strip().lower()

        user = await self.get_user_by_google_id_or_email(google_id, email)
        if user is None:
            user = User(
                email=email,
                name=claims.get("name") or email.split("@")[0],
                avatar_url=claims.get("picture"),
                google_id=google_id,
                status=UserStatus.ACTIVE,
            )
            self.db.add(user)
            self.logger.info("Created user via Google login", email=email)
        elif user.google_id is None or user.google_id.startswith("mock_"):
            user.google_id = google_id
            user.avatar_url = user.avatar_url or claims.get("picture")

        self._promote_if_admin(user)
        user.last_login_at = datetime.now(timezone.utc)
        await self.db.commit()
        await self.db.refresh(user)
        return user

    async def update_profile(self, user: User, data: dict) -> User:
        for field in EDITABLE_PROFILE_FIELDS:
            if field in data:
                setattr(user, field, data[field])
        await self.db.commit()
        await self.db.refresh(user)
        return user

    async def soft_delete(self, user: User) -> None:
        user.status = UserStatus.DELETED
        await self.db.commit()
        self.logger.info("User deleted their account", user_id=str(user.id))

    async def list_users(
        self,
        search: str | None = None,
        user_type: str | None = None,
        status: UserStatus | None = None,
        page: int = 1,
        limit: int = 20,
    ) -> tuple[list[User], int]:
        """Admin listing.

        ``user_type`` is ``breeder`` (approved breeders), ``seller`` (users
        with at least one adoption listing) or ``adopter`` (neither).
        """
        stmt = select(User)
        if search:
            pattern = f"%{search.lower()}%"
            stmt = stmt.where(
                or_(
                    func.lower(User.email).like(pattern),
                    func.lower(User.name).like(pattern),
                )
            )
        if status:
            stmt = stmt.where(User.status == status)

        has_listings = (
            select(AdoptionListing.id)
            .where(AdoptionListing.user_id == User.id)
            .exists()
        )
        if user_type == "breeder":
            stmt = stmt.where(User.is_breeder.is_(True))
        elif user_type == "seller":
            stmt = stmt.where(User.is_breeder.is_(False), has_listings)
        elif user_type == "adopter":
            stmt = stmt.where(User.is_breeder.is_(False), ~has_listings)

        total = await self.db.scalar(
            select(func.count()).select_from(stmt.subquery())
        )
        result = await self.db.execute(
            stmt.order_by(User.created_at.desc())
            .offset((page - 1) * limit)
            .limit(limit)
        )
        return list(result.scalars().all()), total or 0

    async def set_status(
        self,
        admin_id: UUID,
        user_id: UUID,
        status: UserStatus,
        reason: str | None = None,
    ) -> User:
        if admin_id == user_id:
            raise InputValidationError(MessageCode.CANNOT_CHANGE_OWN_STATUS)

        user = await self.get_user_by_id(user_id)
        if not user:
            raise NotFoundError(MessageCode.USER_NOT_FOUND)

        user.status = status
        if status == UserStatus.SUSPENDED:
            user.suspended_at = datetime.now(timezone.utc)
            user.suspend_reason = reason
        elif status == UserStatus.ACTIVE:
            user.suspended_at = None
            user.suspend_reason = None
        elif status == UserStatus.BANNED:
            user.suspend_reason = reason

        await self.db.commit()
        await self.db.refresh(user)
        self.logger.info(
            "User status changed",
            user_id=str(user_id),
            status=status.value,
            admin_id=str(admin_id),
        )
        return user
