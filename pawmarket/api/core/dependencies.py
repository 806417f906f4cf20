from typing import Annotated, AsyncGenerator

from fastapi import Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from pawmarket.api.core.exceptions.base import PawMarketException
from pawmarket.api.core.messages import MessageCode
from pawmarket.database.models import User, UserStatus
from pawmarket.modules.adoption.service import AdoptionService
from pawmarket.modules.breeder.listings import BreederListingService
from pawmarket.modules.breeder.profiles import BreederProfileService
from pawmarket.modules.breeder.workflow import BreederWorkflowService
from pawmarket.modules.catalog.service import CatalogService
from pawmarket.modules.favorites.service import FavoritesService
from pawmarket.modules.payment.service import PaymentService
from pawmarket.modules.storage.service import ImageStorage
from pawmarket.modules.user.management import UserManagementService


async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """Get database session from app state."""
    session_factory = request.app.state.session_factory
    async with session_factory() as session:
        yield session


AsyncSessionDep = Annotated[AsyncSession, Depends(get_db_session)]


async def get_optional_user(request: Request, db: AsyncSessionDep) -> User | None:
    """Caller reloaded into this request's session, or None when anonymous.

    The middleware's copy belongs to a closed session, so it is only used
    for the id.
    """
    user = getattr(request.state, "user", None)
    if user is None:
        return None
    current = await db.get(User, user.id)
    if current is None or current.status == UserStatus.DELETED:
        return None
    return current


async def get_current_user(
    user: Annotated[User | None, Depends(get_optional_user)],
) -> User:
    if user is None:
        raise PawMarketException(MessageCode.AUTH_REQUIRED, status.HTTP_401_UNAUTHORIZED)
    return user


async def get_user_management_service(db: AsyncSessionDep) -> UserManagementService:
    return UserManagementService(db)


async def get_breeder_workflow_service(db: AsyncSessionDep) -> BreederWorkflowService:
    return BreederWorkflowService(db)


async def get_breeder_profile_service(db: AsyncSessionDep) -> BreederProfileService:
    return BreederProfileService(db)


async def get_breeder_listing_service(db: AsyncSessionDep) -> BreederListingService:
    return BreederListingService(db)


async def get_catalog_service(db: AsyncSessionDep) -> CatalogService:
    return CatalogService(db)


async def get_adoption_service(db: AsyncSessionDep) -> AdoptionService:
    return AdoptionService(db)


async def get_favorites_service(db: AsyncSessionDep) -> FavoritesService:
    return FavoritesService(db)


async def get_payment_service(request: Request, db: AsyncSessionDep) -> PaymentService:
    """Payment service bound to the gateway configured at startup."""
    return PaymentService(db, request.app.state.payment_gateway)


def get_image_storage(request: Request) -> ImageStorage:
    return request.app.state.image_storage


OptionalUserDep = Annotated[User | None, Depends(get_optional_user)]
CurrentUserDep = Annotated[User, Depends(get_current_user)]
UserManagementServiceDep = Annotated[
    UserManagementService, Depends(get_user_management_service)
]
BreederWorkflowServiceDep = Annotated[
    BreederWorkflowService, Depends(get_breeder_workflow_service)
]
BreederProfileServiceDep = Annotated[
    BreederProfileService, Depends(get_breeder_profile_service)
]
BreederListingServiceDep = Annotated[
    BreederListingService, Depends(get_breeder_listing_service)
]
CatalogServiceDep = Annotated[CatalogService, Depends(get_catalog_service)]
AdoptionServiceDep = Annotated[AdoptionService, Depends(get_adoption_service)]
FavoritesServiceDep = Annotated[FavoritesService, Depends(get_favorites_service)]
PaymentServiceDep = Annotated[PaymentService, Depends(get_payment_service)]
ImageStorageDep = Annotated[ImageStorage, Depends(get_image_storage)]
