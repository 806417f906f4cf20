from uuid import UUID

from fastapi import APIRouter, Response, status

from pawmarket.api.core.dependencies import CurrentUserDep, FavoritesServiceDep
from pawmarket.api.core.messages import APIResponse, MessageCode
from pawmarket.api.favorites.schemas import (
    FavoriteListResponse,
    FavoriteModel,
    FavoriteResponse,
)

router = APIRouter(prefix="/favorites", tags=["favorites"])


@router.get("", response_model=FavoriteListResponse)
async def list_favorites(
    current_user: CurrentUserDep,
    favorites: FavoritesServiceDep,
) -> FavoriteListResponse:
    items = await favorites.list_favorites(current_user.id)
    return APIResponse.success(data=[FavoriteModel.model_validate(f) for f in items])


@router.post("/{listing_id}", response_model=FavoriteResponse)
async def add_favorite(
    listing_id: UUID,
    current_user: CurrentUserDep,
    favorites: FavoritesServiceDep,
) -> FavoriteResponse:
    favorite = await favorites.add_favorite(current_user.id, listing_id)
    return APIResponse.success(
        message_code=MessageCode.FAVORITE_ADDED,
        data=FavoriteModel.model_validate(favorite),
    )


@router.delete("/{listing_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_favorite(
    listing_id: UUID,
    current_user: CurrentUserDep,
    favorites: FavoritesServiceDep,
) -> Response:
    await favorites.remove_favorite(current_user.id, listing_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
