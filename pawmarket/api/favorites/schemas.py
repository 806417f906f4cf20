"""Favorites API schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from pawmarket.api.adoption.schemas import AdoptionListingModel
from pawmarket.api.core.messages import APIResponse


class FavoriteModel(BaseModel):
    id: UUID
    adoption_listing_id: UUID
    created_at: datetime
    listing: AdoptionListingModel

    model_config = {"from_attributes": True}


FavoriteResponse = APIResponse[FavoriteModel]
FavoriteListResponse = APIResponse[list[FavoriteModel]]
