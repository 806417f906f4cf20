"""Admin API schemas."""

from datetime import datetime

from pydantic import BaseModel, Field

from pawmarket.api.auth.schemas import UserModel
from pawmarket.api.breeders.schemas import (
    BreederApplicationModel,
    BreederProfileModel,
)
from pawmarket.api.core.messages import APIResponse, Paginated
from pawmarket.database.models import UserStatus


class AdminUserModel(UserModel):
    suspended_at: datetime | None = None
    suspend_reason: str | None = None


class UserStatusRequest(BaseModel):
    status: UserStatus
    reason: str | None = Field(None, max_length=500)


class RejectApplicationRequest(BaseModel):
    reason: str = Field(..., min_length=1, max_length=2000)


class RequestInfoRequest(BaseModel):
    note: str = Field(..., min_length=1, max_length=2000)


class ApplicationStatsModel(BaseModel):
    pending: int = 0
    approved: int = 0
    rejected: int = 0
    info_requested: int = 0
    draft: int = 0
    total: int = 0


AdminUserPageResponse = APIResponse[Paginated[AdminUserModel]]
AdminUserResponse = APIResponse[AdminUserModel]
ApplicationStatsResponse = APIResponse[ApplicationStatsModel]
ApplicationListResponse = APIResponse[list[BreederApplicationModel]]
ApplicationResponse = APIResponse[BreederApplicationModel]
ApprovedProfileResponse = APIResponse[BreederProfileModel]
