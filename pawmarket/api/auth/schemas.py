"""Auth and current-user API schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field

from pawmarket.api.core.messages import APIResponse


class UserModel(BaseModel):
    id: UUID
    email: str
    name: str | None = None
    phone: str | None = None
    phone_verified: bool = False
    avatar_url: str | None = None
    address: str | None = None
    city_id: UUID | None = None
    pincode: str | None = None
    status: str
    is_breeder: bool
    is_admin: bool
    created_at: datetime
    last_login_at: datetime | None = None

    model_config = {"from_attributes": True}


class TokenModel(BaseModel):
    access_token: str
    refresh_token: str
    token_type: str = "bearer"
    expires_in: int
    user: UserModel


class AccessTokenModel(BaseModel):
    access_token: str
    token_type: str = "bearer"
    expires_in: int


class MockLoginRequest(BaseModel):
    email: EmailStr
    name: str | None = Field(None, max_length=200)


class GoogleLoginRequest(BaseModel):
    id_token: str = Field(..., min_length=1)


class RefreshRequest(BaseModel):
    refresh_token: str | None = None


class ProfileUpdateRequest(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=200)
    phone: str | None = Field(None, max_length=20)
    address: str | None = None
    city_id: UUID | None = None
    pincode: str | None = Field(None, max_length=10)


TokenResponse = APIResponse[TokenModel]
AccessTokenResponse = APIResponse[AccessTokenModel]
UserResponse = APIResponse[UserModel]
