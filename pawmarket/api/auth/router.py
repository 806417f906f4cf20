"""Login, token refresh and current-user endpoints."""

from uuid import UUID

from fastapi import APIRouter, Request, Response, status
from jose import JWTError

from pawmarket.api.auth.schemas import (
    AccessTokenModel,
    AccessTokenResponse,
    GoogleLoginRequest,
    MockLoginRequest,
    ProfileUpdateRequest,
    RefreshRequest,
    TokenModel,
    TokenResponse,
    UserModel,
    UserResponse,
)
from pawmarket.api.core.constants import ACCESS_TOKEN_COOKIE, REFRESH_TOKEN_COOKIE
from pawmarket.api.core.dependencies import CurrentUserDep, UserManagementServiceDep
from pawmarket.api.core.exceptions.base import PawMarketException
from pawmarket.api.core.messages import APIResponse, MessageCode
from pawmarket.database.models import User, UserStatus
from pawmarket.modules.user.google import (
    GoogleAuthNotConfigured,
    GoogleTokenError,
    verify_google_id_token,
)
from pawmarket.modules.user.tokens import (
    REFRESH,
    create_access_token,
    create_refresh_token,
    decode_token,
)
from pawmarket.utils.settings.auth import AuthSettings

router = APIRouter(prefix="/auth", tags=["auth"])


def _set_auth_cookies(
    response: Response, settings: AuthSettings, access_token: str, refresh_token: str | None
) -> None:
    response.set_cookie(
        ACCESS_TOKEN_COOKIE,
        access_token,
        max_age=settings.ACCESS_TOKEN_TTL_SECONDS,
        httponly=True,
        secure=settings.COOKIE_SECURE,
        samesite="lax",
    )
    if refresh_token:
        response.set_cookie(
            REFRESH_TOKEN_COOKIE,
            refresh_token,
            max_age=settings.REFRESH_TOKEN_TTL_SECONDS,
            httponly=True,
            secure=settings.COOKIE_SECURE,
            samesite="lax",
            path="/api/v1/auth",
        )


def _issue_tokens(response: Response, user: User) -> TokenModel:
    settings = AuthSettings()
    access_token = create_access_token(user, settings)
    refresh_token = create_refresh_token(user, settings)
    _set_auth_cookies(response, settings, access_token, refresh_token)
    return TokenModel(
        access_token=access_token,
        refresh_token=refresh_token,
        expires_in=settings.ACCESS_TOKEN_TTL_SECONDS,
        user=UserModel.model_validate(user),
    )


@router.post("/mock", response_model=TokenResponse)
async def mock_login(
    body: MockLoginRequest,
    response: Response,
    user_service: UserManagementServiceDep,
) -> TokenResponse:
    """Development login by email; disabled unless AUTH_MOCK_ENABLED is set."""
    if not AuthSettings().AUTH_MOCK_ENABLED:
        raise PawMarketException(MessageCode.MOCK_AUTH_DISABLED, status.HTTP_404_NOT_FOUND)

    user = await user_service.login_with_email(body.email, body.name)
    return APIResponse.success(
        message_code=MessageCode.LOGGED_IN, data=_issue_tokens(response, user)
    )


@router.post("/google", response_model=TokenResponse)
async def google_login(
    body: GoogleLoginRequest,
    response: Response,
    user_service: UserManagementServiceDep,
) -> TokenResponse:
    try:
        claims = await verify_google_id_token(body.id_token)
    except GoogleAuthNotConfigured as e:
        raise PawMarketException(
            MessageCode.GOOGLE_AUTH_UNAVAILABLE,
            status.HTTP_503_SERVICE_UNAVAILABLE,
        ) from e
    except GoogleTokenError as e:
        raise PawMarketException(
            MessageCode.INVALID_TOKEN,
            status.HTTP_401_UNAUTHORIZED,
            {"description": str(e)},
        ) from e

    user = await user_service.login_with_google(claims)
    return APIResponse.success(
        message_code=MessageCode.LOGGED_IN, data=_issue_tokens(response, user)
    )


@router.post("/refresh", response_model=AccessTokenResponse)
async def refresh_token(
    request: Request,
    response: Response,
    user_service: UserManagementServiceDep,
    body: RefreshRequest | None = None,
) -> AccessTokenResponse:
    """Exchange a refresh token (body or cookie) for a new access token."""
    token = (body.refresh_token if body else None) or request.cookies.get(
        REFRESH_TOKEN_COOKIE
    )
    if not token:
        raise PawMarketException(MessageCode.INVALID_TOKEN, status.HTTP_401_UNAUTHORIZED)

    settings = AuthSettings()
    try:
        payload = decode_token(token, expected_type=REFRESH, settings=settings)
        user = await user_service.get_user_by_id(UUID(payload.get("sub", "")))
    except (JWTError, ValueError) as e:
        raise PawMarketException(
            MessageCode.INVALID_TOKEN, status.HTTP_401_UNAUTHORIZED
        ) from e

    if user is None or user.status == UserStatus.DELETED:
        raise PawMarketException(MessageCode.INVALID_TOKEN, status.HTTP_401_UNAUTHORIZED)

    access_token = create_access_token(user, settings)
    _set_auth_cookies(response, settings, access_token, None)
    return APIResponse.success(
        message_code=MessageCode.TOKEN_REFRESHED,
        data=AccessTokenModel(
            access_token=access_token, expires_in=settings.ACCESS_TOKEN_TTL_SECONDS
        ),
    )


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
async def logout() -> Response:
    response = Response(status_code=status.HTTP_204_NO_CONTENT)
    response.delete_cookie(ACCESS_TOKEN_COOKIE)
    response.delete_cookie(REFRESH_TOKEN_COOKIE, path="/api/v1/auth")
    return response


@router.get("/me", response_model=UserResponse)
async def get_me(current_user: CurrentUserDep) -> UserResponse:
    return APIResponse.success(data=UserModel.model_validate(current_user))


@router.put("/me", response_model=UserResponse)
async def update_me(
    body: ProfileUpdateRequest,
    current_user: CurrentUserDep,
    user_service: UserManagementServiceDep,
) -> UserResponse:
    user = await user_service.update_profile(
        current_user, body.model_dump(exclude_unset=True)
    )
    return APIResponse.success(
        message_code=MessageCode.USER_UPDATED, data=UserModel.model_validate(user)
    )


@router.delete("/me", status_code=status.HTTP_204_NO_CONTENT)
async def delete_me(
    current_user: CurrentUserDep,
    user_service: UserManagementServiceDep,
) -> Response:
    await user_service.soft_delete(current_user)
    response = Response(status_code=status.HTTP_204_NO_CONTENT)
    response.delete_cookie(ACCESS_TOKEN_COOKIE)
    response.delete_cookie(REFRESH_TOKEN_COOKIE, path="/api/v1/auth")
    return response
