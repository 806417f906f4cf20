"""JWT issuance and decoding for access and refresh tokens."""

from datetime import datetime, timedelta, timezone

from jose import JWTError, jwt

from pawmarket.api.core.constants import JWT_ALGORITHM
from pawmarket.database.models import User
from pawmarket.utils.settings.auth import AuthSettings

ACCESS = "access"
REFRESH = "refresh"


def user_roles(user: User) -> list[str]:
    roles = ["user"]
    if user.is_breeder:
        roles.append("breeder")
    if user.is_admin:
        roles.append("admin")
    return roles


def _encode(claims: dict, ttl_seconds: int, settings: AuthSettings) -> str:
    now = datetime.now(timezone.utc)
    payload = {
        **claims,
        "iss": settings.JWT_ISSUER,
        "aud": settings.JWT_AUDIENCE,
        "iat": int(now.timestamp()),
        "exp": int((now + timedelta(seconds=ttl_seconds)).timestamp()),
    }
    return jwt.encode(
        payload, settings.JWT_SECRET.get_secret_value(), algorithm=JWT_ALGORITHM
    )


def create_access_token(user: User, settings: AuthSettings | None = None) -> str:
    settings = settings or AuthSettings()
    return _encode(
        {
            "sub": str(user.id),
            "email": user.email,
            "name": user.name or "User",
            "status": str(getattr(user.status, "value", user.status)),
            "roles": user_roles(user),
            "type": ACCESS,
        },
        settings.ACCESS_TOKEN_TTL_SECONDS,
        settings,
    )


def create_refresh_token(user: User, settings: AuthSettings | None = None) -> str:
    settings = settings or AuthSettings()
    return _encode(
        {"sub": str(user.id), "type": REFRESH},
        settings.REFRESH_TOKEN_TTL_SECONDS,
        settings,
    )


def decode_token(
    token: str, expected_type: str = ACCESS, settings: AuthSettings | None = None
) -> dict:
    """Decode and validate a token.

    Raises ``JWTError`` when the signature, issuer, audience or expiry is
    invalid, or when the token is not of the expected type.
    """
    settings = settings or AuthSettings()
    payload = jwt.decode(
        token,
        settings.JWT_SECRET.get_secret_value(),
        algorithms=[JWT_ALGORITHM],
        audience=settings.JWT_AUDIENCE,
        issuer=settings.JWT_ISSUER,
    )
    if payload.get("type") != expected_type:
        raise JWTError(f"Expected a {expected_type} token")
    return payload
