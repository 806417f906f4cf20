from uuid import UUID

import structlog
from fastapi import Request, status
from fastapi.responses import JSONResponse
from jose import JWTError

from pawmarket.api.core.constants import ACCESS_TOKEN_COOKIE, SKIP_AUTH_PATHS
from pawmarket.api.core.messages import MessageCode, get_default_message
from pawmarket.database.models import User, UserStatus
from pawmarket.modules.user.tokens import decode_token
from pawmarket.utils.path_helpers import path_has_prefix, path_matches

logger = structlog.get_logger(__name__)


def _invalid_token_response(description: str) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_401_UNAUTHORIZED,
        content={
            "message_code": MessageCode.INVALID_TOKEN.value,
            "message": get_default_message(MessageCode.INVALID_TOKEN),
            "details": {"description": description},
        },
    )


def extract_token(request: Request) -> tuple[str | None, bool]:
    """Return the access token and whether it came from the Authorization header."""
    authorization = request.headers.get("Authorization", "")
    if authorization:
        parts = authorization.split(" ")
        if len(parts) == 2 and parts[0].lower() == "bearer":
            return parts[1], True
        return None, True
    return request.cookies.get(ACCESS_TOKEN_COOKIE), False


async def auth_middleware(request: Request, call_next):
    """Resolve the caller from a bearer token or the access token cookie.

    Sets ``request.state.user`` to the current ``User`` row or ``None``.
    Endpoints decide whether authentication is required. A malformed or
    expired bearer header is rejected with 401, except on the login and
    refresh endpoints; a stale cookie is ignored.
    """
    request.state.user = None

    if path_matches(request.url.path, SKIP_AUTH_PATHS):
        return await call_next(request)

    token, from_header = extract_token(request)
    lenient = path_has_prefix(
        request.url.path, request.app.state.access_gate_settings.ACCESS_GATE_EXEMPT_PATHS
    )

    if from_header and token is None:
        if not lenient:
            return _invalid_token_response(
                "Authorization header must be 'Bearer <token>'"
            )
        return await call_next(request)

    if token:
        try:
            payload = decode_token(token)
        except JWTError as e:
            logger.debug("Token rejected", error=str(e), from_header=from_header)
            if from_header and not lenient:
                return _invalid_token_response("Invalid or expired authentication token")
            return await call_next(request)

        user_id = _parse_subject(payload)
        user = None
        if user_id is not None:
            async with request.app.state.session_factory() as db:
                user = await db.get(User, user_id)

        if user is not None and user.status != UserStatus.DELETED:
            request.state.user = user
            structlog.contextvars.bind_contextvars(user_id=str(user.id))

    return await call_next(request)


def _parse_subject(payload: dict) -> UUID | None:
    try:
        return UUID(payload.get("sub", ""))
    except ValueError:
        return None
