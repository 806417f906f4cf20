from fastapi import Request, status
from fastapi.responses import JSONResponse

from pawmarket.api.core.messages import MessageCode, get_default_message
from pawmarket.database.models import User
from pawmarket.utils.logger import get_logger
from pawmarket.utils.path_helpers import path_has_prefix
from pawmarket.utils.settings.access_gate import AccessGateSettings

logger = get_logger(__name__)


def is_bypass_identity(user: User, settings: AccessGateSettings) -> bool:
    bypass_emails = {email.lower() for email in settings.ACCESS_GATE_BYPASS_EMAILS}
    return (
        user.email.lower() in bypass_emails
        or user.id in settings.ACCESS_GATE_BYPASS_USER_IDS
    )


def should_block(user: User | None, path: str, settings: AccessGateSettings) -> bool:
    if user is None or not user.is_blocked:
        return False
    if path_has_prefix(path, settings.ACCESS_GATE_EXEMPT_PATHS):
        return False
    return not is_bypass_identity(user, settings)


async def access_gate_middleware(request: Request, call_next):
    """Short-circuit requests from suspended or banned accounts.

    Runs after ``auth_middleware``; the user's status is the value read from
    the database for this request, not the claim baked into the token.
    """
    settings: AccessGateSettings = request.app.state.access_gate_settings
    user = getattr(request.state, "user", None)

    if should_block(user, request.url.path, settings):
        logger.warning(
            "Blocked request from suspended account",
            user_id=str(user.id),
            status=user.status,
            path=request.url.path,
        )
        return JSONResponse(
            status_code=status.HTTP_403_FORBIDDEN,
            content={
                "message_code": MessageCode.ACCOUNT_SUSPENDED.value,
                "message": get_default_message(MessageCode.ACCOUNT_SUSPENDED),
                "details": {},
            },
        )

    return await call_next(request)
