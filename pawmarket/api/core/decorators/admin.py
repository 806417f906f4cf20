from functools import wraps

from fastapi import Request, status

from pawmarket.api.core.exceptions.base import PawMarketException
from pawmarket.api.core.messages import MessageCode
from pawmarket.utils.logger import get_logger

logger = get_logger(__name__)


def admin():
    """Restrict an endpoint to users with ``is_admin`` set.

    The endpoint must accept a ``Request`` argument; the user is read from
    ``request.state.user`` as populated by the auth middleware.
    """

    def decorator(func):
        @wraps(func)
        async def wrapper(*args, **kwargs):
            request = None

            for arg in args:
                if isinstance(arg, Request):
                    request = arg
                    break

            for value in kwargs.values():
                if isinstance(value, Request):
                    request = value
                    break

            if not request:
                raise PawMarketException(
                    MessageCode.AUTH_REQUIRED,
                    status.HTTP_401_UNAUTHORIZED,
                    {"description": "Request object not found"},
                )

            user = getattr(request.state, "user", None)

            if not user:
                raise PawMarketException(
                    MessageCode.AUTH_REQUIRED,
                    status.HTTP_401_UNAUTHORIZED,
                    {"description": "Authentication required"},
                )

            if not user.is_admin:
                logger.warning(
                    "Unauthorized admin access attempt",
                    user_id=str(user.id),
                    endpoint=request.url.path,
                )
                raise PawMarketException(
                    MessageCode.ADMIN_REQUIRED, status.HTTP_403_FORBIDDEN
                )

            return await func(*args, **kwargs)

        return wrapper

    return decorator
