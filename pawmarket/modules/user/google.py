import asyncio

import requests
from google.auth import exceptions as google_exceptions
from google.auth.transport import requests as google_requests
from google.oauth2 import id_token

from pawmarket.utils.logger import get_logger
from pawmarket.utils.settings.auth import AuthSettings

logger = get_logger(__name__)


class GoogleTokenError(Exception):
    pass


class GoogleAuthNotConfigured(Exception):
    pass


def _verify(token: str, client_id: str | None) -> dict:
    session = requests.Session()
    try:
        return id_token.verify_oauth2_token(
            token, google_requests.Request(session=session), client_id
        )
    finally:
        session.close()


async def verify_google_id_token(token: str) -> dict:
    """Verify a Google ID token and return its claims.

    The google-auth verifier is blocking (it fetches Google's certificates),
    so it runs in a worker thread. Without a configured client id the
    audience cannot be checked, so verification is refused outright.
    """
    client_id = AuthSettings().GOOGLE_CLIENT_ID
    if not client_id:
        raise GoogleAuthNotConfigured("GOOGLE_CLIENT_ID is not configured")
    try:
        claims = await asyncio.to_thread(_verify, token, client_id)
    except (
        ValueError,
        google_exceptions.GoogleAuthError,
        requests.RequestException,
    ) as e:
        logger.warning("Google ID token verification failed", error=str(e))
        raise GoogleTokenError(str(e)) from e

    if not claims.get("email"):
        raise GoogleTokenError("Google token has no email claim")
    # Older tokens carry the flag as a string
    if claims.get("email_verified") not in (True, "true"):
        raise GoogleTokenError("Google account email is not verified")
    return claims
