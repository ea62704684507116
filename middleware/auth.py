import logging

from fastapi import Request, Depends

from config import Settings, get_settings
from errors import AuthenticationRequired, Forbidden
from utils.jwt import TokenError, verify_jwt

logger = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "


async def verify_jwt_middleware(request: Request, settings: Settings = Depends(get_settings)):
    """
    Middleware to verify JWT token in Authorization header

    Args:
        request: FastAPI request object
        settings: Settings holding the signing secret

    Raises:
        AuthenticationRequired: If no token is supplied (401)
        Forbidden: If the token is invalid or expired (403)
    """
    auth_header = request.headers.get("Authorization", "").strip()

    token = auth_header
    if auth_header.startswith(BEARER_PREFIX):
        token = auth_header[len(BEARER_PREFIX):].strip()
    elif auth_header == BEARER_PREFIX.strip():
        token = ""

    if not token:
        logger.warning("No bearer token on %s %s", request.method, request.url.path)
        raise AuthenticationRequired()

    try:
        user_id = verify_jwt(token, settings.jwt_secret)
    except TokenError as exc:
        logger.warning("Rejected token on %s %s: %s", request.method, request.url.path, exc)
        raise Forbidden() from exc

    # Attach user info to request state
    request.state.user_id = user_id
