import jwt
from datetime import datetime, timedelta, timezone
from typing import Optional

ALGORITHM = "HS256"
DEFAULT_EXPIRES_IN = timedelta(hours=1)


class TokenError(Exception):
    """Token could not be verified"""


class InvalidToken(TokenError):
    """Signature invalid, token malformed or subject missing"""


class ExpiredToken(TokenError):
    """Token is past its expiry"""


def issue_jwt(
    user_id: str,
    secret: str,
    expires_in: timedelta = DEFAULT_EXPIRES_IN,
    now: Optional[datetime] = None,
) -> str:
    """
    Sign a bearer token for a user

    Args:
        user_id: Identifier stored in the "sub" claim
        secret: HS256 signing secret
        expires_in: Lifetime counted from issuance
        now: Issuance time, defaults to the current UTC time

    Returns:
        Encoded JWT string
    """
    issued_at = now or datetime.now(timezone.utc)
    payload = {
        "sub": user_id,
        "iat": issued_at,
        "exp": issued_at + expires_in,
    }
    return jwt.encode(payload, secret, algorithm=ALGORITHM)


def verify_jwt(token: str, secret: str) -> str:
    """
    Verify JWT token and return the user ID it was issued for

    The user is not looked up; a token stays valid until it expires.

    Args:
        token: JWT token string
        secret: HS256 signing secret

    Returns:
        User ID from the "sub" claim

    Raises:
        ExpiredToken: If the token is past its expiry
        InvalidToken: If the token is malformed, tampered with or has no subject
    """
    try:
        payload = jwt.decode(
            token,
            secret,
            algorithms=[ALGORITHM],
            options={"require": ["exp", "sub"]},
        )
    except jwt.ExpiredSignatureError as exc:
        raise ExpiredToken("Token has expired") from exc
    except jwt.InvalidTokenError as exc:
        raise InvalidToken(str(exc)) from exc

    user_id = payload.get("sub")
    if not user_id or not isinstance(user_id, str):
        raise InvalidToken("Token has no subject")

    return user_id
