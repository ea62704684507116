import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.exc import SQLAlchemyError
from datetime import timedelta

from config import Settings, get_settings
from errors import InternalFailure, InvalidCredentials, MissingCredentials
from schemas import Credentials, MessageResponse, TokenResponse
from stores.credentials import CredentialStore, get_credential_store
from utils.jwt import issue_jwt

logger = logging.getLogger(__name__)

router = APIRouter()


def _require_credentials(credentials: Credentials):
    if not credentials.username or not credentials.password:
        raise MissingCredentials()


@router.post("/register", status_code=status.HTTP_201_CREATED)
def register(
    credentials: Credentials,
    store: CredentialStore = Depends(get_credential_store),
) -> MessageResponse:
    """Create an account"""
    _require_credentials(credentials)

    try:
        store.register(credentials.username, credentials.password)
    except SQLAlchemyError as exc:
        logger.exception("Error during registration")
        raise InternalFailure("An error occurred during registration") from exc

    return MessageResponse(message="Registration successful!")


@router.post("/login")
def login(
    credentials: Credentials,
    store: CredentialStore = Depends(get_credential_store),
    settings: Settings = Depends(get_settings),
) -> TokenResponse:
    """Exchange a username and password for a bearer token valid for one hour"""
    _require_credentials(credentials)

    try:
        user = store.authenticate(credentials.username, credentials.password)
    except InvalidCredentials:
        logger.info("Failed login attempt")
        raise
    except SQLAlchemyError as exc:
        logger.exception("Error during login")
        raise InternalFailure("An error occurred during login") from exc

    token = issue_jwt(
        user.id,
        settings.jwt_secret,
        expires_in=timedelta(seconds=settings.token_ttl_seconds),
    )
    logger.info("Issued token for user %s", user.id)
    return TokenResponse(token=token)
