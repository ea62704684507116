import logging
from typing import Optional

from fastapi import Depends
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from database import get_session
from errors import DuplicateUser, InvalidCredentials
from models import User
from utils.passwords import hash_password, verify_password

logger = logging.getLogger(__name__)


class CredentialStore:
    """Persists users and checks their passwords"""

    def __init__(self, session: Session):
        self.session = session

    def find_by_username(self, username: str) -> Optional[User]:
        return self.session.exec(select(User).where(User.username == username)).first()

    def register(self, username: str, password: str) -> User:
        """
        Create a user with a hashed password

        Raises:
            DuplicateUser: If the username is taken
        """
        if self.find_by_username(username) is not None:
            raise DuplicateUser()

        user = User(username=username, password_hash=hash_password(password))
        self.session.add(user)
        try:
            self.session.commit()
        except IntegrityError as exc:
            # lost a race against a concurrent registration of the same name
            self.session.rollback()
            raise DuplicateUser() from exc

        self.session.refresh(user)
        logger.info("Registered user %s", user.id)
        return user

    def authenticate(self, username: str, password: str) -> User:
        """
        Resolve a username/password pair to its user

        Raises:
            InvalidCredentials: For an unknown username or a wrong password alike
        """
        user = self.find_by_username(username)
        if user is None or not verify_password(user.password_hash, password):
            raise InvalidCredentials()
        return user


def get_credential_store(session: Session = Depends(get_session)) -> CredentialStore:
    return CredentialStore(session)
