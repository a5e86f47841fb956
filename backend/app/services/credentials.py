"""Credential checks and user creation."""

import logging
from functools import lru_cache

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from app.auth import hash_password, verify_password
from app.errors import DuplicateUsername, InvalidCredentials
from app.models.user import User

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def _dummy_hash() -> str:
    return hash_password("not-a-real-password")


def get_user_by_username(session: Session, username: str) -> User | None:
    return session.exec(select(User).where(User.username == username)).first()


def register(session: Session, username: str, email: str, password: str) -> User:
    """Create a user with a bcrypt-hashed password.

    Raises ``DuplicateUsername`` when the username is taken, including when a
    concurrent registration wins the race on the unique index.
    """
    if get_user_by_username(session, username) is not None:
        logger.debug(f"Registration rejected, username taken: {username}")
        raise DuplicateUsername()

    user = User(username=username, email=email, password_hash=hash_password(password))
    session.add(user)
    try:
        session.commit()
    except IntegrityError:
        session.rollback()
        logger.debug(f"Registration rejected, username taken: {username}")
        raise DuplicateUsername()
    session.refresh(user)
    logger.info(f"Registered user {username} (id={user.id})")
    return user


def authenticate(session: Session, username: str, password: str) -> User:
    """Return the user whose credentials match, else raise ``InvalidCredentials``.

    An unknown username still pays for one bcrypt check, so neither the
    response nor its timing tells the caller which half was wrong.
    """
    user = get_user_by_username(session, username)
    if user is None:
        verify_password(password, _dummy_hash())
        logger.debug(f"Failed login for {username}")
        raise InvalidCredentials()
    if not verify_password(password, user.password_hash):
        logger.debug(f"Failed login for {username}")
        raise InvalidCredentials()
    return user
