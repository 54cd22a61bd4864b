"""
User Repositories

Storage seam for the user service. Every store implements the same three
operations (list, find_by_username, insert) so the service never knows which
backing store it runs against.

Stores:
- fixture: two hardcoded users, rebuilt with fresh ids on every call; inserts are discarded
- memory:  process-lifetime dict keyed by username
- sql:     SQLModel table, one session per request
"""

import logging
import uuid
from abc import ABC, abstractmethod
from typing import Dict, List, Optional

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from app.models.user import User

logger = logging.getLogger(__name__)

USER_STORES = ("fixture", "memory", "sql")

FIXTURE_USERS = (
    ("john-doe", "john@test.com"),
    ("jane-doe", "jane@test.com"),
)


class DuplicateUsernameError(Exception):
    """Raised by a store when an insert collides with an existing username"""

    def __init__(self, username: str):
        super().__init__(f"Username '{username}' is already stored")
        self.username = username


class UserRepository(ABC):
    @abstractmethod
    def list(self) -> List[User]:
        """Return every user in the store"""

    @abstractmethod
    def find_by_username(self, username: str) -> Optional[User]:
        """Return the user with exactly this username (case-sensitive), or None"""

    @abstractmethod
    def insert(self, user: User) -> User:
        """
        Store a new user and return it with an id assigned.

        Raises:
            DuplicateUsernameError: If the username is already stored
        """


class FixtureUserRepository(UserRepository):
    """Fake store: nothing survives past the call that built it."""

    def list(self) -> List[User]:
        return [User.build(username=username, email=email) for username, email in FIXTURE_USERS]

    def find_by_username(self, username: str) -> Optional[User]:
        for user in self.list():
            if user.username == username:
                return user
        return None

    def insert(self, user: User) -> User:
        if user.id is None:
            user.id = uuid.uuid4()
        logger.debug("Fixture store discarding insert of '%s'", user.username)
        return user


class InMemoryUserRepository(UserRepository):
    def __init__(self) -> None:
        self._users: Dict[str, User] = {}

    def list(self) -> List[User]:
        return list(self._users.values())

    def find_by_username(self, username: str) -> Optional[User]:
        return self._users.get(username)

    def insert(self, user: User) -> User:
        if user.username in self._users:
            raise DuplicateUsernameError(user.username)
        if user.id is None:
            user.id = uuid.uuid4()
        self._users[user.username] = user
        return user


class SqlUserRepository(UserRepository):
    def __init__(self, session: Session):
        self.session = session

    def list(self) -> List[User]:
        return list(self.session.exec(select(User)).all())

    def find_by_username(self, username: str) -> Optional[User]:
        return self.session.exec(select(User).where(User.username == username)).first()

    def insert(self, user: User) -> User:
        if user.id is None:
            user.id = uuid.uuid4()
        try:
            self.session.add(user)
            self.session.commit()
        except IntegrityError as e:
            self.session.rollback()
            raise DuplicateUsernameError(user.username) from e
        self.session.refresh(user)
        return user


# Shared across requests for the lifetime of the process
_memory_repository = InMemoryUserRepository()


def build_user_repository(store: str, session: Optional[Session] = None) -> UserRepository:
    """
    Resolve a store name to a repository instance.

    Raises:
        ValueError: If the store name is unknown, or "sql" is requested without a session
    """
    if store == "fixture":
        return FixtureUserRepository()
    if store == "memory":
        return _memory_repository
    if store == "sql":
        if session is None:
            raise ValueError("The sql user store requires a database session")
        return SqlUserRepository(session)
    raise ValueError(f"Unknown user store '{store}'. Expected one of: {', '.join(USER_STORES)}")
