"""
User Service

List, lookup and create operations over a UserRepository. Each operation
returns a ServiceResult pairing an HTTP-style status with the DTO payload;
lookup misses and duplicate usernames raise instead.
"""

import logging
from dataclasses import dataclass
from http import HTTPStatus
from typing import Generic, List, TypeVar

from app.models.user import UserDto
from app.repositories.user_repository import DuplicateUsernameError, UserRepository
from app.services.user_mapper import to_dto, to_entity

logger = logging.getLogger(__name__)

T = TypeVar("T")


class UserServiceError(Exception):
    """Base class for user service failures"""

    def __init__(self, username: str, message: str):
        super().__init__(message)
        self.username = username


class UserNotFoundError(UserServiceError):
    def __init__(self, username: str):
        super().__init__(username, f"User '{username}' not found")


class UserAlreadyExistsError(UserServiceError):
    def __init__(self, username: str):
        super().__init__(username, f"User '{username}' already exists")


@dataclass(frozen=True)
class ServiceResult(Generic[T]):
    status_code: int
    payload: T


class UserService:
    def __init__(self, repository: UserRepository):
        self.repository = repository

    def list_users(self) -> ServiceResult[List[UserDto]]:
        users = self.repository.list()
        return ServiceResult(HTTPStatus.OK, [to_dto(user) for user in users])

    def get_user_by_username(self, username: str) -> ServiceResult[UserDto]:
        """
        Look up a single user by exact, case-sensitive username.

        Raises:
            UserNotFoundError: If no user has this username
        """
        user = self.repository.find_by_username(username)
        if user is None:
            logger.warning("User lookup failed: '%s' not found", username)
            raise UserNotFoundError(username)
        return ServiceResult(HTTPStatus.OK, to_dto(user))

    def create_user(self, user_dto: UserDto) -> ServiceResult[UserDto]:
        """
        Create a user from its external form.

        The duplicate check runs against the store's current users. Whether the
        new user is kept depends on the store; the fixture store keeps nothing.

        Raises:
            UserAlreadyExistsError: If the username is already taken
        """
        new_user = to_entity(user_dto)

        if self.repository.find_by_username(user_dto.username) is not None:
            logger.warning("Refusing to create user: '%s' already exists", user_dto.username)
            raise UserAlreadyExistsError(user_dto.username)

        try:
            saved = self.repository.insert(new_user)
        except DuplicateUsernameError as e:
            # Lost a race with another insert of the same username
            logger.warning("Refusing to create user: '%s' already exists", user_dto.username)
            raise UserAlreadyExistsError(user_dto.username) from e

        logger.info("Created user '%s' (id=%s)", saved.username, saved.id)
        return ServiceResult(HTTPStatus.CREATED, to_dto(saved))
