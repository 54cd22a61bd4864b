"""Conversion between the User entity and its external UserDto form."""

from app.models.user import User, UserDto


def to_dto(user: User) -> UserDto:
    """Project a user onto its external form (drops id)"""
    return UserDto(username=user.username, email=user.email)


def to_entity(user_dto: UserDto) -> User:
    """Build an unsaved user from its external form (id left unset)"""
    return User(username=user_dto.username, email=user_dto.email)
