from app.models.user import User, UserBase, UserDto

__all__ = [
    "User",
    "UserBase",
    "UserDto",
]
