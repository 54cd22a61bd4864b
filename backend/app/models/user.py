import uuid
from typing import Optional

from sqlmodel import Field, SQLModel


class UserBase(SQLModel):
    username: str
    email: str


class User(UserBase, table=True):
    __tablename__ = "users"

    id: Optional[uuid.UUID] = Field(default=None, primary_key=True)
    username: str = Field(index=True, unique=True)  # Unique within the active user set
    email: str

    @classmethod
    def build(cls, username: str, email: str, id: Optional[uuid.UUID] = None) -> "User":
        """Construct a user, generating a fresh id when none is given"""
        return cls(id=id or uuid.uuid4(), username=username, email=email)


class UserDto(UserBase):
    """External representation of a user. The id never leaves the service."""
