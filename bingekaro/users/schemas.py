"""Pydantic schemas for user profiles.

Each view is an explicit allow-list of fields; the password hash has no
field here and therefore can never be serialized.
"""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from bingekaro.config import (
    BIO_MAX_LENGTH,
    DISPLAY_NAME_MAX_LENGTH,
    DISPLAY_NAME_MIN_LENGTH,
    PASSWORD_MIN_LENGTH,
    SECRET_MAX_BYTES,
    USERNAME_MAX_LENGTH,
    USERNAME_MIN_LENGTH,
    USERNAME_PATTERN,
)
from bingekaro.models import User
from bingekaro.users.storage import avatar_url


class UserProfile(BaseModel):
    """What anyone may see about a user."""
    id: int
    username: str
    display_name: str
    bio: str
    avatar_url: Optional[str] = None
    created_at: datetime

    @classmethod
    def from_user(cls, user: User) -> "UserProfile":
        return cls(
            id=user.id,
            username=user.username,
            display_name=user.display_name,
            bio=user.bio or "",
            avatar_url=avatar_url(user.avatar_filename),
            created_at=user.created_at,
        )


class UserPublic(UserProfile):
    """A user's view of their own account."""
    email: str
    is_active: bool
    last_login_at: Optional[datetime] = None

    @classmethod
    def from_user(cls, user: User) -> "UserPublic":
        return cls(
            id=user.id,
            username=user.username,
            display_name=user.display_name,
            bio=user.bio or "",
            avatar_url=avatar_url(user.avatar_filename),
            created_at=user.created_at,
            email=user.email,
            is_active=user.is_active,
            last_login_at=user.last_login_at,
        )


class ProfileUpdate(BaseModel):
    """Partial profile update; omitted fields are left unchanged."""
    display_name: Optional[str] = Field(
        None,
        min_length=DISPLAY_NAME_MIN_LENGTH,
        max_length=DISPLAY_NAME_MAX_LENGTH,
    )
    username: Optional[str] = Field(
        None,
        min_length=USERNAME_MIN_LENGTH,
        max_length=USERNAME_MAX_LENGTH,
        pattern=USERNAME_PATTERN,
    )
    bio: Optional[str] = Field(None, max_length=BIO_MAX_LENGTH)


class PasswordChange(BaseModel):
    current_password: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=PASSWORD_MIN_LENGTH, max_length=SECRET_MAX_BYTES)


class MessageResponse(BaseModel):
    """Generic success message response."""
    message: str
