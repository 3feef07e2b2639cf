"""
Pydantic schemas for authentication requests and responses.

Note: Login uses OAuth2PasswordRequestForm (username + password form data),
where ``username`` may hold either a username or an email address.
"""
from pydantic import BaseModel, EmailStr, Field

from bingekaro.config import (
    DISPLAY_NAME_MAX_LENGTH,
    DISPLAY_NAME_MIN_LENGTH,
    PASSWORD_MIN_LENGTH,
    SECRET_MAX_BYTES,
    USERNAME_MAX_LENGTH,
    USERNAME_MIN_LENGTH,
    USERNAME_PATTERN,
)
from bingekaro.users.schemas import UserPublic


class UserCreate(BaseModel):
    """Schema for user registration request."""
    display_name: str = Field(
        ...,
        min_length=DISPLAY_NAME_MIN_LENGTH,
        max_length=DISPLAY_NAME_MAX_LENGTH,
    )
    username: str = Field(
        ...,
        min_length=USERNAME_MIN_LENGTH,
        max_length=USERNAME_MAX_LENGTH,
        pattern=USERNAME_PATTERN,
        description="Letters, numbers and underscores only",
    )
    email: EmailStr
    password: str = Field(
        ...,
        min_length=PASSWORD_MIN_LENGTH,
        max_length=SECRET_MAX_BYTES,
        description=f"Password must be at least {PASSWORD_MIN_LENGTH} characters",
    )


class Token(BaseModel):
    """Schema for JWT token response."""
    access_token: str
    token_type: str = "bearer"


class AuthResponse(Token):
    """Token plus the authenticated user's own profile."""
    user: UserPublic


class UsernameCheck(BaseModel):
    username: str = Field(
        ...,
        min_length=USERNAME_MIN_LENGTH,
        max_length=USERNAME_MAX_LENGTH,
        pattern=USERNAME_PATTERN,
    )


class EmailCheck(BaseModel):
    email: EmailStr


class AvailabilityResponse(BaseModel):
    available: bool
