"""
Security utilities for secret hashing and JWT token management.

Provides the bcrypt-backed credential store shared by account passwords and
private-list passwords, and JWT token creation/validation.
"""
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Optional

import bcrypt
from jose import ExpiredSignatureError, JWTError, jwt

from bingekaro.config import SECRET_MAX_BYTES
from bingekaro.errors import InvalidInput
from bingekaro.settings import settings

BCRYPT_PREFIXES = ("$2a$", "$2b$", "$2y$")
BCRYPT_HASH_LENGTH = 60

# JWT configuration from centralized settings
SECRET_KEY = settings.jwt_secret_key
ALGORITHM = settings.jwt_algorithm
ACCESS_TOKEN_EXPIRE_MINUTES = settings.jwt_access_token_expire_minutes


def hash_secret(secret: str) -> str:
    """Hash a plaintext secret with a fresh bcrypt salt."""
    if not secret:
        raise InvalidInput("password", "Password cannot be empty")
    encoded = secret.encode('utf-8')
    if len(encoded) > SECRET_MAX_BYTES:
        raise InvalidInput("password", f"Password cannot be longer than {SECRET_MAX_BYTES} bytes")
    salt = bcrypt.gensalt(rounds=settings.bcrypt_rounds)
    return bcrypt.hashpw(encoded, salt).decode('utf-8')


def _well_formed_hash(hashed: str) -> bool:
    return hashed.startswith(BCRYPT_PREFIXES) and len(hashed) == BCRYPT_HASH_LENGTH


def verify_secret(secret: str, hashed: str) -> bool:
    """
    Check a plaintext attempt against a stored bcrypt hash.

    Returns False on mismatch, including attempts too long to have been
    stored. Raises InvalidInput only when the stored hash itself is malformed.
    """
    if not hashed:
        raise InvalidInput("password", "Stored password hash is missing")
    if not _well_formed_hash(hashed):
        raise InvalidInput("password", "Stored password hash is malformed")
    if not secret:
        return False
    encoded = secret.encode('utf-8')
    if len(encoded) > SECRET_MAX_BYTES:
        return False
    try:
        return bcrypt.checkpw(encoded, hashed.encode('utf-8'))
    except ValueError as exc:
        raise InvalidInput("password", "Stored password hash is malformed") from exc


class TokenStatus(str, Enum):
    VALID = "valid"
    INVALID = "invalid"
    EXPIRED = "expired"


@dataclass(frozen=True)
class TokenCheck:
    """Outcome of validating a bearer token."""
    status: TokenStatus
    user_id: Optional[int] = None


def create_access_token(user_id: int, expires_delta: Optional[timedelta] = None) -> str:
    """Create a JWT access token asserting the given user id."""
    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES))
    to_encode = {"sub": str(user_id), "exp": expire}
    return jwt.encode(to_encode, SECRET_KEY, algorithm=ALGORITHM)


def validate_access_token(token: str) -> TokenCheck:
    """Check signature and structure first, then expiry."""
    try:
        payload = jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
    except ExpiredSignatureError:
        return TokenCheck(TokenStatus.EXPIRED)
    except JWTError:
        return TokenCheck(TokenStatus.INVALID)

    try:
        user_id = int(payload.get("sub"))
    except (TypeError, ValueError):
        return TokenCheck(TokenStatus.INVALID)

    return TokenCheck(TokenStatus.VALID, user_id)
