"""
FastAPI dependencies for authentication.

Two binding levels are offered:

* ``get_current_user`` (Required): rejects the request unless it carries a
  valid bearer token for an active user.
* ``get_optional_current_user`` (Optional): attaches the user when a valid
  token is present and otherwise lets the request through anonymously.

Routes that need neither simply do not depend on them.

Usage:
    @router.get("/protected")
    def protected_route(user: User = Depends(get_current_user)):
        return {"message": f"Hello, {user.username}"}
"""
import logging
from typing import Optional

from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from bingekaro.auth.security import TokenStatus, validate_access_token
from bingekaro.database import get_db
from bingekaro.errors import Forbidden, Unauthenticated
from bingekaro.models import User
from bingekaro.users.queries import get_user

logger = logging.getLogger(__name__)

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/v1/auth/login", auto_error=False)


def _resolve_token(token: Optional[str], db: Session) -> Optional[User]:
    """Return the user a token asserts, or None when the token is unusable."""
    if not token:
        return None

    check = validate_access_token(token)
    if check.status is TokenStatus.EXPIRED:
        logger.debug("Rejected expired access token")
        return None
    if check.status is not TokenStatus.VALID:
        return None

    return get_user(db, check.user_id)


def get_current_user(
    token: Optional[str] = Depends(oauth2_scheme),
    db: Session = Depends(get_db)
) -> User:
    """
    Get the current authenticated user from JWT token.

    Raises:
        Unauthenticated: If token is missing, invalid, expired or the user is gone
        Forbidden: If the user account is deactivated
    """
    if not token:
        raise Unauthenticated("Not authenticated")

    check = validate_access_token(token)
    if check.status is TokenStatus.EXPIRED:
        raise Unauthenticated("Token expired")
    if check.status is not TokenStatus.VALID:
        raise Unauthenticated()

    user = get_user(db, check.user_id)
    if user is None:
        raise Unauthenticated()

    if not user.is_active:
        raise Forbidden("Inactive user")

    return user


def get_optional_current_user(
    token: Optional[str] = Depends(oauth2_scheme),
    db: Session = Depends(get_db)
) -> Optional[User]:
    """Get the current user if a valid token is present, else None."""
    user = _resolve_token(token, db)
    if user is None or not user.is_active:
        return None
    return user
