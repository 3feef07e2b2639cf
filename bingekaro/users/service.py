"""Account lifecycle: registration, login, profile, password and avatar changes."""
import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from bingekaro.auth.security import hash_secret, verify_secret
from bingekaro.errors import Conflict, NotFound, Unauthenticated, ValidationError
from bingekaro.models import User, utcnow
from bingekaro.users import storage
from bingekaro.users.queries import (
    email_taken,
    get_user_by_identifier,
    get_user_by_username,
    username_taken,
)

logger = logging.getLogger(__name__)


def register_user(
    db: Session,
    display_name: str,
    username: str,
    email: str,
    password: str,
) -> User:
    """Create an account. Username and email are unique case-insensitively."""
    username = username.strip().lower()
    email = email.strip().lower()

    if username_taken(db, username):
        raise Conflict("Username is already taken")
    if email_taken(db, email):
        raise Conflict("Email is already registered")

    user = User(
        display_name=display_name.strip(),
        username=username,
        email=email,
        hashed_password=hash_secret(password),
        bio="",
        is_active=True,
        last_login_at=utcnow(),
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        # Lost a race with a concurrent registration
        db.rollback()
        raise Conflict("User with this username or email already exists")
    db.refresh(user)

    logger.info(f"Registered user {user.id} ({user.username})")
    return user


def authenticate(db: Session, identifier: str, password: str) -> User:
    """Verify login credentials and stamp the login time."""
    user = get_user_by_identifier(db, identifier)
    if user is None:
        raise Unauthenticated("Incorrect username or password")

    if not user.is_active:
        raise Unauthenticated("Account is deactivated")

    if not verify_secret(password, user.hashed_password):
        raise Unauthenticated("Incorrect username or password")

    user.last_login_at = utcnow()
    db.commit()
    db.refresh(user)

    logger.info(f"User {user.id} logged in")
    return user


def get_active_profile(db: Session, username: str) -> User:
    """Resolve a username to an active user, hiding deactivated accounts."""
    user = get_user_by_username(db, username)
    if user is None or not user.is_active:
        raise NotFound("User not found")
    return user


def update_profile(
    db: Session,
    user: User,
    display_name: Optional[str] = None,
    username: Optional[str] = None,
    bio: Optional[str] = None,
) -> User:
    """Apply a partial profile update."""
    if username is not None:
        normalized = username.strip().lower()
        if normalized != user.username:
            if username_taken(db, normalized, exclude_user_id=user.id):
                raise Conflict("Username is already taken")
            user.username = normalized

    if display_name is not None:
        user.display_name = display_name.strip()
    if bio is not None:
        user.bio = bio.strip()

    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise Conflict("Username is already taken")
    db.refresh(user)

    logger.info(f"User {user.id} updated profile")
    return user


def change_password(db: Session, user: User, current_password: str, new_password: str) -> None:
    """Replace the account password after checking the current one."""
    if not verify_secret(current_password, user.hashed_password):
        raise ValidationError("current_password", "Current password is incorrect")

    user.hashed_password = hash_secret(new_password)
    db.commit()

    logger.info(f"User {user.id} changed password")


def set_avatar(db: Session, user: User, content: bytes, content_type: Optional[str]) -> User:
    """Store a new profile picture and drop the previous file."""
    filename = storage.save_avatar(content, content_type)
    previous = user.avatar_filename

    user.avatar_filename = filename
    db.commit()
    db.refresh(user)

    storage.delete_avatar(previous)
    return user


def remove_avatar(db: Session, user: User) -> User:
    """Clear the profile picture reference and delete the file."""
    if not user.avatar_filename:
        raise ValidationError("avatar", "No profile picture to remove")

    previous = user.avatar_filename
    user.avatar_filename = None
    db.commit()
    db.refresh(user)

    storage.delete_avatar(previous)
    return user


def deactivate(db: Session, user: User) -> None:
    """Soft-delete an account: it can no longer log in or be seen."""
    user.is_active = False
    db.commit()

    logger.info(f"User {user.id} deactivated account")
