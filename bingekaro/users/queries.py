"""User lookup queries."""
from typing import Optional

from sqlalchemy import or_
from sqlalchemy.orm import Session

from bingekaro.models import User


def get_user(db: Session, user_id: int) -> Optional[User]:
    """Load a user by primary key."""
    return db.query(User).filter(User.id == user_id).first()


def get_user_by_username(db: Session, username: str) -> Optional[User]:
    """Case-insensitive username lookup."""
    return db.query(User).filter(User.username == username.strip().lower()).first()


def get_user_by_identifier(db: Session, identifier: str) -> Optional[User]:
    """Find a user by username or email, case-insensitively."""
    normalized = identifier.strip().lower()
    return (
        db.query(User)
        .filter(or_(User.username == normalized, User.email == normalized))
        .first()
    )


def username_taken(db: Session, username: str, exclude_user_id: Optional[int] = None) -> bool:
    query = db.query(User.id).filter(User.username == username.strip().lower())
    if exclude_user_id is not None:
        query = query.filter(User.id != exclude_user_id)
    return query.first() is not None


def email_taken(db: Session, email: str) -> bool:
    return db.query(User.id).filter(User.email == email.strip().lower()).first() is not None
