"""Profile endpoints for the authenticated user, plus public profiles."""
import logging

from fastapi import APIRouter, Depends, File, UploadFile
from sqlalchemy.orm import Session

from bingekaro.auth.dependencies import get_current_user
from bingekaro.database import get_db
from bingekaro.models import User
from bingekaro.users import service
from bingekaro.users.schemas import (
    MessageResponse,
    PasswordChange,
    ProfileUpdate,
    UserProfile,
    UserPublic,
)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/users", tags=["Users"])


@router.get("/profile", response_model=UserPublic)
def get_profile(current_user: User = Depends(get_current_user)):
    return UserPublic.from_user(current_user)


@router.put("/profile", response_model=UserPublic)
def update_profile(
    update: ProfileUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Update display name, username or bio."""
    user = service.update_profile(
        db,
        current_user,
        display_name=update.display_name,
        username=update.username,
        bio=update.bio,
    )
    return UserPublic.from_user(user)


@router.put("/password", response_model=MessageResponse)
def change_password(
    body: PasswordChange,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    service.change_password(db, current_user, body.current_password, body.new_password)
    return MessageResponse(message="Password updated successfully")


@router.post("/avatar", response_model=UserPublic)
def upload_avatar(
    file: UploadFile = File(...),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Upload a profile picture, replacing any previous one."""
    content = file.file.read()
    user = service.set_avatar(db, current_user, content, file.content_type)
    return UserPublic.from_user(user)


@router.delete("/avatar", response_model=UserPublic)
def delete_avatar(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    user = service.remove_avatar(db, current_user)
    return UserPublic.from_user(user)


@router.delete("/me", response_model=MessageResponse)
def deactivate_account(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Deactivate the account. Its lists drop out of discovery."""
    service.deactivate(db, current_user)
    return MessageResponse(message="Account deactivated")


@router.get("/{username}", response_model=UserProfile)
def get_public_profile(username: str, db: Session = Depends(get_db)):
    """Public profile of an active user."""
    return UserProfile.from_user(service.get_active_profile(db, username))
