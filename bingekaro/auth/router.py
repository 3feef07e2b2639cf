"""Authentication endpoints: registration, login and token refresh."""
import logging

from fastapi import APIRouter, Depends, Request, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.orm import Session

from bingekaro.auth.dependencies import get_current_user
from bingekaro.auth.schemas import (
    AuthResponse,
    AvailabilityResponse,
    EmailCheck,
    Token,
    UserCreate,
    UsernameCheck,
)
from bingekaro.auth.security import create_access_token
from bingekaro.database import get_db
from bingekaro.models import User
from bingekaro.rate_limit import limiter
from bingekaro.users import service
from bingekaro.users.queries import email_taken, username_taken
from bingekaro.users.schemas import MessageResponse, UserPublic

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/auth", tags=["Auth"])


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
@limiter.limit("10/minute")
def register(
    request: Request,
    user_data: UserCreate,
    db: Session = Depends(get_db)
):
    """Register a new account and return a token for it."""
    user = service.register_user(
        db,
        display_name=user_data.display_name,
        username=user_data.username,
        email=user_data.email,
        password=user_data.password,
    )
    return AuthResponse(access_token=create_access_token(user.id), user=UserPublic.from_user(user))


@router.post("/login", response_model=AuthResponse)
@limiter.limit("20/minute")
def login(
    request: Request,
    form_data: OAuth2PasswordRequestForm = Depends(),
    db: Session = Depends(get_db)
):
    """Exchange a username (or email) and password for a bearer token."""
    user = service.authenticate(db, form_data.username, form_data.password)
    return AuthResponse(access_token=create_access_token(user.id), user=UserPublic.from_user(user))


@router.post("/logout", response_model=MessageResponse)
def logout(current_user: User = Depends(get_current_user)):
    """Tokens are stateless; the client discards its copy."""
    return MessageResponse(message="Logout successful")


@router.get("/me", response_model=UserPublic)
def me(current_user: User = Depends(get_current_user)):
    """Return the authenticated user's own profile."""
    return UserPublic.from_user(current_user)


@router.post("/refresh", response_model=Token)
def refresh(current_user: User = Depends(get_current_user)):
    """Issue a fresh token. Earlier tokens stay valid until they expire."""
    return Token(access_token=create_access_token(current_user.id))


@router.post("/check-username", response_model=AvailabilityResponse)
def check_username(body: UsernameCheck, db: Session = Depends(get_db)):
    return AvailabilityResponse(available=not username_taken(db, body.username))


@router.post("/check-email", response_model=AvailabilityResponse)
def check_email(body: EmailCheck, db: Session = Depends(get_db)):
    return AvailabilityResponse(available=not email_taken(db, body.email))
