"""Favorites API endpoints for managing a user's movie, series and anime collections."""
import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from bingekaro.auth.dependencies import get_current_user
from bingekaro.database import get_db
from bingekaro.errors import Conflict, NotFound
from bingekaro.favorites.schemas import (
    AllFavoritesResponse,
    FavoriteCategory,
    FavoriteCheckResponse,
    FavoriteCreate,
    FavoriteListResponse,
    FavoriteResponse,
)
from bingekaro.models import FavoriteMedia, User
from bingekaro.users.schemas import MessageResponse

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/favorites", tags=["Favorites"])


def _collection(db: Session, user_id: int, category: FavoriteCategory) -> list[FavoriteMedia]:
    """Entries of one collection, in the order they were added."""
    return (
        db.query(FavoriteMedia)
        .filter(
            FavoriteMedia.user_id == user_id,
            FavoriteMedia.category == category.value
        )
        .order_by(FavoriteMedia.added_at, FavoriteMedia.id)
        .all()
    )


def _find(db: Session, user_id: int, category: FavoriteCategory, catalog_id: str) -> FavoriteMedia | None:
    return (
        db.query(FavoriteMedia)
        .filter(
            FavoriteMedia.user_id == user_id,
            FavoriteMedia.category == category.value,
            FavoriteMedia.catalog_id == catalog_id
        )
        .first()
    )


@router.get("", response_model=AllFavoritesResponse)
def list_all_favorites(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """List all three favorites collections for the current user."""
    return AllFavoritesResponse(
        **{
            category.value: [
                FavoriteResponse.model_validate(fav)
                for fav in _collection(db, current_user.id, category)
            ]
            for category in FavoriteCategory
        }
    )


@router.get("/{category}", response_model=FavoriteListResponse)
def list_favorites(
    category: FavoriteCategory,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """List one favorites collection."""
    favorites = [FavoriteResponse.model_validate(fav) for fav in _collection(db, current_user.id, category)]
    return FavoriteListResponse(category=category, favorites=favorites, total=len(favorites))


@router.post("/{category}", response_model=FavoriteResponse, status_code=status.HTTP_201_CREATED)
def add_favorite(
    category: FavoriteCategory,
    favorite_data: FavoriteCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Add a title to a favorites collection."""
    catalog_id = favorite_data.catalog_id.strip()
    if _find(db, current_user.id, category, catalog_id):
        raise Conflict(f"Title already in favorite {category.value}")

    new_favorite = FavoriteMedia(
        user_id=current_user.id,
        category=category.value,
        catalog_id=catalog_id,
        title=favorite_data.title,
        year=favorite_data.year,
        poster=favorite_data.poster,
        genre=favorite_data.genre,
        imdb_rating=favorite_data.imdb_rating,
    )

    db.add(new_favorite)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise Conflict(f"Title already in favorite {category.value}")
    db.refresh(new_favorite)

    logger.info(f"User {current_user.id} added {catalog_id} to favorite {category.value}")

    return FavoriteResponse.model_validate(new_favorite)


@router.delete("/{category}/{catalog_id}", response_model=MessageResponse)
def remove_favorite(
    category: FavoriteCategory,
    catalog_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Remove a title from a favorites collection by catalog id."""
    favorite = _find(db, current_user.id, category, catalog_id)
    if not favorite:
        raise NotFound(f"Title not found in favorite {category.value}")

    db.delete(favorite)
    db.commit()

    logger.info(f"User {current_user.id} removed {catalog_id} from favorite {category.value}")

    return MessageResponse(message="Favorite removed successfully")


@router.get("/{category}/check/{catalog_id}", response_model=FavoriteCheckResponse)
def check_favorite(
    category: FavoriteCategory,
    catalog_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Check if a title is in a favorites collection."""
    exists = _find(db, current_user.id, category, catalog_id) is not None
    return FavoriteCheckResponse(is_favorite=exists, catalog_id=catalog_id, category=category)
