"""Pydantic schemas for favorites API."""
from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class FavoriteCategory(str, Enum):
    """The three independent favorites collections."""
    MOVIES = "movies"
    SERIES = "series"
    ANIME = "anime"


class FavoriteCreate(BaseModel):
    """Request body for adding a title to a favorites collection."""
    catalog_id: str = Field(..., min_length=1, max_length=20, description="External catalog (IMDb) id")
    title: str = Field(..., min_length=1, max_length=255)
    year: str | None = Field(None, max_length=20)
    poster: str | None = Field(None, max_length=500)
    genre: str | None = Field(None, max_length=255)
    imdb_rating: float | None = Field(None, ge=0, le=10)


class FavoriteResponse(BaseModel):
    """A single favorite entry."""
    id: int
    catalog_id: str
    title: str
    year: str | None = None
    poster: str | None = None
    genre: str | None = None
    imdb_rating: float | None = None
    added_at: datetime

    model_config = ConfigDict(from_attributes=True)


class FavoriteListResponse(BaseModel):
    """One favorites collection."""
    category: FavoriteCategory
    favorites: list[FavoriteResponse]
    total: int


class AllFavoritesResponse(BaseModel):
    """All three collections at once."""
    movies: list[FavoriteResponse]
    series: list[FavoriteResponse]
    anime: list[FavoriteResponse]


class FavoriteCheckResponse(BaseModel):
    """Response for checking if a title is in a collection."""
    is_favorite: bool
    catalog_id: str
    category: FavoriteCategory
