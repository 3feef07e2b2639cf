"""Pydantic schemas for recommendation lists.

The response views are built field by field from the ORM objects; none of
them has a place for the list's password hash.
"""
from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

from bingekaro.config import (
    ITEM_NOTES_MAX_LENGTH,
    LIST_DESCRIPTION_MAX_LENGTH,
    LIST_NAME_MAX_LENGTH,
    MAX_TAGS,
    SECRET_MAX_BYTES,
)
from bingekaro.models import ListItem, RecommendationList, User
from bingekaro.users.schemas import UserProfile
from bingekaro.users.storage import avatar_url


class MediaType(str, Enum):
    MOVIE = "movie"
    SERIES = "series"
    ANIME = "anime"


# =========================================================================
# Requests
# =========================================================================
class ListCreate(BaseModel):
    """Request body for creating a list. ``password`` is required when private."""
    name: str = Field(..., max_length=LIST_NAME_MAX_LENGTH)
    description: str = Field("", max_length=LIST_DESCRIPTION_MAX_LENGTH)
    is_private: bool = False
    password: Optional[str] = Field(None, max_length=SECRET_MAX_BYTES)
    tags: list[str] = Field(default_factory=list, max_length=MAX_TAGS)


class ListUpdate(BaseModel):
    """Partial update; omitted fields are left unchanged."""
    name: Optional[str] = Field(None, max_length=LIST_NAME_MAX_LENGTH)
    description: Optional[str] = Field(None, max_length=LIST_DESCRIPTION_MAX_LENGTH)
    is_private: Optional[bool] = None
    password: Optional[str] = Field(None, max_length=SECRET_MAX_BYTES)
    tags: Optional[list[str]] = Field(None, max_length=MAX_TAGS)


class ItemCreate(BaseModel):
    catalog_id: str = Field(..., min_length=1, max_length=20)
    title: str = Field(..., min_length=1, max_length=255)
    media_type: MediaType = MediaType.MOVIE
    year: Optional[str] = Field(None, max_length=20)
    poster: Optional[str] = Field(None, max_length=500)
    genre: Optional[str] = Field(None, max_length=255)
    plot: Optional[str] = None
    imdb_rating: Optional[float] = Field(None, ge=0, le=10)
    notes: Optional[str] = Field(None, max_length=ITEM_NOTES_MAX_LENGTH)


# =========================================================================
# Responses
# =========================================================================
class CreatorSummary(BaseModel):
    id: int
    username: str
    display_name: str
    avatar_url: Optional[str] = None

    @classmethod
    def from_user(cls, user: User) -> "CreatorSummary":
        return cls(
            id=user.id,
            username=user.username,
            display_name=user.display_name,
            avatar_url=avatar_url(user.avatar_filename),
        )


class ItemResponse(BaseModel):
    id: int
    catalog_id: str
    title: str
    media_type: str
    year: Optional[str] = None
    poster: Optional[str] = None
    genre: Optional[str] = None
    plot: Optional[str] = None
    imdb_rating: Optional[float] = None
    notes: Optional[str] = None
    added_by: Optional[CreatorSummary] = None
    added_at: datetime

    @classmethod
    def from_item(cls, item: ListItem) -> "ItemResponse":
        return cls(
            id=item.id,
            catalog_id=item.catalog_id,
            title=item.title,
            media_type=item.media_type,
            year=item.year,
            poster=item.poster,
            genre=item.genre,
            plot=item.plot,
            imdb_rating=item.imdb_rating,
            notes=item.notes,
            added_by=CreatorSummary.from_user(item.added_by) if item.added_by else None,
            added_at=item.added_at,
        )


class ListSummary(BaseModel):
    """A list as it appears in browse, search and profile pages (no items)."""
    id: int
    name: str
    description: str
    creator: CreatorSummary
    is_private: bool
    tags: list[str]
    item_count: int
    view_count: int
    like_count: int
    created_at: datetime
    updated_at: datetime

    @classmethod
    def summary_fields(cls, lst: RecommendationList) -> dict:
        return {
            "id": lst.id,
            "name": lst.name,
            "description": lst.description or "",
            "creator": CreatorSummary.from_user(lst.creator),
            "is_private": lst.is_private,
            "tags": [tag.name for tag in lst.tags],
            "item_count": len(lst.items),
            "view_count": lst.view_count,
            "like_count": lst.like_count,
            "created_at": lst.created_at,
            "updated_at": lst.updated_at,
        }

    @classmethod
    def from_list(cls, lst: RecommendationList) -> "ListSummary":
        return cls(**cls.summary_fields(lst))


class ListDetail(ListSummary):
    """A list opened through the access check, with its items."""
    items: list[ItemResponse]
    is_owner: bool

    @classmethod
    def from_list(cls, lst: RecommendationList, is_owner: bool = False) -> "ListDetail":
        return cls(
            **cls.summary_fields(lst),
            items=[ItemResponse.from_item(item) for item in lst.items],
            is_owner=is_owner,
        )


class Pagination(BaseModel):
    page: int
    limit: int
    total: int
    pages: int


class ListPage(BaseModel):
    lists: list[ListSummary]
    pagination: Pagination


class ListSearchResponse(BaseModel):
    lists: list[ListSummary]
    query: str


class UserListsResponse(BaseModel):
    user: UserProfile
    lists: list[ListSummary]


class LikeResponse(BaseModel):
    like_count: int


class MessageListResponse(BaseModel):
    """Mutation acknowledgement carrying the list's current state."""
    message: str
    list: ListDetail
