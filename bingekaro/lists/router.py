"""Recommendation list endpoints: discovery, password-gated reads and owner mutations."""
import logging
import math
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from bingekaro.auth.dependencies import get_current_user, get_optional_current_user
from bingekaro.config import DEFAULT_PAGE_SIZE, DEFAULT_SEARCH_LIMIT, MAX_PAGE_SIZE
from bingekaro.database import get_db
from bingekaro.errors import ValidationError
from bingekaro.lists import queries, service
from bingekaro.lists.schemas import (
    ItemCreate,
    LikeResponse,
    ListCreate,
    ListDetail,
    ListPage,
    ListSearchResponse,
    ListSummary,
    ListUpdate,
    MessageListResponse,
    Pagination,
    UserListsResponse,
)
from bingekaro.models import User
from bingekaro.users.schemas import MessageResponse, UserProfile
from bingekaro.users.service import get_active_profile

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/lists", tags=["Lists"])


def _requester_id(user: Optional[User]) -> Optional[int]:
    return user.id if user else None


def _page(lists, total: int, page: int, limit: int) -> ListPage:
    return ListPage(
        lists=[ListSummary.from_list(lst) for lst in lists],
        pagination=Pagination(page=page, limit=limit, total=total, pages=math.ceil(total / limit)),
    )


@router.post("", response_model=ListDetail, status_code=status.HTTP_201_CREATED)
def create_list(
    body: ListCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Create a list. Private lists need a password of at least 4 characters."""
    new_list = service.create_list(
        db,
        creator_id=current_user.id,
        name=body.name,
        description=body.description,
        is_private=body.is_private,
        secret=body.password,
        tags=body.tags,
    )
    return ListDetail.from_list(new_list, is_owner=True)


@router.get("", response_model=ListPage)
def my_lists(
    page: int = Query(1, ge=1),
    limit: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """The current user's own lists, private ones included."""
    lists, total = queries.lists_by_creator(
        db, current_user.id, include_private=True, offset=(page - 1) * limit, limit=limit
    )
    return _page(lists, total, page, limit)


@router.get("/public", response_model=ListPage)
def public_lists(
    page: int = Query(1, ge=1),
    limit: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
    current_user: Optional[User] = Depends(get_optional_current_user),
    db: Session = Depends(get_db)
):
    """Browse other users' public lists, newest first."""
    lists, total = queries.discoverable_lists(
        db, _requester_id(current_user), offset=(page - 1) * limit, limit=limit
    )
    return _page(lists, total, page, limit)


@router.get("/search", response_model=ListSearchResponse)
def search_lists(
    q: str = Query(""),
    limit: int = Query(DEFAULT_SEARCH_LIMIT, ge=1, le=MAX_PAGE_SIZE),
    current_user: Optional[User] = Depends(get_optional_current_user),
    db: Session = Depends(get_db)
):
    """Keyword search across other users' public lists."""
    query = q.strip()
    if not query:
        raise ValidationError("q", "Search query is required")

    lists = queries.search_lists(db, _requester_id(current_user), query, limit)
    return ListSearchResponse(lists=[ListSummary.from_list(lst) for lst in lists], query=query)


@router.get("/user/{username}", response_model=UserListsResponse)
def lists_by_user(
    username: str,
    current_user: Optional[User] = Depends(get_optional_current_user),
    db: Session = Depends(get_db)
):
    """
    A user's profile page. Private lists are shown as summaries so visitors
    can ask for their password; their items stay behind the access check.
    """
    owner = get_active_profile(db, username)
    lists, _ = queries.lists_by_creator(db, owner.id, include_private=True)
    return UserListsResponse(
        user=UserProfile.from_user(owner),
        lists=[ListSummary.from_list(lst) for lst in lists],
    )


@router.get("/{list_id}", response_model=ListDetail)
def read_list(
    list_id: int,
    password: Optional[str] = Query(None, description="Password for private lists"),
    current_user: Optional[User] = Depends(get_optional_current_user),
    db: Session = Depends(get_db)
):
    """
    Open a list. Private lists need ``?password=`` unless the caller owns them;
    a missing or wrong password returns 401 with ``requires_password``.
    """
    target, decision = service.open_list(db, list_id, _requester_id(current_user), password)
    return ListDetail.from_list(target, is_owner=decision.is_owner)


@router.put("/{list_id}", response_model=MessageListResponse)
def update_list(
    list_id: int,
    body: ListUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    target = service.require_owner(db, list_id, current_user.id)
    updated = service.update_list(
        db,
        target,
        name=body.name,
        description=body.description,
        is_private=body.is_private,
        secret=body.password,
        tags=body.tags,
    )
    return MessageListResponse(
        message="Recommendation list updated successfully",
        list=ListDetail.from_list(updated, is_owner=True),
    )


@router.delete("/{list_id}", response_model=MessageResponse)
def delete_list(
    list_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    target = service.require_owner(db, list_id, current_user.id)
    service.delete_list(db, target)
    return MessageResponse(message="Recommendation list deleted successfully")


@router.post("/{list_id}/items", response_model=MessageListResponse, status_code=status.HTTP_201_CREATED)
def add_item(
    list_id: int,
    body: ItemCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Add a catalog title to one of your lists."""
    target = service.require_owner(db, list_id, current_user.id)
    item_data = body.model_dump()
    item_data["media_type"] = body.media_type.value
    service.add_item(db, target, current_user.id, service.NewItem(**item_data))
    db.refresh(target)
    return MessageListResponse(
        message="Item added to recommendation list",
        list=ListDetail.from_list(target, is_owner=True),
    )


@router.delete("/{list_id}/items/{item_id}", response_model=MessageListResponse)
def remove_item(
    list_id: int,
    item_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Remove an item; removing one that is not there still succeeds."""
    target = service.require_owner(db, list_id, current_user.id)
    service.remove_item(db, target, item_id)
    db.refresh(target)
    return MessageListResponse(
        message="Item removed from recommendation list",
        list=ListDetail.from_list(target, is_owner=True),
    )


@router.post("/{list_id}/like", response_model=LikeResponse)
def like_list(
    list_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Like someone else's list."""
    return LikeResponse(like_count=service.like_list(db, list_id, current_user.id))
