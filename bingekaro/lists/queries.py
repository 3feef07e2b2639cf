"""Recommendation list queries and atomic counter updates."""
from typing import Optional

from sqlalchemy import or_
from sqlalchemy.orm import Session, selectinload

from bingekaro.lists.access import discovery_filter
from bingekaro.models import ListItem, ListTag, RecommendationList, User


def _with_relations(query):
    return query.options(
        selectinload(RecommendationList.creator),
        selectinload(RecommendationList.tags),
        selectinload(RecommendationList.items).selectinload(ListItem.added_by),
    )


def get_list(db: Session, list_id: int) -> Optional[RecommendationList]:
    """Load a list by id, active or not."""
    return _with_relations(db.query(RecommendationList)).filter(RecommendationList.id == list_id).first()


def lists_by_creator(
    db: Session,
    creator_id: int,
    include_private: bool,
    offset: int = 0,
    limit: Optional[int] = None,
) -> tuple[list[RecommendationList], int]:
    """Active lists of one creator, newest first, with the total count."""
    query = db.query(RecommendationList).filter(
        RecommendationList.creator_id == creator_id,
        RecommendationList.is_active.is_(True),
    )
    if not include_private:
        query = query.filter(RecommendationList.is_private.is_(False))

    total = query.count()
    query = _with_relations(query).order_by(
        RecommendationList.created_at.desc(), RecommendationList.id.desc()
    ).offset(offset)
    if limit is not None:
        query = query.limit(limit)
    return query.all(), total


def discoverable_lists(
    db: Session,
    requester_id: Optional[int],
    offset: int,
    limit: int,
) -> tuple[list[RecommendationList], int]:
    """Public browse page: other users' public lists, newest first."""
    query = db.query(RecommendationList).filter(discovery_filter(requester_id))
    total = query.count()
    lists = (
        _with_relations(query)
        .order_by(RecommendationList.created_at.desc(), RecommendationList.id.desc())
        .offset(offset)
        .limit(limit)
        .all()
    )
    return lists, total


def _like_pattern(text: str) -> str:
    """Substring LIKE pattern with wildcards in the user's text escaped."""
    escaped = text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


def search_lists(
    db: Session,
    requester_id: Optional[int],
    text: str,
    limit: int,
) -> list[RecommendationList]:
    """
    Case-insensitive substring search over list name, description, tags,
    item titles and the creator's username or display name, restricted to
    discoverable lists.
    """
    pattern = _like_pattern(text)
    match = or_(
        RecommendationList.name.ilike(pattern, escape="\\"),
        RecommendationList.description.ilike(pattern, escape="\\"),
        RecommendationList.tags.any(ListTag.name.ilike(pattern, escape="\\")),
        RecommendationList.items.any(ListItem.title.ilike(pattern, escape="\\")),
        RecommendationList.creator.has(
            or_(
                User.username.ilike(pattern, escape="\\"),
                User.display_name.ilike(pattern, escape="\\"),
            )
        ),
    )
    return (
        _with_relations(db.query(RecommendationList))
        .filter(discovery_filter(requester_id), match)
        .order_by(RecommendationList.created_at.desc(), RecommendationList.id.desc())
        .limit(limit)
        .all()
    )


def increment_view_count(db: Session, list_id: int) -> None:
    """Single-statement increment so concurrent views are never lost."""
    (
        db.query(RecommendationList)
        .filter(RecommendationList.id == list_id)
        .update(
            {RecommendationList.view_count: RecommendationList.view_count + 1},
            synchronize_session=False,
        )
    )


def increment_like_count(db: Session, list_id: int) -> None:
    """Single-statement increment so concurrent likes are never lost."""
    (
        db.query(RecommendationList)
        .filter(RecommendationList.id == list_id)
        .update(
            {RecommendationList.like_count: RecommendationList.like_count + 1},
            synchronize_session=False,
        )
    )
