"""
Reading and mutating recommendation lists.

Reads go through ``open_list``, which applies the access rules and the view
counter. Every mutation requires the requester to be the list's creator;
knowing a private list's password never grants write access.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Optional

from sqlalchemy.orm import Session

from bingekaro.auth.security import hash_secret
from bingekaro.config import (
    ITEM_NOTES_MAX_LENGTH,
    LIST_DESCRIPTION_MAX_LENGTH,
    LIST_NAME_MAX_LENGTH,
    LIST_SECRET_MIN_LENGTH,
    MAX_TAGS,
    MEDIA_TYPES,
    TAG_MAX_LENGTH,
)
from bingekaro.errors import Conflict, Forbidden, NotFound, RequireSecret, ValidationError
from bingekaro.lists.access import AccessDecision, AccessOutcome, evaluate_access
from bingekaro.lists.queries import get_list, increment_like_count, increment_view_count
from bingekaro.models import ListItem, ListTag, RecommendationList

logger = logging.getLogger(__name__)

LIST_NOT_FOUND = "Recommendation list not found"


@dataclass(frozen=True)
class NewItem:
    """Snapshot of a catalog title being added to a list."""
    catalog_id: str
    title: str
    media_type: str = "movie"
    year: Optional[str] = None
    poster: Optional[str] = None
    genre: Optional[str] = None
    plot: Optional[str] = None
    imdb_rating: Optional[float] = None
    notes: Optional[str] = None


# =========================================================================
# Validation helpers
# =========================================================================
def _clean_name(name: Optional[str]) -> str:
    cleaned = (name or "").strip()
    if not cleaned:
        raise ValidationError("name", "List name is required")
    if len(cleaned) > LIST_NAME_MAX_LENGTH:
        raise ValidationError("name", f"List name cannot be more than {LIST_NAME_MAX_LENGTH} characters")
    return cleaned


def _clean_description(description: Optional[str]) -> str:
    cleaned = (description or "").strip()
    if len(cleaned) > LIST_DESCRIPTION_MAX_LENGTH:
        raise ValidationError(
            "description", f"Description cannot be more than {LIST_DESCRIPTION_MAX_LENGTH} characters"
        )
    return cleaned


def _check_secret(secret: str) -> str:
    if len(secret) < LIST_SECRET_MIN_LENGTH:
        raise ValidationError(
            "password", f"Password must be at least {LIST_SECRET_MIN_LENGTH} characters long"
        )
    return secret


def _clean_tags(tags: Iterable[str]) -> list[str]:
    """Trim, drop empties and collapse duplicates, keeping first occurrence."""
    cleaned: list[str] = []
    for tag in tags:
        tag = tag.strip()
        if not tag or tag in cleaned:
            continue
        if len(tag) > TAG_MAX_LENGTH:
            raise ValidationError("tags", f"Tag cannot be more than {TAG_MAX_LENGTH} characters")
        cleaned.append(tag)
    if len(cleaned) > MAX_TAGS:
        raise ValidationError("tags", f"A list can have at most {MAX_TAGS} tags")
    return cleaned


# =========================================================================
# Reads
# =========================================================================
def open_list(
    db: Session,
    list_id: int,
    requester_id: Optional[int],
    supplied_secret: Optional[str] = None,
) -> tuple[RecommendationList, AccessDecision]:
    """
    Read a single list on behalf of a requester.

    Raises NotFound for absent or soft-deleted lists and RequireSecret for
    private lists read without the right password. A successful non-owner
    read adds exactly one view.
    """
    target = get_list(db, list_id)
    decision = evaluate_access(requester_id, target, supplied_secret)

    if decision.outcome is AccessOutcome.NOT_FOUND:
        raise NotFound(LIST_NOT_FOUND)
    if decision.outcome is AccessOutcome.REQUIRE_SECRET:
        raise RequireSecret()

    if decision.counts_view:
        increment_view_count(db, target.id)
        db.commit()
        db.refresh(target)

    return target, decision


# =========================================================================
# Ownership gate
# =========================================================================
def require_owner(db: Session, list_id: int, requester_id: int) -> RecommendationList:
    """Load an active list and check the requester created it."""
    target = get_list(db, list_id)
    if target is None or not target.is_active:
        raise NotFound(LIST_NOT_FOUND)
    if target.creator_id != requester_id:
        logger.info(f"User {requester_id} denied write access to list {list_id}")
        raise Forbidden("Not authorized to modify this list")
    return target


# =========================================================================
# Mutations
# =========================================================================
def create_list(
    db: Session,
    creator_id: int,
    name: str,
    description: Optional[str] = "",
    is_private: bool = False,
    secret: Optional[str] = None,
    tags: Iterable[str] = (),
) -> RecommendationList:
    """Create a list. A private list needs a password, which is stored hashed."""
    new_list = RecommendationList(
        name=_clean_name(name),
        description=_clean_description(description),
        creator_id=creator_id,
        is_private=bool(is_private),
        view_count=0,
        like_count=0,
        is_active=True,
    )

    if is_private:
        if not secret:
            raise ValidationError("password", "Password is required for private lists")
        new_list.secret_hash = hash_secret(_check_secret(secret))

    new_list.tags = [ListTag(name=tag) for tag in _clean_tags(tags)]

    db.add(new_list)
    db.commit()
    db.refresh(new_list)

    logger.info(f"User {creator_id} created {'private' if new_list.is_private else 'public'} list {new_list.id}")
    return new_list


def update_list(
    db: Session,
    target: RecommendationList,
    name: Optional[str] = None,
    description: Optional[str] = None,
    is_private: Optional[bool] = None,
    secret: Optional[str] = None,
    tags: Optional[Iterable[str]] = None,
) -> RecommendationList:
    """
    Apply a partial update to a list the caller already owns.

    Fields left as None are unchanged. Going private needs a password unless
    the list already has one; a supplied password on a private list is
    always rehashed; going public discards the stored hash.
    """
    # Validate everything before touching the entity
    new_name = _clean_name(name) if name is not None else None
    new_description = _clean_description(description) if description is not None else None
    new_tags = _clean_tags(tags) if tags is not None else None

    will_be_private = target.is_private if is_private is None else bool(is_private)
    secret_hash = target.secret_hash
    if will_be_private:
        if secret:
            secret_hash = hash_secret(_check_secret(secret))
        elif not (target.is_private and target.secret_hash):
            raise ValidationError("password", "Password is required for private lists")
    else:
        secret_hash = None

    if new_name is not None:
        target.name = new_name
    if new_description is not None:
        target.description = new_description
    if new_tags is not None:
        target.tags = [ListTag(name=tag) for tag in new_tags]
    target.is_private = will_be_private
    target.secret_hash = secret_hash

    db.commit()
    db.refresh(target)

    logger.info(f"List {target.id} updated")
    return target


def delete_list(db: Session, target: RecommendationList) -> None:
    """Soft-delete: the list disappears from every read path."""
    target.is_active = False
    db.commit()

    logger.info(f"List {target.id} deleted")


def add_item(
    db: Session,
    target: RecommendationList,
    requester_id: int,
    item: NewItem,
) -> ListItem:
    """Append a title to an owned list; each catalog id appears at most once."""
    catalog_id = item.catalog_id.strip()
    if not catalog_id:
        raise ValidationError("catalog_id", "Catalog id is required")
    if not item.title.strip():
        raise ValidationError("title", "Title is required")
    if item.media_type not in MEDIA_TYPES:
        raise ValidationError("media_type", f"Type must be one of {', '.join(MEDIA_TYPES)}")
    if item.notes and len(item.notes) > ITEM_NOTES_MAX_LENGTH:
        raise ValidationError("notes", f"Notes cannot be more than {ITEM_NOTES_MAX_LENGTH} characters")
    if item.imdb_rating is not None and not 0 <= item.imdb_rating <= 10:
        raise ValidationError("imdb_rating", "Rating must be between 0 and 10")

    if any(existing.catalog_id == catalog_id for existing in target.items):
        raise Conflict("Title is already in this list")

    new_item = ListItem(
        catalog_id=catalog_id,
        title=item.title.strip(),
        media_type=item.media_type,
        year=item.year,
        poster=item.poster,
        genre=item.genre,
        plot=item.plot,
        imdb_rating=item.imdb_rating,
        notes=item.notes.strip() if item.notes else item.notes,
        added_by_id=requester_id,
    )
    target.items.append(new_item)
    db.commit()
    db.refresh(new_item)

    logger.info(f"User {requester_id} added {catalog_id} to list {target.id}")
    return new_item


def remove_item(db: Session, target: RecommendationList, item_id: int) -> bool:
    """Remove an item by id. Unknown ids are a no-op; returns whether anything was removed."""
    item = next((existing for existing in target.items if existing.id == item_id), None)
    if item is None:
        return False

    target.items.remove(item)
    db.commit()

    logger.info(f"Removed item {item_id} from list {target.id}")
    return True


def like_list(db: Session, list_id: int, requester_id: int) -> int:
    """
    Add one like from a non-owner and return the new total.

    Repeat likes from the same user each count.
    """
    target = get_list(db, list_id)
    if target is None or not target.is_active:
        raise NotFound(LIST_NOT_FOUND)
    if target.creator_id == requester_id:
        raise Forbidden("Cannot like your own list")

    increment_like_count(db, target.id)
    db.commit()
    db.refresh(target)

    logger.info(f"User {requester_id} liked list {target.id}")
    return target.like_count
