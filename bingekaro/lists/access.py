"""
Access rules for recommendation lists.

Two separate rules live here:

``evaluate_access``
    Decides whether one requester may read one list. Checks run in a fixed
    order and the first match wins:

    1. inactive (soft-deleted) list          -> NOT_FOUND
    2. requester is the creator              -> ALLOW (owner, no password needed)
    3. list is public                        -> ALLOW
    4. private list, password missing/wrong  -> REQUIRE_SECRET
       private list, password matches        -> ALLOW

``discovery_filter``
    The coarser rule for browse and keyword search. It never surfaces a
    private list, even to a caller who knows its password, and it leaves
    out the requester's own lists. It is deliberately not built on top of
    ``evaluate_access``.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from sqlalchemy import and_
from sqlalchemy.sql.elements import ColumnElement

from bingekaro.auth.security import verify_secret
from bingekaro.models import RecommendationList, User

logger = logging.getLogger(__name__)


class AccessOutcome(str, Enum):
    ALLOW = "allow"
    REQUIRE_SECRET = "require_secret"
    NOT_FOUND = "not_found"


@dataclass(frozen=True)
class AccessDecision:
    """Result of a single-list read check."""
    outcome: AccessOutcome
    is_owner: bool = False

    @property
    def allowed(self) -> bool:
        return self.outcome is AccessOutcome.ALLOW

    @property
    def counts_view(self) -> bool:
        """Only non-owner reads that were let through bump the view counter."""
        return self.allowed and not self.is_owner


NOT_FOUND = AccessDecision(AccessOutcome.NOT_FOUND)
REQUIRE_SECRET = AccessDecision(AccessOutcome.REQUIRE_SECRET)
ALLOW_OWNER = AccessDecision(AccessOutcome.ALLOW, is_owner=True)
ALLOW_VISITOR = AccessDecision(AccessOutcome.ALLOW, is_owner=False)


def evaluate_access(
    requester_id: Optional[int],
    target: Optional[RecommendationList],
    supplied_secret: Optional[str],
) -> AccessDecision:
    """
    Decide whether ``requester_id`` (None for anonymous) may read ``target``.

    Storage and hashing errors propagate unchanged. A missing and a wrong
    password both yield REQUIRE_SECRET.
    """
    if target is None or not target.is_active:
        return NOT_FOUND

    if requester_id is not None and requester_id == target.creator_id:
        return ALLOW_OWNER

    if not target.is_private:
        return ALLOW_VISITOR

    if not supplied_secret:
        logger.debug(f"List {target.id}: password required for requester {requester_id}")
        return REQUIRE_SECRET

    if not target.secret_hash:
        logger.warning(f"List {target.id} is private but has no stored password; denying access")
        return REQUIRE_SECRET

    if verify_secret(supplied_secret, target.secret_hash):
        logger.debug(f"List {target.id}: password accepted for requester {requester_id}")
        return ALLOW_VISITOR

    logger.debug(f"List {target.id}: password rejected for requester {requester_id}")
    return REQUIRE_SECRET


def discovery_filter(requester_id: Optional[int]) -> ColumnElement[bool]:
    """SQL predicate for lists that may appear in browse and search results."""
    clauses = [
        RecommendationList.is_active.is_(True),
        RecommendationList.is_private.is_(False),
        RecommendationList.creator.has(User.is_active.is_(True)),
    ]
    if requester_id is not None:
        clauses.append(RecommendationList.creator_id != requester_id)
    return and_(*clauses)
