"""Tests for the list access rules, without the HTTP layer."""
import pytest

from bingekaro.auth.security import hash_secret
from bingekaro.errors import InvalidInput
from bingekaro.lists.access import AccessOutcome, evaluate_access
from bingekaro.models import RecommendationList

OWNER_ID = 1
VISITOR_ID = 2


def make_list(is_private=False, secret=None, is_active=True):
    return RecommendationList(
        id=10,
        name="Weekend picks",
        creator_id=OWNER_ID,
        is_private=is_private,
        secret_hash=hash_secret(secret) if secret else None,
        is_active=is_active,
    )


class TestEvaluateAccess:

    def test_missing_list(self):
        assert evaluate_access(VISITOR_ID, None, None).outcome is AccessOutcome.NOT_FOUND

    def test_inactive_list_hidden_even_from_owner(self):
        target = make_list(is_active=False)
        assert evaluate_access(OWNER_ID, target, None).outcome is AccessOutcome.NOT_FOUND

    def test_owner_reads_private_without_password(self):
        decision = evaluate_access(OWNER_ID, make_list(is_private=True, secret="abcd"), None)
        assert decision.allowed
        assert decision.is_owner
        assert not decision.counts_view

    def test_public_list_open_to_anonymous(self):
        decision = evaluate_access(None, make_list(), None)
        assert decision.allowed
        assert not decision.is_owner
        assert decision.counts_view

    @pytest.mark.parametrize("requester", [None, VISITOR_ID])
    def test_private_without_password(self, requester):
        decision = evaluate_access(requester, make_list(is_private=True, secret="abcd"), None)
        assert decision.outcome is AccessOutcome.REQUIRE_SECRET
        assert not decision.counts_view

    def test_private_with_wrong_password(self):
        decision = evaluate_access(VISITOR_ID, make_list(is_private=True, secret="abcd"), "abce")
        assert decision.outcome is AccessOutcome.REQUIRE_SECRET

    def test_private_with_right_password(self):
        decision = evaluate_access(VISITOR_ID, make_list(is_private=True, secret="abcd"), "abcd")
        assert decision.allowed
        assert decision.counts_view

    def test_anonymous_with_right_password(self):
        assert evaluate_access(None, make_list(is_private=True, secret="abcd"), "abcd").allowed

    def test_private_without_stored_hash_denies(self):
        decision = evaluate_access(VISITOR_ID, make_list(is_private=True), "abcd")
        assert decision.outcome is AccessOutcome.REQUIRE_SECRET

    def test_password_on_public_list_is_ignored(self):
        assert evaluate_access(VISITOR_ID, make_list(), "whatever").allowed

    def test_malformed_hash_propagates(self):
        target = make_list(is_private=True)
        target.secret_hash = "garbage"
        with pytest.raises(InvalidInput):
            evaluate_access(VISITOR_ID, target, "abcd")
