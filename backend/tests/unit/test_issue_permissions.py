from datetime import datetime, timezone

import pytest

from issue_tracker.core.exceptions import ForbiddenError
from issue_tracker.interfaces.auth_provider import User
from issue_tracker.models.enums import UserRole
from issue_tracker.models.issue import Issue
from issue_tracker.services.issue_permissions import (
    OwnerOrAdminMutationPolicy,
    PermissiveMutationPolicy,
    get_mutation_policy,
)

AUTHOR_ID = "a" * 24
OTHER_ID = "b" * 24


def _make_issue() -> Issue:
    now = datetime.now(timezone.utc)
    return Issue(
        id="c" * 24,
        title="Test Issue",
        author_id=AUTHOR_ID,
        created_at=now,
        updated_at=now,
    )


def test_permissive_allows_anyone():
    """Test permissive allows anyone."""
    policy = PermissiveMutationPolicy()
    policy.ensure_can_mutate(User(id=OTHER_ID), _make_issue())


def test_owner_or_admin_allows_author():
    """Test owner or admin allows author."""
    policy = OwnerOrAdminMutationPolicy()
    assert policy.can_mutate(User(id=AUTHOR_ID), _make_issue()) is True


def test_owner_or_admin_allows_admin():
    """Test owner or admin allows admin."""
    policy = OwnerOrAdminMutationPolicy()
    assert policy.can_mutate(User(id=OTHER_ID, role=UserRole.ADMIN), _make_issue()) is True


def test_owner_or_admin_denies_others():
    """Test owner or admin denies others."""
    policy = OwnerOrAdminMutationPolicy()
    with pytest.raises(ForbiddenError, match="Not authorized to delete this issue"):
        policy.ensure_can_mutate(User(id=OTHER_ID), _make_issue(), "delete")


def test_get_mutation_policy_by_name():
    """Test get mutation policy by name."""
    assert isinstance(get_mutation_policy("permissive"), PermissiveMutationPolicy)
    assert isinstance(get_mutation_policy("owner_or_admin"), OwnerOrAdminMutationPolicy)
    with pytest.raises(ValueError):
        get_mutation_policy("nobody")
