"""
Who may change or delete an issue.

Reading is open to every authenticated user. Mutation goes through a
``MutationPolicy`` chosen by configuration, so the permissive default and the
stricter owner/admin rule share the same call sites.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from issue_tracker.core.exceptions import ForbiddenError
from issue_tracker.interfaces.auth_provider import User
from issue_tracker.models.issue import Issue


class MutationPolicy(ABC):
    """Decides whether an acting user may update or delete an issue."""

    name: str = ""

    @abstractmethod
    def can_mutate(self, acting_user: User, issue: Issue) -> bool:
        pass

    def ensure_can_mutate(self, acting_user: User, issue: Issue, action: str = "update") -> None:
        if not self.can_mutate(acting_user, issue):
            raise ForbiddenError(f"Not authorized to {action} this issue")


class PermissiveMutationPolicy(MutationPolicy):
    """Any authenticated user may mutate any issue."""

    name = "permissive"

    def can_mutate(self, acting_user: User, issue: Issue) -> bool:
        return True


class OwnerOrAdminMutationPolicy(MutationPolicy):
    """Only the issue's author or an admin may mutate it."""

    name = "owner_or_admin"

    def can_mutate(self, acting_user: User, issue: Issue) -> bool:
        return acting_user.is_admin or issue.author_id == acting_user.id


_POLICIES: dict[str, type[MutationPolicy]] = {
    PermissiveMutationPolicy.name: PermissiveMutationPolicy,
    OwnerOrAdminMutationPolicy.name: OwnerOrAdminMutationPolicy,
}


def get_mutation_policy(name: str) -> MutationPolicy:
    """Build the policy registered under ``name``."""
    try:
        return _POLICIES[name]()
    except KeyError:
        raise ValueError(f"Unknown issue mutation policy: {name}") from None
