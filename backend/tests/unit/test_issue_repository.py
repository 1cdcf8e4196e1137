"""
Unit tests for the SQLite issue, comment and user repositories.
"""

import pytest

from issue_tracker.core.exceptions import DuplicateError, NotFoundError
from issue_tracker.models.comment import CommentCreate
from issue_tracker.models.enums import IssuePriority, IssueStatus
from issue_tracker.models.issue import IssueCreate, IssueUpdate
from issue_tracker.models.user import UserCreate
from issue_tracker.utils.ids import is_valid_object_id, new_object_id


@pytest.mark.asyncio
async def test_create_and_get_issue(issue_repo, alice):
    """Test create and get issue."""
    created = await issue_repo.create(
        alice.id,
        IssueCreate(title="Crash on save", priority=IssuePriority.HIGH, assignee="Ann"),
    )

    assert is_valid_object_id(created.id)
    assert created.author_id == alice.id
    assert created.status == IssueStatus.OPEN
    assert created.created_at == created.updated_at

    fetched = await issue_repo.get(created.id)
    assert fetched is not None
    assert fetched.title == "Crash on save"
    assert fetched.priority == IssuePriority.HIGH
    assert fetched.assignee == "Ann"


@pytest.mark.asyncio
async def test_get_missing_issue_returns_none(issue_repo):
    """Test get missing issue returns none."""
    assert await issue_repo.get(new_object_id()) is None


@pytest.mark.asyncio
async def test_list_newest_first_with_filters(issue_repo, alice, bob):
    """Test list newest first with filters."""
    first = await issue_repo.create(alice.id, IssueCreate(title="First issue"))
    second = await issue_repo.create(
        bob.id, IssueCreate(title="Second issue", status=IssueStatus.CLOSED)
    )
    third = await issue_repo.create(
        alice.id, IssueCreate(title="Third issue", priority=IssuePriority.URGENT)
    )

    all_issues = await issue_repo.list()
    assert [i.id for i in all_issues] == [third.id, second.id, first.id]

    mine = await issue_repo.list(author_id=alice.id)
    assert [i.id for i in mine] == [third.id, first.id]

    closed = await issue_repo.list(status=IssueStatus.CLOSED)
    assert [i.id for i in closed] == [second.id]

    urgent = await issue_repo.list(priority=IssuePriority.URGENT)
    assert [i.id for i in urgent] == [third.id]


@pytest.mark.asyncio
async def test_update_applies_only_supplied_fields(issue_repo, alice):
    """Test update applies only supplied fields."""
    created = await issue_repo.create(
        alice.id, IssueCreate(title="Crash on save", description="Steps to reproduce")
    )

    updated = await issue_repo.update(
        created.id, IssueUpdate.model_validate({"status": "In Progress"})
    )

    assert updated.status == IssueStatus.IN_PROGRESS
    assert updated.title == "Crash on save"
    assert updated.description == "Steps to reproduce"
    assert updated.author_id == alice.id
    assert updated.updated_at >= created.updated_at


@pytest.mark.asyncio
async def test_update_missing_issue_raises(issue_repo):
    """Test update missing issue raises."""
    with pytest.raises(NotFoundError):
        await issue_repo.update(new_object_id(), IssueUpdate(title="Whatever"))


@pytest.mark.asyncio
async def test_delete_cascades_to_comments(issue_repo, comment_repo, alice):
    """Test delete cascades to comments."""
    doomed = await issue_repo.create(alice.id, IssueCreate(title="Doomed issue"))
    kept = await issue_repo.create(alice.id, IssueCreate(title="Kept issue"))
    await comment_repo.create(doomed.id, alice.id, CommentCreate(content="one"))
    await comment_repo.create(doomed.id, alice.id, CommentCreate(content="two"))
    await comment_repo.create(kept.id, alice.id, CommentCreate(content="stays"))

    assert await issue_repo.delete(doomed.id) is True

    assert await issue_repo.get(doomed.id) is None
    counts = await comment_repo.count_by_issues([doomed.id, kept.id])
    assert counts == {kept.id: 1}


@pytest.mark.asyncio
async def test_delete_missing_issue_returns_false(issue_repo):
    """Test delete missing issue returns false."""
    assert await issue_repo.delete(new_object_id()) is False


@pytest.mark.asyncio
async def test_counts_by_status_and_priority(issue_repo, alice, bob):
    """Test counts by status and priority."""
    await issue_repo.create(alice.id, IssueCreate(title="Open low"))
    await issue_repo.create(
        alice.id,
        IssueCreate(title="Closed high", status=IssueStatus.CLOSED, priority=IssuePriority.HIGH),
    )
    await issue_repo.create(bob.id, IssueCreate(title="Bob open"))

    assert await issue_repo.count_by_status(author_id=alice.id) == {
        IssueStatus.OPEN: 1,
        IssueStatus.CLOSED: 1,
    }
    assert await issue_repo.count_by_status() == {IssueStatus.OPEN: 2, IssueStatus.CLOSED: 1}
    assert await issue_repo.count_by_priority() == {
        IssuePriority.LOW: 2,
        IssuePriority.HIGH: 1,
    }


@pytest.mark.asyncio
async def test_comments_newest_first(issue_repo, comment_repo, alice):
    """Test comments newest first."""
    issue = await issue_repo.create(alice.id, IssueCreate(title="Chatty issue"))
    first = await comment_repo.create(issue.id, alice.id, CommentCreate(content="  first  "))
    second = await comment_repo.create(issue.id, alice.id, CommentCreate(content="second"))

    comments = await comment_repo.list_by_issue(issue.id)

    assert [c.id for c in comments] == [second.id, first.id]
    assert comments[1].content == "first"


@pytest.mark.asyncio
async def test_comment_on_missing_issue_raises(comment_repo, alice):
    """Test comment on missing issue raises."""
    with pytest.raises(NotFoundError):
        await comment_repo.create(new_object_id(), alice.id, CommentCreate(content="hello"))
    with pytest.raises(NotFoundError):
        await comment_repo.list_by_issue(new_object_id())


@pytest.mark.asyncio
async def test_user_email_unique(user_repo, alice):
    """Test user email unique."""
    with pytest.raises(DuplicateError):
        await user_repo.create(
            UserCreate(name="Other", email=alice.email, password_hash="x")
        )


@pytest.mark.asyncio
async def test_user_lookup(user_repo, alice, bob):
    """Test user lookup."""
    assert (await user_repo.get_by_email("alice@example.com")).id == alice.id
    assert await user_repo.get(new_object_id()) is None

    found = await user_repo.get_many([alice.id, bob.id, new_object_id()])
    assert set(found) == {alice.id, bob.id}
    assert await user_repo.get_many([]) == {}
