"""
Issues API endpoints.

Every route requires an authenticated user. Issues are readable by all users;
whether a user may change or delete an issue is decided by the configured
mutation policy inside ``IssueService``.
"""

from typing import Any, Optional

from fastapi import APIRouter, Body, Query, status

from issue_tracker.api.deps import CurrentUser, IssueSvc
from issue_tracker.models.comment import CommentListResponse, CommentResponse
from issue_tracker.models.enums import IssuePriority, IssueStatus
from issue_tracker.models.issue import (
    IssueListResponse,
    IssueOverviewResponse,
    IssueResponse,
    IssueStatsResponse,
    MessageResponse,
)

router = APIRouter()


# ============================================
# Collections and statistics
# ============================================


@router.get("", response_model=IssueListResponse)
async def list_issues(
    user: CurrentUser,
    service: IssueSvc,
    issue_status: Optional[IssueStatus] = Query(None, alias="status", description="Filter by status"),
    priority: Optional[IssuePriority] = Query(None, description="Filter by priority"),
):
    """List all issues with author details and comment counts, newest first."""
    issues = await service.list_all_issues(status=issue_status, priority=priority)
    return IssueListResponse(count=len(issues), data=issues)


@router.get("/my-issues", response_model=IssueListResponse)
async def list_my_issues(user: CurrentUser, service: IssueSvc):
    """List issues created by the current user."""
    issues = await service.list_my_issues(user.id)
    return IssueListResponse(count=len(issues), data=issues)


@router.get("/my-stats", response_model=IssueStatsResponse)
async def my_stats(user: CurrentUser, service: IssueSvc):
    """Status counts and completion rate for the current user's issues."""
    return IssueStatsResponse(data=await service.my_statistics(user.id))


@router.get("/stats", response_model=IssueOverviewResponse)
async def issue_stats(user: CurrentUser, service: IssueSvc):
    """Tracker-wide counts by status and priority."""
    return IssueOverviewResponse(data=await service.issue_overview())


# ============================================
# Single issue
# ============================================


@router.post("", response_model=IssueResponse, status_code=status.HTTP_201_CREATED)
async def create_issue(
    user: CurrentUser,
    service: IssueSvc,
    payload: dict[str, Any] = Body(...),
):
    """Create a new issue authored by the current user."""
    issue = await service.create_issue(payload, user.id)
    return IssueResponse(message="Issue created successfully", data=issue)


@router.get("/{issue_id}", response_model=IssueResponse)
async def get_issue(issue_id: str, user: CurrentUser, service: IssueSvc):
    """Get an issue by ID."""
    return IssueResponse(data=await service.get_issue(issue_id))


@router.put("/{issue_id}", response_model=IssueResponse)
async def update_issue(
    issue_id: str,
    user: CurrentUser,
    service: IssueSvc,
    payload: dict[str, Any] = Body(...),
):
    """Update the fields present in the request body."""
    issue = await service.update_issue(issue_id, payload, user)
    return IssueResponse(message="Issue updated successfully", data=issue)


@router.delete("/{issue_id}", response_model=MessageResponse)
async def delete_issue(issue_id: str, user: CurrentUser, service: IssueSvc):
    """Delete an issue together with its comments."""
    return MessageResponse(message=await service.delete_issue(issue_id, user))


# ============================================
# Comments
# ============================================


@router.get("/{issue_id}/comments", response_model=CommentListResponse)
async def list_comments(issue_id: str, user: CurrentUser, service: IssueSvc):
    """List comments for an issue, newest first."""
    comments = await service.list_comments(issue_id)
    return CommentListResponse(count=len(comments), data=comments)


@router.post(
    "/{issue_id}/comments",
    response_model=CommentResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_comment(
    issue_id: str,
    user: CurrentUser,
    service: IssueSvc,
    payload: dict[str, Any] = Body(...),
):
    """Add a comment to an issue."""
    comment = await service.add_comment(issue_id, payload.get("content"), user.id)
    return CommentResponse(message="Comment added successfully", data=comment)
