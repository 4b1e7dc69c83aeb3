"""Normalized records shared by every forge backend.

Backends translate forge API payloads into these classes so tool handlers
never see Gitea- or Forgejo-specific fields.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel


class Issue:
    """Represents a repository issue."""

    def __init__(
        self,
        number: int,
        title: str,
        state: str,
        id: int = 0,
        body: str = "",
        user: str = "",
        created: str = "",
        updated: str = ""
    ):
        self.id = id
        self.number = number
        self.title = title
        self.state = state
        self.body = body
        self.user = user
        self.created = created
        self.updated = updated

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "id": self.id,
            "number": self.number,
            "title": self.title,
            "state": self.state,
            "body": self.body,
            "user": self.user,
            "created": self.created,
            "updated": self.updated
        }


class Comment:
    """Represents a comment on an issue or pull request."""

    def __init__(self, id: int, body: str, user: str = "", created: str = "", updated: str = ""):
        self.id = id
        self.body = body
        self.user = user
        self.created = created
        self.updated = updated

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "id": self.id,
            "body": self.body,
            "user": self.user,
            "created": self.created,
            "updated": self.updated
        }


class CommentList:
    """A page of comments plus the pagination window that produced it."""

    def __init__(self, comments: List[Comment], limit: int, offset: int, total: Optional[int] = None):
        self.comments = comments
        # The forge APIs do not report a total, so the page size stands in for it
        self.total = len(comments) if total is None else total
        self.limit = limit
        self.offset = offset

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "comments": [comment.to_dict() for comment in self.comments],
            "total": self.total,
            "limit": self.limit,
            "offset": self.offset
        }


class PullRequestBranch:
    """A branch reference on one side of a pull request."""

    def __init__(self, ref: str = "", sha: str = ""):
        self.ref = ref
        self.sha = sha

    def to_dict(self) -> Dict[str, Any]:
        return {"ref": self.ref, "sha": self.sha}


class PullRequest:
    """Represents a pull request."""

    def __init__(
        self,
        number: int,
        title: str,
        state: str,
        id: int = 0,
        body: str = "",
        user: str = "",
        created: str = "",
        updated: str = "",
        head: Optional[PullRequestBranch] = None,
        base: Optional[PullRequestBranch] = None
    ):
        self.id = id
        self.number = number
        self.title = title
        self.body = body
        self.state = state
        self.user = user
        self.created = created
        self.updated = updated
        self.head = head or PullRequestBranch()
        self.base = base or PullRequestBranch()

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "id": self.id,
            "number": self.number,
            "title": self.title,
            "body": self.body,
            "state": self.state,
            "user": self.user,
            "created": self.created,
            "updated": self.updated,
            "head": self.head.to_dict(),
            "base": self.base.to_dict()
        }


class Label:
    """A repository label attached to an issue or pull request."""

    def __init__(self, id: int, name: str, color: str = "", description: str = ""):
        self.id = id
        self.name = name
        self.color = color
        self.description = description

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "color": self.color,
            "description": self.description
        }


class Milestone:
    """A repository milestone."""

    def __init__(self, id: int, title: str, state: str = "", description: str = "",
                 open_issues: int = 0, closed_issues: int = 0):
        self.id = id
        self.title = title
        self.state = state
        self.description = description
        self.open_issues = open_issues
        self.closed_issues = closed_issues

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "state": self.state,
            "description": self.description,
            "open_issues": self.open_issues,
            "closed_issues": self.closed_issues
        }


class PullRequestDetails(PullRequest):
    """A pull request with its review, merge and labelling metadata."""

    def __init__(
        self,
        number: int,
        title: str,
        state: str,
        html_url: str = "",
        diff_url: str = "",
        patch_url: str = "",
        labels: Optional[List[Label]] = None,
        milestone: Optional[Milestone] = None,
        assignee: str = "",
        assignees: Optional[List[str]] = None,
        comments: int = 0,
        is_locked: bool = False,
        mergeable: bool = False,
        has_merged: bool = False,
        merged_at: str = "",
        merge_commit_sha: str = "",
        merged_by: str = "",
        allow_maintainer_edit: bool = False,
        closed_at: str = "",
        deadline: str = "",
        **kwargs: Any
    ):
        super().__init__(number, title, state, **kwargs)
        self.html_url = html_url
        self.diff_url = diff_url
        self.patch_url = patch_url
        self.labels = labels or []
        self.milestone = milestone
        self.assignee = assignee
        self.assignees = assignees or []
        self.comments = comments
        self.is_locked = is_locked
        self.mergeable = mergeable
        self.has_merged = has_merged
        self.merged_at = merged_at
        self.merge_commit_sha = merge_commit_sha
        self.merged_by = merged_by
        self.allow_maintainer_edit = allow_maintainer_edit
        self.closed_at = closed_at
        self.deadline = deadline

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        data = super().to_dict()
        data.update({
            "html_url": self.html_url,
            "diff_url": self.diff_url,
            "patch_url": self.patch_url,
            "labels": [label.to_dict() for label in self.labels],
            "milestone": self.milestone.to_dict() if self.milestone else None,
            "assignee": self.assignee,
            "assignees": self.assignees,
            "comments": self.comments,
            "is_locked": self.is_locked,
            "mergeable": self.mergeable,
            "has_merged": self.has_merged,
            "merged_at": self.merged_at,
            "merge_commit_sha": self.merge_commit_sha,
            "merged_by": self.merged_by,
            "allow_maintainer_edit": self.allow_maintainer_edit,
            "closed_at": self.closed_at,
            "deadline": self.deadline
        })
        return data



class Notification:
    """A notification thread about an issue or pull request."""

    def __init__(
        self,
        id: int,
        title: str = "",
        type: str = "",
        number: int = 0,
        repository: str = "",
        unread: bool = False,
        updated: str = ""
    ):
        self.id = id
        self.title = title
        self.type = type
        self.number = number
        self.repository = repository
        self.unread = unread
        self.updated = updated

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "id": self.id,
            "title": self.title,
            "type": self.type,
            "number": self.number,
            "repository": self.repository,
            "unread": self.unread,
            "updated": self.updated
        }


class NotificationList:
    """A page of notifications plus the pagination window that produced it."""

    def __init__(self, notifications: List[Notification], limit: int, offset: int, total: Optional[int] = None):
        self.notifications = notifications
        self.total = len(notifications) if total is None else total
        self.limit = limit
        self.offset = offset

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "notifications": [notification.to_dict() for notification in self.notifications],
            "total": self.total,
            "limit": self.limit,
            "offset": self.offset
        }


class PullRequestUpdate(BaseModel):
    """Partial update for a pull request; only fields that are set change."""
    title: Optional[str] = None
    body: Optional[str] = None
    state: Optional[str] = None
    base: Optional[str] = None

    def to_payload(self) -> Dict[str, Any]:
        """Request body with unset fields left out."""
        return self.model_dump(exclude_none=True)


class IssueUpdate(BaseModel):
    """Partial update for an issue; only fields that are set change."""
    title: Optional[str] = None
    body: Optional[str] = None
    state: Optional[str] = None

    def to_payload(self) -> Dict[str, Any]:
        """Request body with unset fields left out."""
        return self.model_dump(exclude_none=True)
