"""Forgejo backend for the forge client interface."""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

import httpx

from ..config import DEFAULT_TIMEOUT
from .http import (
    DRAFT_TITLE_PREFIX,
    NOTIFICATION_STATUS_TYPES,
    ForgeSession,
    page_params,
    split_repository,
    subject_number,
)
from .models import (
    Comment,
    CommentList,
    Issue,
    IssueUpdate,
    Label,
    Milestone,
    Notification,
    NotificationList,
    PullRequest,
    PullRequestBranch,
    PullRequestDetails,
    PullRequestUpdate,
)


logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 10
UNKNOWN_USER = "unknown"
TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%SZ"


def format_timestamp(value: Optional[str]) -> str:
    """
    Normalize a Forgejo timestamp to UTC "YYYY-MM-DDTHH:MM:SSZ".

    Forgejo reports times in the server's zone ("2024-05-01T10:00:00+02:00").
    Unparseable values are returned unchanged; missing ones become "".
    """
    if not value:
        return ""
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return value
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc).strftime(TIMESTAMP_FORMAT)


class ForgejoClient:
    """Client for the Forgejo REST API."""

    def __init__(
        self,
        remote_url: str,
        auth_token: str,
        timeout: float = DEFAULT_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        """
        Initialize the Forgejo API client.

        Args:
            remote_url: Base URL of the Forgejo instance
            auth_token: Access token
            timeout: Request timeout in seconds
            transport: Optional httpx transport (used by tests)

        Raises:
            ClientInitError: If the remote URL is unusable
        """
        self.session = ForgeSession(remote_url, auth_token, timeout=timeout, transport=transport)
        logger.debug(f"ForgejoClient initialized for {self.session.remote_url} with {timeout}s timeout")

    # ------------------------------------------------------------------
    # Response mapping
    # ------------------------------------------------------------------

    @staticmethod
    def _poster(data: Dict[str, Any]) -> str:
        user = data.get("user") or {}
        return user.get("login") or UNKNOWN_USER

    @staticmethod
    def _page(limit: int, offset: int) -> Dict[str, int]:
        if limit <= 0:
            return {"page": 1, "limit": DEFAULT_PAGE_SIZE}
        return page_params(limit, offset)

    def _to_issue(self, data: Dict[str, Any]) -> Issue:
        return Issue(
            id=data.get("id", 0),
            number=data.get("number", 0),
            title=data.get("title", ""),
            state=data.get("state", ""),
            body=data.get("body") or "",
            user=self._poster(data),
            created=format_timestamp(data.get("created_at")),
            updated=format_timestamp(data.get("updated_at"))
        )

    def _to_comment(self, data: Dict[str, Any]) -> Comment:
        return Comment(
            id=data.get("id", 0),
            body=data.get("body") or "",
            user=self._poster(data),
            created=format_timestamp(data.get("created_at")),
            updated=format_timestamp(data.get("updated_at"))
        )

    def _to_comment_list(self, data: Any, limit: int, offset: int) -> CommentList:
        # Forgejo does not report a total count for comment listings
        return CommentList([self._to_comment(item) for item in data or []], limit=limit, offset=offset)

    def _to_notification(self, data: Dict[str, Any]) -> Notification:
        subject = data.get("subject") or {}
        return Notification(
            id=data.get("id", 0),
            title=subject.get("title", ""),
            type=(subject.get("type") or "").lower(),
            number=subject_number(subject.get("url")),
            repository=(data.get("repository") or {}).get("full_name", ""),
            unread=data.get("unread", False),
            updated=format_timestamp(data.get("updated_at"))
        )

    def _common_pr_fields(self, data: Dict[str, Any]) -> Dict[str, Any]:
        head = data.get("head") or {}
        base = data.get("base") or {}
        return {
            "id": data.get("id", 0),
            "number": data.get("number", 0),
            "title": data.get("title", ""),
            "body": data.get("body") or "",
            "state": data.get("state", ""),
            "user": self._poster(data),
            "created": format_timestamp(data.get("created_at")),
            "updated": format_timestamp(data.get("updated_at")),
            "head": PullRequestBranch(ref=head.get("ref", ""), sha=head.get("sha", "")),
            "base": PullRequestBranch(ref=base.get("ref", ""), sha=base.get("sha", ""))
        }

    def _to_pull_request(self, data: Dict[str, Any]) -> PullRequest:
        return PullRequest(**self._common_pr_fields(data))

    def _to_pull_request_details(self, data: Dict[str, Any]) -> PullRequestDetails:
        milestone = data.get("milestone")
        labels = [
            Label(
                id=label.get("id", 0),
                name=label.get("name", ""),
                color=label.get("color", ""),
                description=label.get("description", "")
            )
            for label in data.get("labels") or []
        ]
        return PullRequestDetails(
            html_url=data.get("html_url", ""),
            diff_url=data.get("diff_url", ""),
            patch_url=data.get("patch_url", ""),
            labels=labels,
            milestone=Milestone(
                id=milestone.get("id", 0),
                title=milestone.get("title", ""),
                state=milestone.get("state", ""),
                description=milestone.get("description", ""),
                open_issues=milestone.get("open_issues", 0),
                closed_issues=milestone.get("closed_issues", 0)
            ) if milestone else None,
            assignee=(data.get("assignee") or {}).get("login", ""),
            assignees=[user.get("login", "") for user in data.get("assignees") or []],
            comments=data.get("comments", 0),
            is_locked=data.get("is_locked", False),
            mergeable=data.get("mergeable", False),
            has_merged=data.get("merged", False),
            merged_at=format_timestamp(data.get("merged_at")),
            merge_commit_sha=data.get("merge_commit_sha") or "",
            merged_by=(data.get("merged_by") or {}).get("login", ""),
            allow_maintainer_edit=data.get("allow_maintainer_edit", False),
            closed_at=format_timestamp(data.get("closed_at")),
            deadline=format_timestamp(data.get("due_date")),
            **self._common_pr_fields(data)
        )

    # ------------------------------------------------------------------
    # Issues
    # ------------------------------------------------------------------

    async def list_issues(self, repo: str, limit: int, offset: int) -> List[Issue]:
        """
        List open issues of a repository.

        Args:
            repo: Repository in "owner/repo" format
            limit: Page size
            offset: Number of issues to skip

        Returns:
            List of Issue objects
        """
        owner, name = split_repository(repo)
        params = {"state": "open", "type": "issues", **self._page(limit, offset)}
        data = await self.session.request("GET", f"/repos/{owner}/{name}/issues", "list issues", params=params)
        return [self._to_issue(item) for item in data or []]

    async def create_issue(self, repo: str, title: str, body: str) -> Issue:
        owner, name = split_repository(repo)
        data = await self.session.request(
            "POST", f"/repos/{owner}/{name}/issues", "create issue",
            json={"title": title, "body": body}
        )
        return self._to_issue(data)

    async def edit_issue(self, repo: str, issue_number: int, fields: IssueUpdate) -> Issue:
        owner, name = split_repository(repo)
        data = await self.session.request(
            "PATCH", f"/repos/{owner}/{name}/issues/{issue_number}", "edit issue",
            json=fields.to_payload()
        )
        return self._to_issue(data)

    async def create_issue_comment(self, repo: str, issue_number: int, body: str) -> Comment:
        owner, name = split_repository(repo)
        data = await self.session.request(
            "POST", f"/repos/{owner}/{name}/issues/{issue_number}/comments", "create issue comment",
            json={"body": body}
        )
        return self._to_comment(data)

    async def list_issue_comments(self, repo: str, issue_number: int, limit: int, offset: int) -> CommentList:
        owner, name = split_repository(repo)
        data = await self.session.request(
            "GET", f"/repos/{owner}/{name}/issues/{issue_number}/comments", "list issue comments",
            params=self._page(limit, offset)
        )
        return self._to_comment_list(data, limit, offset)

    async def edit_issue_comment(self, repo: str, comment_id: int, new_body: str) -> Comment:
        owner, name = split_repository(repo)
        data = await self.session.request(
            "PATCH", f"/repos/{owner}/{name}/issues/comments/{comment_id}", "edit issue comment",
            json={"body": new_body}
        )
        return self._to_comment(data)

    # ------------------------------------------------------------------
    # Pull requests
    # ------------------------------------------------------------------

    async def list_pull_requests(self, repo: str, limit: int, offset: int, state: str) -> List[PullRequest]:
        """
        List pull requests of a repository.

        Args:
            repo: Repository in "owner/repo" format
            limit: Page size
            offset: Number of pull requests to skip
            state: "open", "closed" or "all"; anything else lists open ones

        Returns:
            List of PullRequest objects
        """
        owner, name = split_repository(repo)
        if state not in ("open", "closed", "all"):
            state = "open"
        params = {"state": state, **self._page(limit, offset)}
        data = await self.session.request("GET", f"/repos/{owner}/{name}/pulls", "list pull requests", params=params)
        return [self._to_pull_request(item) for item in data or []]

    async def get_pull_request(self, repo: str, pr_number: int) -> PullRequestDetails:
        owner, name = split_repository(repo)
        data = await self.session.request("GET", f"/repos/{owner}/{name}/pulls/{pr_number}", "get pull request")
        return self._to_pull_request_details(data)

    async def create_pull_request(
        self,
        repo: str,
        head: str,
        base: str,
        title: str,
        body: str,
        draft: bool = False,
        assignee: Optional[str] = None
    ) -> PullRequest:
        owner, name = split_repository(repo)
        payload: Dict[str, Any] = {
            "head": head,
            "base": base,
            "title": DRAFT_TITLE_PREFIX + title if draft else title,
            "body": body
        }
        if assignee:
            payload["assignees"] = [assignee]
        data = await self.session.request("POST", f"/repos/{owner}/{name}/pulls", "create pull request", json=payload)
        return self._to_pull_request(data)

    async def edit_pull_request(self, repo: str, pr_number: int, fields: PullRequestUpdate) -> PullRequest:
        owner, name = split_repository(repo)
        data = await self.session.request(
            "PATCH", f"/repos/{owner}/{name}/pulls/{pr_number}", "edit pull request",
            json=fields.to_payload()
        )
        return self._to_pull_request(data)

    async def create_pull_request_comment(self, repo: str, pr_number: int, body: str) -> Comment:
        owner, name = split_repository(repo)
        data = await self.session.request(
            "POST", f"/repos/{owner}/{name}/issues/{pr_number}/comments", "create pull request comment",
            json={"body": body}
        )
        return self._to_comment(data)

    async def list_pull_request_comments(self, repo: str, pr_number: int, limit: int, offset: int) -> CommentList:
        owner, name = split_repository(repo)
        data = await self.session.request(
            "GET", f"/repos/{owner}/{name}/issues/{pr_number}/comments", "list pull request comments",
            params=self._page(limit, offset)
        )
        return self._to_comment_list(data, limit, offset)

    async def edit_pull_request_comment(self, repo: str, comment_id: int, new_body: str) -> Comment:
        owner, name = split_repository(repo)
        data = await self.session.request(
            "PATCH", f"/repos/{owner}/{name}/issues/comments/{comment_id}", "edit pull request comment",
            json={"body": new_body}
        )
        return self._to_comment(data)

    # ------------------------------------------------------------------
    # Notifications
    # ------------------------------------------------------------------

    async def list_notifications(self, repo: str, status: str, limit: int, offset: int) -> NotificationList:
        """
        List the authenticated user's notification threads for a repository.

        Args:
            repo: Repository in "owner/repo" format
            status: "read", "unread" or "all"
            limit: Page size
            offset: Number of notifications to skip

        Returns:
            NotificationList for the requested window
        """
        owner, name = split_repository(repo)
        params = {
            "status-types": NOTIFICATION_STATUS_TYPES.get(status, NOTIFICATION_STATUS_TYPES["all"]),
            **self._page(limit, offset)
        }
        data = await self.session.request(
            "GET", f"/repos/{owner}/{name}/notifications", "list notifications", params=params
        )
        notifications = [self._to_notification(item) for item in data or []]
        return NotificationList(notifications, limit=limit, offset=offset)
