"""Gitea backend for the forge client interface."""

import logging
from typing import Any, Dict, List, Optional

import httpx

from ..config import DEFAULT_TIMEOUT
from .http import (
    DRAFT_TITLE_PREFIX,
    ForgeSession,
    notification_params,
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

PULL_REQUEST_STATES = ("open", "closed", "all")


def _login(data: Optional[Dict[str, Any]]) -> str:
    return (data or {}).get("login", "")


def _issue(data: Dict[str, Any]) -> Issue:
    return Issue(
        id=data.get("id", 0),
        number=data.get("number", 0),
        title=data.get("title", ""),
        state=data.get("state", ""),
        body=data.get("body") or "",
        user=_login(data.get("user")),
        created=data.get("created_at") or "",
        updated=data.get("updated_at") or ""
    )


def _comment(data: Dict[str, Any]) -> Comment:
    return Comment(
        id=data.get("id", 0),
        body=data.get("body") or "",
        user=_login(data.get("user")),
        created=data.get("created_at") or "",
        updated=data.get("updated_at") or ""
    )


def _notification(data: Dict[str, Any]) -> Notification:
    subject = data.get("subject") or {}
    return Notification(
        id=data.get("id", 0),
        title=subject.get("title", ""),
        type=(subject.get("type") or "").lower(),
        number=subject_number(subject.get("url")),
        repository=(data.get("repository") or {}).get("full_name", ""),
        unread=data.get("unread", False),
        updated=data.get("updated_at") or ""
    )


def _branch(data: Optional[Dict[str, Any]]) -> PullRequestBranch:
    data = data or {}
    return PullRequestBranch(ref=data.get("ref", ""), sha=data.get("sha", ""))


def _pull_request_fields(data: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "id": data.get("id", 0),
        "number": data.get("number", 0),
        "title": data.get("title", ""),
        "body": data.get("body") or "",
        "state": data.get("state", ""),
        "user": _login(data.get("user")),
        "created": data.get("created_at") or "",
        "updated": data.get("updated_at") or "",
        "head": _branch(data.get("head")),
        "base": _branch(data.get("base"))
    }


def _pull_request(data: Dict[str, Any]) -> PullRequest:
    return PullRequest(**_pull_request_fields(data))


def _pull_request_details(data: Dict[str, Any]) -> PullRequestDetails:
    milestone = data.get("milestone")
    return PullRequestDetails(
        html_url=data.get("html_url", ""),
        diff_url=data.get("diff_url", ""),
        patch_url=data.get("patch_url", ""),
        labels=[
            Label(
                id=label.get("id", 0),
                name=label.get("name", ""),
                color=label.get("color", ""),
                description=label.get("description", "")
            )
            for label in data.get("labels") or []
        ],
        milestone=Milestone(
            id=milestone.get("id", 0),
            title=milestone.get("title", ""),
            state=milestone.get("state", ""),
            description=milestone.get("description", ""),
            open_issues=milestone.get("open_issues", 0),
            closed_issues=milestone.get("closed_issues", 0)
        ) if milestone else None,
        assignee=_login(data.get("assignee")),
        assignees=[_login(user) for user in data.get("assignees") or []],
        comments=data.get("comments", 0),
        is_locked=data.get("is_locked", False),
        mergeable=data.get("mergeable", False),
        has_merged=data.get("merged", False),
        merged_at=data.get("merged_at") or "",
        merge_commit_sha=data.get("merge_commit_sha") or "",
        merged_by=_login(data.get("merged_by")),
        allow_maintainer_edit=data.get("allow_maintainer_edit", False),
        closed_at=data.get("closed_at") or "",
        deadline=data.get("due_date") or "",
        **_pull_request_fields(data)
    )


class GiteaClient:
    """Client for the Gitea REST API."""

    def __init__(
        self,
        remote_url: str,
        auth_token: str,
        timeout: float = DEFAULT_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        """
        Initialize the Gitea API client.

        Args:
            remote_url: Base URL of the Gitea instance
            auth_token: Access token
            timeout: Request timeout in seconds
            transport: Optional httpx transport (used by tests)

        Raises:
            ClientInitError: If the remote URL is unusable
        """
        self.session = ForgeSession(remote_url, auth_token, timeout=timeout, transport=transport)
        logger.debug(f"GiteaClient initialized for {self.session.remote_url} with {timeout}s timeout")

    async def list_issues(self, repo: str, limit: int, offset: int) -> List[Issue]:
        owner, name = split_repository(repo)
        params = {"state": "open", "type": "issues", **page_params(limit, offset)}
        data = await self.session.request("GET", f"/repos/{owner}/{name}/issues", "list issues", params=params)
        return [_issue(item) for item in data or []]

    async def create_issue(self, repo: str, title: str, body: str) -> Issue:
        owner, name = split_repository(repo)
        data = await self.session.request(
            "POST", f"/repos/{owner}/{name}/issues", "create issue",
            json={"title": title, "body": body}
        )
        return _issue(data)

    async def edit_issue(self, repo: str, issue_number: int, fields: IssueUpdate) -> Issue:
        owner, name = split_repository(repo)
        data = await self.session.request(
            "PATCH", f"/repos/{owner}/{name}/issues/{issue_number}", "edit issue",
            json=fields.to_payload()
        )
        return _issue(data)

    async def create_issue_comment(self, repo: str, issue_number: int, body: str) -> Comment:
        owner, name = split_repository(repo)
        data = await self.session.request(
            "POST", f"/repos/{owner}/{name}/issues/{issue_number}/comments", "create issue comment",
            json={"body": body}
        )
        return _comment(data)

    async def list_issue_comments(self, repo: str, issue_number: int, limit: int, offset: int) -> CommentList:
        owner, name = split_repository(repo)
        data = await self.session.request(
            "GET", f"/repos/{owner}/{name}/issues/{issue_number}/comments", "list issue comments",
            params=page_params(limit, offset)
        )
        return CommentList([_comment(item) for item in data or []], limit=limit, offset=offset)

    async def edit_issue_comment(self, repo: str, comment_id: int, new_body: str) -> Comment:
        owner, name = split_repository(repo)
        data = await self.session.request(
            "PATCH", f"/repos/{owner}/{name}/issues/comments/{comment_id}", "edit issue comment",
            json={"body": new_body}
        )
        return _comment(data)

    async def list_pull_requests(self, repo: str, limit: int, offset: int, state: str) -> List[PullRequest]:
        owner, name = split_repository(repo)
        params = {
            "state": state if state in PULL_REQUEST_STATES else "open",
            **page_params(limit, offset)
        }
        data = await self.session.request("GET", f"/repos/{owner}/{name}/pulls", "list pull requests", params=params)
        return [_pull_request(item) for item in data or []]

    async def get_pull_request(self, repo: str, pr_number: int) -> PullRequestDetails:
        owner, name = split_repository(repo)
        data = await self.session.request("GET", f"/repos/{owner}/{name}/pulls/{pr_number}", "get pull request")
        return _pull_request_details(data)

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
            "title": f"{DRAFT_TITLE_PREFIX}{title}" if draft else title,
            "body": body
        }
        if assignee:
            payload["assignee"] = assignee
        data = await self.session.request("POST", f"/repos/{owner}/{name}/pulls", "create pull request", json=payload)
        return _pull_request(data)

    async def edit_pull_request(self, repo: str, pr_number: int, fields: PullRequestUpdate) -> PullRequest:
        owner, name = split_repository(repo)
        data = await self.session.request(
            "PATCH", f"/repos/{owner}/{name}/pulls/{pr_number}", "edit pull request",
            json=fields.to_payload()
        )
        return _pull_request(data)

    async def create_pull_request_comment(self, repo: str, pr_number: int, body: str) -> Comment:
        # Pull request conversation comments live on the issue timeline
        owner, name = split_repository(repo)
        data = await self.session.request(
            "POST", f"/repos/{owner}/{name}/issues/{pr_number}/comments", "create pull request comment",
            json={"body": body}
        )
        return _comment(data)

    async def list_pull_request_comments(self, repo: str, pr_number: int, limit: int, offset: int) -> CommentList:
        owner, name = split_repository(repo)
        data = await self.session.request(
            "GET", f"/repos/{owner}/{name}/issues/{pr_number}/comments", "list pull request comments",
            params=page_params(limit, offset)
        )
        return CommentList([_comment(item) for item in data or []], limit=limit, offset=offset)

    async def edit_pull_request_comment(self, repo: str, comment_id: int, new_body: str) -> Comment:
        owner, name = split_repository(repo)
        data = await self.session.request(
            "PATCH", f"/repos/{owner}/{name}/issues/comments/{comment_id}", "edit pull request comment",
            json={"body": new_body}
        )
        return _comment(data)

    async def list_notifications(self, repo: str, status: str, limit: int, offset: int) -> NotificationList:
        owner, name = split_repository(repo)
        data = await self.session.request(
            "GET", f"/repos/{owner}/{name}/notifications", "list notifications",
            params=notification_params(status, limit, offset)
        )
        return NotificationList([_notification(item) for item in data or []], limit=limit, offset=offset)
