"""Capability contract every forge backend fulfills.

Handlers only ever talk to a ``ClientInterface``; which concrete backend sits
behind it is decided once, at startup, by the client factory. Implementations
trust their callers: arguments arrive already validated by the tool layer.
"""

from typing import List, Optional, Protocol, runtime_checkable

from .models import (
    Comment,
    CommentList,
    Issue,
    IssueUpdate,
    NotificationList,
    PullRequest,
    PullRequestDetails,
    PullRequestUpdate,
)


@runtime_checkable
class ClientInterface(Protocol):
    """Issue, pull request, comment and notification operations against one forge instance.

    ``repo`` is always ``"owner/repo"``. ``limit``/``offset`` are a 0-based
    window; backends translate them to the forge's page numbering. Failures
    raise :class:`~forgejo_mcp.utils.errors.RemoteError`.
    """

    async def list_issues(self, repo: str, limit: int, offset: int) -> List[Issue]:
        ...

    async def create_issue(self, repo: str, title: str, body: str) -> Issue:
        ...

    async def edit_issue(self, repo: str, issue_number: int, fields: IssueUpdate) -> Issue:
        ...

    async def create_issue_comment(self, repo: str, issue_number: int, body: str) -> Comment:
        ...

    async def list_issue_comments(self, repo: str, issue_number: int, limit: int, offset: int) -> CommentList:
        ...

    async def edit_issue_comment(self, repo: str, comment_id: int, new_body: str) -> Comment:
        ...

    async def list_pull_requests(self, repo: str, limit: int, offset: int, state: str) -> List[PullRequest]:
        ...

    async def get_pull_request(self, repo: str, pr_number: int) -> PullRequestDetails:
        ...

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
        ...

    async def edit_pull_request(self, repo: str, pr_number: int, fields: PullRequestUpdate) -> PullRequest:
        ...

    async def create_pull_request_comment(self, repo: str, pr_number: int, body: str) -> Comment:
        ...

    async def list_pull_request_comments(self, repo: str, pr_number: int, limit: int, offset: int) -> CommentList:
        ...

    async def edit_pull_request_comment(self, repo: str, comment_id: int, new_body: str) -> Comment:
        ...

    async def list_notifications(self, repo: str, status: str, limit: int, offset: int) -> NotificationList:
        ...
