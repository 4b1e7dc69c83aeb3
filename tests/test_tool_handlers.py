"""Tests for the tool handlers against a mocked forge client."""

from unittest.mock import AsyncMock

import pytest

from forgejo_mcp.remote.models import (
    Comment,
    CommentList,
    Issue,
    IssueUpdate,
    Notification,
    NotificationList,
    PullRequest,
    PullRequestBranch,
    PullRequestDetails,
    PullRequestUpdate,
)
from forgejo_mcp.tools.issues import (
    handle_issue_comment_create,
    handle_issue_comment_edit,
    handle_issue_comment_list,
    handle_issue_create,
    handle_issue_edit,
    handle_issue_list,
)
from forgejo_mcp.tools.notifications import handle_notification_list
from forgejo_mcp.tools.pulls import (
    handle_pr_comment_create,
    handle_pr_comment_edit,
    handle_pr_comment_list,
    handle_pr_create,
    handle_pr_edit,
    handle_pr_fetch,
    handle_pr_list,
)
from forgejo_mcp.utils.errors import NotFoundError, RemoteError


@pytest.fixture
def client():
    """Mock forge client; every interface method is an AsyncMock."""
    return AsyncMock()


def make_comment(comment_id=42, body="looks good"):
    return Comment(id=comment_id, body=body, user="alice",
                   created="2024-05-01T10:00:00Z", updated="2024-05-01T10:05:00Z")


def make_pr(number=3, state="open"):
    return PullRequest(
        number=number, title="Add feature", state=state, id=300, user="bob",
        created="2024-05-01T10:00:00Z", updated="2024-05-02T10:00:00Z",
        head=PullRequestBranch("feature", "abc"), base=PullRequestBranch("main", "def")
    )


class TestIssueCommentCreate:
    """Test issue_comment_create end to end through the handler pipeline."""

    @pytest.mark.asyncio
    async def test_success(self, client):
        client.create_issue_comment.return_value = make_comment()

        response = await handle_issue_comment_create(client, {
            "repository": "acme/widgets", "issue_number": 5, "comment": "looks good"
        })

        assert response.is_error is False
        assert response.structured["comment"]["id"] == 42
        assert "ID: 42" in response.text
        assert "Created: 2024-05-01T10:00:00Z" in response.text
        client.create_issue_comment.assert_awaited_once_with("acme/widgets", 5, "looks good")

    @pytest.mark.asyncio
    async def test_malformed_repository(self, client):
        response = await handle_issue_comment_create(client, {
            "repository": "acme-widgets", "issue_number": 5, "comment": "x"
        })

        assert response.is_error is True
        assert "owner/repo" in response.text
        assert response.text.startswith("Invalid request: ")
        assert response.structured is None
        assert client.mock_calls == []

    @pytest.mark.asyncio
    async def test_repository_with_trailing_newline(self, client):
        response = await handle_issue_comment_create(client, {
            "repository": "acme/widgets\n", "issue_number": 5, "comment": "hi"
        })

        assert response.is_error is True
        assert response.text == "Invalid request: repository: repository must be in format 'owner/repo'"
        assert client.mock_calls == []

    @pytest.mark.asyncio
    async def test_remote_failure(self, client):
        client.create_issue_comment.side_effect = NotFoundError(
            "create issue comment", "404 Not Found: issue does not exist", status_code=404
        )

        response = await handle_issue_comment_create(client, {
            "repository": "acme/widgets", "issue_number": 99, "comment": "hi"
        })

        assert response.is_error is True
        assert response.text == "Failed to create comment: 404 Not Found: issue does not exist"
        assert response.structured is None


class TestValidationShortCircuits:
    """Invalid arguments never reach the client."""

    @pytest.mark.asyncio
    async def test_pr_list_limit_below_minimum(self, client):
        response = await handle_pr_list(client, {"repository": "a/b", "limit": 0, "offset": 0})

        assert response.is_error is True
        assert "limit: must be between 1 and 100" in response.text
        assert client.mock_calls == []

    @pytest.mark.asyncio
    async def test_boolean_limit_is_not_coerced(self, client):
        response = await handle_issue_list(client, {"repository": "a/b", "limit": True})

        assert response.is_error is True
        assert response.text.startswith("Invalid request: limit: ")
        assert client.mock_calls == []

    @pytest.mark.asyncio
    async def test_whitespace_only_comment_edit(self, client):
        response = await handle_issue_comment_edit(client, {
            "repository": "a/b", "issue_number": 1, "comment_id": 9, "new_content": "   "
        })

        assert response.is_error is True
        assert response.text == "Invalid request: new_content: cannot be blank"
        assert client.mock_calls == []

    @pytest.mark.asyncio
    async def test_pr_edit_without_changes(self, client):
        response = await handle_pr_edit(client, {"repository": "a/b", "pull_request_number": 2})

        assert response.is_error is True
        assert "At least one of" in response.text
        assert client.mock_calls == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize("handler,arguments", [
        (handle_issue_list, {"repository": "a/b", "offset": -1}),
        (handle_issue_create, {"repository": "a/b", "title": " "}),
        (handle_issue_edit, {"repository": "a/b", "issue_number": 0, "title": "t"}),
        (handle_issue_comment_list, {"repository": "a/b", "issue_number": 1, "limit": 101}),
        (handle_pr_fetch, {"repository": "a/b", "pull_request_number": -2}),
        (handle_pr_fetch, {"repository": "a/b", "pull_request_number": True}),
        (handle_notification_list, {"repository": "a/b", "status": "pinned"}),
        (handle_issue_comment_create, {"repository": "a/b\r\n", "issue_number": 1, "comment": "x"}),
        (handle_pr_create, {"repository": "a/b", "head": "", "base": "main", "title": "t"}),
        (handle_pr_comment_create, {"repository": "a/b", "pull_request_number": 1, "comment": ""}),
        (handle_pr_comment_list, {"repository": "a", "pull_request_number": 1}),
        (handle_pr_comment_edit, {"repository": "a/b", "pull_request_number": 1, "comment_id": 0,
                                  "new_content": "x"}),
    ])
    async def test_invalid_arguments_make_no_calls(self, client, handler, arguments):
        response = await handler(client, arguments)

        assert response.is_error is True
        assert response.text.startswith("Invalid request: ")
        assert client.mock_calls == []


class TestIssueHandlers:
    """Test the remaining issue handlers on valid input."""

    @pytest.mark.asyncio
    async def test_issue_list(self, client):
        client.list_issues.return_value = [Issue(number=1, title="Bug", state="open")]

        response = await handle_issue_list(client, {"repository": "a/b"})

        client.list_issues.assert_awaited_once_with("a/b", 15, 0)
        assert response.text == "Found 1 issues"
        assert response.structured["issues"][0]["title"] == "Bug"

    @pytest.mark.asyncio
    async def test_issue_create(self, client):
        client.create_issue.return_value = Issue(number=12, title="New", state="open")

        response = await handle_issue_create(client, {"repository": "a/b", "title": "New"})

        client.create_issue.assert_awaited_once_with("a/b", "New", "")
        assert response.text == "Issue created successfully. Number: 12, Title: New"
        assert response.structured == {"issue": client.create_issue.return_value.to_dict()}

    @pytest.mark.asyncio
    async def test_issue_edit(self, client):
        client.edit_issue.return_value = Issue(number=12, title="New", state="closed", updated="2024-06-01T00:00:00Z")

        response = await handle_issue_edit(client, {"repository": "a/b", "issue_number": 12, "state": "closed"})

        client.edit_issue.assert_awaited_once_with("a/b", 12, IssueUpdate(state="closed"))
        assert "State: closed" in response.text
        assert "Updated: 2024-06-01T00:00:00Z" in response.text

    @pytest.mark.asyncio
    async def test_issue_comment_list(self, client):
        comments = CommentList([make_comment(1, "a"), make_comment(2, "b")], limit=2, offset=4)
        client.list_issue_comments.return_value = comments

        response = await handle_issue_comment_list(client, {
            "repository": "a/b", "issue_number": 3, "limit": 2, "offset": 4
        })

        client.list_issue_comments.assert_awaited_once_with("a/b", 3, 2, 4)
        assert response.text.startswith("Found 2 comments (showing 5-6):")
        assert response.structured == comments.to_dict()

    @pytest.mark.asyncio
    async def test_issue_comment_list_empty(self, client):
        client.list_issue_comments.return_value = CommentList([], limit=15, offset=0)

        response = await handle_issue_comment_list(client, {"repository": "a/b", "issue_number": 3})

        assert response.is_error is False
        assert response.text == "Found 0 comments"
        assert response.structured["comments"] == []

    @pytest.mark.asyncio
    async def test_issue_comment_edit(self, client):
        client.edit_issue_comment.return_value = make_comment(9, "edited")

        response = await handle_issue_comment_edit(client, {
            "repository": "a/b", "issue_number": 1, "comment_id": 9, "new_content": "edited"
        })

        client.edit_issue_comment.assert_awaited_once_with("a/b", 9, "edited")
        assert response.text.startswith("Comment edited successfully. ID: 9")


class TestPullRequestHandlers:
    """Test the pull request handlers on valid input."""

    @pytest.mark.asyncio
    async def test_pr_list(self, client):
        client.list_pull_requests.return_value = [make_pr(1), make_pr(2)]

        response = await handle_pr_list(client, {"repository": "a/b", "state": "all", "limit": 5})

        client.list_pull_requests.assert_awaited_once_with("a/b", 5, 0, "all")
        assert response.text == "Found 2 pull requests"
        assert [pr["number"] for pr in response.structured["pull_requests"]] == [1, 2]

    @pytest.mark.asyncio
    async def test_pr_fetch(self, client):
        client.get_pull_request.return_value = PullRequestDetails(
            number=3, title="Add feature", state="closed", user="bob",
            head=PullRequestBranch("feature"), base=PullRequestBranch("main"),
            has_merged=True, merged_by="dave", merged_at="2024-05-03T00:00:00Z"
        )

        response = await handle_pr_fetch(client, {"repository": "a/b", "pull_request_number": 3})

        client.get_pull_request.assert_awaited_once_with("a/b", 3)
        assert "Pull Request #3: Add feature" in response.text
        assert "Branches: feature -> main" in response.text
        assert "by dave" in response.text
        assert response.structured["pull_request"]["has_merged"] is True

    @pytest.mark.asyncio
    async def test_pr_create(self, client):
        client.create_pull_request.return_value = make_pr(7)

        response = await handle_pr_create(client, {
            "repository": "a/b", "head": "feature", "base": "main", "title": "Add feature", "draft": True
        })

        client.create_pull_request.assert_awaited_once_with(
            "a/b", "feature", "main", "Add feature", "", draft=True, assignee=None
        )
        assert response.text.startswith("Pull request created successfully. Number: 7")

    @pytest.mark.asyncio
    async def test_pr_edit(self, client):
        client.edit_pull_request.return_value = make_pr(3, state="closed")

        response = await handle_pr_edit(client, {
            "repository": "a/b", "pull_request_number": 3, "state": "closed", "base_branch": "develop"
        })

        client.edit_pull_request.assert_awaited_once_with(
            "a/b", 3, PullRequestUpdate(state="closed", base="develop")
        )
        assert response.structured["pull_request"]["state"] == "closed"

    @pytest.mark.asyncio
    async def test_pr_comment_create(self, client):
        client.create_pull_request_comment.return_value = make_comment(5, "nice")

        response = await handle_pr_comment_create(client, {
            "repository": "a/b", "pull_request_number": 3, "comment": "nice"
        })

        client.create_pull_request_comment.assert_awaited_once_with("a/b", 3, "nice")
        assert response.text.startswith("Pull request comment created successfully. ID: 5")

    @pytest.mark.asyncio
    async def test_pr_comment_list(self, client):
        client.list_pull_request_comments.return_value = CommentList([make_comment()], limit=15, offset=0)

        response = await handle_pr_comment_list(client, {"repository": "a/b", "pull_request_number": 3})

        client.list_pull_request_comments.assert_awaited_once_with("a/b", 3, 15, 0)
        assert response.structured["total"] == 1

    @pytest.mark.asyncio
    async def test_pr_comment_edit(self, client):
        client.edit_pull_request_comment.return_value = make_comment(5, "better")

        response = await handle_pr_comment_edit(client, {
            "repository": "a/b", "pull_request_number": 3, "comment_id": 5, "new_content": "better"
        })

        client.edit_pull_request_comment.assert_awaited_once_with("a/b", 5, "better")
        assert response.structured["comment"]["body"] == "better"


class TestNotificationHandlers:
    """Test notification_list."""

    @pytest.mark.asyncio
    async def test_defaults_to_unread(self, client):
        client.list_notifications.return_value = NotificationList(
            [Notification(id=9, title="Add feature", type="pull", number=3, repository="a/b", unread=True)],
            limit=15,
            offset=0
        )

        response = await handle_notification_list(client, {"repository": "a/b"})

        client.list_notifications.assert_awaited_once_with("a/b", "unread", 15, 0)
        assert response.is_error is False
        assert response.text == "Found 1 unread notifications"
        assert response.structured["total"] == 1
        assert response.structured["notifications"][0]["number"] == 3

    @pytest.mark.asyncio
    async def test_all_statuses(self, client):
        client.list_notifications.return_value = NotificationList([], limit=5, offset=10)

        response = await handle_notification_list(client, {
            "repository": "a/b", "status": "all", "limit": 5, "offset": 10
        })

        client.list_notifications.assert_awaited_once_with("a/b", "all", 5, 10)
        assert response.text == "Found 0 all notifications"
        assert response.structured == {"notifications": [], "total": 0, "limit": 5, "offset": 10}

    @pytest.mark.asyncio
    async def test_invalid_status(self, client):
        response = await handle_notification_list(client, {"repository": "a/b", "status": "pinned"})

        assert response.is_error is True
        assert response.text == "Invalid request: status: must be one of 'read', 'unread', 'all'"
        assert client.mock_calls == []

    @pytest.mark.asyncio
    async def test_remote_failure(self, client):
        client.list_notifications.side_effect = RemoteError("list notifications", "403 Forbidden", status_code=403)

        response = await handle_notification_list(client, {"repository": "a/b", "status": "read"})

        assert response.is_error is True
        assert response.text == "Failed to list notifications: 403 Forbidden"


class TestUnexpectedFailures:
    """Failures never escape the handler as exceptions."""

    @pytest.mark.asyncio
    async def test_remote_error_message(self, client):
        client.list_pull_requests.side_effect = RemoteError("list pull requests", "500 Internal Server Error")

        response = await handle_pr_list(client, {"repository": "a/b"})

        assert response.is_error is True
        assert response.text == "Failed to list pull requests: 500 Internal Server Error"

    @pytest.mark.asyncio
    async def test_unexpected_exception_reported(self, client):
        client.list_issues.side_effect = RuntimeError("boom")

        response = await handle_issue_list(client, {"repository": "a/b"})

        assert response.is_error is True
        assert response.text == "Failed to list issues: boom"

    @pytest.mark.asyncio
    async def test_envelope_shape(self, client):
        client.list_issues.return_value = []

        response = await handle_issue_list(client, {"repository": "a/b"})
        envelope = response.to_dict()

        assert envelope == {
            "content": [{"type": "text", "text": "Found 0 issues"}],
            "structuredContent": {"issues": []},
            "isError": False
        }
