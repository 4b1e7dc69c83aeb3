"""Response envelope returned by every tool handler, plus its text formatters."""

import json
from typing import Any, Dict, List, Optional

from mcp.types import CallToolResult, TextContent

from ..remote.models import Comment, CommentList, Issue, NotificationList, PullRequest, PullRequestDetails


class ToolResponse:
    """Human-readable text, an optional structured payload and an error flag."""

    def __init__(self, text: str, structured: Optional[Dict[str, Any]] = None, is_error: bool = False):
        self.text = text
        self.structured = structured
        self.is_error = is_error

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the MCP CallToolResult wire shape."""
        result: Dict[str, Any] = {
            "content": [{"type": "text", "text": self.text}],
            "isError": self.is_error
        }
        if self.structured is not None:
            result["structuredContent"] = self.structured
        return result

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), indent=2)

    def to_call_tool_result(self) -> CallToolResult:
        """Convert to the result type FastMCP passes through unchanged."""
        return CallToolResult(
            content=[TextContent(type="text", text=self.text)],
            structuredContent=self.structured,
            isError=self.is_error
        )

    def __repr__(self) -> str:
        return f"ToolResponse(is_error={self.is_error}, text={self.text!r})"


def success(text: str, structured: Optional[Dict[str, Any]] = None) -> ToolResponse:
    return ToolResponse(text, structured=structured, is_error=False)


def failure(text: str) -> ToolResponse:
    return ToolResponse(text, structured=None, is_error=True)


# ============================================================================
# Formatters
# ============================================================================

def issue_list_text(issues: List[Issue]) -> str:
    return f"Found {len(issues)} issues"


def issue_created_text(issue: Issue) -> str:
    return f"Issue created successfully. Number: {issue.number}, Title: {issue.title}"


def issue_edited_text(issue: Issue) -> str:
    text = f"Issue edited successfully. Number: {issue.number}, Title: {issue.title}, State: {issue.state}"
    if issue.updated:
        text += f", Updated: {issue.updated}"
    return text


def comment_created_text(comment: Comment, subject: str = "Comment") -> str:
    return (
        f"{subject} created successfully. ID: {comment.id}, Created: {comment.created}\n"
        f"Comment body: {comment.body}"
    )


def comment_edited_text(comment: Comment, subject: str = "Comment") -> str:
    return (
        f"{subject} edited successfully. ID: {comment.id}, Updated: {comment.updated}\n"
        f"Comment body: {comment.body}"
    )


def comment_list_text(comment_list: CommentList) -> str:
    """
    Summarize a page of comments.

    Lists one line per comment after a header giving the window shown.
    """
    if not comment_list.comments:
        return f"Found {comment_list.total} comments"

    first = comment_list.offset + 1
    last = comment_list.offset + len(comment_list.comments)
    lines = [f"Found {comment_list.total} comments (showing {first}-{last}):"]
    for comment in comment_list.comments:
        lines.append(f"Comment ID: {comment.id}, User: {comment.user}, Created: {comment.created}")
        lines.append(f"  {comment.body}")
    return "\n".join(lines)


def pull_request_list_text(pull_requests: List[PullRequest]) -> str:
    return f"Found {len(pull_requests)} pull requests"


def pull_request_created_text(pr: PullRequest) -> str:
    text = f"Pull request created successfully. Number: {pr.number}, Title: {pr.title}, State: {pr.state}"
    if pr.created:
        text += f", Created: {pr.created}"
    return text


def pull_request_edited_text(pr: PullRequest) -> str:
    text = f"Pull request edited successfully. Number: {pr.number}, Title: {pr.title}, State: {pr.state}"
    if pr.updated:
        text += f", Updated: {pr.updated}"
    return text


def pull_request_details_text(pr: PullRequestDetails) -> str:
    lines = [
        f"Pull Request #{pr.number}: {pr.title}",
        f"State: {pr.state}",
        f"Author: {pr.user}",
        f"Branches: {pr.head.ref} -> {pr.base.ref}",
        f"Created: {pr.created}",
        f"Updated: {pr.updated}",
    ]
    if pr.has_merged:
        lines.append(f"Merged: {pr.merged_at} by {pr.merged_by}")
    if pr.labels:
        lines.append("Labels: " + ", ".join(label.name for label in pr.labels))
    if pr.html_url:
        lines.append(f"URL: {pr.html_url}")
    if pr.body:
        lines.append("")
        lines.append(pr.body)
    return "\n".join(lines)


def notification_list_text(notification_list: NotificationList, status: str) -> str:
    return f"Found {len(notification_list.notifications)} {status} notifications"
