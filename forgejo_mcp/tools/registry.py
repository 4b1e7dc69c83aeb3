"""Tool name → handler table and the dispatcher used by the server."""

import logging
from typing import Any, Dict, Optional

from ..remote.interface import ClientInterface
from ..utils.errors import UnknownToolError
from .base import Handler
from .issues import (
    handle_issue_comment_create,
    handle_issue_comment_edit,
    handle_issue_comment_list,
    handle_issue_create,
    handle_issue_edit,
    handle_issue_list,
)
from .notifications import handle_notification_list
from .pulls import (
    handle_pr_comment_create,
    handle_pr_comment_edit,
    handle_pr_comment_list,
    handle_pr_create,
    handle_pr_edit,
    handle_pr_fetch,
    handle_pr_list,
)
from .responses import ToolResponse


logger = logging.getLogger(__name__)


TOOL_HANDLERS: Dict[str, Handler] = {
    "issue_list": handle_issue_list,
    "issue_create": handle_issue_create,
    "issue_edit": handle_issue_edit,
    "issue_comment_create": handle_issue_comment_create,
    "issue_comment_list": handle_issue_comment_list,
    "issue_comment_edit": handle_issue_comment_edit,
    "pr_list": handle_pr_list,
    "pr_fetch": handle_pr_fetch,
    "pr_create": handle_pr_create,
    "pr_edit": handle_pr_edit,
    "pr_comment_create": handle_pr_comment_create,
    "pr_comment_list": handle_pr_comment_list,
    "pr_comment_edit": handle_pr_comment_edit,
    "notification_list": handle_notification_list,
}


def _annotations(title: str, read_only: bool, idempotent: bool) -> Dict[str, Any]:
    return {
        "title": title,
        "readOnlyHint": read_only,
        "destructiveHint": False,
        "idempotentHint": idempotent,
        "openWorldHint": True
    }


TOOL_DEFINITIONS: Dict[str, Dict[str, Any]] = {
    "issue_list": {
        "description": "List open issues of a repository with pagination.",
        "annotations": _annotations("List Issues", read_only=True, idempotent=True)
    },
    "issue_create": {
        "description": "Create a new issue in a repository.",
        "annotations": _annotations("Create Issue", read_only=False, idempotent=False)
    },
    "issue_edit": {
        "description": "Edit the title, body or state of an existing issue.",
        "annotations": _annotations("Edit Issue", read_only=False, idempotent=True)
    },
    "issue_comment_create": {
        "description": "Add a comment to an issue.",
        "annotations": _annotations("Create Issue Comment", read_only=False, idempotent=False)
    },
    "issue_comment_list": {
        "description": "List the comments of an issue with pagination.",
        "annotations": _annotations("List Issue Comments", read_only=True, idempotent=True)
    },
    "issue_comment_edit": {
        "description": "Replace the body of an existing issue comment.",
        "annotations": _annotations("Edit Issue Comment", read_only=False, idempotent=True)
    },
    "pr_list": {
        "description": "List pull requests of a repository, filtered by state, with pagination.",
        "annotations": _annotations("List Pull Requests", read_only=True, idempotent=True)
    },
    "pr_fetch": {
        "description": "Fetch one pull request with its merge, label and milestone details.",
        "annotations": _annotations("Fetch Pull Request", read_only=True, idempotent=True)
    },
    "pr_create": {
        "description": "Open a pull request from a head branch into a base branch.",
        "annotations": _annotations("Create Pull Request", read_only=False, idempotent=False)
    },
    "pr_edit": {
        "description": "Edit the title, body, state or base branch of a pull request.",
        "annotations": _annotations("Edit Pull Request", read_only=False, idempotent=True)
    },
    "pr_comment_create": {
        "description": "Add a comment to a pull request.",
        "annotations": _annotations("Create Pull Request Comment", read_only=False, idempotent=False)
    },
    "pr_comment_list": {
        "description": "List the comments of a pull request with pagination.",
        "annotations": _annotations("List Pull Request Comments", read_only=True, idempotent=True)
    },
    "pr_comment_edit": {
        "description": "Replace the body of an existing pull request comment.",
        "annotations": _annotations("Edit Pull Request Comment", read_only=False, idempotent=True)
    },
    "notification_list": {
        "description": "List your notifications for a repository, filtered by read status, with pagination.",
        "annotations": _annotations("List Notifications", read_only=True, idempotent=True)
    },
}


async def dispatch(client: ClientInterface, name: str, arguments: Optional[Dict[str, Any]] = None) -> ToolResponse:
    """
    Run the handler registered for ``name``.

    Args:
        client: Forge client shared by every handler
        name: Tool name
        arguments: Raw MCP argument map

    Returns:
        The handler's ToolResponse (which may itself be an error response)

    Raises:
        UnknownToolError: If no handler is registered under ``name``
    """
    handler = TOOL_HANDLERS.get(name)
    if handler is None:
        raise UnknownToolError(name)

    logger.debug(f"Dispatching tool {name}")
    return await handler(client, arguments)
