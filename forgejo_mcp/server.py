"""Forgejo/Gitea MCP Server.

A local MCP server that exposes issues, pull requests, their comments and
repository notifications on a Forgejo or Gitea instance as MCP tools.

Tools use simple parameters instead of Pydantic models for better
compatibility with AI clients; validation happens in the tool handlers.
"""

import asyncio
import sys
from pathlib import Path
from typing import Any, Optional

# Add parent directory to Python path to support running directly
# This allows: python forgejo_mcp/server.py from the project root
if __name__ == "__main__":
    parent_dir = str(Path(__file__).parent.parent)
    if parent_dir not in sys.path:
        sys.path.insert(0, parent_dir)

from mcp.server.fastmcp import FastMCP
from mcp.types import CallToolResult
from pydantic import StrictInt

from forgejo_mcp.config import DEFAULT_LIMIT, DEFAULT_OFFSET, SERVER_NAME, load_config
from forgejo_mcp.remote.factory import create_client
from forgejo_mcp.remote.interface import ClientInterface
from forgejo_mcp.tools.registry import TOOL_DEFINITIONS, dispatch
from forgejo_mcp.utils.errors import MCPError
from forgejo_mcp.utils.logging_config import get_logger, setup_logging


logger = get_logger(__name__)


def create_server(client: ClientInterface) -> FastMCP:
    """
    Build the MCP server with every tool bound to ``client``.

    Args:
        client: Forge client shared by all tool calls

    Returns:
        Configured FastMCP instance
    """
    mcp = FastMCP(SERVER_NAME)

    async def call(name: str, **arguments: Any) -> CallToolResult:
        # Omitted optional parameters reach the handlers as missing keys
        provided = {key: value for key, value in arguments.items() if value is not None}
        response = await dispatch(client, name, provided)
        return response.to_call_tool_result()

    def register(name: str):
        definition = TOOL_DEFINITIONS[name]
        return mcp.tool(name=name, description=definition["description"], annotations=definition["annotations"])

    # ========================================================================
    # Issues
    # ========================================================================

    @register("issue_list")
    async def issue_list(
        repository: str,
        limit: StrictInt = DEFAULT_LIMIT,
        offset: StrictInt = DEFAULT_OFFSET
    ) -> CallToolResult:
        """List open issues.

        Args:
            repository: Repository in 'owner/repo' format
            limit: Issues per page (1-100, default: 15)
            offset: Number of issues to skip (default: 0)
        """
        return await call("issue_list", repository=repository, limit=limit, offset=offset)

    @register("issue_create")
    async def issue_create(repository: str, title: str, body: str = "") -> CallToolResult:
        return await call("issue_create", repository=repository, title=title, body=body)

    @register("issue_edit")
    async def issue_edit(
        repository: str,
        issue_number: StrictInt,
        title: Optional[str] = None,
        body: Optional[str] = None,
        state: Optional[str] = None
    ) -> CallToolResult:
        """Edit an issue. At least one of title, body or state ('open'/'closed') is required."""
        return await call(
            "issue_edit", repository=repository, issue_number=issue_number, title=title, body=body, state=state
        )

    @register("issue_comment_create")
    async def issue_comment_create(repository: str, issue_number: StrictInt, comment: str) -> CallToolResult:
        return await call("issue_comment_create", repository=repository, issue_number=issue_number, comment=comment)

    @register("issue_comment_list")
    async def issue_comment_list(
        repository: str,
        issue_number: StrictInt,
        limit: StrictInt = DEFAULT_LIMIT,
        offset: StrictInt = DEFAULT_OFFSET
    ) -> CallToolResult:
        return await call(
            "issue_comment_list", repository=repository, issue_number=issue_number, limit=limit, offset=offset
        )

    @register("issue_comment_edit")
    async def issue_comment_edit(
        repository: str,
        issue_number: StrictInt,
        comment_id: StrictInt,
        new_content: str
    ) -> CallToolResult:
        return await call(
            "issue_comment_edit",
            repository=repository,
            issue_number=issue_number,
            comment_id=comment_id,
            new_content=new_content
        )

    # ========================================================================
    # Pull requests
    # ========================================================================

    @register("pr_list")
    async def pr_list(
        repository: str,
        limit: StrictInt = DEFAULT_LIMIT,
        offset: StrictInt = DEFAULT_OFFSET,
        state: str = "open"
    ) -> CallToolResult:
        """List pull requests.

        Args:
            repository: Repository in 'owner/repo' format
            limit: Pull requests per page (1-100, default: 15)
            offset: Number of pull requests to skip (default: 0)
            state: 'open', 'closed' or 'all' (default: 'open')
        """
        return await call("pr_list", repository=repository, limit=limit, offset=offset, state=state)

    @register("pr_fetch")
    async def pr_fetch(repository: str, pull_request_number: StrictInt) -> CallToolResult:
        return await call("pr_fetch", repository=repository, pull_request_number=pull_request_number)

    @register("pr_create")
    async def pr_create(
        repository: str,
        head: str,
        base: str,
        title: str,
        body: str = "",
        draft: bool = False,
        assignee: Optional[str] = None
    ) -> CallToolResult:
        """Create a pull request.

        Args:
            repository: Repository in 'owner/repo' format
            head: Branch containing the changes
            base: Branch to merge into
            title: Pull request title
            body: Pull request description
            draft: Mark the pull request as a draft
            assignee: Username to assign
        """
        return await call(
            "pr_create",
            repository=repository,
            head=head,
            base=base,
            title=title,
            body=body,
            draft=draft,
            assignee=assignee
        )

    @register("pr_edit")
    async def pr_edit(
        repository: str,
        pull_request_number: StrictInt,
        title: Optional[str] = None,
        body: Optional[str] = None,
        state: Optional[str] = None,
        base_branch: Optional[str] = None
    ) -> CallToolResult:
        return await call(
            "pr_edit",
            repository=repository,
            pull_request_number=pull_request_number,
            title=title,
            body=body,
            state=state,
            base_branch=base_branch
        )

    @register("pr_comment_create")
    async def pr_comment_create(repository: str, pull_request_number: StrictInt, comment: str) -> CallToolResult:
        return await call(
            "pr_comment_create", repository=repository, pull_request_number=pull_request_number, comment=comment
        )

    @register("pr_comment_list")
    async def pr_comment_list(
        repository: str,
        pull_request_number: StrictInt,
        limit: StrictInt = DEFAULT_LIMIT,
        offset: StrictInt = DEFAULT_OFFSET
    ) -> CallToolResult:
        return await call(
            "pr_comment_list",
            repository=repository,
            pull_request_number=pull_request_number,
            limit=limit,
            offset=offset
        )

    @register("pr_comment_edit")
    async def pr_comment_edit(
        repository: str,
        pull_request_number: StrictInt,
        comment_id: StrictInt,
        new_content: str
    ) -> CallToolResult:
        return await call(
            "pr_comment_edit",
            repository=repository,
            pull_request_number=pull_request_number,
            comment_id=comment_id,
            new_content=new_content
        )

    # ========================================================================
    # Notifications
    # ========================================================================

    @register("notification_list")
    async def notification_list(
        repository: str,
        status: str = "unread",
        limit: StrictInt = DEFAULT_LIMIT,
        offset: StrictInt = DEFAULT_OFFSET
    ) -> CallToolResult:
        """List notifications for a repository.

        Args:
            repository: Repository in 'owner/repo' format
            status: 'read', 'unread' or 'all' (default: 'unread')
            limit: Notifications per page (1-100, default: 15)
            offset: Number of notifications to skip (default: 0)
        """
        return await call("notification_list", repository=repository, status=status, limit=limit, offset=offset)

    logger.info(f"Registered {len(TOOL_DEFINITIONS)} tools on {SERVER_NAME}")
    return mcp


# ============================================================================
# Server Entry Point
# ============================================================================

def main() -> None:
    """Load configuration, connect to the forge and serve MCP over stdio."""
    config = load_config()
    try:
        setup_logging(log_level=config.log_level, log_file=config.log_file)
        config.validate()
        logger.info(f"Starting {SERVER_NAME} with {config.to_dict()}")
        client = asyncio.run(create_client(
            config.remote_url,
            config.auth_token,
            client_type=config.client_type,
            timeout=config.timeout
        ))
    except MCPError as e:
        logger.error(f"Startup failed: {e.message}")
        print(f"{SERVER_NAME}: {e.message}", file=sys.stderr)
        sys.exit(1)

    server = create_server(client)
    logger.info("Forgejo MCP Server initialized")
    server.run()


if __name__ == "__main__":
    main()
