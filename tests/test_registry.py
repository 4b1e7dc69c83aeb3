"""Tests for tool dispatch."""

from unittest.mock import AsyncMock

import pytest

from forgejo_mcp.remote.models import Issue
from forgejo_mcp.tools.registry import TOOL_DEFINITIONS, TOOL_HANDLERS, dispatch
from forgejo_mcp.utils.errors import ErrorCode, UnknownToolError


@pytest.mark.asyncio
async def test_dispatch_runs_handler():
    client = AsyncMock()
    client.list_issues.return_value = [Issue(number=1, title="Bug", state="open")]

    response = await dispatch(client, "issue_list", {"repository": "a/b", "limit": 5})

    assert response.is_error is False
    client.list_issues.assert_awaited_once_with("a/b", 5, 0)


@pytest.mark.asyncio
async def test_dispatch_unknown_tool():
    client = AsyncMock()

    with pytest.raises(UnknownToolError) as exc_info:
        await dispatch(client, "repo_delete", {"repository": "a/b"})

    assert exc_info.value.code == ErrorCode.UNKNOWN_TOOL
    assert "repo_delete" in exc_info.value.message
    assert client.mock_calls == []


@pytest.mark.asyncio
async def test_dispatch_without_arguments_is_tool_error():
    client = AsyncMock()

    response = await dispatch(client, "pr_list")

    assert response.is_error is True
    assert "repository" in response.text
    assert client.mock_calls == []


def test_definitions_cover_every_handler():
    assert set(TOOL_DEFINITIONS) == set(TOOL_HANDLERS)
    for name, definition in TOOL_DEFINITIONS.items():
        assert definition["description"], name
        annotations = definition["annotations"]
        assert annotations["destructiveHint"] is False
        assert annotations["readOnlyHint"] == name.endswith(("_list", "_fetch"))


def test_handlers_expose_operation():
    assert TOOL_HANDLERS["issue_comment_create"].operation == "create comment"
    assert TOOL_HANDLERS["pr_list"].operation == "list pull requests"
