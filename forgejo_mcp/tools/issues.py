"""Issue and issue comment tool handlers."""

import logging

from ..remote.interface import ClientInterface
from ..remote.models import IssueUpdate
from .base import tool_handler
from .inputs import (
    IssueCommentCreateInput,
    IssueCommentEditInput,
    IssueCommentListInput,
    IssueCreateInput,
    IssueEditInput,
    IssueListInput,
)
from .responses import (
    ToolResponse,
    comment_created_text,
    comment_edited_text,
    comment_list_text,
    issue_created_text,
    issue_edited_text,
    issue_list_text,
    success,
)


logger = logging.getLogger(__name__)


@tool_handler(IssueListInput, "list issues")
async def handle_issue_list(client: ClientInterface, args: IssueListInput) -> ToolResponse:
    logger.info(f"issue_list: repository={args.repository}, limit={args.limit}, offset={args.offset}")
    issues = await client.list_issues(args.repository, args.limit, args.offset)
    return success(issue_list_text(issues), {"issues": [issue.to_dict() for issue in issues]})


@tool_handler(IssueCreateInput, "create issue")
async def handle_issue_create(client: ClientInterface, args: IssueCreateInput) -> ToolResponse:
    logger.info(f"issue_create: repository={args.repository}")
    issue = await client.create_issue(args.repository, args.title, args.body)
    return success(issue_created_text(issue), {"issue": issue.to_dict()})


@tool_handler(IssueEditInput, "edit issue")
async def handle_issue_edit(client: ClientInterface, args: IssueEditInput) -> ToolResponse:
    logger.info(f"issue_edit: repository={args.repository}, issue={args.issue_number}")
    fields = IssueUpdate(title=args.title, body=args.body, state=args.state)
    issue = await client.edit_issue(args.repository, args.issue_number, fields)
    return success(issue_edited_text(issue), {"issue": issue.to_dict()})


@tool_handler(IssueCommentCreateInput, "create comment")
async def handle_issue_comment_create(client: ClientInterface, args: IssueCommentCreateInput) -> ToolResponse:
    logger.info(f"issue_comment_create: repository={args.repository}, issue={args.issue_number}")
    comment = await client.create_issue_comment(args.repository, args.issue_number, args.comment)
    return success(comment_created_text(comment), {"comment": comment.to_dict()})


@tool_handler(IssueCommentListInput, "list issue comments")
async def handle_issue_comment_list(client: ClientInterface, args: IssueCommentListInput) -> ToolResponse:
    logger.info(
        f"issue_comment_list: repository={args.repository}, issue={args.issue_number}, "
        f"limit={args.limit}, offset={args.offset}"
    )
    comments = await client.list_issue_comments(args.repository, args.issue_number, args.limit, args.offset)
    return success(comment_list_text(comments), comments.to_dict())


@tool_handler(IssueCommentEditInput, "edit comment")
async def handle_issue_comment_edit(client: ClientInterface, args: IssueCommentEditInput) -> ToolResponse:
    # issue_number is validated for context only; the forge edits comments by ID
    logger.info(
        f"issue_comment_edit: repository={args.repository}, issue={args.issue_number}, comment={args.comment_id}"
    )
    comment = await client.edit_issue_comment(args.repository, args.comment_id, args.new_content)
    return success(comment_edited_text(comment), {"comment": comment.to_dict()})
