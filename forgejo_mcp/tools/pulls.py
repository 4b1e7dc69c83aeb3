"""Pull request and pull request comment tool handlers."""

import logging

from ..remote.interface import ClientInterface
from ..remote.models import PullRequestUpdate
from .base import tool_handler
from .inputs import (
    PullRequestCommentCreateInput,
    PullRequestCommentEditInput,
    PullRequestCommentListInput,
    PullRequestCreateInput,
    PullRequestEditInput,
    PullRequestFetchInput,
    PullRequestListInput,
)
from .responses import (
    ToolResponse,
    comment_created_text,
    comment_edited_text,
    comment_list_text,
    pull_request_created_text,
    pull_request_details_text,
    pull_request_edited_text,
    pull_request_list_text,
    success,
)


logger = logging.getLogger(__name__)

COMMENT_SUBJECT = "Pull request comment"


@tool_handler(PullRequestListInput, "list pull requests")
async def handle_pr_list(client: ClientInterface, args: PullRequestListInput) -> ToolResponse:
    logger.info(
        f"pr_list: repository={args.repository}, state={args.state}, limit={args.limit}, offset={args.offset}"
    )
    pull_requests = await client.list_pull_requests(args.repository, args.limit, args.offset, args.state)
    return success(
        pull_request_list_text(pull_requests),
        {"pull_requests": [pr.to_dict() for pr in pull_requests]}
    )


@tool_handler(PullRequestFetchInput, "fetch pull request")
async def handle_pr_fetch(client: ClientInterface, args: PullRequestFetchInput) -> ToolResponse:
    logger.info(f"pr_fetch: repository={args.repository}, pr={args.pull_request_number}")
    pr = await client.get_pull_request(args.repository, args.pull_request_number)
    return success(pull_request_details_text(pr), {"pull_request": pr.to_dict()})


@tool_handler(PullRequestCreateInput, "create pull request")
async def handle_pr_create(client: ClientInterface, args: PullRequestCreateInput) -> ToolResponse:
    """Open a pull request from ``head`` into ``base``.

    Draft pull requests are marked through the title, since neither forge
    accepts a draft flag on creation.
    """
    logger.info(f"pr_create: repository={args.repository}, head={args.head}, base={args.base}, draft={args.draft}")
    pr = await client.create_pull_request(
        args.repository,
        args.head,
        args.base,
        args.title,
        args.body,
        draft=args.draft,
        assignee=args.assignee
    )
    return success(pull_request_created_text(pr), {"pull_request": pr.to_dict()})


@tool_handler(PullRequestEditInput, "edit pull request")
async def handle_pr_edit(client: ClientInterface, args: PullRequestEditInput) -> ToolResponse:
    logger.info(f"pr_edit: repository={args.repository}, pr={args.pull_request_number}")
    fields = PullRequestUpdate(title=args.title, body=args.body, state=args.state, base=args.base_branch)
    pr = await client.edit_pull_request(args.repository, args.pull_request_number, fields)
    return success(pull_request_edited_text(pr), {"pull_request": pr.to_dict()})


@tool_handler(PullRequestCommentCreateInput, "create pull request comment")
async def handle_pr_comment_create(client: ClientInterface, args: PullRequestCommentCreateInput) -> ToolResponse:
    logger.info(f"pr_comment_create: repository={args.repository}, pr={args.pull_request_number}")
    comment = await client.create_pull_request_comment(args.repository, args.pull_request_number, args.comment)
    return success(comment_created_text(comment, COMMENT_SUBJECT), {"comment": comment.to_dict()})


@tool_handler(PullRequestCommentListInput, "list pull request comments")
async def handle_pr_comment_list(client: ClientInterface, args: PullRequestCommentListInput) -> ToolResponse:
    logger.info(
        f"pr_comment_list: repository={args.repository}, pr={args.pull_request_number}, "
        f"limit={args.limit}, offset={args.offset}"
    )
    comments = await client.list_pull_request_comments(
        args.repository, args.pull_request_number, args.limit, args.offset
    )
    return success(comment_list_text(comments), comments.to_dict())


@tool_handler(PullRequestCommentEditInput, "edit pull request comment")
async def handle_pr_comment_edit(client: ClientInterface, args: PullRequestCommentEditInput) -> ToolResponse:
    logger.info(
        f"pr_comment_edit: repository={args.repository}, pr={args.pull_request_number}, comment={args.comment_id}"
    )
    comment = await client.edit_pull_request_comment(args.repository, args.comment_id, args.new_content)
    return success(comment_edited_text(comment, COMMENT_SUBJECT), {"comment": comment.to_dict()})
