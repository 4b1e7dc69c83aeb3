"""Typed argument models, one per tool.

Each model decodes the untyped MCP argument map and applies the field rules
from :mod:`forgejo_mcp.utils.validation`. Pydantic stops at the first broken
rule of a field but keeps checking the other fields, so one failed decode
reports every invalid argument.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, StrictInt, ValidationError, field_validator, model_validator

from ..config import DEFAULT_LIMIT, DEFAULT_OFFSET
from ..utils.errors import InvalidArgumentError
from ..utils.validation import (
    EDIT_STATES,
    NOTIFICATION_STATUSES,
    apply_rules,
    max_length,
    one_of,
    validate_limit,
    validate_non_blank,
    validate_offset,
    validate_positive_int,
    validate_repository,
    validate_state,
)

TITLE_MAX_LENGTH = 255
BODY_MAX_LENGTH = 65535
BRANCH_MAX_LENGTH = 255


class ToolInput(BaseModel):
    """Base class for tool arguments; unknown keys are ignored."""
    model_config = ConfigDict(extra="ignore", frozen=True)

    repository: str

    @field_validator("repository", mode="after")
    @classmethod
    def _check_repository(cls, value: str) -> str:
        return apply_rules(value, [validate_repository])


class PaginatedInput(ToolInput):
    limit: StrictInt = DEFAULT_LIMIT
    offset: StrictInt = DEFAULT_OFFSET

    @field_validator("limit", mode="after")
    @classmethod
    def _check_limit(cls, value: int) -> int:
        return apply_rules(value, [validate_limit])

    @field_validator("offset", mode="after")
    @classmethod
    def _check_offset(cls, value: int) -> int:
        return apply_rules(value, [validate_offset])


def _require_one_change(model: BaseModel, fields: List[str]) -> None:
    if not any(getattr(model, name) for name in fields):
        names = ", ".join(fields[:-1]) + f", or {fields[-1]}"
        raise ValueError(f"At least one of {names} must be provided")


def _optional(value: Optional[str], rules: list) -> Optional[str]:
    # Empty strings mean "leave unchanged"
    if not value:
        return None
    return apply_rules(value, rules)


# ============================================================================
# Issues
# ============================================================================

class IssueListInput(PaginatedInput):
    """Arguments for issue_list."""


class IssueCreateInput(ToolInput):
    """Arguments for issue_create."""
    title: str
    body: str = ""

    @field_validator("title", mode="after")
    @classmethod
    def _check_title(cls, value: str) -> str:
        return apply_rules(value, [validate_non_blank, max_length(TITLE_MAX_LENGTH)])

    @field_validator("body", mode="after")
    @classmethod
    def _check_body(cls, value: str) -> str:
        return apply_rules(value, [max_length(BODY_MAX_LENGTH)])


class IssueEditInput(ToolInput):
    """Arguments for issue_edit."""
    issue_number: StrictInt
    title: Optional[str] = None
    body: Optional[str] = None
    state: Optional[str] = None

    @field_validator("issue_number", mode="after")
    @classmethod
    def _check_issue_number(cls, value: int) -> int:
        return apply_rules(value, [validate_positive_int])

    @field_validator("title", mode="after")
    @classmethod
    def _check_title(cls, value: Optional[str]) -> Optional[str]:
        return _optional(value, [max_length(TITLE_MAX_LENGTH)])

    @field_validator("body", mode="after")
    @classmethod
    def _check_body(cls, value: Optional[str]) -> Optional[str]:
        return _optional(value, [max_length(BODY_MAX_LENGTH)])

    @field_validator("state", mode="after")
    @classmethod
    def _check_state(cls, value: Optional[str]) -> Optional[str]:
        return _optional(value, [one_of(*EDIT_STATES)])

    @model_validator(mode="after")
    def _check_changes(self) -> "IssueEditInput":
        _require_one_change(self, ["title", "body", "state"])
        return self


class IssueCommentCreateInput(ToolInput):
    """Arguments for issue_comment_create."""
    issue_number: StrictInt
    comment: str

    @field_validator("issue_number", mode="after")
    @classmethod
    def _check_issue_number(cls, value: int) -> int:
        return apply_rules(value, [validate_positive_int])

    @field_validator("comment", mode="after")
    @classmethod
    def _check_comment(cls, value: str) -> str:
        return apply_rules(value, [validate_non_blank])


class IssueCommentListInput(PaginatedInput):
    """Arguments for issue_comment_list."""
    issue_number: StrictInt

    @field_validator("issue_number", mode="after")
    @classmethod
    def _check_issue_number(cls, value: int) -> int:
        return apply_rules(value, [validate_positive_int])


class IssueCommentEditInput(ToolInput):
    """Arguments for issue_comment_edit."""
    issue_number: StrictInt
    comment_id: StrictInt
    new_content: str

    @field_validator("issue_number", "comment_id", mode="after")
    @classmethod
    def _check_ids(cls, value: int) -> int:
        return apply_rules(value, [validate_positive_int])

    @field_validator("new_content", mode="after")
    @classmethod
    def _check_new_content(cls, value: str) -> str:
        return apply_rules(value, [validate_non_blank])


# ============================================================================
# Pull requests
# ============================================================================

class PullRequestListInput(PaginatedInput):
    """Arguments for pr_list."""
    state: str = "open"

    @field_validator("state", mode="after")
    @classmethod
    def _check_state(cls, value: str) -> str:
        return apply_rules(value, [validate_state])


class PullRequestFetchInput(ToolInput):
    """Arguments for pr_fetch."""
    pull_request_number: StrictInt

    @field_validator("pull_request_number", mode="after")
    @classmethod
    def _check_number(cls, value: int) -> int:
        return apply_rules(value, [validate_positive_int])


class PullRequestCreateInput(ToolInput):
    """Arguments for pr_create."""
    head: str
    base: str
    title: str
    body: str = ""
    draft: bool = False
    assignee: Optional[str] = None

    @field_validator("head", "base", mode="after")
    @classmethod
    def _check_branches(cls, value: str) -> str:
        return apply_rules(value, [validate_non_blank, max_length(BRANCH_MAX_LENGTH)])

    @field_validator("title", mode="after")
    @classmethod
    def _check_title(cls, value: str) -> str:
        return apply_rules(value, [validate_non_blank, max_length(TITLE_MAX_LENGTH)])

    @field_validator("body", mode="after")
    @classmethod
    def _check_body(cls, value: str) -> str:
        return apply_rules(value, [max_length(BODY_MAX_LENGTH)])

    @model_validator(mode="after")
    def _check_distinct_branches(self) -> "PullRequestCreateInput":
        if self.head == self.base:
            raise ValueError("head and base branches must differ")
        return self


class PullRequestEditInput(ToolInput):
    """Arguments for pr_edit."""
    pull_request_number: StrictInt
    title: Optional[str] = None
    body: Optional[str] = None
    state: Optional[str] = None
    base_branch: Optional[str] = None

    @field_validator("pull_request_number", mode="after")
    @classmethod
    def _check_number(cls, value: int) -> int:
        return apply_rules(value, [validate_positive_int])

    @field_validator("title", mode="after")
    @classmethod
    def _check_title(cls, value: Optional[str]) -> Optional[str]:
        return _optional(value, [max_length(TITLE_MAX_LENGTH)])

    @field_validator("body", mode="after")
    @classmethod
    def _check_body(cls, value: Optional[str]) -> Optional[str]:
        return _optional(value, [max_length(BODY_MAX_LENGTH)])

    @field_validator("state", mode="after")
    @classmethod
    def _check_state(cls, value: Optional[str]) -> Optional[str]:
        return _optional(value, [one_of(*EDIT_STATES)])

    @field_validator("base_branch", mode="after")
    @classmethod
    def _check_base_branch(cls, value: Optional[str]) -> Optional[str]:
        return _optional(value, [max_length(BRANCH_MAX_LENGTH)])

    @model_validator(mode="after")
    def _check_changes(self) -> "PullRequestEditInput":
        _require_one_change(self, ["title", "body", "state", "base_branch"])
        return self


class PullRequestCommentCreateInput(ToolInput):
    """Arguments for pr_comment_create."""
    pull_request_number: StrictInt
    comment: str

    @field_validator("pull_request_number", mode="after")
    @classmethod
    def _check_number(cls, value: int) -> int:
        return apply_rules(value, [validate_positive_int])

    @field_validator("comment", mode="after")
    @classmethod
    def _check_comment(cls, value: str) -> str:
        return apply_rules(value, [validate_non_blank])


class PullRequestCommentListInput(PaginatedInput):
    """Arguments for pr_comment_list."""
    pull_request_number: StrictInt

    @field_validator("pull_request_number", mode="after")
    @classmethod
    def _check_number(cls, value: int) -> int:
        return apply_rules(value, [validate_positive_int])


class PullRequestCommentEditInput(ToolInput):
    """Arguments for pr_comment_edit."""
    pull_request_number: StrictInt
    comment_id: StrictInt
    new_content: str

    @field_validator("pull_request_number", "comment_id", mode="after")
    @classmethod
    def _check_ids(cls, value: int) -> int:
        return apply_rules(value, [validate_positive_int])

    @field_validator("new_content", mode="after")
    @classmethod
    def _check_new_content(cls, value: str) -> str:
        return apply_rules(value, [validate_non_blank])


# ============================================================================
# Notifications
# ============================================================================

class NotificationListInput(PaginatedInput):
    """Arguments for notification_list."""
    status: str = "unread"

    @field_validator("status", mode="after")
    @classmethod
    def _check_status(cls, value: str) -> str:
        return apply_rules(value, [one_of(*NOTIFICATION_STATUSES)])


# ============================================================================
# Decoding
# ============================================================================

def describe_violations(error: ValidationError) -> List[str]:
    """Render pydantic errors as "field: reason" strings."""
    violations = []
    for item in error.errors():
        field = ".".join(str(part) for part in item.get("loc", ())) or "request"
        if item.get("type") == "value_error" and "error" in item.get("ctx", {}):
            reason = str(item["ctx"]["error"])
        else:
            reason = item.get("msg", "invalid value")
        violations.append(f"{field}: {reason}")
    return violations


def decode_arguments(model: type, arguments: Optional[Dict[str, Any]]) -> Any:
    """
    Decode an MCP argument map into ``model``.

    Raises:
        InvalidArgumentError: Listing every violated field
    """
    try:
        return model.model_validate(arguments or {})
    except ValidationError as e:
        violations = describe_violations(e)
        raise InvalidArgumentError("; ".join(violations), violations=violations)
