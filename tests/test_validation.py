"""Tests for the argument validation rules and the per-tool input models."""

import pytest

from forgejo_mcp.tools.inputs import (
    IssueCommentCreateInput,
    IssueCommentEditInput,
    IssueEditInput,
    IssueListInput,
    NotificationListInput,
    PullRequestCreateInput,
    PullRequestEditInput,
    PullRequestListInput,
    decode_arguments,
)
from forgejo_mcp.utils.errors import InvalidArgumentError
from forgejo_mcp.utils.validation import (
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


class TestRules:
    """Test the individual rule functions."""

    @pytest.mark.parametrize("value", ["acme/widgets", "a/b", "my.org/repo-name_2"])
    def test_repository_accepts_owner_repo(self, value):
        assert validate_repository(value) == value

    @pytest.mark.parametrize("value", [
        "acme-widgets", "a/b/c", "/repo", "owner/", "own er/repo", "acme/widgets\n", "a/b\r\n"
    ])
    def test_repository_rejects_malformed(self, value):
        with pytest.raises(ValueError, match="owner/repo"):
            validate_repository(value)

    def test_repository_rejects_empty(self):
        with pytest.raises(ValueError, match="required"):
            validate_repository("")

    def test_positive_int(self):
        assert validate_positive_int(1) == 1
        for value in (0, -3):
            with pytest.raises(ValueError, match="no less than 1"):
                validate_positive_int(value)

    def test_positive_int_rejects_bool(self):
        with pytest.raises(ValueError, match="integer"):
            validate_positive_int(True)

    def test_non_blank(self):
        assert validate_non_blank("x") == "x"
        for value in ("", "   ", "\n\t"):
            with pytest.raises(ValueError, match="blank"):
                validate_non_blank(value)

    def test_limit_bounds(self):
        assert validate_limit(1) == 1
        assert validate_limit(100) == 100
        for value in (0, 101):
            with pytest.raises(ValueError, match="between 1 and 100"):
                validate_limit(value)

    def test_offset(self):
        assert validate_offset(0) == 0
        with pytest.raises(ValueError, match="no less than 0"):
            validate_offset(-1)

    def test_state(self):
        for value in ("open", "closed", "all"):
            assert validate_state(value) == value
        with pytest.raises(ValueError, match="must be one of"):
            validate_state("merged")

    def test_one_of_lists_choices(self):
        rule = one_of("open", "closed")
        with pytest.raises(ValueError) as exc_info:
            rule("all")
        assert "'open', 'closed'" in str(exc_info.value)

    def test_max_length(self):
        rule = max_length(3)
        assert rule("abc") == "abc"
        with pytest.raises(ValueError, match="at most 3 characters"):
            rule("abcd")

    def test_apply_rules_stops_at_first_violation(self):
        with pytest.raises(ValueError, match="blank"):
            apply_rules("   ", [validate_non_blank, max_length(1)])


class TestInputModels:
    """Test decoding of raw argument maps into tool inputs."""

    def test_list_defaults(self):
        args = decode_arguments(IssueListInput, {"repository": "a/b"})
        assert args.limit == 15
        assert args.offset == 0

    def test_pr_list_default_state(self):
        args = decode_arguments(PullRequestListInput, {"repository": "a/b"})
        assert args.state == "open"

    def test_unknown_keys_ignored(self):
        args = decode_arguments(IssueListInput, {"repository": "a/b", "directory": "/tmp"})
        assert args.repository == "a/b"

    def test_all_violations_reported(self):
        with pytest.raises(InvalidArgumentError) as exc_info:
            decode_arguments(PullRequestListInput, {"repository": "ab", "limit": 0, "offset": -1, "state": "x"})

        fields = [violation.split(":")[0] for violation in exc_info.value.violations]
        assert fields == ["repository", "limit", "offset", "state"]
        assert "repository: repository must be in format 'owner/repo'" in exc_info.value.message

    def test_violation_text_has_no_pydantic_prefix(self):
        with pytest.raises(InvalidArgumentError) as exc_info:
            decode_arguments(IssueCommentEditInput, {
                "repository": "a/b", "issue_number": 1, "comment_id": 9, "new_content": "   "
            })
        assert exc_info.value.violations == ["new_content: cannot be blank"]

    def test_missing_required_field(self):
        with pytest.raises(InvalidArgumentError) as exc_info:
            decode_arguments(IssueCommentCreateInput, {"repository": "a/b", "comment": "hi"})
        assert exc_info.value.violations[0].startswith("issue_number:")

    def test_none_arguments(self):
        with pytest.raises(InvalidArgumentError):
            decode_arguments(IssueListInput, None)

    def test_issue_edit_requires_a_change(self):
        with pytest.raises(InvalidArgumentError) as exc_info:
            decode_arguments(IssueEditInput, {"repository": "a/b", "issue_number": 3})
        assert "At least one of title, body, or state" in exc_info.value.message

    def test_pr_edit_empty_strings_count_as_unset(self):
        with pytest.raises(InvalidArgumentError) as exc_info:
            decode_arguments(PullRequestEditInput, {
                "repository": "a/b", "pull_request_number": 3, "title": "", "body": ""
            })
        assert "base_branch must be provided" in exc_info.value.message

    def test_pr_edit_rejects_bad_state(self):
        with pytest.raises(InvalidArgumentError) as exc_info:
            decode_arguments(PullRequestEditInput, {
                "repository": "a/b", "pull_request_number": 3, "state": "all"
            })
        assert exc_info.value.violations == ["state: must be one of 'open', 'closed'"]

    def test_pr_edit_title_length(self):
        with pytest.raises(InvalidArgumentError) as exc_info:
            decode_arguments(PullRequestEditInput, {
                "repository": "a/b", "pull_request_number": 3, "title": "x" * 256
            })
        assert "title: must be at most 255 characters" in exc_info.value.violations

    def test_pr_create_rejects_same_branches(self):
        with pytest.raises(InvalidArgumentError, match="must differ"):
            decode_arguments(PullRequestCreateInput, {
                "repository": "a/b", "head": "main", "base": "main", "title": "t"
            })

    def test_pr_create_valid(self):
        args = decode_arguments(PullRequestCreateInput, {
            "repository": "a/b", "head": "feature", "base": "main", "title": "Add feature"
        })
        assert args.draft is False
        assert args.assignee is None
        assert args.body == ""

    @pytest.mark.parametrize("model,arguments,field", [
        (IssueListInput, {"repository": "a/b", "limit": True}, "limit"),
        (IssueListInput, {"repository": "a/b", "offset": False}, "offset"),
        (IssueCommentCreateInput, {"repository": "a/b", "issue_number": True, "comment": "hi"}, "issue_number"),
        (PullRequestEditInput, {"repository": "a/b", "pull_request_number": "3", "title": "t"}, "pull_request_number"),
        (IssueCommentEditInput, {
            "repository": "a/b", "issue_number": 1, "comment_id": 2.0, "new_content": "x"
        }, "comment_id"),
    ])
    def test_integer_fields_are_strict(self, model, arguments, field):
        with pytest.raises(InvalidArgumentError) as exc_info:
            decode_arguments(model, arguments)
        assert [violation.split(":")[0] for violation in exc_info.value.violations] == [field]

    def test_repository_with_trailing_newline(self):
        with pytest.raises(InvalidArgumentError) as exc_info:
            decode_arguments(IssueListInput, {"repository": "acme/widgets\n"})
        assert exc_info.value.violations == ["repository: repository must be in format 'owner/repo'"]

    def test_notification_list_defaults(self):
        args = decode_arguments(NotificationListInput, {"repository": "a/b"})
        assert (args.status, args.limit, args.offset) == ("unread", 15, 0)

    @pytest.mark.parametrize("status", ["read", "unread", "all"])
    def test_notification_list_statuses(self, status):
        assert decode_arguments(NotificationListInput, {"repository": "a/b", "status": status}).status == status

    def test_notification_list_rejects_status(self):
        with pytest.raises(InvalidArgumentError) as exc_info:
            decode_arguments(NotificationListInput, {"repository": "a/b", "status": "Unread", "limit": 500})
        assert exc_info.value.violations == [
            "limit: must be between 1 and 100",
            "status: must be one of 'read', 'unread', 'all'"
        ]
