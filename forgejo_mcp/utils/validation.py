"""Reusable validation rules for tool arguments.

Every rule takes a single value, raises ``ValueError`` with a human-readable
reason when the value is not acceptable, and returns the value otherwise.
Rules are combined per field with :func:`apply_rules`, which stops at the
first violation.
"""

import re
from typing import Any, Callable, Iterable

Rule = Callable[[Any], Any]

REPOSITORY_PATTERN = re.compile(r"[A-Za-z0-9._-]+/[A-Za-z0-9._-]+")

MIN_LIMIT = 1
MAX_LIMIT = 100

LIST_STATES = ("open", "closed", "all")
EDIT_STATES = ("open", "closed")
NOTIFICATION_STATUSES = ("read", "unread", "all")


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def validate_repository(value: Any) -> str:
    """Require a repository in 'owner/repo' format."""
    if not isinstance(value, str) or not value:
        raise ValueError("repository is required and must be in format 'owner/repo'")
    if not REPOSITORY_PATTERN.fullmatch(value):
        raise ValueError("repository must be in format 'owner/repo'")
    return value


def validate_positive_int(value: Any) -> int:
    """Require an integer of at least 1 (issue, pull request or comment id)."""
    if not _is_int(value):
        raise ValueError("must be an integer")
    if value < 1:
        raise ValueError("must be no less than 1")
    return value


def validate_non_blank(value: Any) -> str:
    """Require a string with at least one non-whitespace character."""
    if not isinstance(value, str) or not value.strip():
        raise ValueError("cannot be blank")
    return value


def validate_limit(value: Any) -> int:
    """Require a page size between 1 and 100 inclusive."""
    if not _is_int(value):
        raise ValueError("must be an integer")
    if value < MIN_LIMIT or value > MAX_LIMIT:
        raise ValueError(f"must be between {MIN_LIMIT} and {MAX_LIMIT}")
    return value


def validate_offset(value: Any) -> int:
    """Require a non-negative pagination offset."""
    if not _is_int(value):
        raise ValueError("must be an integer")
    if value < 0:
        raise ValueError("must be no less than 0")
    return value


def one_of(*allowed: str) -> Rule:
    """Build a rule accepting only the given values."""
    choices = ", ".join(f"'{choice}'" for choice in allowed)

    def rule(value: Any) -> Any:
        if value not in allowed:
            raise ValueError(f"must be one of {choices}")
        return value

    return rule


validate_state = one_of(*LIST_STATES)


def max_length(limit: int) -> Rule:
    """Build a rule rejecting strings longer than ``limit`` characters."""
    def rule(value: Any) -> Any:
        if isinstance(value, str) and len(value) > limit:
            raise ValueError(f"must be at most {limit} characters")
        return value

    return rule


def apply_rules(value: Any, rules: Iterable[Rule]) -> Any:
    """Run ``rules`` in order against ``value``; the first violation wins."""
    for rule in rules:
        value = rule(value)
    return value
