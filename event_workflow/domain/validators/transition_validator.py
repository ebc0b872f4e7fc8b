"""Validators for transition evidence. Pure functions, no infrastructure or storage access."""

from typing import Optional

from event_workflow.domain.exceptions import (
    CommentsTooLongError,
    ReasonTooLongError,
    ReasonTooShortError,
)

# Upper bound on free-text evidence (domain constant; avoid magic numbers)
REASON_MAX_LENGTH = 1000
COMMENTS_MAX_LENGTH = 1000


def reason_length(reason: Optional[str]) -> int:
    """Length of the reason as it will be stored: surrounding whitespace does not count."""
    return len((reason or "").strip())


def validate_reason(reason: Optional[str], min_length: int, action: Optional[str] = None) -> None:
    """Enforce minimum and maximum reason length. Raises ReasonTooShortError / ReasonTooLongError."""
    actual = reason_length(reason)
    if actual < min_length:
        raise ReasonTooShortError(min_length=min_length, actual_length=actual, action=action)
    if actual > REASON_MAX_LENGTH:
        raise ReasonTooLongError(max_length=REASON_MAX_LENGTH, actual_length=actual)


def validate_comments(comments: Optional[str]) -> None:
    """Comments are always optional; only the upper bound applies."""
    actual = reason_length(comments)
    if actual > COMMENTS_MAX_LENGTH:
        raise CommentsTooLongError(max_length=COMMENTS_MAX_LENGTH, actual_length=actual)


def clean_text(value: Optional[str]) -> Optional[str]:
    """Strip free text; blank becomes None."""
    if value is None:
        return None
    value = value.strip()
    return value or None
