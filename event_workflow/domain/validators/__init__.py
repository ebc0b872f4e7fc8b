"""Domain validators. Pure validation functions."""

from event_workflow.domain.validators.transition_validator import (
    COMMENTS_MAX_LENGTH,
    REASON_MAX_LENGTH,
    clean_text,
    reason_length,
    validate_comments,
    validate_reason,
)

__all__ = [
    "COMMENTS_MAX_LENGTH",
    "REASON_MAX_LENGTH",
    "clean_text",
    "reason_length",
    "validate_comments",
    "validate_reason",
]
