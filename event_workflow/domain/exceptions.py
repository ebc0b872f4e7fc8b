"""Domain-specific exceptions. Pure domain layer, no infrastructure."""

from enum import Enum
from typing import Any, Dict, Optional


class ErrorKind(str, Enum):
    """Machine-readable error kinds surfaced to callers alongside the message."""

    NOT_FOUND = "not_found"
    INVALID_TRANSITION = "invalid_transition"
    REASON_TOO_SHORT = "reason_too_short"
    UNAUTHORIZED = "unauthorized"
    STORAGE_FAILURE = "storage_failure"
    VALIDATION = "validation"


class WorkflowError(Exception):
    """Base for every error the workflow core raises. Carries kind + message."""

    kind: ErrorKind = ErrorKind.VALIDATION
    retryable: bool = False

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.kind.value,
            "message": self.message,
            "retryable": self.retryable,
            "details": dict(self.details),
        }


class DomainError(WorkflowError):
    """Base for all domain-layer errors."""


class DomainValidationError(DomainError):
    """Raised when domain validation rules are violated."""


class NotFoundError(DomainError):
    """Raised when a referenced event or status does not exist."""

    kind = ErrorKind.NOT_FOUND


class EventNotFoundError(NotFoundError):
    def __init__(self, event_id: str) -> None:
        self.event_id = event_id
        super().__init__(f"Event not found: {event_id}", {"event_id": event_id})


class UnknownStatusError(NotFoundError):
    """Raised when a status code outside the registry is referenced."""

    def __init__(self, code: Any) -> None:
        self.code = code
        super().__init__(f"Unknown event status: {code!r}", {"code": str(code)})


class InvalidTransitionError(DomainError):
    """Raised when the requested action is not allowed from the current status."""

    kind = ErrorKind.INVALID_TRANSITION

    def __init__(self, current_status: str, action: str, message: Optional[str] = None) -> None:
        self.current_status = current_status
        self.action = action
        super().__init__(
            message or f"Action '{action}' is not allowed from status '{current_status}'",
            {"current_status": current_status, "action": action},
        )


class ReasonTooShortError(DomainError):
    """Raised when a transition reason is shorter than its minimum length."""

    kind = ErrorKind.REASON_TOO_SHORT

    def __init__(self, min_length: int, actual_length: int, action: Optional[str] = None) -> None:
        self.min_length = min_length
        self.actual_length = actual_length
        self.action = action
        super().__init__(
            f"Reason must be at least {min_length} characters (got {actual_length})",
            {"min_length": min_length, "actual_length": actual_length, "action": action},
        )


class ReasonTooLongError(DomainValidationError):
    """Raised when a transition reason exceeds the maximum length."""

    def __init__(self, max_length: int, actual_length: int) -> None:
        self.max_length = max_length
        self.actual_length = actual_length
        super().__init__(
            f"Reason must be at most {max_length} characters (got {actual_length})",
            {"max_length": max_length, "actual_length": actual_length},
        )


class CommentsTooLongError(DomainValidationError):
    """Raised when transition comments exceed the maximum length."""

    def __init__(self, max_length: int, actual_length: int) -> None:
        self.max_length = max_length
        self.actual_length = actual_length
        super().__init__(
            f"Comments must be at most {max_length} characters (got {actual_length})",
            {"max_length": max_length, "actual_length": actual_length},
        )
