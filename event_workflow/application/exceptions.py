"""Application-layer exceptions. Do not reuse domain exceptions."""

from event_workflow.domain.exceptions import ErrorKind, WorkflowError


class ApplicationError(WorkflowError):
    """Base for all application-layer errors."""


class StorageFailureError(ApplicationError):
    """Raised when the atomic status + history write fails. Nothing was persisted; the caller may retry."""

    kind = ErrorKind.STORAGE_FAILURE
    retryable = True


class StorageTimeoutError(StorageFailureError):
    """Raised when the commit does not finish within storage_timeout_seconds."""


class ConcurrentModificationError(StorageFailureError):
    """Raised when the event changed between read and write (version mismatch)."""


class LockUnavailableError(StorageFailureError):
    """Raised when the per-event lock cannot be acquired in time."""
