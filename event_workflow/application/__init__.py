# Application layer: services that orchestrate domain rules and storage collaborators.

from event_workflow.application.exceptions import (
    ApplicationError,
    ConcurrentModificationError,
    LockUnavailableError,
    StorageFailureError,
    StorageTimeoutError,
)
from event_workflow.application.history_tracker import HistoryTracker
from event_workflow.application.locking import EventLock, InMemoryLockBackend, LockBackend
from event_workflow.application.query_service import EventQueryService
from event_workflow.application.repositories import (
    Clock,
    EventStore,
    HistoryStore,
    StatusChangeNotifier,
    SystemClock,
    UnitOfWork,
    UnitOfWorkFactory,
)
from event_workflow.application.schemas import (
    EventCreateRequest,
    TransitionRequest,
    TransitionResult,
)
from event_workflow.application.workflow_service import ApprovalWorkflowService

__all__ = [
    "ApplicationError",
    "ApprovalWorkflowService",
    "Clock",
    "ConcurrentModificationError",
    "EventCreateRequest",
    "EventLock",
    "EventQueryService",
    "EventStore",
    "HistoryStore",
    "HistoryTracker",
    "InMemoryLockBackend",
    "LockBackend",
    "LockUnavailableError",
    "StatusChangeNotifier",
    "StorageFailureError",
    "StorageTimeoutError",
    "SystemClock",
    "TransitionRequest",
    "TransitionResult",
    "UnitOfWork",
    "UnitOfWorkFactory",
]
