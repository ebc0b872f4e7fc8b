"""Domain layer: status registry, event/history models, schemas, validators, exceptions. Pure business logic only."""

from event_workflow.domain.exceptions import (
    CommentsTooLongError,
    DomainError,
    DomainValidationError,
    ErrorKind,
    EventNotFoundError,
    InvalidTransitionError,
    NotFoundError,
    ReasonTooLongError,
    ReasonTooShortError,
    UnknownStatusError,
    WorkflowError,
)
from event_workflow.domain.models import (
    Event,
    EventSchedule,
    EventStatus,
    EventStatusCode,
    StateDuration,
    StatusHistoryEntry,
    StatusRegistry,
    WorkflowAction,
    all_statuses,
    status_by_code,
    status_registry,
)
from event_workflow.domain.schemas import DashboardCounters, EventFilters

__all__ = [
    "CommentsTooLongError",
    "DashboardCounters",
    "DomainError",
    "DomainValidationError",
    "ErrorKind",
    "Event",
    "EventFilters",
    "EventNotFoundError",
    "EventSchedule",
    "EventStatus",
    "EventStatusCode",
    "InvalidTransitionError",
    "NotFoundError",
    "ReasonTooLongError",
    "ReasonTooShortError",
    "StateDuration",
    "StatusHistoryEntry",
    "StatusRegistry",
    "UnknownStatusError",
    "WorkflowAction",
    "WorkflowError",
    "all_statuses",
    "status_by_code",
    "status_registry",
]
