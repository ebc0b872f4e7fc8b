"""Domain models. Pure business entities."""

from event_workflow.domain.models.event import Event, EventSchedule, as_utc
from event_workflow.domain.models.history import StateDuration, StatusHistoryEntry
from event_workflow.domain.models.status import (
    EventStatus,
    EventStatusCode,
    StatusRegistry,
    all_statuses,
    normalize_status_code,
    status_by_code,
    status_registry,
)
from event_workflow.domain.models.workflow import WorkflowAction, normalize_action

__all__ = [
    "Event",
    "EventSchedule",
    "EventStatus",
    "EventStatusCode",
    "StateDuration",
    "StatusHistoryEntry",
    "StatusRegistry",
    "WorkflowAction",
    "all_statuses",
    "as_utc",
    "normalize_action",
    "normalize_status_code",
    "status_by_code",
    "status_registry",
]
