"""Immutable audit records for status changes, and the time-in-state value."""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional

from event_workflow.domain.models.status import EventStatusCode
from event_workflow.domain.models.workflow import WorkflowAction


@dataclass(frozen=True)
class StatusHistoryEntry:
    """
    One status change: who, what, when (UTC), why.
    previous_status and action are None for the creation entry.
    """

    entry_id: str
    event_id: str
    previous_status: Optional[EventStatusCode]
    new_status: EventStatusCode
    actor_id: str
    actor_role: str
    timestamp: datetime
    action: Optional[WorkflowAction] = None
    reason: Optional[str] = None
    comments: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Structured representation for JSON logging."""
        return {
            "entry_id": self.entry_id,
            "event_id": self.event_id,
            "previous_status": self.previous_status.value if self.previous_status else None,
            "new_status": self.new_status.value,
            "actor_id": self.actor_id,
            "actor_role": self.actor_role,
            "action": self.action.value if self.action else None,
            "reason": self.reason,
            "comments": self.comments,
            "timestamp": self.timestamp.isoformat(),
        }


@dataclass(frozen=True)
class StateDuration:
    """
    Whole-unit time spent in a state. Only one unit is reported:
    days if any, else hours if any, else minutes.
    """

    days: int = 0
    hours: int = 0
    minutes: int = 0

    @property
    def value(self) -> int:
        if self.days > 0:
            return self.days
        if self.hours > 0:
            return self.hours
        # Display never shows "0 minutes".
        return max(1, self.minutes)

    @property
    def unit(self) -> str:
        if self.days > 0:
            return "day" if self.days == 1 else "days"
        if self.hours > 0:
            return "hour" if self.hours == 1 else "hours"
        return "minute" if self.minutes <= 1 else "minutes"

    @property
    def formatted(self) -> str:
        return f"{self.value} {self.unit}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "days": self.days,
            "hours": self.hours,
            "minutes": self.minutes,
            "value": self.value,
            "unit": self.unit,
            "formatted": self.formatted,
        }
