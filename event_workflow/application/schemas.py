"""Request/result shapes for the workflow service. Strict validation, no storage."""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from event_workflow.domain.models.event import Event, EventSchedule, as_utc
from event_workflow.domain.models.history import StateDuration, StatusHistoryEntry
from event_workflow.domain.models.status import EventStatusCode
from event_workflow.domain.models.workflow import WorkflowAction, normalize_action
from event_workflow.security.rbac import Role, normalize_role


class TransitionRequest(BaseModel):
    """
    One requested transition. Created per call, discarded after processing.
    Reason length rules live in the rule engine, not here.
    Unknown roles raise UnauthorizedError and unknown actions raise DomainValidationError.
    """

    model_config = ConfigDict(frozen=True)

    event_id: str = Field(..., min_length=1)
    action: WorkflowAction
    actor_role: Role
    actor_id: str = Field(..., min_length=1)
    reason: Optional[str] = None
    comments: Optional[str] = None

    @field_validator("action", mode="before")
    @classmethod
    def coerce_action(cls, v):
        return normalize_action(v)

    @field_validator("actor_role", mode="before")
    @classmethod
    def coerce_role(cls, v):
        return normalize_role(v)


class EventCreateRequest(BaseModel):
    """New event submitted by an organization. Always enters the workflow as draft."""

    model_config = ConfigDict(frozen=True)

    event_id: str = Field(..., min_length=1)
    title: str = Field(..., min_length=1, max_length=255)
    organization_id: str = Field(..., min_length=1)
    start_date: datetime
    end_date: datetime
    actor_id: str = Field(..., min_length=1)
    actor_role: Role
    description: Optional[str] = None
    category_id: Optional[int] = None
    event_type: Optional[str] = None
    location_text: Optional[str] = None
    is_featured: bool = False
    secondary_dates: Tuple[Tuple[datetime, datetime], ...] = ()

    @field_validator("actor_role", mode="before")
    @classmethod
    def coerce_role(cls, v):
        return normalize_role(v)

    @field_validator("start_date", "end_date")
    @classmethod
    def dates_to_utc(cls, v: datetime) -> datetime:
        return as_utc(v)

    @field_validator("secondary_dates")
    @classmethod
    def secondary_dates_to_utc(cls, v):
        return tuple((as_utc(s), as_utc(e)) for s, e in v)

    @model_validator(mode="after")
    def schedule_is_ordered(self) -> "EventCreateRequest":
        if self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        for start, end in self.secondary_dates:
            if end < start:
                raise ValueError("secondary date end must not be before start")
        return self

    def to_event(self, now: datetime) -> Event:
        return Event(
            event_id=self.event_id,
            title=self.title,
            organization_id=self.organization_id,
            start_date=self.start_date,
            end_date=self.end_date,
            status=EventStatusCode.DRAFT,
            created_at=now,
            last_status_changed_at=now,
            description=self.description,
            category_id=self.category_id,
            event_type=self.event_type,
            location_text=self.location_text,
            is_featured=self.is_featured,
            secondary_dates=tuple(EventSchedule(s, e) for s, e in self.secondary_dates),
        )


@dataclass(frozen=True)
class TransitionResult:
    """Committed outcome of a transition."""

    event: Event
    previous_status: EventStatusCode
    history_entry: StatusHistoryEntry
    time_in_previous_state: StateDuration

    @property
    def new_status(self) -> EventStatusCode:
        return self.event.status

    @property
    def history_entry_id(self) -> str:
        return self.history_entry.entry_id

    def to_dict(self) -> Dict[str, Any]:
        return {
            "event_id": self.event.event_id,
            "previous_status": self.previous_status.value,
            "new_status": self.new_status.value,
            "history_entry_id": self.history_entry_id,
            "changed_at": self.event.last_status_changed_at.isoformat(),
            "time_in_previous_state": self.time_in_previous_state.to_dict(),
        }
