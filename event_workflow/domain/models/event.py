"""Domain model for calendar events. Pure business semantics; no ORM or infrastructure."""

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Optional, Tuple

from event_workflow.domain.exceptions import DomainValidationError
from event_workflow.domain.models.status import EventStatusCode, normalize_status_code


def as_utc(value: datetime) -> datetime:
    """Naive datetimes are taken as UTC; aware ones are converted to UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


@dataclass(frozen=True)
class EventSchedule:
    """A start/end pair. Used for the main schedule and for secondary dates."""

    start: datetime
    end: datetime

    def __post_init__(self) -> None:
        object.__setattr__(self, "start", as_utc(self.start))
        object.__setattr__(self, "end", as_utc(self.end))
        if self.end < self.start:
            raise DomainValidationError(
                "Schedule end must not be before start",
                {"start": self.start.isoformat(), "end": self.end.isoformat()},
            )


@dataclass(frozen=True)
class Event:
    """
    Snapshot of one event. Exactly one current status at any time.
    Status changes produce a new snapshot via with_status(); version increments on each write.
    """

    event_id: str
    title: str
    organization_id: str
    start_date: datetime
    end_date: datetime
    status: EventStatusCode
    created_at: datetime
    last_status_changed_at: datetime
    description: Optional[str] = None
    category_id: Optional[int] = None
    event_type: Optional[str] = None
    location_text: Optional[str] = None
    is_featured: bool = False
    secondary_dates: Tuple[EventSchedule, ...] = field(default_factory=tuple)
    version: int = 1

    def __post_init__(self) -> None:
        if not self.event_id or not str(self.event_id).strip():
            raise DomainValidationError("event_id must not be empty")
        if not isinstance(self.status, EventStatusCode):
            object.__setattr__(self, "status", normalize_status_code(self.status))
        for name in ("start_date", "end_date", "created_at", "last_status_changed_at"):
            object.__setattr__(self, name, as_utc(getattr(self, name)))
        # Validates start <= end.
        EventSchedule(self.start_date, self.end_date)

    @property
    def schedule(self) -> EventSchedule:
        return EventSchedule(self.start_date, self.end_date)

    def has_ended(self, now: datetime) -> bool:
        return self.end_date < as_utc(now)

    def is_happening(self, now: datetime) -> bool:
        return self.start_date <= as_utc(now) <= self.end_date

    def is_upcoming(self, now: datetime) -> bool:
        return as_utc(now) < self.start_date

    def with_status(self, status: EventStatusCode, changed_at: datetime) -> "Event":
        """Return the next snapshot in the new status. self is left unchanged."""
        return replace(
            self,
            status=status,
            last_status_changed_at=changed_at,
            version=self.version + 1,
        )
