"""Store protocols. Application layer depends on these; infrastructure implements them."""

from datetime import datetime, timezone
from typing import Callable, List, Optional, Protocol

from event_workflow.domain.models.event import Event
from event_workflow.domain.models.history import StatusHistoryEntry


class EventStore(Protocol):
    """Current event records. One row per event; the status is the only field the workflow writes."""

    async def get(self, event_id: str) -> Optional[Event]:
        """Return the event, or None if not found."""
        ...

    async def add(self, event: Event) -> None:
        """Insert a new event."""
        ...

    async def update_status(self, event: Event, expected_version: int) -> None:
        """
        Write status, last_status_changed_at and version from event.
        Raises ConcurrentModificationError if the stored version != expected_version.
        """
        ...

    async def list_all(self) -> List[Event]:
        """Snapshot of every event, for projections."""
        ...


class HistoryStore(Protocol):
    """Append-only status history. Entries are never updated or deleted."""

    async def append(self, entry: StatusHistoryEntry) -> None:
        ...

    async def list_for_event(self, event_id: str) -> List[StatusHistoryEntry]:
        """Entries for event_id, timestamp ascending."""
        ...


class UnitOfWork(Protocol):
    """
    Transaction boundary over both stores. Writes become visible only on commit();
    leaving the context without commit discards them.
    """

    events: EventStore
    history: HistoryStore

    async def __aenter__(self) -> "UnitOfWork":
        ...

    async def __aexit__(self, exc_type, exc, tb) -> None:
        ...

    async def commit(self) -> None:
        ...

    async def rollback(self) -> None:
        ...


UnitOfWorkFactory = Callable[[], UnitOfWork]


class Clock(Protocol):
    def now(self) -> datetime:
        ...


class SystemClock:
    """UTC wall clock."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)


class StatusChangeNotifier(Protocol):
    """Receives committed status changes (e.g. to notify organizers). Fire-and-forget."""

    async def notify(self, event: Event, entry: StatusHistoryEntry) -> None:
        ...
