"""In-memory stores and unit of work. Staged writes are applied on commit; reference adapter and test double."""

from typing import Dict, List, Optional

from event_workflow.application.exceptions import ConcurrentModificationError
from event_workflow.domain.exceptions import DomainValidationError, EventNotFoundError
from event_workflow.domain.models.event import Event
from event_workflow.domain.models.history import StatusHistoryEntry


class InMemoryDatabase:
    """Committed state shared by every unit of work created from the same factory."""

    def __init__(self) -> None:
        self.events: Dict[str, Event] = {}
        self.history: List[StatusHistoryEntry] = []


class InMemoryEventStore:
    """Event store view inside one unit of work: staged writes shadow committed rows."""

    def __init__(self, database: InMemoryDatabase) -> None:
        self._db = database
        self.staged: Dict[str, Event] = {}
        self.expected_versions: Dict[str, int] = {}

    async def get(self, event_id: str) -> Optional[Event]:
        if event_id in self.staged:
            return self.staged[event_id]
        return self._db.events.get(event_id)

    async def add(self, event: Event) -> None:
        if await self.get(event.event_id) is not None:
            raise DomainValidationError(
                f"Event already exists: {event.event_id}", {"event_id": event.event_id}
            )
        self.staged[event.event_id] = event
        self.expected_versions[event.event_id] = 0

    async def update_status(self, event: Event, expected_version: int) -> None:
        current = await self.get(event.event_id)
        if current is None:
            raise EventNotFoundError(event.event_id)
        if current.version != expected_version:
            raise ConcurrentModificationError(
                f"Event {event.event_id} changed concurrently "
                f"(expected version {expected_version}, found {current.version})",
                {"event_id": event.event_id},
            )
        self.expected_versions.setdefault(event.event_id, expected_version)
        self.staged[event.event_id] = event

    async def list_all(self) -> List[Event]:
        merged = dict(self._db.events)
        merged.update(self.staged)
        return list(merged.values())


class InMemoryHistoryStore:
    def __init__(self, database: InMemoryDatabase) -> None:
        self._db = database
        self.staged: List[StatusHistoryEntry] = []

    async def append(self, entry: StatusHistoryEntry) -> None:
        self.staged.append(entry)

    async def list_for_event(self, event_id: str) -> List[StatusHistoryEntry]:
        entries = [e for e in self._db.history + self.staged if e.event_id == event_id]
        return sorted(entries, key=lambda e: e.timestamp)


class InMemoryUnitOfWork:
    """
    Both stores commit together. Versions are re-checked at commit so two units of work
    racing on the same event cannot both win.
    """

    def __init__(self, database: InMemoryDatabase) -> None:
        self._db = database
        self.events = InMemoryEventStore(database)
        self.history = InMemoryHistoryStore(database)
        self.committed = False

    async def __aenter__(self) -> "InMemoryUnitOfWork":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if not self.committed:
            await self.rollback()

    async def commit(self) -> None:
        for event_id, expected in self.events.expected_versions.items():
            stored = self._db.events.get(event_id)
            stored_version = stored.version if stored is not None else 0
            if stored_version != expected:
                raise ConcurrentModificationError(
                    f"Event {event_id} changed concurrently", {"event_id": event_id}
                )
        self._db.events.update(self.events.staged)
        self._db.history.extend(self.history.staged)
        self.events.staged.clear()
        self.events.expected_versions.clear()
        self.history.staged.clear()
        self.committed = True

    async def rollback(self) -> None:
        self.events.staged.clear()
        self.events.expected_versions.clear()
        self.history.staged.clear()


class InMemoryUnitOfWorkFactory:
    """Callable UnitOfWorkFactory over one shared InMemoryDatabase."""

    def __init__(self, database: Optional[InMemoryDatabase] = None) -> None:
        self.database = database or InMemoryDatabase()

    def __call__(self) -> InMemoryUnitOfWork:
        return InMemoryUnitOfWork(self.database)

    def seed(self, *events: Event) -> None:
        """Load events directly into committed state, bypassing the workflow (fixtures, imports)."""
        for event in events:
            self.database.events[event.event_id] = event
