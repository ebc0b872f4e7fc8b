# event_workflow/infrastructure/database/unit_of_work.py

from datetime import datetime
from typing import List, Optional

from sqlalchemy import select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from event_workflow.application.exceptions import (
    ConcurrentModificationError,
    StorageFailureError,
)
from event_workflow.domain.exceptions import DomainValidationError
from event_workflow.domain.models.event import Event, EventSchedule, as_utc
from event_workflow.domain.models.history import StatusHistoryEntry
from event_workflow.domain.models.status import EventStatusCode
from event_workflow.domain.models.workflow import WorkflowAction
from event_workflow.infrastructure.database.models import EventRecord, StatusHistoryRecord


def _to_event(record: EventRecord) -> Event:
    return Event(
        event_id=record.id,
        title=record.title,
        organization_id=record.organization_id,
        start_date=as_utc(record.start_date),
        end_date=as_utc(record.end_date),
        status=EventStatusCode(record.status),
        created_at=as_utc(record.created_at),
        last_status_changed_at=as_utc(record.last_status_changed_at),
        description=record.description,
        category_id=record.category_id,
        event_type=record.event_type,
        location_text=record.location_text,
        is_featured=bool(record.is_featured),
        secondary_dates=tuple(
            EventSchedule(
                as_utc(datetime.fromisoformat(start)),
                as_utc(datetime.fromisoformat(end)),
            )
            for start, end in (record.secondary_dates or [])
        ),
        version=record.version,
    )


def _to_record(event: Event) -> EventRecord:
    return EventRecord(
        id=event.event_id,
        title=event.title,
        description=event.description,
        organization_id=event.organization_id,
        category_id=event.category_id,
        event_type=event.event_type,
        location_text=event.location_text,
        is_featured=event.is_featured,
        start_date=as_utc(event.start_date),
        end_date=as_utc(event.end_date),
        secondary_dates=[
            [as_utc(s.start).isoformat(), as_utc(s.end).isoformat()]
            for s in event.secondary_dates
        ],
        status=event.status.value,
        created_at=as_utc(event.created_at),
        last_status_changed_at=as_utc(event.last_status_changed_at),
        version=event.version,
    )


def _to_entry(record: StatusHistoryRecord) -> StatusHistoryEntry:
    return StatusHistoryEntry(
        entry_id=record.id,
        event_id=record.event_id,
        previous_status=EventStatusCode(record.previous_status) if record.previous_status else None,
        new_status=EventStatusCode(record.new_status),
        actor_id=record.actor_id,
        actor_role=record.actor_role,
        timestamp=as_utc(record.timestamp),
        action=WorkflowAction(record.action) if record.action else None,
        reason=record.reason,
        comments=record.comments,
    )


class SqlAlchemyEventStore:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get(self, event_id: str) -> Optional[Event]:
        record = await self.session.get(EventRecord, event_id)
        return _to_event(record) if record is not None else None

    async def add(self, event: Event) -> None:
        if await self.session.get(EventRecord, event.event_id) is not None:
            raise DomainValidationError(
                f"Event already exists: {event.event_id}", {"event_id": event.event_id}
            )
        self.session.add(_to_record(event))

    async def update_status(self, event: Event, expected_version: int) -> None:
        stmt = (
            update(EventRecord)
            .where(
                EventRecord.id == event.event_id,
                EventRecord.version == expected_version,
            )
            .values(
                status=event.status.value,
                last_status_changed_at=as_utc(event.last_status_changed_at),
                version=event.version,
            )
        )
        result = await self.session.execute(stmt)
        if result.rowcount != 1:
            raise ConcurrentModificationError(
                f"Event {event.event_id} changed concurrently "
                f"(expected version {expected_version})",
                {"event_id": event.event_id},
            )

    async def list_all(self) -> List[Event]:
        result = await self.session.execute(select(EventRecord))
        return [_to_event(r) for r in result.scalars().all()]


class SqlAlchemyHistoryStore:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def append(self, entry: StatusHistoryEntry) -> None:
        self.session.add(
            StatusHistoryRecord(
                id=entry.entry_id,
                event_id=entry.event_id,
                previous_status=entry.previous_status.value if entry.previous_status else None,
                new_status=entry.new_status.value,
                action=entry.action.value if entry.action else None,
                actor_id=entry.actor_id,
                actor_role=entry.actor_role,
                reason=entry.reason,
                comments=entry.comments,
                timestamp=as_utc(entry.timestamp),
            )
        )

    async def list_for_event(self, event_id: str) -> List[StatusHistoryEntry]:
        # Pending appends must be visible before commit.
        await self.session.flush()
        result = await self.session.execute(
            select(StatusHistoryRecord)
            .where(StatusHistoryRecord.event_id == event_id)
            .order_by(StatusHistoryRecord.timestamp)
        )
        return [_to_entry(r) for r in result.scalars().all()]


class SqlAlchemyUnitOfWork:
    """One AsyncSession per unit of work. Status update and history row share its transaction."""

    def __init__(self, session_factory: async_sessionmaker) -> None:
        self._session_factory = session_factory
        self._session: Optional[AsyncSession] = None
        self.committed = False

    async def __aenter__(self) -> "SqlAlchemyUnitOfWork":
        self._session = self._session_factory()
        self.events = SqlAlchemyEventStore(self._session)
        self.history = SqlAlchemyHistoryStore(self._session)
        self.committed = False
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        try:
            if not self.committed:
                await self.rollback()
        finally:
            await self._session.close()

    async def commit(self) -> None:
        try:
            await self._session.commit()
        except SQLAlchemyError as e:
            await self._session.rollback()
            raise StorageFailureError(f"Commit failed: {e}") from e
        self.committed = True

    async def rollback(self) -> None:
        await self._session.rollback()


class SqlAlchemyUnitOfWorkFactory:
    def __init__(self, session_factory: async_sessionmaker) -> None:
        self._session_factory = session_factory

    def __call__(self) -> SqlAlchemyUnitOfWork:
        return SqlAlchemyUnitOfWork(self._session_factory)
