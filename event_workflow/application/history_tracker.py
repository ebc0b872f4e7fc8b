"""Append-only status history and time-in-state reads."""

import uuid
from datetime import datetime
from typing import Callable, List, Optional

from event_workflow.application.repositories import Clock, UnitOfWork, UnitOfWorkFactory
from event_workflow.domain.exceptions import EventNotFoundError
from event_workflow.domain.models.event import Event
from event_workflow.domain.models.history import StateDuration, StatusHistoryEntry
from event_workflow.domain.models.status import EventStatusCode
from event_workflow.domain.models.workflow import WorkflowAction
from event_workflow.workflows.duration import duration_in_current_state


def _new_entry_id() -> str:
    return str(uuid.uuid4())


class HistoryTracker:
    """
    Writes history entries inside the caller's unit of work; reads them in timestamp order.
    Entries are only ever created by the workflow service.
    """

    def __init__(
        self,
        uow_factory: UnitOfWorkFactory,
        clock: Clock,
        id_factory: Callable[[], str] = _new_entry_id,
    ) -> None:
        self._uow_factory = uow_factory
        self._clock = clock
        self._id_factory = id_factory

    async def record_entry(
        self,
        uow: UnitOfWork,
        *,
        event: Event,
        previous_status: Optional[EventStatusCode],
        new_status: EventStatusCode,
        actor_id: str,
        actor_role: str,
        timestamp: datetime,
        action: Optional[WorkflowAction] = None,
        reason: Optional[str] = None,
        comments: Optional[str] = None,
    ) -> StatusHistoryEntry:
        """Stage one immutable entry in uow. Persisted only when uow commits."""
        entry = StatusHistoryEntry(
            entry_id=self._id_factory(),
            event_id=event.event_id,
            previous_status=previous_status,
            new_status=new_status,
            actor_id=actor_id,
            actor_role=actor_role,
            timestamp=timestamp,
            action=action,
            reason=reason,
            comments=comments,
        )
        await uow.history.append(entry)
        return entry

    async def history_for(self, event_id: str) -> List[StatusHistoryEntry]:
        """Entries for the event, oldest first. Raises EventNotFoundError for unknown events."""
        async with self._uow_factory() as uow:
            if await uow.events.get(event_id) is None:
                raise EventNotFoundError(event_id)
            entries = await uow.history.list_for_event(event_id)
        # sorted() is stable: entries sharing a timestamp keep insertion order.
        return sorted(entries, key=lambda e: e.timestamp)

    def duration_in_current_state(self, event: Event, now: Optional[datetime] = None) -> StateDuration:
        return duration_in_current_state(event, now or self._clock.now())
