"""Shared fixtures: fixed clock, event factory, in-memory stores, wired services."""

from datetime import datetime, timedelta, timezone
from typing import Optional
from unittest.mock import AsyncMock, MagicMock

import pytest

from event_workflow.application.locking import EventLock, InMemoryLockBackend
from event_workflow.application.query_service import EventQueryService
from event_workflow.application.workflow_service import ApprovalWorkflowService
from event_workflow.domain.models.event import Event
from event_workflow.domain.models.status import EventStatusCode
from event_workflow.infrastructure.memory.stores import InMemoryUnitOfWorkFactory
from event_workflow.observability.metrics import MetricsCollector

NOW = datetime(2026, 3, 2, 12, 0, tzinfo=timezone.utc)


class FixedClock:
    def __init__(self, now: datetime = NOW) -> None:
        self.current = now

    def now(self) -> datetime:
        return self.current

    def advance(self, **kwargs) -> None:
        self.current = self.current + timedelta(**kwargs)


def _make_event(
    event_id: str = "evt-1",
    status: EventStatusCode = EventStatusCode.DRAFT,
    start: datetime = NOW + timedelta(days=7),
    end: Optional[datetime] = None,
    last_changed: datetime = NOW - timedelta(hours=1),
    **overrides,
) -> Event:
    fields = dict(
        event_id=event_id,
        title=f"Event {event_id}",
        organization_id="org-1",
        start_date=start,
        end_date=end if end is not None else start + timedelta(hours=2),
        status=status,
        created_at=last_changed,
        last_status_changed_at=last_changed,
    )
    fields.update(overrides)
    return Event(**fields)


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def clock():
    return FixedClock()


@pytest.fixture
def make_event():
    return _make_event


@pytest.fixture
def uow_factory():
    return InMemoryUnitOfWorkFactory()


@pytest.fixture
def logger():
    return MagicMock()


@pytest.fixture
def metrics():
    return MetricsCollector()


@pytest.fixture
def notifier():
    n = AsyncMock()
    n.notify = AsyncMock(return_value=None)
    return n


@pytest.fixture
def event_lock():
    return EventLock(InMemoryLockBackend(), wait_seconds=0.2, poll_interval_seconds=0.01)


@pytest.fixture
def workflow_service(uow_factory, logger, clock, event_lock, notifier, metrics):
    return ApprovalWorkflowService(
        uow_factory=uow_factory,
        logger=logger,
        clock=clock,
        lock=event_lock,
        notifier=notifier,
        metrics=metrics,
    )


@pytest.fixture
def query_service(uow_factory, clock):
    return EventQueryService(uow_factory=uow_factory, clock=clock)
