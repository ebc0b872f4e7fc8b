"""Read-side service: dashboard counters and filtered event lists over a store snapshot. No writes."""

from datetime import datetime
from typing import Dict, List, Optional, Union

from event_workflow.application.repositories import Clock, SystemClock, UnitOfWorkFactory
from event_workflow.domain.exceptions import EventNotFoundError
from event_workflow.domain.models.event import Event, as_utc
from event_workflow.domain.models.history import StateDuration
from event_workflow.domain.models.status import StatusRegistry, status_registry
from event_workflow.domain.schemas.filters import DashboardCounters, EventFilters
from event_workflow.security.rbac import RBACService, Role
from event_workflow.workflows import dashboard
from event_workflow.workflows.dashboard import DashboardTab
from event_workflow.workflows.duration import duration_in_current_state
from event_workflow.workflows.filters import (
    apply_filters,
    featured_public_events,
    public_events,
    upcoming_public_events,
)


class EventQueryService:
    """
    Role-scoped projections. Every call reads one fresh snapshot; nothing is cached.
    Projections themselves are pure functions in event_workflow.workflows.
    """

    def __init__(
        self,
        uow_factory: UnitOfWorkFactory,
        clock: Optional[Clock] = None,
        registry: StatusRegistry = status_registry,
    ) -> None:
        self._uow_factory = uow_factory
        self._clock = clock or SystemClock()
        self._registry = registry
        self._rbac = RBACService()

    def _now(self, as_of: Optional[datetime] = None) -> datetime:
        return as_utc(as_of) if as_of is not None else self._clock.now()

    async def _snapshot(self) -> List[Event]:
        async with self._uow_factory() as uow:
            return await uow.events.list_all()

    async def get_event(self, event_id: str) -> Event:
        async with self._uow_factory() as uow:
            event = await uow.events.get(event_id)
        if event is None:
            raise EventNotFoundError(event_id)
        return event

    async def get_dashboard_counters(
        self, role: Union[str, Role], as_of: Optional[datetime] = None
    ) -> DashboardCounters:
        events = await self._snapshot()
        return dashboard.counters_for(role, events, self._now(as_of))

    async def get_default_tab(
        self, role: Union[str, Role], as_of: Optional[datetime] = None
    ) -> DashboardTab:
        events = await self._snapshot()
        return dashboard.default_tab(role, events, self._now(as_of))

    async def get_filtered_events(
        self,
        tab: Optional[Union[str, DashboardTab]] = None,
        filters: Optional[EventFilters] = None,
        role: Union[str, Role] = Role.ORGANIZER_ADMIN,
        as_of: Optional[datetime] = None,
    ) -> List[Event]:
        """
        Events for the role's view of tab, filtered and ordered.
        Non-dashboard roles always get the published tab. A dashboard role with no tab
        gets every event, ordered by start date.
        """
        now = self._now(as_of)
        events = apply_filters(await self._snapshot(), filters)

        if tab is None and self._rbac.is_dashboard_role(role):
            return sorted(events, key=lambda e: (e.start_date, e.event_id))

        resolved = dashboard.visible_tab(role, tab or DashboardTab.PUBLISHED)
        return dashboard.order_for_tab(resolved, dashboard.filter_by_tab(resolved, events, now))

    async def get_public_events(self, filters: Optional[EventFilters] = None) -> List[Event]:
        return public_events(await self._snapshot(), filters, registry=self._registry)

    async def get_upcoming_public_events(self, limit: int = 10) -> List[Event]:
        return upcoming_public_events(
            await self._snapshot(), self._clock.now(), limit=limit, registry=self._registry
        )

    async def get_featured_public_events(self, limit: int = 5) -> List[Event]:
        return featured_public_events(
            await self._snapshot(), self._clock.now(), limit=limit, registry=self._registry
        )

    async def get_status_statistics(self) -> Dict[str, int]:
        return dashboard.status_statistics(await self._snapshot())

    async def get_time_in_current_state(self, event_id: str) -> StateDuration:
        event = await self.get_event(event_id)
        return duration_in_current_state(event, self._clock.now())
