"""
Predicate composition for event lists. Every filter is a pure predicate;
composed filters are a logical AND, so evaluation order never changes the result.
"""

from datetime import datetime
from typing import Callable, Iterable, List, Optional

from event_workflow.domain.models.event import Event, as_utc
from event_workflow.domain.models.status import StatusRegistry, status_registry
from event_workflow.domain.schemas.filters import EventFilters

EventPredicate = Callable[[Event], bool]


def _contains(haystack: Optional[str], needle: str) -> bool:
    return bool(haystack) and needle in haystack.casefold()


def search_predicate(search: str) -> EventPredicate:
    needle = search.casefold()

    def _match(event: Event) -> bool:
        return (
            _contains(event.title, needle)
            or _contains(event.description, needle)
            or _contains(event.location_text, needle)
        )

    return _match


def date_range_predicate(
    start: Optional[datetime], end: Optional[datetime]
) -> EventPredicate:
    """Inclusive overlap between the event schedule and [start, end]. Naive bounds are UTC."""
    start = as_utc(start) if start is not None else None
    end = as_utc(end) if end is not None else None

    def _match(event: Event) -> bool:
        if start is not None and event.end_date < start:
            return False
        if end is not None and event.start_date > end:
            return False
        return True

    return _match


def build_predicates(filters: EventFilters) -> List[EventPredicate]:
    """Translate the set fields of filters into predicates. Unset fields contribute nothing."""
    predicates: List[EventPredicate] = []
    if filters.search:
        predicates.append(search_predicate(filters.search))
    if filters.category_id is not None:
        category_id = filters.category_id
        predicates.append(lambda e: e.category_id == category_id)
    if filters.status is not None:
        status = filters.status
        predicates.append(lambda e: e.status == status)
    if filters.type:
        event_type = filters.type.casefold()
        predicates.append(lambda e: (e.event_type or "").casefold() == event_type)
    if filters.start_date is not None or filters.end_date is not None:
        predicates.append(date_range_predicate(filters.start_date, filters.end_date))
    if filters.is_featured is not None:
        featured = filters.is_featured
        predicates.append(lambda e: e.is_featured == featured)
    return predicates


def apply_filters(events: Iterable[Event], filters: Optional[EventFilters] = None) -> List[Event]:
    """Return the events matching every set filter field, preserving input order."""
    if filters is None:
        return list(events)
    predicates = build_predicates(filters)
    return [e for e in events if all(p(e) for p in predicates)]


# ---------------------------------------------------------------------------
# Public calendar view
# ---------------------------------------------------------------------------


def public_events(
    events: Iterable[Event],
    filters: Optional[EventFilters] = None,
    registry: StatusRegistry = status_registry,
) -> List[Event]:
    """Events visible on the public calendar, filtered, ordered by start date."""
    public = registry.public_codes()
    visible = [e for e in events if e.status in public]
    return sorted(apply_filters(visible, filters), key=lambda e: (e.start_date, e.event_id))


def upcoming_public_events(
    events: Iterable[Event],
    now: datetime,
    limit: int = 10,
    registry: StatusRegistry = status_registry,
) -> List[Event]:
    upcoming = [e for e in public_events(events, registry=registry) if e.is_upcoming(now)]
    return upcoming[: max(0, limit)]


def featured_public_events(
    events: Iterable[Event],
    now: datetime,
    limit: int = 5,
    registry: StatusRegistry = status_registry,
) -> List[Event]:
    featured = [
        e
        for e in public_events(events, EventFilters(is_featured=True), registry=registry)
        if e.start_date >= as_utc(now)
    ]
    return featured[: max(0, limit)]
