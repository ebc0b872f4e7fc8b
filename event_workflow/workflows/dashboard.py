"""
Dashboard projection: role-scoped tab queues derived from a snapshot of events.

Tabs:
- requires-action: pending_internal_approval, pending_public_approval, requires_changes
- pending:         approved_internal, draft
- published:       published and not yet ended
- historic:        rejected, cancelled, or ended (end_date < now) regardless of status

An ended event that still needs action appears in both requires-action/pending and historic.
An ended published event appears only in historic.
"""

from datetime import datetime
from enum import Enum
from typing import Dict, Iterable, List, Sequence, Union

from event_workflow.domain.exceptions import DomainValidationError
from event_workflow.domain.models.event import Event
from event_workflow.domain.models.status import EventStatusCode
from event_workflow.domain.schemas.filters import DashboardCounters
from event_workflow.security.rbac import RBACService, Role

S = EventStatusCode


class DashboardTab(str, Enum):
    REQUIRES_ACTION = "requires-action"
    PENDING = "pending"
    PUBLISHED = "published"
    HISTORIC = "historic"


# Priority used when picking the initial tab.
TAB_PRIORITY = (
    DashboardTab.REQUIRES_ACTION,
    DashboardTab.PENDING,
    DashboardTab.PUBLISHED,
    DashboardTab.HISTORIC,
)

REQUIRES_ACTION_STATUSES = frozenset(
    {S.PENDING_INTERNAL_APPROVAL, S.PENDING_PUBLIC_APPROVAL, S.REQUIRES_CHANGES}
)
PENDING_STATUSES = frozenset({S.APPROVED_INTERNAL, S.DRAFT})
CLOSED_STATUSES = frozenset({S.REJECTED, S.CANCELLED})

_rbac = RBACService()


def normalize_tab(tab: Union[str, DashboardTab]) -> DashboardTab:
    if isinstance(tab, DashboardTab):
        return tab
    try:
        return DashboardTab(str(tab or "").strip().lower().replace("_", "-"))
    except ValueError:
        raise DomainValidationError(f"Unknown dashboard tab: {tab!r}", {"tab": str(tab)}) from None


def in_tab(tab: DashboardTab, event: Event, now: datetime) -> bool:
    if tab is DashboardTab.REQUIRES_ACTION:
        return event.status in REQUIRES_ACTION_STATUSES
    if tab is DashboardTab.PENDING:
        return event.status in PENDING_STATUSES
    if tab is DashboardTab.PUBLISHED:
        return event.status == S.PUBLISHED and not event.has_ended(now)
    return event.status in CLOSED_STATUSES or event.has_ended(now)


def visible_tab(role: Union[str, Role], requested: Union[str, DashboardTab]) -> DashboardTab:
    """Non-dashboard roles only ever see the published tab."""
    if not _rbac.is_dashboard_role(role):
        return DashboardTab.PUBLISHED
    return normalize_tab(requested)


def filter_by_tab(
    tab: Union[str, DashboardTab], events: Iterable[Event], now: datetime
) -> List[Event]:
    """Subset of events in tab, preserving input order."""
    resolved = normalize_tab(tab)
    return [e for e in events if in_tab(resolved, e, now)]


def counters_for(
    role: Union[str, Role], events: Iterable[Event], now: datetime
) -> DashboardCounters:
    """Per-tab counts for the role's view. Non-dashboard roles only get the published count."""
    snapshot = list(events)
    published = len(filter_by_tab(DashboardTab.PUBLISHED, snapshot, now))
    if not _rbac.is_dashboard_role(role):
        return DashboardCounters(published=published)
    return DashboardCounters(
        requires_action=len(filter_by_tab(DashboardTab.REQUIRES_ACTION, snapshot, now)),
        pending=len(filter_by_tab(DashboardTab.PENDING, snapshot, now)),
        published=published,
        historic=len(filter_by_tab(DashboardTab.HISTORIC, snapshot, now)),
    )


def default_tab(role: Union[str, Role], events: Iterable[Event], now: datetime) -> DashboardTab:
    """First non-empty tab in priority order; historic when all are empty."""
    if not _rbac.is_dashboard_role(role):
        return DashboardTab.PUBLISHED
    counts = counters_for(role, events, now).as_tab_dict()
    for tab in TAB_PRIORITY:
        if counts[tab.value] > 0:
            return tab
    return DashboardTab.HISTORIC


def order_for_tab(tab: Union[str, DashboardTab], events: Sequence[Event]) -> List[Event]:
    """
    historic: most recent status change first.
    others: upcoming first (start date ascending), then oldest status change first.
    """
    if normalize_tab(tab) is DashboardTab.HISTORIC:
        return sorted(events, key=lambda e: (e.last_status_changed_at, e.event_id), reverse=True)
    return sorted(events, key=lambda e: (e.start_date, e.last_status_changed_at, e.event_id))


def status_statistics(events: Iterable[Event]) -> Dict[str, int]:
    """Count of events per status code; every code is present."""
    stats = {code.value: 0 for code in EventStatusCode}
    for event in events:
        stats[event.status.value] += 1
    return stats
