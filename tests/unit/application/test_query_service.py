"""EventQueryService: role-scoped counters and lists over fresh snapshots."""

from datetime import timedelta

import pytest

from event_workflow.domain.exceptions import EventNotFoundError
from event_workflow.domain.models.status import EventStatusCode
from event_workflow.domain.schemas.filters import EventFilters
from event_workflow.workflows.dashboard import DashboardTab

S = EventStatusCode


@pytest.fixture
def seeded(uow_factory, make_event, now):
    uow_factory.seed(
        make_event("draft", S.DRAFT, start=now + timedelta(days=4)),
        make_event("pending", S.PENDING_PUBLIC_APPROVAL, start=now + timedelta(days=2), title="Jazz Night"),
        make_event("live", S.PUBLISHED, start=now + timedelta(days=1), is_featured=True),
        make_event("gone", S.PUBLISHED, start=now - timedelta(days=2)),
        make_event("stale", S.REQUIRES_CHANGES, start=now - timedelta(days=5)),
    )
    return uow_factory


def _ids(events):
    return [e.event_id for e in events]


async def test_dashboard_counters_for_admin(query_service, seeded):
    counters = await query_service.get_dashboard_counters("entity_admin")
    assert counters.requires_action == 2
    assert counters.pending == 1
    assert counters.published == 1
    assert counters.historic == 2


async def test_dashboard_counters_for_organizer(query_service, seeded):
    counters = await query_service.get_dashboard_counters("organizer_admin")
    assert counters.as_tab_dict() == {
        "requires-action": 0,
        "pending": 0,
        "published": 1,
        "historic": 0,
    }


async def test_counters_reflect_committed_transition(query_service, workflow_service, seeded):
    before = await query_service.get_dashboard_counters("entity_admin")

    await workflow_service.transition("pending", "approve_public", "entity_admin", "admin-1")

    after = await query_service.get_dashboard_counters("entity_admin")
    assert after.requires_action == before.requires_action - 1
    assert after.published == before.published + 1


async def test_counters_as_of_later_time(query_service, seeded, now):
    counters = await query_service.get_dashboard_counters("entity_admin", as_of=now + timedelta(days=30))
    assert counters.published == 0
    assert counters.historic == 5


async def test_filtered_events_by_tab_and_filters(query_service, seeded):
    requires_action = await query_service.get_filtered_events("requires-action", role="entity_admin")
    assert _ids(requires_action) == ["stale", "pending"]

    jazz = await query_service.get_filtered_events(
        DashboardTab.REQUIRES_ACTION, EventFilters(search="jazz"), role="entity_admin"
    )
    assert _ids(jazz) == ["pending"]


async def test_filtered_events_historic_order(query_service, seeded):
    historic = await query_service.get_filtered_events("historic", role="platform_admin")
    assert set(_ids(historic)) == {"gone", "stale"}


async def test_dashboard_role_without_tab_gets_everything(query_service, seeded):
    events = await query_service.get_filtered_events(role="entity_staff")
    assert _ids(events) == ["stale", "gone", "live", "pending", "draft"]


async def test_organizer_is_pinned_to_published(query_service, seeded):
    events = await query_service.get_filtered_events("requires-action", role="organizer_admin")
    assert _ids(events) == ["live"]


async def test_public_views(query_service, seeded):
    assert _ids(await query_service.get_public_events()) == ["gone", "live"]
    assert _ids(await query_service.get_upcoming_public_events()) == ["live"]
    assert _ids(await query_service.get_featured_public_events()) == ["live"]


async def test_default_tab(query_service, seeded, uow_factory):
    assert await query_service.get_default_tab("entity_admin") is DashboardTab.REQUIRES_ACTION
    assert await query_service.get_default_tab("organizer_admin") is DashboardTab.PUBLISHED


async def test_status_statistics(query_service, seeded):
    stats = await query_service.get_status_statistics()
    assert stats["published"] == 2
    assert stats["draft"] == 1
    assert stats["cancelled"] == 0


async def test_get_event_and_time_in_state(query_service, seeded, clock):
    event = await query_service.get_event("draft")
    assert event.title == "Event draft"
    clock.advance(days=2)
    duration = await query_service.get_time_in_current_state("draft")
    assert duration.formatted == "2 days"


async def test_get_event_unknown(query_service):
    with pytest.raises(EventNotFoundError):
        await query_service.get_event("missing")


async def test_naive_as_of_is_taken_as_utc(query_service, seeded, now):
    naive = await query_service.get_dashboard_counters("entity_admin", as_of=now.replace(tzinfo=None))
    aware = await query_service.get_dashboard_counters("entity_admin", as_of=now)
    assert naive == aware
