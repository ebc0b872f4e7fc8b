"""Filter composition and the public calendar view."""

from datetime import datetime, timedelta, timezone

from event_workflow.domain.models.status import EventStatusCode
from event_workflow.domain.schemas.filters import EventFilters
from event_workflow.workflows.filters import (
    apply_filters,
    featured_public_events,
    public_events,
    upcoming_public_events,
)

S = EventStatusCode


def _ids(events):
    return [e.event_id for e in events]


def test_no_filters_returns_everything_in_order(make_event):
    events = [make_event("b"), make_event("a")]
    assert _ids(apply_filters(events)) == ["b", "a"]
    assert _ids(apply_filters(events, EventFilters())) == ["b", "a"]


def test_search_is_case_insensitive_over_title_description_location(make_event):
    events = [
        make_event("t", title="Jazz Night"),
        make_event("d", description="Live JAZZ by the sea"),
        make_event("l", location_text="Jazzhaus"),
        make_event("x", title="Food Fair"),
    ]
    assert _ids(apply_filters(events, EventFilters(search="jazz"))) == ["t", "d", "l"]


def test_category_type_status_featured(make_event):
    events = [
        make_event("1", category_id=3, event_type="Festival", is_featured=True),
        make_event("2", category_id=3, event_type="concert"),
        make_event("3", category_id=4, event_type="festival", status=S.PUBLISHED),
    ]
    assert _ids(apply_filters(events, EventFilters(category_id=3))) == ["1", "2"]
    assert _ids(apply_filters(events, EventFilters(type="FESTIVAL"))) == ["1", "3"]
    assert _ids(apply_filters(events, EventFilters(status="published"))) == ["3"]
    assert _ids(apply_filters(events, EventFilters(is_featured=True))) == ["1"]
    assert _ids(apply_filters(events, EventFilters(is_featured=False))) == ["2", "3"]


def test_date_range_is_inclusive_overlap(make_event, now):
    event = make_event("e", start=now, end=now + timedelta(hours=2))
    assert apply_filters([event], EventFilters(start_date=now + timedelta(hours=2)))
    assert apply_filters([event], EventFilters(end_date=now))
    assert not apply_filters([event], EventFilters(start_date=now + timedelta(hours=3)))
    assert not apply_filters([event], EventFilters(end_date=now - timedelta(minutes=1)))


def test_filters_compose_as_and_regardless_of_order(make_event):
    events = [
        make_event("1", title="Jazz", category_id=1),
        make_event("2", title="Jazz", category_id=2),
        make_event("3", title="Rock", category_id=1),
    ]
    combined = apply_filters(events, EventFilters(search="jazz", category_id=1))
    stepwise = apply_filters(
        apply_filters(events, EventFilters(category_id=1)), EventFilters(search="jazz")
    )
    assert _ids(combined) == _ids(stepwise) == ["1"]


def test_public_events_only_published_sorted_by_start(make_event, now):
    events = [
        make_event("late", S.PUBLISHED, start=now + timedelta(days=5)),
        make_event("draft", S.DRAFT, start=now + timedelta(days=1)),
        make_event("early", S.PUBLISHED, start=now + timedelta(days=2)),
    ]
    assert _ids(public_events(events)) == ["early", "late"]
    assert _ids(public_events(events, EventFilters(search="late"))) == ["late"]


def test_upcoming_public_events_limit(make_event, now):
    events = [
        make_event(f"e{i}", S.PUBLISHED, start=now + timedelta(days=i)) for i in range(1, 5)
    ] + [make_event("past", S.PUBLISHED, start=now - timedelta(days=1))]
    assert _ids(upcoming_public_events(events, now, limit=2)) == ["e1", "e2"]
    assert "past" not in _ids(upcoming_public_events(events, now))


def test_featured_public_events(make_event, now):
    events = [
        make_event("f1", S.PUBLISHED, start=now + timedelta(days=1), is_featured=True),
        make_event("f2", S.DRAFT, start=now + timedelta(days=1), is_featured=True),
        make_event("n", S.PUBLISHED, start=now + timedelta(days=1)),
        make_event("old", S.PUBLISHED, start=now - timedelta(days=1), is_featured=True),
    ]
    assert _ids(featured_public_events(events, now)) == ["f1"]


def test_date_only_filter_bounds_are_taken_as_utc(make_event, now):
    events = [
        make_event("before", start=now - timedelta(days=3)),
        make_event("inside", start=now + timedelta(days=1)),
    ]
    filters = EventFilters(start_date="2026-03-01", end_date="2026-03-31")

    assert filters.start_date == datetime(2026, 3, 1, tzinfo=timezone.utc)
    assert _ids(apply_filters(events, filters)) == ["inside"]


def test_naive_upcoming_cutoff_is_taken_as_utc(make_event, now):
    events = [make_event("soon", S.PUBLISHED, start=now + timedelta(hours=1))]
    assert _ids(upcoming_public_events(events, now.replace(tzinfo=None))) == ["soon"]
