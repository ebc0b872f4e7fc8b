"""Event snapshot, schedule, history entry and duration value objects."""

from datetime import datetime, timedelta, timezone

import pytest

from event_workflow.domain.exceptions import DomainValidationError, UnknownStatusError
from event_workflow.domain.models.event import EventSchedule
from event_workflow.domain.models.history import StateDuration, StatusHistoryEntry
from event_workflow.domain.models.status import EventStatusCode
from event_workflow.domain.models.workflow import WorkflowAction, normalize_action


def test_event_normalizes_raw_status(make_event):
    event = make_event(status=" Draft ")
    assert event.status is EventStatusCode.DRAFT


def test_event_rejects_unknown_status(make_event):
    with pytest.raises(UnknownStatusError):
        make_event(status="archived")


def test_event_rejects_end_before_start(make_event, now):
    with pytest.raises(DomainValidationError):
        make_event(start=now, end=now - timedelta(minutes=1))


def test_event_rejects_blank_id(make_event):
    with pytest.raises(DomainValidationError):
        make_event(event_id="  ")


def test_with_status_returns_new_snapshot(make_event, now):
    event = make_event()
    changed = event.with_status(EventStatusCode.APPROVED_INTERNAL, now)
    assert changed.status is EventStatusCode.APPROVED_INTERNAL
    assert changed.last_status_changed_at == now
    assert changed.version == event.version + 1
    assert event.status is EventStatusCode.DRAFT


def test_time_predicates(make_event, now):
    event = make_event(start=now - timedelta(hours=1), end=now + timedelta(hours=1))
    assert event.is_happening(now)
    assert not event.is_upcoming(now)
    assert not event.has_ended(now)
    assert event.has_ended(now + timedelta(hours=2))
    assert make_event(start=now + timedelta(days=1)).is_upcoming(now)


def test_event_ending_exactly_now_has_not_ended(make_event, now):
    event = make_event(start=now - timedelta(hours=1), end=now)
    assert not event.has_ended(now)


def test_schedule_validates_order(now):
    assert EventSchedule(now, now).end == now
    with pytest.raises(DomainValidationError):
        EventSchedule(now, now - timedelta(seconds=1))


def test_history_entry_to_dict(now):
    entry = StatusHistoryEntry(
        entry_id="h-1",
        event_id="evt-1",
        previous_status=None,
        new_status=EventStatusCode.DRAFT,
        actor_id="u-1",
        actor_role="entity_staff",
        timestamp=now,
    )
    data = entry.to_dict()
    assert data["previous_status"] is None
    assert data["action"] is None
    assert data["new_status"] == "draft"
    assert data["timestamp"] == now.isoformat()


@pytest.mark.parametrize(
    "duration,formatted",
    [
        (StateDuration(days=1), "1 day"),
        (StateDuration(days=3), "3 days"),
        (StateDuration(hours=1), "1 hour"),
        (StateDuration(hours=5), "5 hours"),
        (StateDuration(minutes=1), "1 minute"),
        (StateDuration(minutes=42), "42 minutes"),
        (StateDuration(), "1 minute"),
    ],
)
def test_state_duration_formatting(duration, formatted):
    assert duration.formatted == formatted


def test_normalize_action():
    assert normalize_action(" REJECT ") is WorkflowAction.REJECT
    with pytest.raises(DomainValidationError):
        normalize_action("archive")


def test_naive_datetimes_are_taken_as_utc(make_event, now):
    naive = now.replace(tzinfo=None)
    event = make_event(start=naive, end=naive + timedelta(hours=1), last_changed=naive)

    assert event.start_date == now
    assert event.last_status_changed_at.tzinfo is timezone.utc
    assert event.is_happening(naive)
    assert not event.has_ended(naive)


def test_aware_datetimes_are_converted_to_utc(make_event):
    plus_two = timezone(timedelta(hours=2))
    event = make_event(start=datetime(2026, 5, 1, 12, 0, tzinfo=plus_two))
    assert event.start_date == datetime(2026, 5, 1, 10, 0, tzinfo=timezone.utc)
    assert event.start_date.tzinfo is timezone.utc


def test_schedule_normalizes_naive_bounds():
    schedule = EventSchedule(datetime(2026, 5, 1, 9, 0), datetime(2026, 5, 1, 10, 0))
    assert schedule.start.tzinfo is timezone.utc
