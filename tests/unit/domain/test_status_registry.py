"""Status registry: fixed catalog, lookups, public/terminal flags."""

import pytest

from event_workflow.domain.exceptions import ErrorKind, UnknownStatusError
from event_workflow.domain.models.status import (
    EventStatusCode,
    StatusRegistry,
    all_statuses,
    status_by_code,
    status_registry,
)


def test_registry_holds_exactly_eight_unique_codes():
    codes = [s.code for s in all_statuses()]
    assert len(codes) == 8
    assert len(set(codes)) == 8
    assert set(codes) == set(EventStatusCode)


def test_only_published_is_public():
    public = [s.code for s in all_statuses() if s.is_public]
    assert public == [EventStatusCode.PUBLISHED]
    assert status_registry.public_codes() == frozenset({EventStatusCode.PUBLISHED})


def test_rejected_and_cancelled_are_terminal():
    terminal = {s.code for s in all_statuses() if s.is_terminal}
    assert terminal == {EventStatusCode.REJECTED, EventStatusCode.CANCELLED}


def test_all_statuses_lists_ordered_states_first():
    ordered = [s.code.value for s in all_statuses()]
    assert ordered[:5] == [
        "draft",
        "pending_internal_approval",
        "approved_internal",
        "pending_public_approval",
        "published",
    ]
    assert set(ordered[5:]) == {"requires_changes", "rejected", "cancelled"}
    assert all(s.workflow_order is None for s in all_statuses()[5:])


def test_status_by_code_accepts_enum_and_raw_string():
    assert status_by_code(EventStatusCode.DRAFT).display_name == "Draft"
    assert status_by_code("  Published ").code is EventStatusCode.PUBLISHED


def test_unknown_code_raises_not_found():
    with pytest.raises(UnknownStatusError) as exc_info:
        status_by_code("archived")
    assert exc_info.value.kind is ErrorKind.NOT_FOUND
    assert "archived" in exc_info.value.message


def test_contains_and_len():
    assert "draft" in status_registry
    assert "archived" not in status_registry
    assert 42 not in status_registry
    assert len(status_registry) == 8


def test_in_approval_workflow():
    assert status_registry.in_approval_workflow("pending_public_approval")
    assert status_registry.in_approval_workflow("requires_changes")
    assert not status_registry.in_approval_workflow("draft")
    assert not status_registry.in_approval_workflow("published")


def test_workflow_statuses_are_the_ordered_ones():
    orders = [s.workflow_order for s in status_registry.workflow_statuses()]
    assert orders == [1, 2, 3, 4, 5]


def test_custom_registry_orders_by_workflow_order():
    seed = list(reversed(all_statuses()))
    registry = StatusRegistry(seed)
    assert registry.codes()[0] is EventStatusCode.DRAFT
    assert registry.codes()[4] is EventStatusCode.PUBLISHED
