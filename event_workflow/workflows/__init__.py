"""Workflow engine: transition rules, time-in-state, dashboard projection, filters. Pure functions only."""

from event_workflow.workflows.dashboard import (
    DashboardTab,
    counters_for,
    default_tab,
    filter_by_tab,
    order_for_tab,
    status_statistics,
    visible_tab,
)
from event_workflow.workflows.duration import compute_state_duration, duration_in_current_state
from event_workflow.workflows.filters import (
    apply_filters,
    featured_public_events,
    public_events,
    upcoming_public_events,
)
from event_workflow.workflows.rules import (
    TransitionDecision,
    allowed_actions,
    decide,
    reason_required,
    workflow_definition,
)

__all__ = [
    "DashboardTab",
    "TransitionDecision",
    "allowed_actions",
    "apply_filters",
    "compute_state_duration",
    "counters_for",
    "decide",
    "default_tab",
    "duration_in_current_state",
    "featured_public_events",
    "filter_by_tab",
    "order_for_tab",
    "public_events",
    "reason_required",
    "status_statistics",
    "upcoming_public_events",
    "visible_tab",
    "workflow_definition",
]
