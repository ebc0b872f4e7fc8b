"""Time-in-state computation. Pure; the caller supplies now."""

from datetime import datetime

from event_workflow.domain.models.event import Event, as_utc
from event_workflow.domain.models.history import StateDuration

_MINUTE = 60
_HOUR = 60 * _MINUTE
_DAY = 24 * _HOUR


def compute_state_duration(since: datetime, now: datetime) -> StateDuration:
    """
    Floor (now - since) to whole units with day > hour > minute precedence.
    Only the leading unit is set; a clock skew (since > now) counts as zero.
    """
    seconds = max(0, int((as_utc(now) - as_utc(since)).total_seconds()))
    days = seconds // _DAY
    if days > 0:
        return StateDuration(days=days)
    hours = seconds // _HOUR
    if hours > 0:
        return StateDuration(hours=hours)
    return StateDuration(minutes=seconds // _MINUTE)


def duration_in_current_state(event: Event, now: datetime) -> StateDuration:
    return compute_state_duration(event.last_status_changed_at, now)
