"""Status registry: the fixed catalog of workflow states. Reference data, never mutated at runtime."""

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Iterable, Mapping, Optional, Tuple, Union

from event_workflow.domain.exceptions import UnknownStatusError


class EventStatusCode(str, Enum):
    DRAFT = "draft"
    PENDING_INTERNAL_APPROVAL = "pending_internal_approval"
    APPROVED_INTERNAL = "approved_internal"
    PENDING_PUBLIC_APPROVAL = "pending_public_approval"
    PUBLISHED = "published"
    REQUIRES_CHANGES = "requires_changes"
    REJECTED = "rejected"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class EventStatus:
    """One workflow state. workflow_order is None for exception/terminal states."""

    code: EventStatusCode
    display_name: str
    description: str
    is_public: bool
    workflow_order: Optional[int]
    is_terminal: bool


_SEED: Tuple[EventStatus, ...] = (
    EventStatus(
        EventStatusCode.DRAFT,
        "Draft",
        "Event is being created, not visible to public",
        is_public=False,
        workflow_order=1,
        is_terminal=False,
    ),
    EventStatus(
        EventStatusCode.PENDING_INTERNAL_APPROVAL,
        "Pending Internal Approval",
        "Event submitted for internal approval by entity admin",
        is_public=False,
        workflow_order=2,
        is_terminal=False,
    ),
    EventStatus(
        EventStatusCode.APPROVED_INTERNAL,
        "Approved Internal",
        "Event approved internally, ready for public approval",
        is_public=False,
        workflow_order=3,
        is_terminal=False,
    ),
    EventStatus(
        EventStatusCode.PENDING_PUBLIC_APPROVAL,
        "Pending Public Approval",
        "Event pending final public approval",
        is_public=False,
        workflow_order=4,
        is_terminal=False,
    ),
    EventStatus(
        EventStatusCode.PUBLISHED,
        "Published",
        "Event is live and visible to public",
        is_public=True,
        workflow_order=5,
        is_terminal=False,
    ),
    EventStatus(
        EventStatusCode.REQUIRES_CHANGES,
        "Requires Changes",
        "Event needs modifications before approval",
        is_public=False,
        workflow_order=None,
        is_terminal=False,
    ),
    EventStatus(
        EventStatusCode.REJECTED,
        "Rejected",
        "Event rejected and will not be published",
        is_public=False,
        workflow_order=None,
        is_terminal=True,
    ),
    EventStatus(
        EventStatusCode.CANCELLED,
        "Cancelled",
        "Event was cancelled by organizer",
        is_public=False,
        workflow_order=None,
        is_terminal=True,
    ),
)

_APPROVAL_WORKFLOW_CODES = frozenset(
    {
        EventStatusCode.PENDING_INTERNAL_APPROVAL,
        EventStatusCode.APPROVED_INTERNAL,
        EventStatusCode.PENDING_PUBLIC_APPROVAL,
        EventStatusCode.REQUIRES_CHANGES,
    }
)


def normalize_status_code(code: Union[str, EventStatusCode]) -> EventStatusCode:
    """Coerce a raw code into EventStatusCode. Raises UnknownStatusError."""
    if isinstance(code, EventStatusCode):
        return code
    if not isinstance(code, str):
        raise UnknownStatusError(code)
    try:
        return EventStatusCode(code.strip().lower())
    except ValueError:
        raise UnknownStatusError(code) from None


class StatusRegistry:
    """
    Read-only catalog of the eight workflow states.
    all_statuses() yields ordered states first (by workflow_order), then exception states in seed order.
    """

    def __init__(self, statuses: Iterable[EventStatus] = _SEED) -> None:
        ordered = sorted(
            enumerate(statuses),
            key=lambda pair: (
                pair[1].workflow_order is None,
                pair[1].workflow_order or 0,
                pair[0],
            ),
        )
        self._ordered: Tuple[EventStatus, ...] = tuple(s for _, s in ordered)
        self._by_code: Mapping[EventStatusCode, EventStatus] = MappingProxyType(
            {s.code: s for s in self._ordered}
        )

    def status_by_code(self, code: Union[str, EventStatusCode]) -> EventStatus:
        normalized = normalize_status_code(code)
        status = self._by_code.get(normalized)
        if status is None:
            raise UnknownStatusError(code)
        return status

    def all_statuses(self) -> Tuple[EventStatus, ...]:
        return self._ordered

    def codes(self) -> Tuple[EventStatusCode, ...]:
        return tuple(s.code for s in self._ordered)

    def workflow_statuses(self) -> Tuple[EventStatus, ...]:
        return tuple(s for s in self._ordered if s.workflow_order is not None)

    def public_codes(self) -> frozenset:
        return frozenset(s.code for s in self._ordered if s.is_public)

    def is_terminal(self, code: Union[str, EventStatusCode]) -> bool:
        return self.status_by_code(code).is_terminal

    def in_approval_workflow(self, code: Union[str, EventStatusCode]) -> bool:
        return self.status_by_code(code).code in _APPROVAL_WORKFLOW_CODES

    def __contains__(self, code: object) -> bool:
        try:
            normalized = normalize_status_code(code)  # type: ignore[arg-type]
        except UnknownStatusError:
            return False
        return normalized in self._by_code

    def __len__(self) -> int:
        return len(self._ordered)


# Loaded once at import; shared by every component.
status_registry = StatusRegistry()


def status_by_code(code: Union[str, EventStatusCode]) -> EventStatus:
    return status_registry.status_by_code(code)


def all_statuses() -> Tuple[EventStatus, ...]:
    return status_registry.all_statuses()
