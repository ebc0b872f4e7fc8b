"""
Transition rule engine. Pure: (current status, action, role) -> next status or a denial.

Evaluation order:
1) status must exist in the registry
2) locked states (published, rejected, cancelled) accept no action
3) role must hold the capability for the action
4) (status, action) must appear in the allow-table
5) reason length, where the transition requires one
"""

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple, Union

from event_workflow.domain.exceptions import (
    DomainError,
    DomainValidationError,
    InvalidTransitionError,
    WorkflowError,
)
from event_workflow.domain.models.status import (
    EventStatusCode,
    StatusRegistry,
    status_registry,
)
from event_workflow.domain.models.workflow import WorkflowAction, normalize_action
from event_workflow.domain.validators.transition_validator import validate_reason
from event_workflow.security.exceptions import SecurityError
from event_workflow.security.rbac import RBACService, Role, normalize_role

S = EventStatusCode
A = WorkflowAction

# Minimum reason lengths per action. Actions absent here need no reason.
REASON_MIN_LENGTH: Dict[WorkflowAction, int] = {
    A.REQUEST_CHANGES: 20,
    A.REJECT: 10,
}

LOCKED_STATUSES = frozenset({S.PUBLISHED, S.REJECTED, S.CANCELLED})

# Allow-table: (current, action) -> next. Any pair not listed is denied.
TRANSITIONS: Dict[Tuple[EventStatusCode, WorkflowAction], EventStatusCode] = {
    (S.DRAFT, A.APPROVE_INTERNAL): S.APPROVED_INTERNAL,
    (S.DRAFT, A.REQUEST_CHANGES): S.REQUIRES_CHANGES,
    (S.DRAFT, A.REJECT): S.REJECTED,
    (S.APPROVED_INTERNAL, A.REQUEST_PUBLIC): S.PENDING_PUBLIC_APPROVAL,
    (S.PENDING_PUBLIC_APPROVAL, A.APPROVE_PUBLIC): S.PUBLISHED,
    (S.PENDING_PUBLIC_APPROVAL, A.REQUEST_CHANGES): S.REQUIRES_CHANGES,
    (S.PENDING_PUBLIC_APPROVAL, A.REJECT): S.REJECTED,
    (S.REQUIRES_CHANGES, A.APPROVE_INTERNAL): S.APPROVED_INTERNAL,
    (S.REQUIRES_CHANGES, A.REQUEST_CHANGES): S.REQUIRES_CHANGES,
    (S.REQUIRES_CHANGES, A.REJECT): S.REJECTED,
}

_rbac = RBACService()


@dataclass(frozen=True)
class TransitionDecision:
    """Outcome of decide(). Exactly one of next_status / error is set."""

    current_status: Optional[EventStatusCode]
    action: Optional[WorkflowAction]
    next_status: Optional[EventStatusCode] = None
    error: Optional[WorkflowError] = None

    @property
    def allowed(self) -> bool:
        return self.error is None

    def next_status_or_raise(self) -> EventStatusCode:
        if self.error is not None:
            raise self.error
        if self.next_status is None:
            raise DomainValidationError("Transition decision carries neither a next status nor an error")
        return self.next_status


def _denied(current, action, error: WorkflowError) -> TransitionDecision:
    return TransitionDecision(current_status=current, action=action, error=error)


def decide(
    current_status: Union[str, EventStatusCode],
    action: Union[str, WorkflowAction],
    actor_role: Union[str, Role],
    reason: Optional[str] = None,
    registry: StatusRegistry = status_registry,
) -> TransitionDecision:
    """
    Resolve the next status for a requested action. Never raises for business-rule denials;
    the denial is carried in TransitionDecision.error.
    """
    try:
        current = registry.status_by_code(current_status).code
        requested = normalize_action(action)
    except DomainError as e:
        return _denied(None, None, e)

    if current in LOCKED_STATUSES:
        return _denied(
            current,
            requested,
            InvalidTransitionError(
                current.value,
                requested.value,
                f"Event in status '{current.value}' is locked; no further workflow actions are allowed",
            ),
        )

    try:
        _rbac.check_permission(actor_role, requested)
    except SecurityError as e:
        return _denied(current, requested, e)

    next_status = TRANSITIONS.get((current, requested))
    if next_status is None:
        return _denied(current, requested, InvalidTransitionError(current.value, requested.value))

    min_length = REASON_MIN_LENGTH.get(requested)
    if min_length is not None:
        try:
            validate_reason(reason, min_length, action=requested.value)
        except DomainError as e:
            return _denied(current, requested, e)

    return TransitionDecision(current_status=current, action=requested, next_status=next_status)


def reason_required(action: Union[str, WorkflowAction]) -> Optional[int]:
    """Minimum reason length for action, or None when no reason is required."""
    return REASON_MIN_LENGTH.get(normalize_action(action))


def allowed_actions(
    current_status: Union[str, EventStatusCode],
    actor_role: Union[str, Role],
    registry: StatusRegistry = status_registry,
) -> List[WorkflowAction]:
    """Actions the role may request from current_status, ignoring reason evidence."""
    current = registry.status_by_code(current_status).code
    if current in LOCKED_STATUSES:
        return []
    try:
        role = normalize_role(actor_role)
    except SecurityError:
        return []
    return [
        action
        for action in WorkflowAction
        if (current, action) in TRANSITIONS and _rbac.can(role, action)
    ]


def workflow_definition(registry: StatusRegistry = status_registry) -> Dict:
    """Stable JSON-serializable definition for UI and documentation."""
    transitions: Dict[str, Dict[str, str]] = {}
    for (current, action), nxt in TRANSITIONS.items():
        transitions.setdefault(current.value, {})[action.value] = nxt.value
    return {
        "statuses": [
            {
                "code": s.code.value,
                "display_name": s.display_name,
                "is_public": s.is_public,
                "workflow_order": s.workflow_order,
                "is_terminal": s.is_terminal,
            }
            for s in registry.all_statuses()
        ],
        "transitions": transitions,
        "locked_statuses": sorted(s.value for s in LOCKED_STATUSES),
        "reason_min_length": {a.value: n for a, n in REASON_MIN_LENGTH.items()},
    }
