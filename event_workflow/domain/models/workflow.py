"""Workflow actions: the one canonical set of requested moves."""

from enum import Enum
from typing import Union

from event_workflow.domain.exceptions import DomainValidationError


class WorkflowAction(str, Enum):
    APPROVE_INTERNAL = "approve_internal"
    REQUEST_PUBLIC = "request_public"
    APPROVE_PUBLIC = "approve_public"
    REQUEST_CHANGES = "request_changes"
    REJECT = "reject"


def normalize_action(action: Union[str, WorkflowAction]) -> WorkflowAction:
    if isinstance(action, WorkflowAction):
        return action
    try:
        return WorkflowAction(str(action or "").strip().lower())
    except ValueError:
        raise DomainValidationError(
            f"Unknown workflow action: {action!r}", {"action": str(action)}
        ) from None
