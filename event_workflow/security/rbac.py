"""Role-based capability sets for the approval workflow. No HTTP."""

import re
from enum import Enum
from typing import Dict, FrozenSet, Union

from event_workflow.domain.models.workflow import WorkflowAction
from event_workflow.security.exceptions import UnauthorizedError


class Role(str, Enum):
    PLATFORM_ADMIN = "platform_admin"
    ENTITY_ADMIN = "entity_admin"
    ENTITY_STAFF = "entity_staff"
    ORGANIZER_ADMIN = "organizer_admin"


# Capability matrix:
# Role             approve_internal  request_public  approve_public  request_changes  reject
# PLATFORM_ADMIN   ✓                 ✓               ✓               ✓                ✓
# ENTITY_ADMIN     ✓                 ✓               ✓               ✓                ✓
# ENTITY_STAFF     ✓                 ✓               ✓               ✓                ✓
# ORGANIZER_ADMIN  ✗                 ✗               ✗               ✗                ✗

_ALL_ACTIONS: FrozenSet[WorkflowAction] = frozenset(WorkflowAction)

_ROLE_CAPABILITIES: Dict[Role, FrozenSet[WorkflowAction]] = {
    Role.PLATFORM_ADMIN: _ALL_ACTIONS,
    Role.ENTITY_ADMIN: _ALL_ACTIONS,
    Role.ENTITY_STAFF: _ALL_ACTIONS,
    Role.ORGANIZER_ADMIN: frozenset(),
}

# Roles that see the full dashboard; everyone else only sees published events.
_DASHBOARD_ROLES: FrozenSet[Role] = frozenset(
    {Role.PLATFORM_ADMIN, Role.ENTITY_ADMIN, Role.ENTITY_STAFF}
)

ROLE_ALIASES: Dict[str, Role] = {
    "PLATFORM_ADMIN": Role.PLATFORM_ADMIN,
    "SUPERUSER": Role.PLATFORM_ADMIN,
    "ADMIN": Role.PLATFORM_ADMIN,
    "ENTITY_ADMIN": Role.ENTITY_ADMIN,
    "ENTITY_STAFF": Role.ENTITY_STAFF,
    "STAFF": Role.ENTITY_STAFF,
    "ORGANIZER_ADMIN": Role.ORGANIZER_ADMIN,
    "ORGANIZER": Role.ORGANIZER_ADMIN,
}


def normalize_role(role: Union[str, Role]) -> Role:
    """
    Canonicalize role strings so formatting differences do not break permission logic.
    "Entity Admin", "entity-admin" and "ENTITY_ADMIN" all map to Role.ENTITY_ADMIN.
    Raises UnauthorizedError for unknown roles.
    """
    if isinstance(role, Role):
        return role
    raw = re.sub(r"[\s\-]+", "_", str(role or "").strip().upper())
    raw = re.sub(r"_+", "_", raw)
    try:
        return ROLE_ALIASES[raw]
    except KeyError:
        raise UnauthorizedError(str(role), "any") from None


class RBACService:
    """Check capability for role and action. Raise UnauthorizedError if missing."""

    def capabilities_for(self, role: Union[str, Role]) -> FrozenSet[WorkflowAction]:
        return _ROLE_CAPABILITIES.get(normalize_role(role), frozenset())

    def can(self, role: Union[str, Role], action: WorkflowAction) -> bool:
        try:
            return action in self.capabilities_for(role)
        except UnauthorizedError:
            return False

    def check_permission(self, role: Union[str, Role], action: WorkflowAction) -> None:
        """Raises UnauthorizedError if role does not have the capability for action."""
        normalized = normalize_role(role)
        if action not in _ROLE_CAPABILITIES.get(normalized, frozenset()):
            raise UnauthorizedError(normalized.value, WorkflowAction(action).value)

    def is_dashboard_role(self, role: Union[str, Role]) -> bool:
        try:
            return normalize_role(role) in _DASHBOARD_ROLES
        except UnauthorizedError:
            return False
