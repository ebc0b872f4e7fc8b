"""Security: roles, capability sets, authorization errors."""

from event_workflow.security.exceptions import SecurityError, UnauthorizedError
from event_workflow.security.rbac import RBACService, Role, normalize_role

__all__ = [
    "RBACService",
    "Role",
    "SecurityError",
    "UnauthorizedError",
    "normalize_role",
]
