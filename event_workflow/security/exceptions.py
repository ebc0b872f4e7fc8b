"""Security-layer exceptions. Typed, no HTTP."""

from event_workflow.domain.exceptions import ErrorKind, WorkflowError


class SecurityError(WorkflowError):
    """Base for all security-layer errors."""

    kind = ErrorKind.UNAUTHORIZED


class UnauthorizedError(SecurityError):
    """Raised when a role lacks the capability for a workflow action."""

    def __init__(self, role: str, action: str) -> None:
        self.role = role
        self.action = action
        super().__init__(
            f"Role {role} does not have permission for action '{action}'",
            {"role": role, "action": action},
        )
