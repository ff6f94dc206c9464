"""Domain exceptions."""


class RBACAdminError(Exception):
    """Base exception for rbacadmin."""

    pass


class Unauthenticated(RBACAdminError):
    """No authenticated session for the current request."""

    pass


class InsufficientPermission(RBACAdminError):
    """Authenticated user lacks one or more required permissions."""

    def __init__(self, missing: list[str] | tuple[str, ...] = ()) -> None:
        self.missing = tuple(missing)
        detail = ", ".join(self.missing) if self.missing else "required permission"
        super().__init__(f"Missing permission: {detail}")


class InvalidRequirement(RBACAdminError, TypeError):
    """Required-permission list is not a collection of strings."""

    pass


class NotFound(RBACAdminError):
    """Requested resource was not found."""

    def __init__(self, resource: str, identifier: object = None) -> None:
        self.resource = resource
        self.identifier = identifier
        if identifier is None:
            super().__init__(f"{resource} not found")
        else:
            super().__init__(f"{resource} {identifier} not found")


class ValidationError(RBACAdminError):
    """Validation failed for input data."""

    def __init__(self, message: str, errors: dict[str, list[str]] | None = None) -> None:
        self.errors = errors or {}
        super().__init__(message)


class DirectoryError(RBACAdminError):
    """Directory API call failed."""

    pass


class SaveFailed(RBACAdminError):
    """Submitting pending assignment changes failed; changes are kept."""

    pass


class SaveInProgress(RBACAdminError):
    """A save is already running for this edit session."""

    pass


class StaleSnapshot(RBACAdminError):
    """Directory snapshot changed while an edit session was open."""

    pass


class GateAlreadyResolved(RBACAdminError):
    """Access gate was asked to transition a second time."""

    pass
