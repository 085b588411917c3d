"""Exception hierarchy for centralsync.

Lifecycle actions raise these; the caller decides whether and when to retry.
"""

from __future__ import annotations


class CentralSyncError(Exception):
    """Base class for all centralsync errors."""


class WrongKindError(CentralSyncError, TypeError):
    """A managed resource of an unexpected kind was passed in."""

    def __init__(self, expected: type, actual: object) -> None:
        self.expected = expected
        self.actual = type(actual)
        super().__init__(f"managed resource is not a {expected.__name__}: got {self.actual.__name__}")


class AlreadyBoundError(CentralSyncError):
    """The resource is already bound to an external identifier."""

    def __init__(self, name: str, external_name: str) -> None:
        self.name = name
        self.external_name = external_name
        super().__init__(f"'{name}' is already bound to external resource '{external_name}'")


class ReconcileCancelled(CentralSyncError):
    """The invocation was cancelled by the caller."""


class AuthError(CentralSyncError):
    """A remote client could not be built from the supplied credentials."""


class FleetManagerError(CentralSyncError):
    """The fleet manager rejected a request or could not be reached."""

    def __init__(self, status_code: int | None, reason: str) -> None:
        self.status_code = status_code
        self.reason = reason
        if status_code is None:
            super().__init__(reason)
        else:
            super().__init__(f"{reason} (HTTP {status_code})")


class NotFoundError(FleetManagerError):
    """The requested remote entity does not exist."""


class ExternalError(CentralSyncError):
    """A lifecycle action failed against the remote API."""

    def __init__(self, operation: str, cause: Exception) -> None:
        self.operation = operation
        self.cause = cause
        super().__init__(f"{operation} failed: {cause}")
