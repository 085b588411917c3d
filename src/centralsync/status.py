"""Fleet manager status vocabulary and lifecycle conditions."""

from __future__ import annotations

from enum import StrEnum

# Central request states reported by the fleet manager.
STATUS_ACCEPTED = "accepted"
STATUS_PREPARING = "preparing"
STATUS_PROVISIONING = "provisioning"
STATUS_READY = "ready"
STATUS_FAILED = "failed"
STATUS_DEPROVISION = "deprovision"
STATUS_DELETING = "deleting"

KNOWN_STATUSES = frozenset(
    {
        STATUS_ACCEPTED,
        STATUS_PREPARING,
        STATUS_PROVISIONING,
        STATUS_READY,
        STATUS_FAILED,
        STATUS_DEPROVISION,
        STATUS_DELETING,
    }
)

DELETION_STATUSES = frozenset({STATUS_DEPROVISION, STATUS_DELETING})


class Condition(StrEnum):
    """Lifecycle condition of a managed resource."""

    CREATING = "Creating"
    AVAILABLE = "Available"
    DELETING = "Deleting"
    UNAVAILABLE = "Unavailable"


_STATUS_CONDITIONS: dict[str, Condition] = {
    STATUS_ACCEPTED: Condition.CREATING,
    STATUS_PREPARING: Condition.CREATING,
    STATUS_PROVISIONING: Condition.CREATING,
    STATUS_READY: Condition.AVAILABLE,
    STATUS_DEPROVISION: Condition.DELETING,
    STATUS_DELETING: Condition.DELETING,
}


def map_status(status: str) -> Condition:
    """Map a remote status token to a lifecycle condition.

    Anything outside the creating/ready/deleting tokens, including
    ``failed`` and tokens the fleet manager may add later, is Unavailable.
    """
    return _STATUS_CONDITIONS.get(status, Condition.UNAVAILABLE)


def is_deleting(status: str) -> bool:
    """Remote deletion is already under way."""
    return status in DELETION_STATUSES
