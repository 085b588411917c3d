"""Drift detection between desired parameters and observed state."""

from __future__ import annotations

from typing import Any

from .central import CentralInstanceObservation, CentralInstanceParameters

# Fields the fleet manager accepts at creation time.
COMPARED_FIELDS = ("name", "cloud_provider", "region", "multi_az")


def _is_empty(value: Any) -> bool:
    return value is None or value == ""


def diff_fields(
    desired: CentralInstanceParameters,
    observed: CentralInstanceObservation,
) -> list[tuple[str, Any, Any]]:
    """Return (field, desired, observed) for every differing field."""
    changes = []
    for field in COMPARED_FIELDS:
        want = getattr(desired, field)
        got = getattr(observed, field)
        if _is_empty(want) or _is_empty(got):
            continue
        if want != got:
            changes.append((field, want, got))
    return changes


def is_up_to_date(
    desired: CentralInstanceParameters,
    observed: CentralInstanceObservation,
) -> tuple[bool, str]:
    """Compare desired against observed; returns (up_to_date, diff).

    The diff holds one ``field: desired != observed`` line per mismatch and
    is empty when up to date. The remote status is never compared.
    """
    changes = diff_fields(desired, observed)
    if not changes:
        return True, ""
    lines = [f"{field}: {want!r} != {got!r}" for field, want, got in changes]
    return False, "\n".join(lines)
