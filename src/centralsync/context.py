"""Runtime execution context for a single reconciliation."""

from __future__ import annotations

import threading
from typing import Generic, TypeVar

from .errors import ReconcileCancelled


T = TypeVar("T")


class Context(Generic[T]):
    """Runtime state passed through one observe/act cycle."""

    def __init__(
        self,
        target: T,
        *,
        dry_run: bool = False,
        cancel: threading.Event | None = None,
    ) -> None:
        self.target = target
        self.dry_run = dry_run
        self.cancel = cancel if cancel is not None else threading.Event()

    @property
    def cancelled(self) -> bool:
        return self.cancel.is_set()

    def raise_if_cancelled(self) -> None:
        """Raise ReconcileCancelled once the cancel signal is set."""
        if self.cancel.is_set():
            raise ReconcileCancelled("reconciliation cancelled")
