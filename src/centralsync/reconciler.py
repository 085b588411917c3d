"""Reconciler: one observe-then-act cycle for a managed resource."""

from __future__ import annotations

import logging
from collections.abc import Callable
from enum import StrEnum
from typing import Any, Protocol

from .context import Context
from .resource import Managed

logger = logging.getLogger(__name__)


class Action(StrEnum):
    """What a reconciliation did (or, in a dry run, would do)."""

    NONE = "none"
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"


class Connector(Protocol):
    def connect(self, ctx: Context[Any]) -> Any: ...


class Reconciler:
    """Converges one managed resource toward its desired state."""

    def __init__(self, connector: Connector) -> None:
        self.connector = connector

    def reconcile(self, ctx: Context[Managed]) -> Action:
        """Observe the external resource, then create, update or delete it."""
        mg = ctx.target
        with self.connector.connect(ctx) as external:
            observation = external.observe(ctx)

            if mg.deletion_requested:
                if not observation.resource_exists:
                    logger.debug("Skipping removal of '%s'; not present", mg.name)
                    return Action.NONE
                return self._act(ctx, Action.DELETE, external.delete)

            if not observation.resource_exists:
                return self._act(ctx, Action.CREATE, external.create)

            if not observation.resource_up_to_date:
                return self._act(ctx, Action.UPDATE, external.update)

            logger.debug("Skipping '%s'; up to date", mg.name)
            return Action.NONE

    def _act(self, ctx: Context[Managed], action: Action, fn: Callable[[Context[Any]], object]) -> Action:
        name = ctx.target.name
        if ctx.dry_run:
            logger.info("[DRY RUN] Would %s '%s'", action, name)
        else:
            logger.info("Applying %s to '%s'", action, name)
            fn(ctx)
        return action
