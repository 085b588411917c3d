"""Lifecycle actions for CentralInstance resources.

An external client observes, then either creates, updates or deletes the
fleet manager central so that it reflects the managed resource's desired
state. Each action issues at most one remote call and never retries.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass

from .central import CentralInstance, CentralInstanceObservation
from .client import CentralRequestPayload, FleetManagerClient, connect
from .config import ProviderConfig
from .context import Context
from .drift import is_up_to_date
from .errors import AlreadyBoundError, ExternalError, FleetManagerError, NotFoundError
from .resource import connects, expect_kind
from .status import KNOWN_STATUSES, Condition, is_deleting, map_status

logger = logging.getLogger(__name__)

_IN_FLIGHT = (Condition.CREATING, Condition.DELETING)


@dataclass
class ExternalObservation:
    resource_exists: bool = False
    resource_up_to_date: bool = False
    diff: str = ""


@dataclass
class ExternalCreation:
    external_name: str = ""


@dataclass
class ExternalUpdate:
    deleted: bool = False


class CentralInstanceExternal:
    """Drives one CentralInstance against the fleet manager."""

    def __init__(self, client: FleetManagerClient) -> None:
        self.client = client

    def close(self) -> None:
        self.client.close()

    def __enter__(self) -> CentralInstanceExternal:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def observe(self, ctx: Context[CentralInstance]) -> ExternalObservation:
        cr = expect_kind(ctx.target, CentralInstance)

        if not cr.bound:
            logger.debug("'%s' has no external name; treating as absent", cr.name)
            return ExternalObservation()

        try:
            central = self.client.get_central(ctx, cr.external_name)
        except NotFoundError:
            logger.info("External resource '%s' of '%s' is gone", cr.external_name, cr.name)
            if ctx.dry_run:
                logger.info("[DRY RUN] Would release '%s' from '%s'", cr.name, cr.external_name)
                return ExternalObservation()
            cr.release_external_name()
            cr.at_provider = CentralInstanceObservation()
            return ExternalObservation()
        except FleetManagerError as exc:
            raise ExternalError("get", exc) from exc

        if central.status not in KNOWN_STATUSES:
            logger.warning("Unknown status '%s' reported for '%s'", central.status, cr.name)
        cr.at_provider = central
        cr.set_condition(map_status(central.status))

        up_to_date, diff = is_up_to_date(cr.for_provider, central)
        if not up_to_date:
            logger.debug("'%s' differs from external resource:\n%s", cr.name, diff)

        return ExternalObservation(
            resource_exists=True,
            resource_up_to_date=up_to_date,
            diff=diff,
        )

    def create(self, ctx: Context[CentralInstance]) -> ExternalCreation:
        cr = expect_kind(ctx.target, CentralInstance)
        if cr.bound:
            raise AlreadyBoundError(cr.name, cr.external_name)

        # Marked before the call so an interrupted create stays visible.
        cr.set_condition(Condition.CREATING)

        params = cr.for_provider
        payload = CentralRequestPayload(
            name=params.name,
            cloud_provider=params.cloud_provider,
            region=params.region,
            multi_az=params.multi_az,
            cloud_account_id=params.cloud_account_id,
        )
        try:
            central = self.client.create_central(ctx, payload)
        except FleetManagerError as exc:
            raise ExternalError("create", exc) from exc

        if not central.id:
            raise ExternalError("create", FleetManagerError(None, "response carried no central id"))

        cr.bind_external_name(central.id)
        logger.info("Created central '%s' for '%s'", central.id, cr.name)
        return ExternalCreation(external_name=central.id)

    def update(self, ctx: Context[CentralInstance]) -> ExternalUpdate:
        """Replace the central; its defining fields cannot change in place."""
        cr = expect_kind(ctx.target, CentralInstance)

        if cr.condition in _IN_FLIGHT:
            logger.debug("Skipping update of '%s'; %s", cr.name, cr.condition)
            return ExternalUpdate()

        logger.info("Replacing central '%s' of '%s'", cr.external_name, cr.name)
        try:
            self.delete(ctx)
        except ExternalError as exc:
            raise ExternalError("update", exc) from exc
        return ExternalUpdate(deleted=True)

    def delete(self, ctx: Context[CentralInstance]) -> None:
        cr = expect_kind(ctx.target, CentralInstance)
        cr.set_condition(Condition.DELETING)

        if is_deleting(cr.at_provider.status):
            logger.debug("Skipping delete of '%s'; already %s", cr.name, cr.at_provider.status)
            return
        if not cr.bound:
            logger.debug("Skipping delete of '%s'; no external name", cr.name)
            return

        try:
            self.client.delete_central(ctx, cr.external_name)
        except NotFoundError:
            logger.debug("Central '%s' of '%s' already gone", cr.external_name, cr.name)
            return
        except FleetManagerError as exc:
            raise ExternalError("delete", exc) from exc
        logger.info("Requested deletion of central '%s' for '%s'", cr.external_name, cr.name)


@connects(CentralInstance)
class CentralInstanceConnector:
    """Produces a CentralInstanceExternal from a resource's provider config."""

    def __init__(
        self,
        provider_configs: Mapping[str, ProviderConfig],
        client_factory: Callable[..., FleetManagerClient] = connect,
    ) -> None:
        self.provider_configs = provider_configs
        self.client_factory = client_factory

    def connect(self, ctx: Context[CentralInstance]) -> CentralInstanceExternal:
        cr = expect_kind(ctx.target, CentralInstance)

        pc = self.provider_configs.get(cr.provider_config)
        if pc is None:
            raise ValueError(f"'{cr.name}' references unknown provider config: '{cr.provider_config}'")

        client = self.client_factory(pc.extract_credentials(), pc.endpoint, timeout=pc.timeout)
        return CentralInstanceExternal(client)
