"""Managed resource base model and kind registration."""

from __future__ import annotations

import logging
from typing import Any, TypeVar

from pydantic import BaseModel

from .errors import AlreadyBoundError, WrongKindError
from .status import Condition

logger = logging.getLogger(__name__)

# -- Kind Registry --

_kind_registry: dict[str, type[Managed]] = {}
_connector_registry: dict[type, type] = {}


def kind(name: str):
    """Register a Managed class as an HCL block decoder."""

    def decorator(cls):
        _kind_registry[name] = cls
        return cls

    return decorator


def connects(managed_type: type):
    """Register a connector class for a Managed type."""

    def decorator(cls):
        _connector_registry[managed_type] = cls
        return cls

    return decorator


def connector_for(mg: Managed) -> type:
    """Return the connector class registered for a managed resource."""
    try:
        return _connector_registry[type(mg)]
    except KeyError:
        raise ValueError(f"No connector registered for {type(mg).__name__}") from None


M = TypeVar("M")


def expect_kind(mg: object, managed_type: type[M]) -> M:
    """Narrow a generic managed resource to the expected concrete kind."""
    if not isinstance(mg, managed_type):
        raise WrongKindError(managed_type, mg)
    return mg


# -- Managed Base --


class Managed(BaseModel):
    """Local declarative record of a remote resource."""

    name: str
    provider_config: str = "default"
    condition: Condition | None = None
    external_name: str = ""
    deletion_requested: bool = False

    @classmethod
    def from_block(cls, name: str, attrs: dict[str, Any]) -> Managed:
        """Decode an HCL block body into a resource."""
        return cls(name=name, **attrs)

    @property
    def bound(self) -> bool:
        return bool(self.external_name)

    def bind_external_name(self, external_name: str) -> None:
        """Bind the remote-assigned identifier; a binding is set only once."""
        if self.external_name and self.external_name != external_name:
            raise AlreadyBoundError(self.name, self.external_name)
        logger.debug("Binding '%s' to external resource '%s'", self.name, external_name)
        self.external_name = external_name

    def release_external_name(self) -> None:
        """Forget the binding once the remote resource is gone."""
        if self.external_name:
            logger.debug("Releasing '%s' from external resource '%s'", self.name, self.external_name)
        self.external_name = ""

    def set_condition(self, condition: Condition) -> None:
        if condition != self.condition:
            logger.debug("'%s' condition %s -> %s", self.name, self.condition, condition)
        self.condition = condition
