"""Workspace — a typed collection of managed resources and provider configs."""

from __future__ import annotations

import logging
import os
import re
from collections.abc import Iterable, Iterator, Mapping
from pathlib import Path
from typing import Any

from .config import ProviderConfig
from .context import Context
from .reconciler import Action, Reconciler
from .resource import Managed, _kind_registry, connector_for

logger = logging.getLogger(__name__)

_ENV_REF = re.compile(r"\$\{env\.(\w+)\}")


def _env_value(match: re.Match) -> str:
    name = match.group(1)
    value = os.environ.get(name)
    if value is None:
        logger.warning("Environment variable '%s' is not set", name)
        return ""
    return value


def _with_env(attrs: dict[str, Any]) -> dict[str, Any]:
    """Substitute ${env.NAME} references in string attributes.

    Other ${...} forms pass through untouched.
    """
    return {
        key: _ENV_REF.sub(_env_value, value) if isinstance(value, str) else value
        for key, value in attrs.items()
    }


def _decode_resource(kind_name: str, name: str, attrs: dict[str, Any]) -> Managed:
    """Decode a resource block into a Managed instance using the registry."""
    if kind_name not in _kind_registry:
        raise ValueError(f"Unknown resource kind: '{kind_name}'")
    managed_cls = _kind_registry[kind_name]
    logger.debug("Decoding %s '%s' -> %s", kind_name, name, managed_cls.__name__)
    return managed_cls.from_block(name, _with_env(attrs))


class Workspace(Mapping[str, Managed]):
    """Managed resources and provider configs accumulated from parsed data."""

    def __init__(self, context: dict[str, Any] | None = None) -> None:
        self._context = context
        self._resources: dict[str, Managed] = {}
        self._provider_configs: dict[str, ProviderConfig] = {}

    @property
    def provider_configs(self) -> dict[str, ProviderConfig]:
        """Return the provider config registry."""
        return self._provider_configs

    def add(self, item: Managed | ProviderConfig) -> None:
        """Register a resource or provider config.

        Raises ValueError if the name is already taken.
        """
        if isinstance(item, ProviderConfig):
            if item.name in self._provider_configs:
                raise ValueError(f"Duplicate provider config: '{item.name}'")
            self._provider_configs[item.name] = item
        else:
            if item.name in self._resources:
                raise ValueError(f"Duplicate resource: '{item.name}'")
            self._resources[item.name] = item

    def load(self, data: dict[str, Any]) -> None:
        """Extract provider config and resource blocks from a parsed data dict.

        HCL2 structure for labelled blocks:
            {"central_instance": [{"my-central": {"region": "us-east-1"}}, ...], ...}
        """
        for pc_block in data.get("provider_config", []):
            for pc_name, pc_data in pc_block.items():
                logger.debug("Found provider config '%s'", pc_name)
                self.add(ProviderConfig(name=pc_name, **_with_env(dict(pc_data))))

        for kind_name in _kind_registry:
            for block in data.get(kind_name, []):
                for name, attrs in block.items():
                    logger.debug("Found %s '%s'", kind_name, name)
                    self.add(_decode_resource(kind_name, name, dict(attrs)))

    def scan(self, path: str | Path, *, recurse: bool = True) -> None:
        """Load every .hcl file under path, in sorted order."""
        from . import hcl

        root = Path(path)
        pattern = "**/*.hcl" if recurse else "*.hcl"
        files = sorted(root.glob(pattern))
        logger.debug("Scanning %s: %d file(s)", root, len(files))
        for file in files:
            self.load(hcl.load(file, context=self._context))

    def __getitem__(self, name: str) -> Managed:
        return self._resources[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._resources)

    def __len__(self) -> int:
        return len(self._resources)

    def filter(self, names: Iterable[str]) -> list[Managed]:
        """Return resources matching the given names, preserving input order."""
        return [r for n in names if (r := self._resources.get(n)) is not None]

    def reconcile(self, names: Iterable[str] | None = None, **kwargs: Any) -> dict[str, Action]:
        """Reconcile resources once each. kwargs are passed to Context."""
        resources = self.filter(names) if names is not None else list(self._resources.values())
        results: dict[str, Action] = {}
        for mg in resources:
            connector = connector_for(mg)(self._provider_configs)
            logger.info("Reconciling '%s'", mg.name)
            results[mg.name] = Reconciler(connector).reconcile(Context(target=mg, **kwargs))
        return results

    def __repr__(self) -> str:
        return f"Workspace(resources={len(self._resources)}, provider_configs={len(self._provider_configs)})"
