"""CentralInstance managed resource and its provider-side fields."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .resource import Managed, kind


class CentralInstanceParameters(BaseModel):
    """Configurable fields of a Central instance."""

    name: str
    cloud_provider: str
    region: str
    multi_az: bool = True
    cloud_account_id: str = ""


class CentralInstanceObservation(BaseModel):
    """Observable fields of a Central instance, as reported by the fleet manager."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = ""
    kind: str = ""
    href: str = ""
    name: str = ""
    cloud_provider: str = ""
    region: str = ""
    multi_az: bool | None = None
    status: str = ""
    owner: str = ""
    instance_type: str = ""
    version: str = ""
    failed_reason: str = ""
    central_ui_url: str = Field(default="", alias="centralUIURL")
    central_data_url: str = Field(default="", alias="centralDataURL")
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {k: v for k, v in data.items() if v is not None}
        return data


@kind("central_instance")
class CentralInstance(Managed):
    """A hosted RHACS Central instance managed through the fleet manager."""

    for_provider: CentralInstanceParameters
    at_provider: CentralInstanceObservation = Field(default_factory=CentralInstanceObservation)

    @classmethod
    def from_block(cls, name: str, attrs: dict[str, Any]) -> CentralInstance:
        """Split an HCL block into resource fields and provider parameters.

        Parameter fields may sit directly in the block; ``name`` defaults to
        the block label.
        """
        attrs = dict(attrs)
        resource_fields = {
            key: attrs.pop(key)
            for key in ("provider_config", "external_name", "deletion_requested")
            if key in attrs
        }
        attrs.setdefault("name", name)
        return cls(
            name=name,
            for_provider=CentralInstanceParameters(**attrs),
            **resource_fields,
        )
