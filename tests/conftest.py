"""Shared fixtures: an in-memory fleet manager and a sample resource."""

from __future__ import annotations

import pytest

from centralsync.central import CentralInstance, CentralInstanceObservation, CentralInstanceParameters
from centralsync.client import CentralRequestPayload
from centralsync.context import Context
from centralsync.errors import NotFoundError


class FakeClient:
    """Stands in for FleetManagerClient; records every remote call."""

    def __init__(self) -> None:
        self.centrals: dict[str, CentralInstanceObservation] = {}
        self.calls: list[tuple[str, str]] = []
        self.fail_with: Exception | None = None
        self.closed = False
        self._count = 0

    def _call(self, ctx: Context, op: str, arg: str) -> None:
        ctx.raise_if_cancelled()
        self.calls.append((op, arg))
        if self.fail_with is not None:
            raise self.fail_with

    def get_central(self, ctx: Context, central_id: str) -> CentralInstanceObservation:
        self._call(ctx, "get", central_id)
        if central_id not in self.centrals:
            raise NotFoundError(404, "Central not found")
        return self.centrals[central_id]

    def create_central(
        self,
        ctx: Context,
        payload: CentralRequestPayload,
        *,
        async_: bool = True,
    ) -> CentralInstanceObservation:
        self._call(ctx, "create", payload.name)
        self._count += 1
        central = CentralInstanceObservation(
            id=f"central-{self._count}",
            status="accepted",
            **payload.to_json(),
        )
        self.centrals[central.id] = central
        return central

    def delete_central(self, ctx: Context, central_id: str, *, async_: bool = True) -> None:
        self._call(ctx, "delete", central_id)
        if central_id not in self.centrals:
            raise NotFoundError(404, "Central not found")
        self.centrals[central_id] = self.centrals[central_id].model_copy(update={"status": "deprovision"})

    def remote_ops(self, op: str) -> list[str]:
        return [arg for name, arg in self.calls if name == op]

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def fake_client() -> FakeClient:
    return FakeClient()


@pytest.fixture
def central() -> CentralInstance:
    return CentralInstance(
        name="test-central",
        for_provider=CentralInstanceParameters(
            name="test-central",
            cloud_provider="aws",
            region="us-east-1",
            multi_az=True,
        ),
    )


def remote_central(central_id: str = "abc123", **fields) -> CentralInstanceObservation:
    data = {
        "id": central_id,
        "name": "test-central",
        "cloud_provider": "aws",
        "region": "us-east-1",
        "multi_az": True,
        "status": "ready",
    }
    data.update(fields)
    return CentralInstanceObservation(**data)


@pytest.fixture
def make_remote():
    return remote_central
