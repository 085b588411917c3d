"""Fleet manager public API client."""

from __future__ import annotations

import concurrent.futures
import logging
from typing import Any
from urllib.parse import quote

import httpx
from pydantic import BaseModel

from .central import CentralInstanceObservation
from .context import Context
from .errors import AuthError, FleetManagerError, NotFoundError, ReconcileCancelled

logger = logging.getLogger(__name__)

CENTRALS_PATH = "/api/rhacs/v1/centrals"
USER_AGENT = "centralsync"
DEFAULT_TIMEOUT = 30.0

# How often a pending request checks the cancel signal, in seconds.
CANCEL_POLL_INTERVAL = 0.05


class CentralRequestPayload(BaseModel):
    """Body of a create-central request."""

    name: str
    cloud_provider: str
    region: str
    multi_az: bool
    cloud_account_id: str = ""

    def to_json(self) -> dict[str, Any]:
        data = self.model_dump()
        if not self.cloud_account_id:
            del data["cloud_account_id"]
        return data


def _central_path(central_id: str) -> str:
    return f"{CENTRALS_PATH}/{quote(central_id, safe='')}"


def _reason(resp: httpx.Response) -> str:
    """Extract the fleet manager error reason from a response."""
    try:
        body = resp.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and body.get("reason"):
        return str(body["reason"])
    return resp.reason_phrase or resp.text


def _observation(resp: httpx.Response) -> CentralInstanceObservation:
    """Decode a central record; malformed bodies surface as FleetManagerError."""
    try:
        return CentralInstanceObservation.model_validate(resp.json())
    except ValueError as exc:
        raise FleetManagerError(resp.status_code, f"invalid response body: {exc}") from exc


class FleetManagerClient:
    """Thin synchronous client for the centrals endpoints of the fleet manager.

    Requests run on a worker thread so the caller can abandon one as soon as
    the context's cancel signal is set. A cancelled client is closed and
    must not be reused.
    """

    def __init__(
        self,
        endpoint: str,
        token: str,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.endpoint = endpoint
        self._http = httpx.Client(
            base_url=endpoint,
            headers={
                "Authorization": f"Bearer {token}",
                "User-Agent": USER_AGENT,
                "Accept": "application/json",
            },
            timeout=timeout,
            transport=transport,
        )
        self._pool = concurrent.futures.ThreadPoolExecutor(max_workers=1, thread_name_prefix="fleetmanager")
        self._closed = False

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._pool.shutdown(wait=False, cancel_futures=True)
        self._http.close()

    def __enter__(self) -> FleetManagerClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _send(self, ctx: Context, method: str, path: str, **kwargs: Any) -> httpx.Response:
        """Issue one request, aborting it if ctx is cancelled before it completes."""
        future = self._pool.submit(self._http.request, method, path, **kwargs)
        while True:
            try:
                return future.result(timeout=CANCEL_POLL_INTERVAL)
            except concurrent.futures.TimeoutError:
                if ctx.cancelled:
                    logger.info("Cancelling %s %s", method, path)
                    future.cancel()
                    self.close()
                    raise ReconcileCancelled(f"{method} {path} cancelled") from None

    def _request(
        self,
        ctx: Context,
        method: str,
        path: str,
        *,
        params: dict[str, str] | None = None,
        json: dict[str, Any] | None = None,
    ) -> httpx.Response:
        ctx.raise_if_cancelled()
        logger.debug("%s %s", method, path)
        try:
            resp = self._send(ctx, method, path, params=params, json=json)
        except httpx.HTTPError as exc:
            raise FleetManagerError(None, f"{method} {path}: {exc}") from exc

        if resp.status_code == httpx.codes.NOT_FOUND:
            raise NotFoundError(resp.status_code, _reason(resp))
        if resp.is_error:
            raise FleetManagerError(resp.status_code, _reason(resp))
        return resp

    def get_central(self, ctx: Context, central_id: str) -> CentralInstanceObservation:
        """Fetch a central by its fleet manager id."""
        return _observation(self._request(ctx, "GET", _central_path(central_id)))

    def create_central(
        self,
        ctx: Context,
        payload: CentralRequestPayload,
        *,
        async_: bool = True,
    ) -> CentralInstanceObservation:
        """Request a new central; the response carries the assigned id."""
        resp = self._request(
            ctx,
            "POST",
            CENTRALS_PATH,
            params={"async": str(async_).lower()},
            json=payload.to_json(),
        )
        return _observation(resp)

    def delete_central(self, ctx: Context, central_id: str, *, async_: bool = True) -> None:
        """Request deletion of a central."""
        self._request(
            ctx,
            "DELETE",
            _central_path(central_id),
            params={"async": str(async_).lower()},
        )


def connect(credentials: str, endpoint: str, **kwargs: Any) -> FleetManagerClient:
    """Build a fleet manager client from a credential blob and endpoint."""
    token = credentials.strip()
    if not token:
        raise AuthError("cannot create fleet manager client: empty credentials")
    if not endpoint:
        raise AuthError("cannot create fleet manager client: no endpoint configured")
    logger.debug("Connecting to fleet manager at %s", endpoint)
    return FleetManagerClient(endpoint, token, **kwargs)
