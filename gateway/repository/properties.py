import logging
from dataclasses import dataclass
from typing import Any, List, Optional, Tuple
from urllib.parse import urlencode

import httpx

from gateway.errors import NotFoundError, TransportFailure, UpstreamFailure

LOG = logging.getLogger("gateway")

QueryItems = List[Tuple[str, str]]


@dataclass
class Relayed:
    """Upstream answer to hand back to the caller as-is. `body` is None for 204."""
    status_code: int
    body: Any = None


async def _send(
    client: httpx.AsyncClient,
    method: str,
    path: str,
    *,
    params: Optional[QueryItems] = None,
    payload: Any = None,
    single: bool = False,
) -> Relayed:
    """
    One outbound call. Raises:
      - NotFoundError    : 404 on a single-record path (single=True)
      - UpstreamFailure  : any other non-2xx
      - TransportFailure : unusable URL, network error, or a body that is not JSON
    """
    # httpx regroups duplicate keys passed as `params=`, so the query is encoded here
    if params:
        path = f"{path}?{urlencode(params)}"

    try:
        request = client.build_request(
            method,
            path,
            json=payload if method in ("POST", "PUT", "PATCH") else None,
        )
        LOG.debug("Forwarding %s %s", method, request.url)
        resp = await client.send(request)
    except (httpx.HTTPError, httpx.InvalidURL, httpx.StreamError) as e:
        raise TransportFailure(f"{type(e).__name__}: {e}") from e

    if resp.is_success:
        if resp.status_code == 204:
            return Relayed(status_code=204)
        try:
            return Relayed(status_code=resp.status_code, body=resp.json())
        except ValueError as e:
            raise TransportFailure(f"Invalid JSON from backend: {e}") from e

    if single and resp.status_code == 404:
        raise NotFoundError("Property")
    raise UpstreamFailure(resp.status_code, resp.text)


# ---------- Collection ----------

async def list_properties(client: httpx.AsyncClient, params: QueryItems) -> Relayed:
    """GET /properties with the inbound query forwarded verbatim (order and duplicates kept)."""
    return await _send(client, "GET", "/properties", params=params)


async def search_properties(client: httpx.AsyncClient, params: QueryItems) -> Relayed:
    # the backend has no separate search resource; search is a filtered listing
    return await _send(client, "GET", "/properties", params=params)


async def create_property(client: httpx.AsyncClient, payload: Any) -> Relayed:
    return await _send(client, "POST", "/properties", payload=payload)


async def get_stats(client: httpx.AsyncClient) -> Relayed:
    return await _send(client, "GET", "/properties/stats")


# ---------- Single record ----------

async def get_property(client: httpx.AsyncClient, property_id: str) -> Relayed:
    return await _send(client, "GET", f"/properties/{property_id}", single=True)


async def replace_property(client: httpx.AsyncClient, property_id: str, payload: Any) -> Relayed:
    return await _send(client, "PUT", f"/properties/{property_id}", payload=payload, single=True)


async def patch_property(client: httpx.AsyncClient, property_id: str, payload: Any) -> Relayed:
    return await _send(client, "PATCH", f"/properties/{property_id}", payload=payload, single=True)


async def delete_property(client: httpx.AsyncClient, property_id: str) -> Relayed:
    return await _send(client, "DELETE", f"/properties/{property_id}", single=True)
