import os

import httpx

GATEWAY_URL = os.getenv("PORTAL_GATEWAY_URL", "http://127.0.0.1:3000")


def make_client(base_url: str = GATEWAY_URL, **kwargs) -> httpx.AsyncClient:
    """Client the hooks use to reach the gateway's /api/properties endpoints."""
    kwargs.setdefault("timeout", None)
    return httpx.AsyncClient(base_url=base_url, **kwargs)
