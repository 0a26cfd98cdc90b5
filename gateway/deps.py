# gateway/deps.py
from typing import AsyncGenerator, Optional
import os

import httpx

BACKEND_URL = os.getenv("BACKEND_URL", "http://127.0.0.1:8000/api")

LOG_LEVEL = os.getenv("GATEWAY_LOG_LEVEL", "INFO").upper()

# No timeout unless configured
_timeout = os.getenv("GATEWAY_TIMEOUT")
TIMEOUT: Optional[float] = float(_timeout) if _timeout else None

DEFAULT_HEADERS = {"Content-Type": "application/json"}


def make_backend_client(base_url: str = BACKEND_URL, **kwargs) -> httpx.AsyncClient:
    kwargs.setdefault("timeout", TIMEOUT)
    return httpx.AsyncClient(base_url=base_url, headers=DEFAULT_HEADERS, **kwargs)


async def get_backend() -> AsyncGenerator[httpx.AsyncClient, None]:
    """
    FastAPI dependency that yields an httpx client bound to BACKEND_URL.
    Override it in tests with a client on an httpx.MockTransport.
    """
    client = make_backend_client()
    try:
        yield client
    finally:
        await client.aclose()
