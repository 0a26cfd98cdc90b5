"""
Data-access hooks: one small state holder per gateway resource.

Every hook exposes `data`, `loading` and `error` plus an async action. An
action never raises: a non-2xx answer becomes `error = "Error: <status>"`,
any other exception its message, and `data` falls back to its empty value.
`loading` is cleared whatever happens.

Actions are not sequenced or cancelled. Two overlapping calls on the same
hook both write their result, so a slow stale response can land after a
newer one.
"""

import logging
from typing import Any, List, Mapping, Optional, Tuple, Union

import httpx

from portal.models import (
    CreatePropertyData,
    Links,
    Meta,
    PropertiesResponse,
    Property,
    PropertyStats,
)
from portal.pagination import PRIORITIZE_AVAILABLE, Criteria, to_query

LOG = logging.getLogger("portal")

PROPERTIES_PATH = "/api/properties"


class FetchError(Exception):
    """Gateway answered with a non-2xx status."""

    def __init__(self, status_code: int):
        self.status_code = status_code
        super().__init__(f"Error: {status_code}")


async def _request_json(
    client: httpx.AsyncClient,
    method: str,
    url: str,
    params: Optional[List[Tuple[str, str]]] = None,
    payload: Any = None,
) -> Any:
    resp = await client.request(method, url, params=params, json=payload)
    if not resp.is_success:
        raise FetchError(resp.status_code)
    return resp.json()


def _message(err: Exception, default: str) -> str:
    return str(err) or default


class PropertiesHook:
    """Default listing. The first activation asks the backend to put available records first."""

    def __init__(self, client: httpx.AsyncClient):
        self.client = client
        self.data: List[Property] = []
        self.meta: Optional[Meta] = None
        self.links: Optional[Links] = None
        self.loading = True
        self.error: Optional[str] = None
        self.current_page = 1
        self.has_initialized = False
        self._activated = False

    async def activate(self) -> None:
        if self._activated:
            return
        self._activated = True
        await self.fetch_properties(1, prioritize_available=True)

    async def fetch_properties(self, page: int = 1, prioritize_available: bool = False) -> None:
        self.loading = True
        params = [("page", str(page))]
        if prioritize_available:
            params += PRIORITIZE_AVAILABLE
        try:
            result = PropertiesResponse.model_validate(
                await _request_json(self.client, "GET", PROPERTIES_PATH, params=params)
            )
            self.data = result.data
            self.meta = result.meta
            self.links = result.links
            self.current_page = page
            self.has_initialized = True
            self.error = None
        except Exception as e:
            LOG.warning("Listing page %s failed: %s", page, e)
            self.error = _message(e, "Failed to fetch properties")
            self.data = []
            self.meta = None
            self.links = None
        finally:
            self.loading = False

    async def fetch_page(self, page: int) -> None:
        # explicit page requests never carry the availability sort
        await self.fetch_properties(page, prioritize_available=False)

    refetch = fetch_properties


class PropertySearchHook:
    """Idle until `search_properties` is called; each search replaces the previous result."""

    def __init__(self, client: httpx.AsyncClient):
        self.client = client
        self.data: List[Property] = []
        self.meta: Optional[Meta] = None
        self.links: Optional[Links] = None
        self.loading = False
        self.error: Optional[str] = None

    async def search_properties(self, criteria: Criteria) -> None:
        self.loading = True
        try:
            result = PropertiesResponse.model_validate(
                await _request_json(self.client, "GET", PROPERTIES_PATH, params=to_query(criteria))
            )
            self.data = result.data
            self.meta = result.meta
            self.links = result.links
            self.error = None
        except Exception as e:
            LOG.warning("Search failed: %s", e)
            self.error = _message(e, "Failed to search properties")
            self.data = []
            self.meta = None
            self.links = None
        finally:
            self.loading = False


class PropertyStatsHook:
    def __init__(self, client: httpx.AsyncClient):
        self.client = client
        self.data: Optional[PropertyStats] = None
        self.loading = True
        self.error: Optional[str] = None
        self._activated = False

    async def activate(self) -> None:
        if self._activated:
            return
        self._activated = True
        self.loading = True
        try:
            self.data = PropertyStats.model_validate(
                await _request_json(self.client, "GET", f"{PROPERTIES_PATH}/stats")
            )
            self.error = None
        except Exception as e:
            LOG.warning("Stats failed: %s", e)
            self.error = _message(e, "Failed to fetch stats")
            self.data = None
        finally:
            self.loading = False


class PropertyHook:
    """Single record by id. Fetches on activation and whenever the id changes; a falsy id does nothing."""

    def __init__(self, client: httpx.AsyncClient, property_id: Union[int, str, None]):
        self.client = client
        self.property_id = property_id
        self.data: Optional[Property] = None
        self.loading = True
        self.error: Optional[str] = None

    async def activate(self) -> None:
        await self._fetch()

    async def set_id(self, property_id: Union[int, str, None]) -> None:
        if property_id == self.property_id:
            return
        self.property_id = property_id
        await self._fetch()

    async def _fetch(self) -> None:
        if not self.property_id:
            return
        self.loading = True
        try:
            self.data = Property.model_validate(
                await _request_json(self.client, "GET", f"{PROPERTIES_PATH}/{self.property_id}")
            )
            self.error = None
        except Exception as e:
            LOG.warning("Property %s failed: %s", self.property_id, e)
            self.error = _message(e, "Failed to fetch property")
            self.data = None
        finally:
            self.loading = False


class CreatePropertyHook:
    """
    Posts a new record. The caller gets the created Property or None and has to
    check `error` itself; listings are not refreshed.
    """

    def __init__(self, client: httpx.AsyncClient):
        self.client = client
        self.loading = False
        self.error: Optional[str] = None

    async def create_property(
        self, data: Union[CreatePropertyData, Mapping[str, Any]]
    ) -> Optional[Property]:
        self.loading = True
        self.error = None
        if isinstance(data, CreatePropertyData):
            payload = data.model_dump(mode="json", exclude_none=True)
        else:
            payload = dict(data)
        try:
            return Property.model_validate(
                await _request_json(self.client, "POST", PROPERTIES_PATH, payload=payload)
            )
        except Exception as e:
            LOG.warning("Create failed: %s", e)
            self.error = _message(e, "Failed to create property")
            return None
        finally:
            self.loading = False
