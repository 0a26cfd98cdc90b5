# gateway/routers/properties.py
import json
import logging
from typing import Any, Awaitable, Callable

import httpx
from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import JSONResponse

from gateway.deps import get_backend
from gateway.errors import GatewayError, NotFoundError
from gateway.models import ErrorResponse
from gateway.repository import properties as repo
from gateway.repository.properties import Relayed

LOG = logging.getLogger("gateway")

router = APIRouter(prefix="/api", tags=["properties"])

_ERROR_RESPONSES = {
    404: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


def _relay(result: Relayed) -> Response:
    if result.status_code == 204:
        return Response(status_code=204)
    return JSONResponse(content=result.body, status_code=result.status_code)


def _error(message: str, status_code: int) -> JSONResponse:
    return JSONResponse(content={"error": message}, status_code=status_code)


async def _read_json(request: Request) -> Any:
    try:
        return await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise GatewayError(f"Invalid request body: {e}") from e


async def _forward(call: Callable[[], Awaitable[Relayed]], failure: str) -> Response:
    """
    Run one upstream call and translate the outcome:
      - success            -> relayed status + body (204 stays empty)
      - NotFoundError      -> {"error": "<Resource> not found"}, 404
      - any other failure  -> {"error": failure}, 500
    """
    try:
        return _relay(await call())
    except NotFoundError as e:
        LOG.warning("%s: %s", failure, e)
        return _error(str(e), 404)
    except GatewayError as e:
        LOG.error("%s: %s", failure, e)
        return _error(failure, 500)


# ---------- Collection ----------

@router.get("/properties", responses=_ERROR_RESPONSES)
async def list_properties(request: Request, backend: httpx.AsyncClient = Depends(get_backend)):
    """Listing with every query parameter forwarded to the backend untouched."""
    params = list(request.query_params.multi_items())
    return await _forward(lambda: repo.list_properties(backend, params), "Failed to fetch properties")


@router.post("/properties", responses=_ERROR_RESPONSES)
async def create_property(request: Request, backend: httpx.AsyncClient = Depends(get_backend)):
    async def call() -> Relayed:
        payload = await _read_json(request)
        return await repo.create_property(backend, payload)

    return await _forward(call, "Failed to create property")


# Declared before /properties/{property_id} so the literal paths win.
@router.get("/properties/stats", responses=_ERROR_RESPONSES)
async def property_stats(backend: httpx.AsyncClient = Depends(get_backend)):
    return await _forward(lambda: repo.get_stats(backend), "Failed to fetch property statistics")


@router.get("/properties/search", responses=_ERROR_RESPONSES)
async def search_properties(request: Request, backend: httpx.AsyncClient = Depends(get_backend)):
    params = list(request.query_params.multi_items())
    return await _forward(lambda: repo.search_properties(backend, params), "Failed to search properties")


# ---------- Single record ----------

@router.get("/properties/{property_id}", responses=_ERROR_RESPONSES)
async def get_property(property_id: str, backend: httpx.AsyncClient = Depends(get_backend)):
    return await _forward(
        lambda: repo.get_property(backend, property_id),
        "Failed to fetch property",
    )


@router.put("/properties/{property_id}", responses=_ERROR_RESPONSES)
async def replace_property(
    property_id: str, request: Request, backend: httpx.AsyncClient = Depends(get_backend)
):
    async def call() -> Relayed:
        payload = await _read_json(request)
        return await repo.replace_property(backend, property_id, payload)

    return await _forward(call, "Failed to update property")


@router.patch("/properties/{property_id}", responses=_ERROR_RESPONSES)
async def patch_property(
    property_id: str, request: Request, backend: httpx.AsyncClient = Depends(get_backend)
):
    async def call() -> Relayed:
        payload = await _read_json(request)
        return await repo.patch_property(backend, property_id, payload)

    return await _forward(call, "Failed to patch property")


@router.delete("/properties/{property_id}", responses=_ERROR_RESPONSES)
async def delete_property(property_id: str, backend: httpx.AsyncClient = Depends(get_backend)):
    return await _forward(
        lambda: repo.delete_property(backend, property_id),
        "Failed to delete property",
    )
