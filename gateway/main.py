import logging

from fastapi import FastAPI

from gateway.deps import BACKEND_URL, LOG_LEVEL
from gateway.models import HealthResponse
from gateway.routers import properties

logging.basicConfig(level=getattr(logging, LOG_LEVEL, logging.INFO),
                    format="%(asctime)s | %(levelname)s | %(message)s")
LOG = logging.getLogger("gateway")

app = FastAPI(
    title="Real Estate Listings Gateway",
    version="1.0.0",
    description="Proxy endpoints that forward property CRUD and search to the listings backend."
)

app.include_router(properties.router)

LOG.info("Forwarding /api/properties to %s", BACKEND_URL)

@app.get("/api/health", response_model=HealthResponse)
def health():
    return {"status": "ok"}

