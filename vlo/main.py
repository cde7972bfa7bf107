"""
Main application entry point.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.concurrency import run_in_threadpool

from vlo.config import setup_logging
from vlo.api.v1.dependencies import get_settings, init_dependencies
from vlo.api.v1.endpoints import router as facets_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Load the facet configuration and code tables before serving requests."""
    setup_logging(get_settings().log_level)
    # Building code tables does blocking HTTP calls
    await run_in_threadpool(init_dependencies)
    yield


app = FastAPI(
    title="VLO Facet Values API",
    description="Facet schema, field value conversion and search selections for faceted metadata search.",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

# Include API routers
app.include_router(facets_router, prefix="/api/v1", tags=["facets"])


@app.get("/")
def read_root():
    """Root endpoint."""
    return {
        "message": "Welcome to the VLO Facet Values API",
        "docs": "/docs",
        "health": "/api/v1/health",
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("vlo.main:app", host="0.0.0.0", port=8000, reload=True)
