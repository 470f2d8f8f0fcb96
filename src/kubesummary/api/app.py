# src/kubesummary/api/app.py
"""
FastAPI application factory for the kube-summary-exporter.

Uses the factory pattern so the app can be created with or without
lifespan management (e.g., tests skip Kubernetes client setup and teardown).
"""

import logging
import time
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request

from kubesummary import __version__
from kubesummary.api.routers import summary, system
from kubesummary.core.config import config
from kubesummary.core.k8s_client import close_core_v1_api, ensure_k8s_config
from kubesummary.core.telemetry import REQUEST_DURATION, REQUESTS_TOTAL, initialize_telemetry

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application startup and shutdown."""
    logger.info("Starting kube-summary-exporter %s...", __version__)
    initialize_telemetry()
    if not await ensure_k8s_config():
        logger.warning("No Kubernetes configuration available; scrapes will fail until one is provided.")
    yield
    logger.info("Shutting down kube-summary-exporter...")
    await close_core_v1_api()


def create_app(use_lifespan: bool = False) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        use_lifespan: If True, attach the lifespan handler that loads the
                      Kubernetes configuration and closes the API client.
                      Set to False for testing.

    Returns:
        A configured FastAPI application instance.
    """
    app = FastAPI(
        title="Kube Summary Exporter",
        description="Exports kubelet /stats/summary filesystem usage as Prometheus metrics.",
        version=__version__,
        lifespan=lifespan if use_lifespan else None,
    )

    @app.middleware("http")
    async def record_request_metrics(request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        endpoint = request.scope.get("endpoint")
        handler = getattr(endpoint, "__name__", "other")
        REQUEST_DURATION.labels(handler=handler).observe(time.perf_counter() - start)
        REQUESTS_TOTAL.labels(handler=handler, code=str(response.status_code)).inc()
        return response

    app.include_router(summary.router, tags=["Summary"])
    app.include_router(system.router, tags=["System"])

    return app


def main(listen_address: Optional[str] = None):
    """Entry point for the kube-summary-exporter console script."""
    logging.basicConfig(
        level=config.LOG_LEVEL.upper(),
        format="%(asctime)s - %(levelname)s - %(message)s",
    )
    host, port = config.split_listen_address(listen_address or config.LISTEN_ADDRESS)
    app = create_app(use_lifespan=True)
    logger.info("Listening on %s:%s", host, port)
    uvicorn.run(app, host=host, port=port)
