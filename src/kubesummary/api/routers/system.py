# src/kubesummary/api/routers/system.py
"""
API routes for the landing page, health checks and the exporter's own metrics.
"""

import logging

from fastapi import APIRouter
from fastapi.responses import HTMLResponse, Response
from prometheus_client import CONTENT_TYPE_LATEST, REGISTRY, generate_latest

from kubesummary import __version__
from kubesummary.api.schemas import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter()

LANDING_PAGE = """<html>
    <head><title>Kube Summary Exporter</title></head>
    <body>
        <h1>Kube Summary Exporter</h1>
        <p><a href="node/example-node">Retrieve metrics for 'example-node'</a></p>
        <p><a href="nodes">Retrieve metrics for all nodes</a></p>
        <p><a href="metrics">Metrics</a></p>
    </body>
</html>"""


@router.get("/", response_class=HTMLResponse, include_in_schema=False)
async def index():
    return LANDING_PAGE


@router.get("/healthz", response_model=HealthResponse)
async def health():
    """Health check endpoint."""
    return HealthResponse(status="ok", version=__version__)


@router.get("/metrics")
async def process_metrics():
    """Expose the exporter's own request and scrape metrics."""
    return Response(content=generate_latest(REGISTRY), media_type=CONTENT_TYPE_LATEST)
