# src/kubesummary/api/routers/summary.py
"""
API routes serving /stats/summary metrics for one node or for the whole cluster.
"""

import html
import logging
from typing import Optional

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse, Response
from prometheus_client import CONTENT_TYPE_LATEST

from kubesummary.api.dependencies import get_aggregator, get_scrape_deadline
from kubesummary.core.aggregator import SummaryAggregator
from kubesummary.core.exceptions import DeserializationFailure, EnumerationFailure, ScrapeFailure
from kubesummary.core.registry import MetricsRegistry

logger = logging.getLogger(__name__)

router = APIRouter()


def _exposition(registry: MetricsRegistry) -> Response:
    return Response(content=registry.render(), media_type=CONTENT_TYPE_LATEST)


def _error(message: str) -> PlainTextResponse:
    return PlainTextResponse(message + "\n", status_code=500)


@router.get("/node/{node}")
async def node_metrics(
    node: str,
    deadline: Optional[float] = Depends(get_scrape_deadline),
    aggregator: SummaryAggregator = Depends(get_aggregator),
):
    """Return the filesystem metrics of a single node."""
    try:
        registry = await aggregator.collect_one(node, deadline)
    except DeserializationFailure as e:
        return _error(
            f"Error unmarshaling /stats/summary response for {html.escape(node)}: {html.escape(str(e.cause))}"
        )
    except ScrapeFailure as e:
        return _error(f"Error querying /stats/summary for {html.escape(node)}: {html.escape(str(e.cause))}")
    return _exposition(registry)


@router.get("/nodes")
async def all_nodes_metrics(
    deadline: Optional[float] = Depends(get_scrape_deadline),
    aggregator: SummaryAggregator = Depends(get_aggregator),
):
    """Return the merged filesystem metrics of every node; unreachable nodes are left out."""
    try:
        registry = await aggregator.collect_all(deadline)
    except EnumerationFailure as e:
        logger.error("Error listing nodes: %s", e.cause)
        return _error(f"Error listing nodes: {html.escape(str(e.cause))}")
    return _exposition(registry)
