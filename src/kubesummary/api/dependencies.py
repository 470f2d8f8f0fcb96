# src/kubesummary/api/dependencies.py
"""
FastAPI dependency injection functions.

Route handlers receive the aggregator and the request deadline through
Depends(), so tests can swap in fakes with dependency_overrides.
"""

import logging
from typing import Optional

from fastapi import Header

from kubesummary.core.aggregator import SummaryAggregator
from kubesummary.utils.deadline import deadline_after, parse_timeout_seconds

logger = logging.getLogger(__name__)


async def get_aggregator() -> SummaryAggregator:
    """Provides a SummaryAggregator backed by the shared Kubernetes client."""
    return SummaryAggregator()


async def get_scrape_deadline(
    x_prometheus_scrape_timeout_seconds: Optional[str] = Header(None),
) -> Optional[float]:
    """
    Derives the request deadline from the X-Prometheus-Scrape-Timeout-Seconds header.
    A missing or invalid header leaves the request without a deadline.
    """
    return deadline_after(parse_timeout_seconds(x_prometheus_scrape_timeout_seconds))
