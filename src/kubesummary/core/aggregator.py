# src/kubesummary/core/aggregator.py
"""
Scrapes one or many nodes and merges their projected summaries into a
per-request MetricsRegistry.

The single node path fails as a whole when its node fails. The all-nodes
path fans out one task per node under the request's deadline; failed nodes
are logged, counted and left out of the result.
"""

import asyncio
import logging
from typing import List, Optional, Tuple, Union

from ..collectors.node_collector import NodeCollector
from ..collectors.summary_collector import SummaryCollector
from ..models.summary import Summary
from .config import config
from .exceptions import ScrapeFailure
from .projector import project
from .registry import MetricsRegistry
from .telemetry import NODE_SCRAPE_FAILURES, tracer

logger = logging.getLogger(__name__)

ScrapeOutcome = Tuple[str, Union[Summary, ScrapeFailure]]


class SummaryAggregator:
    """
    Orchestrates the node and summary collectors for a single request.

    Args:
        node_collector: Lists the cluster's nodes for the all-nodes path.
        summary_collector: Fetches one node's /stats/summary report.
        include_uid: Adds the pod uid label to container and pod scoped metrics.
        max_concurrency: Maximum number of concurrent node scrapes; 0 or None means unbounded.
    """

    def __init__(
        self,
        node_collector: Optional[NodeCollector] = None,
        summary_collector: Optional[SummaryCollector] = None,
        include_uid: Optional[bool] = None,
        max_concurrency: Optional[int] = None,
    ):
        self.node_collector = node_collector or NodeCollector()
        self.summary_collector = summary_collector or SummaryCollector()
        self.include_uid = config.POD_UID_LABEL if include_uid is None else include_uid
        self.max_concurrency = config.MAX_CONCURRENT_SCRAPES if max_concurrency is None else max_concurrency

    def _new_registry(self) -> MetricsRegistry:
        return MetricsRegistry(include_uid=self.include_uid)

    async def collect_one(self, node_name: str, deadline: Optional[float] = None) -> MetricsRegistry:
        """
        Scrapes a single node.

        Raises:
            ScrapeFailure: If the node cannot be fetched or its summary cannot be parsed.
        """
        with tracer.start_as_current_span("scrape_node") as span:
            span.set_attribute("k8s.node.name", node_name)
            try:
                summary = await self.summary_collector.collect(node_name, deadline)
            except ScrapeFailure as e:
                NODE_SCRAPE_FAILURES.labels(reason=e.reason).inc()
                logger.error("Error querying /stats/summary for %s: %s", node_name, e.cause)
                raise

        registry = self._new_registry()
        written = registry.write(project(summary, include_uid=self.include_uid))
        logger.debug("Collected %d samples for node '%s'.", written, node_name)
        return registry

    async def collect_all(self, deadline: Optional[float] = None) -> MetricsRegistry:
        """
        Scrapes every node of the cluster concurrently and merges the results.

        Every node task shares the same deadline. Node failures are logged and
        dropped, so the returned registry may cover only part of the cluster.

        Raises:
            EnumerationFailure: If the node list cannot be retrieved.
        """
        node_names = await self.node_collector.list_node_names(deadline)
        registry = self._new_registry()
        if not node_names:
            return registry

        semaphore = asyncio.Semaphore(self.max_concurrency) if self.max_concurrency else None
        tasks = [asyncio.ensure_future(self._scrape(name, deadline, semaphore)) for name in node_names]

        succeeded = 0
        try:
            for next_outcome in asyncio.as_completed(tasks):
                node_name, outcome = await next_outcome
                if isinstance(outcome, ScrapeFailure):
                    NODE_SCRAPE_FAILURES.labels(reason=outcome.reason).inc()
                    logger.warning("Skipping node %s: %s", node_name, outcome.cause)
                    continue
                registry.write(project(outcome, include_uid=self.include_uid))
                succeeded += 1
        finally:
            for task in tasks:
                if not task.done():
                    task.cancel()

        logger.info("Collected summaries from %d of %d nodes.", succeeded, len(node_names))
        return registry

    async def _scrape(
        self, node_name: str, deadline: Optional[float], semaphore: Optional[asyncio.Semaphore]
    ) -> ScrapeOutcome:
        """Fetches one node, returning the failure instead of raising it."""
        with tracer.start_as_current_span("scrape_node") as span:
            span.set_attribute("k8s.node.name", node_name)
            try:
                if semaphore is None:
                    return node_name, await self.summary_collector.collect(node_name, deadline)
                async with semaphore:
                    return node_name, await self.summary_collector.collect(node_name, deadline)
            except ScrapeFailure as e:
                span.set_attribute("scrape.failure", e.reason)
                return node_name, e
