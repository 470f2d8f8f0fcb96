# src/kubesummary/core/registry.py
"""
Per-request metric registry.

Wraps a dedicated prometheus_client CollectorRegistry so that every scrape
renders only the samples it collected. Nothing here is shared between
requests; process level metrics live in the default REGISTRY instead.
"""

import logging
from typing import Dict, Iterable, Optional

from prometheus_client import CollectorRegistry, Gauge, generate_latest

from ..models.metrics import MetricRecord
from .schema import SCHEMA_BY_NAME, label_names

logger = logging.getLogger(__name__)


class MetricsRegistry:
    """
    Accumulates MetricRecords as gauges and renders them in the text exposition format.

    Gauges are registered on first use, so metrics without samples are left
    out of the output. A record whose (name, labels) was already written
    replaces the previous value.
    """

    def __init__(self, include_uid: bool = False):
        self.include_uid = include_uid
        self.collector_registry = CollectorRegistry()
        self._gauges: Dict[str, Gauge] = {}

    def _gauge(self, name: str) -> Gauge:
        gauge = self._gauges.get(name)
        if gauge is not None:
            return gauge

        spec = SCHEMA_BY_NAME.get(name)
        if spec is None:
            raise ValueError(f"Unknown metric '{name}'")
        gauge = Gauge(
            spec.name,
            spec.help,
            labelnames=label_names(spec.scope, self.include_uid),
            registry=self.collector_registry,
        )
        self._gauges[name] = gauge
        return gauge

    def write(self, records: Iterable[MetricRecord]) -> int:
        """
        Sets one gauge sample per record.

        Raises:
            ValueError: If a record names an unknown metric or its label keys do not match the schema.

        Returns:
            int: The number of records written.
        """
        count = 0
        for record in records:
            self._gauge(record.name).labels(**record.labels).set(record.value)
            count += 1
        return count

    def render(self) -> bytes:
        return generate_latest(self.collector_registry)

    def get_sample_value(self, name: str, labels: Optional[Dict[str, str]] = None) -> Optional[float]:
        return self.collector_registry.get_sample_value(name, labels or {})

    @property
    def metric_names(self) -> list:
        return sorted(self._gauges)
