# src/kubesummary/collectors/summary_collector.py
"""
Fetches the kubelet /stats/summary report of a node through the API server
node proxy (GET /api/v1/nodes/{node}/proxy/stats/summary).
"""

import asyncio
import logging
from typing import Optional

from kubernetes_asyncio.client.rest import ApiException
from pydantic import ValidationError

from kubesummary.core.exceptions import (
    DeserializationFailure,
    ScrapeFailure,
    TimeoutFailure,
    TransportFailure,
)
from kubesummary.models.summary import Summary
from kubesummary.utils.deadline import wait_until

from .base_collector import BaseCollector

logger = logging.getLogger(__name__)

STATS_SUMMARY_PATH = "stats/summary"

# Upper bound on how much of an error body ends up in a failure message
_MAX_ERROR_BODY = 200


class SummaryCollector(BaseCollector):
    """Retrieves and parses the /stats/summary document of a single node."""

    async def collect(self, node_name: str, deadline: Optional[float] = None) -> Summary:
        """
        Fetches one node's summary.

        Args:
            node_name: Name of the node to query.
            deadline: Absolute loop time after which the request is cancelled, or None.

        Raises:
            TransportFailure: If the node proxy cannot be reached or answers with a non-2xx status.
            DeserializationFailure: If the response is not a valid summary document.
            TimeoutFailure: If the deadline expires before the response is read.
        """
        api = await self._ensure_client()
        if not api:
            raise TransportFailure(node_name, "Kubernetes client not configured")

        try:
            raw = await wait_until(self._get_raw(api, node_name), deadline)
        except asyncio.TimeoutError as e:
            raise TimeoutFailure(node_name, "deadline exceeded") from e
        except ScrapeFailure:
            raise
        except ApiException as e:
            raise TransportFailure(node_name, f"{e.status} {e.reason}") from e
        except Exception as e:
            raise TransportFailure(node_name, e) from e

        summary = self.parse(node_name, raw)
        logger.debug("Fetched summary for node '%s' with %d pods.", node_name, len(summary.pods))
        return summary

    async def _get_raw(self, api, node_name: str) -> bytes:
        response = await api.connect_get_node_proxy_with_path(
            node_name,
            STATS_SUMMARY_PATH,
            _preload_content=False,
        )
        try:
            body = await response.read()
            if not 200 <= response.status <= 299:
                detail = body[:_MAX_ERROR_BODY].decode("utf-8", errors="replace").strip()
                raise TransportFailure(node_name, f"{response.status} {response.reason}: {detail}")
            return body
        finally:
            response.release()

    @staticmethod
    def parse(node_name: str, raw: bytes) -> Summary:
        """
        Parses a raw /stats/summary document.

        Raises:
            DeserializationFailure: If the payload is not JSON or does not match the summary shape.
        """
        try:
            return Summary.model_validate_json(raw)
        except ValidationError as e:
            first = e.errors()[0]
            location = ".".join(str(part) for part in first["loc"]) or "document"
            raise DeserializationFailure(node_name, f"{location}: {first['msg']}") from e
