# src/kubesummary/collectors/node_collector.py

import asyncio
import logging
from typing import List, Optional

from kubernetes_asyncio.client.rest import ApiException

from kubesummary.core.exceptions import EnumerationFailure
from kubesummary.utils.deadline import wait_until

from .base_collector import BaseCollector

logger = logging.getLogger(__name__)


class NodeCollector(BaseCollector):
    """Lists the names of the nodes in the Kubernetes cluster."""

    async def collect(self, deadline: Optional[float] = None) -> List[str]:
        """
        Lists every node of the cluster.

        Args:
            deadline: Absolute loop time after which the call is abandoned, or None.

        Raises:
            EnumerationFailure: If the client is not configured, the API call fails or the deadline expires.

        Returns:
            list: Node names in the order the API server returned them.
        """
        api = await self._ensure_client()
        if not api:
            raise EnumerationFailure("Kubernetes client not configured")

        try:
            nodes = await wait_until(api.list_node(watch=False), deadline)
        except asyncio.TimeoutError as e:
            logger.error("Timed out while listing nodes.")
            raise EnumerationFailure("deadline exceeded") from e
        except ApiException as e:
            logger.error("Kubernetes API error while listing nodes: %s", e.reason)
            raise EnumerationFailure(f"{e.status} {e.reason}") from e
        except Exception as e:
            logger.error("An unexpected error occurred while listing nodes: %s", e)
            raise EnumerationFailure(e) from e

        node_names = [node.metadata.name for node in nodes.items or []]
        if not node_names:
            logger.warning("No nodes found in the cluster.")
        else:
            logger.debug("Found %d nodes: %s", len(node_names), ", ".join(node_names))
        return node_names

    async def list_node_names(self, deadline: Optional[float] = None) -> List[str]:
        return await self.collect(deadline)
