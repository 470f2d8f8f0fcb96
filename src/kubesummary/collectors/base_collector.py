# src/kubesummary/collectors/base_collector.py
"""
This module defines the abstract base class for the Kubernetes collectors.
Both collectors go through the shared CoreV1Api client, so the lazy client
lookup lives here instead of being repeated in each of them.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Optional

from kubernetes_asyncio import client

from kubesummary.core.k8s_client import get_core_v1_api

logger = logging.getLogger(__name__)


class BaseCollector(ABC):
    """
    Abstract Base Class for the Kubernetes API collectors.
    """

    def __init__(self, api: Optional[client.CoreV1Api] = None):
        self._api = api

    async def _ensure_client(self) -> Optional[client.CoreV1Api]:
        """
        Lazily resolve the Kubernetes Async client using the centralized thread-safe loader.
        """
        if self._api:
            return self._api

        self._api = await get_core_v1_api()
        if not self._api:
            logger.warning("%s could not initialize Kubernetes client.", type(self).__name__)
        return self._api

    @abstractmethod
    async def collect(self, *args, **kwargs) -> Any:
        """
        The main method for a collector. It should fetch data from the
        Kubernetes API, parse it, and return Pydantic models or plain values.
        """
        pass
