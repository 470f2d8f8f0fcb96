import asyncio
import logging
import typing

from kubernetes_asyncio import client, config

from kubesummary.core.config import config as app_config

logger = logging.getLogger(__name__)

# Global lock to prevent race conditions during config loading
_CONFIG_LOCK = asyncio.Lock()
_CONFIG_LOADED = False
_CORE_V1_API: typing.Optional[client.CoreV1Api] = None


async def ensure_k8s_config(kubeconfig_path: typing.Optional[str] = None) -> bool:
    """
    Ensures that the Kubernetes configuration is loaded exactly once.

    An explicit kubeconfig path (argument or KUBECONFIG_PATH) is the only source
    tried when given. Otherwise the in-cluster service account is tried first,
    then $KUBECONFIG / ~/.kube/config.

    Returns:
        bool: True if config was loaded successfully (or was already loaded), False otherwise.
    """
    global _CONFIG_LOADED

    if _CONFIG_LOADED:
        return True

    path = kubeconfig_path if kubeconfig_path is not None else app_config.KUBECONFIG_PATH

    async with _CONFIG_LOCK:
        # Double-check locking pattern
        if _CONFIG_LOADED:
            return True

        if path:
            try:
                await config.load_kube_config(config_file=path)
                logger.info("Loaded Kubernetes configuration from %s.", path)
                _CONFIG_LOADED = True
                return True
            except Exception as e:
                logger.error("Could not load kubeconfig from %s: %s", path, e)
                return False

        # Try in-cluster config first
        try:
            logger.debug("Attempting to load in-cluster Kubernetes config...")
            config.load_incluster_config()
            logger.info("Loaded in-cluster Kubernetes configuration.")
            _CONFIG_LOADED = True
            return True
        except config.ConfigException:
            logger.debug("In-cluster config not found.")
        except Exception as e:
            logger.warning(f"Unexpected error loading in-cluster config: {e}")

        # Try local kubeconfig
        try:
            logger.debug("Attempting to load local kubeconfig...")
            await config.load_kube_config()
            logger.info("Loaded Kubernetes configuration from kubeconfig file.")
            _CONFIG_LOADED = True
            return True
        except config.ConfigException:
            logger.warning("Could not find kubeconfig file.")
        except Exception as e:
            logger.warning(f"Unexpected error loading kubeconfig: {e}")

    logger.warning("Failed to load any Kubernetes configuration.")
    return False


async def get_core_v1_api() -> typing.Optional[client.CoreV1Api]:
    """
    Returns the shared CoreV1Api instance, creating it on first use.
    Safe to call concurrently.
    """
    global _CORE_V1_API

    if _CORE_V1_API is not None:
        return _CORE_V1_API
    if await ensure_k8s_config():
        if _CORE_V1_API is None:
            _CORE_V1_API = client.CoreV1Api()
        return _CORE_V1_API
    return None


async def close_core_v1_api() -> None:
    """Close the shared API client and its connection pool."""
    global _CORE_V1_API

    if _CORE_V1_API is not None:
        await _CORE_V1_API.api_client.close()
        logger.debug("Kubernetes API client closed.")
        _CORE_V1_API = None
