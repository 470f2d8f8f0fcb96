# src/kubesummary/core/config.py

import logging
import os
import re

from dotenv import load_dotenv

# Load environment variables from a .env file located in the project root
dotenv_path = os.path.join(os.path.dirname(__file__), "..", "..", "..", ".env")
load_dotenv(dotenv_path=dotenv_path)

_TRUTHY = ("true", "1", "t", "y", "yes")


class Config:
    """
    Handles the application's configuration by loading values from environment variables.
    """

    # --- Server variables ---
    LISTEN_ADDRESS = os.getenv("LISTEN_ADDRESS", ":9779")

    # --- Kubernetes variables ---
    # Empty means: in-cluster config first, then $KUBECONFIG or ~/.kube/config.
    KUBECONFIG_PATH = os.getenv("KUBECONFIG_PATH", "")

    # --- Logging variables ---
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    # --- Scrape variables ---
    # Adds a 'uid' label to every container and pod scoped metric when enabled.
    POD_UID_LABEL = os.getenv("POD_UID_LABEL", "false").lower() in _TRUTHY
    # Upper bound on concurrent node scrapes for /nodes. 0 disables the limit.
    MAX_CONCURRENT_SCRAPES = int(os.getenv("MAX_CONCURRENT_SCRAPES", "0"))

    # --- Telemetry variables ---
    OTEL_EXPORTER_OTLP_ENDPOINT = os.getenv("OTEL_EXPORTER_OTLP_ENDPOINT", "")

    @property
    def LISTEN_HOST(self) -> str:
        host, _ = self.split_listen_address(self.LISTEN_ADDRESS)
        return host

    @property
    def LISTEN_PORT(self) -> int:
        _, port = self.split_listen_address(self.LISTEN_ADDRESS)
        return port

    @staticmethod
    def split_listen_address(address: str) -> tuple[str, int]:
        """
        Splits a 'host:port' listen address. An empty host binds every interface,
        so ':9779' resolves to ('0.0.0.0', 9779).

        Raises:
            ValueError: If the address has no port or the port is not a number in range.
        """
        match = re.match(r"^(.*):(\d+)$", address.strip())
        if not match:
            raise ValueError(f"Invalid listen address '{address}'. Use 'host:port' or ':port'.")
        host, port = match.group(1), int(match.group(2))
        if not 0 < port < 65536:
            raise ValueError(f"Invalid port {port} in listen address '{address}'.")
        # Allow bracketed IPv6 hosts such as '[::]:9779'
        host = host.strip("[]") or "0.0.0.0"
        return host, port

    def validate_instance(self):
        self.split_listen_address(self.LISTEN_ADDRESS)
        if self.MAX_CONCURRENT_SCRAPES < 0:
            raise ValueError("MAX_CONCURRENT_SCRAPES must be 0 (unbounded) or a positive integer.")
        if self.KUBECONFIG_PATH and not os.path.exists(self.KUBECONFIG_PATH):
            logging.getLogger(__name__).warning("KUBECONFIG_PATH '%s' does not exist.", self.KUBECONFIG_PATH)


# Instantiate the config to be imported by other modules
config = Config()
config.validate_instance()
