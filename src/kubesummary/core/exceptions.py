class KubeSummaryError(Exception):
    """Base exception for kube-summary-exporter."""

    pass


class ScrapeFailure(KubeSummaryError):
    """Base exception for a failed /stats/summary scrape of a single node."""

    reason = "error"

    def __init__(self, node: str, cause):
        self.node = node
        self.cause = cause
        super().__init__(f"{node}: {cause}")


class TransportFailure(ScrapeFailure):
    """Raised when the node cannot be reached through the API server proxy."""

    reason = "transport"


class DeserializationFailure(ScrapeFailure):
    """Raised when the node returns a malformed summary document."""

    reason = "deserialization"


class TimeoutFailure(ScrapeFailure):
    """Raised when the scrape deadline expires before the node answers."""

    reason = "timeout"


class EnumerationFailure(KubeSummaryError):
    """Raised when the cluster nodes cannot be listed."""

    def __init__(self, cause):
        self.cause = cause
        super().__init__(f"listing nodes failed: {cause}")
