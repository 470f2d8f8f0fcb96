"""Self-observability for the exporter: OpenTelemetry tracing and process metrics."""

import logging

from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.resources import SERVICE_NAME, Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor
from prometheus_client import Counter, Histogram

from .config import config

logger = logging.getLogger(__name__)

# --- Process metrics, served on /metrics from the default registry ---
REQUESTS_TOTAL = Counter(
    "kube_summary_exporter_http_requests_total",
    "Number of HTTP requests handled, by handler and status code",
    ["handler", "code"],
)
REQUEST_DURATION = Histogram(
    "kube_summary_exporter_http_request_duration_seconds",
    "Time spent handling HTTP requests, by handler",
    ["handler"],
)
NODE_SCRAPE_FAILURES = Counter(
    "kube_summary_exporter_node_scrape_failures_total",
    "Number of failed /stats/summary scrapes, by failure reason",
    ["reason"],
)


def initialize_telemetry() -> bool:
    """
    Configures the OpenTelemetry TracerProvider when an OTLP endpoint is set.
    Spans are exported via OTLP/HTTP; without an endpoint the tracer stays a no-op.

    Returns:
        bool: True if an exporter was installed.
    """
    endpoint = config.OTEL_EXPORTER_OTLP_ENDPOINT
    if not endpoint:
        logger.debug("OTEL_EXPORTER_OTLP_ENDPOINT not set; tracing disabled.")
        return False

    resource = Resource(attributes={SERVICE_NAME: "kube-summary-exporter"})
    tracer_provider = TracerProvider(resource=resource)
    span_exporter = OTLPSpanExporter(endpoint=f"{endpoint.rstrip('/')}/v1/traces")
    tracer_provider.add_span_processor(BatchSpanProcessor(span_exporter))
    trace.set_tracer_provider(tracer_provider)
    logger.info(f"OpenTelemetry initialized. Exporting to: {endpoint}")
    return True


# Make the tracer globally accessible
tracer = trace.get_tracer("kubesummary.tracer")
