"""Prometheus metrics definitions for queueboard API.

Metrics follow the naming convention: queueboard_<subsystem>_<name>_<unit>

Categories:
- Discovery metrics: queues found, pass results, pass duration
- Reset metrics: per-queue reset outcomes
- HTTP metrics: request duration, total count
"""

from prometheus_client import Counter, Gauge, Histogram

# -----------------------------------------------------------------------------
# Discovery metrics
# -----------------------------------------------------------------------------

QUEUES_DISCOVERED = Gauge(
    "queueboard_queues_discovered",
    "Number of queues in the registry after the last discovery pass",
)

DISCOVERY_TOTAL = Counter(
    "queueboard_discovery_total",
    "Total number of discovery passes",
    ["result"],  # result: ready or failed
)

DISCOVERY_DURATION = Histogram(
    "queueboard_discovery_duration_seconds",
    "Discovery pass duration",
    buckets=(0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0),
)

# -----------------------------------------------------------------------------
# Reset metrics
# -----------------------------------------------------------------------------

QUEUE_RESET_TOTAL = Counter(
    "queueboard_queue_reset_total",
    "Total number of per-queue resets",
    ["status"],
)

# -----------------------------------------------------------------------------
# HTTP request metrics
# -----------------------------------------------------------------------------

HTTP_REQUEST_DURATION = Histogram(
    "queueboard_http_request_duration_seconds",
    "HTTP request duration",
    ["method", "endpoint", "status_code"],
    buckets=(0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0),
)

HTTP_REQUESTS_TOTAL = Counter(
    "queueboard_http_requests_total",
    "Total number of HTTP requests",
    ["method", "endpoint", "status_code"],
)
