import logging
from typing import Optional

from prometheus_client import (
    CollectorRegistry,
    Counter,
    Gauge,
    Histogram,
    start_http_server,
)

logger = logging.getLogger(__name__)

LATENCY_BUCKETS_MS = (1, 5, 10, 25, 50, 100, 250, 500, 1000)


class MetricsManager:
    """
    Manager for request and probe metrics exported through Prometheus.
    """

    def __init__(self, registry: Optional[CollectorRegistry] = None):
        """
        Initialize the MetricsManager and set up Prometheus metrics.

        Args:
            registry: Collector registry to register metrics with. A private
                registry is created when omitted, so several managers can coexist
                in one process.
        """
        self.registry = registry if registry is not None else CollectorRegistry()
        self.IN_FLIGHT = Gauge(
            "pingserver_in_flight_requests",
            "Number of requests being handled",
            registry=self.registry,
        )
        self.REQUESTS = Counter(
            "pingserver_requests",
            "Responses sent, by status code",
            ["status"],
            registry=self.registry,
        )
        self.PROBE_LATENCY = Histogram(
            "pingserver_probe_latency_ms",
            "Measured probe round-trip time in milliseconds",
            buckets=LATENCY_BUCKETS_MS,
            registry=self.registry,
        )
        self.PROBE_FAILURES = Counter(
            "pingserver_probe_failures",
            "Probes that returned no latency",
            registry=self.registry,
        )
        logger.info("MetricsManager initialized.")

    def record_response(self, status: int):
        self.REQUESTS.labels(status=str(status)).inc()

    def record_probe(self, latency_ms: Optional[float]):
        if latency_ms is None:
            self.PROBE_FAILURES.inc()
        else:
            self.PROBE_LATENCY.observe(latency_ms)

    def get_in_flight(self):
        return self.IN_FLIGHT._value.get()

    def get_sample_value(self, name: str, labels: Optional[dict] = None):
        """
        Return the current value of a sample from this manager's registry.
        """
        return self.registry.get_sample_value(name, labels or {})

    def start_exporter(self, port: int, addr: str = "0.0.0.0"):
        """
        Serve this registry on a separate port in a background thread.
        """
        start_http_server(port, addr=addr, registry=self.registry)
        logger.info(f"Metrics exporter listening on {addr}:{port}")
