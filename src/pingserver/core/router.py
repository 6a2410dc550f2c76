import logging
from typing import Optional

from pingserver.abstractions.prober import Prober
from pingserver.config.config import Config
from pingserver.contracts.http_request import HttpRequest
from pingserver.contracts.http_response import HttpResponse
from pingserver.core.host_validator import is_safe_host
from pingserver.core.metrics_manager import MetricsManager
from pingserver.core.responses import health_response, json_error, ping_result

logger = logging.getLogger(__name__)

HEALTH_TARGETS = frozenset({"/", "/health", "/healthz"})
PING_PREFIX = "/ping"


class Router:
    """
    Dispatches a parsed request to the health check, the ping handler, or a 404.
    """

    def __init__(
        self,
        prober: Prober,
        default_host: str = Config.DEFAULT_PING_HOST,
        probe_timeout: float = Config.PING_TIMEOUT_SECONDS,
        metrics_manager: Optional[MetricsManager] = None,
    ):
        self.prober = prober
        self.default_host = default_host
        self.probe_timeout = probe_timeout
        self.metrics_manager = metrics_manager

    def dispatch(self, request: HttpRequest) -> HttpResponse:
        """
        Route a request and build its response.

        Args:
            request (HttpRequest): The parsed request.

        Returns:
            HttpResponse: The response to write back to the client.
        """
        if request.method != "GET":
            return json_error(400, "Only GET supported")
        # Health paths match the full target, query string included
        if request.target in HEALTH_TARGETS:
            return health_response()
        if request.target.startswith(PING_PREFIX):
            return self.handle_ping(request)
        return json_error(404, "Not found")

    def handle_ping(self, request: HttpRequest) -> HttpResponse:
        host = request.get_query_param("host", self.default_host)
        if not is_safe_host(host):
            logger.warning(f"Rejected unsafe host parameter: {host!r}")
            return json_error(400, "Invalid host")

        latency = self.prober.probe(host, self.probe_timeout)
        if self.metrics_manager:
            self.metrics_manager.record_probe(latency)
        if latency is None:
            logger.warning(f"Ping to {host} failed")
            return json_error(500, "Ping failed")

        logger.info(f"Ping to {host}: {latency:.2f} ms")
        return ping_result(host, latency)
