import logging
import signal
import sys

from pingserver.config.logging_config import setup_logging

# Set up logging at the start of the module
setup_logging()
logger = logging.getLogger(__name__)


def build_server():
    """
    Wire the prober, router, metrics and listener from Config.

    Raises:
        OSError: If the listening socket cannot be set up.
        ValueError: If the configured prober cannot be created, or if an integer
            setting in the environment does not parse.
    """
    # Imported here so Config's int() parsing fails inside main()'s error handling
    from pingserver.config.config import Config
    from pingserver.core.metrics_manager import MetricsManager
    from pingserver.core.ping_server import PingServer
    from pingserver.core.prober_factory import ProberFactory
    from pingserver.core.router import Router

    metrics_manager = MetricsManager()
    if Config.METRICS_PORT:
        metrics_manager.start_exporter(int(Config.METRICS_PORT), addr=Config.HOST)

    router = Router(
        prober=ProberFactory.create_prober(),
        default_host=Config.DEFAULT_PING_HOST,
        probe_timeout=Config.PING_TIMEOUT_SECONDS,
        metrics_manager=metrics_manager,
    )
    server = PingServer(
        router,
        host=Config.HOST,
        port=Config.PORT,
        backlog=Config.BACKLOG,
        buffer_size=Config.BUFFER_SIZE,
        metrics_manager=metrics_manager,
    )
    logger.info(
        f"Try: curl 'http://127.0.0.1:{server.server_address[1]}/ping?host={Config.DEFAULT_PING_HOST}'"
    )
    return server


def main() -> int:
    # Writes to a closed peer raise BrokenPipeError instead of killing the process
    if hasattr(signal, "SIGPIPE"):
        signal.signal(signal.SIGPIPE, signal.SIG_IGN)

    try:
        server = build_server()
    except (OSError, ValueError) as e:
        logger.critical(f"Startup failed: {e}")
        return 1

    with server:
        try:
            server.serve_forever()
        except KeyboardInterrupt:
            logger.info("Interrupted; shutting down.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
