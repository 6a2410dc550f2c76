import os


class Config:
    """
    Configuration class for environment variables and default settings.
    """

    HOST = os.environ.get("PING_SERVER_HOST", "0.0.0.0")
    PORT = int(os.environ.get("PORT", "8080"))
    BACKLOG = int(os.environ.get("PING_SERVER_BACKLOG", "16"))
    # Single recv per connection; larger requests are truncated
    BUFFER_SIZE = int(os.environ.get("PING_SERVER_BUFFER_SIZE", "4096"))

    DEFAULT_PING_HOST = os.environ.get("DEFAULT_PING_HOST", "8.8.8.8")
    PING_COUNT = int(os.environ.get("PING_COUNT", "1"))
    PING_TIMEOUT_SECONDS = int(os.environ.get("PING_TIMEOUT_SECONDS", "1"))
    PING_BINARY = os.environ.get("PING_BINARY", "ping")

    # Prober selection: "subprocess", "icmp", or a dotted path to a Prober class
    PROBER_CLASS = os.environ.get("PROBER_CLASS", "subprocess")

    # Prometheus exporter port; disabled when unset
    METRICS_PORT = os.environ.get("METRICS_PORT")
