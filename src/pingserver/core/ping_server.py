import logging
import selectors
import socket
import threading
from typing import Optional

from pingserver.config.config import Config
from pingserver.contracts.http_response import HttpResponse
from pingserver.core.metrics_manager import MetricsManager
from pingserver.core.request_parser import parse_request
from pingserver.core.responses import json_error
from pingserver.core.router import Router

logger = logging.getLogger(__name__)


class PingServer:
    """
    Blocking TCP listener that handles one connection at a time.

    Each connection is read once, routed, answered and closed before the next
    one is accepted.
    """

    def __init__(
        self,
        router: Router,
        host: str = Config.HOST,
        port: int = Config.PORT,
        backlog: int = Config.BACKLOG,
        buffer_size: int = Config.BUFFER_SIZE,
        metrics_manager: Optional[MetricsManager] = None,
    ):
        """
        Create, bind and activate the listening socket.

        Raises:
            OSError: If the socket cannot be created, bound or put into listen mode.
        """
        self.router = router
        self.backlog = backlog
        self.buffer_size = buffer_size
        self.metrics_manager = metrics_manager
        self._running = False
        self._is_shut_down = threading.Event()
        self._is_shut_down.set()

        self.socket = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        try:
            self.server_bind((host, port))
            self.server_activate()
        except OSError:
            self.server_close()
            raise

    def server_bind(self, address):
        self.socket.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        self.socket.bind(address)
        self.server_address = self.socket.getsockname()

    def server_activate(self):
        self.socket.listen(self.backlog)
        logger.info(
            f"Ping server listening on {self.server_address[0]}:{self.server_address[1]}"
        )

    def server_close(self):
        self.socket.close()

    def serve_forever(self, poll_interval: float = 0.5):
        """
        Accept and handle connections sequentially until shutdown() is called.

        Args:
            poll_interval (float): Seconds between checks of the shutdown flag.
        """
        self._running = True
        self._is_shut_down.clear()
        try:
            with selectors.DefaultSelector() as selector:
                selector.register(self.socket, selectors.EVENT_READ)
                while self._running:
                    ready = selector.select(poll_interval)
                    if not self._running:
                        break
                    if ready:
                        self._accept_once()
        finally:
            self._running = False
            self._is_shut_down.set()

    def shutdown(self):
        """
        Stop the serve_forever loop and wait for it to exit. Must be called from
        another thread.
        """
        self._running = False
        self._is_shut_down.wait()

    def _accept_once(self):
        try:
            conn, addr = self.socket.accept()
        except OSError as e:
            logger.error(f"accept error: {e}")
            return
        self.handle_connection(conn, addr)

    def handle_connection(self, conn: socket.socket, addr=None):
        """
        Read one request from ``conn``, answer it, and close the connection.

        A connection that yields no bytes is closed without a response.
        """
        with conn:
            try:
                data = conn.recv(self.buffer_size)
            except OSError as e:
                logger.warning(f"Read from {addr} failed: {e}")
                return
            if not data:
                logger.debug(f"Empty read from {addr}; closing")
                return

            request = parse_request(data)
            response = self.build_response(request)
            logger.info(f"{addr} {request.method} {request.target} -> {response.status}")
            if self.metrics_manager:
                self.metrics_manager.record_response(response.status)
            try:
                conn.sendall(response.to_bytes())
            except OSError as e:
                logger.warning(f"Write to {addr} failed: {e}")

    def build_response(self, request) -> HttpResponse:
        if self.metrics_manager:
            self.metrics_manager.IN_FLIGHT.inc()
        try:
            return self.router.dispatch(request)
        except Exception:
            logger.exception(f"Unhandled error routing {request.target}")
            return json_error(500, "Internal server error")
        finally:
            if self.metrics_manager:
                self.metrics_manager.IN_FLIGHT.dec()

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.server_close()
