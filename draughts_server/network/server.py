"""TCP server accepting one peer per piece color."""

import logging
import socket
from typing import Callable

from draughts_server.exceptions import StartupFailure
from draughts_server.models import Color

from .connection import Connection

logger = logging.getLogger(__name__)

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 8080


class GameServer:
    """Listening endpoint for draughts peers."""

    def __init__(
        self,
        host: str = DEFAULT_HOST,
        port: int = DEFAULT_PORT,
        max_connections: int = len(Color),
    ):
        """Initialize server.

        Args:
            host: Host address to bind to
            port: Port number (0 picks a free port)
            max_connections: Peers to accept (one per color)
        """
        self.host = host
        self.port = port
        self.max_connections = max_connections

        self._socket: socket.socket | None = None
        self._connections: list[Connection] = []

    @property
    def connections(self) -> list[Connection]:
        """Get accepted connections in connection order."""
        return self._connections

    @property
    def address(self) -> tuple[str, int]:
        """Get the bound (host, port)."""
        if self._socket is None:
            raise RuntimeError("Server not started")
        return self._socket.getsockname()[:2]

    def start(self) -> None:
        """Bind and listen.

        Raises:
            StartupFailure: The endpoint cannot be created.
        """
        sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        try:
            sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
            sock.bind((self.host, self.port))
            sock.listen(self.max_connections)
        except OSError as e:
            sock.close()
            raise StartupFailure(self.host, self.port, str(e)) from e

        self._socket = sock
        logger.info(f"Server listening on {self.host}:{self.address[1]}")

    def accept_connections(
        self,
        on_connect: Callable[[Connection], None] | None = None,
        on_close: Callable[[Connection], None] | None = None,
    ) -> list[Connection]:
        """Accept peers until every color is taken.

        Each connection's reader thread starts after on_connect returns, so
        the greeting is sent before any inbound command is read.

        Args:
            on_connect: Called for each accepted connection
            on_close: Called from the reader thread when a peer disconnects

        Returns:
            Accepted connections
        """
        if self._socket is None:
            raise RuntimeError("Server not started")

        while len(self._connections) < self.max_connections:
            connection_id = len(self._connections)
            logger.info(f"Waiting for connection {connection_id}...")

            conn, addr = self._socket.accept()
            logger.info(f"Connection {connection_id} from {addr}")

            connection = Connection(conn, connection_id)
            self._connections.append(connection)
            if on_connect:
                on_connect(connection)
            connection.start_reader(on_close)

        return self._connections

    def close(self) -> None:
        """Close all connections and the server socket."""
        for connection in self._connections:
            connection.close()

        if self._socket:
            self._socket.close()
            self._socket = None

        self._connections = []
        logger.info("Server closed")

    def __enter__(self) -> "GameServer":
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
