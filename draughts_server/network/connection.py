"""A connected peer: outbound writes and a blocking reader thread."""

import logging
import socket
import threading
from typing import Callable

from draughts_server.exceptions import ProtocolDecodeError

from .channel import CommandChannel
from .protocol import Command, decode, encode

logger = logging.getLogger(__name__)


class Connection:
    """Bidirectional command stream over a socket.

    Inbound lines are decoded on a dedicated reader thread and pushed onto
    the connection's own CommandChannel. Malformed lines are ignored.
    """

    def __init__(
        self,
        sock: socket.socket,
        connection_id: int = 0,
        channel: CommandChannel | None = None,
    ):
        """Initialize connection.

        Args:
            sock: Connected socket
            connection_id: Order in which the peer connected
            channel: Channel receiving decoded commands (creates one if not provided)
        """
        self.connection_id = connection_id
        self.channel = channel or CommandChannel()

        self._socket: socket.socket | None = sock
        self._send_lock = threading.Lock()
        self._reader: threading.Thread | None = None
        self._closed = threading.Event()
        self._on_close: Callable[["Connection"], None] | None = None

    @property
    def is_closed(self) -> bool:
        """Check if the reader has stopped or the socket was closed."""
        return self._closed.is_set()

    def start_reader(self, on_close: Callable[["Connection"], None] | None = None) -> None:
        """Start the reader thread.

        Args:
            on_close: Called from the reader thread once input ends
        """
        if self._reader is not None:
            raise RuntimeError(f"Reader for connection {self.connection_id} already started")

        self._on_close = on_close
        self._reader = threading.Thread(
            target=self._read_loop,
            name=f"reader-{self.connection_id}",
            daemon=True,
        )
        self._reader.start()

    def _read_loop(self) -> None:
        """Decode lines until the peer disconnects."""
        sock = self._socket
        if sock is None:
            return

        try:
            with sock.makefile("rb") as stream:
                for line in stream:
                    try:
                        command = decode(line)
                    except ProtocolDecodeError as e:
                        logger.warning(f"Connection {self.connection_id}: ignoring command: {e}")
                        continue
                    logger.debug(f"Connection {self.connection_id} <- {command}")
                    self.channel.push(command)
        except OSError as e:
            if not self.is_closed:
                logger.info(f"Connection {self.connection_id} read failed: {e}")
        finally:
            self._closed.set()
            logger.info(f"Connection {self.connection_id} reader stopped")
            if self._on_close:
                self._on_close(self)

    def send_command(self, command: Command) -> None:
        """Write one command to the peer.

        Raises:
            ConnectionError: The connection is closed.
        """
        with self._send_lock:
            sock = self._socket
            if sock is None:
                raise ConnectionError(f"Connection {self.connection_id} closed")
            sock.sendall(encode(command))
        logger.debug(f"Connection {self.connection_id} -> {command}")

    def join(self, timeout: float | None = None) -> None:
        """Wait for the reader thread to finish."""
        if self._reader is not None:
            self._reader.join(timeout)

    def close(self) -> None:
        """Close the socket, which also ends the reader thread."""
        self._closed.set()
        with self._send_lock:
            sock, self._socket = self._socket, None
        if sock is None:
            return
        try:
            sock.shutdown(socket.SHUT_RDWR)
        except OSError:
            pass  # Peer already gone
        sock.close()

    def __repr__(self) -> str:
        state = "closed" if self.is_closed else "open"
        return f"Connection(id={self.connection_id}, {state})"
