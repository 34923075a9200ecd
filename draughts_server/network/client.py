"""Peer-side connection to a draughts server."""

import logging
import socket
import time

from draughts_server.models import Color, Position

from .channel import CommandChannel
from .connection import Connection
from .protocol import HELLO, Command, move_command, parse_hello
from .server import DEFAULT_HOST, DEFAULT_PORT

logger = logging.getLogger(__name__)

# Seconds between channel checks while waiting
POLL_INTERVAL = 0.01


class GameClient:
    """Connects to the server and exchanges commands.

    Commands from the server land on the client's CommandChannel, to be
    drained by the peer's own polling loop.
    """

    def __init__(self, host: str = DEFAULT_HOST, port: int = DEFAULT_PORT):
        self.host = host
        self.port = port
        self.channel = CommandChannel()
        self.color: Color | None = None
        self._connection: Connection | None = None

    def connect(self) -> None:
        """Establish the TCP connection and start reading."""
        if self._connection is not None:
            raise RuntimeError("Already connected")

        sock = socket.create_connection((self.host, self.port))
        self._connection = Connection(sock, channel=self.channel)
        self._connection.start_reader()
        logger.info(f"Connected to {self.host}:{self.port}")

    def receive(self, timeout: float = 5.0) -> Command | None:
        """Wait for the next command from the server.

        Args:
            timeout: Seconds to wait before giving up

        Returns:
            The oldest pending command, or None on timeout
        """
        deadline = time.monotonic() + timeout
        while not self.channel.poll():
            if time.monotonic() >= deadline:
                return None
            time.sleep(POLL_INTERVAL)
        return self.channel.pop()

    def wait_hello(self, timeout: float = 5.0) -> Color | None:
        """Wait for the server to assign this client a color."""
        command = self.receive(timeout)
        if command is None:
            return None
        if command.name != HELLO:
            logger.warning(f"Expected hello, got: {command}")
            return None
        self.color = parse_hello(command)
        logger.info(f"Assigned color: {self.color}")
        return self.color

    def send_move(self, piece_id: int, target: Position) -> None:
        """Request a move."""
        if self._connection is None:
            raise RuntimeError("Not connected")
        self._connection.send_command(move_command(piece_id, target))

    def close(self) -> None:
        if self._connection is not None:
            self._connection.close()
            self._connection.join(1.0)
            self._connection = None
            logger.info("Connection closed")

    def __enter__(self) -> "GameClient":
        if self._connection is None:
            self.connect()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
