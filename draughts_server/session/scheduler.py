"""Fixed-interval loop that drains connection channels."""

import logging
import threading
from typing import Iterable

from draughts_server.network.connection import Connection

from .coordinator import SessionCoordinator

logger = logging.getLogger(__name__)

DEFAULT_TICK_INTERVAL = 1 / 60


class TickScheduler:
    """Single-threaded consumer of inbound commands.

    On every tick, each connection's channel is drained in connection order
    and the commands are dispatched to the coordinator. Commands queued
    before a connection closed are still delivered.
    """

    def __init__(
        self,
        coordinator: SessionCoordinator,
        connections: Iterable[Connection] = (),
        tick_interval: float = DEFAULT_TICK_INTERVAL,
        accepting: bool = False,
    ):
        """Initialize scheduler.

        Args:
            coordinator: Receiver of drained commands
            connections: Connections to drain
            tick_interval: Seconds between ticks
            accepting: More connections are still expected; the session
                is not idle until finish_accepting() is called
        """
        self.coordinator = coordinator
        self.tick_interval = tick_interval
        self._connections: list[Connection] = list(connections)
        self._stop = threading.Event()
        self._accepting = accepting
        self.ticks = 0

    def add_connection(self, connection: Connection) -> None:
        self._connections.append(connection)

    def finish_accepting(self) -> None:
        """Mark the connection list as complete."""
        self._accepting = False

    def tick(self) -> int:
        """Drain every channel once.

        Returns:
            Number of commands dispatched
        """
        self.ticks += 1
        dispatched = 0
        for connection in list(self._connections):
            channel = connection.channel
            while channel.poll():
                self.coordinator.receive_command(connection, channel.pop())
                dispatched += 1
        return dispatched

    def is_idle(self) -> bool:
        """Check if every connection is closed and fully drained."""
        if self._accepting:
            return False
        return all(c.is_closed and not c.channel.poll() for c in self._connections)

    def run(self, until_idle: bool = True) -> None:
        """Tick until stopped.

        Args:
            until_idle: Also stop once every connection has closed and its
                pending commands were dispatched
        """
        logger.info(f"Scheduler running every {self.tick_interval:.3f}s")
        while not self._stop.is_set():
            self.tick()
            if until_idle and self._connections and self.is_idle():
                logger.info("All connections closed")
                break
            self._stop.wait(self.tick_interval)
        logger.info(f"Scheduler stopped after {self.ticks} ticks")

    def stop(self) -> None:
        """Ask run() to return after the current tick."""
        self._stop.set()
