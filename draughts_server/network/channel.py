"""Thread-safe command hand-off between a reader thread and the scheduler."""

import threading
from collections import deque

from draughts_server.exceptions import ChannelEmpty

from .protocol import Command


class CommandChannel:
    """FIFO queue of decoded commands.

    One producer (a connection's reader thread) pushes; one consumer (the
    tick scheduler) checks poll() and then calls pop(). The queue is
    unbounded.
    """

    def __init__(self):
        self._items: deque[Command] = deque()
        self._lock = threading.Lock()

    def push(self, command: Command) -> None:
        """Append a command."""
        with self._lock:
            self._items.append(command)

    def poll(self) -> bool:
        """Check whether a command is pending, without removing it."""
        with self._lock:
            return bool(self._items)

    def pop(self) -> Command:
        """Remove and return the oldest pending command.

        Raises:
            ChannelEmpty: Nothing is pending (call poll() first).
        """
        with self._lock:
            if not self._items:
                raise ChannelEmpty("pop() on an empty channel")
            return self._items.popleft()

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)
