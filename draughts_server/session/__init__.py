"""Session management."""

from .coordinator import SessionCoordinator
from .scheduler import TickScheduler

__all__ = ["SessionCoordinator", "TickScheduler"]
