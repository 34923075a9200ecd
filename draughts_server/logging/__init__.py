"""Game logging module."""

from .formatters import format_pieces, format_position
from .game_logger import GameLogConfig, GameLogger

__all__ = [
    "GameLogConfig",
    "GameLogger",
    "format_pieces",
    "format_position",
]
