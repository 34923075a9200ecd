"""Logging utilities and board display."""

import logging
import sys
from typing import TYPE_CHECKING

from draughts_server.models import Color, PieceKind, Position

if TYPE_CHECKING:
    from draughts_server.models import BoardSize, MoveResult, Piece

# Board glyphs: pawns lowercase, kings uppercase
PIECE_SYMBOLS = {
    (Color.WHITE, PieceKind.PAWN): "w",
    (Color.WHITE, PieceKind.KING): "W",
    (Color.BLACK, PieceKind.PAWN): "b",
    (Color.BLACK, PieceKind.KING): "B",
}
EMPTY_SQUARE = "."


def setup_logging(level: str = "INFO") -> None:
    """Configure logging for the application.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR)
    """
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stdout,
    )


def render_board(size: "BoardSize", pieces: list["Piece"]) -> str:
    """Draw the board as text, highest row first.

    Args:
        size: Board dimensions
        pieces: Live pieces

    Returns:
        One line per row, prefixed with the row number, followed by a
        line of column numbers.
    """
    by_square = {p.position: p for p in pieces}
    lines = []
    for y in range(size.height - 1, -1, -1):
        squares = []
        for x in range(size.width):
            piece = by_square.get(Position(x=x, y=y))
            squares.append(
                PIECE_SYMBOLS[(piece.color, piece.kind)] if piece else EMPTY_SQUARE
            )
        lines.append(f"{y:>2} " + " ".join(squares))
    lines.append("   " + " ".join(str(x % 10) for x in range(size.width)))
    return "\n".join(lines)


class BoardDisplay:
    """Display session events to stdout."""

    def __init__(self, show_board: bool = False):
        """Initialize display.

        Args:
            show_board: Whether to draw the board after each move
        """
        self.show_board = show_board

    def print_separator(self) -> None:
        """Print a separator line."""
        print("=" * 40)

    def print_board(self, size: "BoardSize", pieces: list["Piece"]) -> None:
        """Draw the board (if show_board is enabled)."""
        if not self.show_board:
            return
        print(render_board(size, pieces))

    def print_player_connected(self, connection_id: int, color: Color) -> None:
        """Print player connection message."""
        print(f"Player {connection_id} connected: {color}")

    def print_move(self, color: Color, result: "MoveResult") -> None:
        """Print an applied move."""
        parts = [f"{color} #{result.piece_id} -> {result.position}"]
        if result.captured_id is not None:
            parts.append(f"captures #{result.captured_id}")
        if result.promoted:
            parts.append("[KING]")
        if not result.end_turn:
            parts.append("(continues)")
        print("  " + " ".join(parts))

    def print_player_disconnected(self, connection_id: int) -> None:
        print(f"Player {connection_id} disconnected")
