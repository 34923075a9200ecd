"""Shared fixtures and board-building helpers."""

import pytest

from draughts_server.game import EnglishDraughts
from draughts_server.models import BoardSize, Color, GameState, Piece, PieceKind, Position
from draughts_server.network.channel import CommandChannel


def white(piece_id: int, x: int, y: int, king: bool = False) -> Piece:
    return Piece(
        piece_id=piece_id,
        position=Position(x=x, y=y),
        color=Color.WHITE,
        kind=PieceKind.KING if king else PieceKind.PAWN,
    )


def black(piece_id: int, x: int, y: int, king: bool = False) -> Piece:
    return Piece(
        piece_id=piece_id,
        position=Position(x=x, y=y),
        color=Color.BLACK,
        kind=PieceKind.KING if king else PieceKind.PAWN,
    )


def pos(x: int, y: int) -> Position:
    return Position(x=x, y=y)


def arrange(*pieces: Piece, to_move: Color = Color.WHITE, size: BoardSize | None = None) -> EnglishDraughts:
    """Create an engine with a custom position."""
    engine = EnglishDraughts(size)
    engine.state = GameState(pieces=list(pieces), current_color=to_move)
    return engine


@pytest.fixture
def engine():
    return EnglishDraughts()


class FakePeer:
    """Connection stand-in that records outbound commands."""

    def __init__(self, connection_id: int = 0):
        self.connection_id = connection_id
        self.channel = CommandChannel()
        self.sent = []
        self.is_closed = False

    def send_command(self, command) -> None:
        self.sent.append(command)
