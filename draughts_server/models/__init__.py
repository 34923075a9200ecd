"""Game models."""

from .game_state import GameState, MoveResult
from .piece import BoardSize, Color, Piece, PieceKind, Position

__all__ = [
    "BoardSize",
    "Color",
    "Piece",
    "PieceKind",
    "Position",
    "GameState",
    "MoveResult",
]
