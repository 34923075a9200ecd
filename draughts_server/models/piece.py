"""Piece and board geometry models."""

from enum import Enum

from pydantic import BaseModel, Field


class Color(str, Enum):
    """Piece color. White moves first."""

    WHITE = "white"
    BLACK = "black"

    @property
    def opponent(self) -> "Color":
        """Get the other color."""
        return Color.BLACK if self is Color.WHITE else Color.WHITE

    @property
    def forward(self) -> int:
        """Row direction a pawn of this color moves in."""
        return 1 if self is Color.WHITE else -1

    def __str__(self) -> str:
        return self.value


class PieceKind(str, Enum):
    """Piece kind."""

    PAWN = "pawn"
    KING = "king"  # Promoted pawn, may move backwards

    def __str__(self) -> str:
        return self.value


class Position(BaseModel, frozen=True):
    """Board coordinate. (0, 0) is white's home corner."""

    x: int
    y: int

    def offset(self, dx: int, dy: int) -> "Position":
        """Get the position shifted by (dx, dy)."""
        return Position(x=self.x + dx, y=self.y + dy)

    def __str__(self) -> str:
        return f"({self.x}, {self.y})"

    def __repr__(self) -> str:
        return f"Position({self.x}, {self.y})"


class BoardSize(BaseModel, frozen=True):
    """Board dimensions in squares."""

    width: int = Field(default=8, ge=4)
    height: int = Field(default=8, ge=4)

    def contains(self, position: Position) -> bool:
        """Check if a position lies on the board."""
        return 0 <= position.x < self.width and 0 <= position.y < self.height

    def far_rank(self, color: Color) -> int:
        """Get the row farthest from the given color's home side."""
        return self.height - 1 if color is Color.WHITE else 0

    def __str__(self) -> str:
        return f"{self.width}x{self.height}"


class Piece(BaseModel):
    """A piece on the board.

    The id never changes and is never reused within a game. Position and
    kind change only through the rule engine.
    """

    piece_id: int
    position: Position
    color: Color
    kind: PieceKind = PieceKind.PAWN

    @property
    def is_king(self) -> bool:
        """Check if the piece has been promoted."""
        return self.kind is PieceKind.KING

    def __str__(self) -> str:
        return f"{self.color} {self.kind} #{self.piece_id} at {self.position}"
