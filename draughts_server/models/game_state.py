"""Game state models."""

from pydantic import BaseModel, Field

from .piece import Color, Piece, Position


class MoveResult(BaseModel, frozen=True):
    """Outcome of a successful move."""

    piece_id: int
    position: Position
    captured_id: int | None = None
    promoted: bool = False
    end_turn: bool = True

    @property
    def is_capture(self) -> bool:
        """Check if the move jumped an opponent piece."""
        return self.captured_id is not None


class GameState(BaseModel):
    """Live pieces and turn ownership.

    When chain_piece_id is set the game is in the middle of a capture
    sequence and only that piece may move.
    """

    pieces: list[Piece] = Field(default_factory=list)
    current_color: Color = Color.WHITE
    chain_piece_id: int | None = None

    def find_piece(self, piece_id: int) -> Piece | None:
        """Get the live piece with the given id."""
        for piece in self.pieces:
            if piece.piece_id == piece_id:
                return piece
        return None

    def piece_at(self, position: Position) -> Piece | None:
        """Get the piece occupying a square."""
        for piece in self.pieces:
            if piece.position == position:
                return piece
        return None

    def remove_piece(self, piece_id: int) -> Piece | None:
        """Remove a piece from the board (capture)."""
        piece = self.find_piece(piece_id)
        if piece is not None:
            self.pieces.remove(piece)
        return piece

    def count(self, color: Color) -> int:
        """Get number of live pieces of a color."""
        return sum(1 for p in self.pieces if p.color is color)

    def end_turn(self) -> None:
        """Clear the capture chain and pass the move to the opponent."""
        self.chain_piece_id = None
        self.current_color = self.current_color.opponent

    def __str__(self) -> str:
        parts = [f"{self.current_color} to move"]
        if self.chain_piece_id is not None:
            parts.append(f"[CHAIN #{self.chain_piece_id}]")
        parts.append(
            f"white={self.count(Color.WHITE)} black={self.count(Color.BLACK)}"
        )
        return " ".join(parts)
