"""Rule-set interface shared by all draughts variants."""

from abc import ABC, abstractmethod

from draughts_server.models import BoardSize, Color, GameState, MoveResult, Piece, Position


class RuleEngine(ABC):
    """Authoritative game state plus move legality and execution.

    Implementations are not thread-safe; callers serialize access.
    """

    name: str = ""

    @abstractmethod
    def board_size(self) -> BoardSize:
        """Get the board dimensions."""

    @abstractmethod
    def current_color(self) -> Color:
        """Get the color to move."""

    @abstractmethod
    def list_pieces(self) -> list[Piece]:
        """Get a snapshot of the live pieces.

        The returned pieces are copies; changing them does not affect the
        engine.
        """

    @abstractmethod
    def list_moves(self, piece_id: int) -> list[Position]:
        """Get the legal destinations of a piece.

        Returns an empty list if the piece does not exist or may not move
        this turn.
        """

    @abstractmethod
    def move(self, piece_id: int, target: Position) -> MoveResult:
        """Move a piece.

        Raises:
            NoSuchPiece: The id is unknown.
            IllegalMove: The target is not a legal destination.
        """

    @abstractmethod
    def snapshot(self) -> GameState:
        """Get a deep copy of the full game state."""

    def piece(self, piece_id: int) -> Piece | None:
        """Get a copy of a single live piece."""
        for piece in self.list_pieces():
            if piece.piece_id == piece_id:
                return piece
        return None
