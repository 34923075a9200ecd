"""English draughts rules."""

import logging
from dataclasses import dataclass

from draughts_server.exceptions import IllegalMove, NoSuchPiece
from draughts_server.models import (
    BoardSize,
    Color,
    GameState,
    MoveResult,
    Piece,
    PieceKind,
    Position,
)

from .rules import RuleEngine

logger = logging.getLogger(__name__)

# Rows of pieces each side starts with
START_ROWS = 3

# Horizontal directions checked for every piece
SIDEWAYS = (1, -1)


@dataclass
class CandidateMove:
    """A destination found by move generation."""

    position: Position
    captured_id: int | None = None

    @property
    def is_capture(self) -> bool:
        return self.captured_id is not None


class EnglishDraughts(RuleEngine):
    """English draughts (checkers).

    Pawns move and capture diagonally forward, kings in all four diagonal
    directions, one square at a time. Captures are mandatory and chain
    within a turn for as long as the moving piece can keep capturing.
    """

    name = "english"

    def __init__(self, size: BoardSize | None = None):
        """Initialize with the standard starting formation.

        Args:
            size: Board dimensions (8x8 if not provided)
        """
        self.size = size or BoardSize()
        if self.size.height < 2 * START_ROWS:
            raise ValueError(
                f"Board height must be at least {2 * START_ROWS}, got {self.size.height}"
            )
        if self.size.width % 2:
            raise ValueError(f"Board width must be even, got {self.size.width}")
        self.state = GameState(pieces=self._initial_pieces())
        logger.debug(f"New {self.name} game on {self.size} board")

    def _initial_pieces(self) -> list[Piece]:
        """Place three rows per side on alternating squares.

        White fills rows 0-2, black the last three rows. Ids start at 1,
        white first.
        """
        pieces: list[Piece] = []
        white_rows = range(START_ROWS)
        black_rows = range(self.size.height - 1, self.size.height - 1 - START_ROWS, -1)

        for color, rows in ((Color.WHITE, white_rows), (Color.BLACK, black_rows)):
            for y in rows:
                for x in range(0, self.size.width, 2):
                    pieces.append(
                        Piece(
                            piece_id=len(pieces) + 1,
                            position=Position(x=x + (y + 1) % 2, y=y),
                            color=color,
                        )
                    )
        return pieces

    def board_size(self) -> BoardSize:
        return self.size

    def current_color(self) -> Color:
        return self.state.current_color

    def list_pieces(self) -> list[Piece]:
        return [piece.model_copy() for piece in self.state.pieces]

    def snapshot(self) -> GameState:
        return self.state.model_copy(deep=True)

    def list_moves(self, piece_id: int) -> list[Position]:
        piece = self.state.find_piece(piece_id)
        if piece is None:
            return []
        must_capture = self._current_color_has_captures()
        return [m.position for m in self._piece_moves(piece, must_capture)]

    def move(self, piece_id: int, target: Position) -> MoveResult:
        piece = self.state.find_piece(piece_id)
        if piece is None:
            raise NoSuchPiece(piece_id)

        must_capture = self._current_color_has_captures()
        chosen = None
        for candidate in self._piece_moves(piece, must_capture):
            if candidate.position == target:
                chosen = candidate
                break
        if chosen is None:
            raise IllegalMove(piece_id, target)

        piece.position = chosen.position
        if chosen.is_capture:
            self.state.remove_piece(chosen.captured_id)

        # Promotion is decided before looking for a follow-up capture, so a
        # newly crowned king continues the chain with king moves.
        promoted = (
            piece.kind is PieceKind.PAWN
            and piece.position.y == self.size.far_rank(piece.color)
        )
        if promoted:
            piece.kind = PieceKind.KING

        continues = chosen.is_capture and bool(self._piece_captures(piece))
        if continues:
            self.state.chain_piece_id = piece.piece_id
        else:
            self.state.end_turn()

        result = MoveResult(
            piece_id=piece_id,
            position=chosen.position,
            captured_id=chosen.captured_id,
            promoted=promoted,
            end_turn=not continues,
        )
        logger.debug(f"Moved #{piece_id} to {target}: {result}")
        return result

    def _current_color_has_captures(self) -> bool:
        """Check the mandatory-capture rule for the color to move."""
        return any(
            self._piece_captures(piece)
            for piece in self.state.pieces
            if piece.color is self.state.current_color
        )

    def _piece_captures(self, piece: Piece) -> list[CandidateMove]:
        return self._piece_moves(piece, must_capture=True)

    def _piece_moves(self, piece: Piece, must_capture: bool) -> list[CandidateMove]:
        """Generate the destinations of one piece.

        Args:
            piece: Piece to move
            must_capture: If True, only capturing moves are listed

        Returns:
            Candidate moves in direction order: forward right, forward left,
            then (kings only) backward right, backward left.
        """
        chain_piece_id = self.state.chain_piece_id
        if chain_piece_id is not None and chain_piece_id != piece.piece_id:
            return []
        if piece.color is not self.state.current_color:
            return []

        must_capture = must_capture or chain_piece_id is not None
        forward = piece.color.forward
        row_directions = (forward, -forward) if piece.is_king else (forward,)

        moves = []
        for dy in row_directions:
            for dx in SIDEWAYS:
                candidate = self._check_direction(piece, dx, dy, must_capture)
                if candidate is not None:
                    moves.append(candidate)
        return moves

    def _check_direction(
        self,
        piece: Piece,
        dx: int,
        dy: int,
        must_capture: bool,
    ) -> CandidateMove | None:
        """Check one diagonal step (or jump) from the piece's square."""
        adjacent = piece.position.offset(dx, dy)
        if not self.size.contains(adjacent):
            return None

        occupant = self.state.piece_at(adjacent)
        if occupant is None:
            return None if must_capture else CandidateMove(adjacent)

        if occupant.color is piece.color:
            return None

        landing = adjacent.offset(dx, dy)
        if not self.size.contains(landing) or self.state.piece_at(landing) is not None:
            return None

        return CandidateMove(landing, captured_id=occupant.piece_id)
