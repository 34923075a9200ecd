"""Formatters for game log output."""

from draughts_server.models import Piece, Position


def format_position(position: Position) -> list[int]:
    """Format a position as [x, y]."""
    return [position.x, position.y]


def format_piece(piece: Piece) -> dict[str, object]:
    """Format a piece to a JSON-ready dict.

    Args:
        piece: Piece to format.

    Returns:
        Dict with id, color, kind and position.
    """
    return {
        "id": piece.piece_id,
        "color": piece.color.value,
        "kind": piece.kind.value,
        "position": format_position(piece.position),
    }


def format_pieces(pieces: list[Piece]) -> list[dict[str, object]]:
    """Format pieces ordered by id."""
    return [format_piece(p) for p in sorted(pieces, key=lambda p: p.piece_id)]
