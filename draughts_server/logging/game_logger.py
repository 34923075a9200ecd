"""Game logger for move-by-move replay."""

import json
from datetime import datetime
from pathlib import Path
from typing import Any, TextIO

from pydantic import BaseModel

from draughts_server.models import BoardSize, Color, MoveResult, Piece

from .formatters import format_pieces, format_position


class GameLogConfig(BaseModel):
    """Configuration for game logging."""

    enabled: bool = False
    output_path: str = "game_log.jsonl"


class GameLogger:
    """Logger for session events in JSONL format.

    Each line in the output file is a JSON object representing one event,
    so a game can be replayed move by move.
    """

    def __init__(self, config: GameLogConfig | None = None):
        """Initialize game logger.

        Args:
            config: Logging configuration. If None, logging is disabled.
        """
        self.config = config or GameLogConfig()
        self._file: TextIO | None = None
        self._move_number = 0

    def __enter__(self) -> "GameLogger":
        """Context manager entry."""
        if self.config.enabled and self.config.output_path:
            path = Path(self.config.output_path)
            path.parent.mkdir(parents=True, exist_ok=True)
            self._file = open(path, "a", encoding="utf-8")
        return self

    def __exit__(self, *args: Any) -> None:
        """Context manager exit."""
        self.close()

    def close(self) -> None:
        """Close the log file."""
        if self._file:
            self._file.close()
            self._file = None

    def _write(self, event: dict[str, Any]) -> None:
        """Write an event to the log file.

        Args:
            event: Event dictionary to write as JSON.
        """
        if self._file:
            self._file.write(json.dumps(event, ensure_ascii=False) + "\n")
            self._file.flush()

    def log_session_start(
        self,
        variant: str,
        size: BoardSize,
        pieces: list[Piece],
    ) -> None:
        """Log session start with the starting formation.

        Args:
            variant: Rule-set name.
            size: Board dimensions.
            pieces: Pieces in their starting positions.
        """
        self._move_number = 0
        self._write({
            "type": "session_start",
            "timestamp": datetime.now().isoformat(),
            "variant": variant,
            "board": {"width": size.width, "height": size.height},
            "pieces": format_pieces(pieces),
        })

    def log_player_connected(self, connection_id: int, color: Color) -> None:
        """Log a peer joining and the color it was given."""
        self._write({
            "type": "player_connected",
            "connection": connection_id,
            "color": color.value,
        })

    def log_move(self, color: Color, result: MoveResult) -> None:
        """Log an applied move.

        Args:
            color: Color that moved.
            result: Outcome reported by the rule engine.
        """
        self._move_number += 1
        self._write({
            "type": "move",
            "move": self._move_number,
            "color": color.value,
            "piece": result.piece_id,
            "to": format_position(result.position),
            "captured": result.captured_id,
            "promoted": result.promoted,
            "end_turn": result.end_turn,
        })

    def log_session_end(self, pieces: list[Piece], next_color: Color) -> None:
        """Log session end with the final position.

        Args:
            pieces: Pieces still on the board.
            next_color: Color that would move next.
        """
        self._write({
            "type": "session_end",
            "timestamp": datetime.now().isoformat(),
            "moves": self._move_number,
            "next_color": next_color.value,
            "pieces": format_pieces(pieces),
        })
