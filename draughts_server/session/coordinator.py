"""Session coordinator: the single owner of the rule engine."""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING, Protocol

from draughts_server.exceptions import EngineUnavailable, InvalidMove, ProtocolDecodeError
from draughts_server.game import RuleEngine
from draughts_server.models import BoardSize, Color, MoveResult, Piece, Position
from draughts_server.network.protocol import (
    MOVE,
    Command,
    hello_command,
    moved_command,
    parse_move,
)

if TYPE_CHECKING:
    from draughts_server.logging import GameLogger
    from draughts_server.utils.logger import BoardDisplay

logger = logging.getLogger(__name__)


class Peer(Protocol):
    """What the coordinator needs from a connection."""

    connection_id: int

    def send_command(self, command: Command) -> None: ...


class SessionCoordinator:
    """Applies peer commands to the rule engine.

    Every engine query and mutation happens while holding one lock, so all
    engine operations are totally ordered whichever thread issues them.
    Rejected or malformed requests are dropped without a reply.
    """

    def __init__(
        self,
        engine: RuleEngine | None = None,
        game_logger: GameLogger | None = None,
        display: BoardDisplay | None = None,
    ):
        """Initialize coordinator.

        Args:
            engine: Rule engine for the session (set later with start_game)
            game_logger: GameLogger for the move log
            display: BoardDisplay for console output
        """
        self.game_logger = game_logger
        self.display = display

        self._lock = threading.Lock()
        self._engine: RuleEngine | None = None
        self._peers: list[Peer] = []
        self._colors: dict[int, Color] = {}  # connection_id -> color

        if engine is not None:
            self.start_game(engine)

    def start_game(self, engine: RuleEngine) -> None:
        """Establish the engine for this session."""
        with self._lock:
            self._engine = engine
            if self.game_logger:
                self.game_logger.log_session_start(
                    engine.name, engine.board_size(), engine.list_pieces()
                )
        logger.info(f"Session started: {engine.name} on {engine.board_size()} board")

    def _require_engine(self) -> RuleEngine:
        """Get the engine. Caller holds the lock."""
        if self._engine is None:
            raise EngineUnavailable("No game in progress")
        return self._engine

    # Queries. Without an engine these return None or an empty list.

    def board_size(self) -> BoardSize | None:
        with self._lock:
            try:
                return self._require_engine().board_size()
            except EngineUnavailable:
                return None

    def current_color(self) -> Color | None:
        with self._lock:
            try:
                return self._require_engine().current_color()
            except EngineUnavailable:
                return None

    def list_pieces(self) -> list[Piece]:
        with self._lock:
            try:
                return self._require_engine().list_pieces()
            except EngineUnavailable:
                return []

    def list_moves(self, piece_id: int) -> list[Position]:
        with self._lock:
            try:
                return self._require_engine().list_moves(piece_id)
            except EngineUnavailable:
                return []

    # Peers

    @property
    def peers(self) -> list[Peer]:
        return list(self._peers)

    def color_of(self, peer: Peer) -> Color | None:
        """Get the color assigned to a peer."""
        return self._colors.get(peer.connection_id)

    def connect(self, peer: Peer) -> Color | None:
        """Register a new peer and greet it with its color.

        Colors are handed out in connection order (white first).

        Returns:
            Assigned color, or None if every color is taken
        """
        with self._lock:
            taken = set(self._colors.values())
            free = [c for c in Color if c not in taken]
            if not free:
                logger.warning(f"Connection {peer.connection_id} rejected: all colors taken")
                return None
            color = free[0]
            self._peers.append(peer)
            self._colors[peer.connection_id] = color

        peer.send_command(hello_command(color))
        logger.info(f"Connection {peer.connection_id} plays {color}")
        if self.game_logger:
            self.game_logger.log_player_connected(peer.connection_id, color)
        if self.display:
            self.display.print_player_connected(peer.connection_id, color)
        return color

    def disconnect(self, peer: Peer) -> None:
        """Stop sending to a peer. Moves it already made stand."""
        with self._lock:
            if peer in self._peers:
                self._peers.remove(peer)
        logger.info(f"Connection {peer.connection_id} left the session")
        if self.display:
            self.display.print_player_disconnected(peer.connection_id)

    # Commands

    def receive_command(self, peer: Peer, command: Command) -> None:
        """Dispatch one inbound command."""
        if command.name == MOVE:
            self._handle_move(peer, command)
        else:
            logger.debug(f"Connection {peer.connection_id}: ignoring {command.name}")

    def _handle_move(self, peer: Peer, command: Command) -> None:
        try:
            piece_id, target = parse_move(command)
        except ProtocolDecodeError as e:
            logger.debug(f"Connection {peer.connection_id}: bad move: {e}")
            return

        color = self.color_of(peer)
        if color is None:
            logger.debug(f"Connection {peer.connection_id}: no color assigned, move dropped")
            return

        result = self.apply_move(piece_id, target, color)
        if result is None:
            return

        if self.display:
            self.display.print_move(color, result)
            self.display.print_board(self.board_size(), self.list_pieces())
        self.broadcast(moved_command(result))

    def apply_move(
        self,
        piece_id: int,
        target: Position,
        color: Color | None = None,
    ) -> MoveResult | None:
        """Move a piece under the lock.

        Args:
            piece_id: Piece to move
            target: Destination square
            color: If given, the piece must be of this color

        Returns:
            MoveResult, or None if the move was rejected (state unchanged)
        """
        with self._lock:
            try:
                engine = self._require_engine()
            except EngineUnavailable:
                logger.debug(f"Move of #{piece_id} dropped: no game in progress")
                return None

            if color is not None:
                piece = engine.piece(piece_id)
                if piece is not None and piece.color is not color:
                    logger.debug(f"Move of #{piece_id} dropped: not a {color} piece")
                    return None

            mover = engine.current_color()
            try:
                result = engine.move(piece_id, target)
            except InvalidMove as e:
                logger.debug(f"Move dropped: {e}")
                return None

            if self.game_logger:
                self.game_logger.log_move(mover, result)

        logger.info(f"{mover} #{piece_id} -> {target}")
        return result

    def broadcast(self, command: Command) -> None:
        """Send a command to every connected peer."""
        for peer in self.peers:
            try:
                peer.send_command(command)
            except OSError as e:
                logger.warning(f"Connection {peer.connection_id}: send failed: {e}")

    def end_session(self) -> None:
        """Write the final position to the move log."""
        with self._lock:
            if self._engine is None or not self.game_logger:
                return
            self.game_logger.log_session_end(
                self._engine.list_pieces(), self._engine.current_color()
            )
