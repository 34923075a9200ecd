"""Tests for the session coordinator."""

import json
import threading

import pytest

from conftest import FakePeer, arrange, black, pos, white
from draughts_server.game import EnglishDraughts
from draughts_server.logging import GameLogConfig, GameLogger
from draughts_server.models import Color
from draughts_server.network.protocol import (
    Command,
    decode,
    hello_command,
    move_command,
    parse_moved,
)
from draughts_server.session import SessionCoordinator


@pytest.fixture
def coordinator():
    return SessionCoordinator(EnglishDraughts())


@pytest.fixture
def peers(coordinator):
    white_peer, black_peer = FakePeer(0), FakePeer(1)
    coordinator.connect(white_peer)
    coordinator.connect(black_peer)
    white_peer.sent.clear()
    black_peer.sent.clear()
    return white_peer, black_peer


class TestConnect:
    """Tests for color assignment."""

    def test_colors_by_connection_order(self, coordinator):
        """Test the first peer plays white and the second black."""
        first, second = FakePeer(0), FakePeer(1)

        assert coordinator.connect(first) == Color.WHITE
        assert coordinator.connect(second) == Color.BLACK
        assert first.sent == [hello_command(Color.WHITE)]
        assert second.sent == [hello_command(Color.BLACK)]

    def test_third_peer_rejected(self, coordinator, peers):
        """Test no color is left for a third peer."""
        extra = FakePeer(2)

        assert coordinator.connect(extra) is None
        assert extra.sent == []

    def test_colors_not_reassigned(self, coordinator, peers):
        """Test a departed peer's color stays taken."""
        white_peer, _ = peers
        coordinator.disconnect(white_peer)

        assert coordinator.connect(FakePeer(2)) is None
        assert coordinator.color_of(white_peer) == Color.WHITE


class TestMoveCommand:
    """Tests for move dispatch."""

    def test_move_broadcast(self, coordinator, peers):
        """Test a legal move is reported to every peer."""
        white_peer, black_peer = peers
        coordinator.receive_command(white_peer, move_command(9, pos(2, 3)))

        assert white_peer.sent == black_peer.sent
        assert len(white_peer.sent) == 1
        result = parse_moved(white_peer.sent[0])
        assert result.piece_id == 9
        assert result.position == pos(2, 3)
        assert result.end_turn
        assert coordinator.current_color() == Color.BLACK

    def test_illegal_move_dropped(self, coordinator, peers):
        """Test a rejected move gets no reply and changes nothing."""
        white_peer, black_peer = peers
        before = coordinator.list_pieces()

        coordinator.receive_command(white_peer, move_command(9, pos(1, 3)))
        coordinator.receive_command(white_peer, move_command(404, pos(2, 3)))

        assert white_peer.sent == []
        assert black_peer.sent == []
        assert coordinator.list_pieces() == before
        assert coordinator.current_color() == Color.WHITE

    def test_opponent_piece_dropped(self, coordinator, peers):
        """Test a peer cannot move the other color's pieces."""
        white_peer, black_peer = peers
        coordinator.receive_command(black_peer, move_command(9, pos(2, 3)))

        assert white_peer.sent == []
        assert coordinator.current_color() == Color.WHITE

    def test_unassigned_peer_dropped(self, coordinator, peers):
        """Test a peer without a color cannot move."""
        stranger = FakePeer(7)
        coordinator.receive_command(stranger, move_command(9, pos(2, 3)))

        assert peers[0].sent == []
        assert coordinator.current_color() == Color.WHITE

    def test_malformed_move_dropped(self, coordinator, peers):
        """Test non-numeric parameters are ignored."""
        white_peer, _ = peers
        coordinator.receive_command(white_peer, Command(name="move", params=("a", "b", "c")))

        assert white_peer.sent == []

    def test_unknown_command_ignored(self, coordinator, peers):
        """Test commands the server does not handle are ignored."""
        white_peer, _ = peers
        coordinator.receive_command(white_peer, decode("hello black"))

        assert white_peer.sent == []

    def test_chain_reported(self):
        """Test a capture that continues reports end_turn false."""
        white_peer = FakePeer(0)
        coordinator = SessionCoordinator(
            arrange(white(1, 1, 2), black(2, 2, 3), black(3, 4, 5), black(4, 0, 7))
        )
        coordinator.connect(white_peer)
        white_peer.sent.clear()

        coordinator.receive_command(white_peer, move_command(1, pos(3, 4)))
        coordinator.receive_command(white_peer, move_command(1, pos(5, 6)))

        first, second = (parse_moved(c) for c in white_peer.sent)
        assert first.captured_id == 2
        assert not first.end_turn
        assert second.captured_id == 3
        assert second.end_turn

    def test_send_failure_does_not_stop_broadcast(self, coordinator, peers):
        """Test a dead peer does not keep others from the report."""
        white_peer, black_peer = peers

        def broken(command):
            raise ConnectionError("gone")

        white_peer.send_command = broken
        coordinator.receive_command(white_peer, move_command(9, pos(2, 3)))

        assert len(black_peer.sent) == 1


class TestEngineUnavailable:
    """Tests for queries before a game exists."""

    def test_queries_return_empty(self):
        """Test queries give empty results instead of failing."""
        coordinator = SessionCoordinator()

        assert coordinator.board_size() is None
        assert coordinator.current_color() is None
        assert coordinator.list_pieces() == []
        assert coordinator.list_moves(9) == []

    def test_move_dropped(self):
        """Test moves are dropped without a game."""
        coordinator = SessionCoordinator()
        peer = FakePeer(0)
        coordinator.connect(peer)
        peer.sent.clear()

        coordinator.receive_command(peer, move_command(9, pos(2, 3)))

        assert peer.sent == []

    def test_start_game(self):
        """Test queries work once the engine is set."""
        coordinator = SessionCoordinator()
        coordinator.start_game(EnglishDraughts())

        assert coordinator.current_color() == Color.WHITE
        assert coordinator.list_moves(9) == [pos(2, 3), pos(0, 3)]


class TestLocking:
    """Tests for serialized engine access."""

    def test_concurrent_queries_and_moves(self, coordinator):
        """Test readers on other threads always see a consistent board."""
        errors = []
        done = threading.Event()

        def read():
            while not done.is_set():
                pieces = coordinator.list_pieces()
                squares = [p.position for p in pieces]
                if len(squares) != len(set(squares)):
                    errors.append(squares)

        reader = threading.Thread(target=read)
        reader.start()
        try:
            moves = [(9, pos(2, 3)), (22, pos(3, 4)), (10, pos(4, 3))]
            for piece_id, target in moves:
                assert coordinator.apply_move(piece_id, target) is not None
        finally:
            done.set()
            reader.join()

        assert errors == []


class TestMoveLog:
    """Tests for the move log written by the coordinator."""

    def test_moves_logged(self, tmp_path):
        """Test session start, moves and session end are recorded."""
        log_path = tmp_path / "game.jsonl"
        config = GameLogConfig(enabled=True, output_path=str(log_path))

        with GameLogger(config) as game_logger:
            coordinator = SessionCoordinator(EnglishDraughts(), game_logger)
            peer = FakePeer(0)
            coordinator.connect(peer)
            coordinator.receive_command(peer, move_command(9, pos(2, 3)))
            coordinator.receive_command(peer, move_command(9, pos(3, 4)))  # not white's turn
            coordinator.end_session()

        events = [json.loads(line) for line in log_path.read_text().splitlines()]
        assert [e["type"] for e in events] == [
            "session_start",
            "player_connected",
            "move",
            "session_end",
        ]
        assert events[2]["color"] == "white"
        assert events[2]["to"] == [2, 3]
        assert events[3]["next_color"] == "black"
