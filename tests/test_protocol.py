"""Tests for protocol module."""

import pytest

from draughts_server.exceptions import ProtocolDecodeError
from draughts_server.models import Color, MoveResult, Position
from draughts_server.network.protocol import (
    Command,
    CommandBuilder,
    decode,
    encode,
    hello_command,
    move_command,
    moved_command,
    parse_hello,
    parse_move,
    parse_moved,
)


class TestEncode:
    """Tests for command serialization."""

    def test_hello(self):
        """Test hello carries the color name."""
        assert encode(hello_command(Color.BLACK)) == b"hello black\n"

    def test_move(self):
        """Test move carries id and coordinates."""
        assert encode(move_command(9, Position(x=2, y=3))) == b"move 9 2 3\n"

    def test_moved_without_capture(self):
        """Test missing capture is written as a dash."""
        result = MoveResult(piece_id=9, position=Position(x=2, y=3))
        assert str(moved_command(result)) == "moved 9 2 3 - 0 1"

    def test_moved_with_capture(self):
        """Test capture id and flags."""
        result = MoveResult(
            piece_id=1,
            position=Position(x=3, y=7),
            captured_id=21,
            promoted=True,
            end_turn=False,
        )
        assert str(moved_command(result)) == "moved 1 3 7 21 1 0"

    def test_builder_parameters(self):
        """Test the builder flattens positions and flags."""
        command = (
            CommandBuilder("moved")
            .parameter(4)
            .parameter(Position(x=0, y=1))
            .parameter(None)
            .parameter(False)
            .parameter(True)
            .build()
        )
        assert command.params == ("4", "0", "1", "-", "0", "1")


class TestDecode:
    """Tests for command parsing."""

    def test_decode_bytes(self):
        """Test decoding a terminated line."""
        command = decode(b"move 9 2 3\n")
        assert command == Command(name="move", params=("9", "2", "3"))

    def test_decode_str_extra_whitespace(self):
        """Test tokens may be separated by runs of whitespace."""
        command = decode("  hello   white \r\n")
        assert command.name == "hello"
        assert command.params == ("white",)

    def test_empty_line(self):
        """Test blank lines are rejected."""
        with pytest.raises(ProtocolDecodeError):
            decode(b"\n")

    def test_unknown_command(self):
        """Test names outside the vocabulary are rejected."""
        with pytest.raises(ProtocolDecodeError):
            decode(b"resign white\n")

    def test_wrong_arity(self):
        """Test parameter count is checked."""
        with pytest.raises(ProtocolDecodeError):
            decode(b"move 9 2\n")
        with pytest.raises(ProtocolDecodeError):
            decode(b"hello\n")

    def test_invalid_utf8(self):
        """Test undecodable bytes are rejected."""
        with pytest.raises(ProtocolDecodeError):
            decode(b"move \xff\xfe 2 3\n")

    def test_roundtrip(self):
        """Test encode output decodes to the same command."""
        command = move_command(12, Position(x=6, y=3))
        assert decode(encode(command)) == command


class TestParse:
    """Tests for typed parameter parsing."""

    def test_parse_hello(self):
        assert parse_hello(decode("hello white")) == Color.WHITE

    def test_parse_hello_unknown_color(self):
        """Test colors outside the variant are rejected."""
        with pytest.raises(ProtocolDecodeError):
            parse_hello(decode("hello red"))

    def test_parse_move(self):
        piece_id, target = parse_move(decode("move 9 2 3"))
        assert piece_id == 9
        assert target == Position(x=2, y=3)

    def test_parse_move_not_integer(self):
        """Test non-numeric parameters are rejected."""
        with pytest.raises(ProtocolDecodeError):
            parse_move(decode("move nine 2 3"))

    def test_parse_move_wrong_command(self):
        """Test parsing a different command fails."""
        with pytest.raises(ProtocolDecodeError):
            parse_move(decode("hello white"))

    def test_parse_moved(self):
        """Test the reported result is rebuilt."""
        result = parse_moved(decode("moved 1 3 7 21 1 0"))
        assert result == MoveResult(
            piece_id=1,
            position=Position(x=3, y=7),
            captured_id=21,
            promoted=True,
            end_turn=False,
        )

    def test_parse_moved_no_capture(self):
        result = parse_moved(decode("moved 9 2 3 - 0 1"))
        assert result.captured_id is None
        assert result.end_turn

    def test_parse_moved_bad_flag(self):
        """Test flags must be 0 or 1."""
        with pytest.raises(ProtocolDecodeError):
            parse_moved(decode("moved 9 2 3 - yes 1"))
