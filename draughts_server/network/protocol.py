"""Command vocabulary and text encoding.

A command is a name followed by space-separated parameters, one command
per line:

- hello <color>: server -> client, assigns the color the client plays
- move <piece_id> <x> <y>: client -> server, requests a move
- moved <piece_id> <x> <y> <captured_id|-> <promoted> <end_turn>:
  server -> clients, reports an applied move (flags are 0 or 1)
"""

from pydantic import BaseModel

from draughts_server.exceptions import ProtocolDecodeError
from draughts_server.models import Color, MoveResult, Position

ENCODING = "utf-8"
TERMINATOR = "\n"

HELLO = "hello"
MOVE = "move"
MOVED = "moved"

# Number of parameters each command carries
COMMAND_ARITY: dict[str, int] = {
    HELLO: 1,
    MOVE: 3,
    MOVED: 6,
}

# Placeholder for "no captured piece"
NO_PIECE = "-"


class Command(BaseModel, frozen=True):
    """A decoded command."""

    name: str
    params: tuple[str, ...] = ()

    def __str__(self) -> str:
        return " ".join((self.name, *self.params))


class CommandBuilder:
    """Accumulates a command name and its parameters."""

    def __init__(self, name: str):
        self._name = name
        self._params: list[str] = []

    def parameter(self, value: object) -> "CommandBuilder":
        """Append a parameter (color, position, id, flag)."""
        if isinstance(value, Position):
            self._params.extend((str(value.x), str(value.y)))
        elif isinstance(value, bool):
            self._params.append("1" if value else "0")
        elif value is None:
            self._params.append(NO_PIECE)
        else:
            self._params.append(str(value))
        return self

    def build(self) -> Command:
        return Command(name=self._name, params=tuple(self._params))


def encode(command: Command) -> bytes:
    """Serialize a command to one terminated line."""
    return (str(command) + TERMINATOR).encode(ENCODING)


def decode(line: bytes | str) -> Command:
    """Parse one line into a command.

    Raises:
        ProtocolDecodeError: Empty line, unknown name or wrong parameter count.
    """
    if isinstance(line, bytes):
        try:
            line = line.decode(ENCODING)
        except UnicodeDecodeError as e:
            raise ProtocolDecodeError(f"Undecodable command: {e}") from e

    tokens = line.split()
    if not tokens:
        raise ProtocolDecodeError("Empty command")

    name, params = tokens[0], tuple(tokens[1:])
    arity = COMMAND_ARITY.get(name)
    if arity is None:
        raise ProtocolDecodeError(f"Unknown command: {name}")
    if len(params) != arity:
        raise ProtocolDecodeError(
            f"Command {name} takes {arity} parameters, got {len(params)}"
        )
    return Command(name=name, params=params)


def hello_command(color: Color) -> Command:
    return CommandBuilder(HELLO).parameter(color).build()


def move_command(piece_id: int, target: Position) -> Command:
    return CommandBuilder(MOVE).parameter(piece_id).parameter(target).build()


def moved_command(result: MoveResult) -> Command:
    """Build the report of an applied move."""
    return (
        CommandBuilder(MOVED)
        .parameter(result.piece_id)
        .parameter(result.position)
        .parameter(result.captured_id)
        .parameter(result.promoted)
        .parameter(result.end_turn)
        .build()
    )


def _expect(command: Command, name: str) -> None:
    if command.name != name or len(command.params) != COMMAND_ARITY[name]:
        raise ProtocolDecodeError(f"Expected {name} command, got: {command}")


def _parse_int(token: str) -> int:
    try:
        return int(token)
    except ValueError as e:
        raise ProtocolDecodeError(f"Not an integer: {token!r}") from e


def _parse_flag(token: str) -> bool:
    if token not in ("0", "1"):
        raise ProtocolDecodeError(f"Not a flag: {token!r}")
    return token == "1"


def parse_hello(command: Command) -> Color:
    """Get the color assigned by a hello command."""
    _expect(command, HELLO)
    try:
        return Color(command.params[0])
    except ValueError as e:
        raise ProtocolDecodeError(f"Unknown color: {command.params[0]!r}") from e


def parse_move(command: Command) -> tuple[int, Position]:
    """Get (piece_id, target) from a move command."""
    _expect(command, MOVE)
    piece_id, x, y = (_parse_int(p) for p in command.params)
    return piece_id, Position(x=x, y=y)


def parse_moved(command: Command) -> MoveResult:
    """Rebuild the MoveResult reported by a moved command."""
    _expect(command, MOVED)
    piece_id, x, y, captured, promoted, end_turn = command.params
    return MoveResult(
        piece_id=_parse_int(piece_id),
        position=Position(x=_parse_int(x), y=_parse_int(y)),
        captured_id=None if captured == NO_PIECE else _parse_int(captured),
        promoted=_parse_flag(promoted),
        end_turn=_parse_flag(end_turn),
    )
