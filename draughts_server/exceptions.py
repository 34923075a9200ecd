"""Exceptions raised by the draughts server."""


class DraughtsError(Exception):
    """Base class for all draughts server errors."""


class StartupFailure(DraughtsError):
    """The listening endpoint could not be created."""

    def __init__(self, host: str, port: int, reason: str = ""):
        self.host = host
        self.port = port
        message = f"Cannot listen on {host}:{port}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class InvalidMove(DraughtsError):
    """A move request was rejected by the rule engine."""


class NoSuchPiece(InvalidMove):
    """No live piece has the requested id."""

    def __init__(self, piece_id: int):
        self.piece_id = piece_id
        super().__init__(f"Piece {piece_id} not found")


class IllegalMove(InvalidMove):
    """Target square is not among the piece's legal destinations."""

    def __init__(self, piece_id: int, target):
        self.piece_id = piece_id
        self.target = target
        super().__init__(f"Piece {piece_id} cannot move to {target}")


class ProtocolDecodeError(DraughtsError):
    """Command text is malformed or unrecognized."""


class EngineUnavailable(DraughtsError):
    """No rule engine has been established for the session."""


class ChannelEmpty(DraughtsError):
    """pop() was called on a channel without a pending command."""


class UnknownVariant(DraughtsError):
    """Requested rule-set variant is not registered."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unknown variant: {name}")
