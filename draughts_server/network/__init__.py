"""Network communication."""

from .channel import CommandChannel
from .client import GameClient
from .connection import Connection
from .protocol import Command, decode, encode
from .server import GameServer

__all__ = [
    "Command",
    "CommandChannel",
    "Connection",
    "GameClient",
    "GameServer",
    "decode",
    "encode",
]
