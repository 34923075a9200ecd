"""Configuration management."""

from pathlib import Path

import yaml
from pydantic import BaseModel, Field

from draughts_server.models import BoardSize


class ServerConfig(BaseModel):
    """Server configuration."""

    host: str = "127.0.0.1"
    port: int = 8080
    tick_interval: float = Field(default=1 / 60, gt=0)  # Seconds between scheduler ticks


class GameConfig(BaseModel):
    """Game configuration."""

    variant: str = "english"
    board_width: int = 8
    board_height: int = 8

    @property
    def board_size(self) -> BoardSize:
        return BoardSize(width=self.board_width, height=self.board_height)


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = "INFO"
    show_board: bool = False


class GameLogSettings(BaseModel):
    """Move log configuration."""

    enabled: bool = False
    output_path: str = "logs"  # Directory; file name is generated per session


class Config(BaseModel):
    """Root configuration."""

    server: ServerConfig = ServerConfig()
    game: GameConfig = GameConfig()
    logging: LoggingConfig = LoggingConfig()
    game_log: GameLogSettings = GameLogSettings()


def load_config(path: Path | str | None = None) -> Config:
    """Load configuration from YAML file.

    Args:
        path: Path to config file. If None, uses default config.

    Returns:
        Config object.
    """
    if path is None:
        return Config()

    config_path = Path(path)
    if not config_path.exists():
        return Config()

    with open(config_path) as f:
        data = yaml.safe_load(f)

    return Config(**data) if data else Config()
