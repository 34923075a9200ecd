"""Tests for configuration loading."""

import pytest
from pydantic import ValidationError

from draughts_server.config import Config, load_config
from draughts_server.models import BoardSize


class TestLoadConfig:
    """Tests for load_config."""

    def test_defaults(self):
        """Test defaults when no path is given."""
        config = load_config()

        assert config.server.host == "127.0.0.1"
        assert config.server.port == 8080
        assert config.game.variant == "english"
        assert config.game.board_size == BoardSize(width=8, height=8)
        assert not config.game_log.enabled

    def test_missing_file(self, tmp_path):
        """Test a missing file falls back to defaults."""
        assert load_config(tmp_path / "nope.yaml") == Config()

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")

        assert load_config(path) == Config()

    def test_yaml_values(self, tmp_path):
        """Test values from the file override defaults."""
        path = tmp_path / "config.yaml"
        path.write_text(
            "server:\n"
            "  port: 9000\n"
            "  tick_interval: 0.1\n"
            "game:\n"
            "  board_width: 10\n"
            "  board_height: 10\n"
            "logging:\n"
            "  level: DEBUG\n"
            "  show_board: true\n"
        )

        config = load_config(str(path))

        assert config.server.port == 9000
        assert config.server.tick_interval == 0.1
        assert config.server.host == "127.0.0.1"
        assert config.game.board_size.width == 10
        assert config.logging.show_board

    def test_invalid_tick_interval(self, tmp_path):
        """Test the tick interval must be positive."""
        path = tmp_path / "config.yaml"
        path.write_text("server:\n  tick_interval: 0\n")

        with pytest.raises(ValidationError):
            load_config(path)
