"""Main entry point for the draughts server."""

import argparse
import logging
import sys
import threading
from datetime import datetime
from pathlib import Path

from draughts_server.config import Config, load_config
from draughts_server.exceptions import StartupFailure, UnknownVariant
from draughts_server.game import VARIANTS, create_engine
from draughts_server.logging import GameLogConfig, GameLogger
from draughts_server.network.connection import Connection
from draughts_server.network.server import GameServer
from draughts_server.session import SessionCoordinator, TickScheduler
from draughts_server.utils.logger import BoardDisplay, setup_logging

logger = logging.getLogger(__name__)


def generate_log_filename(log_dir: str, variant: str) -> str:
    """Generate log filename with timestamp and variant.

    Format: {ISO timestamp}_{variant}.jsonl

    Args:
        log_dir: Directory for log files.
        variant: Rule-set name.

    Returns:
        Full path to log file.
    """
    timestamp = datetime.now().strftime("%Y%m%dT%H%M%S")
    return str(Path(log_dir) / f"{timestamp}_{variant}.jsonl")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="English draughts game server")
    parser.add_argument(
        "-c",
        "--config",
        type=Path,
        help="Path to config file (YAML)",
    )
    parser.add_argument(
        "-H",
        "--host",
        help="Host address to bind (overrides config)",
    )
    parser.add_argument(
        "-p",
        "--port",
        type=int,
        help="Server port (overrides config)",
    )
    parser.add_argument(
        "-W",
        "--width",
        type=int,
        help="Board width (overrides config)",
    )
    parser.add_argument(
        "-L",
        "--height",
        type=int,
        help="Board height (overrides config)",
    )
    parser.add_argument(
        "--variant",
        choices=sorted(VARIANTS),
        help="Rule set (overrides config)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose output",
    )
    parser.add_argument(
        "--show-board",
        action="store_true",
        help="Draw the board after every move",
    )
    parser.add_argument(
        "--game-log",
        type=Path,
        help="Directory for game log files (filename auto-generated)",
    )
    return parser.parse_args(argv)


def apply_overrides(config: Config, args: argparse.Namespace) -> Config:
    """Apply command-line overrides to the loaded config."""
    if args.host:
        config.server.host = args.host
    if args.port is not None:
        config.server.port = args.port
    if args.width:
        config.game.board_width = args.width
    if args.height:
        config.game.board_height = args.height
    if args.variant:
        config.game.variant = args.variant
    if args.verbose:
        config.logging.level = "DEBUG"
    if args.show_board:
        config.logging.show_board = True
    if args.game_log is not None:
        config.game_log.enabled = True
        config.game_log.output_path = str(args.game_log)
    return config


def run_session(config: Config, display: BoardDisplay) -> int:
    """Host one game until both peers have left.

    Returns:
        Exit code
    """
    if config.game_log.enabled:
        log_path = generate_log_filename(config.game_log.output_path, config.game.variant)
        game_log_config = GameLogConfig(enabled=True, output_path=log_path)
        print(f"Game log: {log_path}")
    else:
        game_log_config = GameLogConfig(enabled=False)

    engine = create_engine(config.game.variant, config.game.board_size)

    with GameServer(host=config.server.host, port=config.server.port) as server:
        with GameLogger(game_log_config) as game_logger:
            coordinator = SessionCoordinator(engine, game_logger, display)
            display.print_board(engine.board_size(), engine.list_pieces())

            scheduler = TickScheduler(
                coordinator, tick_interval=config.server.tick_interval, accepting=True
            )

            def on_connect(connection: Connection) -> None:
                coordinator.connect(connection)
                scheduler.add_connection(connection)

            # Moves are applied while the remaining seats are still open
            ticker = threading.Thread(target=scheduler.run, name="scheduler", daemon=True)
            ticker.start()

            print(f"Waiting for {server.max_connections} players to connect...")
            try:
                server.accept_connections(
                    on_connect=on_connect,
                    on_close=coordinator.disconnect,
                )
                scheduler.finish_accepting()
                display.print_separator()
                ticker.join()
            finally:
                scheduler.stop()
                coordinator.end_session()

    return 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point.

    Returns:
        Exit code (0 for success)
    """
    args = parse_args(argv)

    # Load config
    config = apply_overrides(load_config(args.config), args)

    # Setup logging
    setup_logging(config.logging.level)

    display = BoardDisplay(show_board=config.logging.show_board)

    print("Draughts server starting...")
    print(f"Endpoint: {config.server.host}:{config.server.port}")
    print(f"Variant: {config.game.variant} ({config.game.board_width}x{config.game.board_height})")
    print()

    try:
        return run_session(config, display)
    except StartupFailure as e:
        logger.error(str(e))
        print("error: failed to start the server")
        return 1
    except (UnknownVariant, ValueError) as e:
        print(f"error: {e}")
        return 1
    except KeyboardInterrupt:
        print("\nServer interrupted by user")
        return 1


if __name__ == "__main__":
    sys.exit(main())
