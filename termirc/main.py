#!/usr/bin/env python3
"""
Main entry point for the terminal IRC client
"""

import argparse
import asyncio
import logging
import sys
from collections.abc import Sequence

from pydantic import ValidationError

from .commands import CommandDispatcher
from .config import ClientConfig, ConfigLoader
from .errors import ClientError, log_error
from .irc.connection import ConnectionManager
from .logging_config import LoggerConfigurator
from .shell import InteractiveShell
from .ui import ConsoleRenderer


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="termirc", description="Interactive terminal IRC client"
    )
    parser.add_argument("--config", help="Path to a JSON config file")
    parser.add_argument("--server", help="Connect to this server at startup")
    parser.add_argument("--port", type=int, help="Port for --server")
    parser.add_argument("--nick", dest="nickname", help="Nickname to register with")
    parser.add_argument(
        "--no-color", dest="colors", action="store_const", const=False,
        help="Disable ANSI colors",
    )
    parser.add_argument(
        "--debug", dest="log_level", action="store_const", const="DEBUG",
        help="Verbose diagnostic logging on stderr",
    )
    return parser


def load_config(argv: Sequence[str] | None = None) -> ClientConfig:
    args = build_parser().parse_args(argv)
    overrides = {
        "server": args.server,
        "port": args.port,
        "nickname": args.nickname,
        "colors": args.colors,
        "log_level": args.log_level,
    }
    return ConfigLoader(args.config).load(overrides)


async def main(config: ClientConfig) -> None:
    """Wire the client together and run the shell until it exits.

    Args:
        config: Effective configuration.
    """
    session = config.build_session()
    renderer = ConsoleRenderer(colors=config.colors, bell=config.bell)
    connection = ConnectionManager(session, renderer, connect_timeout=config.connect_timeout)
    dispatcher = CommandDispatcher(
        session, connection, renderer, default_port=config.default_port
    )
    shell = InteractiveShell(
        dispatcher,
        connection,
        renderer,
        shutdown_quit_message=config.shutdown_quit_message,
    )

    if config.server:
        try:
            await connection.connect(config.server, config.port or config.default_port)
        except ClientError as e:
            dispatcher.report_error(e)

    await shell.run()


def run(argv: Sequence[str] | None = None) -> None:
    """Synchronous entry point for the application.

    Exits with status 0 on end of input, ``/quit`` or Ctrl-C.
    """
    try:
        config = load_config(argv)
    except ValidationError as e:
        print(f"Invalid option: {e}", file=sys.stderr)
        sys.exit(2)

    LoggerConfigurator(config.log_level, use_color=config.colors).configure()
    try:
        asyncio.run(main(config))
    except KeyboardInterrupt:
        logging.debug("⌨️ Interrupted by user")
        sys.exit(0)
    except Exception as e:
        log_error("Top-level error", e)
        sys.exit(1)
    sys.exit(0)


if __name__ == "__main__":
    run()
