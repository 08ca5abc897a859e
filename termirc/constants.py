"""
Configuration constants for the terminal IRC client

This module contains the tunable constants used throughout the application.
Each constant can be overridden by setting an environment variable with the same name.
"""

import os


def _get_env_int(name: str, default: int) -> int:
    """Retrieve an integer value from an environment variable.

    Attempts to parse the environment variable as an integer. If the variable
    is not set or cannot be parsed, prints a warning and returns the default value.

    Args:
        name: The name of the environment variable to read.
        default: The default integer value to return if parsing fails.

    Returns:
        The parsed integer value from the environment, or the default if unavailable.
    """
    value = os.getenv(name)
    if value is not None:
        try:
            return int(value)
        except ValueError:
            print(
                f"Warning: Invalid integer value for {name}='{value}', using default {default}"
            )
    return default


def _get_env_float(name: str, default: float) -> float:
    """Retrieve a float value from an environment variable.

    Attempts to parse the environment variable as a float. If the variable
    is not set or cannot be parsed, prints a warning and returns the default value.

    Args:
        name: The name of the environment variable to read.
        default: The default float value to return if parsing fails.

    Returns:
        The parsed float value from the environment, or the default if unavailable.
    """
    value = os.getenv(name)
    if value is not None:
        try:
            return float(value)
        except ValueError:
            print(
                f"Warning: Invalid float value for {name}='{value}', using default {default}"
            )
    return default


# Transport
DEFAULT_IRC_PORT = _get_env_int("DEFAULT_IRC_PORT", 6667)
CONNECT_TIMEOUT_SECONDS = _get_env_float(
    "CONNECT_TIMEOUT_SECONDS", 10.0
)  # Bound on opening the TCP connection; reads have no timeout
QUIT_NOTIFY_TIMEOUT_SECONDS = _get_env_float(
    "QUIT_NOTIFY_TIMEOUT_SECONDS", 2.0
)  # Best-effort QUIT on shutdown must not hang on a broken transport
READ_LINE_LIMIT_BYTES = _get_env_int(
    "READ_LINE_LIMIT_BYTES", 64 * 1024
)  # StreamReader buffer limit; longer lines are treated as a read failure

# Wire format
LINE_TERMINATOR = "\r\n"
WIRE_ENCODING = "utf-8"
CTCP_DELIMITER = "\x01"

# Session defaults
DEFAULT_USER = "termirc"
DEFAULT_REALNAME = "Terminal IRC Client"
DEFAULT_QUIT_REASON = "Quit"
DEFAULT_SHUTDOWN_QUIT_MESSAGE = "Client Disconnected"
GENERATED_NICK_PREFIX = "User"
GENERATED_NICK_RANGE = 1000

# Rendering
NICK_PALETTE_SIZE = 6
COMMAND_MARKER = "/"

# Configuration file
CONFIG_FILE_ENV = "TERMIRC_CONF_FILE"
DEFAULT_CONFIG_FILE = "termirc.json"
