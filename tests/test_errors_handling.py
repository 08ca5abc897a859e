"""Tests for errors/handling.py and the error hierarchy."""

import logging

import pytest

from termirc.errors import (
    AlreadyConnectedError,
    ClientError,
    ConnectFailure,
    NotConnectedError,
    TransportFailure,
    UsageError,
    log_error,
)
from termirc.errors.handling import error_type_for
from termirc.logging_config import error_aggregator


@pytest.mark.parametrize(
    "error, expected",
    [
        (ConnectFailure("x"), "network"),
        (TransportFailure("x"), "network"),
        (ConnectionResetError(), "network"),
        (AlreadyConnectedError("x"), "state"),
        (NotConnectedError("x"), "state"),
        (UsageError("x"), "usage"),
        (ClientError("x"), "internal"),
        (ValueError("x"), "unknown"),
    ],
)
def test_error_type_for(error, expected):
    assert error_type_for(error) == expected


def test_client_error_copies_data():
    data = {"host": "irc.example.org"}
    error = ConnectFailure("Connection failed", data=data)
    data["host"] = "changed"
    assert error.data == {"host": "irc.example.org"}
    assert str(error) == "Connection failed"


def test_client_error_without_data():
    assert UsageError("bad").data == {}


def test_log_error_merges_error_data_and_context(caplog):
    error = ConnectFailure("Connection failed: refused", data={"host": "h", "port": 6667})
    with caplog.at_level(logging.WARNING):
        log_error("Command failed", error, context={"port": 7000}, level=logging.WARNING)
    assert "[NETWORK] Command failed: Connection failed: refused" in caplog.text
    assert "host=h | port=7000" in caplog.text
    last = error_aggregator.get_error_summary()["network"]["last_occurrence"]
    assert last["context"] == {"host": "h", "port": 7000}


def test_log_error_default_level_is_error(caplog):
    with caplog.at_level(logging.WARNING):
        log_error("Top-level error", RuntimeError("boom"))
    assert caplog.records[-1].levelno == logging.ERROR
    assert "[UNKNOWN] Top-level error: boom | Exception: RuntimeError" in caplog.text
