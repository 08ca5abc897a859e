import pytest
import pytest_asyncio

from termirc.events import RecordingSink
from termirc.irc.models import Session
from termirc.logging_config import error_aggregator
from tests.fixtures.irc_fixtures import Client


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def session() -> Session:
    return Session(nickname="tester")


@pytest_asyncio.fixture
async def client():
    """A client that has not connected yet."""
    c = Client()
    yield c
    await c.shutdown()


@pytest_asyncio.fixture
async def connected_client():
    """A client connected over a fake transport, with registration events cleared."""
    c = Client()
    await c.connect()
    c.sink.clear()
    yield c
    await c.shutdown()


@pytest.fixture(autouse=True)
def _reset_error_aggregator():
    yield
    error_aggregator.clear()
