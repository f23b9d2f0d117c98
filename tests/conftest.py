# tests/conftest.py
import logging
import pytest
import pytest_asyncio
from core.capability import AllowAll
from core.kinds import FUND_NEWS, NEWS
from core.monitor import JobMonitor
from core.notifier import NoticeBoard
from fakes import POLL, FakeBackend
from service.job_status_client import JobStatusClient

pytest_plugins = ["pytest_asyncio"]

logging.basicConfig(level=logging.DEBUG)


def pytest_configure(config):
    config.addinivalue_line("markers", "asyncio: mark test as an asyncio test")


@pytest.fixture
def backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture
def notices() -> NoticeBoard:
    return NoticeBoard(capacity=50)


@pytest_asyncio.fixture
async def http(backend):
    client = backend.client()
    try:
        yield client
    finally:
        await client.aclose()


@pytest_asyncio.fixture
async def make_monitor(http, notices):
    created = []

    def _make(spec=NEWS, gate=None, poll=POLL) -> JobMonitor:
        monitor = JobMonitor(
            JobStatusClient(spec, http), gate or AllowAll(), notices, poll_interval=poll
        )
        created.append(monitor)
        return monitor

    yield _make
    # Monitors left polling by a failing test must not leak into the next one
    for monitor in created:
        await monitor.close()


@pytest.fixture
def news_monitor(make_monitor) -> JobMonitor:
    return make_monitor(NEWS)


@pytest.fixture
def fund_monitor(make_monitor) -> JobMonitor:
    return make_monitor(FUND_NEWS)
