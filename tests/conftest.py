import logging
import os
import sys

import pytest
import requests

# Ensure project root in path
ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from statprobe.config.config import Config


class FakeResponse:
    def __init__(self, content=b"", status_code=200, on_chunk=None, error=None):
        self.content = content
        self.status_code = status_code
        self.on_chunk = on_chunk
        self.error = error
        self.closed = False

    def iter_content(self, chunk_size=1):
        for start in range(0, len(self.content), chunk_size):
            if self.on_chunk:
                self.on_chunk()
            yield self.content[start:start + chunk_size]
        if self.error:
            raise self.error

    def close(self):
        self.closed = True


class FakeSession:
    """Stand-in for requests.Session replaying queued responses or exceptions."""

    def __init__(self, outcomes=()):
        self.outcomes = list(outcomes)
        self.calls = []
        self.streamed = []
        self.closed = False

    def queue(self, outcome):
        self.outcomes.append(outcome)

    def get(self, url, timeout=None, stream=False):
        self.calls.append((url, timeout))
        self.streamed.append(stream)
        if not self.outcomes:
            raise requests.ConnectionError("no more responses")
        outcome = self.outcomes.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        if isinstance(outcome, str):
            outcome = FakeResponse(outcome.encode("utf-8"))
        return outcome

    def close(self):
        self.closed = True


class FakeClock:
    def __init__(self, start=0.0):
        self.now = start
        self.sleeps = []

    def __call__(self):
        return self.now

    def sleep(self, seconds):
        self.sleeps.append(seconds)
        self.now += seconds


class RecordingPrinter:
    def __init__(self):
        self.alerts = []

    def print_alert(self, alert):
        self.alerts.append(alert)

    @property
    def messages(self):
        return [alert.message for alert in self.alerts]


@pytest.fixture
def config():
    return Config(stats_url="http://stats.test/_stats")


@pytest.fixture
def session():
    return FakeSession()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def printer():
    return RecordingPrinter()


@pytest.fixture(autouse=True)
def reset_package_logger():
    yield
    logger = logging.getLogger("statprobe")
    for handler in list(logger.handlers):
        handler.close()
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
