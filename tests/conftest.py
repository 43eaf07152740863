"""Shared fixtures: a testing app, its queue and a recording fake mailer."""

from __future__ import annotations

import logging
import threading
from typing import List, Optional, Tuple

import pytest

from linkdump import create_app
from linkdump.config import TestingConfig
from linkdump.errors import TransportExecutionError
from linkdump.managers.flush_manager import FlushController
from linkdump.managers.queue_store import LinkQueue
from linkdump.settings import FlushConfig


class FakeTransport:
    """Records every message; fails with `error` when one is set."""

    def __init__(self, error: Optional[Exception] = None) -> None:
        self.error = error
        self.sent: List[Tuple[str, str]] = []
        self.started = threading.Event()
        self.release: Optional[threading.Event] = None

    def send(self, recipient: str, message: str) -> str:
        self.started.set()
        if self.release is not None:
            self.release.wait(timeout=5)
        if self.error is not None:
            raise self.error
        self.sent.append((recipient, message))
        return "ok"


@pytest.fixture
def logger():
    return logging.getLogger("linkdump_tests")


@pytest.fixture
def transport():
    return FakeTransport()


@pytest.fixture
def failing_transport():
    return FakeTransport(TransportExecutionError("mailer exited with status 78", returncode=78, output="msmtp: no account"))


@pytest.fixture
def queue(logger):
    return LinkQueue(logger=logger)


@pytest.fixture
def make_controller(queue, logger):
    def _make(transport, min_links: int = 10) -> FlushController:
        return FlushController(
            queue=queue,
            config=FlushConfig(min_links=min_links, email_addr="me@localhost"),
            transport=transport,
            logger=logger,
        )
    return _make


@pytest.fixture
def app(transport):
    return create_app(TestingConfig, transport=transport)


@pytest.fixture
def client(app):
    return app.test_client()
