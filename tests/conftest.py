"""Pytest configuration and fixtures for JMRI client tests."""

from __future__ import annotations

import sys
from pathlib import Path

# Add parent directory to Python path so we can import jmri_client and tests.doubles
sys.path.insert(0, str(Path(__file__).parent.parent))

import pytest

from jmri_client.domain.value_objects import ReconnectPolicy
from jmri_client.infrastructure.transport import WebSocketClient
from tests.doubles import FakeConnector, FakeTransport


@pytest.fixture
def fake_connector() -> FakeConnector:
    """Socket factory that never touches the network."""
    return FakeConnector()


@pytest.fixture
def fast_policy() -> ReconnectPolicy:
    """Backoff policy with millisecond delays (2, 4, 8, 10, 10 ms)."""
    return ReconnectPolicy(max_attempts=5, base_delay=0.001, max_delay=0.01)


@pytest.fixture
def client(fake_connector) -> WebSocketClient:
    """Client with default target and default (slow) backoff."""
    return WebSocketClient(connector=fake_connector)


@pytest.fixture
def fast_client(fake_connector, fast_policy) -> WebSocketClient:
    """Client whose retries fire within milliseconds."""
    return WebSocketClient(connector=fake_connector, policy=fast_policy)


@pytest.fixture
def fake_transport() -> FakeTransport:
    """ITransport double that connects on the same tick."""
    return FakeTransport()
