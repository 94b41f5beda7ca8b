"""Tests for connection state machine."""

import pytest
from unittest.mock import Mock

from jmri_client.infrastructure.state_machines.connection_state_machine import (
    ConnectionStateMachine,
    ConnectionState,
    ConnectionEvent,
)


@pytest.fixture
def connected_sm():
    """State machine already in CONNECTED."""
    sm = ConnectionStateMachine()
    sm.transition(ConnectionEvent.CONNECT)
    sm.transition(ConnectionEvent.CONNECT_SUCCESS)
    return sm


class TestConnectionStateMachine:
    """Test connection state machine."""

    def test_initial_state_is_disconnected(self):
        """Test state machine starts in DISCONNECTED."""
        sm = ConnectionStateMachine()
        assert sm.state == ConnectionState.DISCONNECTED
        assert not sm.is_connected
        assert not sm.is_connecting
        assert sm.previous_state is None

    def test_only_three_states(self):
        """Test the state set is exactly disconnected/connecting/connected."""
        assert {state.name for state in ConnectionState} == {
            "DISCONNECTED",
            "CONNECTING",
            "CONNECTED",
        }

    def test_transition_connect(self):
        """Test DISCONNECTED -> CONNECTING transition."""
        sm = ConnectionStateMachine()
        assert sm.transition(ConnectionEvent.CONNECT)
        assert sm.state == ConnectionState.CONNECTING
        assert sm.is_connecting

    def test_transition_connect_success(self, connected_sm):
        """Test CONNECTING -> CONNECTED transition."""
        assert connected_sm.state == ConnectionState.CONNECTED
        assert connected_sm.is_connected
        assert connected_sm.previous_state == ConnectionState.CONNECTING

    def test_transition_connect_failed(self):
        """Test CONNECTING -> DISCONNECTED on failure."""
        sm = ConnectionStateMachine()
        sm.transition(ConnectionEvent.CONNECT)
        assert sm.transition(ConnectionEvent.CONNECT_FAILED)
        assert sm.state == ConnectionState.DISCONNECTED
        assert sm.can_connect

    def test_disconnect_while_connecting(self):
        """Test CONNECTING -> DISCONNECTED on explicit disconnect."""
        sm = ConnectionStateMachine()
        sm.transition(ConnectionEvent.CONNECT)
        assert sm.transition(ConnectionEvent.DISCONNECT)
        assert sm.state == ConnectionState.DISCONNECTED

    def test_disconnect_from_connected(self, connected_sm):
        """Test CONNECTED -> DISCONNECTED transition."""
        assert connected_sm.transition(ConnectionEvent.DISCONNECT)
        assert connected_sm.state == ConnectionState.DISCONNECTED

    def test_connection_lost(self, connected_sm):
        """Test CONNECTED -> DISCONNECTED on unsolicited closure."""
        assert connected_sm.transition(ConnectionEvent.CONNECTION_LOST)
        assert connected_sm.state == ConnectionState.DISCONNECTED
        assert not connected_sm.is_connecting

    def test_invalid_transition_returns_false(self):
        """Test invalid transitions return False."""
        sm = ConnectionStateMachine()
        # Can't go to CONNECTED from DISCONNECTED directly
        assert not sm.transition(ConnectionEvent.CONNECT_SUCCESS)
        assert not sm.transition(ConnectionEvent.CONNECTION_LOST)
        assert not sm.transition(ConnectionEvent.DISCONNECT)
        assert sm.state == ConnectionState.DISCONNECTED

    def test_connect_while_connected_rejected(self, connected_sm):
        """Test CONNECT is not valid from CONNECTED."""
        assert not connected_sm.transition(ConnectionEvent.CONNECT)
        assert connected_sm.is_connected

    def test_state_callbacks(self):
        """Test state change callbacks are invoked."""
        sm = ConnectionStateMachine()
        callback = Mock()

        sm.on_state(ConnectionState.CONNECTED, callback)

        sm.transition(ConnectionEvent.CONNECT)
        sm.transition(ConnectionEvent.CONNECT_SUCCESS)

        callback.assert_called_once()

    def test_callback_not_invoked_on_invalid_transition(self):
        """Test rejected transitions fire no callbacks."""
        sm = ConnectionStateMachine()
        callback = Mock()
        sm.on_state(ConnectionState.CONNECTED, callback)

        sm.transition(ConnectionEvent.CONNECT_SUCCESS)

        callback.assert_not_called()

    def test_can_connect_property(self):
        """Test can_connect property."""
        sm = ConnectionStateMachine()
        assert sm.can_connect  # DISCONNECTED

        sm.transition(ConnectionEvent.CONNECT)
        assert not sm.can_connect  # CONNECTING

        sm.transition(ConnectionEvent.CONNECT_SUCCESS)
        assert not sm.can_connect  # CONNECTED

    def test_callback_exception_handling(self):
        """Test callback exceptions are caught and logged."""
        sm = ConnectionStateMachine()

        def failing_callback():
            raise RuntimeError("Callback error")

        sm.on_state(ConnectionState.CONNECTED, failing_callback)

        # Should not raise, exception should be logged
        sm.transition(ConnectionEvent.CONNECT)
        sm.transition(ConnectionEvent.CONNECT_SUCCESS)

        # State should still be updated despite callback failure
        assert sm.is_connected

    def test_str_representation(self):
        """Test string representation."""
        sm = ConnectionStateMachine()
        assert "DISCONNECTED" in str(sm)

    def test_repr(self):
        """Test developer representation."""
        sm = ConnectionStateMachine()
        repr_str = repr(sm)
        assert "ConnectionStateMachine" in repr_str
        assert "DISCONNECTED" in repr_str
