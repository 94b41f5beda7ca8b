"""Tests for connection decorator."""

import pytest
from unittest.mock import Mock
from dataclasses import dataclass

from jmri_client.infrastructure.decorators.connection_decorator import (
    require_connection,
)


@dataclass
class Result:
    success: bool
    error: str = ""


def make_owner(active: bool):
    """Build an object holding a transport with the given state."""

    class Owner:
        def __init__(self):
            self._transport = Mock()
            self._transport.is_active = active
            self.statuses = []

        def _set_status(self, status):
            self.statuses.append(status)

        @require_connection(status_message="Not connected to server")
        async def with_result(self, value: int) -> Result:
            return Result(success=True, error=str(value))

        @require_connection()
        async def with_str(self) -> str:
            return "done"

        @require_connection()
        async def unannotated(self):
            return "done"

    return Owner()


class TestRequireConnection:
    """Test connection decorator."""

    @pytest.mark.asyncio
    async def test_runs_when_active(self):
        """Test method runs when transport is active."""
        owner = make_owner(active=True)

        result = await owner.with_result(7)

        assert result == Result(success=True, error="7")
        assert owner.statuses == []

    @pytest.mark.asyncio
    async def test_failure_result_when_inactive(self):
        """Test failed result object is built from the return annotation."""
        owner = make_owner(active=False)

        result = await owner.with_result(7)

        assert result.success is False
        assert result.error == "Not connected to server"

    @pytest.mark.asyncio
    async def test_status_updated_when_inactive(self):
        """Test owner status is set when skipping."""
        owner = make_owner(active=False)

        await owner.with_result(1)

        assert owner.statuses == ["Not connected to server"]

    @pytest.mark.asyncio
    async def test_unconstructible_annotation_raises(self):
        """Test RuntimeError when the return type cannot express failure."""
        owner = make_owner(active=False)

        with pytest.raises(RuntimeError, match="Not connected"):
            await owner.with_str()

    @pytest.mark.asyncio
    async def test_no_annotation_raises(self):
        """Test RuntimeError when there is no return annotation."""
        owner = make_owner(active=False)

        with pytest.raises(RuntimeError):
            await owner.unannotated()

    @pytest.mark.asyncio
    async def test_missing_transport_treated_as_inactive(self):
        """Test owner without a transport attribute is treated as disconnected."""

        class Bare:
            @require_connection(status_message="no transport")
            async def method(self) -> Result:
                return Result(success=True)

        result = await Bare().method()

        assert result.success is False
        assert result.error == "no transport"

    @pytest.mark.asyncio
    async def test_custom_transport_attribute(self):
        """Test transport_attr selects a different attribute."""

        class Custom:
            def __init__(self):
                self.client = Mock(is_active=True)

            @require_connection(transport_attr="client")
            async def method(self) -> Result:
                return Result(success=True)

        result = await Custom().method()

        assert result.success is True
