"""Tests for HealthServer."""

from unittest.mock import Mock

import pytest
from aiohttp.test_utils import TestClient, TestServer

from gptbridge.infrastructure.http.health_server import HealthServer


@pytest.fixture
def mock_slack_runner() -> Mock:
    """Create a mock SlackAppRunner."""
    mock = Mock()
    mock.is_connected = True
    return mock


@pytest.fixture
def mock_session_registry() -> Mock:
    """Create a mock SessionRegistry."""
    mock = Mock()
    mock.active_count = 2
    return mock


@pytest.fixture
def server(mock_slack_runner: Mock, mock_session_registry: Mock) -> HealthServer:
    return HealthServer(
        slack_runner=mock_slack_runner,
        session_registry=mock_session_registry,
        port=0,  # Use any available port
    )


class TestHealthServerLiveness:
    """Tests for liveness check."""

    async def test_liveness_returns_alive(self, server: HealthServer) -> None:
        result = await server.check_liveness()

        assert result["status"] == "alive"
        assert "timestamp" in result


class TestHealthServerReadiness:
    """Tests for readiness check."""

    async def test_readiness_returns_ready_when_connected(
        self, server: HealthServer
    ) -> None:
        result = await server.check_readiness()

        assert result == {"ready": True, "slack": True, "active_sessions": 2}

    async def test_readiness_returns_not_ready_when_slack_disconnected(
        self, server: HealthServer, mock_slack_runner: Mock
    ) -> None:
        """Test that readiness returns not ready when Slack is disconnected."""
        mock_slack_runner.is_connected = False

        result = await server.check_readiness()

        assert result["ready"] is False
        assert result["slack"] is False


class TestHealthServerEndpoints:
    """Tests for HTTP endpoints."""

    async def test_live_endpoint(self, server: HealthServer) -> None:
        async with TestClient(TestServer(server.create_app())) as client:
            response = await client.get("/live")

            assert response.status == 200
            body = await response.json()
            assert body["status"] == "alive"

    async def test_ready_endpoint(self, server: HealthServer) -> None:
        async with TestClient(TestServer(server.create_app())) as client:
            response = await client.get("/ready")

            assert response.status == 200
            body = await response.json()
            assert body["active_sessions"] == 2

    async def test_ready_endpoint_returns_503_when_not_ready(
        self, server: HealthServer, mock_slack_runner: Mock
    ) -> None:
        mock_slack_runner.is_connected = False

        async with TestClient(TestServer(server.create_app())) as client:
            response = await client.get("/ready")

            assert response.status == 503


class TestHealthServerLifecycle:
    """Tests for start and stop."""

    async def test_start_and_stop(self, server: HealthServer) -> None:
        await server.start()
        try:
            assert server.is_running
            assert server.port != 0
        finally:
            await server.stop()

        assert not server.is_running
