"""HTTP endpoints."""

from gptbridge.infrastructure.http.health_server import HealthServer

__all__ = ["HealthServer"]
