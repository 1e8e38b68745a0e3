"""Pytest configuration and fixtures for kube-tunnel MCP tests."""

# Re-export shared fixtures so every test module can request them
from tests.helpers import (
    dispatcher,
    fake_session,
    forwarder,
    local_client,
    tunnel_client,
)


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: mark test as a fast, fully mocked unit test")
    config.addinivalue_line("markers", "fast: mark test as fast running")
