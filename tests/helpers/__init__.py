"""Test helpers package for kube-tunnel MCP tests."""

from .fakes import HUB, ROUTE_HOST, ROUTE_URL, FakeResponse, FakeSession, pod_list, route_response
from .fixtures import dispatcher, fake_session, forwarder, local_client, tunnel_client
from .utils import get_text_content, parse_tool_result

__all__ = [
    # Fakes
    "HUB",
    "ROUTE_HOST",
    "ROUTE_URL",
    "FakeResponse",
    "FakeSession",
    "pod_list",
    "route_response",
    # Fixtures
    "dispatcher",
    "fake_session",
    "forwarder",
    "local_client",
    "tunnel_client",
    # General utilities
    "get_text_content",
    "parse_tool_result",
]
