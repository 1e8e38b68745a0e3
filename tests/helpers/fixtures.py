"""Shared fixtures for kube-tunnel MCP tests."""

from unittest.mock import AsyncMock, Mock

import pytest

from kube_tunnel_mcp.dispatcher import Dispatcher
from kube_tunnel_mcp.tunnel.client import TunnelClient
from kube_tunnel_mcp.types import AuthContext

from .fakes import HUB, FakeSession, route_response, ROUTE_URL


@pytest.fixture
def local_client():
    """Local client double with every operation as an AsyncMock."""
    client = Mock()
    client.pods_list_in_all_namespaces = AsyncMock(return_value={"kind": "PodList", "items": []})
    client.pods_list_in_namespace = AsyncMock(return_value={"kind": "PodList", "items": []})
    client.namespaces_list = AsyncMock(return_value={"kind": "NamespaceList", "items": []})
    client.pods_log = AsyncMock(return_value="local log line\n")
    client.resources_list = AsyncMock(return_value={"kind": "List", "items": []})
    client.resources_get = AsyncMock(return_value={"kind": "Deployment"})
    client.resources_create_or_update = AsyncMock(return_value=[{"kind": "ConfigMap"}])
    client.resources_delete = AsyncMock(return_value={"kind": "Status"})
    return client


@pytest.fixture
def forwarder():
    """ResourceForwarder double."""
    fwd = Mock()
    fwd.forward_request = AsyncMock(return_value={"kind": "PodList", "items": ["remote"]})
    fwd.forward_log_request = AsyncMock(return_value=b"remote log line\n")
    fwd.list_managed_clusters = AsyncMock(return_value=["c1", "c2"])
    fwd.validate_cluster = AsyncMock(return_value={"kind": "APIResourceList"})
    return fwd


@pytest.fixture
def dispatcher(local_client, forwarder):
    return Dispatcher(local_client, forwarder=forwarder, forwarding_enabled=True)


@pytest.fixture
def fake_session():
    return FakeSession({ROUTE_URL: route_response()})


@pytest.fixture
def tunnel_client(fake_session):
    client = TunnelClient(AuthContext(HUB, "secret-token"))
    client._session = fake_session
    return client
