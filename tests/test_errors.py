"""Tests for the dispatch error hierarchy."""

import pytest

from kube_tunnel_mcp.errors import (
    DecodeError,
    DiscoveryError,
    DispatchError,
    RemoteStatusError,
    RoutingError,
    TransportError,
    UnsupportedOverTunnelError,
    truncate_body,
)


@pytest.mark.fast
class TestErrorHierarchy:
    """Every error carries the cluster and the failing stage."""

    @pytest.mark.parametrize(
        "error,stage",
        [
            (RoutingError("no tunnel", cluster="c1"), "decision"),
            (UnsupportedOverTunnelError("delete", cluster="c1"), "decision"),
            (DiscoveryError("no route", cluster="c1"), "discovery"),
            (TransportError("refused", cluster="c1"), "transport"),
            (RemoteStatusError(502, "bad gateway", cluster="c1"), "status"),
            (DecodeError("bad json", cluster="c1"), "decode"),
        ],
    )
    def test_stage_and_cluster_in_message(self, error, stage):
        assert isinstance(error, DispatchError)
        assert error.stage == stage
        assert error.cluster == "c1"
        assert f"[{stage}]" in str(error)
        assert "cluster c1" in str(error)

    def test_unsupported_is_a_routing_error(self):
        error = UnsupportedOverTunnelError("create/update", cluster="east")
        assert isinstance(error, RoutingError)
        assert error.verb == "create/update"

    def test_truncate_body(self):
        assert truncate_body("short") == "short"
        truncated = truncate_body("x" * 600)
        assert truncated.startswith("x" * 512)
        assert "88 more characters" in truncated
