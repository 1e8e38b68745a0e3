"""Exception hierarchy for forwarded (multi-cluster) operations.

Every error names the target cluster and the stage of the pipeline that
failed so tool callers never see a bare generic failure.
"""

from typing import Optional

BODY_EXCERPT_LIMIT = 512


class DispatchError(Exception):
    """Base class for all dispatch-layer failures."""

    stage = "dispatch"

    def __init__(self, message: str, cluster: Optional[str] = None):
        self.cluster = cluster
        self.message = message
        super().__init__(self._format(message))

    def _format(self, message: str) -> str:
        target = self.cluster if self.cluster else "local"
        return f"[{self.stage}] cluster {target}: {message}"


class RoutingError(DispatchError):
    """Forwarding requested but not possible."""

    stage = "decision"


class UnsupportedOverTunnelError(RoutingError):
    """Operation verb is not supported through the tunnel."""

    def __init__(self, verb: str, cluster: Optional[str] = None):
        self.verb = verb
        super().__init__(
            f"{verb} operations are not supported over the cluster tunnel",
            cluster=cluster,
        )


class DiscoveryError(DispatchError):
    """Tunnel route host could not be resolved."""

    stage = "discovery"


class TransportError(DispatchError):
    """Network-level failure reaching the tunnel."""

    stage = "transport"

    def __init__(self, message: str, cluster: Optional[str] = None, cause=None):
        self.cause = cause
        super().__init__(message, cluster=cluster)


class RemoteStatusError(DispatchError):
    """Tunnel or downstream API returned a non-2xx status."""

    stage = "status"

    def __init__(self, status_code: int, body: str, cluster: Optional[str] = None):
        self.status_code = status_code
        self.body = truncate_body(body)
        super().__init__(f"tunnel returned {status_code}: {self.body}", cluster=cluster)


class DecodeError(DispatchError):
    """Response body was not the JSON document that was expected."""

    stage = "decode"


def truncate_body(body: str, limit: int = BODY_EXCERPT_LIMIT) -> str:
    if len(body) <= limit:
        return body
    return body[:limit] + f"... ({len(body) - limit} more characters)"
