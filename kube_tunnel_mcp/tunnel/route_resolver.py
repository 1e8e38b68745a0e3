"""Discovery of the cluster tunnel's external route host."""

import asyncio
from typing import Optional

import aiohttp
from pydantic import BaseModel, ConfigDict, ValidationError

from ..errors import DiscoveryError
from ..foundation.logging_utils import LoggingUtility
from ..types import AuthContext, TunnelRoute

DEFAULT_ROUTE_NAMESPACE = "multicluster-engine"
DEFAULT_ROUTE_NAME = "cluster-proxy-addon-user"


class RouteSpec(BaseModel):
    """Only the field we need from ``Route.spec``."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    host: Optional[str] = None


class RouteEnvelope(BaseModel):
    """Scoped view of an OpenShift ``Route`` object."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    spec: Optional[RouteSpec] = None


def parse_route_host(body: bytes) -> Optional[str]:
    """Extract ``spec.host`` from a Route document, or None."""
    try:
        envelope = RouteEnvelope.model_validate_json(body)
    except ValidationError:
        return None
    if envelope.spec is None or not envelope.spec.host:
        return None
    return envelope.spec.host


class RouteResolver:
    """Resolve and cache the tunnel ingress host.

    The host is resolved at most once at a time: concurrent callers wait on
    the same lock and then read the cached value. A failed discovery leaves
    the route unresolved and is retried the next time a forward needs it.
    """

    def __init__(
        self,
        auth: AuthContext,
        route_namespace: str = DEFAULT_ROUTE_NAMESPACE,
        route_name: str = DEFAULT_ROUTE_NAME,
        static_host: Optional[str] = None,
    ):
        self._auth = auth
        self._route_namespace = route_namespace
        self._route_name = route_name
        self._host: Optional[TunnelRoute] = static_host or None
        self._static = bool(static_host)
        self._lock = asyncio.Lock()

    @property
    def route_url(self) -> str:
        return (
            f"{self._auth.server_url}/apis/route.openshift.io/v1/namespaces/"
            f"{self._route_namespace}/routes/{self._route_name}"
        )

    @property
    def cached_host(self) -> Optional[TunnelRoute]:
        return self._host

    async def resolve(self, session: aiohttp.ClientSession) -> Optional[TunnelRoute]:
        """Query the well-known Route object; never raises for discovery failures."""
        headers = {
            "Authorization": self._auth.authorization_header,
            "Accept": "application/json",
        }
        try:
            async with session.get(self.route_url, headers=headers) as response:
                body = await response.read()
                if response.status != 200:
                    LoggingUtility.log_warning(
                        "discover tunnel route",
                        f"route lookup returned status {response.status}",
                    )
                    return None
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            LoggingUtility.log_warning(
                "discover tunnel route", f"route lookup failed: {e}"
            )
            return None

        host = parse_route_host(body)
        if host is None:
            LoggingUtility.log_warning(
                "discover tunnel route", "route response has no spec.host"
            )
        return host

    async def ensure_resolved(
        self, session: aiohttp.ClientSession
    ) -> Optional[TunnelRoute]:
        """Resolve once (single-flight) if no host is cached."""
        if self._host is not None:
            return self._host
        async with self._lock:
            if self._host is None:
                host = await self.resolve(session)
                if host is not None:
                    self._host = host
                    LoggingUtility.log_info(
                        "discover tunnel route", f"using route host {host}"
                    )
            return self._host

    async def host(
        self, session: aiohttp.ClientSession, cluster: Optional[str] = None
    ) -> TunnelRoute:
        """Return the route host, raising DiscoveryError when it is unknown."""
        host = await self.ensure_resolved(session)
        if host is None:
            raise DiscoveryError(
                "tunnel route not discovered - ensure the cluster-proxy addon "
                f"route {self._route_namespace}/{self._route_name} exists",
                cluster=cluster,
            )
        return host

    def invalidate(self) -> None:
        """Forget a discovered host so the next request resolves it again."""
        if not self._static:
            self._host = None
