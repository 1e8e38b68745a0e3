"""Async HTTP client for the managed-cluster tunnel (cluster-proxy route)."""

import asyncio
import ssl
from typing import Any, Dict, List, Optional, Protocol, Tuple, Union, runtime_checkable

import aiohttp

from .. import __version__
from ..errors import DecodeError, RemoteStatusError, TransportError
from ..foundation.logging_utils import LoggingUtility
from ..types import AuthContext, GenericObject
from .normalizer import decode
from .paths import build_log_path, path_segment
from .route_resolver import DEFAULT_ROUTE_NAME, DEFAULT_ROUTE_NAMESPACE, RouteResolver

DEFAULT_TIMEOUT = 30.0
USER_AGENT = f"kube-tunnel-mcp/{__version__}"


@runtime_checkable
class ResourceForwarder(Protocol):
    """Capability to execute read operations on a managed cluster."""

    async def forward_request(
        self, cluster: str, path: str, timeout: Optional[float] = None
    ) -> GenericObject:
        """GET ``path`` on ``cluster`` and return the decoded object."""

    async def forward_log_request(
        self,
        cluster: str,
        namespace: str,
        pod: str,
        container: Optional[str] = None,
        tail_lines: int = 0,
        timeout: Optional[float] = None,
    ) -> bytes:
        """Return raw pod log bytes from ``cluster``."""

    async def validate_cluster(self, cluster: str) -> GenericObject:
        """Fetch ``/api/v1`` of ``cluster`` to prove it is reachable."""

    async def list_managed_clusters(self) -> List[str]:
        """Names of the clusters reachable through the tunnel."""


def build_ssl_context(
    verify_tls: bool = True, ca_bundle: Optional[str] = None
) -> Union[bool, ssl.SSLContext]:
    """Translate the TLS settings into aiohttp's ``ssl`` argument."""
    if not verify_tls and ca_bundle:
        raise ValueError(
            "ca_bundle cannot be combined with disabled TLS verification"
        )
    if not verify_tls:
        return False
    if ca_bundle:
        return ssl.create_default_context(cafile=ca_bundle)
    return True


class TunnelClient:
    """Forward Kubernetes API reads to managed clusters through the tunnel.

    One instance is shared by all concurrent operations. Its auth context,
    TLS policy and session are fixed after ``start()``; the route host is
    discovered lazily and cached by :class:`RouteResolver`.

    Usage:
        async with TunnelClient(auth) as client:
            pods = await client.forward_request("c1", "/api/v1/pods")
    """

    def __init__(
        self,
        auth: AuthContext,
        timeout: float = DEFAULT_TIMEOUT,
        verify_tls: bool = True,
        ca_bundle: Optional[str] = None,
        route_namespace: str = DEFAULT_ROUTE_NAMESPACE,
        route_name: str = DEFAULT_ROUTE_NAME,
        route_host: Optional[str] = None,
    ):
        if timeout <= 0:
            raise ValueError("timeout must be positive")
        self.auth = auth
        self.timeout = timeout
        self._ssl = build_ssl_context(verify_tls, ca_bundle)
        if self._ssl is False:
            LoggingUtility.log_warning(
                "tunnel client",
                "TLS certificate verification is DISABLED for tunnel requests",
            )
        self.route_resolver = RouteResolver(
            auth,
            route_namespace=route_namespace,
            route_name=route_name,
            static_host=route_host,
        )
        self._session: Optional[aiohttp.ClientSession] = None

    async def __aenter__(self):
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def start(self) -> None:
        """Open the HTTP session and attempt route discovery."""
        session = self._ensure_session()
        await self.route_resolver.ensure_resolved(session)

    async def close(self) -> None:
        if self._session is not None:
            await self._session.close()
            self._session = None

    def _ensure_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self.timeout),
                connector=aiohttp.TCPConnector(ssl=self._ssl),
                headers={"User-Agent": USER_AGENT},
            )
        return self._session

    def invalidate_route(self) -> None:
        self.route_resolver.invalidate()

    def _effective_timeout(self, timeout: Optional[float]) -> aiohttp.ClientTimeout:
        # aiohttp treats total=0 as "no limit", so non-positive values never reach it
        if timeout is None or timeout <= 0:
            total = self.timeout
        else:
            total = min(timeout, self.timeout)
        return aiohttp.ClientTimeout(total=total)

    async def _get(
        self,
        url: str,
        accept: str,
        cluster: Optional[str],
        timeout: Optional[float] = None,
    ) -> Tuple[int, bytes]:
        session = self._ensure_session()
        headers = {
            "Authorization": self.auth.authorization_header,
            "Accept": accept,
            "User-Agent": USER_AGENT,
        }
        LoggingUtility.log_debug("tunnel request", f"GET {url}", cluster=cluster)
        try:
            async with session.get(
                url, headers=headers, timeout=self._effective_timeout(timeout)
            ) as response:
                body = await response.read()
                return response.status, body
        except asyncio.TimeoutError as e:
            raise TransportError(
                f"request to {url} timed out", cluster=cluster, cause=e
            ) from e
        except aiohttp.ClientError as e:
            raise TransportError(
                f"request to {url} failed: {type(e).__name__}: {e}",
                cluster=cluster,
                cause=e,
            ) from e

    @staticmethod
    def _check_status(status: int, body: bytes, cluster: Optional[str]) -> None:
        if not 200 <= status < 300:
            raise RemoteStatusError(
                status, body.decode("utf-8", errors="replace"), cluster=cluster
            )

    async def _cluster_url(self, cluster: str, path: str) -> str:
        host = await self.route_resolver.host(self._ensure_session(), cluster=cluster)
        return f"https://{host}/{path_segment(cluster)}{path}"

    async def _cluster_get(
        self, cluster: str, path: str, accept: str, timeout: Optional[float]
    ) -> bytes:
        url = await self._cluster_url(cluster, path)
        try:
            status, body = await self._get(url, accept, cluster, timeout)
        except TransportError as e:
            if isinstance(e.cause, aiohttp.ClientConnectorError):
                # the route host is unreachable; look it up again on the next forward
                self.invalidate_route()
            raise
        self._check_status(status, body, cluster)
        return body

    async def forward_request(
        self, cluster: str, path: str, timeout: Optional[float] = None
    ) -> GenericObject:
        """Issue ``GET https://{route}/{cluster}{path}`` and decode the JSON body."""
        body = await self._cluster_get(cluster, path, "application/json", timeout)
        return decode(body, cluster=cluster)

    async def forward_log_request(
        self,
        cluster: str,
        namespace: str,
        pod: str,
        container: Optional[str] = None,
        tail_lines: int = 0,
        timeout: Optional[float] = None,
    ) -> bytes:
        """Fetch pod logs through the tunnel as raw bytes."""
        path = build_log_path(namespace, pod, container, tail_lines)
        return await self._cluster_get(cluster, path, "text/plain", timeout)

    async def validate_cluster(self, cluster: str) -> GenericObject:
        """Check that the cluster's API root is reachable through the tunnel."""
        result = await self.forward_request(cluster, "/api/v1")
        LoggingUtility.log_info("validate cluster", "reachable via tunnel", cluster=cluster)
        return result

    # === Hub API helpers ===

    async def is_multicluster_environment(self) -> bool:
        """Whether the hub serves the managed-cluster API group."""
        url = f"{self.auth.server_url}/apis/cluster.open-cluster-management.io/v1"
        try:
            status, _ = await self._get(url, "application/json", None)
        except TransportError as e:
            LoggingUtility.log_warning("detect multicluster", str(e))
            return False
        return status == 200

    async def list_managed_clusters(self) -> List[str]:
        """Return the names of ManagedCluster objects registered on the hub."""
        url = (
            f"{self.auth.server_url}"
            "/apis/cluster.open-cluster-management.io/v1/managedclusters"
        )
        status, body = await self._get(url, "application/json", None)
        self._check_status(status, body, None)
        document = decode(body)
        items = document.get("items") or []
        if not isinstance(items, list):
            raise DecodeError(
                f"expected items to be a list, got {type(items).__name__}"
            )
        names = []
        for item in items:
            if not isinstance(item, dict):
                continue
            metadata: Dict[str, Any] = item.get("metadata") or {}
            name = metadata.get("name") if isinstance(metadata, dict) else None
            if isinstance(name, str) and name:
                names.append(name)
        return names
