"""Local-versus-tunnel routing for Kubernetes operations.

Every entry point builds an :class:`OperationDescriptor`, asks :func:`decide`
where it should run, and then either calls the local Kubernetes client or
forwards the request to the managed cluster through a
:class:`ResourceForwarder`. Mutating verbs are never forwarded and never
silently executed on the hub instead.
"""

from typing import List, Optional

from .errors import RoutingError, UnsupportedOverTunnelError
from .foundation.enums import Route, Verb
from .foundation.logging_utils import LoggingUtility
from .kubernetes.local_client import LocalKubernetesClient
from .tunnel.client import ResourceForwarder
from .tunnel.paths import build_path
from .types import DispatchMode, GenericObject, OperationDescriptor


def decide(
    descriptor: OperationDescriptor,
    cluster: Optional[str],
    mode: DispatchMode,
) -> Route:
    """Single routing predicate shared by every operation."""
    if (
        mode.forwarding_enabled
        and mode.tunnel_client_configured
        and isinstance(cluster, str)
        and cluster
    ):
        return Route.FORWARD
    return Route.LOCAL


class Dispatcher:
    """Route each operation to the hub cluster or a managed cluster."""

    def __init__(
        self,
        local_client: LocalKubernetesClient,
        forwarder: Optional[ResourceForwarder] = None,
        forwarding_enabled: bool = False,
        request_timeout: Optional[float] = None,
    ):
        self.local_client = local_client
        self.forwarder = forwarder
        self.forwarding_enabled = forwarding_enabled
        self.request_timeout = request_timeout

    @property
    def mode(self) -> DispatchMode:
        return DispatchMode(
            forwarding_enabled=self.forwarding_enabled,
            tunnel_client_configured=self.forwarder is not None,
        )

    def decide(
        self,
        descriptor: OperationDescriptor,
        cluster: Optional[str],
        mode: Optional[DispatchMode] = None,
    ) -> Route:
        route = decide(descriptor, cluster, mode or self.mode)
        LoggingUtility.log_debug(
            "dispatch",
            f"{descriptor.verb.value} {descriptor.kind or 'manifest'} -> {route.value}",
            cluster=cluster if route == Route.FORWARD else None,
        )
        return route

    def _require_forwarder(self, cluster: Optional[str]) -> ResourceForwarder:
        if self.forwarder is None:
            raise RoutingError(
                "forwarding requested but no tunnel client is configured",
                cluster=cluster,
            )
        return self.forwarder

    async def _forward(
        self, descriptor: OperationDescriptor, cluster: str
    ) -> GenericObject:
        forwarder = self._require_forwarder(cluster)
        return await forwarder.forward_request(
            cluster, build_path(descriptor), timeout=self.request_timeout
        )

    # === Pods and namespaces ===

    async def pods_list(
        self,
        cluster: Optional[str] = None,
        label_selector: Optional[str] = None,
        mode: Optional[DispatchMode] = None,
    ) -> GenericObject:
        """List pods in all namespaces."""
        descriptor = OperationDescriptor(
            verb=Verb.LIST,
            version="v1",
            kind="Pod",
            label_selector=label_selector or None,
        )
        if self.decide(descriptor, cluster, mode) == Route.FORWARD:
            return await self._forward(descriptor, cluster)
        return await self.local_client.pods_list_in_all_namespaces(
            label_selector=label_selector or None
        )

    async def pods_list_in_namespace(
        self,
        namespace: str,
        cluster: Optional[str] = None,
        label_selector: Optional[str] = None,
        mode: Optional[DispatchMode] = None,
    ) -> GenericObject:
        descriptor = OperationDescriptor(
            verb=Verb.LIST,
            version="v1",
            kind="Pod",
            namespace=namespace,
            label_selector=label_selector or None,
        )
        if self.decide(descriptor, cluster, mode) == Route.FORWARD:
            return await self._forward(descriptor, cluster)
        return await self.local_client.pods_list_in_namespace(
            namespace, label_selector=label_selector or None
        )

    async def namespaces_list(
        self,
        cluster: Optional[str] = None,
        label_selector: Optional[str] = None,
        mode: Optional[DispatchMode] = None,
    ) -> GenericObject:
        descriptor = OperationDescriptor(
            verb=Verb.LIST,
            version="v1",
            kind="Namespace",
            label_selector=label_selector or None,
        )
        if self.decide(descriptor, cluster, mode) == Route.FORWARD:
            return await self._forward(descriptor, cluster)
        return await self.local_client.namespaces_list(
            label_selector=label_selector or None
        )

    async def pods_log(
        self,
        name: str,
        namespace: str,
        container: Optional[str] = None,
        tail_lines: int = 0,
        cluster: Optional[str] = None,
        mode: Optional[DispatchMode] = None,
    ) -> str:
        descriptor = OperationDescriptor(
            verb=Verb.LOGS,
            kind="Pod",
            namespace=namespace,
            name=name,
            container=container or None,
            tail_lines=tail_lines,
        )
        if self.decide(descriptor, cluster, mode) == Route.FORWARD:
            forwarder = self._require_forwarder(cluster)
            body = await forwarder.forward_log_request(
                cluster,
                namespace,
                name,
                container=descriptor.container,
                tail_lines=tail_lines,
                timeout=self.request_timeout,
            )
            return body.decode("utf-8", errors="replace")
        return await self.local_client.pods_log(
            namespace, name, container=descriptor.container, tail_lines=tail_lines
        )

    # === Generic resources ===

    async def resources_list(
        self,
        api_version: str,
        kind: str,
        namespace: Optional[str] = None,
        cluster: Optional[str] = None,
        label_selector: Optional[str] = None,
        mode: Optional[DispatchMode] = None,
    ) -> GenericObject:
        descriptor = OperationDescriptor.for_resource(
            Verb.LIST,
            api_version,
            kind,
            namespace=namespace,
            label_selector=label_selector,
        )
        if self.decide(descriptor, cluster, mode) == Route.FORWARD:
            return await self._forward(descriptor, cluster)
        return await self.local_client.resources_list(descriptor)

    async def resources_get(
        self,
        api_version: str,
        kind: str,
        name: str,
        namespace: Optional[str] = None,
        cluster: Optional[str] = None,
        mode: Optional[DispatchMode] = None,
    ) -> GenericObject:
        descriptor = OperationDescriptor.for_resource(
            Verb.GET, api_version, kind, namespace=namespace, name=name
        )
        if self.decide(descriptor, cluster, mode) == Route.FORWARD:
            return await self._forward(descriptor, cluster)
        return await self.local_client.resources_get(descriptor)

    async def resources_create_or_update(
        self,
        resource: str,
        cluster: Optional[str] = None,
        mode: Optional[DispatchMode] = None,
    ) -> List[GenericObject]:
        """Apply a YAML/JSON manifest; only ever on the hub cluster."""
        descriptor = OperationDescriptor(verb=Verb.CREATE)
        if self.decide(descriptor, cluster, mode) == Route.FORWARD:
            raise UnsupportedOverTunnelError("create/update", cluster=cluster)
        return await self.local_client.resources_create_or_update(resource)

    async def resources_delete(
        self,
        api_version: str,
        kind: str,
        name: str,
        namespace: Optional[str] = None,
        cluster: Optional[str] = None,
        mode: Optional[DispatchMode] = None,
    ) -> GenericObject:
        descriptor = OperationDescriptor.for_resource(
            Verb.DELETE, api_version, kind, namespace=namespace, name=name
        )
        if self.decide(descriptor, cluster, mode) == Route.FORWARD:
            raise UnsupportedOverTunnelError("delete", cluster=cluster)
        return await self.local_client.resources_delete(descriptor)

    # === Managed clusters ===

    async def managed_clusters_list(self) -> List[str]:
        forwarder = self._require_forwarder(None)
        return await forwarder.list_managed_clusters()

    async def managed_cluster_validate(self, cluster: str) -> GenericObject:
        """Check that ``cluster`` answers through the tunnel."""
        if not self.forwarding_enabled:
            raise RoutingError(
                "cluster validation needs multi-cluster forwarding enabled",
                cluster=cluster,
            )
        forwarder = self._require_forwarder(cluster)
        return await forwarder.validate_cluster(cluster)
