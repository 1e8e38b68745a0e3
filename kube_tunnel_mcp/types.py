"""Type definitions for the kube-tunnel MCP server."""

from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

from .foundation.enums import Verb

# ===== BASIC TYPE ALIASES =====

# JSON-serializable types
JsonValue = Union[str, int, float, bool, None, Dict[str, Any], List[Any]]

# One Kubernetes API object (or list object) decoded into plain containers
GenericObject = Dict[str, Any]

ClusterName = str
TunnelRoute = str

# Reserved argument key carrying the target managed cluster
CLUSTER_ARGUMENT = "cluster"


# ===== DATA CLASSES =====


@dataclass(frozen=True)
class OperationDescriptor:
    """Immutable description of one API operation."""

    verb: Verb
    group: str = ""
    version: Optional[str] = None
    kind: Optional[str] = None
    namespace: Optional[str] = None
    name: Optional[str] = None
    label_selector: Optional[str] = None
    container: Optional[str] = None
    tail_lines: int = 0

    def __post_init__(self):
        if self.verb in (Verb.LIST, Verb.GET, Verb.DELETE):
            if not self.version:
                raise ValueError(f"{self.verb.value} requires an API version")
            if not self.kind:
                raise ValueError(f"{self.verb.value} requires a kind")
        if self.verb in (Verb.GET, Verb.DELETE) and not self.name:
            raise ValueError(f"{self.verb.value} requires a resource name")
        if self.verb == Verb.LOGS and (not self.namespace or not self.name):
            raise ValueError("logs require a namespace and a pod name")

    @property
    def api_version(self) -> Optional[str]:
        """The ``apiVersion`` string, e.g. ``v1`` or ``apps/v1``."""
        if not self.version:
            return None
        return f"{self.group}/{self.version}" if self.group else self.version

    @classmethod
    def for_resource(
        cls,
        verb: Verb,
        api_version: str,
        kind: str,
        namespace: Optional[str] = None,
        name: Optional[str] = None,
        label_selector: Optional[str] = None,
    ) -> "OperationDescriptor":
        """Build a descriptor from an ``apiVersion`` string such as ``apps/v1``."""
        group, version = split_api_version(api_version)
        return cls(
            verb=verb,
            group=group,
            version=version,
            kind=kind,
            namespace=namespace or None,
            name=name or None,
            label_selector=label_selector or None,
        )


@dataclass(frozen=True)
class DispatchMode:
    """Per-request switches that gate forwarding."""

    forwarding_enabled: bool = False
    tunnel_client_configured: bool = False


@dataclass(frozen=True)
class AuthContext:
    """Hub API location and the bearer token used for every tunnel request."""

    server_url: str
    bearer_token: str

    def __post_init__(self):
        # frozen dataclass: normalize through object.__setattr__
        object.__setattr__(self, "server_url", self.server_url.rstrip("/"))

    @property
    def authorization_header(self) -> str:
        return f"Bearer {self.bearer_token}"

    def __repr__(self) -> str:
        return f"AuthContext(server_url={self.server_url!r}, bearer_token='***')"


# ===== HELPERS =====


def split_api_version(api_version: str) -> Tuple[str, str]:
    """Split ``group/version`` into its parts; the core group is ``""``."""
    if not api_version:
        raise ValueError("apiVersion must be a non-empty string")
    if "/" in api_version:
        group, version = api_version.split("/", 1)
        return group, version
    return "", api_version


def get_cluster_target(arguments: Optional[Mapping[str, Any]]) -> Optional[ClusterName]:
    """Return the cluster named in caller arguments, or None for the local cluster."""
    if not arguments:
        return None
    cluster = arguments.get(CLUSTER_ARGUMENT)
    if isinstance(cluster, str) and cluster:
        return cluster
    return None
