"""kube-tunnel MCP configuration for the hub cluster and the tunnel."""

from dataclasses import dataclass
import os
from typing import Optional

_TRUE_VALUES = {"1", "true", "yes", "on"}


def _env_bool(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in _TRUE_VALUES


def _env_float(name: str, default: float) -> float:
    value = os.getenv(name)
    if not value:
        return default
    try:
        return float(value)
    except ValueError:
        return default


@dataclass
class Config:
    """Configuration for the dispatch layer and its collaborators."""

    # Multi-cluster forwarding
    forwarding_enabled: bool = False
    hub_server_url: Optional[str] = None
    bearer_token: Optional[str] = None

    # Tunnel route discovery
    route_host: Optional[str] = None
    route_namespace: str = "multicluster-engine"
    route_name: str = "cluster-proxy-addon-user"

    # Transport security
    insecure_skip_tls_verify: bool = False
    ca_bundle: Optional[str] = None
    request_timeout: float = 30.0

    # Local Kubernetes settings
    kubeconfig_path: Optional[str] = None
    kubernetes_context: Optional[str] = None

    # General settings
    log_level: str = "INFO"

    @property
    def tunnel_configured(self) -> bool:
        """Whether enough is known to build a tunnel client."""
        return bool(self.hub_server_url and self.bearer_token)

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from environment variables."""
        return cls(
            forwarding_enabled=_env_bool("KUBE_TUNNEL_FORWARDING_ENABLED"),
            hub_server_url=os.getenv("KUBE_TUNNEL_HUB_SERVER") or None,
            bearer_token=os.getenv("KUBE_TUNNEL_BEARER_TOKEN") or None,
            route_host=os.getenv("KUBE_TUNNEL_ROUTE_HOST") or None,
            route_namespace=os.getenv(
                "KUBE_TUNNEL_ROUTE_NAMESPACE", "multicluster-engine"
            ),
            route_name=os.getenv("KUBE_TUNNEL_ROUTE_NAME", "cluster-proxy-addon-user"),
            insecure_skip_tls_verify=_env_bool("KUBE_TUNNEL_INSECURE_SKIP_TLS_VERIFY"),
            ca_bundle=os.getenv("KUBE_TUNNEL_CA_BUNDLE") or None,
            request_timeout=_env_float("KUBE_TUNNEL_REQUEST_TIMEOUT", 30.0),
            kubeconfig_path=os.getenv("KUBECONFIG") or None,
            kubernetes_context=os.getenv("KUBERNETES_CONTEXT") or None,
            log_level=os.getenv("KUBE_TUNNEL_LOG_LEVEL", "INFO").upper(),
        )


# Global configuration instance
config = Config.from_env()
