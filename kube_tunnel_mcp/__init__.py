"""kube-tunnel MCP Server - Kubernetes operations across hub and managed clusters.

This package provides a Model Context Protocol (MCP) server that runs against a
hub cluster and executes Kubernetes API operations either locally or, when a
``cluster`` argument names a managed cluster, through the cluster-proxy tunnel
route exposed on the hub.

Key Features:
    - Pods, namespaces, and generic resource listing and retrieval
    - Pod log retrieval
    - Transparent forwarding of read operations to managed clusters
    - Route discovery for the tunnel's external host

Environment Variables:
    - KUBE_TUNNEL_FORWARDING_ENABLED: enable multi-cluster forwarding
    - KUBE_TUNNEL_HUB_SERVER / KUBE_TUNNEL_BEARER_TOKEN: hub API access
    - KUBE_TUNNEL_INSECURE_SKIP_TLS_VERIFY: opt in to unverified TLS

See DESIGN.md for the architecture.
"""

# Get version dynamically from package metadata
from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("kube-tunnel-mcp")
except PackageNotFoundError:
    # Fallback when package not installed (e.g., development mode)
    __version__ = "dev"

__author__ = "kube-tunnel-mcp authors"
__email__ = "kube-tunnel-mcp@example.com"
