"""Kubernetes integration for kube-tunnel MCP.

Provides the hub-cluster client used when an operation is not forwarded.
"""

from .local_client import LocalKubernetesClient, parse_manifest

__all__ = [
    "LocalKubernetesClient",
    "parse_manifest",
]
