"""Forwarding of Kubernetes API reads to managed clusters through the tunnel."""

from .client import ResourceForwarder, TunnelClient, build_ssl_context
from .normalizer import decode
from .paths import build_log_path, build_path, kind_to_resource
from .route_resolver import RouteResolver, parse_route_host

__all__ = [
    "ResourceForwarder",
    "TunnelClient",
    "build_ssl_context",
    "decode",
    "build_path",
    "build_log_path",
    "kind_to_resource",
    "RouteResolver",
    "parse_route_host",
]
