"""kube-tunnel MCP Server - hub and managed-cluster Kubernetes tools."""

import asyncio
from contextlib import AsyncExitStack
import json
import logging
import sys
from typing import Optional

from mcp import stdio_server
from mcp.server import Server
from mcp.server.models import InitializationOptions
from mcp.types import ServerCapabilities, TextContent, Tool

from . import __version__
from .config import Config, config
from .dispatcher import Dispatcher
from .foundation.logging_utils import LoggingUtility, error_response
from .handlers import KubernetesHandlers
from .kubernetes.local_client import LocalKubernetesClient
from .tools import get_kubernetes_tools
from .tunnel.client import TunnelClient
from .types import AuthContext

server = Server("kube-tunnel-mcp")
handlers: Optional[KubernetesHandlers] = None

logger = logging.getLogger(__name__)


def build_tunnel_client(cfg: Config) -> Optional[TunnelClient]:
    """Create a tunnel client when hub credentials are configured."""
    if not cfg.tunnel_configured:
        if cfg.forwarding_enabled:
            LoggingUtility.log_warning(
                "startup",
                "forwarding enabled but hub server or bearer token missing; "
                "all operations will run on the hub cluster",
            )
        return None
    return TunnelClient(
        AuthContext(cfg.hub_server_url, cfg.bearer_token),
        timeout=cfg.request_timeout,
        verify_tls=not cfg.insecure_skip_tls_verify,
        ca_bundle=cfg.ca_bundle,
        route_namespace=cfg.route_namespace,
        route_name=cfg.route_name,
        route_host=cfg.route_host,
    )


def build_handlers(
    cfg: Config, tunnel_client: Optional[TunnelClient]
) -> KubernetesHandlers:
    dispatcher = Dispatcher(
        LocalKubernetesClient(cfg.kubeconfig_path, cfg.kubernetes_context),
        forwarder=tunnel_client,
        forwarding_enabled=cfg.forwarding_enabled,
    )
    return KubernetesHandlers(dispatcher)


async def check_hub(cfg: Config, tunnel_client: Optional[TunnelClient]) -> bool:
    """Warn when forwarding is enabled against a hub without managed clusters."""
    if tunnel_client is None or not cfg.forwarding_enabled:
        return False
    multicluster = await tunnel_client.is_multicluster_environment()
    if not multicluster:
        LoggingUtility.log_warning(
            "startup",
            "hub does not serve cluster.open-cluster-management.io/v1; "
            "forwarded requests are likely to fail",
        )
    return multicluster


@server.list_tools()
async def list_tools() -> list[Tool]:
    """Return the Kubernetes tools."""
    return get_kubernetes_tools()


@server.call_tool()
async def call_tool(name: str, arguments: Optional[dict] = None) -> list[TextContent]:
    """Dispatch a tool call and render the result as JSON."""
    try:
        if handlers is None:
            result = error_response("Server is not initialized")
        else:
            result = await handlers.handle(name, arguments)
    except Exception as e:
        LoggingUtility.log_error(name, e)
        result = error_response(str(e))
    return [TextContent(type="text", text=json.dumps(result, indent=2, default=str))]


async def main():
    """Run the kube-tunnel MCP server."""
    global handlers

    async with AsyncExitStack() as stack:
        tunnel_client = build_tunnel_client(config)
        if tunnel_client is not None:
            await stack.enter_async_context(tunnel_client)
            await check_hub(config, tunnel_client)
        handlers = build_handlers(config, tunnel_client)

        async with stdio_server() as (read_stream, write_stream):
            await server.run(
                read_stream,
                write_stream,
                InitializationOptions(
                    server_name="kube-tunnel-mcp",
                    server_version=__version__,
                    capabilities=ServerCapabilities(),
                ),
            )


def run_server():
    """Entry point for the kube-tunnel MCP server."""
    logging.basicConfig(level=getattr(logging, config.log_level, logging.INFO))
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        LoggingUtility.log_info("server", "Server stopped by user")
    except Exception as e:
        LoggingUtility.log_error("server", e)
        sys.exit(1)


if __name__ == "__main__":
    run_server()
