"""Tool definitions for the kube-tunnel MCP server."""

from typing import Any, Dict

from mcp.types import Tool

CLUSTER_PROPERTY = {
    "type": "string",
    "description": "Optional managed cluster name. When set and multi-cluster forwarding is enabled, the operation runs on that cluster through the cluster-proxy tunnel; otherwise it runs on the hub cluster.",
}

LABEL_SELECTOR_PROPERTY = {
    "type": "string",
    "description": "Optional Kubernetes label selector (e.g. 'app=nginx,tier!=db').",
}


def _schema(properties: Dict[str, Any], required: list, with_cluster: bool = True):
    if with_cluster:
        properties = {**properties, "cluster": CLUSTER_PROPERTY}
    return {"type": "object", "properties": properties, "required": required}


def get_kubernetes_tools() -> list[Tool]:
    """Kubernetes tools exposed by the server."""
    return [
        Tool(
            name="pods_list",
            description="List pods in all namespaces of the hub or a managed cluster.",
            inputSchema=_schema({"labelSelector": LABEL_SELECTOR_PROPERTY}, []),
        ),
        Tool(
            name="pods_list_in_namespace",
            description="List pods in one namespace of the hub or a managed cluster.",
            inputSchema=_schema(
                {
                    "namespace": {
                        "type": "string",
                        "description": "Namespace to list pods from",
                    },
                    "labelSelector": LABEL_SELECTOR_PROPERTY,
                },
                ["namespace"],
            ),
        ),
        Tool(
            name="namespaces_list",
            description="List namespaces of the hub or a managed cluster.",
            inputSchema=_schema({"labelSelector": LABEL_SELECTOR_PROPERTY}, []),
        ),
        Tool(
            name="pods_log",
            description="Get the logs of a pod. Use tail to limit the number of lines returned.",
            inputSchema=_schema(
                {
                    "name": {"type": "string", "description": "Pod name"},
                    "namespace": {
                        "type": "string",
                        "description": "Pod namespace",
                        "default": "default",
                    },
                    "container": {
                        "type": "string",
                        "description": "Container name (optional for single-container pods)",
                    },
                    "tail": {
                        "type": "integer",
                        "description": "Number of lines from the end of the log; 0 returns the whole log",
                        "default": 0,
                        "minimum": 0,
                    },
                },
                ["name"],
            ),
        ),
        Tool(
            name="resources_list",
            description="List Kubernetes resources of any kind by apiVersion and kind (e.g. apps/v1 Deployment).",
            inputSchema=_schema(
                {
                    "apiVersion": {
                        "type": "string",
                        "description": "apiVersion of the resources (e.g. v1, apps/v1, networking.k8s.io/v1)",
                    },
                    "kind": {
                        "type": "string",
                        "description": "Kind of the resources (e.g. Pod, Service, Deployment)",
                    },
                    "namespace": {
                        "type": "string",
                        "description": "Optional namespace; omit for cluster-scoped kinds or all namespaces",
                    },
                    "labelSelector": LABEL_SELECTOR_PROPERTY,
                },
                ["apiVersion", "kind"],
            ),
        ),
        Tool(
            name="resources_get",
            description="Get one Kubernetes resource by apiVersion, kind, namespace and name.",
            inputSchema=_schema(
                {
                    "apiVersion": {"type": "string", "description": "apiVersion of the resource"},
                    "kind": {"type": "string", "description": "Kind of the resource"},
                    "namespace": {
                        "type": "string",
                        "description": "Namespace of the resource; omit for cluster-scoped kinds",
                    },
                    "name": {"type": "string", "description": "Name of the resource"},
                },
                ["apiVersion", "kind", "name"],
            ),
        ),
        Tool(
            name="resources_create_or_update",
            description="Create or update resources from a YAML or JSON manifest. Runs on the hub cluster only; forwarding to managed clusters is not supported.",
            inputSchema=_schema(
                {
                    "resource": {
                        "type": "string",
                        "description": "YAML or JSON manifest; multiple YAML documents are allowed",
                    }
                },
                ["resource"],
            ),
        ),
        Tool(
            name="resources_delete",
            description="Delete a Kubernetes resource. Runs on the hub cluster only; forwarding to managed clusters is not supported.",
            inputSchema=_schema(
                {
                    "apiVersion": {"type": "string", "description": "apiVersion of the resource"},
                    "kind": {"type": "string", "description": "Kind of the resource"},
                    "namespace": {
                        "type": "string",
                        "description": "Namespace of the resource; omit for cluster-scoped kinds",
                    },
                    "name": {"type": "string", "description": "Name of the resource"},
                },
                ["apiVersion", "kind", "name"],
            ),
        ),
        Tool(
            name="managed_clusters_list",
            description="List the managed clusters registered on the hub and reachable through the tunnel.",
            inputSchema=_schema({}, [], with_cluster=False),
        ),
        Tool(
            name="managed_cluster_validate",
            description="Check that a managed cluster's API server answers through the cluster-proxy tunnel.",
            inputSchema=_schema(
                {
                    "cluster": {
                        "type": "string",
                        "description": "Managed cluster name to check",
                    }
                },
                ["cluster"],
                with_cluster=False,
            ),
        ),
    ]
