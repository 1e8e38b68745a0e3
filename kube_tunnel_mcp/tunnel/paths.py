"""Kubernetes REST path construction for forwarded requests."""

from typing import Optional
from urllib.parse import quote, urlencode

from ..types import OperationDescriptor

# Plural REST names for common built-in kinds. Anything missing falls back to
# lower-case + "s", which is wrong for irregular plurals (e.g. "Policy").
KIND_TO_RESOURCE = {
    "Pod": "pods",
    "Service": "services",
    "Deployment": "deployments",
    "Namespace": "namespaces",
    "Node": "nodes",
    "ConfigMap": "configmaps",
    "Secret": "secrets",
    "Event": "events",
    "ReplicaSet": "replicasets",
    "StatefulSet": "statefulsets",
    "DaemonSet": "daemonsets",
    "Ingress": "ingresses",
    "PersistentVolume": "persistentvolumes",
    "PersistentVolumeClaim": "persistentvolumeclaims",
    "ServiceAccount": "serviceaccounts",
    "Role": "roles",
    "RoleBinding": "rolebindings",
    "ClusterRole": "clusterroles",
    "ClusterRoleBinding": "clusterrolebindings",
}


def kind_to_resource(kind: str) -> str:
    """Map a kind to its REST resource name."""
    resource = KIND_TO_RESOURCE.get(kind)
    if resource is not None:
        return resource
    return kind.lower() + "s"


def path_segment(value: str) -> str:
    """Percent-encode one path segment, including any "/"."""
    return quote(value, safe="")


def build_path(descriptor: OperationDescriptor) -> str:
    """Build the API path (with query) for a list/get descriptor.

    Examples:
        Pod in ``ns``            -> /api/v1/namespaces/ns/pods
        apps Deployment ``x``    -> /apis/apps/v1/namespaces/ns/deployments/x
    """
    if descriptor.group:
        path = f"/apis/{descriptor.group}/{descriptor.version}"
    else:
        path = f"/api/{descriptor.version}"

    if descriptor.namespace:
        path += f"/namespaces/{path_segment(descriptor.namespace)}"

    path += f"/{kind_to_resource(descriptor.kind)}"

    if descriptor.name:
        path += f"/{path_segment(descriptor.name)}"

    if descriptor.label_selector:
        path += "?" + urlencode({"labelSelector": descriptor.label_selector})

    return path


def build_log_path(
    namespace: str,
    pod: str,
    container: Optional[str] = None,
    tail_lines: int = 0,
) -> str:
    """Build the pod log subresource path.

    ``tailLines`` is only sent for a strictly positive count.
    """
    path = f"/api/v1/namespaces/{path_segment(namespace)}/pods/{path_segment(pod)}/log"

    query = {}
    if container:
        query["container"] = container
    if tail_lines and tail_lines > 0:
        query["tailLines"] = str(tail_lines)
    if query:
        path += "?" + urlencode(query)
    return path
