"""Kubernetes API client for operations executed on the hub cluster."""

import asyncio
import threading
from typing import Any, Dict, List, Optional

from kubernetes import client
from kubernetes import config as k8s_config
from kubernetes.config import ConfigException
from kubernetes.dynamic import DynamicClient
import yaml

from ..foundation.logging_utils import LoggingUtility
from ..types import GenericObject, OperationDescriptor

FIELD_MANAGER = "kube-tunnel-mcp"


class LocalKubernetesClient:
    """Thin async facade over the official Kubernetes client.

    Results are returned as plain dictionaries in API wire format so they are
    interchangeable with objects decoded from the tunnel. API errors
    (``ApiException``) propagate unchanged.
    """

    def __init__(
        self,
        kubeconfig_path: Optional[str] = None,
        context: Optional[str] = None,
    ):
        self._kubeconfig_path = kubeconfig_path
        self._context = context
        self._api_client: Optional[client.ApiClient] = None
        self._core_v1_api: Optional[client.CoreV1Api] = None
        self._dynamic: Optional[DynamicClient] = None
        self._init_lock = threading.Lock()

    def _load_api_client(self) -> client.ApiClient:
        """Prefer in-cluster credentials, then kubeconfig."""
        configuration = client.Configuration()
        try:
            k8s_config.load_incluster_config(client_configuration=configuration)
            LoggingUtility.log_info("load kubernetes config", "using in-cluster config")
            return client.ApiClient(configuration=configuration)
        except ConfigException:
            pass
        LoggingUtility.log_info(
            "load kubernetes config",
            f"using kubeconfig {self._kubeconfig_path or '(default)'}",
        )
        return k8s_config.new_client_from_config(
            config_file=self._kubeconfig_path, context=self._context
        )

    def _ensure_clients(self) -> None:
        """Ensure API clients are initialized."""
        with self._init_lock:
            if self._api_client is None:
                self._api_client = self._load_api_client()
            if self._core_v1_api is None:
                self._core_v1_api = client.CoreV1Api(self._api_client)

    def _ensure_dynamic(self) -> DynamicClient:
        self._ensure_clients()
        with self._init_lock:
            if self._dynamic is None:
                self._dynamic = DynamicClient(self._api_client)
            return self._dynamic

    def _to_dict(self, obj: Any) -> GenericObject:
        return self._api_client.sanitize_for_serialization(obj)

    # === Core resources ===

    def _list_pods(
        self, namespace: Optional[str], label_selector: Optional[str]
    ) -> GenericObject:
        self._ensure_clients()
        if namespace:
            result = self._core_v1_api.list_namespaced_pod(
                namespace, label_selector=label_selector
            )
        else:
            result = self._core_v1_api.list_pod_for_all_namespaces(
                label_selector=label_selector
            )
        return self._to_dict(result)

    async def pods_list_in_all_namespaces(
        self, label_selector: Optional[str] = None
    ) -> GenericObject:
        return await asyncio.to_thread(self._list_pods, None, label_selector)

    async def pods_list_in_namespace(
        self, namespace: str, label_selector: Optional[str] = None
    ) -> GenericObject:
        return await asyncio.to_thread(self._list_pods, namespace, label_selector)

    def _list_namespaces(self, label_selector: Optional[str]) -> GenericObject:
        self._ensure_clients()
        result = self._core_v1_api.list_namespace(label_selector=label_selector)
        return self._to_dict(result)

    async def namespaces_list(
        self, label_selector: Optional[str] = None
    ) -> GenericObject:
        return await asyncio.to_thread(self._list_namespaces, label_selector)

    def _read_pod_log(
        self,
        namespace: str,
        name: str,
        container: Optional[str],
        tail_lines: int,
    ) -> str:
        self._ensure_clients()
        kwargs: Dict[str, Any] = {}
        if container:
            kwargs["container"] = container
        if tail_lines and tail_lines > 0:
            kwargs["tail_lines"] = tail_lines
        return self._core_v1_api.read_namespaced_pod_log(name, namespace, **kwargs)

    async def pods_log(
        self,
        namespace: str,
        name: str,
        container: Optional[str] = None,
        tail_lines: int = 0,
    ) -> str:
        return await asyncio.to_thread(
            self._read_pod_log, namespace, name, container, tail_lines
        )

    # === Generic resources ===

    def _resource(self, api_version: str, kind: str):
        return self._ensure_dynamic().resources.get(api_version=api_version, kind=kind)

    def _list_resources(self, descriptor: OperationDescriptor) -> GenericObject:
        resource = self._resource(descriptor.api_version, descriptor.kind)
        result = self._dynamic.get(
            resource,
            namespace=descriptor.namespace,
            label_selector=descriptor.label_selector,
        )
        return result.to_dict()

    async def resources_list(self, descriptor: OperationDescriptor) -> GenericObject:
        return await asyncio.to_thread(self._list_resources, descriptor)

    def _get_resource(self, descriptor: OperationDescriptor) -> GenericObject:
        resource = self._resource(descriptor.api_version, descriptor.kind)
        result = self._dynamic.get(
            resource, name=descriptor.name, namespace=descriptor.namespace
        )
        return result.to_dict()

    async def resources_get(self, descriptor: OperationDescriptor) -> GenericObject:
        return await asyncio.to_thread(self._get_resource, descriptor)

    def _delete_resource(self, descriptor: OperationDescriptor) -> GenericObject:
        resource = self._resource(descriptor.api_version, descriptor.kind)
        result = self._dynamic.delete(
            resource, name=descriptor.name, namespace=descriptor.namespace
        )
        return result.to_dict()

    async def resources_delete(
        self, descriptor: OperationDescriptor
    ) -> GenericObject:
        return await asyncio.to_thread(self._delete_resource, descriptor)

    def _apply_manifest(self, manifest: str) -> List[GenericObject]:
        documents = parse_manifest(manifest)
        dynamic = self._ensure_dynamic()
        applied = []
        for document in documents:
            resource = self._resource(document["apiVersion"], document["kind"])
            metadata = document.get("metadata") or {}
            namespace = metadata.get("namespace")
            if resource.namespaced and not namespace:
                namespace = "default"
            result = dynamic.server_side_apply(
                resource,
                body=document,
                namespace=namespace if resource.namespaced else None,
                field_manager=FIELD_MANAGER,
                force_conflicts=True,
            )
            applied.append(result.to_dict())
        return applied

    async def resources_create_or_update(self, manifest: str) -> List[GenericObject]:
        return await asyncio.to_thread(self._apply_manifest, manifest)


def parse_manifest(manifest: str) -> List[GenericObject]:
    """Parse YAML (or JSON) manifest text into resource documents."""
    if not manifest or not manifest.strip():
        raise ValueError("resource manifest must be a non-empty string")
    try:
        documents = [doc for doc in yaml.safe_load_all(manifest) if doc is not None]
    except yaml.YAMLError as e:
        raise ValueError(f"invalid resource manifest: {e}") from e
    if not documents:
        raise ValueError("resource manifest contains no documents")
    for document in documents:
        if not isinstance(document, dict):
            raise ValueError("each manifest document must be a mapping")
        if not document.get("apiVersion") or not document.get("kind"):
            raise ValueError("each manifest document needs apiVersion and kind")
        if not (document.get("metadata") or {}).get("name"):
            raise ValueError("each manifest document needs metadata.name")
    return documents
