"""Tool call handlers for kube-tunnel MCP server."""

from typing import Any, Awaitable, Callable, Dict, Optional

from kubernetes.client.rest import ApiException
from kubernetes.dynamic.exceptions import ResourceNotFoundError

from .dispatcher import Dispatcher
from .errors import DispatchError
from .foundation.logging_utils import LoggingUtility, error_response, success_response
from .types import get_cluster_target

Handler = Callable[[Dict[str, Any], Optional[str]], Awaitable[Dict[str, Any]]]


def _require(arguments: Dict[str, Any], key: str) -> str:
    value = arguments.get(key)
    if not isinstance(value, str) or not value:
        raise ValueError(f"{key} is required")
    return value


def _optional(arguments: Dict[str, Any], key: str) -> Optional[str]:
    value = arguments.get(key)
    if value is None or value == "":
        return None
    if not isinstance(value, str):
        raise ValueError(f"{key} must be a string")
    return value


def _tail_lines(arguments: Dict[str, Any]) -> int:
    value = arguments.get("tail", 0)
    if value is None:
        return 0
    if isinstance(value, bool) or not isinstance(value, (int, str)):
        raise ValueError("tail must be an integer")
    try:
        tail = int(value)
    except ValueError:
        raise ValueError("tail must be an integer") from None
    if tail < 0:
        raise ValueError("tail must not be negative")
    return tail


class KubernetesHandlers:
    """Translate MCP tool arguments into dispatcher calls."""

    def __init__(self, dispatcher: Dispatcher):
        self.dispatcher = dispatcher
        self._handlers: Dict[str, Handler] = {
            "pods_list": self.handle_pods_list,
            "pods_list_in_namespace": self.handle_pods_list_in_namespace,
            "namespaces_list": self.handle_namespaces_list,
            "pods_log": self.handle_pods_log,
            "resources_list": self.handle_resources_list,
            "resources_get": self.handle_resources_get,
            "resources_create_or_update": self.handle_resources_create_or_update,
            "resources_delete": self.handle_resources_delete,
            "managed_clusters_list": self.handle_managed_clusters_list,
            "managed_cluster_validate": self.handle_managed_cluster_validate,
        }

    @property
    def tool_names(self) -> list[str]:
        return list(self._handlers)

    async def handle(
        self, name: str, arguments: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        """Run one tool call and return a status dictionary."""
        handler = self._handlers.get(name)
        if handler is None:
            return error_response(f"Unknown tool: {name}")

        arguments = arguments or {}
        cluster = get_cluster_target(arguments)
        try:
            return await handler(arguments, cluster)
        except DispatchError as e:
            LoggingUtility.log_error(name, e)
            return error_response(str(e), cluster=e.cluster, stage=e.stage)
        except ApiException as e:
            LoggingUtility.log_error(name, e)
            return error_response(
                f"Kubernetes API error {e.status}: {e.reason}",
                cluster=cluster,
                stage="local",
            )
        except ResourceNotFoundError as e:
            return error_response(
                f"Unknown resource type: {e}", cluster=cluster, stage="local"
            )
        except ValueError as e:
            return error_response(f"Invalid arguments for {name}: {e}")

    async def handle_pods_list(self, arguments, cluster):
        result = await self.dispatcher.pods_list(
            cluster=cluster, label_selector=_optional(arguments, "labelSelector")
        )
        return success_response(cluster=cluster, result=result)

    async def handle_pods_list_in_namespace(self, arguments, cluster):
        result = await self.dispatcher.pods_list_in_namespace(
            _require(arguments, "namespace"),
            cluster=cluster,
            label_selector=_optional(arguments, "labelSelector"),
        )
        return success_response(cluster=cluster, result=result)

    async def handle_namespaces_list(self, arguments, cluster):
        result = await self.dispatcher.namespaces_list(
            cluster=cluster, label_selector=_optional(arguments, "labelSelector")
        )
        return success_response(cluster=cluster, result=result)

    async def handle_pods_log(self, arguments, cluster):
        logs = await self.dispatcher.pods_log(
            _require(arguments, "name"),
            _optional(arguments, "namespace") or "default",
            container=_optional(arguments, "container"),
            tail_lines=_tail_lines(arguments),
            cluster=cluster,
        )
        return success_response(cluster=cluster, logs=logs)

    async def handle_resources_list(self, arguments, cluster):
        result = await self.dispatcher.resources_list(
            _require(arguments, "apiVersion"),
            _require(arguments, "kind"),
            namespace=_optional(arguments, "namespace"),
            cluster=cluster,
            label_selector=_optional(arguments, "labelSelector"),
        )
        return success_response(cluster=cluster, result=result)

    async def handle_resources_get(self, arguments, cluster):
        result = await self.dispatcher.resources_get(
            _require(arguments, "apiVersion"),
            _require(arguments, "kind"),
            _require(arguments, "name"),
            namespace=_optional(arguments, "namespace"),
            cluster=cluster,
        )
        return success_response(cluster=cluster, result=result)

    async def handle_resources_create_or_update(self, arguments, cluster):
        result = await self.dispatcher.resources_create_or_update(
            _require(arguments, "resource"), cluster=cluster
        )
        return success_response(cluster=cluster, resources=result, count=len(result))

    async def handle_resources_delete(self, arguments, cluster):
        result = await self.dispatcher.resources_delete(
            _require(arguments, "apiVersion"),
            _require(arguments, "kind"),
            _require(arguments, "name"),
            namespace=_optional(arguments, "namespace"),
            cluster=cluster,
        )
        return success_response(cluster=cluster, result=result)

    async def handle_managed_clusters_list(self, arguments, cluster):
        clusters = await self.dispatcher.managed_clusters_list()
        return success_response(clusters=clusters, count=len(clusters))

    async def handle_managed_cluster_validate(self, arguments, cluster):
        cluster = _require(arguments, "cluster")
        result = await self.dispatcher.managed_cluster_validate(cluster)
        return success_response(cluster=cluster, reachable=True, result=result)
