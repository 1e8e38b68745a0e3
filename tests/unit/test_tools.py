"""Tests for MCP tool schemas."""

import pytest

from kube_tunnel_mcp.tools import get_kubernetes_tools

HUB_ONLY_TOOLS = {"managed_clusters_list", "managed_cluster_validate"}


@pytest.mark.unit
class TestToolSchemas:
    """Tool definitions exposed over MCP."""

    def setup_method(self):
        self.tools = {tool.name: tool for tool in get_kubernetes_tools()}

    def test_tool_names(self):
        assert set(self.tools) == {
            "pods_list",
            "pods_list_in_namespace",
            "namespaces_list",
            "pods_log",
            "resources_list",
            "resources_get",
            "resources_create_or_update",
            "resources_delete",
            "managed_clusters_list",
            "managed_cluster_validate",
        }

    def test_cluster_argument_is_optional_everywhere(self):
        for name, tool in self.tools.items():
            if name in HUB_ONLY_TOOLS:
                continue
            assert "cluster" in tool.inputSchema["properties"], name
            assert "cluster" not in tool.inputSchema["required"], name

    def test_cluster_validation_requires_cluster(self):
        schema = self.tools["managed_cluster_validate"].inputSchema
        assert schema["required"] == ["cluster"]
        assert "cluster" not in self.tools["managed_clusters_list"].inputSchema["properties"]

    def test_required_arguments(self):
        assert self.tools["resources_get"].inputSchema["required"] == ["apiVersion", "kind", "name"]
        assert self.tools["pods_log"].inputSchema["required"] == ["name"]
