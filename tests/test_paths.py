"""Unit tests for REST path construction."""

import pytest

from kube_tunnel_mcp.foundation.enums import Verb
from kube_tunnel_mcp.tunnel.paths import (
    KIND_TO_RESOURCE,
    build_log_path,
    build_path,
    kind_to_resource,
)
from kube_tunnel_mcp.types import OperationDescriptor


@pytest.mark.fast
class TestBuildPath:
    """Test cases for build_path."""

    def test_core_group_namespaced_list(self):
        descriptor = OperationDescriptor(
            verb=Verb.LIST, group="", version="v1", kind="Pod", namespace="ns"
        )
        assert build_path(descriptor) == "/api/v1/namespaces/ns/pods"

    def test_named_group_get(self):
        descriptor = OperationDescriptor(
            verb=Verb.GET,
            group="apps",
            version="v1",
            kind="Deployment",
            namespace="ns",
            name="x",
        )
        assert build_path(descriptor) == "/apis/apps/v1/namespaces/ns/deployments/x"

    def test_label_selector_is_url_encoded(self):
        descriptor = OperationDescriptor(
            verb=Verb.LIST,
            version="v1",
            kind="Pod",
            namespace="ns",
            label_selector="app=foo",
        )
        assert (
            build_path(descriptor)
            == "/api/v1/namespaces/ns/pods?labelSelector=app%3Dfoo"
        )

    def test_label_selector_with_multiple_terms(self):
        descriptor = OperationDescriptor(
            verb=Verb.LIST, version="v1", kind="Pod", label_selector="app=foo,tier!=db"
        )
        assert (
            build_path(descriptor)
            == "/api/v1/pods?labelSelector=app%3Dfoo%2Ctier%21%3Ddb"
        )

    def test_cluster_scoped_list(self):
        descriptor = OperationDescriptor(verb=Verb.LIST, version="v1", kind="Namespace")
        assert build_path(descriptor) == "/api/v1/namespaces"

    def test_cluster_scoped_named_group(self):
        descriptor = OperationDescriptor(
            verb=Verb.GET,
            group="rbac.authorization.k8s.io",
            version="v1",
            kind="ClusterRole",
            name="admin",
        )
        assert (
            build_path(descriptor)
            == "/apis/rbac.authorization.k8s.io/v1/clusterroles/admin"
        )

    def test_deterministic(self):
        descriptor = OperationDescriptor.for_resource(
            Verb.GET, "apps/v1", "StatefulSet", namespace="db", name="pg"
        )
        assert build_path(descriptor) == build_path(descriptor)
        assert build_path(descriptor) == "/apis/apps/v1/namespaces/db/statefulsets/pg"


@pytest.mark.fast
class TestKindToResource:
    """Test cases for kind pluralization."""

    @pytest.mark.parametrize(
        "kind,resource",
        [
            ("Ingress", "ingresses"),
            ("PersistentVolumeClaim", "persistentvolumeclaims"),
            ("ClusterRoleBinding", "clusterrolebindings"),
            ("ServiceAccount", "serviceaccounts"),
        ],
    )
    def test_known_kinds(self, kind, resource):
        assert kind_to_resource(kind) == resource

    def test_table_covers_common_builtins(self):
        assert len(KIND_TO_RESOURCE) == 19

    def test_unknown_kind_uses_naive_plural(self):
        assert kind_to_resource("ManagedCluster") == "managedclusters"

    def test_naive_plural_is_wrong_for_irregular_kinds(self):
        # documented limitation: no guessing for irregular plurals
        assert kind_to_resource("NetworkPolicy") == "networkpolicys"


@pytest.mark.fast
class TestBuildLogPath:
    """Test cases for the pod log path."""

    def test_zero_tail_omits_query(self):
        assert build_log_path("ns", "web-0", tail_lines=0) == "/api/v1/namespaces/ns/pods/web-0/log"

    def test_positive_tail(self):
        assert (
            build_log_path("ns", "web-0", tail_lines=50)
            == "/api/v1/namespaces/ns/pods/web-0/log?tailLines=50"
        )

    def test_negative_tail_omits_query(self):
        assert build_log_path("ns", "web-0", tail_lines=-5) == "/api/v1/namespaces/ns/pods/web-0/log"

    def test_container_and_tail(self):
        assert (
            build_log_path("ns", "web-0", container="nginx", tail_lines=10)
            == "/api/v1/namespaces/ns/pods/web-0/log?container=nginx&tailLines=10"
        )


@pytest.mark.fast
class TestOperationDescriptor:
    """Descriptor validation."""

    def test_for_resource_splits_core_api_version(self):
        descriptor = OperationDescriptor.for_resource(Verb.LIST, "v1", "Service")
        assert descriptor.group == ""
        assert descriptor.version == "v1"
        assert descriptor.api_version == "v1"

    def test_for_resource_splits_group(self):
        descriptor = OperationDescriptor.for_resource(
            Verb.LIST, "networking.k8s.io/v1", "Ingress", namespace=""
        )
        assert descriptor.group == "networking.k8s.io"
        assert descriptor.namespace is None
        assert descriptor.api_version == "networking.k8s.io/v1"

    def test_get_requires_name(self):
        with pytest.raises(ValueError, match="name"):
            OperationDescriptor(verb=Verb.GET, version="v1", kind="Pod")

    def test_list_requires_kind(self):
        with pytest.raises(ValueError, match="kind"):
            OperationDescriptor(verb=Verb.LIST, version="v1")

    def test_logs_require_namespace_and_pod(self):
        with pytest.raises(ValueError):
            OperationDescriptor(verb=Verb.LOGS, name="web-0")

    def test_empty_api_version_rejected(self):
        with pytest.raises(ValueError):
            OperationDescriptor.for_resource(Verb.LIST, "", "Pod")

    def test_descriptor_is_immutable(self):
        descriptor = OperationDescriptor(verb=Verb.LIST, version="v1", kind="Pod")
        with pytest.raises(AttributeError):
            descriptor.namespace = "other"
