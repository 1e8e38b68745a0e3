"""In-memory stand-ins for aiohttp sessions used by tunnel tests."""

import asyncio
import json
from typing import Any, Dict, List, Optional, Union

HUB = "https://hub.example.com:6443"
ROUTE_URL = (
    f"{HUB}/apis/route.openshift.io/v1/namespaces/multicluster-engine"
    "/routes/cluster-proxy-addon-user"
)
ROUTE_HOST = "proxy.example.com"


class FakeResponse:
    """Async context manager mimicking ``aiohttp.ClientResponse``."""

    def __init__(self, status: int = 200, body: Union[bytes, str, dict] = b""):
        self.status = status
        if isinstance(body, dict):
            body = json.dumps(body)
        if isinstance(body, str):
            body = body.encode("utf-8")
        self._body = body

    async def read(self) -> bytes:
        # yield so concurrent callers interleave like real network I/O
        await asyncio.sleep(0)
        return self._body

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        return False


class FakeSession:
    """Records GET calls and replays canned responses keyed by URL."""

    def __init__(
        self,
        responses: Optional[Dict[str, Union[FakeResponse, BaseException]]] = None,
        default: Optional[Union[FakeResponse, BaseException]] = None,
    ):
        self.responses = dict(responses or {})
        self.default = default or FakeResponse(404, b"not found")
        self.calls: List[Dict[str, Any]] = []
        self.closed = False

    def get(self, url, headers=None, timeout=None):
        self.calls.append({"url": url, "headers": dict(headers or {}), "timeout": timeout})
        response = self.responses.get(url, self.default)
        if isinstance(response, BaseException):
            raise response
        return response

    def urls(self) -> List[str]:
        return [call["url"] for call in self.calls]

    async def close(self):
        self.closed = True


def route_response(host: str = ROUTE_HOST) -> FakeResponse:
    return FakeResponse(
        200,
        {
            "apiVersion": "route.openshift.io/v1",
            "kind": "Route",
            "metadata": {"name": "cluster-proxy-addon-user"},
            "spec": {"host": host, "to": {"kind": "Service", "name": "proxy"}},
        },
    )


def pod_list(*names: str) -> Dict[str, Any]:
    return {
        "apiVersion": "v1",
        "kind": "PodList",
        "metadata": {"resourceVersion": "1"},
        "items": [
            {"metadata": {"name": name, "namespace": "ns"}, "status": {"phase": "Running"}}
            for name in names
        ],
    }
