"""Test configuration and fixtures."""

import io
import json
import threading
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import Dict

import pytest
import yaml
from rich.console import Console
from unittest.mock import MagicMock

from nsdump.k8s.client import K8sClient
from nsdump.model.kubernetes import ResourceType


def as_bytes(payload) -> bytes:
    return json.dumps(payload).encode("utf-8")


@pytest.fixture
def pod_type():
    return ResourceType(group_version="v1", kind="Pod", name="pods", namespaced=True)


@pytest.fixture
def deployment_type():
    return ResourceType(group_version="apps/v1", kind="Deployment", name="deployments")


@pytest.fixture
def config_map_type():
    return ResourceType(group_version="v1", kind="ConfigMap", name="configmaps")


@pytest.fixture
def resource_types(pod_type, config_map_type, deployment_type):
    return [pod_type, config_map_type, deployment_type]


@pytest.fixture
def pod_list_payload():
    return as_bytes(
        {
            "kind": "PodList",
            "apiVersion": "v1",
            "metadata": {"resourceVersion": "100"},
            "items": [
                {
                    "metadata": {"name": "web-0", "namespace": "shop"},
                    "spec": {"containers": [{"name": "nginx", "image": "nginx:1.25"}]},
                }
            ],
        }
    )


@pytest.fixture
def empty_list_payload():
    return as_bytes({"kind": "ConfigMapList", "apiVersion": "v1", "items": []})


@pytest.fixture
def discovery_responses() -> Dict[str, bytes]:
    """Discovery documents keyed by API path."""
    return {
        "/api": as_bytes({"kind": "APIVersions", "versions": ["v1"]}),
        "/apis": as_bytes(
            {
                "kind": "APIGroupList",
                "groups": [
                    {
                        "name": "apps",
                        "versions": [{"groupVersion": "apps/v1", "version": "v1"}],
                        "preferredVersion": {"groupVersion": "apps/v1", "version": "v1"},
                    },
                    {
                        "name": "autoscaling",
                        "versions": [
                            {"groupVersion": "autoscaling/v1", "version": "v1"},
                            {"groupVersion": "autoscaling/v2", "version": "v2"},
                        ],
                        "preferredVersion": {"groupVersion": "autoscaling/v2", "version": "v2"},
                    },
                ],
            }
        ),
        "/api/v1": as_bytes(
            {
                "groupVersion": "v1",
                "resources": [
                    {"name": "pods", "kind": "Pod", "namespaced": True},
                    {"name": "pods/log", "kind": "Pod", "namespaced": True},
                    {"name": "namespaces", "kind": "Namespace", "namespaced": False},
                    {"name": "configmaps", "kind": "ConfigMap", "namespaced": True},
                ],
            }
        ),
        "/apis/apps/v1": as_bytes(
            {
                "groupVersion": "apps/v1",
                "resources": [
                    {"name": "deployments", "kind": "Deployment", "namespaced": True},
                    {"name": "deployments/scale", "kind": "Scale", "namespaced": True},
                ],
            }
        ),
        "/apis/autoscaling/v2": as_bytes(
            {
                "groupVersion": "autoscaling/v2",
                "resources": [
                    {
                        "name": "horizontalpodautoscalers",
                        "kind": "HorizontalPodAutoscaler",
                        "namespaced": True,
                    }
                ],
            }
        ),
        "/apis/autoscaling/v1": as_bytes(
            {
                "groupVersion": "autoscaling/v1",
                "resources": [
                    {
                        "name": "horizontalpodautoscalers",
                        "kind": "HorizontalPodAutoscaler",
                        "namespaced": True,
                    },
                    {"name": "legacyscalers", "kind": "LegacyScaler", "namespaced": True},
                ],
            }
        ),
    }


@pytest.fixture
def mock_k8s_client(resource_types):
    """K8sClient double serving the sample resource types."""
    client = MagicMock(spec=K8sClient)
    client.get_preferred_namespaced_resources.return_value = list(resource_types)
    return client


@pytest.fixture
def console_output():
    """Console writing to an in-memory buffer, returned with the buffer."""
    buffer = io.StringIO()
    return Console(file=buffer, width=200), buffer


class ApiServer:
    """Local HTTP server answering GETs from a table of path to (status, body)."""

    def __init__(self, routes):
        self.routes = routes
        self.requests = []
        self._httpd = ThreadingHTTPServer(("127.0.0.1", 0), self._handler())
        self._thread = threading.Thread(target=self._httpd.serve_forever, daemon=True)

    @property
    def url(self) -> str:
        host, port = self._httpd.server_address[:2]
        return f"http://{host}:{port}"

    def _handler(self):
        server = self

        class Handler(BaseHTTPRequestHandler):
            def do_GET(self):
                server.requests.append((self.path, self.headers.get("Authorization")))
                status, body = server.routes.get(
                    self.path, (404, as_bytes({"kind": "Status", "code": 404}))
                )
                self.send_response(status)
                self.send_header("Content-Type", "application/json")
                self.send_header("Content-Length", str(len(body)))
                self.end_headers()
                self.wfile.write(body)

            def log_message(self, format, *args):
                pass

        return Handler

    def start(self):
        self._thread.start()

    def stop(self):
        self._httpd.shutdown()
        self._httpd.server_close()
        self._thread.join()


@pytest.fixture
def api_server(discovery_responses, pod_list_payload):
    """API server serving discovery plus a few lists in namespace ``shop``."""
    routes = {path: (200, body) for path, body in discovery_responses.items()}
    routes.update(
        {
            "/api/v1/namespaces/shop/pods": (200, pod_list_payload),
            "/api/v1/namespaces/shop/configmaps": (
                403,
                as_bytes({"kind": "Status", "reason": "Forbidden", "code": 403}),
            ),
            "/apis/apps/v1/namespaces/shop/deployments": (
                200,
                as_bytes({"kind": "DeploymentList", "apiVersion": "apps/v1", "items": []}),
            ),
            "/apis/autoscaling/v2/namespaces/shop/horizontalpodautoscalers": (
                200,
                as_bytes({"kind": "HorizontalPodAutoscalerList", "items": []}),
            ),
        }
    )
    server = ApiServer(routes)
    server.start()
    yield server
    server.stop()


@pytest.fixture
def kubeconfig(api_server, tmp_path):
    """Kubeconfig file pointing at the local API server."""
    path = tmp_path / "kubeconfig"
    path.write_text(
        yaml.safe_dump(
            {
                "apiVersion": "v1",
                "kind": "Config",
                "clusters": [{"name": "local", "cluster": {"server": api_server.url}}],
                "users": [{"name": "tester", "user": {"token": "secret-token"}}],
                "contexts": [{"name": "local", "context": {"cluster": "local", "user": "tester"}}],
                "current-context": "local",
            }
        )
    )
    return path
