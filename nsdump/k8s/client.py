"""Kubernetes client wrapper."""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from kubernetes import client, config
from kubernetes.client.rest import ApiException
from kubernetes.config.config_exception import ConfigException
from urllib3.exceptions import HTTPError

from ..errors import ConnectionSetupError, DiscoveryError, FetchError
from ..model.export import default_kubeconfig_path
from ..model.kubernetes import ResourceType
from ..utils.logger import get_logger

logger = get_logger(__name__)

IN_CLUSTER = "in-cluster"
KUBECONFIG = "kubeconfig"


class K8sClient:
    """Connection to one API server, built once and used for the whole run."""

    def __init__(self, api_client: client.ApiClient, source: str):
        self._api_client = api_client
        self._source = source

    @property
    def source(self) -> str:
        """Where the credentials came from: ``in-cluster`` or ``kubeconfig``."""
        return self._source

    @property
    def host(self) -> str:
        return self._api_client.configuration.host

    @classmethod
    def from_environment(
        cls,
        kubeconfig: Optional[Path] = None,
        context: Optional[str] = None,
        prefer_in_cluster: bool = True,
    ) -> "K8sClient":
        """Resolve credentials, trying the in-cluster service account first."""
        configuration = client.Configuration()

        if prefer_in_cluster:
            try:
                config.load_incluster_config(client_configuration=configuration)
                logger.debug("Using in-cluster configuration")
                return cls(client.ApiClient(configuration=configuration), IN_CLUSTER)
            except ConfigException as e:
                logger.debug(f"In-cluster configuration unavailable: {e}")

        path = Path(kubeconfig) if kubeconfig else default_kubeconfig_path()
        try:
            config.load_kube_config(
                config_file=str(path),
                context=context,
                client_configuration=configuration,
            )
        except Exception as e:
            raise ConnectionSetupError(f"Unable to load kubeconfig {path}: {e}") from e

        logger.debug(f"Using kubeconfig {path}")
        return cls(client.ApiClient(configuration=configuration), KUBECONFIG)

    def close(self):
        self._api_client.close()

    def __enter__(self) -> "K8sClient":
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def get_raw(self, path: str) -> bytes:
        """GET an API path and return the undecoded response body."""
        logger.debug(f"GET {path}")
        response = self._api_client.call_api(
            path,
            "GET",
            header_params={"Accept": "application/json"},
            auth_settings=["BearerToken"],
            _return_http_data_only=True,
            _preload_content=False,
        )
        return response.data

    def _get_json(self, path: str) -> Dict[str, Any]:
        return json.loads(self.get_raw(path))

    def _get_group_versions(self) -> List[Tuple[str, List[str]]]:
        """List (group, group-versions) with the preferred version first."""
        groups = []

        core = self._get_json("/api")
        core_versions = core.get("versions", [])
        if core_versions:
            groups.append(("", list(core_versions)))

        for group in self._get_json("/apis").get("groups", []):
            versions = [v["groupVersion"] for v in group.get("versions", [])]
            preferred = group.get("preferredVersion", {}).get("groupVersion")
            if preferred in versions:
                versions.remove(preferred)
                versions.insert(0, preferred)
            groups.append((group.get("name", ""), versions))

        return groups

    def get_preferred_namespaced_resources(self) -> List[ResourceType]:
        """Discover namespaced resource types, one entry per group and resource.

        Each resource is reported at the most preferred version of its group
        that serves it. Subresources are left out.
        """
        try:
            resources = []
            for group, versions in self._get_group_versions():
                root = "/apis" if group else "/api"
                seen = set()
                for group_version in versions:
                    resource_list = self._get_json(f"{root}/{group_version}")
                    for entry in resource_list.get("resources", []):
                        resource = ResourceType.from_api_resource(group_version, entry)
                        if resource is None or resource.name in seen:
                            continue
                        seen.add(resource.name)
                        if resource.namespaced:
                            resources.append(resource)
        except (ApiException, HTTPError, ValueError, KeyError) as e:
            raise DiscoveryError(f"Unable to discover API resources: {e}") from e

        logger.info(f"Discovered {len(resources)} namespaced resource types")
        return resources

    def fetch_resource_list(self, resource: ResourceType, namespace: str) -> bytes:
        """Fetch the raw list of one resource type in a namespace."""
        try:
            return self.get_raw(resource.list_path(namespace))
        except ApiException as e:
            raise FetchError(resource, f"{e.status} {e.reason}") from e
        except HTTPError as e:
            raise FetchError(resource, str(e)) from e
