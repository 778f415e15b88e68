"""Kubernetes resource models."""

from typing import Optional

from pydantic import BaseModel, ConfigDict


class ResourceType(BaseModel):
    """Kubernetes resource type information as reported by discovery."""

    model_config = ConfigDict(frozen=True)

    group_version: str
    kind: str
    name: str
    namespaced: bool = True

    @property
    def group(self) -> str:
        """API group, empty for the core group."""
        if "/" not in self.group_version:
            return ""
        return self.group_version.split("/", 1)[0]

    @property
    def is_core(self) -> bool:
        return self.group == ""

    @property
    def gvk(self) -> str:
        """Group-version and kind, e.g. ``apps/v1/Deployment``."""
        return f"{self.group_version}/{self.kind}"

    def list_path(self, namespace: str) -> str:
        """API path listing this type inside a namespace."""
        root = "/api" if self.is_core else "/apis"
        return f"{root}/{self.group_version}/namespaces/{namespace}/{self.name}"

    @classmethod
    def from_api_resource(
        cls, group_version: str, resource: dict
    ) -> Optional["ResourceType"]:
        """Build from an APIResource entry, skipping subresources."""
        name = resource.get("name", "")
        if not name or "/" in name:
            return None
        return cls(
            group_version=group_version,
            kind=resource.get("kind", ""),
            name=name,
            namespaced=bool(resource.get("namespaced", False)),
        )
