"""Export-related models."""

import os
from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, Field

from .kubernetes import ResourceType

DEFAULT_NAMESPACE = "default"
DEFAULT_OUTPUT_FILE = "all-resources.yaml"


def default_kubeconfig_path() -> Path:
    """Kubeconfig location used when running outside a cluster."""
    return Path(os.environ.get("HOME", "")) / ".kube" / "config"


class ExportSettings(BaseModel):
    """Options for a single export run."""

    namespace: str = DEFAULT_NAMESPACE
    output_file: Path = Path(DEFAULT_OUTPUT_FILE)
    kubeconfig: Optional[Path] = None
    context: Optional[str] = None
    mark_skipped: bool = False

    @property
    def prefer_in_cluster(self) -> bool:
        """In-cluster credentials are only tried when no kubeconfig was requested."""
        return self.kubeconfig is None and self.context is None


class SkippedResource(BaseModel):
    """A resource type left out of the output."""

    resource: ResourceType
    stage: str
    error: str

    @property
    def marker(self) -> str:
        error = " ".join(self.error.split())
        return f"# Skipped: {self.resource.gvk} ({self.stage} failed: {error})"


class ExportResult(BaseModel):
    """Outcome of an export run."""

    namespace: str
    output_file: Path
    written: List[ResourceType] = Field(default_factory=list)
    skipped: List[SkippedResource] = Field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.written) + len(self.skipped)
