"""Data models."""

from .kubernetes import ResourceType
from .export import ExportSettings, ExportResult, SkippedResource, default_kubeconfig_path

__all__ = [
    "ResourceType",
    "ExportSettings",
    "ExportResult",
    "SkippedResource",
    "default_kubeconfig_path",
]
