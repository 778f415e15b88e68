"""Kubernetes interaction module."""

from .client import K8sClient

__all__ = ["K8sClient"]
