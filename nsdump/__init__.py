"""Dump every namespaced Kubernetes resource in a namespace to one YAML file."""

__version__ = "1.0.0"
