"""Core business logic."""

from .dumper import NamespaceDumper, dump_namespace

__all__ = ["NamespaceDumper", "dump_namespace"]
