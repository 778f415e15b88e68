"""Resource exporters."""

from .base import Exporter
from .yaml_exporter import YamlExporter, json_to_yaml

__all__ = ["Exporter", "YamlExporter", "json_to_yaml"]
