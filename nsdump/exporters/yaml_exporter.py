"""YAML exporter."""

import json

import yaml

from ..errors import ConversionError
from ..model.kubernetes import ResourceType
from ..utils.logger import get_logger
from .base import Exporter

logger = get_logger(__name__)

DOCUMENT_SEPARATOR = "---\n"


def json_to_yaml(payload: bytes) -> str:
    """Re-encode a JSON document as block-style YAML with sorted keys."""
    data = json.loads(payload)
    return yaml.safe_dump(data, default_flow_style=False, sort_keys=True, allow_unicode=True)


class YamlExporter(Exporter):
    """Export resource lists as a multi-document YAML stream."""

    def render(self, resource: ResourceType, payload: bytes) -> str:
        try:
            return json_to_yaml(payload)
        except (ValueError, yaml.YAMLError) as e:
            raise ConversionError(resource, str(e)) from e

    def write(self, resource: ResourceType, rendered: str):
        """Write header comment, body and document separator."""
        if rendered and not rendered.endswith("\n"):
            rendered += "\n"
        self._write(f"# Resource: {resource.gvk}\n{rendered}{DOCUMENT_SEPARATOR}")
        logger.debug(f"Wrote {resource.gvk} to {self.output_file}")
