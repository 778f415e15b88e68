"""Namespace dump loop."""

from typing import Optional

from rich.console import Console

from ..errors import ResourceError
from ..exporters.base import Exporter
from ..exporters.yaml_exporter import YamlExporter
from ..k8s.client import K8sClient
from ..model.export import ExportResult, ExportSettings, SkippedResource
from ..model.kubernetes import ResourceType
from ..utils.logger import get_logger

logger = get_logger(__name__)


class NamespaceDumper:
    """Writes every namespaced resource of one namespace through an exporter."""

    def __init__(
        self,
        client: K8sClient,
        exporter: Exporter,
        namespace: str,
        mark_skipped: bool = False,
        console: Optional[Console] = None,
    ):
        self.client = client
        self.exporter = exporter
        self.namespace = namespace
        self.mark_skipped = mark_skipped
        self.console = console or Console()

    def run(self) -> ExportResult:
        """Discover resource types, then fetch and write each one in order."""
        resources = self.client.get_preferred_namespaced_resources()
        result = ExportResult(namespace=self.namespace, output_file=self.exporter.output_file)

        with self.exporter:
            for resource in resources:
                self._dump_resource(resource, result)

        logger.info(
            f"Dumped {len(result.written)} of {result.total} resource types "
            f"from namespace {self.namespace}"
        )
        return result

    def _dump_resource(self, resource: ResourceType, result: ExportResult):
        self.console.print(
            f"Dumping {resource.gvk} to {self.exporter.output_file}", markup=False, soft_wrap=True
        )
        try:
            payload = self.client.fetch_resource_list(resource, self.namespace)
            rendered = self.exporter.render(resource, payload)
        except ResourceError as e:
            self._skip(e, result)
            return

        self.exporter.write(resource, rendered)
        result.written.append(resource)

    def _skip(self, error: ResourceError, result: ExportResult):
        action = "getting" if error.stage == "fetch" else "converting to YAML"
        self.console.print(
            f"Error {action} {error.resource.gvk}: {error}", markup=False, soft_wrap=True
        )

        skipped = SkippedResource(resource=error.resource, stage=error.stage, error=str(error))
        result.skipped.append(skipped)
        if self.mark_skipped:
            self.exporter.write_skipped(skipped)


def dump_namespace(settings: ExportSettings, console: Optional[Console] = None) -> ExportResult:
    """Connect, discover and dump a namespace as described by ``settings``."""
    client = K8sClient.from_environment(
        kubeconfig=settings.kubeconfig,
        context=settings.context,
        prefer_in_cluster=settings.prefer_in_cluster,
    )
    logger.info(f"Connected to {client.host} using {client.source} configuration")
    with client:
        dumper = NamespaceDumper(
            client=client,
            exporter=YamlExporter(settings.output_file),
            namespace=settings.namespace,
            mark_skipped=settings.mark_skipped,
            console=console,
        )
        return dumper.run()
