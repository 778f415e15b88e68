"""Main CLI interface using Typer."""

import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape

from .. import __version__
from ..core import dump_namespace
from ..errors import FatalError
from ..model.export import DEFAULT_NAMESPACE, DEFAULT_OUTPUT_FILE, ExportSettings
from ..utils.logger import get_logger, set_log_level

# Create CLI app
app = typer.Typer(
    name="nsdump",
    help="Dump all namespaced Kubernetes resources of a namespace into one YAML file",
    add_completion=False,
)

console = Console()
logger = get_logger(__name__)


def _print_version():
    console.print(f"Version: {__version__}", markup=False, highlight=False)


def _version_callback(value: bool):
    if value:
        _print_version()
        raise typer.Exit()


@app.callback(invoke_without_command=True)
def export(
    ctx: typer.Context,
    namespace: str = typer.Option(
        DEFAULT_NAMESPACE, "--namespace", "-n", help="The namespace to dump resources from"
    ),
    output_file: Path = typer.Option(
        DEFAULT_OUTPUT_FILE,
        "--outputFile",
        "-o",
        help="The output file to write the resources to",
    ),
    kubeconfig: Optional[Path] = typer.Option(
        None,
        "--kubeconfig",
        help="Kubeconfig file to use instead of in-cluster credentials (default: $HOME/.kube/config)",
    ),
    context: Optional[str] = typer.Option(
        None, "--context", "-c", help="Kubeconfig context to use"
    ),
    mark_skipped: bool = typer.Option(
        False,
        "--mark-skipped/--no-mark-skipped",
        help="Record resource types that could not be dumped as comments in the output",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Print the version of the program",
    ),
):
    """Dump every namespaced resource in a namespace to a single YAML file."""
    if ctx.invoked_subcommand is not None:
        return

    if verbose:
        set_log_level(logging.DEBUG)

    settings = ExportSettings(
        namespace=namespace,
        output_file=output_file,
        kubeconfig=kubeconfig,
        context=context,
        mark_skipped=mark_skipped,
    )

    try:
        result = dump_namespace(settings, console=console)
    except FatalError as e:
        logger.debug(f"Export aborted: {e!r}")
        console.print(f"[red]Error:[/red] {escape(str(e))}", soft_wrap=True)
        raise typer.Exit(int(e.exit_code))

    if result.skipped:
        console.print(
            f"Skipped [yellow]{len(result.skipped)}[/yellow] of {result.total} resource types"
        )
    console.print(
        f"All resources in namespace {result.namespace} have been dumped to {result.output_file}",
        markup=False,
        highlight=False,
        soft_wrap=True,
    )


@app.command()
def version():
    """Print the version of the program."""
    _print_version()


def main():
    app()


if __name__ == "__main__":
    main()
