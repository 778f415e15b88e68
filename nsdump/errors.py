"""Exception hierarchy.

Fatal errors abort the run and map to a process exit code. Resource errors
only affect a single resource type and are skipped by the dumper.
"""

from enum import IntEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .model.kubernetes import ResourceType


class ExitCode(IntEnum):
    """Process exit codes."""

    ERROR = 1
    CONNECTION = 3
    DISCOVERY = 4
    OUTPUT = 5


class NsdumpError(Exception):
    """Base class for all nsdump errors."""


class FatalError(NsdumpError):
    """An error that aborts the whole export."""

    exit_code: ExitCode = ExitCode.ERROR


class ConnectionSetupError(FatalError):
    """Neither in-cluster nor kubeconfig credentials could be resolved."""

    exit_code = ExitCode.CONNECTION


class DiscoveryError(FatalError):
    """The API server's resource types could not be listed."""

    exit_code = ExitCode.DISCOVERY


class OutputError(FatalError):
    """The output file could not be opened."""

    exit_code = ExitCode.OUTPUT


class ResourceError(NsdumpError):
    """A failure confined to one resource type."""

    stage = "unknown"

    def __init__(self, resource: "ResourceType", message: str):
        super().__init__(message)
        self.resource = resource


class FetchError(ResourceError):
    """Listing a resource type in the namespace failed."""

    stage = "fetch"


class ConversionError(ResourceError):
    """A fetched payload could not be converted to YAML."""

    stage = "convert"
