"""Base exporter class."""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import IO, Optional

from ..errors import OutputError
from ..model.export import SkippedResource
from ..model.kubernetes import ResourceType


class Exporter(ABC):
    """Writes resource lists into a single output document.

    The file is truncated when opened and only appended to afterwards.
    """

    def __init__(self, output_file: Path):
        self.output_file = Path(output_file)
        self._stream: Optional[IO[str]] = None

    def open(self) -> "Exporter":
        try:
            self._stream = open(self.output_file, "w", encoding="utf-8")
        except OSError as e:
            raise OutputError(f"Unable to create {self.output_file}: {e}") from e
        return self

    def close(self):
        if self._stream is None:
            return
        stream, self._stream = self._stream, None
        try:
            stream.close()
        except OSError as e:
            raise OutputError(f"Unable to write {self.output_file}: {e}") from e

    def __enter__(self) -> "Exporter":
        return self.open()

    def __exit__(self, exc_type, exc, tb):
        self.close()

    @property
    def stream(self) -> IO[str]:
        if self._stream is None:
            raise RuntimeError("Exporter is not open")
        return self._stream

    @abstractmethod
    def render(self, resource: ResourceType, payload: bytes) -> str:
        """Convert a raw resource list to the output text."""
        pass

    @abstractmethod
    def write(self, resource: ResourceType, rendered: str):
        """Append one rendered resource list."""
        pass

    def _write(self, text: str):
        try:
            self.stream.write(text)
        except OSError as e:
            raise OutputError(f"Unable to write {self.output_file}: {e}") from e

    def write_skipped(self, skipped: SkippedResource):
        """Append a comment recording a resource type that was left out."""
        self._write(f"{skipped.marker}\n")
