"""Hand the sliced files to disk, stdout or a dry-run report."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import BinaryIO

from rich.console import Console

from kube_slice.config.settings import Settings
from kube_slice.core.aggregator import OutputSet
from kube_slice.core.errors import SliceError
from kube_slice.core.template_funcs import pluralize
from kube_slice.output.tables import dry_run_table
from kube_slice.utils.files import delete_folder_contents, output_path

logger = logging.getLogger(__name__)


class Store:
    """Writes an OutputSet according to the output settings."""

    def __init__(
        self,
        settings: Settings,
        stdout: BinaryIO | None = None,
        console: Console | None = None,
    ):
        self.settings = settings
        self.stdout = stdout if stdout is not None else sys.stdout.buffer
        self.console = console or Console(stderr=True)

    @property
    def directory(self) -> str:
        return self.settings.output_directory or "."

    def _status(self, message: str) -> None:
        if not self.settings.quiet:
            self.console.print(message, highlight=False)

    def save(self, output: OutputSet) -> int:
        """Persist every file and return how many were handled."""
        if self.settings.dry_run:
            return self._dry_run(output)
        if self.settings.output_to_stdout:
            return self._to_stdout(output)
        return self._to_disk(output)

    def _dry_run(self, output: OutputSet) -> int:
        if not self.settings.quiet:
            self.console.print(dry_run_table(output, self.directory))
        count = len(output)
        self._status(f"{count} {pluralize('file', count)} generated (dry-run)")
        return count

    def _to_stdout(self, output: OutputSet) -> int:
        count = 0
        for doc in output:
            count += 1
            if count > 1:
                self.stdout.write(b"---\n")
            if not self.settings.remove_file_comments:
                path = output_path(self.directory, doc.filename)
                self.stdout.write(f"# File: {path} ({doc.size} bytes)\n".encode("utf-8"))
            self.stdout.write(doc.data + b"\n")
        self.stdout.flush()
        self._status(f"{count} {pluralize('file', count)} parsed to stdout.")
        return count

    def _to_disk(self, output: OutputSet) -> int:
        directory = Path(self.directory)
        if self.settings.prune and directory.is_dir():
            logger.debug("Pruning output directory %s", directory)
            try:
                delete_folder_contents(str(directory))
            except OSError as e:
                raise SliceError(f"unable to prune output directory {str(directory)!r}: {e}") from e

        count = 0
        for doc in output:
            count += 1
            data = doc.data
            if self.settings.include_triple_dash and data != b"---":
                data = b"---\n" + data
            if not data.endswith(b"\n"):
                data += b"\n"

            path = output_path(directory, doc.filename)
            write_file(path, data)
            self._status(f"Wrote {path} -- {len(data)} bytes.")

        self._status(f"{count} {pluralize('file', count)} generated.")
        return count


def write_file(path: Path, data: bytes) -> None:
    """Write ``data`` to ``path``, creating parent directories first."""
    logger.debug("Writing %d bytes to %s", len(data), path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)
    except OSError as e:
        raise SliceError(f"unable to write file {str(path)!r}: {e}") from e
