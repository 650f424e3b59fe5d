"""Read YAML input from a file, stdin or a folder of files."""

from __future__ import annotations

import logging
import shutil
import sys
from pathlib import Path

from kube_slice.core.errors import InputError

logger = logging.getLogger(__name__)

DEFAULT_EXTENSIONS: tuple[str, ...] = (".yaml", ".yml")

STDIN_NAMES = ("", "-")


def load_file(path: str) -> bytes:
    """Read ``path``, or stdin when it is empty or ``-``."""
    if path in STDIN_NAMES:
        logger.debug("Reading input from stdin")
        return sys.stdin.buffer.read()
    try:
        return Path(path).read_bytes()
    except OSError as e:
        raise InputError(f"unable to read file {path!r}: {e}") from e


def load_folder(
    folder: str,
    extensions: list[str] | tuple[str, ...] = DEFAULT_EXTENSIONS,
    recurse: bool = False,
) -> tuple[bytes, int]:
    """Concatenate every matching file in ``folder`` with ``---`` separators.

    Returns the combined data and the number of files read.
    """
    root = Path(folder)
    if not root.is_dir():
        raise InputError(f"input folder {folder!r} does not exist or is not a directory")

    wanted = {ext.lower() if ext.startswith(".") else f".{ext.lower()}" for ext in extensions}
    candidates = root.rglob("*") if recurse else root.iterdir()

    chunks: list[bytes] = []
    for path in sorted(candidates):
        if not path.is_file() or path.suffix.lower() not in wanted:
            continue
        logger.debug("Loading %s", path)
        try:
            chunks.append(path.read_bytes())
        except OSError as e:
            raise InputError(f"unable to read file {str(path)!r}: {e}") from e

    if not chunks:
        raise InputError(
            f"no files found in {folder!r} with extensions: {', '.join(sorted(wanted))}"
        )
    return b"\n---\n".join(chunks), len(chunks)


def delete_folder_contents(folder: str) -> None:
    """Remove everything inside ``folder`` but keep the folder itself."""
    for child in Path(folder).iterdir():
        if child.is_dir() and not child.is_symlink():
            shutil.rmtree(child)
        else:
            child.unlink()


def output_path(directory: str | Path, filename: str) -> Path:
    """Join a rendered file name under ``directory``, even when it is absolute."""
    return Path(directory) / filename.lstrip("/\\")
