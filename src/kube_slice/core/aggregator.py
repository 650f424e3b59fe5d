"""Ordered collection of output files, merging documents that share a name."""

from __future__ import annotations

import logging
from typing import Iterator

from kube_slice.models import NamedDocument, ResourceIdentity

logger = logging.getLogger(__name__)

DOCUMENT_SEPARATOR = b"\n---\n"


class OutputSet:
    """Insertion-ordered mapping of rendered file name -> NamedDocument.

    Documents rendering to an existing name are appended byte for byte after
    a ``---`` line; the YAML is never re-serialized.
    """

    def __init__(self) -> None:
        self._documents: dict[str, NamedDocument] = {}

    def add(self, filename: str, identity: ResourceIdentity, data: bytes) -> NamedDocument:
        existing = self._documents.get(filename)
        if existing is None:
            logger.debug("New file %s", filename)
            document = NamedDocument(filename=filename, identity=identity, data=data)
            self._documents[filename] = document
            return document

        logger.debug("Appending to existing file %s", filename)
        existing.data = existing.data + DOCUMENT_SEPARATOR + data
        return existing

    def reorder(self, documents: list[NamedDocument]) -> None:
        self._documents = {doc.filename: doc for doc in documents}

    def get(self, filename: str) -> NamedDocument | None:
        return self._documents.get(filename)

    @property
    def documents(self) -> list[NamedDocument]:
        return list(self._documents.values())

    @property
    def filenames(self) -> list[str]:
        return list(self._documents)

    def __iter__(self) -> Iterator[NamedDocument]:
        return iter(list(self._documents.values()))

    def __len__(self) -> int:
        return len(self._documents)

    def __contains__(self, filename: object) -> bool:
        return filename in self._documents
