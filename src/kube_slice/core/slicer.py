"""Drive documents from the input stream through filtering and naming."""

from __future__ import annotations

import io
import logging
from dataclasses import dataclass, field
from typing import BinaryIO

from kube_slice.core.aggregator import OutputSet
from kube_slice.core.errors import DocumentSkipped
from kube_slice.core.filters import FilterEngine
from kube_slice.core.metadata import extract_identity, parse_document
from kube_slice.core.naming import DEFAULT_TEMPLATE, NameRenderer
from kube_slice.core.scanner import scan_documents
from kube_slice.core.sorting import sort_by_kind
from kube_slice.models import NamedDocument, RawDocument
from kube_slice.models.filters import FilterSpec

logger = logging.getLogger(__name__)


@dataclass
class SliceOptions:
    template: str = DEFAULT_TEMPLATE
    filters: FilterSpec = field(default_factory=FilterSpec)
    sort_by_kind: bool = False


class Slicer:
    """One pass over a stream of YAML documents.

    Option validation and template compilation happen here, before any input
    is read, so a bad configuration fails without touching the stream.
    """

    def __init__(self, options: SliceOptions | None = None):
        self.options = options or SliceOptions()
        self.filter_engine = FilterEngine(self.options.filters)
        self.renderer = NameRenderer(self.options.template)

    def process(self, stream: BinaryIO) -> OutputSet:
        output = OutputSet()
        seen = 0

        for doc in scan_documents(stream):
            seen += 1
            if not doc.data:
                logger.debug("Document %d is empty, skipping", doc.ordinal)
                continue

            try:
                named = self.process_document(doc)
            except DocumentSkipped as e:
                logger.info("Skipping document %d: %s", doc.ordinal, e)
                continue

            output.add(named.filename, named.identity, named.data)

        if self.options.sort_by_kind:
            output.reorder(sort_by_kind(output.documents))

        logger.debug(
            "Finished processing input: %d documents read, %d files generated", seen, len(output)
        )
        return output

    def process_document(self, doc: RawDocument) -> NamedDocument:
        """Parse, filter and name one document; raises on skip or failure."""
        manifest = parse_document(doc)
        identity = extract_identity(manifest)
        self.filter_engine.check(identity, doc.ordinal)
        filename = self.renderer.render(manifest, identity, doc.ordinal)
        return NamedDocument(filename=filename, identity=identity, data=doc.data)


def slice_manifests(data: bytes | str, options: SliceOptions | None = None) -> OutputSet:
    """Slice an in-memory YAML stream."""
    if isinstance(data, str):
        data = data.encode("utf-8")
    return Slicer(options).process(io.BytesIO(data))
