"""Split a byte stream into raw YAML documents at ``---`` lines."""

from __future__ import annotations

import logging
from typing import BinaryIO, Iterator

from kube_slice.models import RawDocument

logger = logging.getLogger(__name__)

SEPARATORS = (b"---\n", b"---\r\n", b"---")


def is_separator(line: bytes) -> bool:
    return line in SEPARATORS


def scan_documents(stream: BinaryIO) -> Iterator[RawDocument]:
    """Yield every document in ``stream``, trimmed, in input order.

    Ordinals start at 1 and advance on every boundary. An empty fragment
    before the very first separator is a leading ``---`` and is not yielded,
    although it still consumes an ordinal. Other empty fragments are yielded
    so callers can account for them.
    """
    ordinal = 1
    buffer: list[bytes] = []

    for line in stream:
        if not is_separator(line):
            buffer.append(line)
            continue

        data = b"".join(buffer).strip()
        buffer = []
        if ordinal == 1 and not data:
            logger.debug("Document %d is a leading separator, skipping", ordinal)
        else:
            logger.debug("Found the end of document %d", ordinal)
            yield RawDocument(ordinal=ordinal, data=data)
        ordinal += 1

    logger.debug("Reached end of input, flushing document %d", ordinal)
    yield RawDocument(ordinal=ordinal, data=b"".join(buffer).strip())
