"""Parse single YAML documents and pull out their Kubernetes identity."""

from __future__ import annotations

from typing import Any

import yaml

from kube_slice.core.errors import ParseError
from kube_slice.models import RawDocument, ResourceIdentity


def string_field(obj: Any, key: str) -> str:
    """Return ``obj[key]`` if ``obj`` is a mapping and the value is a string, else ``""``."""
    if not isinstance(obj, dict):
        return ""
    value = obj.get(key)
    return value if isinstance(value, str) else ""


def mapping_field(obj: Any, key: str) -> dict[str, Any]:
    """Return ``obj[key]`` if it is a mapping, else an empty dict."""
    if not isinstance(obj, dict):
        return {}
    value = obj.get(key)
    return value if isinstance(value, dict) else {}


def parse_document(doc: RawDocument) -> dict[str, Any]:
    """Parse one document into a dict.

    Empty and comment-only documents parse to an empty dict. Anything that is
    not a mapping at the top level is rejected.
    """
    try:
        manifest = yaml.safe_load(doc.data)
    except yaml.YAMLError as e:
        raise ParseError(doc.ordinal, str(e)) from e

    if manifest is None:
        return {}
    if not isinstance(manifest, dict):
        raise ParseError(
            doc.ordinal, f"expected a mapping at the top level, got {type(manifest).__name__}"
        )
    return manifest


def extract_identity(manifest: dict[str, Any]) -> ResourceIdentity:
    metadata = mapping_field(manifest, "metadata")
    return ResourceIdentity(
        api_version=string_field(manifest, "apiVersion"),
        kind=string_field(manifest, "kind"),
        name=string_field(metadata, "name"),
        namespace=string_field(metadata, "namespace"),
    )
