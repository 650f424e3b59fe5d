"""Error and skip types raised while slicing documents.

Subclasses of ``SliceError`` are fatal and abort the run. Subclasses of
``DocumentSkipped`` only drop the current document; the driving loop logs
them and moves on.
"""

from __future__ import annotations

from kube_slice.models import ResourceIdentity

NON_K8S_HINT = (
    "the file has no Kubernetes metadata: it is most likely a non-Kubernetes "
    "YAML file, you can skip it with --skip-non-k8s"
)


class SliceError(Exception):
    """Base class for errors that stop the run."""


class ConfigError(SliceError):
    """Invalid or contradictory options."""


class InputError(SliceError):
    """Input could not be read or contained no data."""


class ParseError(SliceError):
    def __init__(self, ordinal: int, detail: str):
        self.ordinal = ordinal
        self.detail = detail
        super().__init__(f"unable to parse YAML file number {ordinal}: {detail}")


class RenderError(SliceError):
    def __init__(self, detail: str, ordinal: int | None = None):
        self.ordinal = ordinal
        self.detail = detail
        if ordinal is None:
            message = f"file name template parse failed: {detail}"
        else:
            message = f"unable to render file name for YAML file number {ordinal}: {detail}"
        super().__init__(message)


class EmptyNameError(SliceError):
    def __init__(self, ordinal: int, identity: ResourceIdentity):
        self.ordinal = ordinal
        self.identity = identity
        super().__init__(
            f"file name rendered will yield no file name for YAML file number {ordinal}: {identity}"
        )


class MissingFieldError(SliceError):
    """A filter needs a field the document does not carry."""

    def __init__(self, field_name: str, ordinal: int, identity: ResourceIdentity):
        self.field_name = field_name
        self.ordinal = ordinal
        self.identity = identity
        message = f'unable to find Kubernetes "{field_name}" field in file {ordinal}'
        if identity.empty():
            message += f": {NON_K8S_HINT}"
        else:
            message += f": {identity}"
        super().__init__(message)


class DocumentSkipped(Exception):
    """Base class for non-fatal, per-document skips."""


class StrictSkip(DocumentSkipped):
    def __init__(self, field_name: str):
        self.field_name = field_name
        super().__init__(
            f'resource does not have a Kubernetes "{field_name}" field or the field is invalid or empty'
        )


class FilterSkip(DocumentSkipped):
    def __init__(self, kind: str, name: str, reason: str, group: str = ""):
        self.kind = kind
        self.name = name
        self.group = group
        self.reason = reason
        super().__init__(f'resource {kind} "{name}" is configured to be skipped: {reason}')
