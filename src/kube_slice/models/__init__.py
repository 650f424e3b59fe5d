"""Data models for kube-slice."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class RawDocument:
    """One document exactly as it appeared between separator lines."""

    ordinal: int
    data: bytes


@dataclass(frozen=True)
class ResourceIdentity:
    api_version: str = ""
    kind: str = ""
    name: str = ""
    namespace: str = ""

    @property
    def group(self) -> str:
        """API group derived from apiVersion; empty for the core group."""
        fields = self.api_version.split("/")
        if len(fields) == 2:
            return fields[0].lower()
        return ""

    def empty(self) -> bool:
        return not (self.api_version or self.kind or self.name or self.namespace)

    def __str__(self) -> str:
        return f"kind {self.kind}, name {self.name}, apiVersion {self.api_version}".strip()


@dataclass
class NamedDocument:
    filename: str
    identity: ResourceIdentity
    data: bytes

    @property
    def size(self) -> int:
        return len(self.data)
