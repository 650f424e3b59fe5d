"""Decide whether a document is kept, skipped or rejected."""

from __future__ import annotations

import re

from kube_slice.core.errors import FilterSkip, MissingFieldError, StrictSkip
from kube_slice.models import ResourceIdentity
from kube_slice.models.filters import FilterSpec


def glob_match(pattern: str, value: str) -> bool:
    """Case-insensitive match of ``value`` against ``pattern``; only ``*`` is a wildcard."""
    regex = ".*".join(re.escape(part) for part in pattern.lower().split("*"))
    return re.fullmatch(regex, value.lower(), flags=re.DOTALL) is not None


def match_any(patterns: list[str], value: str) -> str | None:
    """Return the first pattern matching ``value``, or None."""
    for pattern in patterns:
        if glob_match(pattern, value):
            return pattern
    return None


class FilterEngine:
    """Applies a validated FilterSpec to one document at a time.

    Checks run in a fixed order: strict mode, field presence, kind/name
    patterns, then API groups. ``check`` returns None when the document is
    kept and raises otherwise.
    """

    def __init__(self, spec: FilterSpec):
        spec.validate()
        self.spec = spec
        self.included, self.excluded = spec.kind_name_patterns()

    def check(self, identity: ResourceIdentity, ordinal: int) -> None:
        self._check_strict(identity)
        if self.included or self.excluded:
            self._check_fields(identity, ordinal)
            self._check_kind_name(identity)
        if self.spec.filters_group:
            self._check_group(identity, ordinal)

    def _check_strict(self, identity: ResourceIdentity) -> None:
        if not self.spec.strict:
            return
        if not identity.api_version:
            raise StrictSkip("apiVersion")
        if not identity.kind:
            raise StrictSkip("kind")
        if not identity.name:
            raise StrictSkip("metadata.name")

    def _check_fields(self, identity: ResourceIdentity, ordinal: int) -> None:
        if not identity.kind and not self.spec.allow_empty_kinds:
            raise MissingFieldError("kind", ordinal, identity)
        if not identity.name and not self.spec.allow_empty_names:
            raise MissingFieldError("metadata.name", ordinal, identity)

    def _check_kind_name(self, identity: ResourceIdentity) -> None:
        candidate = f"{identity.kind}/{identity.name}"

        if self.included:
            if match_any(self.included, candidate) is None:
                raise FilterSkip(
                    identity.kind,
                    identity.name,
                    f"does not match any included kind/name pattern {self.included}",
                )

        if self.excluded:
            pattern = match_any(self.excluded, candidate)
            if pattern is not None:
                raise FilterSkip(
                    identity.kind,
                    identity.name,
                    f"matches excluded kind/name pattern {pattern!r}",
                )

    def _check_group(self, identity: ResourceIdentity, ordinal: int) -> None:
        if not identity.api_version:
            raise MissingFieldError("apiVersion", ordinal, identity)

        group = identity.group
        if self.spec.included_groups:
            if match_any(self.spec.included_groups, group) is None:
                raise FilterSkip(
                    identity.kind,
                    identity.name,
                    f"does not match any included groups {self.spec.included_groups}",
                    group=group,
                )

        pattern = match_any(self.spec.excluded_groups, group)
        if pattern is not None:
            raise FilterSkip(
                identity.kind,
                identity.name,
                f"matches excluded group {pattern!r}",
                group=group,
            )
