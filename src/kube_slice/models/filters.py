"""Include / exclude filter configuration."""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from kube_slice.core.errors import ConfigError

KIND_NAME_PATTERN = re.compile(r"^[^/]+/[^/]+$")


@dataclass
class FilterSpec:
    included_kinds: list[str] = field(default_factory=list)
    excluded_kinds: list[str] = field(default_factory=list)
    included_names: list[str] = field(default_factory=list)
    excluded_names: list[str] = field(default_factory=list)
    included: list[str] = field(default_factory=list)  # <kind>/<name> pairs
    excluded: list[str] = field(default_factory=list)
    included_groups: list[str] = field(default_factory=list)
    excluded_groups: list[str] = field(default_factory=list)
    allow_empty_kinds: bool = False
    allow_empty_names: bool = False
    strict: bool = False

    @property
    def filters_kind_or_name(self) -> bool:
        return bool(
            self.included_kinds or self.excluded_kinds
            or self.included_names or self.excluded_names
            or self.included or self.excluded
        )

    @property
    def filters_group(self) -> bool:
        return bool(self.included_groups or self.excluded_groups)

    def validate(self) -> None:
        """Raise ConfigError when two options contradict each other."""
        conflicts = [
            (self.included_kinds and self.allow_empty_kinds,
             "cannot specify both included kinds and allow empty kinds"),
            (self.excluded_kinds and self.allow_empty_kinds,
             "cannot specify both excluded kinds and allow empty kinds"),
            (self.included_names and self.allow_empty_names,
             "cannot specify both included names and allow empty names"),
            (self.excluded_names and self.allow_empty_names,
             "cannot specify both excluded names and allow empty names"),
            (self.included_kinds and self.excluded_kinds,
             "cannot specify both included and excluded kinds"),
            (self.included_names and self.excluded_names,
             "cannot specify both included and excluded names"),
            (self.included and self.excluded,
             "cannot specify both included and excluded"),
            (self.included_groups and self.excluded_groups,
             "cannot specify both included and excluded groups"),
        ]
        for failed, message in conflicts:
            if failed:
                raise ConfigError(message)

        included, excluded = self.kind_name_patterns()
        for pattern in included:
            if not KIND_NAME_PATTERN.match(pattern):
                raise ConfigError(f"invalid included pattern {pattern!r} should be <kind>/<name>")
        for pattern in excluded:
            if not KIND_NAME_PATTERN.match(pattern):
                raise ConfigError(f"invalid excluded pattern {pattern!r} should be <kind>/<name>")

    def kind_name_patterns(self) -> tuple[list[str], list[str]]:
        """Fold kind-only and name-only filters into <kind>/<name> globs.

        Returns ``(included, excluded)``.
        """
        included = list(self.included)
        excluded = list(self.excluded)
        included.extend(f"{kind}/*" for kind in self.included_kinds)
        excluded.extend(f"{kind}/*" for kind in self.excluded_kinds)
        included.extend(f"*/{name}" for name in self.included_names)
        excluded.extend(f"*/{name}" for name in self.excluded_names)
        return included, excluded
