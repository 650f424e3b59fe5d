"""Run configuration assembled from flags, environment and a config file."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Iterable, Mapping

import yaml

from kube_slice.core.errors import ConfigError
from kube_slice.core.naming import DEFAULT_TEMPLATE
from kube_slice.models.filters import FilterSpec
from kube_slice.utils.files import DEFAULT_EXTENSIONS

ENV_PREFIX = "KUBE_SLICE"

# Config file keys are the long flag names.
CONFIG_KEYS: dict[str, str] = {
    "input-file": "input_file",
    "input-folder": "input_folder",
    "extensions": "extensions",
    "recurse": "recurse",
    "output-dir": "output_directory",
    "template": "template",
    "dry-run": "dry_run",
    "debug": "debug",
    "quiet": "quiet",
    "stdout": "output_to_stdout",
    "sort-by-kind": "sort_by_kind",
    "include-triple-dash": "include_triple_dash",
    "prune": "prune",
    "remove-comments": "remove_file_comments",
    "include-kind": "included_kinds",
    "exclude-kind": "excluded_kinds",
    "include-name": "included_names",
    "exclude-name": "excluded_names",
    "include": "included",
    "exclude": "excluded",
    "include-group": "included_groups",
    "exclude-group": "excluded_groups",
    "skip-non-k8s": "strict",
    "allow-empty-kinds": "allow_empty_kinds",
    "allow-empty-names": "allow_empty_names",
}

_FILTER_FIELDS = {f.name for f in fields(FilterSpec)}
_LIST_FIELDS = {
    "extensions",
    "included_kinds",
    "excluded_kinds",
    "included_names",
    "excluded_names",
    "included",
    "excluded",
    "included_groups",
    "excluded_groups",
}


def env_var(flag: str) -> str:
    """Environment variable bound to a long flag name."""
    return f"{ENV_PREFIX}_{flag.upper().replace('-', '_')}"


def split_csv(values: Iterable[str] | str | None) -> list[str]:
    """Flatten repeated and comma-separated values, dropping blanks."""
    if values is None:
        return []
    if isinstance(values, str):
        values = [values]
    result: list[str] = []
    for value in values:
        result.extend(part.strip() for part in str(value).split(",") if part.strip())
    return result


@dataclass
class Settings:
    input_file: str = ""
    input_folder: str = ""
    extensions: list[str] = field(default_factory=lambda: list(DEFAULT_EXTENSIONS))
    recurse: bool = False
    output_directory: str = ""
    output_to_stdout: bool = False
    template: str = DEFAULT_TEMPLATE
    dry_run: bool = False
    debug: bool = False
    quiet: bool = False
    sort_by_kind: bool = False
    include_triple_dash: bool = False
    prune: bool = False
    remove_file_comments: bool = False
    filters: FilterSpec = field(default_factory=FilterSpec)

    @property
    def reads_stdin(self) -> bool:
        return not self.input_folder and self.input_file in ("", "-")

    @classmethod
    def from_values(cls, values: Mapping[str, Any]) -> Settings:
        """Build from flat attribute values; filter fields are routed to FilterSpec."""
        top: dict[str, Any] = {}
        filter_values: dict[str, Any] = {}
        for key, value in values.items():
            if key in _LIST_FIELDS:
                value = split_csv(value)
            if key in _FILTER_FIELDS:
                filter_values[key] = value
            else:
                top[key] = value
        return cls(filters=FilterSpec(**filter_values), **top)

    def validate(self) -> None:
        if self.input_file and self.input_folder:
            raise ConfigError("cannot specify both input file and input folder")
        if self.output_to_stdout and self.output_directory:
            raise ConfigError(
                "cannot specify both output to stdout and output to file: output directory flag is set"
            )
        if not self.output_to_stdout and not self.output_directory:
            raise ConfigError("output directory flag is empty or not set")
        self.filters.validate()


def _is_unset(value: Any) -> bool:
    return value is None or value is False or value == "" or value == [] or value == ()


def resolve_settings(
    cli_values: Mapping[str, Any],
    config_values: Mapping[str, Any] | None = None,
) -> Settings:
    """Merge flag values over config file values over defaults.

    Flags left at their default (unset, empty or False) do not override the
    config file.
    """
    merged: dict[str, Any] = dict(config_values or {})
    for key, value in cli_values.items():
        if not _is_unset(value):
            merged[key] = value
    return Settings.from_values(merged)


def load_config_file(path: str | Path) -> dict[str, Any]:
    """Read a YAML config file keyed by long flag names."""
    try:
        raw = yaml.safe_load(Path(path).read_text(encoding="utf-8"))
    except OSError as e:
        raise ConfigError(f"failed to read configuration file: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"failed to parse configuration file {str(path)!r}: {e}") from e

    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ConfigError(f"configuration file {str(path)!r} must contain a mapping")

    values: dict[str, Any] = {}
    for key, value in raw.items():
        attr = CONFIG_KEYS.get(str(key))
        if attr is None:
            raise ConfigError(f"unknown configuration key {key!r} in {str(path)!r}")
        values[attr] = value
    return values
