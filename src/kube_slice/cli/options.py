"""Shared CLI options."""

from __future__ import annotations

import typer

from kube_slice.config.settings import env_var


def _list_option(flag: str, help: str) -> typer.models.OptionInfo:
    return typer.Option(None, f"--{flag}", envvar=env_var(flag), show_envvar=False, help=help)


def _flag(flag: str, *short: str, help: str, hidden: bool = False) -> typer.models.OptionInfo:
    return typer.Option(
        False, f"--{flag}", *short, envvar=env_var(flag), show_envvar=False, help=help, hidden=hidden,
    )


InputFileOption = typer.Option(
    None, "--input-file", "-f", envvar=env_var("input-file"), show_envvar=False,
    help='Input file to read the YAML stream from; if empty or "-", stdin is used',
)
InputFolderOption = typer.Option(
    None, "--input-folder", "-d", envvar=env_var("input-folder"), show_envvar=False,
    help="Folder whose YAML files are read and concatenated",
)
ExtensionsOption = _list_option("extensions", "File extensions read from the input folder (default: .yaml,.yml)")
OutputDirOption = typer.Option(
    None, "--output-dir", "-o", envvar=env_var("output-dir"), show_envvar=False,
    help="Directory where the sliced files are written",
)
TemplateOption = typer.Option(
    None, "--template", "-t", envvar=env_var("template"), show_envvar=False,
    help="Jinja2 template used to render each file name",
)
ConfigOption = typer.Option(None, "--config", "-c", help="Path to a YAML config file keyed by flag names")

IncludeKindOption = _list_option("include-kind", "Kind to include (case insensitive, glob supported)")
ExcludeKindOption = _list_option("exclude-kind", "Kind to exclude (case insensitive, glob supported)")
IncludeNameOption = _list_option("include-name", "Name to include (case insensitive, glob supported)")
ExcludeNameOption = _list_option("exclude-name", "Name to exclude (case insensitive, glob supported)")
IncludeOption = _list_option("include", "<kind>/<name> to include (case insensitive, glob supported)")
ExcludeOption = _list_option("exclude", "<kind>/<name> to exclude (case insensitive, glob supported)")
IncludeGroupOption = _list_option("include-group", "API group to include (case insensitive, glob supported)")
ExcludeGroupOption = _list_option("exclude-group", "API group to exclude (case insensitive, glob supported)")

RecurseOption = _flag("recurse", "-r", help="Read the input folder recursively")
DryRunOption = _flag("dry-run", help="Only report the files that would be written")
DebugOption = _flag("debug", help="Enable debug logging", hidden=True)
QuietOption = _flag("quiet", "-q", help="Do not write status messages to stderr")
StrictOption = _flag(
    "skip-non-k8s", "-s",
    help='Skip documents without "apiVersion", "kind" and "metadata.name"',
)
SortByKindOption = _flag("sort-by-kind", help="Sort resources in Helm install order")
StdoutOption = _flag("stdout", help="Print the sliced files to stdout instead of writing them")
AllowEmptyKindsOption = _flag("allow-empty-kinds", help="Do not fail on documents without a kind when filtering")
AllowEmptyNamesOption = _flag("allow-empty-names", help="Do not fail on documents without a name when filtering")
TripleDashOption = _flag("include-triple-dash", help='Start every written file with "---"')
PruneOption = _flag("prune", help="Empty the output directory before writing")
RemoveCommentsOption = _flag("remove-comments", help='Omit the "# File:" comments in stdout mode')
