"""Root Typer application."""

from __future__ import annotations

import io
import sys
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape

from kube_slice import __version__
from kube_slice.cli.options import (
    AllowEmptyKindsOption,
    AllowEmptyNamesOption,
    ConfigOption,
    DebugOption,
    DryRunOption,
    ExcludeGroupOption,
    ExcludeKindOption,
    ExcludeNameOption,
    ExcludeOption,
    ExtensionsOption,
    IncludeGroupOption,
    IncludeKindOption,
    IncludeNameOption,
    IncludeOption,
    InputFileOption,
    InputFolderOption,
    OutputDirOption,
    PruneOption,
    QuietOption,
    RecurseOption,
    RemoveCommentsOption,
    SortByKindOption,
    StdoutOption,
    StrictOption,
    TemplateOption,
    TripleDashOption,
)
from kube_slice.config.settings import Settings, load_config_file, resolve_settings
from kube_slice.core.errors import InputError, SliceError
from kube_slice.core.slicer import SliceOptions, Slicer
from kube_slice.output.store import Store
from kube_slice.utils.files import load_file, load_folder
from kube_slice.utils.logging import configure_logging

app = typer.Typer(
    name="kslice",
    help="Split a multi-document Kubernetes YAML stream into one file per resource.",
    add_completion=False,
)
err_console = Console(stderr=True)

TERMINAL_HINT = (
    "Receiving data from the terminal. Press CTRL+D when you're done typing or CTRL+C\n"
    "to exit without processing the content. If you're seeing this by mistake, make\n"
    "sure the command line flags, environment variables or config file are correct."
)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"kslice {__version__}")
        raise typer.Exit()


def _read_input(settings: Settings) -> bytes:
    if settings.input_folder:
        data, _ = load_folder(settings.input_folder, settings.extensions, settings.recurse)
    else:
        if settings.reads_stdin and not settings.quiet and sys.stdin.isatty():
            err_console.print(TERMINAL_HINT, highlight=False)
        data = load_file(settings.input_file)

    if not data:
        raise InputError("no data found in input file or folder")
    return data


def run(settings: Settings) -> int:
    """Validate, slice and store; returns the number of files handled."""
    settings.validate()
    slicer = Slicer(SliceOptions(
        template=settings.template,
        filters=settings.filters,
        sort_by_kind=settings.sort_by_kind,
    ))
    output = slicer.process(io.BytesIO(_read_input(settings)))
    return Store(settings).save(output)


@app.command()
def slice_cmd(
    input_file: Optional[str] = InputFileOption,
    input_folder: Optional[str] = InputFolderOption,
    extensions: Optional[list[str]] = ExtensionsOption,
    recurse: bool = RecurseOption,
    output_dir: Optional[str] = OutputDirOption,
    template: Optional[str] = TemplateOption,
    dry_run: bool = DryRunOption,
    debug: bool = DebugOption,
    quiet: bool = QuietOption,
    include_kind: Optional[list[str]] = IncludeKindOption,
    exclude_kind: Optional[list[str]] = ExcludeKindOption,
    include_name: Optional[list[str]] = IncludeNameOption,
    exclude_name: Optional[list[str]] = ExcludeNameOption,
    include: Optional[list[str]] = IncludeOption,
    exclude: Optional[list[str]] = ExcludeOption,
    include_group: Optional[list[str]] = IncludeGroupOption,
    exclude_group: Optional[list[str]] = ExcludeGroupOption,
    skip_non_k8s: bool = StrictOption,
    sort_by_kind: bool = SortByKindOption,
    stdout: bool = StdoutOption,
    allow_empty_kinds: bool = AllowEmptyKindsOption,
    allow_empty_names: bool = AllowEmptyNamesOption,
    include_triple_dash: bool = TripleDashOption,
    prune: bool = PruneOption,
    remove_comments: bool = RemoveCommentsOption,
    config: Optional[str] = ConfigOption,
    version: bool = typer.Option(
        False, "--version", callback=_version_callback, is_eager=True, help="Show the version and exit",
    ),
) -> None:
    """Split YAML documents into files named by a template."""
    cli_values = {
        "input_file": input_file,
        "input_folder": input_folder,
        "extensions": extensions,
        "recurse": recurse,
        "output_directory": output_dir,
        "template": template,
        "dry_run": dry_run,
        "debug": debug,
        "quiet": quiet,
        "included_kinds": include_kind,
        "excluded_kinds": exclude_kind,
        "included_names": include_name,
        "excluded_names": exclude_name,
        "included": include,
        "excluded": exclude,
        "included_groups": include_group,
        "excluded_groups": exclude_group,
        "strict": skip_non_k8s,
        "sort_by_kind": sort_by_kind,
        "output_to_stdout": stdout,
        "allow_empty_kinds": allow_empty_kinds,
        "allow_empty_names": allow_empty_names,
        "include_triple_dash": include_triple_dash,
        "prune": prune,
        "remove_file_comments": remove_comments,
    }

    try:
        config_values = load_config_file(config) if config else {}
        settings = resolve_settings(cli_values, config_values)
        configure_logging(settings.debug)
        run(settings)
    except SliceError as e:
        err_console.print(f"[red]Error:[/red] {escape(str(e))}", highlight=False)
        raise typer.Exit(code=1)


def main() -> None:
    app()
