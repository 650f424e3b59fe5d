"""Rich table builders."""

from __future__ import annotations

from rich.table import Table

from kube_slice.core.aggregator import OutputSet
from kube_slice.utils.files import output_path


def dry_run_table(output: OutputSet, directory: str) -> Table:
    table = Table(title="Files (dry-run)", expand=False)
    table.add_column("File", style="bold white", no_wrap=True)
    table.add_column("Kind", style="cyan", no_wrap=True)
    table.add_column("Name", style="magenta")
    table.add_column("Namespace", style="blue")
    table.add_column("Bytes", justify="right", style="dim")

    for doc in output:
        table.add_row(
            str(output_path(directory, doc.filename)),
            doc.identity.kind or "-",
            doc.identity.name or "-",
            doc.identity.namespace or "-",
            str(doc.size),
        )
    return table
