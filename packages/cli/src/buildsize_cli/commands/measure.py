"""measure command — snapshot a local build output directory."""

from __future__ import annotations

import json

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from buildsize_core.snapshot import snapshot_to_dict, take_snapshot

console = Console()


@click.command("measure")
@click.argument("output_dir", type=click.Path(exists=True, file_okay=False))
@click.option("--json", "as_json", is_flag=True, help="Print the snapshot as JSON (the master.json format).")
@click.option("--files", "show_files", is_flag=True, help="List every file, not just extension totals.")
def measure_cmd(output_dir: str, as_json: bool, show_files: bool):
    """Show the size of every file in OUTPUT_DIR, grouped by extension.

    Useful to check what a build produces before wiring up CI, or to write
    a snapshot file for `buildsize compare`.
    """
    snapshot = take_snapshot(output_dir)

    if as_json:
        click.echo(json.dumps(snapshot_to_dict(snapshot), indent=2))
        return

    if not snapshot:
        console.print("[yellow]No files found.[/yellow]")
        return

    table = Table(title=f"Build output — {escape(output_dir)}", show_header=True, header_style="bold cyan")
    table.add_column("Extension", style="bold")
    table.add_column("Files", justify="right")
    table.add_column("Total bytes", justify="right")

    for ext, group in sorted(snapshot.items(), key=lambda item: item[1].total_size, reverse=True):
        table.add_row(escape(ext or "(none)"), str(len(group.files)), f"{group.total_size:,}")
        if show_files:
            for path, entry in group.files.items():
                table.add_row(f"[dim]  {escape(path)}[/dim]", "", f"[dim]{entry.size:,}[/dim]")

    console.print(table)
    console.print(f"  Total: {sum(g.total_size for g in snapshot.values()):,} bytes")
