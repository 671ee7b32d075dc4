"""compare command — diff two snapshot files offline."""

from __future__ import annotations

import json
from pathlib import Path

import click
from rich.console import Console

from buildsize_core.diff import compute_diff
from buildsize_core.render import render_comment
from buildsize_core.snapshot import snapshot_from_dict

console = Console()


def _read_snapshot(path: str):
    try:
        return snapshot_from_dict(json.loads(Path(path).read_text()))
    except (json.JSONDecodeError, AttributeError) as e:
        raise click.ClickException(f"{path} is not a snapshot file: {e}")


@click.command("compare")
@click.argument("new_path", metavar="NEW", type=click.Path(exists=True, dir_okay=False))
@click.argument("base_path", metavar="BASE", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--output",
    "-o",
    "output_path",
    type=click.Path(dir_okay=False, writable=True),
    default=None,
    help="Write the comment body to a file instead of stdout.",
)
def compare_cmd(new_path: str, base_path: str, output_path: str | None):
    """Render the PR comment for snapshot NEW against snapshot BASE.

    Both files are in the format written by `buildsize measure --json`
    (and cached as master.json).
    """
    body = render_comment(compute_diff(_read_snapshot(new_path), _read_snapshot(base_path)))

    if output_path:
        Path(output_path).write_text(body)
        console.print(f"[green]Wrote comment body to {output_path}[/green]")
        return
    click.echo(body, nl=False)
